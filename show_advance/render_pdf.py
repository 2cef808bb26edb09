"""Render an advance sheet to a paginated Letter PDF."""
import io
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

try:
    from reportlab.pdfbase import pdfmetrics
    from reportlab.pdfgen import canvas
    REPORTLAB_AVAILABLE = True
except ImportError:
    REPORTLAB_AVAILABLE = False

from .document import FOOTER_TEXT, build_document
from .filename import derive_file_name
from .formatting import format_value
from .layout import (
    COLUMN_WIDTH,
    LABEL_WIDTH,
    LINE_HEIGHT,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    PAGE_WIDTH,
    PAIR_GAP,
    ROW_GAP,
    ColumnCursor,
    PageCursor,
    wrap_text,
)
from .types import (
    Document,
    FormRecord,
    PlaceholderPolicy,
    RenderOptions,
    Row,
    Section,
    SectionPair,
)

FONT_REGULAR = "Helvetica"
FONT_BOLD = "Helvetica-Bold"

BLACK = (0, 0, 0)
RED = (0.65, 0.05, 0.05)
LABEL_GRAY = (0.38, 0.38, 0.38)
FOOTER_GRAY = (0.55, 0.55, 0.55)

BODY_SIZE = 10
TITLE_SIZE = 20
SUBTITLE_SIZE = 11
SECTION_SIZE = 12
FOOTER_SIZE = 8

PDF_PLACEHOLDER = "N/A"
DEFAULT_TITLE = "Show Advance"


class PdfCapabilityError(RuntimeError):
    """Raised when the PDF library is not importable."""


def require_pdf_capability() -> None:
    if not REPORTLAB_AVAILABLE:
        raise PdfCapabilityError(
            "reportlab is not installed; PDF output is unavailable. Install with: pip install reportlab"
        )


@dataclass(frozen=True)
class TextOp:
    text: str
    x: float
    y: float
    size: float
    font: str
    color: Tuple[float, float, float]


class ReportLabSurface:
    """
    Drawing surface backed by a reportlab canvas.

    Text operations are buffered per page and replayed at save time, when
    the total page count is known and every page can get its footer.
    """

    def __init__(self, page_size: Tuple[float, float] = (PAGE_WIDTH, PAGE_HEIGHT),
                 footer: str = FOOTER_TEXT, title: Optional[str] = None):
        require_pdf_capability()
        self.page_size = page_size
        self.footer = footer
        self.title = title
        self.pages: List[List[TextOp]] = [[]]

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def new_page(self) -> None:
        self.pages.append([])

    def draw_text(self, text: str, x: float, y: float, size: float = BODY_SIZE,
                  font: str = FONT_REGULAR, color=BLACK) -> None:
        self.pages[-1].append(TextOp(text, x, y, size, font, tuple(color)))

    def string_width(self, text: str, font: str, size: float) -> float:
        return pdfmetrics.stringWidth(text, font, size)

    def _draw_footer(self, pdf, page_number: int, total: int) -> None:
        width, _ = self.page_size
        y = PAGE_MARGIN / 2
        pdf.setFont(FONT_REGULAR, FOOTER_SIZE)
        pdf.setFillColorRGB(*FOOTER_GRAY)
        if self.footer:
            pdf.drawCentredString(width / 2, y, self.footer)
        pdf.drawRightString(width - PAGE_MARGIN, y, f"{page_number}/{total}")

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=self.page_size)
        if self.title:
            pdf.setTitle(self.title)

        total = len(self.pages)
        for number, ops in enumerate(self.pages, start=1):
            for op in ops:
                pdf.setFont(op.font, op.size)
                pdf.setFillColorRGB(*op.color)
                pdf.drawString(op.x, op.y, op.text)
            self._draw_footer(pdf, number, total)
            pdf.showPage()

        pdf.save()
        return buffer.getvalue()


def _checkbox_text(row: Row) -> str:
    yes, no = row.checkbox
    return f"[{'X' if yes else ' '}] Yes   [{'X' if no else ' '}] No"


class AdvancePdfRenderer:
    """Lays a Document out on a surface, one greedy pass, no backtracking."""

    def __init__(self, surface):
        self.surface = surface
        self.page = PageCursor(surface)

    def _wrap(self, text: str, max_width: float) -> List[str]:
        return wrap_text(text, FONT_BOLD, BODY_SIZE, max_width, measure=self.surface.string_width)

    def _row_text(self, row: Row) -> str:
        if row.checkbox is not None:
            return _checkbox_text(row)
        return row.unit.text if row.unit is not None else PDF_PLACEHOLDER

    # ----------------------------
    # Blocks
    # ----------------------------

    def draw_title(self, header: Section) -> None:
        # blank lines are skipped, anything else uses the formatted text ("n/a" -> "N/A")
        by_class = {row.css_class: row.unit.text for row in header.rows if row.raw}
        self.page.ensure_space(44)
        self.surface.draw_text(by_class.get("pdf-title") or DEFAULT_TITLE, PAGE_MARGIN, self.page.y,
                               size=TITLE_SIZE, font=FONT_BOLD)
        self.page.advance(22)

        for css_class in ("pdf-date", "pdf-venue", "pdf-address"):
            line = by_class.get(css_class)
            if not line:
                continue
            self.page.ensure_space(14)
            self.surface.draw_text(line, PAGE_MARGIN, self.page.y, size=SUBTITLE_SIZE)
            self.page.advance(14)

        self.page.advance(6)

    def draw_heading(self, title: str) -> None:
        self.page.ensure_space(24)
        self.page.advance(6)
        self.surface.draw_text(title, PAGE_MARGIN, self.page.y, size=SECTION_SIZE,
                               font=FONT_BOLD, color=RED)
        self.page.advance(14)

    def draw_full_row(self, label: str, text: str) -> None:
        value_x = PAGE_MARGIN + LABEL_WIDTH
        label_lines = wrap_text(label, FONT_REGULAR, BODY_SIZE, LABEL_WIDTH - 6,
                                measure=self.surface.string_width)
        lines = self._wrap(text, PAGE_WIDTH - PAGE_MARGIN * 2 - LABEL_WIDTH - 10)
        height = max(len(lines), len(label_lines)) * LINE_HEIGHT

        if height + ROW_GAP > self.page.usable_height:
            # taller than a page: let it break between lines
            for idx in range(max(len(lines), len(label_lines))):
                self.page.ensure_space(LINE_HEIGHT)
                if idx < len(label_lines):
                    self.surface.draw_text(label_lines[idx], PAGE_MARGIN, self.page.y, color=LABEL_GRAY)
                if idx < len(lines):
                    self.surface.draw_text(lines[idx], value_x, self.page.y, font=FONT_BOLD)
                self.page.advance(LINE_HEIGHT)
            self.page.advance(ROW_GAP)
            return

        self.page.ensure_space(height + ROW_GAP)
        for idx, line in enumerate(label_lines):
            self.surface.draw_text(line, PAGE_MARGIN, self.page.y - LINE_HEIGHT * idx, color=LABEL_GRAY)
        for idx, line in enumerate(lines):
            self.surface.draw_text(line, value_x, self.page.y - LINE_HEIGHT * idx, font=FONT_BOLD)
        self.page.advance(height + ROW_GAP)

    def draw_column_row(self, columns: ColumnCursor, label: str, text: str) -> None:
        lines = self._wrap(text, COLUMN_WIDTH - 10)
        # label line plus value lines beneath it
        height = (len(lines) + 1) * LINE_HEIGHT

        if height > self.page.usable_height:
            # taller than a page: close the pair, then break between lines in the left column
            columns.finish()
            x = columns.column_x(0)
            self.page.ensure_space(LINE_HEIGHT)
            self.surface.draw_text(label, x, self.page.y, color=LABEL_GRAY)
            self.page.advance(LINE_HEIGHT)
            for line in lines:
                self.page.ensure_space(LINE_HEIGHT)
                self.surface.draw_text(line, x, self.page.y, font=FONT_BOLD)
                self.page.advance(LINE_HEIGHT)
            self.page.advance(ROW_GAP + PAIR_GAP)
            return

        x, y = columns.place(height)
        self.surface.draw_text(label, x, y, color=LABEL_GRAY)
        for idx, line in enumerate(lines):
            self.surface.draw_text(line, x, y - LINE_HEIGHT * (idx + 1), font=FONT_BOLD)

    def draw_section(self, section: Section) -> None:
        if section.omit_heading:
            self.draw_title(section)
            return
        if section.is_empty:
            return

        self.draw_heading(section.title)
        if section.multi_column:
            columns = ColumnCursor(self.page)
            for row in section.rows:
                self.draw_column_row(columns, row.label, self._row_text(row))
            columns.finish()
        else:
            for row in section.rows:
                self.draw_full_row(row.label, self._row_text(row))

    def draw_contacts(self, document: Document) -> None:
        self.draw_heading("Contacts")
        options = document.options
        for idx, contact in enumerate(document.contacts, start=1):
            parts = [
                format_value(value, multiline=False, placeholder=options.placeholder_text).text
                for value in (contact.name, contact.email, contact.phone, contact.role)
            ]
            self.draw_full_row(f"Contact {idx}", " · ".join(parts))

    def render(self, document: Document) -> None:
        for block in document.blocks:
            if isinstance(block, SectionPair):
                self.draw_section(block.left)
                self.draw_section(block.right)
            else:
                self.draw_section(block)
        self.draw_contacts(document)


def pdf_render_options(options: Optional[RenderOptions] = None) -> RenderOptions:
    """The PDF surface always uses the explicit "N/A" placeholder."""
    options = options or RenderOptions()
    return replace(options, placeholder_policy=PlaceholderPolicy.TEXT, placeholder_text=PDF_PLACEHOLDER)


def render_advance_pdf(record, contacts: Optional[Iterable] = None,
                       options: Optional[RenderOptions] = None, surface=None) -> bytes:
    """Build the document and return the serialized PDF bytes."""
    if not isinstance(record, FormRecord):
        record = FormRecord.from_mapping(record)
    options = pdf_render_options(options)
    document = build_document(record, contacts, options)

    surface = surface or ReportLabSurface(title=document.title or DEFAULT_TITLE)
    AdvancePdfRenderer(surface).render(document)
    content = surface.to_bytes()
    print(f"[PDF] Rendered {surface.page_count} page(s), {len(content)} bytes "
          f"(mode={options.mode.value})", flush=True)
    return content


@dataclass(frozen=True)
class PdfDownload:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


def build_pdf_download(record, contacts: Optional[Iterable] = None,
                       options: Optional[RenderOptions] = None) -> PdfDownload:
    if not isinstance(record, FormRecord):
        record = FormRecord.from_mapping(record)
    base = derive_file_name(record.get("eventName"), record.get("eventDate"))
    return PdfDownload(filename=f"{base}.pdf", content=render_advance_pdf(record, contacts, options))


def write_advance_pdf(output_path: Path, record, contacts: Optional[Iterable] = None,
                      options: Optional[RenderOptions] = None) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_bytes(render_advance_pdf(record, contacts, options))
    print(f"[PDF] Wrote {output_path}", flush=True)
    return output_path


__all__ = [
    "AdvancePdfRenderer",
    "PdfCapabilityError",
    "PdfDownload",
    "ReportLabSurface",
    "build_pdf_download",
    "render_advance_pdf",
    "require_pdf_capability",
    "write_advance_pdf",
]
