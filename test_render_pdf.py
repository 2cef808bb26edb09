"""Tests for PDF layout, pagination and the reportlab surface."""
import io

import pytest

pytest.importorskip("reportlab")

from pypdf import PdfReader

from show_advance import render_pdf
from show_advance.layout import (
    COLUMN_GAP,
    COLUMN_WIDTH,
    PAGE_HEIGHT,
    PAGE_MARGIN,
    ColumnCursor,
    PageCursor,
    wrap_text,
)
from show_advance.render_pdf import (
    FONT_BOLD,
    PdfCapabilityError,
    ReportLabSurface,
    build_pdf_download,
    render_advance_pdf,
    write_advance_pdf,
)
from show_advance.types import RenderMode, RenderOptions

SAMPLE = {
    "eventName": "Spring Gala",
    "eventDate": "2024-05-01",
    "venueName": "The Hall",
    "doorPrice": "$25",
    "settlementLocation": "Box office",
    "bagCheck": "yes",
}


def char_measure(text, font_name, size):
    return len(text)


class CountingSurface:
    def __init__(self):
        self.pages = 1

    def new_page(self):
        self.pages += 1


def _pdf_text(content: bytes):
    reader = PdfReader(io.BytesIO(content))
    return [page.extract_text() for page in reader.pages]


# ----------------------------
# wrap_text
# ----------------------------

def test_wrap_two_words_per_line():
    lines = wrap_text("aa bb cc dd ee", FONT_BOLD, 10, 5, measure=char_measure)
    assert lines == ["aa bb", "cc dd", "ee"]


def test_wrap_fits_two_words_per_line():
    width = char_measure("a bb", FONT_BOLD, 10)
    assert wrap_text("a bb ccc", FONT_BOLD, 10, width, measure=char_measure) == ["a bb", "ccc"]


def test_wrap_respects_newlines_and_empty_input():
    assert wrap_text("one\ntwo", FONT_BOLD, 10, 100, measure=char_measure) == ["one", "two"]
    assert wrap_text("", FONT_BOLD, 10, 100, measure=char_measure) == [""]
    assert wrap_text(None, FONT_BOLD, 10, 100, measure=char_measure) == [""]


def test_wrap_overlong_word_gets_own_line():
    lines = wrap_text("a supercalifragilistic b", FONT_BOLD, 10, 5, measure=char_measure)
    assert lines == ["a", "supercalifragilistic", "b"]


def test_wrap_with_real_font_metrics():
    from reportlab.pdfbase.pdfmetrics import stringWidth

    text = "The quick brown fox jumps over the lazy dog " * 6
    lines = wrap_text(text, FONT_BOLD, 10, 150)
    assert len(lines) > 1
    assert all(stringWidth(line, FONT_BOLD, 10) <= 150 for line in lines)
    assert " ".join(lines) == text.strip()


# ----------------------------
# cursors
# ----------------------------

def test_page_cursor_breaks_at_margin():
    surface = CountingSurface()
    page = PageCursor(surface)
    assert page.y == PAGE_HEIGHT - PAGE_MARGIN
    page.y = PAGE_MARGIN + 10
    assert page.ensure_space(10) is False
    assert page.ensure_space(11) is True
    assert surface.pages == 2
    assert page.y == PAGE_HEIGHT - PAGE_MARGIN


def test_column_cursor_pairs_rows():
    page = PageCursor(CountingSurface())
    columns = ColumnCursor(page)
    top = page.y

    assert columns.place(24) == (PAGE_MARGIN, top)
    assert page.y == top
    assert columns.place(36) == (PAGE_MARGIN + COLUMN_WIDTH + COLUMN_GAP, top)
    # pair height is the taller row plus row and pair gaps
    assert page.y == top - 36 - 8 - 6

    columns.place(12)
    columns.finish()
    assert page.y == top - 36 - 8 - 6 - 12 - 8 - 6
    assert columns.index == 0


def test_column_cursor_right_overflow_starts_new_pair():
    surface = CountingSurface()
    page = PageCursor(surface)
    columns = ColumnCursor(page)
    page.y = 60

    assert columns.place(12) == (PAGE_MARGIN, 60)
    x, y = columns.place(30)
    assert x == PAGE_MARGIN
    assert y == PAGE_HEIGHT - PAGE_MARGIN
    assert surface.pages == 2


def test_fresh_column_cursor_starts_left():
    page = PageCursor(CountingSurface())
    first = ColumnCursor(page)
    first.place(12)
    first.finish()
    second = ColumnCursor(page)
    assert second.place(12)[0] == PAGE_MARGIN


# ----------------------------
# rendering
# ----------------------------

def test_render_produces_pdf_bytes():
    content = render_advance_pdf(SAMPLE)
    assert content.startswith(b"%PDF")


def test_production_pdf_hides_internal_content():
    text = "\n".join(_pdf_text(render_advance_pdf(SAMPLE, None, RenderOptions(mode=RenderMode.PRODUCTION))))
    assert "Spring Gala" in text
    assert "Settlement" not in text
    assert "Door Price" not in text
    assert "N/A" in text
    assert "TBD" not in text


def test_internal_pdf_includes_settlement():
    text = "\n".join(_pdf_text(render_advance_pdf(SAMPLE, None, RenderOptions(mode=RenderMode.INTERNAL))))
    assert "Settlement (Internal)" in text
    assert "Door Price" in text
    assert "$25" in text


def test_pagination_keeps_text_inside_margins():
    long_notes = "\n".join(f"Note line {i} with some extra words to fill it up" for i in range(150))
    record = dict(SAMPLE, nextTimeNotes=long_notes, transportationNotes=long_notes[:2000])
    surface = ReportLabSurface()
    content = render_advance_pdf(record, None, None, surface=surface)

    assert surface.page_count > 1
    for ops in surface.pages:
        assert ops, "no page should be left empty"
        for op in ops:
            assert PAGE_MARGIN <= op.y <= PAGE_HEIGHT - PAGE_MARGIN

    pages = _pdf_text(content)
    assert len(pages) == surface.page_count
    total = surface.page_count
    for number, text in enumerate(pages, start=1):
        assert "Powered by Didactidigital" in text
        assert f"{number}/{total}" in text


def test_long_column_note_breaks_across_pages():
    notes = " ".join(f"step{i} evacuate via the north stairwell" for i in range(400))
    record = dict(SAMPLE, emergencyProcedures=notes, bagPolicyDetails="Clear bags only")
    surface = ReportLabSurface()
    content = render_advance_pdf(record, None, None, surface=surface)

    assert surface.page_count > 2
    ys = [op.y for ops in surface.pages for op in ops]
    assert min(ys) >= PAGE_MARGIN
    assert max(ys) <= PAGE_HEIGHT - PAGE_MARGIN

    text = "\n".join(_pdf_text(content))
    assert "step0" in text
    assert "step399" in text
    assert "Clear bags only" in text


def test_not_applicable_event_name_title():
    surface = ReportLabSurface()
    render_advance_pdf({"eventName": "n/a", "venueName": "The Hall"}, None, None, surface=surface)
    title = surface.pages[0][0]
    assert title.text == "N/A"
    assert title.size == render_pdf.TITLE_SIZE

    surface = ReportLabSurface()
    render_advance_pdf({}, None, None, surface=surface)
    assert surface.pages[0][0].text == render_pdf.DEFAULT_TITLE


def test_contacts_render_one_row_each():
    contacts = [{"name": "Ann", "email": "ann@example.com", "phone": "555", "role": "Agent"}, {}]
    text = "\n".join(_pdf_text(render_advance_pdf(SAMPLE, contacts)))
    assert "Contact 1" in text
    assert "Contact 2" in text
    assert "ann@example.com" in text


def test_checkbox_text_in_pdf():
    text = "\n".join(_pdf_text(render_advance_pdf(SAMPLE)))
    assert "[X] Yes" in text


def test_build_pdf_download():
    download = build_pdf_download({"eventName": "My Show!! 2024", "eventDate": "2024-05-01"})
    assert download.filename == "Show-Advance_My_Show_2024_2024-05-01.pdf"
    assert download.media_type == "application/pdf"
    assert download.content.startswith(b"%PDF")


def test_write_advance_pdf(tmp_path):
    path = write_advance_pdf(tmp_path / "out" / "sheet.pdf", SAMPLE)
    assert path.exists()
    assert path.read_bytes().startswith(b"%PDF")


def test_missing_reportlab_raises_capability_error(monkeypatch):
    monkeypatch.setattr(render_pdf, "REPORTLAB_AVAILABLE", False)
    with pytest.raises(PdfCapabilityError):
        render_advance_pdf(SAMPLE)
