"""Page geometry, word wrapping and layout cursors for the PDF surface."""
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

# Letter, in points
PAGE_WIDTH = 612
PAGE_HEIGHT = 792
PAGE_MARGIN = 40

COLUMN_GAP = 18
COLUMN_WIDTH = (PAGE_WIDTH - PAGE_MARGIN * 2 - COLUMN_GAP) / 2
LABEL_WIDTH = 120

LINE_HEIGHT = 12
ROW_GAP = 8
PAIR_GAP = 6

Measure = Callable[[str, str, float], float]


def _default_measure(text: str, font_name: str, size: float) -> float:
    from reportlab.pdfbase.pdfmetrics import stringWidth
    return stringWidth(text, font_name, size)


def wrap_text(text, font_name: str, size: float, max_width: float,
              measure: Optional[Measure] = None) -> List[str]:
    """
    Greedy word wrap against measured glyph widths.

    Words are never split; a word wider than max_width gets a line of its
    own. Explicit newlines start a new line. Empty input gives [""] so a
    row always takes at least one line.
    """
    measure = measure or _default_measure
    lines: List[str] = []

    for paragraph in str(text or "").splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if measure(candidate, font_name, size) <= max_width:
                current = candidate
            else:
                if current:
                    lines.append(current)
                current = word
        if current:
            lines.append(current)

    return lines or [""]


class PageCursor:
    """Current page plus a top-down vertical cursor."""

    def __init__(self, surface, page_height: float = PAGE_HEIGHT, margin: float = PAGE_MARGIN):
        self.surface = surface
        self.page_height = page_height
        self.margin = margin
        self.y = self.top

    @property
    def top(self) -> float:
        return self.page_height - self.margin

    @property
    def usable_height(self) -> float:
        return self.page_height - self.margin * 2

    def fits(self, height: float) -> bool:
        return self.y - height >= self.margin

    def new_page(self) -> None:
        self.surface.new_page()
        self.y = self.top

    def ensure_space(self, height: float) -> bool:
        """Start a new page when the block would cross the bottom margin."""
        if not self.fits(height):
            self.new_page()
            return True
        return False

    def advance(self, dy: float) -> None:
        self.y -= dy


@dataclass
class ColumnCursor:
    """
    Two-column placement state for one section.

    Rows alternate left/right. A pair is as tall as its taller row; the page
    cursor only moves once the pair is closed, either by the right row or by
    finish() at the end of the section.
    """
    page: PageCursor
    left_x: float = PAGE_MARGIN
    column_width: float = COLUMN_WIDTH
    gap: float = COLUMN_GAP
    index: int = 0
    pair_top: float = 0.0
    pair_height: float = 0.0

    def column_x(self, index: int) -> float:
        return self.left_x + (self.column_width + self.gap) * index

    def place(self, height: float) -> Tuple[float, float]:
        """Return the (x, y) at which a row of this height should be drawn."""
        if self.index == 0:
            self.page.ensure_space(height)
            self.pair_top = self.page.y
            self.pair_height = height
            self.index = 1
            return self.column_x(0), self.pair_top

        if self.pair_top - height < self.page.margin:
            # right column would overflow; close the pair and start over on the left
            self.finish()
            return self.place(height)

        self.pair_height = max(self.pair_height, height)
        x, y = self.column_x(1), self.pair_top
        self._close_pair()
        return x, y

    def _close_pair(self) -> None:
        self.page.y = self.pair_top - self.pair_height - ROW_GAP - PAIR_GAP
        self.index = 0
        self.pair_height = 0.0

    def finish(self) -> None:
        if self.index == 1:
            self._close_pair()
