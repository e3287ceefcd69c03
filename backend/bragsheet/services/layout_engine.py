"""
Layout engine — paginates content blocks onto fixed-size pages.

The engine owns the page cursor (page number + vertical offset from the
top edge). For every block it is handed, it:
1. Measures the block (through the block's own measure())
2. Decides whether it fits in what's left of the page
3. Breaks the page if it doesn't (footer + page number, fresh page)
4. Tells the surface to draw the block at the cursor, then advances

Rules shared by every style:
- Blocks are never split. A block taller than a whole page is placed
  alone at the top of a fresh page and allowed to overflow; it is
  flagged in its Placement record.
- Section headers (keep_with_next) are held back until the following
  block arrives, and only go on the current page if that block fits
  with them. No header ends a page on its own, unless header and block
  together are taller than a page: then the block starts the next page
  instead of running into the footer.
- Dividers (skip_at_page_top) are dropped instead of opening a page.

Drawing is delegated to a PageSurface. PdfSurface draws on a ReportLab
canvas; tests can pass any object with the same four methods.
"""

from dataclasses import dataclass
from io import BytesIO
from typing import Optional, Protocol

from reportlab.lib import colors
from reportlab.lib.colors import Color
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen.canvas import Canvas

from bragsheet.services.text_metrics import FontSpec, TextMeasurer


@dataclass(frozen=True)
class PageGeometry:
    """Page size and margins, in points. bottom_margin holds the footer."""
    width: float = letter[0]
    height: float = letter[1]
    top_margin: float = 54
    bottom_margin: float = 54
    left_margin: float = 54
    right_margin: float = 54
    block_spacing: float = 6

    @property
    def content_width(self) -> float:
        return self.width - self.left_margin - self.right_margin

    @property
    def content_bottom(self) -> float:
        """Lowest offset (from the top edge) a block may reach."""
        return self.height - self.bottom_margin

    @property
    def usable_height(self) -> float:
        return self.height - self.top_margin - self.bottom_margin


@dataclass
class PageCursor:
    page: int
    offset: float


@dataclass(frozen=True)
class Placement:
    """Where one block landed. offset is measured from the page top."""
    page: int
    offset: float
    height: float
    kind: str
    overflowed: bool = False

    @property
    def bottom(self) -> float:
        return self.offset + self.height


class PageSurface(Protocol):
    def begin_page(self, page_number: int) -> None: ...

    def draw(self, block, offset: float) -> None: ...

    def finish_page(self, page_number: int) -> None: ...

    def serialize(self) -> bytes: ...


class LayoutEngine:
    """Places blocks one at a time, breaking pages as needed.

    Usage:
        engine = LayoutEngine(geometry, surface, measurer)
        engine.place(SectionHeader("Leadership", font))
        engine.place(ActivityCard(...))
        page_count = engine.finish()
    """

    def __init__(self, geometry: PageGeometry, surface: PageSurface,
                 measurer: Optional[TextMeasurer] = None):
        self.geometry = geometry
        self.surface = surface
        self.measurer = measurer or TextMeasurer()
        self.cursor = PageCursor(page=1, offset=geometry.top_margin)
        self.placements: list[Placement] = []
        self.footer_numbers: list[int] = []
        self._pending_headers: list = []
        self._finished = False

        self.surface.begin_page(1)

    # ------------------------------------------------------------------
    # PUBLIC API
    # ------------------------------------------------------------------

    def block_height(self, block) -> float:
        return block.measure(self.measurer, self.geometry.content_width)

    def reserve(self, block) -> bool:
        """Whether the block fits in the space left on the current page."""
        return self._fits(self.block_height(block))

    def place(self, block) -> None:
        """Lay out one block, breaking the page first if it doesn't fit."""
        if self._finished:
            raise RuntimeError("Layout already finished")

        if block.keep_with_next:
            self._pending_headers.append(block)
            return

        if self._pending_headers:
            headers, self._pending_headers = self._pending_headers, []
            self._place_with_headers(headers, block)
        else:
            self._place_single(block)

    def finish(self) -> int:
        """Flush held headers, finalize the last page. Returns the page count."""
        if self._finished:
            return self.cursor.page

        # Headers with nothing after them still get drawn
        for header in self._pending_headers:
            self._place_single(header)
        self._pending_headers = []

        self._finalize_page()
        self._finished = True
        return self.cursor.page

    @property
    def page_count(self) -> int:
        return self.cursor.page

    # ------------------------------------------------------------------
    # INTERNALS
    # ------------------------------------------------------------------

    def _fits(self, height: float) -> bool:
        return self.cursor.offset + height <= self.geometry.content_bottom

    def _at_page_top(self) -> bool:
        return self.cursor.offset <= self.geometry.top_margin

    def _place_single(self, block) -> None:
        height = self.block_height(block)
        fits = self._fits(height)

        if block.skip_at_page_top and (self._at_page_top() or not fits):
            return

        if not fits and not self._at_page_top():
            self._break_page()

        self._draw(block, height, overflowed=not self._fits(height))

    def _place_with_headers(self, headers: list, body) -> None:
        """Keep headers on the same page as the block that follows them."""
        header_heights = [self.block_height(h) for h in headers]
        header_total = sum(
            h + self._spacing(header) for h, header in zip(header_heights, headers)
        )
        body_height = self.block_height(body)

        if not self._fits(header_total + body_height) and not self._at_page_top():
            self._break_page()

        for header, height in zip(headers, header_heights):
            self._draw(header, height, overflowed=not self._fits(height))

        if self._fits(body_height):
            self._draw(body, body_height)
            return

        # Headers + body are taller than a page. A body that fits a page
        # on its own gets the next page rather than running into the footer.
        if body.skip_at_page_top:
            return
        if body_height <= self.geometry.usable_height:
            self._break_page()
        self._draw(body, body_height, overflowed=not self._fits(body_height))

    def _spacing(self, block) -> float:
        if block.spacing_after is None:
            return self.geometry.block_spacing
        return block.spacing_after

    def _draw(self, block, height: float, overflowed: bool = False) -> None:
        self.surface.draw(block, self.cursor.offset)
        self.placements.append(Placement(
            page=self.cursor.page,
            offset=self.cursor.offset,
            height=height,
            kind=block.kind,
            overflowed=overflowed,
        ))
        self.cursor.offset += height + self._spacing(block)

    def _finalize_page(self) -> None:
        self.surface.finish_page(self.cursor.page)
        self.footer_numbers.append(self.cursor.page)

    def _break_page(self) -> None:
        self._finalize_page()
        self.cursor.page += 1
        self.cursor.offset = self.geometry.top_margin
        self.surface.begin_page(self.cursor.page)


class PdfSurface:
    """PageSurface backed by a ReportLab canvas.

    Converts the engine's top-down offsets into ReportLab's bottom-up
    coordinates, and draws the footer (label + "Page N") when a page is
    finalized. With running_header set, pages after the first repeat the
    student name and page number at the top.
    """

    def __init__(
        self,
        geometry: PageGeometry,
        measurer: TextMeasurer,
        title: str = "",
        author: str = "",
        footer_text: str = "",
        footer_font: FontSpec = FontSpec("Helvetica", 8),
        footer_color: Color = colors.HexColor("#718096"),
        running_header: Optional[str] = None,
    ):
        self.geometry = geometry
        self.measurer = measurer
        self.footer_text = footer_text
        self.footer_font = footer_font
        self.footer_color = footer_color
        self.running_header = running_header

        self._buffer = BytesIO()
        self._canvas = Canvas(self._buffer, pagesize=(geometry.width, geometry.height))
        self._canvas.setTitle(title)
        self._canvas.setAuthor(author)
        self._saved = False

    def begin_page(self, page_number: int) -> None:
        if self.running_header and page_number > 1:
            self._draw_running_header(page_number)

    def draw(self, block, offset: float) -> None:
        top = self.geometry.height - offset
        block.draw(
            self._canvas,
            self.geometry.left_margin,
            top,
            self.geometry.content_width,
            self.measurer,
        )

    def finish_page(self, page_number: int) -> None:
        self._draw_footer(page_number)
        self._canvas.showPage()

    def serialize(self) -> bytes:
        if not self._saved:
            self._canvas.save()
            self._saved = True
        return self._buffer.getvalue()

    def _draw_footer(self, page_number: int) -> None:
        canvas = self._canvas
        g = self.geometry
        y = g.bottom_margin / 2

        canvas.saveState()
        canvas.setStrokeColor(self.footer_color)
        canvas.setLineWidth(0.5)
        canvas.line(g.left_margin, y + 12, g.width - g.right_margin, y + 12)

        canvas.setFont(self.footer_font.name, self.footer_font.size)
        canvas.setFillColor(self.footer_color)
        if self.footer_text:
            canvas.drawString(g.left_margin, y, self.footer_text)
        canvas.drawRightString(g.width - g.right_margin, y, f"Page {page_number}")
        canvas.restoreState()

    def _draw_running_header(self, page_number: int) -> None:
        canvas = self._canvas
        g = self.geometry
        y = g.height - g.top_margin / 2

        canvas.saveState()
        canvas.setFont(self.footer_font.name, self.footer_font.size)
        canvas.setFillColor(self.footer_color)
        canvas.drawString(g.left_margin, y, self.running_header)
        canvas.drawRightString(g.width - g.right_margin, y, f"Page {page_number}")
        canvas.restoreState()
