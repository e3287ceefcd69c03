"""
Content blocks — the typed, pre-layout units of a brag sheet document.

A style renderer decides WHAT to show by emitting blocks; the layout
engine decides WHERE each block lands. A block therefore knows two
things about itself:

- measure(): its exact height at a given width (pure, no drawing)
- draw(): how to paint itself on a ReportLab canvas given its top edge

draw() must use the same wrapped lines measure() counted, which is why
both go through the shared TextMeasurer.

Blocks are never split across pages. Headers ask to stay with the block
that follows them (keep_with_next); dividers disappear when they would
open a page (skip_at_page_top).
"""

from dataclasses import dataclass, field
from io import BytesIO
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.colors import Color
from reportlab.lib.utils import ImageReader

from bragsheet.services.text_metrics import FontSpec, TextMeasurer


# ZapfDingbats "4" is a heavy check mark, available in every PDF viewer
CHECK_MARK_GLYPH = "4"
CHECK_MARK_FONT_NAME = "ZapfDingbats"


def _baseline(top: float, line_index: int, font: FontSpec) -> float:
    """Baseline y of the n-th line of a text box whose top edge is `top`."""
    line_height = font.line_height
    return (
        top
        - line_index * line_height
        - (line_height - font.size) / 2
        - font.size * 0.8
    )


def _draw_lines(canvas, lines, x: float, top: float, font: FontSpec, color: Color):
    canvas.setFont(font.name, font.size)
    canvas.setFillColor(color)
    for i, line in enumerate(lines):
        canvas.drawString(x, _baseline(top, i, font), line)


class ContentBlock:
    """Base class. Subclasses are dataclasses that override measure/draw."""

    kind = "block"
    keep_with_next = False
    skip_at_page_top = False
    # None means "use the page geometry's block spacing"
    spacing_after: Optional[float] = None

    def measure(self, measurer: TextMeasurer, width: float) -> float:
        raise NotImplementedError

    def draw(self, canvas, x: float, top: float, width: float, measurer: TextMeasurer) -> None:
        raise NotImplementedError


@dataclass
class SectionHeader(ContentBlock):
    """A section title, optionally on a filled bar or above a rule."""
    text: str
    font: FontSpec
    color: Color = colors.black
    bar_color: Optional[Color] = None
    rule_color: Optional[Color] = None
    padding: float = 5
    keep_with_next: bool = True
    spacing_after: Optional[float] = None

    kind = "section_header"

    def _text_width(self, width: float) -> float:
        return width - 2 * self.padding if self.bar_color else width

    def measure(self, measurer, width):
        height = measurer.measure(self.text, self._text_width(width), self.font).height
        if self.bar_color:
            height += 2 * self.padding
        if self.rule_color:
            height += 4
        return height

    def draw(self, canvas, x, top, width, measurer):
        m = measurer.measure(self.text, self._text_width(width), self.font)
        if self.bar_color:
            height = m.height + 2 * self.padding
            canvas.setFillColor(self.bar_color)
            canvas.rect(x, top - height, width, height, stroke=0, fill=1)
            _draw_lines(canvas, m.lines, x + self.padding, top - self.padding,
                        self.font, self.color)
        else:
            _draw_lines(canvas, m.lines, x, top, self.font, self.color)

        if self.rule_color:
            rule_y = top - m.height - 2
            canvas.setStrokeColor(self.rule_color)
            canvas.setLineWidth(1.5)
            canvas.line(x, rule_y, x + width, rule_y)


@dataclass
class FieldRow(ContentBlock):
    """'Label  value' with the value wrapped in its own column."""
    label: str
    value: str
    font: FontSpec
    label_font: Optional[FontSpec] = None
    color: Color = colors.black
    label_color: Optional[Color] = None
    label_width: Optional[float] = None
    indent: float = 0
    spacing_after: Optional[float] = None

    kind = "field_row"

    def _label_font(self) -> FontSpec:
        return self.label_font or self.font

    def _label_column(self) -> float:
        """Fixed label_width keeps values aligned even on label-less rows."""
        if self.label_width is not None:
            return self.label_width
        if not self.label:
            return 0
        return self._label_font().width_of(self.label) + 6

    def measure(self, measurer, width):
        value_width = width - self.indent - self._label_column()
        value_height = measurer.measure(self.value, value_width, self.font).height
        label_height = self._label_font().line_height if self.label else 0
        return max(label_height, value_height)

    def draw(self, canvas, x, top, width, measurer):
        x += self.indent
        label_column = self._label_column()
        if self.label:
            _draw_lines(canvas, [self.label], x, top, self._label_font(),
                        self.label_color or self.color)
        m = measurer.measure(self.value, width - self.indent - label_column, self.font)
        _draw_lines(canvas, m.lines, x + label_column, top, self.font, self.color)


@dataclass
class TextParagraph(ContentBlock):
    """Wrapped body text, optionally inside a shaded box."""
    text: str
    font: FontSpec
    color: Color = colors.black
    indent: float = 0
    padding: float = 0
    background: Optional[Color] = None
    border_color: Optional[Color] = None
    spacing_after: Optional[float] = None

    kind = "text_paragraph"

    def _text_width(self, width: float) -> float:
        return width - self.indent - 2 * self.padding

    def measure(self, measurer, width):
        m = measurer.measure(self.text, self._text_width(width), self.font)
        return m.height + 2 * self.padding

    def draw(self, canvas, x, top, width, measurer):
        m = measurer.measure(self.text, self._text_width(width), self.font)
        height = m.height + 2 * self.padding
        if self.background or self.border_color:
            canvas.setFillColor(self.background or colors.white)
            canvas.setStrokeColor(self.border_color or self.background)
            canvas.setLineWidth(0.5)
            canvas.rect(x + self.indent, top - height, width - self.indent, height,
                        stroke=1 if self.border_color else 0, fill=1)
        _draw_lines(canvas, m.lines, x + self.indent + self.padding,
                    top - self.padding, self.font, self.color)


@dataclass
class ImageRow(ContentBlock):
    """Images laid out in fixed-height cells, aspect ratio preserved.

    The row height depends only on the image count, never on the
    image pixels, so it can be measured before anything is decoded.
    """
    images: list[bytes] = field(default_factory=list)
    cell_height: float = 96
    columns: int = 3
    gap: float = 8
    spacing_after: Optional[float] = None

    kind = "image_row"

    def _rows(self) -> int:
        return -(-len(self.images) // self.columns) if self.images else 0

    def measure(self, measurer, width):
        rows = self._rows()
        if not rows:
            return 0
        return rows * self.cell_height + (rows - 1) * self.gap

    def draw(self, canvas, x, top, width, measurer):
        cell_width = (width - (self.columns - 1) * self.gap) / self.columns
        for i, data in enumerate(self.images):
            row, col = divmod(i, self.columns)
            reader = ImageReader(BytesIO(data))
            image_width, image_height = reader.getSize()
            scale = min(cell_width / image_width, self.cell_height / image_height)
            draw_width, draw_height = image_width * scale, image_height * scale

            cell_x = x + col * (cell_width + self.gap)
            cell_top = top - row * (self.cell_height + self.gap)
            canvas.drawImage(
                reader,
                cell_x,
                cell_top - draw_height,
                width=draw_width,
                height=draw_height,
                mask="auto",
            )


@dataclass
class CardLine:
    """One wrapped line group inside an ActivityCard."""
    text: str
    font: FontSpec
    color: Color = colors.black
    indent: float = 0


@dataclass
class ActivityCard(ContentBlock):
    """An achievement entry: title row, detail lines, optional images.

    The title row carries the verification mark and right-aligned meta
    text (grade / dates). Cards are atomic: the engine moves the whole
    card to the next page rather than splitting it.
    """
    title: str
    title_font: FontSpec
    title_color: Color = colors.black
    right_text: str = ""
    right_font: Optional[FontSpec] = None
    right_color: Optional[Color] = None
    lines: list[CardLine] = field(default_factory=list)
    image_row: Optional[ImageRow] = None
    check_mark: bool = False
    check_color: Color = colors.black
    padding: float = 0
    background: Optional[Color] = None
    border_color: Optional[Color] = None
    accent_color: Optional[Color] = None
    line_gap: float = 2
    keep_with_next: bool = False
    spacing_after: Optional[float] = None

    kind = "activity_card"

    def _inner(self, width: float) -> tuple[float, float]:
        """(x offset, width) of the card's content area."""
        inset = self.padding + (6 if self.accent_color else 0)
        return inset, width - inset - self.padding

    def _right_font(self) -> FontSpec:
        return self.right_font or self.title_font

    def _title_width(self, inner_width: float) -> float:
        reserved = 0
        if self.right_text:
            reserved += self._right_font().width_of(self.right_text) + 8
        if self.check_mark:
            reserved += self.title_font.size + 4
        return max(inner_width - reserved, inner_width * 0.4)

    def _image_height(self, measurer, inner_width: float) -> float:
        if not self.image_row or not self.image_row.images:
            return 0
        return self.line_gap + 4 + self.image_row.measure(measurer, inner_width)

    def measure(self, measurer, width):
        _, inner_width = self._inner(width)
        height = 2 * self.padding
        height += measurer.measure(
            self.title, self._title_width(inner_width), self.title_font,
        ).height
        for line in self.lines:
            height += self.line_gap + measurer.measure(
                line.text, inner_width - line.indent, line.font,
            ).height
        height += self._image_height(measurer, inner_width)
        return height

    def draw(self, canvas, x, top, width, measurer):
        height = self.measure(measurer, width)
        inset, inner_width = self._inner(width)

        if self.background or self.border_color:
            canvas.setFillColor(self.background or colors.white)
            canvas.setStrokeColor(self.border_color or self.background)
            canvas.setLineWidth(0.5)
            canvas.rect(x, top - height, width, height,
                        stroke=1 if self.border_color else 0, fill=1)
        if self.accent_color:
            canvas.setFillColor(self.accent_color)
            canvas.rect(x, top - height, 3, height, stroke=0, fill=1)

        inner_x = x + inset
        cursor = top - self.padding

        # --- Title row ---
        title = measurer.measure(self.title, self._title_width(inner_width), self.title_font)
        _draw_lines(canvas, title.lines, inner_x, cursor, self.title_font, self.title_color)
        first_baseline = _baseline(cursor, 0, self.title_font)

        if self.check_mark and title.lines:
            check_x = inner_x + self.title_font.width_of(title.lines[0]) + 4
            canvas.setFont(CHECK_MARK_FONT_NAME, self.title_font.size * 0.85)
            canvas.setFillColor(self.check_color)
            canvas.drawString(check_x, first_baseline, CHECK_MARK_GLYPH)

        if self.right_text:
            right_font = self._right_font()
            canvas.setFont(right_font.name, right_font.size)
            canvas.setFillColor(self.right_color or self.title_color)
            canvas.drawRightString(inner_x + inner_width, first_baseline, self.right_text)

        cursor -= title.height

        # --- Detail lines ---
        for line in self.lines:
            cursor -= self.line_gap
            m = measurer.measure(line.text, inner_width - line.indent, line.font)
            _draw_lines(canvas, m.lines, inner_x + line.indent, cursor, line.font, line.color)
            cursor -= m.height

        # --- Images ---
        if self.image_row and self.image_row.images:
            cursor -= self.line_gap + 4
            self.image_row.draw(canvas, inner_x, cursor, inner_width, measurer)


@dataclass
class StatGrid(ContentBlock):
    """A strip of equal-width cells, each a big value over a small label."""
    cells: list[tuple[str, str]]
    value_font: FontSpec
    label_font: FontSpec
    value_color: Color = colors.black
    label_color: Color = colors.black
    background: Optional[Color] = None
    border_color: Optional[Color] = None
    gap: float = 8
    padding: float = 8
    spacing_after: Optional[float] = None

    kind = "stat_grid"

    def _cell_width(self, width: float) -> float:
        count = max(len(self.cells), 1)
        return (width - (count - 1) * self.gap) / count

    def _label_height(self, measurer, width: float) -> float:
        label_width = self._cell_width(width) - 2 * self.padding
        return max(
            (measurer.measure(label, label_width, self.label_font).height
             for _, label in self.cells),
            default=0,
        )

    def measure(self, measurer, width):
        if not self.cells:
            return 0
        return (
            2 * self.padding
            + self.value_font.line_height
            + 2
            + self._label_height(measurer, width)
        )

    def draw(self, canvas, x, top, width, measurer):
        height = self.measure(measurer, width)
        cell_width = self._cell_width(width)
        label_width = cell_width - 2 * self.padding

        for i, (value, label) in enumerate(self.cells):
            cell_x = x + i * (cell_width + self.gap)
            if self.background or self.border_color:
                canvas.setFillColor(self.background or colors.white)
                canvas.setStrokeColor(self.border_color or self.background)
                canvas.setLineWidth(0.5)
                canvas.roundRect(cell_x, top - height, cell_width, height, 4,
                                 stroke=1 if self.border_color else 0, fill=1)

            center = cell_x + cell_width / 2
            value_top = top - self.padding
            canvas.setFont(self.value_font.name, self.value_font.size)
            canvas.setFillColor(self.value_color)
            canvas.drawCentredString(center, _baseline(value_top, 0, self.value_font), value)

            label_top = value_top - self.value_font.line_height - 2
            m = measurer.measure(label, label_width, self.label_font)
            canvas.setFont(self.label_font.name, self.label_font.size)
            canvas.setFillColor(self.label_color)
            for j, line in enumerate(m.lines):
                canvas.drawCentredString(center, _baseline(label_top, j, self.label_font), line)


@dataclass
class Divider(ContentBlock):
    """Separator between entries or sections.

    variant: "rule" (a drawn line), "ascii" (a repeated character in a
    monospace font), or "space" (blank).
    """
    variant: str = "rule"
    height: float = 8
    color: Color = colors.HexColor("#c8c8c8")
    thickness: float = 0.75
    char: str = "-"
    font: Optional[FontSpec] = None
    skip_at_page_top: bool = True
    spacing_after: Optional[float] = None

    kind = "divider"

    def measure(self, measurer, width):
        if self.variant == "ascii" and self.font:
            return self.font.line_height
        return self.height

    def draw(self, canvas, x, top, width, measurer):
        if self.variant == "rule":
            y = top - self.height / 2
            canvas.setStrokeColor(self.color)
            canvas.setLineWidth(self.thickness)
            canvas.line(x, y, x + width, y)
        elif self.variant == "ascii" and self.font:
            count = int(width // self.font.width_of(self.char))
            _draw_lines(canvas, [self.char * count], x, top, self.font, self.color)
