"""
Text measurement — wraps strings to a width and reports their height.

The layout engine asks for a block's height before deciding where the
block goes, and draws the block afterwards. Both calls must agree, so
measurement is a pure function of (text, width, font) and results are
memoized per measurer.

Widths come from ReportLab's font metrics (pdfmetrics.stringWidth),
which are exact for the standard 14 PDF fonts used by every style.
"""

from dataclasses import dataclass
from typing import Optional

from reportlab.pdfbase.pdfmetrics import stringWidth


@dataclass(frozen=True)
class FontSpec:
    """A font face + size. leading defaults to 1.2x the size."""
    name: str
    size: float
    leading: Optional[float] = None

    @property
    def line_height(self) -> float:
        return self.leading if self.leading is not None else self.size * 1.2

    def width_of(self, text: str) -> float:
        return stringWidth(text, self.name, self.size)


@dataclass(frozen=True)
class Measurement:
    lines: tuple[str, ...]
    height: float

    @property
    def line_count(self) -> int:
        return len(self.lines)


class TextMeasurer:
    """Word-wrapping text measurer.

    Usage:
        measurer = TextMeasurer()
        m = measurer.measure("Some long text...", 300, FontSpec("Helvetica", 10))
        m.lines   # ('Some long', 'text...')
        m.height  # 24.0
    """

    def __init__(self):
        self._cache: dict[tuple[str, float, FontSpec], Measurement] = {}

    def measure(self, text: str, max_width: float, font: FontSpec) -> Measurement:
        """Wrap text to max_width and return the lines and total height.

        Wrapping happens on word boundaries. Explicit newlines start a new
        line, and blank lines are kept. A single word wider than max_width
        is broken across lines character by character.
        """
        key = (text or "", float(max_width), font)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        lines = tuple(wrap_text(text or "", max_width, font))
        result = Measurement(lines=lines, height=len(lines) * font.line_height)
        self._cache[key] = result
        return result

    def height(self, text: str, max_width: float, font: FontSpec) -> float:
        return self.measure(text, max_width, font).height


def wrap_text(text: str, max_width: float, font: FontSpec) -> list[str]:
    """Greedy word wrap using real glyph widths."""
    if not text:
        return []

    lines: list[str] = []
    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = ""
        for word in words:
            candidate = word if not current else f"{current} {word}"
            if font.width_of(candidate) <= max_width:
                current = candidate
                continue

            if current:
                lines.append(current)
                current = ""

            if font.width_of(word) <= max_width:
                current = word
            else:
                pieces = _break_word(word, max_width, font)
                lines.extend(pieces[:-1])
                current = pieces[-1]

        if current:
            lines.append(current)

    return lines


def _break_word(word: str, max_width: float, font: FontSpec) -> list[str]:
    """Split an over-wide word into chunks that each fit max_width.

    Every chunk holds at least one character, so a width narrower than
    a single glyph still terminates.
    """
    pieces = []
    current = ""
    for char in word:
        if current and font.width_of(current + char) > max_width:
            pieces.append(current)
            current = char
        else:
            current += char
    if current:
        pieces.append(current)
    return pieces


def truncate(text: str, limit: int, marker: str = "...") -> str:
    """Hard-truncate text to at most limit characters, marker included.

    truncate("x" * 600, 150) -> 147 x's followed by '...'
    """
    if len(text) <= limit:
        return text
    if limit <= len(marker):
        return marker[:limit]
    return text[: limit - len(marker)] + marker
