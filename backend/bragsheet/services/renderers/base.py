"""
Shared base for the style renderers.

A renderer turns a ContentModel into an ordered stream of content blocks
and hands each one to the layout engine. Subclasses choose which blocks
appear, in what order, with what truncation; the page-break and
orphan-header rules live in the engine and are the same for every style.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from bragsheet.config import Settings, settings as default_settings
from bragsheet.schemas.portfolio import AchievementEntry
from bragsheet.services.content_blocks import (
    CardLine,
    Divider,
    FieldRow,
    SectionHeader,
    TextParagraph,
)
from bragsheet.services.content_model import (
    ContentModel,
    format_date_range,
    format_hours,
)
from bragsheet.services.image_resolver import ImageResolver
from bragsheet.services.layout_engine import LayoutEngine
from bragsheet.services.styles import StyleConfig
from bragsheet.services.text_metrics import TextMeasurer


@dataclass
class RenderContext:
    """Per-run collaborators shared by the renderer and the engine."""
    engine: LayoutEngine
    measurer: TextMeasurer
    resolver: Optional[ImageResolver] = None
    settings: Settings = field(default_factory=lambda: default_settings)
    generated_on: Optional[date] = None


class StyleRenderer:
    """Base class. Subclasses implement render()."""

    config: StyleConfig

    def __init__(self, context: RenderContext, config: Optional[StyleConfig] = None):
        self.ctx = context
        if config is not None:
            self.config = config
        self.fonts = self.config.fonts
        self.palette = self.config.palette
        self.settings = context.settings

    async def render(self, model: ContentModel) -> None:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # HELPERS
    # ------------------------------------------------------------------

    def place(self, block) -> None:
        self.ctx.engine.place(block)

    def generated_date(self) -> str:
        generated = self.ctx.generated_on or date.today()
        return f"{generated:%B} {generated.day}, {generated.year}"

    def generated_label(self) -> str:
        return f"Generated: {self.generated_date()}"

    def heading(self, text: str, **overrides) -> SectionHeader:
        options = {"font": self.fonts.heading, "color": self.palette.primary}
        options.update(overrides)
        return SectionHeader(text, **options)

    def paragraph(self, text: str, font=None, color=None, **overrides) -> TextParagraph:
        return TextParagraph(
            text,
            font or self.fonts.body,
            color=color or self.palette.text,
            **overrides,
        )

    def field(self, label: str, value: str, **overrides) -> FieldRow:
        options = {
            "font": self.fonts.body,
            "label_font": self.fonts.bold,
            "color": self.palette.text,
        }
        options.update(overrides)
        return FieldRow(label, value, **options)

    def divider(self, **overrides) -> Divider:
        options = {"color": self.palette.border}
        options.update(overrides)
        return Divider(**options)

    def entry_title(self, entry: AchievementEntry) -> str:
        if entry.is_verified and self.config.verified_mark:
            return f"{entry.title}{self.config.verified_mark}"
        return entry.title

    @staticmethod
    def entry_meta(entry: AchievementEntry) -> str:
        """'Grade 11 | Sep 2022 - Present' (either half may be missing)."""
        parts = [p for p in (entry.grade_level, format_date_range(entry)) if p]
        return " | ".join(parts)

    def entry_detail_lines(self, entry: AchievementEntry) -> list[CardLine]:
        """Role / grades / year / hours lines shared by plain and professional."""
        lines = []
        if entry.position_role:
            lines.append(CardLine(f"Role: {entry.position_role}",
                                  self.fonts.italic, self.palette.text))
        if entry.grades_participated:
            lines.append(CardLine(f"Grades: {', '.join(entry.grades_participated)}",
                                  self.fonts.small, self.palette.muted))
        if entry.year_received:
            lines.append(CardLine(f"Year: {entry.year_received}",
                                  self.fonts.small, self.palette.muted))
        if entry.hours_spent:
            lines.append(CardLine(format_hours(entry.hours_spent),
                                  self.fonts.small, self.palette.muted))
        return lines
