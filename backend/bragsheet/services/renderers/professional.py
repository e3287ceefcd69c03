"""
Professional style — a branded, card-based brag sheet.

Layout:
1. Header card: student name, school, grade, generation date
2. Stat strip: activities, verified, hours, years active
3. Academic profile (only when there is academic data)
4. Entries grouped by category, one card per entry, with a check mark
   on verified entries and up to MAX_IMAGES_PER_ENTRY photos
5. Personal insights as shaded question/answer blocks

Photos are fetched one at a time through the ImageResolver, in the
order they appear in the document. A photo that fails to resolve is
simply left out of its card.
"""

from reportlab.lib import colors

from bragsheet.schemas.portfolio import AchievementEntry
from bragsheet.services.content_blocks import (
    ActivityCard,
    CardLine,
    ImageRow,
    SectionHeader,
    StatGrid,
)
from bragsheet.services.content_model import (
    ContentModel,
    format_course,
    format_gpa,
    format_test_score,
)
from bragsheet.services.renderers.base import StyleRenderer
from bragsheet.services.styles import PROFESSIONAL
from bragsheet.services.text_metrics import FontSpec


class ProfessionalRenderer(StyleRenderer):

    config = PROFESSIONAL

    async def render(self, model: ContentModel) -> None:
        self._render_header_card(model)
        self._render_stat_strip(model)
        self._render_academics(model)
        await self._render_entries(model)
        self._render_insights(model)

    # ------------------------------------------------------------------
    # SECTIONS
    # ------------------------------------------------------------------

    def _section_bar(self, text: str) -> SectionHeader:
        return self.heading(
            text.upper(),
            color=colors.white,
            bar_color=self.palette.primary,
            padding=6,
        )

    def _render_header_card(self, model: ContentModel) -> None:
        profile = model.profile
        subtitle = " | ".join(
            part for part in (
                profile.school_name,
                f"Grade {profile.grade_level}" if profile.grade_level else None,
            ) if part
        )

        lines = []
        if subtitle:
            lines.append(CardLine(subtitle, self.fonts.subheading, colors.white))
        lines.append(CardLine(self.generated_label(), self.fonts.small,
                              colors.HexColor("#cbd5e0")))

        self.place(ActivityCard(
            title=profile.full_name or "Brag Sheet",
            title_font=self.fonts.title,
            title_color=colors.white,
            right_text="BRAG SHEET" if profile.full_name else "",
            right_font=self.fonts.small,
            right_color=colors.HexColor("#cbd5e0"),
            lines=lines,
            padding=16,
            line_gap=4,
            background=self.palette.primary,
        ))

    def _render_stat_strip(self, model: ContentModel) -> None:
        stats = model.stats
        self.place(StatGrid(
            cells=[
                (str(stats.total_entries), "Activities"),
                (str(stats.verified_count), "Verified"),
                (stats.hours_display, "Hours"),
                (str(stats.years_active), "Years Active"),
            ],
            value_font=FontSpec("Helvetica-Bold", 18, 22),
            label_font=self.fonts.small,
            value_color=self.palette.secondary,
            label_color=self.palette.muted,
            background=self.palette.light_bg,
            border_color=self.palette.border,
            spacing_after=14,
        ))

    def _render_academics(self, model: ContentModel) -> None:
        academics = model.academics
        if academics is None:
            return

        self.place(self._section_bar("Academic Profile"))
        label_width = 96

        gpa = format_gpa(academics)
        if gpa:
            self.place(self.field("GPA", gpa, label_width=label_width))
        if academics.test_scores:
            self.place(self.field(
                "Test Scores",
                "  •  ".join(format_test_score(s) for s in academics.test_scores),
                label_width=label_width,
            ))
        if academics.courses:
            self.place(self.field(
                "Courses",
                "; ".join(format_course(c) for c in academics.courses),
                label_width=label_width,
            ))
        if academics.colleges_applying:
            self.place(self.field(
                "Target Colleges",
                ", ".join(academics.colleges_applying),
                label_width=label_width,
            ))
        self.place(self.divider(variant="space", height=6))

    async def _render_entries(self, model: ContentModel) -> None:
        for group in model.groups:
            self.place(self._section_bar(group.label))
            for entry in group.entries:
                images = await self._resolve_images(entry)
                self.place(self._entry_card(entry, images))

    def _render_insights(self, model: ContentModel) -> None:
        if not model.insights:
            return

        self.place(self._section_bar("Personal Insights"))
        for insight in model.insights:
            self.place(SectionHeader(
                insight.question,
                font=self.fonts.bold,
                color=self.palette.secondary,
                spacing_after=4,
            ))
            self.place(self.paragraph(
                insight.answer,
                padding=8,
                background=self.palette.light_bg,
                border_color=self.palette.border,
                spacing_after=10,
            ))

    # ------------------------------------------------------------------
    # ENTRY CARDS
    # ------------------------------------------------------------------

    async def _resolve_images(self, entry: AchievementEntry) -> list[bytes]:
        """Fetch up to the per-entry limit, sequentially, skipping failures."""
        resolver = self.ctx.resolver
        if resolver is None or not entry.image_urls:
            return []

        images = []
        for url in entry.image_urls[: self.settings.MAX_IMAGES_PER_ENTRY]:
            data = await resolver.resolve(url)
            if data is not None:
                images.append(data)
        return images

    def _entry_card(self, entry: AchievementEntry, images: list[bytes]) -> ActivityCard:
        lines = self.entry_detail_lines(entry)
        if entry.description:
            lines.append(CardLine(entry.description, self.fonts.body, self.palette.text))
        if entry.impact:
            lines.append(CardLine(f"Impact: {entry.impact}", self.fonts.italic,
                                  self.palette.secondary))

        image_row = None
        if images:
            image_row = ImageRow(
                images=images,
                columns=self.settings.MAX_IMAGES_PER_ENTRY,
                cell_height=90,
            )

        return ActivityCard(
            title=self.entry_title(entry),
            title_font=self.fonts.subheading,
            title_color=self.palette.primary,
            right_text=self.entry_meta(entry),
            right_font=self.fonts.small,
            right_color=self.palette.muted,
            lines=lines,
            image_row=image_row,
            check_mark=entry.is_verified,
            check_color=self.palette.accent,
            padding=10,
            background=self.palette.light_bg,
            border_color=self.palette.border,
            accent_color=self.palette.secondary,
            line_gap=3,
            spacing_after=8,
        )
