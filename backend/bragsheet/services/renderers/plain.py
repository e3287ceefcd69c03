"""
Plain style — a monospaced, text-only brag sheet.

Everything the student entered is printed in full: every category in
the fixed priority order, untruncated descriptions and impact
statements, every answered insight question. The document closes with a
summary block computed from all entries.
"""

import re

from bragsheet.services.content_blocks import ActivityCard, Divider, SectionHeader
from bragsheet.services.content_model import (
    ContentModel,
    format_course,
    format_gpa,
    format_test_score,
)
from bragsheet.services.renderers.base import StyleRenderer
from bragsheet.services.styles import PLAIN


def _paragraphs(text: str) -> list[str]:
    """Split free text on blank lines so each paragraph is its own block."""
    return [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]


class PlainRenderer(StyleRenderer):

    config = PLAIN

    async def render(self, model: ContentModel) -> None:
        self._render_header(model)
        self._render_academics(model)
        self._render_entries(model)
        self._render_insights(model)
        self._render_summary(model)

    # ------------------------------------------------------------------
    # SECTIONS
    # ------------------------------------------------------------------

    def _rule(self, char: str) -> Divider:
        return self.divider(variant="ascii", char=char, font=self.fonts.body)

    def _render_header(self, model: ContentModel) -> None:
        profile = model.profile
        self.place(self.paragraph("BRAG SHEET", font=self.fonts.title))

        if profile.full_name:
            self.place(self.field("Name:", profile.full_name))
        if profile.school_name:
            self.place(self.field("School:", profile.school_name))
        if profile.grade_level:
            self.place(self.field("Grade:", profile.grade_level))
        self.place(self.paragraph(self.generated_label(), font=self.fonts.small,
                                  color=self.palette.muted))
        self.place(self._rule("="))

    def _render_academics(self, model: ContentModel) -> None:
        academics = model.academics
        if academics is None:
            return

        self.place(self.heading("ACADEMICS"))

        gpa = format_gpa(academics)
        if gpa:
            self.place(self.field("GPA:", gpa))

        if academics.test_scores:
            self.place(self.heading("Test Scores:", font=self.fonts.bold))
            for score in academics.test_scores:
                self.place(self.paragraph(f"  * {format_test_score(score)}"))

        if academics.courses:
            self.place(self.heading("Courses (with teacher):", font=self.fonts.bold))
            for course in academics.courses:
                self.place(self.paragraph(f"  * {format_course(course)}"))

        if academics.colleges_applying:
            self.place(self.heading("Colleges Applying To:", font=self.fonts.bold))
            self.place(self.paragraph(", ".join(academics.colleges_applying)))

        self.place(self._rule("="))

    def _render_entries(self, model: ContentModel) -> None:
        for group in model.groups:
            self.place(self.heading(group.label.upper()))

            for i, entry in enumerate(group.entries):
                if i > 0:
                    self.place(self._rule("-"))

                body = [
                    (p, self.fonts.body) for p in _paragraphs(entry.description or "")
                ]
                impact = _paragraphs(entry.impact or "")
                if impact:
                    impact[0] = f"Impact: {impact[0]}"
                    body.extend((p, self.fonts.italic) for p in impact)

                self.place(ActivityCard(
                    title=self.entry_title(entry),
                    title_font=self.fonts.bold,
                    right_text=self.entry_meta(entry),
                    right_font=self.fonts.small,
                    lines=self.entry_detail_lines(entry),
                    # Title row stays with the first paragraph below it
                    keep_with_next=bool(body),
                ))

                for text, font in body:
                    self.place(self.paragraph(text, font=font))

            self.place(self.divider(variant="space", height=6))

    def _render_insights(self, model: ContentModel) -> None:
        if not model.insights:
            return

        self.place(self._rule("="))
        self.place(self.heading("INSIGHT QUESTIONS"))

        for insight in model.insights:
            self.place(SectionHeader(insight.question, font=self.fonts.bold,
                                     color=self.palette.text))
            for paragraph in _paragraphs(insight.answer):
                self.place(self.paragraph(paragraph))
            self.place(self.divider(variant="space", height=4))

    def _render_summary(self, model: ContentModel) -> None:
        stats = model.stats
        self.place(self._rule("="))
        self.place(self.heading("SUMMARY"))
        self.place(self.field("Total Activities:", str(stats.total_entries)))
        self.place(self.field("Verified Entries:", str(stats.verified_count)))
        self.place(self.field("Total Hours:", stats.hours_display))
        self.place(self.field("Years of Activity:", str(stats.years_active)))
