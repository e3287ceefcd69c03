"""
Application-format style — mimics a standardized college application.

Numbered sections, in this order, each omitted when it has no content
(numbers stay contiguous):
1. Student Information
2. Academic Record
3. Honors: first APPLICATION_MAX_HONORS award/academic entries
4. Activities: first APPLICATION_MAX_ACTIVITIES other entries, then a
   "+N additional activities not shown" note when some were cut
5. Additional Information: insight answers

Descriptions are cut to APPLICATION_DESCRIPTION_LIMIT characters and
insight answers to APPLICATION_INSIGHT_LIMIT, ellipsis included, the way
the real forms cut them. Pages after the first carry a running header
(see StyleConfig.running_header).
"""

from bragsheet.schemas.portfolio import AchievementEntry
from bragsheet.services.content_blocks import ActivityCard, CardLine, SectionHeader
from bragsheet.services.content_model import (
    CATEGORY_LABELS,
    ContentModel,
    format_course,
    format_gpa,
    format_hours,
    format_test_score,
)
from bragsheet.services.renderers.base import StyleRenderer
from bragsheet.services.styles import APPLICATION
from bragsheet.services.text_metrics import truncate


class ApplicationRenderer(StyleRenderer):

    config = APPLICATION

    async def render(self, model: ContentModel) -> None:
        self._section_number = 0

        self.place(self.paragraph(
            "ACTIVITIES & HONORS SUMMARY",
            font=self.fonts.title,
            spacing_after=10,
        ))
        self._render_student_info(model)
        self._render_academic_record(model)
        self._render_honors(model)
        self._render_activities(model)
        self._render_additional_info(model)

    # ------------------------------------------------------------------
    # SECTIONS
    # ------------------------------------------------------------------

    def _section(self, title: str) -> None:
        self._section_number += 1
        self.place(self.heading(
            f"{self._section_number}. {title}",
            rule_color=self.palette.border,
            spacing_after=6,
        ))

    def _field(self, label: str, value: str):
        return self.field(label, value, label_width=110, indent=12)

    def _render_student_info(self, model: ContentModel) -> None:
        profile = model.profile
        self._section("Student Information")
        if profile.full_name:
            self.place(self._field("Name", profile.full_name))
        if profile.school_name:
            self.place(self._field("School", profile.school_name))
        if profile.grade_level:
            self.place(self._field("Grade Level", profile.grade_level))
        self.place(self._field("Date Prepared", self.generated_date()))

    def _render_academic_record(self, model: ContentModel) -> None:
        academics = model.academics
        if academics is None:
            return

        self._section("Academic Record")
        gpa = format_gpa(academics)
        if gpa:
            self.place(self._field("GPA", gpa))
        for i, score in enumerate(academics.test_scores):
            self.place(self._field("Test Scores" if i == 0 else "",
                                   format_test_score(score)))
        for i, course in enumerate(academics.courses):
            self.place(self._field("Courses" if i == 0 else "", format_course(course)))
        if academics.colleges_applying:
            self.place(self._field("Colleges", ", ".join(academics.colleges_applying)))

    def _render_honors(self, model: ContentModel) -> None:
        honors = model.honors[: self.settings.APPLICATION_MAX_HONORS]
        if not honors:
            return

        self._section("Honors")
        for i, entry in enumerate(honors, 1):
            self.place(self._entry_card(i, entry, show_category=False))

    def _render_activities(self, model: ContentModel) -> None:
        activities = model.activities
        if not activities:
            return

        limit = self.settings.APPLICATION_MAX_ACTIVITIES
        shown, omitted = activities[:limit], len(activities) - limit

        self._section("Activities")
        for i, entry in enumerate(shown, 1):
            self.place(self._entry_card(i, entry, show_category=True))

        if omitted > 0:
            noun = "activity" if omitted == 1 else "activities"
            self.place(self.paragraph(
                f"+{omitted} additional {noun} not shown",
                font=self.fonts.italic,
                color=self.palette.muted,
                indent=12,
            ))

    def _render_additional_info(self, model: ContentModel) -> None:
        if not model.insights:
            return

        self._section("Additional Information")
        limit = self.settings.APPLICATION_INSIGHT_LIMIT
        for insight in model.insights:
            self.place(SectionHeader(
                insight.question,
                font=self.fonts.bold,
                color=self.palette.text,
                spacing_after=2,
            ))
            self.place(self.paragraph(
                truncate(insight.answer, limit),
                indent=12,
                spacing_after=8,
            ))

    # ------------------------------------------------------------------
    # ENTRIES
    # ------------------------------------------------------------------

    def _entry_card(self, number: int, entry: AchievementEntry,
                    show_category: bool) -> ActivityCard:
        lines = []

        details = []
        if show_category:
            details.append(CATEGORY_LABELS[entry.category])
        if entry.position_role:
            details.append(f"Position: {entry.position_role}")
        if entry.grades_participated:
            details.append(f"Grades: {', '.join(entry.grades_participated)}")
        if entry.year_received:
            details.append(f"Year: {entry.year_received}")
        if entry.hours_spent:
            details.append(format_hours(entry.hours_spent))
        if details:
            lines.append(CardLine(" | ".join(details), self.fonts.small,
                                  self.palette.muted, indent=12))

        description = entry.description or entry.impact
        if description:
            lines.append(CardLine(
                truncate(description.strip(), self.settings.APPLICATION_DESCRIPTION_LIMIT),
                self.fonts.body,
                self.palette.text,
                indent=12,
            ))

        return ActivityCard(
            title=f"{number}. {self.entry_title(entry)}",
            title_font=self.fonts.subheading,
            right_text=self.entry_meta(entry),
            right_font=self.fonts.small,
            right_color=self.palette.muted,
            lines=lines,
            spacing_after=8,
        )
