"""
Content model builder — normalizes raw brag sheet records.

Every style renderer consumes the same ContentModel, so the decisions
that don't depend on looks are made once, here:
- which categories have entries, and in what order they appear
- which insight answers are worth printing (non-blank, known question)
- whether the academic record has anything to show at all
- aggregate stats (entries, verified, hours, years active)

No layout knowledge lives in this module.
"""

from dataclasses import dataclass, field
from typing import Optional

from bragsheet.schemas.portfolio import (
    AcademicRecord,
    AchievementEntry,
    BragCategory,
    Course,
    InsightAnswer,
    ProfileSummary,
    TestScore,
)


# --- Insight question set ---
# Ordered: answers are always rendered in this order, regardless of
# the order they were saved in.
INSIGHT_QUESTIONS: list[tuple[str, str]] = [
    ("adjectives",
     "What are three adjectives you would use to describe yourself and why?"),
    ("major_goals",
     "What is your intended college major? What are your career goals?"),
    ("recommender_reason",
     "Why have you chosen this teacher to write a letter of recommendation for you?"),
    ("favorite_lesson",
     "What is a lesson or unit in the class you enjoyed? Why?"),
    ("proudest_moment",
     "Describe a time in the class when you felt most proud. Remember times "
     "when you displayed leadership, intellectual vitality, discipline, "
     "maturity, humility, integrity, or initiative."),
    ("unknown_fact",
     "What is something your teacher likely doesn't know about you?"),
    ("extracurricular_significance",
     "Describe your most significant extracurricular involvements. Elaborate "
     "on your participation in them and why they are important to you."),
    ("unique_qualities",
     "What makes you stand out from other students? What makes you unique? "
     "What are your greatest strengths?"),
    ("application_theme",
     "What is the overarching theme of your application? Do you have a "
     "spike? If so, what is it?"),
    ("obstacles",
     "Describe any major obstacles you have faced and how you overcame them. "
     "Think of academic, personal, family, or financial struggles."),
    ("transcript_reflection",
     "Do you believe your transcript truly reflects your academic abilities "
     "or potential? Elaborate."),
    ("additional_info",
     "Please list any additional information that you would like your "
     "recommender to know. Share anything that will help you stand out "
     "(extenuating circumstances, talents, hooks, etc.):"),
]

# --- Category display names ---
CATEGORY_LABELS = {
    BragCategory.VOLUNTEERING: "Community Service",
    BragCategory.JOB: "Work Experience",
    BragCategory.AWARD: "Honors & Awards",
    BragCategory.INTERNSHIP: "Internship",
    BragCategory.LEADERSHIP: "Leadership",
    BragCategory.CLUB: "Clubs & Organizations",
    BragCategory.EXTRACURRICULAR: "Extracurricular Activities",
    BragCategory.ACADEMIC: "Academic Achievement",
    BragCategory.OTHER: "Other Activities",
}

# Order categories appear in on a college-application-oriented document
CATEGORY_PRIORITY = [
    BragCategory.LEADERSHIP,
    BragCategory.EXTRACURRICULAR,
    BragCategory.CLUB,
    BragCategory.VOLUNTEERING,
    BragCategory.JOB,
    BragCategory.INTERNSHIP,
    BragCategory.AWARD,
    BragCategory.ACADEMIC,
    BragCategory.OTHER,
]

HONOR_CATEGORIES = frozenset({BragCategory.AWARD, BragCategory.ACADEMIC})


@dataclass(frozen=True)
class AnsweredInsight:
    key: str
    question: str
    answer: str


@dataclass(frozen=True)
class PortfolioStats:
    """Aggregate numbers shown in summaries and stat strips."""
    total_entries: int = 0
    verified_count: int = 0
    total_hours: float = 0
    years_active: int = 0

    @property
    def hours_display(self) -> str:
        """Whole hours print without a trailing '.0'."""
        if float(self.total_hours).is_integer():
            return str(int(self.total_hours))
        return f"{self.total_hours:.1f}"


@dataclass(frozen=True)
class CategoryGroup:
    category: BragCategory
    label: str
    entries: tuple[AchievementEntry, ...]


@dataclass(frozen=True)
class ContentModel:
    """Normalized, read-only input to every style renderer."""
    profile: ProfileSummary
    entries: tuple[AchievementEntry, ...] = ()
    groups: tuple[CategoryGroup, ...] = ()
    academics: Optional[AcademicRecord] = None
    insights: tuple[AnsweredInsight, ...] = ()
    stats: PortfolioStats = field(default_factory=PortfolioStats)

    @property
    def honors(self) -> list[AchievementEntry]:
        """Award and academic entries, in input order."""
        return [e for e in self.entries if e.category in HONOR_CATEGORIES]

    @property
    def activities(self) -> list[AchievementEntry]:
        """Everything that isn't an honor, in input order."""
        return [e for e in self.entries if e.category not in HONOR_CATEGORIES]


def build_content_model(
    profile: Optional[ProfileSummary],
    entries: Optional[list[AchievementEntry]] = None,
    academics: Optional[AcademicRecord] = None,
    insights: Optional[list[InsightAnswer]] = None,
) -> ContentModel:
    """Normalize raw records into a ContentModel.

    Args:
        profile: Student name/school/grade. None behaves like an empty profile.
        entries: Achievement entries in the order the student arranged them.
        academics: Academic record, dropped when it has nothing to render.
        insights: Saved insight answers, any order, possibly blank.
    """
    entries = list(entries or [])

    return ContentModel(
        profile=profile or ProfileSummary(),
        entries=tuple(entries),
        groups=tuple(_group_by_category(entries)),
        academics=academics if academics and not academics.is_empty else None,
        insights=tuple(_answered_insights(insights or [])),
        stats=compute_stats(entries),
    )


def compute_stats(entries: list[AchievementEntry]) -> PortfolioStats:
    """Totals across all entries. Years active counts distinct school years."""
    school_years = {e.school_year for e in entries if e.school_year}
    return PortfolioStats(
        total_entries=len(entries),
        verified_count=sum(1 for e in entries if e.is_verified),
        total_hours=sum(e.hours_spent or 0 for e in entries),
        years_active=len(school_years),
    )


def _group_by_category(entries: list[AchievementEntry]) -> list[CategoryGroup]:
    by_category: dict[BragCategory, list[AchievementEntry]] = {}
    for entry in entries:
        by_category.setdefault(entry.category, []).append(entry)

    return [
        CategoryGroup(
            category=category,
            label=CATEGORY_LABELS[category],
            entries=tuple(by_category[category]),
        )
        for category in CATEGORY_PRIORITY
        if by_category.get(category)
    ]


def _answered_insights(insights: list[InsightAnswer]) -> list[AnsweredInsight]:
    answers = {}
    for insight in insights:
        if insight.answer and insight.answer.strip():
            answers[insight.question_key] = insight.answer.strip()

    return [
        AnsweredInsight(key=key, question=question, answer=answers[key])
        for key, question in INSIGHT_QUESTIONS
        if key in answers
    ]


# ------------------------------------------------------------------
# FORMATTERS (shared by all styles)
# ------------------------------------------------------------------

def format_date_range(entry: AchievementEntry) -> str:
    """'Sep 2022 - Present', 'Sep 2022 - Jun 2023', or 'Sep 2022'.

    The end date is never read for ongoing entries.
    """
    if not entry.start_date:
        return ""
    start = entry.start_date.strftime("%b %Y")
    if entry.is_ongoing:
        return f"{start} - Present"
    if entry.end_date:
        return f"{start} - {entry.end_date.strftime('%b %Y')}"
    return start


def format_hours(hours: Optional[float]) -> str:
    if hours is None:
        return ""
    if float(hours).is_integer():
        return f"{int(hours)} hours"
    return f"{hours:.1f} hours"


def format_gpa(academics: AcademicRecord) -> str:
    """'Unweighted: 3.8 | Weighted: 4.2', or '' when no GPA is on record."""
    parts = []
    if academics.gpa_unweighted:
        parts.append(f"Unweighted: {academics.gpa_unweighted:g}")
    if academics.gpa_weighted:
        parts.append(f"Weighted: {academics.gpa_weighted:g}")
    return " | ".join(parts)


def format_test_score(score: TestScore) -> str:
    if score.subject:
        return f"{score.type} {score.subject}: {score.score}"
    return f"{score.type}: {score.score}"


def format_course(course: Course) -> str:
    if course.teacher:
        return f"{course.name} - {course.teacher}"
    return course.name
