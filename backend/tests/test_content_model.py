"""
Unit tests for the content model builder and shared formatters.
"""

from datetime import date

import pytest
from pydantic import ValidationError

from bragsheet.schemas.portfolio import (
    AcademicRecord,
    BragCategory,
    InsightAnswer,
    VerificationStatus,
)
from bragsheet.services.content_model import (
    INSIGHT_QUESTIONS,
    build_content_model,
    compute_stats,
    format_date_range,
    format_gpa,
    format_hours,
)

from factories import make_academics, make_entry, make_model, make_profile


def test_groups_follow_fixed_category_priority():
    entries = [
        make_entry("Food Bank", BragCategory.VOLUNTEERING),
        make_entry("Science Olympiad", BragCategory.AWARD),
        make_entry("Student Council", BragCategory.LEADERSHIP),
        make_entry("Chess Club", BragCategory.CLUB),
    ]

    model = make_model(entries)

    assert [g.category for g in model.groups] == [
        BragCategory.LEADERSHIP,
        BragCategory.CLUB,
        BragCategory.VOLUNTEERING,
        BragCategory.AWARD,
    ]


def test_empty_categories_are_omitted():
    model = make_model([make_entry("Robotics", BragCategory.CLUB)])

    assert len(model.groups) == 1
    assert model.groups[0].label == "Clubs & Organizations"


def test_entries_keep_input_order_within_a_group():
    entries = [
        make_entry("Second", BragCategory.CLUB),
        make_entry("First", BragCategory.CLUB),
    ]

    model = make_model(entries)

    assert [e.title for e in model.groups[0].entries] == ["Second", "First"]


def test_honors_and_activities_split():
    entries = [
        make_entry("National Merit", BragCategory.AWARD),
        make_entry("Debate", BragCategory.CLUB),
        make_entry("Honor Roll", BragCategory.ACADEMIC),
    ]

    model = make_model(entries)

    assert [e.title for e in model.honors] == ["National Merit", "Honor Roll"]
    assert [e.title for e in model.activities] == ["Debate"]


def test_blank_and_unknown_insights_are_dropped():
    insights = [
        InsightAnswer(question_key="obstacles", answer="Moved schools twice."),
        InsightAnswer(question_key="adjectives", answer="   "),
        InsightAnswer(question_key="not_a_question", answer="ignored"),
        InsightAnswer(question_key="major_goals", answer=None),
    ]

    model = make_model(insights=insights)

    assert [i.key for i in model.insights] == ["obstacles"]
    assert model.insights[0].answer == "Moved schools twice."


def test_insights_render_in_question_order():
    insights = [
        InsightAnswer(question_key="additional_info", answer="Last"),
        InsightAnswer(question_key="adjectives", answer="First"),
    ]

    model = make_model(insights=insights)

    assert [i.key for i in model.insights] == ["adjectives", "additional_info"]
    assert model.insights[0].question == INSIGHT_QUESTIONS[0][1]


def test_question_set_has_twelve_keys():
    keys = [key for key, _ in INSIGHT_QUESTIONS]
    assert len(keys) == 12
    assert len(set(keys)) == 12


def test_empty_academic_record_is_dropped():
    model = make_model(academics=AcademicRecord())
    assert model.academics is None

    model = make_model(academics=make_academics())
    assert model.academics is not None


def test_missing_profile_becomes_empty_profile():
    model = build_content_model(None)

    assert model.profile.full_name is None
    assert model.entries == ()
    assert model.stats.total_entries == 0


def test_compute_stats():
    entries = [
        make_entry("A", hours_spent=10, school_year="2023-2024",
                   verification_status=VerificationStatus.VERIFIED),
        make_entry("B", hours_spent=2.5, school_year="2024-2025"),
        make_entry("C", school_year="2024-2025"),
    ]

    stats = compute_stats(entries)

    assert stats.total_entries == 3
    assert stats.verified_count == 1
    assert stats.total_hours == 12.5
    assert stats.hours_display == "12.5"
    assert stats.years_active == 2


def test_whole_hours_display_without_decimal():
    stats = compute_stats([make_entry(hours_spent=40)])
    assert stats.hours_display == "40"


def test_negative_hours_rejected():
    with pytest.raises(ValidationError):
        make_entry(hours_spent=-1)


# ------------------------------------------------------------------
# FORMATTERS
# ------------------------------------------------------------------

def test_date_range_ongoing_ignores_end_date():
    entry = make_entry(start_date=date(2022, 9, 1), end_date=date(2023, 6, 1),
                       is_ongoing=True)
    assert format_date_range(entry) == "Sep 2022 - Present"


def test_date_range_closed_and_open():
    closed = make_entry(start_date=date(2022, 9, 1), end_date=date(2023, 6, 1))
    assert format_date_range(closed) == "Sep 2022 - Jun 2023"

    single = make_entry(start_date=date(2022, 9, 1))
    assert format_date_range(single) == "Sep 2022"

    assert format_date_range(make_entry(start_date=None)) == ""


def test_format_hours():
    assert format_hours(None) == ""
    assert format_hours(12) == "12 hours"
    assert format_hours(1.5) == "1.5 hours"


def test_format_gpa():
    assert format_gpa(make_academics()) == "Unweighted: 3.9 | Weighted: 4.3"
    assert format_gpa(make_academics(gpa_weighted=None)) == "Unweighted: 3.9"
    assert format_gpa(make_academics(gpa_weighted=None, gpa_unweighted=None)) == ""


def test_profile_is_carried_through():
    model = make_model(profile=make_profile(full_name="Ana María"))
    assert model.profile.full_name == "Ana María"
