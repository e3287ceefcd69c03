"""
Tests for the three style renderers.

Each renderer runs against a RecordingSurface, so assertions look at
the blocks that were laid out (their text and their page) rather than
at PDF bytes.
"""

import pytest

from bragsheet.config import settings as app_settings
from bragsheet.schemas.portfolio import (
    BragCategory,
    DocumentStyle,
    InsightAnswer,
    VerificationStatus,
)
from bragsheet.services.content_blocks import ActivityCard, ImageRow, StatGrid
from bragsheet.services.layout_engine import LayoutEngine
from bragsheet.services.renderers import RENDERERS, RenderContext
from bragsheet.services.styles import STYLE_CONFIGS
from bragsheet.services.text_metrics import TextMeasurer

from factories import (
    RecordingSurface,
    make_academics,
    make_entry,
    make_model,
    make_profile,
    mock_resolver,
    png_bytes,
    render_with,
)

ALL_STYLES = list(DocumentStyle)


def many_entries(count: int, description_length: int = 400) -> list:
    categories = [BragCategory.LEADERSHIP, BragCategory.CLUB, BragCategory.VOLUNTEERING]
    return [
        make_entry(
            f"Activity {i}",
            categories[i % len(categories)],
            description=("Organized events and mentored members. " * 20)[:description_length],
            impact="Grew membership by a third.",
            hours_spent=10,
        )
        for i in range(count)
    ]


def headings(surface) -> list[str]:
    return [b.text for b in surface.blocks("section_header")]


def cards(surface) -> list[ActivityCard]:
    return surface.blocks("activity_card")


# ------------------------------------------------------------------
# SHARED BEHAVIOR
# ------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("style", ALL_STYLES)
async def test_empty_portfolio_renders_one_page(style):
    engine, surface = await render_with(style, make_model())

    assert engine.page_count == 1
    assert engine.footer_numbers == [1]
    assert surface.drawn


@pytest.mark.asyncio
@pytest.mark.parametrize("style", ALL_STYLES)
async def test_long_portfolio_paginates_within_margins(style):
    model = make_model(many_entries(40), academics=make_academics())

    engine, _ = await render_with(style, model)

    assert engine.page_count >= 2
    assert engine.footer_numbers == list(range(1, engine.page_count + 1))
    bottom = engine.geometry.content_bottom
    for placement in engine.placements:
        assert placement.bottom <= bottom or placement.overflowed


@pytest.mark.asyncio
@pytest.mark.parametrize("style", ALL_STYLES)
async def test_rendering_is_deterministic(style):
    model = make_model(
        many_entries(15),
        academics=make_academics(),
        insights=[InsightAnswer(question_key="obstacles", answer="A long road.")],
    )

    first, _ = await render_with(style, model)
    second, _ = await render_with(style, model)

    assert first.placements == second.placements


@pytest.mark.asyncio
async def test_context_defaults_to_app_settings():
    """A RenderContext built without settings renders with the app config."""
    config = STYLE_CONFIGS[DocumentStyle.PLAIN]
    measurer = TextMeasurer()
    engine = LayoutEngine(config.geometry, RecordingSurface(), measurer)
    context = RenderContext(engine=engine, measurer=measurer)

    assert context.settings is app_settings
    await RENDERERS[DocumentStyle.PLAIN](context, config).render(make_model())
    assert engine.finish() == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("style", ALL_STYLES)
async def test_section_headers_never_end_a_page(style):
    model = make_model(
        many_entries(30),
        insights=[
            InsightAnswer(question_key=key, answer="An answer. " * 30)
            for key in ("adjectives", "major_goals", "obstacles", "additional_info")
        ],
    )

    _, surface = await render_with(style, model)

    last_on_page = {}
    for page, _, block in surface.drawn:
        last_on_page[page] = block
    # The final page may end on anything; earlier pages never end on a header
    for page, block in last_on_page.items():
        if page != max(last_on_page):
            assert block.kind != "section_header"


# ------------------------------------------------------------------
# PLAIN
# ------------------------------------------------------------------

@pytest.mark.asyncio
async def test_plain_empty_portfolio_has_header_and_zero_summary():
    _, surface = await render_with(DocumentStyle.PLAIN, make_model())
    texts = surface.texts()

    assert "BRAG SHEET" in texts
    assert "Jane Doe" in texts
    assert "Generated: March 5, 2025" in texts
    assert headings(surface) == ["SUMMARY"]
    assert cards(surface) == []
    summary = {b.label: b.value for b in surface.blocks("field_row")}
    assert summary["Total Activities:"] == "0"
    assert summary["Total Hours:"] == "0"


@pytest.mark.asyncio
async def test_plain_groups_entries_in_priority_order():
    entries = [
        make_entry("Food Bank", BragCategory.VOLUNTEERING),
        make_entry("Class President", BragCategory.LEADERSHIP),
    ]

    _, surface = await render_with(DocumentStyle.PLAIN, make_model(entries))

    assert headings(surface)[:2] == ["LEADERSHIP", "COMMUNITY SERVICE"]
    assert [c.title for c in cards(surface)] == ["Class President", "Food Bank"]


@pytest.mark.asyncio
async def test_plain_prints_descriptions_in_full():
    description = "word " * 200
    entry = make_entry(description=description, impact="Raised $2,000.")

    _, surface = await render_with(DocumentStyle.PLAIN, make_model([entry]))
    paragraphs = [b.text for b in surface.blocks("text_paragraph")]

    assert description.strip() in paragraphs
    assert "Impact: Raised $2,000." in paragraphs


@pytest.mark.asyncio
async def test_plain_marks_verified_entries():
    entries = [
        make_entry("Verified One", verification_status=VerificationStatus.VERIFIED),
        make_entry("Pending One"),
    ]

    _, surface = await render_with(DocumentStyle.PLAIN, make_model(entries))

    titles = [c.title for c in cards(surface)]
    assert "Verified One [verified]" in titles
    assert "Pending One" in titles


@pytest.mark.asyncio
async def test_plain_without_academics_has_no_academic_section():
    _, surface = await render_with(DocumentStyle.PLAIN, make_model([make_entry()]))

    assert "ACADEMICS" not in headings(surface)


@pytest.mark.asyncio
async def test_plain_with_academics():
    _, surface = await render_with(
        DocumentStyle.PLAIN, make_model(academics=make_academics()),
    )
    texts = surface.texts()

    assert "ACADEMICS" in headings(surface)
    assert "Unweighted: 3.9 | Weighted: 4.3" in texts
    assert "  * SAT: 1520" in texts
    assert "  * AP Biology - Ms. Rivera" in texts


@pytest.mark.asyncio
async def test_plain_summary_counts():
    entries = [
        make_entry("A", hours_spent=5, verification_status=VerificationStatus.VERIFIED),
        make_entry("B", hours_spent=7.5, school_year="2023-2024"),
    ]

    _, surface = await render_with(DocumentStyle.PLAIN, make_model(entries))
    summary = {b.label: b.value for b in surface.blocks("field_row")}

    assert summary["Total Activities:"] == "2"
    assert summary["Verified Entries:"] == "1"
    assert summary["Total Hours:"] == "12.5"
    assert summary["Years of Activity:"] == "2"


# ------------------------------------------------------------------
# PROFESSIONAL
# ------------------------------------------------------------------

@pytest.mark.asyncio
async def test_professional_header_and_stat_strip():
    entries = [
        make_entry("A", hours_spent=20, verification_status=VerificationStatus.VERIFIED),
        make_entry("B", hours_spent=4),
    ]

    _, surface = await render_with(DocumentStyle.PROFESSIONAL, make_model(entries))

    header = cards(surface)[0]
    assert header.title == "Jane Doe"
    assert header.lines[0].text == "Lincoln High | Grade 11"

    grid = surface.blocks("stat_grid")[0]
    assert isinstance(grid, StatGrid)
    assert grid.cells == [
        ("2", "Activities"), ("1", "Verified"), ("24", "Hours"), ("1", "Years Active"),
    ]


@pytest.mark.asyncio
async def test_professional_header_without_name():
    model = make_model(profile=make_profile(full_name=None))

    _, surface = await render_with(DocumentStyle.PROFESSIONAL, model)

    assert cards(surface)[0].title == "Brag Sheet"


@pytest.mark.asyncio
async def test_professional_check_mark_only_on_verified():
    entries = [
        make_entry("Verified", verification_status=VerificationStatus.VERIFIED),
        make_entry("Rejected", verification_status=VerificationStatus.REJECTED),
    ]

    _, surface = await render_with(DocumentStyle.PROFESSIONAL, make_model(entries))
    marks = {c.title: c.check_mark for c in cards(surface)[1:]}

    assert marks == {"Verified": True, "Rejected": False}


@pytest.mark.asyncio
async def test_professional_images_capped_and_failures_dropped():
    urls = [
        "https://img.example.com/1.png",
        "https://img.example.com/missing.png",
        "https://img.example.com/3.png",
        "https://img.example.com/4.png",
    ]
    images = {url: png_bytes() for url in urls if "missing" not in url}
    entry = make_entry(image_urls=urls)

    async with mock_resolver(images) as resolver:
        _, surface = await render_with(
            DocumentStyle.PROFESSIONAL, make_model([entry]), resolver=resolver,
        )

    # Three attempted (the cap), one failed, two embedded
    assert resolver.attempted == urls[:3]
    assert resolver.failed == [urls[1]]
    card = cards(surface)[-1]
    assert isinstance(card.image_row, ImageRow)
    assert len(card.image_row.images) == 2


@pytest.mark.asyncio
async def test_professional_entry_without_images_has_no_image_row():
    async with mock_resolver({}) as resolver:
        _, surface = await render_with(
            DocumentStyle.PROFESSIONAL, make_model([make_entry()]), resolver=resolver,
        )

    assert cards(surface)[-1].image_row is None
    assert resolver.attempted == []


@pytest.mark.asyncio
async def test_professional_sections():
    model = make_model(
        [make_entry()],
        academics=make_academics(),
        insights=[InsightAnswer(question_key="adjectives", answer="Curious.")],
    )

    _, surface = await render_with(DocumentStyle.PROFESSIONAL, model)
    section_bars = [b.text for b in surface.blocks("section_header") if b.bar_color]

    assert section_bars == ["ACADEMIC PROFILE", "LEADERSHIP", "PERSONAL INSIGHTS"]
    assert "Curious." in surface.texts()


# ------------------------------------------------------------------
# APPLICATION FORMAT
# ------------------------------------------------------------------

@pytest.mark.asyncio
async def test_application_sections_are_numbered_contiguously():
    entries = [make_entry("Debate", BragCategory.CLUB)]

    _, surface = await render_with(DocumentStyle.APPLICATION, make_model(entries))

    assert headings(surface) == ["1. Student Information", "2. Activities"]


@pytest.mark.asyncio
async def test_application_all_sections():
    entries = [
        make_entry("National Merit", BragCategory.AWARD),
        make_entry("Debate", BragCategory.CLUB),
    ]
    model = make_model(
        entries,
        academics=make_academics(),
        insights=[InsightAnswer(question_key="obstacles", answer="Moved twice.")],
    )

    _, surface = await render_with(DocumentStyle.APPLICATION, model)
    numbered = [h for h in headings(surface) if h[0].isdigit()]

    assert numbered == [
        "1. Student Information",
        "2. Academic Record",
        "3. Honors",
        "4. Activities",
        "5. Additional Information",
    ]
    assert "March 5, 2025" in surface.texts()


@pytest.mark.asyncio
async def test_application_caps_activities_with_note():
    entries = [make_entry(f"Club {i}", BragCategory.CLUB) for i in range(12)]

    _, surface = await render_with(DocumentStyle.APPLICATION, make_model(entries))

    titles = [c.title for c in cards(surface)]
    assert len(titles) == 10
    assert titles[0] == "1. Club 0"
    assert titles[-1] == "10. Club 9"
    assert "+2 additional activities not shown" in surface.texts()


@pytest.mark.asyncio
async def test_application_single_omitted_activity_is_singular():
    entries = [make_entry(f"Club {i}", BragCategory.CLUB) for i in range(11)]

    _, surface = await render_with(DocumentStyle.APPLICATION, make_model(entries))

    assert "+1 additional activity not shown" in surface.texts()


@pytest.mark.asyncio
async def test_application_no_note_when_nothing_omitted():
    entries = [make_entry(f"Club {i}", BragCategory.CLUB) for i in range(10)]

    _, surface = await render_with(DocumentStyle.APPLICATION, make_model(entries))

    assert not any("additional" in t for t in surface.texts())


@pytest.mark.asyncio
async def test_application_caps_honors_at_five():
    entries = [make_entry(f"Award {i}", BragCategory.AWARD) for i in range(7)]

    _, surface = await render_with(DocumentStyle.APPLICATION, make_model(entries))

    assert [c.title for c in cards(surface)] == [f"{i + 1}. Award {i}" for i in range(5)]
    assert "4. Activities" not in headings(surface)


@pytest.mark.asyncio
async def test_application_truncates_long_description():
    entry = make_entry("Robotics", BragCategory.CLUB, description="x" * 600)

    _, surface = await render_with(DocumentStyle.APPLICATION, make_model([entry]))
    line = cards(surface)[0].lines[-1].text

    assert len(line) == 150
    assert line == "x" * 147 + "..."


@pytest.mark.asyncio
async def test_application_falls_back_to_impact():
    entry = make_entry("Robotics", BragCategory.CLUB, description=None,
                       impact="Built the team's first robot.")

    _, surface = await render_with(DocumentStyle.APPLICATION, make_model([entry]))

    assert cards(surface)[0].lines[-1].text == "Built the team's first robot."


@pytest.mark.asyncio
async def test_application_truncates_insight_answers():
    model = make_model(insights=[
        InsightAnswer(question_key="additional_info", answer="y" * 900),
    ])

    _, surface = await render_with(DocumentStyle.APPLICATION, model)
    answer = next(t for t in surface.texts() if t.startswith("y"))

    assert len(answer) == 500
    assert answer.endswith("...")
