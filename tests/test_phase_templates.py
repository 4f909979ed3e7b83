"""Tests for app.tools.phase_templates."""
import pytest
from pydantic import ValidationError

from app.models.plan import ContentDistribution, Phase, PhaseCategory, PlanType
from app.tools.phase_templates import (
    clamp_spans,
    cram_phases,
    cram_spans,
    extended_phases,
    extended_spans,
    generate_phases,
    long_term_phases,
    long_term_spans,
    short_phases,
    short_spans,
    standard_spans,
)
from app.tools.plan_type import select_plan_type


def _assert_tiles(phases: list[Phase], weeks: int) -> None:
    assert phases[0].start_week == 1
    for prev, nxt in zip(phases, phases[1:]):
        assert prev.end_week + 1 == nxt.start_week
    assert phases[-1].end_week == weeks
    for phase in phases:
        assert phase.start_week <= phase.end_week
        mix = phase.content_distribution
        assert mix.learning + mix.practice + mix.testing + mix.review == 100


@pytest.mark.parametrize("weeks", range(1, 61))
def test_selected_template_tiles_the_plan(weeks: int) -> None:
    _assert_tiles(generate_phases(select_plan_type(weeks), weeks), weeks)


@pytest.mark.parametrize("plan_type", list(PlanType))
@pytest.mark.parametrize("weeks", [1, 2, 3, 4, 5, 7, 12, 25, 40])
def test_every_template_tiles_any_length(plan_type: PlanType, weeks: int) -> None:
    _assert_tiles(generate_phases(plan_type, weeks), weeks)


@pytest.mark.parametrize(
    "weeks, count",
    [(2, 2), (3, 2), (4, 2), (5, 4), (8, 4), (9, 5), (16, 5), (17, 6), (32, 6), (33, 4), (52, 4)],
)
def test_phase_count_within_archetype_range(weeks: int, count: int) -> None:
    assert len(generate_phases(select_plan_type(weeks), weeks)) == count


def test_cram_spans() -> None:
    assert cram_spans(1) == [(1, 1), None]
    assert cram_spans(2) == [(1, 1), (2, 2)]
    assert cram_spans(3) == [(1, 2), (3, 3)]
    assert cram_spans(4) == [(1, 2), (3, 4)]


def test_short_spans() -> None:
    assert short_spans(5) == [(1, 1), (2, 3), (4, 4), (5, 5)]
    assert short_spans(8) == [(1, 2), (3, 4), (5, 6), (7, 8)]
    # Below the archetype's range the Building phase has no room left
    assert short_spans(3) == [(1, 1), None, (2, 2), (3, 3)]


def test_standard_spans() -> None:
    assert standard_spans(9) == [(1, 1), (2, 3), (4, 5), (6, 8), (9, 9)]
    assert standard_spans(16) == [(1, 1), (2, 4), (5, 9), (10, 13), (14, 16)]


def test_extended_spans() -> None:
    assert extended_spans(19) == [(1, 3), (4, 7), (8, 11), (12, 15), (16, 18), (19, 19)]
    assert extended_spans(20) == [(1, 3), (4, 7), (8, 11), (12, 15), (16, 18), (19, 20)]


def test_long_term_spans() -> None:
    assert long_term_spans(34) == [(1, 8), (9, 16), (17, 24), (25, 34)]


def test_clamp_spans_never_inverts() -> None:
    assert clamp_spans([3, 1, 5], 5) == [(1, 3), None, (4, 5)]
    assert clamp_spans([0, 0, 0, 3], 3) == [None, None, None, (1, 3)]


def test_single_week_cram_keeps_only_the_diagnostic_phase() -> None:
    phases = cram_phases(1)
    assert [p.name for p in phases] == ["Diagnostic + High-Impact Strategies"]


def test_two_week_cram_phases() -> None:
    phases = cram_phases(2)
    assert [p.name for p in phases] == [
        "Diagnostic + High-Impact Strategies",
        "Intensive Practice + Final Prep",
    ]
    assert phases[0].weekly_hours == 15


def test_extended_phase_categories() -> None:
    assert [p.category for p in extended_phases(19)] == [
        PhaseCategory.FOUNDATION,
        PhaseCategory.SKILL_BUILDING,
        PhaseCategory.MASTERY,
        PhaseCategory.MASTERY,
        PhaseCategory.APPLICATION,
        PhaseCategory.FINAL_REVIEW,
    ]


def test_short_phase_categories() -> None:
    assert [(p.name, p.category) for p in short_phases(6)] == [
        ("Foundation", PhaseCategory.FOUNDATION),
        ("Building", PhaseCategory.FINAL_REVIEW),
        ("Practice", PhaseCategory.FINAL_REVIEW),
        ("Peak", PhaseCategory.FINAL_REVIEW),
    ]


def test_long_term_phase_categories() -> None:
    assert [(p.name, p.category) for p in long_term_phases(40)] == [
        ("Academic Foundation", PhaseCategory.FOUNDATION),
        ("Core SAT Content", PhaseCategory.FINAL_REVIEW),
        ("Advanced Mastery", PhaseCategory.MASTERY),
        ("Peak Performance", PhaseCategory.FINAL_REVIEW),
    ]


def _category_from_name(name: str) -> PhaseCategory:
    # First matching keyword pair wins; matching is case-sensitive
    if "Foundation" in name or "Assessment" in name:
        return PhaseCategory.FOUNDATION
    if "Skill Building" in name or "Development" in name:
        return PhaseCategory.SKILL_BUILDING
    if "Mastery" in name or "Advanced" in name:
        return PhaseCategory.MASTERY
    if "Application" in name or "Strategy" in name:
        return PhaseCategory.APPLICATION
    return PhaseCategory.FINAL_REVIEW


@pytest.mark.parametrize(
    "plan_type, weeks",
    [
        (PlanType.CRAM, 2),
        (PlanType.CRAM, 4),
        (PlanType.SHORT, 6),
        (PlanType.STANDARD, 12),
        (PlanType.EXTENDED, 24),
        (PlanType.LONG_TERM, 40),
    ],
)
def test_phase_category_matches_name_keywords(plan_type: PlanType, weeks: int) -> None:
    for phase in generate_phases(plan_type, weeks):
        assert phase.category == _category_from_name(phase.name), phase.name


def test_content_distribution_must_sum_to_100() -> None:
    with pytest.raises(ValidationError):
        ContentDistribution(learning=40, practice=40, testing=10, review=5)


def test_phase_span_cannot_invert() -> None:
    with pytest.raises(ValidationError):
        Phase(
            name="Broken",
            category=PhaseCategory.FOUNDATION,
            start_week=3,
            end_week=2,
            focus="",
            weekly_hours=8,
            content_distribution=ContentDistribution(learning=25, practice=25, testing=25, review=25),
        )
