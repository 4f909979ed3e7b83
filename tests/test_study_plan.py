"""Tests for app.tools.study_plan."""
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from app.models.plan import IntensityTier, PlanType, StudyPlanInput
from app.tools.study_plan import generate_study_plan

TODAY = date(2026, 1, 5)


def _plan(current: int, target: int, tutoring: int, effective_weeks: int):
    plan_input = StudyPlanInput(
        test_date=TODAY + timedelta(weeks=effective_weeks + 1),
        current_score=current,
        target_score=target,
        tutoring_sessions_per_week=tutoring,
    )
    return generate_study_plan(plan_input, today=TODAY)


def test_nineteen_week_plan() -> None:
    plan = _plan(1080, 1350, 2, 19)

    assert plan.start_date == TODAY
    assert plan.total_weeks == 19
    assert plan.score_gap.total_gap == 270
    assert plan.score_gap.difficulty == "large"
    assert plan.plan_type == PlanType.EXTENDED
    assert plan.study_intensity == IntensityTier.MODERATE
    assert plan.weekly_hours_recommended == 6.5
    assert plan.recommended_weeks == 16

    assert plan.feasibility.is_feasible
    assert plan.feasibility.confidence == 67
    assert plan.projected_score == 1410

    assert len(plan.phases) == 6
    assert len(plan.weekly_plans) == 19
    assert plan.tutoring.sessions_per_week == 2
    assert plan.tutoring.total_sessions == 38
    assert plan.tutoring.hours_per_week == 2
    assert plan.tutoring.multiplier_applied == 1.3


def test_zero_gap_plan() -> None:
    plan = _plan(1000, 1000, 2, 10)
    assert plan.score_gap.total_gap == 0
    assert plan.feasibility.is_feasible
    assert plan.feasibility.confidence == 95
    assert plan.feasibility.recommendations == []
    assert plan.study_intensity == IntensityTier.LIGHT


def test_two_week_cram_with_daily_tutoring() -> None:
    plan = _plan(1200, 1300, 4, 2)
    assert plan.plan_type == PlanType.CRAM
    assert len(plan.phases) == 2
    assert len(plan.weekly_plans) == 2
    assert all(len(w.tutoring_sessions) == 4 for w in plan.weekly_plans)


def test_test_date_under_two_weeks_away_still_gets_a_week() -> None:
    plan_input = StudyPlanInput(
        test_date=TODAY + timedelta(days=10),
        current_score=1100,
        target_score=1150,
        tutoring_sessions_per_week=1,
    )
    plan = generate_study_plan(plan_input, today=TODAY)
    assert plan.total_weeks == 1
    assert len(plan.phases) == 1
    assert [w.week_number for w in plan.weekly_plans] == [1]
    assert plan.tutoring.total_sessions == 1


def test_infeasible_plan_projects_from_the_real_current_score() -> None:
    plan = _plan(800, 1500, 1, 4)
    assert plan.study_intensity == IntensityTier.VERY_INTENSIVE
    assert not plan.feasibility.is_feasible
    assert plan.projected_score == 940
    adjust = plan.feasibility.recommendations[-1]
    assert adjust.type == "adjust_target"
    assert adjust.details == {"achievable_score": 940}


def test_projected_score_is_capped_at_1600() -> None:
    plan = _plan(1500, 1550, 4, 30)
    assert plan.projected_score == 1600


def test_same_input_gives_same_plan() -> None:
    first = _plan(1150, 1400, 3, 12).model_dump(exclude={"created_at"})
    second = _plan(1150, 1400, 3, 12).model_dump(exclude={"created_at"})
    assert first == second


@pytest.mark.parametrize("tutoring", [1, 2, 3, 4])
def test_plan_totals_stay_consistent(tutoring: int) -> None:
    for weeks in range(1, 55):
        plan = _plan(1000, 1300, tutoring, weeks)
        assert plan.total_weeks == weeks
        assert len(plan.weekly_plans) == weeks
        assert plan.tutoring.total_sessions == tutoring * weeks
        assert 0 <= plan.feasibility.confidence <= 100
        assert plan.phases[0].start_week == 1
        assert plan.phases[-1].end_week == weeks
        for week in plan.weekly_plans:
            assert week.total_hours_with_tutoring == week.target_hours + tutoring
            assert len(week.tutoring_sessions) == tutoring


def test_lookup_helpers() -> None:
    plan = _plan(1080, 1350, 2, 19)
    assert plan.get_week(4).phase == "Core Skill Building"
    assert plan.get_week(20) is None
    assert plan.get_phase("peak performance").end_week == 19
    assert plan.get_phase("Cooldown") is None


def test_plan_is_immutable() -> None:
    plan = _plan(1080, 1350, 2, 19)
    with pytest.raises(ValidationError):
        plan.projected_score = 1600


@pytest.mark.parametrize(
    "fields",
    [
        {"current_score": 300},
        {"target_score": 1700},
        {"tutoring_sessions_per_week": 0},
        {"tutoring_sessions_per_week": 5},
    ],
)
def test_input_ranges_are_enforced(fields: dict) -> None:
    values = {
        "test_date": TODAY + timedelta(weeks=10),
        "current_score": 1000,
        "target_score": 1200,
        "tutoring_sessions_per_week": 2,
    }
    values.update(fields)
    with pytest.raises(ValidationError):
        StudyPlanInput(**values)
