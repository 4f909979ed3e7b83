"""Caller-side checks run before a plan is generated."""
from datetime import date
from typing import Optional

from app.models.plan import StudyPlanInput
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig


class PlanInputError(ValueError):
    """Raised when a plan request is not something the planner should see."""


def validate_plan_request(
    test_date: Optional[date],
    current_score: Optional[int],
    target_score: Optional[int],
    tutoring_sessions_per_week: int = 2,
    today: Optional[date] = None,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> StudyPlanInput:
    """
    Check a raw plan request and build the planner input from it.

    Raises:
        PlanInputError: with a user-facing message for the first failed check
    """
    today = today or date.today()

    if test_date is None:
        raise PlanInputError("Please select your SAT test date")
    if test_date <= today:
        raise PlanInputError("Test date must be in the future")

    if not current_score or not config.min_score <= current_score <= config.max_score:
        raise PlanInputError(
            f"Current score must be between {config.min_score} and {config.max_score}"
        )
    if not target_score or not config.min_score <= target_score <= config.max_score:
        raise PlanInputError(
            f"Target score must be between {config.min_score} and {config.max_score}"
        )
    if target_score <= current_score:
        raise PlanInputError("Target score should be higher than your current score")

    if tutoring_sessions_per_week not in config.tutoring_multipliers:
        raise PlanInputError(
            f"Tutoring sessions must be between 1 and {config.max_tutoring_sessions} per week"
        )

    return StudyPlanInput(
        test_date=test_date,
        current_score=current_score,
        target_score=target_score,
        tutoring_sessions_per_week=tutoring_sessions_per_week,
    )
