"""Generate a complete study plan from a test date and score goal."""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from app.models.plan import StudyPlan, StudyPlanInput, TutoringSummary
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig
from app.tools.feasibility import assess_feasibility
from app.tools.intensity import recommend_intensity
from app.tools.phase_templates import generate_phases
from app.tools.plan_type import select_plan_type
from app.tools.rounding import round_to_ten
from app.tools.score_gap import calculate_score_gap, recommended_weeks
from app.tools.timeline import calculate_timeline
from app.tools.weekly_plan import generate_weekly_plans

logger = logging.getLogger(__name__)


def generate_study_plan(
    plan_input: StudyPlanInput,
    config: PlanningConfig = DEFAULT_CONFIG,
    today: Optional[date] = None,
) -> StudyPlan:
    """
    Run the planning pipeline and assemble the plan.

    Steps: timeline -> score gap -> intensity -> feasibility -> plan type
    -> phases -> weekly plans. Pure apart from reading the clock for
    ``today`` (when not given) and ``created_at``.

    Args:
        plan_input: Validated planner input
        config: Planning tables
        today: Plan start day (defaults to the local current date)
    """
    sessions = plan_input.tutoring_sessions_per_week

    timeline = calculate_timeline(plan_input.test_date, today=today, config=config)
    weeks = timeline.effective_weeks

    score_gap = calculate_score_gap(plan_input.current_score, plan_input.target_score, config)

    intensity, weekly_hours = recommend_intensity(weeks, score_gap.total_gap, sessions, config)

    feasibility = assess_feasibility(
        timeline,
        score_gap,
        intensity=intensity,
        tutoring_sessions_per_week=sessions,
        current_score=plan_input.current_score,
        config=config,
    )

    plan_type = select_plan_type(weeks, config)
    phases = generate_phases(plan_type, weeks)
    weekly_plans = generate_weekly_plans(phases, weeks, sessions, config)

    projected_score = min(
        config.max_score,
        round_to_ten(plan_input.current_score + feasibility.projected_improvement),
    )

    tutoring = TutoringSummary(
        sessions_per_week=sessions,
        total_sessions=sessions * weeks,
        hours_per_week=sessions * config.tutoring_session_minutes / 60,
        multiplier_applied=config.multiplier(sessions),
    )

    logger.info(
        "Generated %s plan: %d weeks, %d -> %d (projected %d), %s intensity, feasible=%s",
        plan_type.value, weeks, plan_input.current_score, plan_input.target_score,
        projected_score, intensity.value, feasibility.is_feasible,
    )

    return StudyPlan(
        created_at=datetime.now(timezone.utc).isoformat(),
        start_date=timeline.start_date,
        test_date=timeline.test_date,
        total_weeks=weeks,
        starting_score=plan_input.current_score,
        target_score=plan_input.target_score,
        projected_score=projected_score,
        score_gap=score_gap,
        plan_type=plan_type,
        phases=phases,
        weekly_plans=weekly_plans,
        feasibility=feasibility,
        study_intensity=intensity,
        weekly_hours_recommended=weekly_hours,
        recommended_weeks=recommended_weeks(score_gap.total_gap, config),
        tutoring=tutoring,
    )
