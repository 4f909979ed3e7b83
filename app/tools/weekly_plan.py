"""Expand phases into week-by-week activities and tutoring sessions."""
import logging
import math

from app.models.plan import Activity, Phase, PhaseCategory, TutoringSession, WeeklyPlan
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig
from app.tools.rounding import round_half_up

logger = logging.getLogger(__name__)


# (focus tags, suggested topics) for tutoring sessions
FINAL_WEEK_TUTORING = (
    ["Test-day preparation", "Confidence building"],
    [
        "Review commonly missed problems",
        "Test-day strategies and timing",
        "Stress management techniques",
        "Final Q&A",
    ],
)

FIRST_WEEK_TUTORING = (
    ["Diagnostic review", "Goal setting"],
    [
        "Review diagnostic results",
        "Identify priority skill gaps",
        "Set weekly goals",
        "Establish study routine",
    ],
)

TUTORING_BY_CATEGORY: dict[PhaseCategory, tuple[list[str], list[str]]] = {
    PhaseCategory.FOUNDATION: (
        ["Core concepts", "Foundation building"],
        [
            "Algebra fundamentals",
            "Grammar rules mastery",
            "Reading comprehension strategies",
            "Question type identification",
        ],
    ),
    PhaseCategory.SKILL_BUILDING: (
        ["Skill development", "Strategy introduction"],
        [
            "Advanced algebra techniques",
            "Geometry problem solving",
            "Evidence-based reading",
            "Rhetorical analysis",
        ],
    ),
    PhaseCategory.MASTERY: (
        ["Advanced content", "Weak area targeting"],
        [
            "Complex problem types",
            "Error pattern analysis",
            "Pacing strategies",
            "Desmos calculator usage",
        ],
    ),
    PhaseCategory.APPLICATION: (
        ["Test strategies", "Practice test review"],
        [
            "Practice test analysis",
            "Time management refinement",
            "Elimination techniques",
            "High-yield content review",
        ],
    ),
    PhaseCategory.FINAL_REVIEW: (
        ["Final review", "Peak performance"],
        [
            "High-frequency topics review",
            "Quick wins identification",
            "Mental preparation",
            "Test-day logistics",
        ],
    ),
}


def generate_weekly_plans(
    phases: list[Phase],
    total_weeks: int,
    tutoring_sessions_per_week: int,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> list[WeeklyPlan]:
    """
    Build one WeeklyPlan per week 1..total_weeks.

    Raises:
        RuntimeError: if a week has no owning phase
    """
    tutoring_hours = tutoring_sessions_per_week * config.tutoring_session_minutes / 60

    weekly_plans = []
    for week in range(1, total_weeks + 1):
        phase = find_phase(phases, week)
        week_in_phase = week - phase.start_week + 1

        weekly_plans.append(WeeklyPlan(
            week_number=week,
            phase=phase.name,
            focus=weekly_focus(phase, week_in_phase),
            activities=weekly_activities(phase, week, total_weeks),
            tutoring_sessions=tutoring_sessions(
                tutoring_sessions_per_week, phase, week, total_weeks, config
            ),
            target_hours=phase.weekly_hours,
            target_problems=round_half_up(phase.weekly_hours * config.problems_per_hour),
            total_hours_with_tutoring=phase.weekly_hours + tutoring_hours,
        ))

    return weekly_plans


def find_phase(phases: list[Phase], week: int) -> Phase:
    for phase in phases:
        if phase.contains(week):
            return phase
    raise RuntimeError(f"Week {week} is not covered by any phase")


def weekly_focus(phase: Phase, week_in_phase: int) -> list[str]:
    """Phase kickoff line plus this week's even share of the phase objectives."""
    focus = []
    if week_in_phase == 1:
        focus.append(f"Begin {phase.name} phase")

    per_week = math.ceil(len(phase.objectives) / phase.week_count)
    start = (week_in_phase - 1) * per_week
    focus.extend(phase.objectives[start:start + per_week])
    return focus


def weekly_activities(phase: Phase, week: int, total_weeks: int) -> list[Activity]:
    """
    Split the phase's weekly hours across its content mix.

    The testing slot is a diagnostic on the first plan week and light final
    preparation on the last one. Durations are rounded independently, so they
    may not sum to the weekly total exactly.
    """
    total_minutes = phase.weekly_hours * 60
    mix = phase.content_distribution

    def minutes(pct: int) -> int:
        return round_half_up(total_minutes * pct / 100)

    activities = []

    if mix.learning > 0:
        activities.append(Activity(
            type="lesson",
            name="Video Lessons & Content",
            duration=minutes(mix.learning),
            description="Watch instructional videos and study content materials",
        ))

    if mix.practice > 0:
        activities.append(Activity(
            type="practice",
            name="Practice Problems",
            duration=minutes(mix.practice),
            description="Work through targeted practice problems",
        ))

    if mix.testing > 0:
        if week == 1:
            activities.append(Activity(
                type="diagnostic",
                name="Diagnostic Test",
                duration=minutes(mix.testing),
                description="Complete full diagnostic test to identify strengths and weaknesses",
            ))
        elif week == total_weeks:
            activities.append(Activity(
                type="rest",
                name="Final Preparation",
                duration=minutes(mix.testing),
                description="Light review and rest before test day",
            ))
        else:
            activities.append(Activity(
                type="test",
                name="Practice Test / Section Tests",
                duration=minutes(mix.testing),
                description="Timed practice tests to build endurance and identify gaps",
            ))

    if mix.review > 0:
        activities.append(Activity(
            type="review",
            name="Review & Flashcards",
            duration=minutes(mix.review),
            description="Review mistakes and use flashcards for retention",
        ))

    return activities


def tutoring_focus(phase: Phase, week: int, total_weeks: int) -> tuple[list[str], list[str]]:
    """Focus tags and topics for the week's tutoring; last week wins over first."""
    if week == total_weeks:
        return FINAL_WEEK_TUTORING
    if week == 1:
        return FIRST_WEEK_TUTORING
    return TUTORING_BY_CATEGORY[phase.category]


def tutoring_sessions(
    sessions_per_week: int,
    phase: Phase,
    week: int,
    total_weeks: int,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> list[TutoringSession]:
    """Two suggested topics per session; sessions past the topic list get none."""
    focus, topics = tutoring_focus(phase, week, total_weeks)
    return [
        TutoringSession(
            session_number=i,
            duration=config.tutoring_session_minutes,
            focus=list(focus),
            suggested_topics=topics[(i - 1) * 2:i * 2],
        )
        for i in range(1, sessions_per_week + 1)
    ]
