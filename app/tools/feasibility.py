"""Project achievable improvement and suggest fixes when it falls short."""
import logging
import math

from app.models.plan import (
    FeasibilityAssessment,
    IntensityTier,
    Recommendation,
    ScoreGap,
    Timeline,
)
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig
from app.tools.rounding import round_half_up, round_to_ten

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 60
MAX_CONFIDENCE = 95
MIN_CONFIDENCE = 20


def project_improvement(
    weeks: int,
    tier: IntensityTier,
    tutoring_sessions_per_week: int,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> float:
    """Points gained over ``weeks`` at this tier, capped by the tier's max improvement."""
    profile = config.profile(tier)
    multiplier = config.multiplier(tutoring_sessions_per_week)
    weekly_rate = profile.weekly_rate * multiplier
    return min(weeks * weekly_rate, profile.max_improvement * multiplier)


def assess_feasibility(
    timeline: Timeline,
    score_gap: ScoreGap,
    intensity: IntensityTier = IntensityTier.MODERATE,
    tutoring_sessions_per_week: int = 2,
    *,
    current_score: int,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> FeasibilityAssessment:
    """
    Decide whether the gap closes in the available weeks.

    Feasible plans get a confidence between 60 and 95 that grows with the
    projection buffer. Infeasible plans get a confidence between 20 and 60 and
    an ordered list of recommendations:
        1. increase_intensity (first higher tier that closes the gap)
        2. add_tutoring (one more session/week, if that alone closes the gap)
        3. extend_timeline
        4. adjust_target
    """
    weeks = timeline.effective_weeks
    gap = score_gap.total_gap
    weekly_rate = config.profile(intensity).weekly_rate * config.multiplier(tutoring_sessions_per_week)
    projected = project_improvement(weeks, intensity, tutoring_sessions_per_week, config)

    if projected >= gap:
        if gap > 0:
            buffer = projected - gap
            confidence = min(MAX_CONFIDENCE, BASE_CONFIDENCE + (buffer / gap) * 35)
        else:
            confidence = MAX_CONFIDENCE
        logger.debug("Projected %.1f >= gap %d, confidence %.1f", projected, gap, confidence)
        return FeasibilityAssessment(
            is_feasible=True,
            confidence=round_half_up(confidence),
            projected_improvement=projected,
        )

    shortfall = gap - projected
    confidence = max(MIN_CONFIDENCE, BASE_CONFIDENCE - shortfall / 10)
    logger.debug("Projected %.1f < gap %d, shortfall %.1f", projected, gap, shortfall)

    recommendations = []

    more_intensity = _suggest_higher_intensity(weeks, gap, projected, intensity, tutoring_sessions_per_week, config)
    if more_intensity is not None:
        recommendations.append(more_intensity)

    more_tutoring = _suggest_more_tutoring(weeks, gap, projected, intensity, tutoring_sessions_per_week, config)
    if more_tutoring is not None:
        recommendations.append(more_tutoring)

    additional_weeks = math.ceil(shortfall / weekly_rate)
    recommendations.append(Recommendation(
        type="extend_timeline",
        priority="medium",
        impact=shortfall,
        message=f"Consider a test date {additional_weeks} weeks later",
        details={"additional_weeks": additional_weeks},
    ))

    achievable_score = min(config.max_score, round_to_ten(projected + current_score))
    recommendations.append(Recommendation(
        type="adjust_target",
        priority="low",
        impact=shortfall,
        message=f"Based on timeline, a target of {achievable_score} is more achievable",
        details={"achievable_score": achievable_score},
    ))

    return FeasibilityAssessment(
        is_feasible=False,
        confidence=round_half_up(confidence),
        projected_improvement=projected,
        shortfall=shortfall,
        recommendations=recommendations,
    )


def _suggest_higher_intensity(
    weeks: int,
    gap: int,
    projected: float,
    intensity: IntensityTier,
    sessions: int,
    config: PlanningConfig,
) -> Recommendation | None:
    """First tier above the current one that closes the gap, scanning upward."""
    tiers = list(IntensityTier)
    for tier in tiers[tiers.index(intensity) + 1:]:
        new_projection = project_improvement(weeks, tier, sessions, config)
        if new_projection >= gap:
            return Recommendation(
                type="increase_intensity",
                priority="high",
                impact=new_projection - projected,
                message=f"Increase async study time to {config.profile(tier).hours_range}",
                details={"new_intensity": tier.value, "projected_improvement": new_projection},
            )
    return None


def _suggest_more_tutoring(
    weeks: int,
    gap: int,
    projected: float,
    intensity: IntensityTier,
    sessions: int,
    config: PlanningConfig,
) -> Recommendation | None:
    if sessions >= config.max_tutoring_sessions:
        return None

    more_sessions = sessions + 1
    with_more_tutoring = project_improvement(weeks, intensity, more_sessions, config)
    if with_more_tutoring < gap:
        return None

    return Recommendation(
        type="add_tutoring",
        priority="high",
        impact=with_more_tutoring - projected,
        message=f"Increase tutoring to {more_sessions}x per week",
        details={
            "current_sessions": sessions,
            "recommended_sessions": more_sessions,
            "projected_with_more_tutoring": with_more_tutoring,
        },
    )
