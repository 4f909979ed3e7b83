"""Pick the self-study intensity tier needed to close the score gap."""
import logging

from app.models.plan import IntensityTier
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig

logger = logging.getLogger(__name__)


def recommend_intensity(
    effective_weeks: int,
    total_gap: int,
    tutoring_sessions_per_week: int,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> tuple[IntensityTier, float]:
    """
    Return the cheapest tier whose base rate covers the required weekly gain.

    Tutoring handles part of the gain, so the required rate is divided by the
    tutoring multiplier before comparing against the tier rates.

    Returns:
        (tier, recommended self-study hours per week)
    """
    multiplier = config.multiplier(tutoring_sessions_per_week)
    required_weekly_gain = total_gap / effective_weeks
    self_study_gain = required_weekly_gain / multiplier

    tiers = list(IntensityTier)
    chosen = tiers[-1]
    for tier in tiers[:-1]:
        if self_study_gain <= config.profile(tier).weekly_rate:
            chosen = tier
            break

    logger.debug(
        "Need %.1f pts/week (%.1f from self-study at %.2fx tutoring) -> %s",
        required_weekly_gain, self_study_gain, multiplier, chosen.value,
    )
    return chosen, config.profile(chosen).weekly_hours
