"""Score gap classification and typical preparation length."""
from app.models.plan import ScoreGap
from app.models.planning_config import DEFAULT_CONFIG, PlanningConfig


def calculate_score_gap(
    current_score: int,
    target_score: int,
    config: PlanningConfig = DEFAULT_CONFIG,
) -> ScoreGap:
    """Compute the point gap (floored at 0) and its difficulty bucket."""
    total_gap = max(0, target_score - current_score)

    difficulty = "very_large"
    for upper, label in config.difficulty_bounds:
        if total_gap <= upper:
            difficulty = label
            break

    return ScoreGap(
        total_gap=total_gap,
        is_achievable=total_gap <= config.max_achievable_gap,
        difficulty=difficulty,
    )


def recommended_weeks(total_gap: int, config: PlanningConfig = DEFAULT_CONFIG) -> int:
    """Typical number of preparation weeks for a gap of this size."""
    for upper, weeks in config.recommended_weeks_table:
        if total_gap <= upper:
            return weeks
    return config.recommended_weeks_max
