"""Fixed planning tables (intensity rates, tutoring multipliers, plan bounds).

Built once at import as ``DEFAULT_CONFIG`` and passed to every planning stage.
Tests and callers can construct their own ``PlanningConfig`` to try other tables.
"""
from pydantic import BaseModel, ConfigDict, Field

from app.models.plan import IntensityTier, PlanType


class IntensityProfile(BaseModel):
    """Gain rate, improvement cap and hour figure for one intensity tier."""
    model_config = ConfigDict(frozen=True)

    weekly_rate: float  # base points gained per week
    max_improvement: float  # diminishing-returns cap on total gain
    weekly_hours: float  # headline self-study hours/week
    hours_range: str  # e.g. "5-8 hours/week"


class PlanningConfig(BaseModel):
    """Read-only lookup tables shared by all planning stages."""
    model_config = ConfigDict(frozen=True)

    intensity_profiles: dict[IntensityTier, IntensityProfile]
    tutoring_multipliers: dict[int, float]
    tutoring_session_minutes: int = 60
    problems_per_hour: int = 8
    rest_buffer_weeks: int = 1

    min_score: int = 400
    max_score: int = 1600
    max_achievable_gap: int = 500

    # (inclusive upper bound, label), ascending; anything larger is very_large
    difficulty_bounds: list[tuple[int, str]] = Field(default_factory=lambda: [
        (100, "small"),
        (150, "moderate"),
        (250, "significant"),
        (350, "large"),
    ])

    # (inclusive upper bound in effective weeks, plan type); anything larger is long_term
    plan_type_bounds: list[tuple[int, PlanType]] = Field(default_factory=lambda: [
        (4, PlanType.CRAM),
        (8, PlanType.SHORT),
        (16, PlanType.STANDARD),
        (32, PlanType.EXTENDED),
    ])

    # (inclusive upper bound on gap, typical prep weeks); anything larger gets 36
    recommended_weeks_table: list[tuple[int, int]] = Field(default_factory=lambda: [
        (50, 4),
        (100, 6),
        (150, 8),
        (200, 12),
        (300, 16),
        (400, 24),
    ])
    recommended_weeks_max: int = 36

    def profile(self, tier: IntensityTier) -> IntensityProfile:
        return self.intensity_profiles[tier]

    def multiplier(self, sessions_per_week: int) -> float:
        return self.tutoring_multipliers[sessions_per_week]

    @property
    def max_tutoring_sessions(self) -> int:
        return max(self.tutoring_multipliers)


DEFAULT_CONFIG = PlanningConfig(
    intensity_profiles={
        IntensityTier.LIGHT: IntensityProfile(
            weekly_rate=8, max_improvement=150, weekly_hours=3, hours_range="2-4 hours/week"
        ),
        IntensityTier.MODERATE: IntensityProfile(
            weekly_rate=15, max_improvement=250, weekly_hours=6.5, hours_range="5-8 hours/week"
        ),
        IntensityTier.INTENSIVE: IntensityProfile(
            weekly_rate=22, max_improvement=350, weekly_hours=10.5, hours_range="9-12 hours/week"
        ),
        IntensityTier.VERY_INTENSIVE: IntensityProfile(
            weekly_rate=30, max_improvement=450, weekly_hours=16.5, hours_range="13-20 hours/week"
        ),
    },
    tutoring_multipliers={
        1: 1.20,
        2: 1.30,
        3: 1.35,
        4: 1.40,
    },
)
