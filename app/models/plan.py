"""Study plan models."""
from datetime import date
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class IntensityTier(str, Enum):
    """Self-study effort levels, cheapest first."""
    LIGHT = "light"
    MODERATE = "moderate"
    INTENSIVE = "intensive"
    VERY_INTENSIVE = "very_intensive"


class PlanType(str, Enum):
    """Duration archetypes that drive the phase template."""
    CRAM = "cram"              # 2-4 weeks
    SHORT = "short"            # 5-8 weeks
    STANDARD = "standard"      # 9-16 weeks
    EXTENDED = "extended"      # 17-32 weeks
    LONG_TERM = "long_term"    # 33+ weeks


class PhaseCategory(str, Enum):
    """What a phase is for; selects the tutoring topic set."""
    FOUNDATION = "foundation"
    SKILL_BUILDING = "skill_building"
    MASTERY = "mastery"
    APPLICATION = "application"
    FINAL_REVIEW = "final_review"


Difficulty = Literal["small", "moderate", "significant", "large", "very_large"]
RecommendationType = Literal["increase_intensity", "add_tutoring", "extend_timeline", "adjust_target"]
Priority = Literal["high", "medium", "low"]
ActivityType = Literal["diagnostic", "lesson", "practice", "review", "test", "rest", "tutoring"]


class StudyPlanInput(BaseModel):
    """Planner input. Ordering and date checks are done by the caller."""
    model_config = ConfigDict(frozen=True)

    test_date: date
    current_score: int = Field(..., ge=400, le=1600)
    target_score: int = Field(..., ge=400, le=1600)
    tutoring_sessions_per_week: int = Field(2, ge=1, le=4)


class Timeline(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_date: date
    test_date: date
    total_days: int
    total_weeks: int
    effective_weeks: int  # total_weeks minus the rest week, at least 1


class ScoreGap(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_gap: int
    is_achievable: bool
    difficulty: Difficulty


class Recommendation(BaseModel):
    """A way to close a projected shortfall."""
    model_config = ConfigDict(frozen=True)

    type: RecommendationType
    priority: Priority
    impact: float  # points
    message: str
    details: Optional[dict[str, Any]] = None


class FeasibilityAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_feasible: bool
    confidence: int = Field(..., ge=0, le=100)
    projected_improvement: float
    shortfall: Optional[float] = None
    recommendations: list[Recommendation] = Field(default_factory=list)


class ContentDistribution(BaseModel):
    """Percent of weekly self-study time per content type."""
    model_config = ConfigDict(frozen=True)

    learning: int = Field(..., ge=0, le=100)
    practice: int = Field(..., ge=0, le=100)
    testing: int = Field(..., ge=0, le=100)
    review: int = Field(..., ge=0, le=100)

    @model_validator(mode="after")
    def _validate_total(self) -> "ContentDistribution":
        total = self.learning + self.practice + self.testing + self.review
        if total != 100:
            raise ValueError(f"content distribution must sum to 100, got {total}")
        return self


class Phase(BaseModel):
    """A contiguous span of weeks with its own objectives and content mix."""
    model_config = ConfigDict(frozen=True)

    name: str
    category: PhaseCategory
    start_week: int = Field(..., ge=1)
    end_week: int = Field(..., ge=1)  # inclusive
    focus: str
    objectives: list[str] = Field(default_factory=list)
    weekly_hours: float
    content_distribution: ContentDistribution

    @model_validator(mode="after")
    def _validate_span(self) -> "Phase":
        if self.start_week > self.end_week:
            raise ValueError(
                f"phase {self.name!r} starts after it ends ({self.start_week} > {self.end_week})"
            )
        return self

    @property
    def week_count(self) -> int:
        return self.end_week - self.start_week + 1

    def contains(self, week: int) -> bool:
        return self.start_week <= week <= self.end_week


class Activity(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ActivityType
    name: str
    duration: int  # minutes
    description: str


class TutoringSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_number: int  # 1-based within the week
    duration: int  # minutes
    focus: list[str] = Field(default_factory=list)
    suggested_topics: list[str] = Field(default_factory=list)


class WeeklyPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    week_number: int
    phase: str
    focus: list[str] = Field(default_factory=list)
    activities: list[Activity] = Field(default_factory=list)
    tutoring_sessions: list[TutoringSession] = Field(default_factory=list)
    target_hours: float
    target_problems: int
    total_hours_with_tutoring: float


class TutoringSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    sessions_per_week: int
    total_sessions: int
    hours_per_week: float
    multiplier_applied: float


class StudyPlan(BaseModel):
    """Complete study plan for one test date and score goal."""
    model_config = ConfigDict(frozen=True)

    created_at: str  # ISO timestamp

    # Timeline
    start_date: date
    test_date: date
    total_weeks: int  # effective weeks

    # Goals
    starting_score: int
    target_score: int
    projected_score: int
    score_gap: ScoreGap

    # Structure
    plan_type: PlanType
    phases: list[Phase] = Field(default_factory=list)
    weekly_plans: list[WeeklyPlan] = Field(default_factory=list)

    feasibility: FeasibilityAssessment

    study_intensity: IntensityTier
    weekly_hours_recommended: float
    recommended_weeks: int  # typical prep length for this gap

    tutoring: TutoringSummary

    def get_week(self, week_number: int) -> Optional[WeeklyPlan]:
        """Return the weekly plan for a 1-based week number."""
        for week in self.weekly_plans:
            if week.week_number == week_number:
                return week
        return None

    def get_phase(self, name: str) -> Optional[Phase]:
        for phase in self.phases:
            if phase.name.lower() == name.lower():
                return phase
        return None
