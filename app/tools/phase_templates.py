"""Phase templates for the five plan archetypes.

Each archetype has a pure span function (week boundaries only) and a fixed list
of phase contents. ``generate_phases`` zips the two into ``Phase`` records.
Span functions compute raw end weeks from fractions of the plan length, then
``clamp_spans`` turns them into contiguous, non-inverted spans covering
1..weeks. A phase left with an empty span (only possible below the
archetype's own week range) is dropped.
"""
import logging
from typing import Any, Callable

from app.models.plan import ContentDistribution, Phase, PhaseCategory, PlanType

logger = logging.getLogger(__name__)

Span = tuple[int, int]


def _floor_pct(weeks: int, pct: int) -> int:
    return weeks * pct // 100


def _ceil_pct(weeks: int, pct: int) -> int:
    return -(-weeks * pct // 100)


def clamp_spans(ends: list[int], weeks: int) -> list[Span | None]:
    """
    Turn raw end weeks into inclusive (start, end) spans.

    Each end is clamped into [previous end, weeks] and the last end is forced
    to ``weeks``. Phases whose span would be empty come back as None.
    """
    spans: list[Span | None] = []
    prev_end = 0
    for i, end in enumerate(ends):
        if i == len(ends) - 1:
            end = weeks
        else:
            end = min(max(end, prev_end), weeks)
        start = prev_end + 1
        if end < start:
            spans.append(None)
            continue
        spans.append((start, end))
        prev_end = end
    return spans


# ── Span functions ──────────────────────────────────────────────────────────

def cram_spans(weeks: int) -> list[Span | None]:
    if weeks <= 2:
        return clamp_spans([1, weeks], weeks)
    return clamp_spans([-(-weeks // 2), weeks], weeks)


def short_spans(weeks: int) -> list[Span | None]:
    phase1_end = _floor_pct(weeks, 30) or 1
    phase2_end = _floor_pct(weeks, 60) or 3
    phase3_end = _floor_pct(weeks, 85) or weeks - 1
    return clamp_spans([phase1_end, phase2_end, phase3_end, weeks], weeks)


def standard_spans(weeks: int) -> list[Span | None]:
    # Week 1 is always a standalone assessment week
    return clamp_spans(
        [1, _ceil_pct(weeks, 25), _ceil_pct(weeks, 55), _ceil_pct(weeks, 80), weeks],
        weeks,
    )


def extended_spans(weeks: int) -> list[Span | None]:
    ends = [_ceil_pct(weeks, pct) for pct in (15, 35, 55, 75, 90)]
    return clamp_spans(ends + [weeks], weeks)


def long_term_spans(weeks: int) -> list[Span | None]:
    quarter = weeks // 4
    return clamp_spans([quarter, quarter * 2, quarter * 3, weeks], weeks)


# ── Phase contents ──────────────────────────────────────────────────────────

def _content(
    name: str,
    category: PhaseCategory,
    focus: str,
    objectives: list[str],
    weekly_hours: float,
    mix: tuple[int, int, int, int],
) -> dict[str, Any]:
    learning, practice, testing, review = mix
    return {
        "name": name,
        "category": category,
        "focus": focus,
        "objectives": objectives,
        "weekly_hours": weekly_hours,
        "content_distribution": ContentDistribution(
            learning=learning, practice=practice, testing=testing, review=review
        ),
    }


CRAM_TWO_WEEK_PHASES = [
    _content(
        "Diagnostic + High-Impact Strategies",
        PhaseCategory.FINAL_REVIEW,
        "Identify weaknesses and learn key strategies",
        [
            "Complete full diagnostic test",
            "Learn top 5 math rules",
            "Learn top 5 R&W rules",
            "Master elimination technique",
        ],
        15,
        (40, 30, 20, 10),
    ),
    _content(
        "Intensive Practice + Final Prep",
        PhaseCategory.FINAL_REVIEW,
        "Targeted practice and test simulation",
        [
            "Complete 1 full practice test",
            "Focus on top 3 weak areas",
            "Pacing drills",
            "Light review before test day",
        ],
        12,
        (20, 40, 30, 10),
    ),
]

CRAM_PHASES = [
    _content(
        "Assessment + Foundation",
        PhaseCategory.FOUNDATION,
        "Diagnostic and core content mastery",
        [
            "Complete diagnostic test",
            "Master foundational math concepts",
            "Master grammar rules",
            "Learn SAT strategies",
        ],
        12,
        (40, 30, 15, 15),
    ),
    _content(
        "Polish + Peak",
        PhaseCategory.FINAL_REVIEW,
        "Practice tests and final preparation",
        [
            "Complete 2 full practice tests",
            "Target weak areas",
            "Time management mastery",
            "Pre-test preparation",
        ],
        10,
        (15, 35, 40, 10),
    ),
]

SHORT_PHASES = [
    _content(
        "Foundation",
        PhaseCategory.FOUNDATION,
        "Diagnosis and core content",
        [
            "Complete full diagnostic test",
            "Master algebra basics",
            "Master grammar fundamentals",
            "Build reading comprehension strategies",
        ],
        10,
        (40, 30, 15, 15),
    ),
    _content(
        "Building",
        PhaseCategory.FINAL_REVIEW,
        "Skill development",
        [
            "Intermediate math topics",
            "Advanced grammar",
            "Evidence-based reading",
            "Strategy application",
        ],
        12,
        (30, 40, 15, 15),
    ),
    _content(
        "Practice",
        PhaseCategory.FINAL_REVIEW,
        "Application and testing",
        [
            "Full practice tests",
            "Error analysis",
            "Pacing drills",
            "Weak area targeting",
        ],
        12,
        (20, 40, 30, 10),
    ),
    _content(
        "Peak",
        PhaseCategory.FINAL_REVIEW,
        "Final preparation",
        [
            "Light review",
            "Final practice test",
            "Confidence building",
            "Rest before test day",
        ],
        8,
        (10, 30, 40, 20),
    ),
]

STANDARD_PHASES = [
    _content(
        "Assessment",
        PhaseCategory.FOUNDATION,
        "Comprehensive diagnostic and planning",
        [
            "Full proctored diagnostic test",
            "Detailed score analysis",
            "Learning style assessment",
            "Goal setting",
        ],
        8,
        (20, 20, 50, 10),
    ),
    _content(
        "Foundation",
        PhaseCategory.FOUNDATION,
        "Core content mastery",
        [
            "Algebra fundamentals",
            "Grammar rules review",
            "Reading comprehension basics",
            "Question type identification",
        ],
        10,
        (40, 35, 10, 15),
    ),
    _content(
        "Development",
        PhaseCategory.SKILL_BUILDING,
        "Full content coverage",
        [
            "Advanced math topics",
            "Complex passages",
            "Rhetoric and synthesis",
            "Strategy development",
        ],
        12,
        (35, 40, 15, 10),
    ),
    _content(
        "Strategy",
        PhaseCategory.APPLICATION,
        "Strategy and application",
        [
            "Test-taking strategies",
            "Time management",
            "Elimination techniques",
            "Calculator/Desmos mastery",
        ],
        12,
        (25, 40, 25, 10),
    ),
    _content(
        "Peak",
        PhaseCategory.FINAL_REVIEW,
        "Testing and final prep",
        [
            "Multiple full practice tests",
            "Error pattern analysis",
            "Confidence building",
            "Pre-test routine",
        ],
        10,
        (10, 35, 45, 10),
    ),
]

EXTENDED_PHASES = [
    _content(
        "Assessment & Foundation",
        PhaseCategory.FOUNDATION,
        "Comprehensive diagnosis and foundation building",
        [
            "Full diagnostic testing",
            "Learning style determination",
            "Core Math: Numbers, Algebra I",
            "Core R&W: Grammar, Basic Reading",
        ],
        8,
        (45, 30, 15, 10),
    ),
    _content(
        "Core Skill Building",
        PhaseCategory.SKILL_BUILDING,
        "Content breadth",
        [
            "Math: Algebra II, Geometry Basics",
            "R&W: Evidence, Inference, Structure",
            "Strategy: Basic elimination",
            "Regular practice tests",
        ],
        10,
        (35, 40, 15, 10),
    ),
    _content(
        "Intermediate Mastery",
        PhaseCategory.MASTERY,
        "Content depth",
        [
            "Advanced Algebra, Geometry",
            "Rhetoric, Complex Passages",
            "Pacing, Bookmarking",
            "Full practice tests",
        ],
        12,
        (30, 40, 20, 10),
    ),
    _content(
        "Advanced Content",
        PhaseCategory.MASTERY,
        "Complete coverage",
        [
            "Trigonometry, Advanced Functions",
            "Synthesis, Complex Grammar",
            "Desmos mastery",
            "Regular testing",
        ],
        12,
        (25, 40, 25, 10),
    ),
    _content(
        "Intensive Application",
        PhaseCategory.APPLICATION,
        "Application and practice",
        [
            "Mixed content review",
            "Heavy practice emphasis",
            "Error pattern remediation",
            "Multiple full tests",
        ],
        14,
        (15, 45, 30, 10),
    ),
    _content(
        "Peak Performance",
        PhaseCategory.FINAL_REVIEW,
        "Peak readiness",
        [
            "Strategic review",
            "High-frequency content focus",
            "Final practice tests",
            "Pre-test preparation",
        ],
        10,
        (10, 30, 45, 15),
    ),
]

LONG_TERM_PHASES = [
    _content(
        "Academic Foundation",
        PhaseCategory.FOUNDATION,
        "Fill academic gaps and build learning habits",
        [
            "Pre-algebra review if needed",
            "Basic grammar intensive",
            "Reading fluency development",
            "Study skills training",
        ],
        6,
        (50, 30, 10, 10),
    ),
    _content(
        "Core SAT Content",
        PhaseCategory.FINAL_REVIEW,
        "Complete SAT curriculum",
        [
            "All math domains",
            "All R&W domains",
            "Strategy introduction",
            "Regular practice tests",
        ],
        8,
        (40, 35, 15, 10),
    ),
    _content(
        "Advanced Mastery",
        PhaseCategory.MASTERY,
        "Deep skill development",
        [
            "Advanced problems",
            "Strategy mastery",
            "Speed building",
            "Frequent testing",
        ],
        12,
        (25, 40, 25, 10),
    ),
    _content(
        "Peak Performance",
        PhaseCategory.FINAL_REVIEW,
        "Test-day readiness",
        [
            "Intensive practice",
            "Simulated testing",
            "Final content review",
            "Pre-test preparation",
        ],
        14,
        (10, 35, 45, 10),
    ),
]


# ── Templates ───────────────────────────────────────────────────────────────

def _build(spans: list[Span | None], contents: list[dict[str, Any]]) -> list[Phase]:
    phases = []
    for span, content in zip(spans, contents):
        if span is None:
            logger.debug("Dropping phase %r: no weeks left for it", content["name"])
            continue
        start_week, end_week = span
        phases.append(Phase(start_week=start_week, end_week=end_week, **content))
    return phases


def cram_phases(weeks: int) -> list[Phase]:
    contents = CRAM_TWO_WEEK_PHASES if weeks <= 2 else CRAM_PHASES
    return _build(cram_spans(weeks), contents)


def short_phases(weeks: int) -> list[Phase]:
    return _build(short_spans(weeks), SHORT_PHASES)


def standard_phases(weeks: int) -> list[Phase]:
    return _build(standard_spans(weeks), STANDARD_PHASES)


def extended_phases(weeks: int) -> list[Phase]:
    return _build(extended_spans(weeks), EXTENDED_PHASES)


def long_term_phases(weeks: int) -> list[Phase]:
    return _build(long_term_spans(weeks), LONG_TERM_PHASES)


PHASE_TEMPLATES: dict[PlanType, Callable[[int], list[Phase]]] = {
    PlanType.CRAM: cram_phases,
    PlanType.SHORT: short_phases,
    PlanType.STANDARD: standard_phases,
    PlanType.EXTENDED: extended_phases,
    PlanType.LONG_TERM: long_term_phases,
}


def generate_phases(plan_type: PlanType, weeks: int) -> list[Phase]:
    """
    Expand a plan archetype into its phases for a plan of ``weeks`` weeks.

    Raises:
        RuntimeError: if the phases do not tile 1..weeks (a template bug)
    """
    template = PHASE_TEMPLATES.get(plan_type, standard_phases)
    phases = template(weeks)
    _check_coverage(phases, weeks)
    logger.debug(
        "%s plan, %d weeks: %s",
        plan_type.value, weeks,
        ", ".join(f"{p.name} {p.start_week}-{p.end_week}" for p in phases),
    )
    return phases


def _check_coverage(phases: list[Phase], weeks: int) -> None:
    if not phases:
        raise RuntimeError(f"No phases generated for a {weeks}-week plan")
    if phases[0].start_week != 1:
        raise RuntimeError(f"First phase starts at week {phases[0].start_week}, not 1")
    for prev, nxt in zip(phases, phases[1:]):
        if prev.end_week + 1 != nxt.start_week:
            raise RuntimeError(
                f"Phases {prev.name!r} and {nxt.name!r} are not contiguous "
                f"({prev.end_week} -> {nxt.start_week})"
            )
    if phases[-1].end_week != weeks:
        raise RuntimeError(f"Last phase ends at week {phases[-1].end_week}, plan has {weeks}")
