"""Export study plans to JSON or Markdown."""
from pathlib import Path

from app.models.plan import StudyPlan

PLAN_TYPE_LABELS = {
    "cram": "Cram Plan",
    "short": "Short Plan",
    "standard": "Standard Plan",
    "extended": "Extended Plan",
    "long_term": "Long-Term Plan",
}


def export_to_json(plan: StudyPlan) -> str:
    return plan.model_dump_json(indent=2)


def export_to_markdown(plan: StudyPlan) -> str:
    """Render the plan as a Markdown document (summary, phases, weeks)."""
    label = PLAN_TYPE_LABELS.get(plan.plan_type.value, plan.plan_type.value)
    lines = [
        f"# SAT Study Plan: {label}",
        "",
        f"- Test date: {plan.test_date.isoformat()}",
        f"- Duration: {plan.total_weeks} weeks (typical for this gap: {plan.recommended_weeks})",
        f"- Scores: {plan.starting_score} -> {plan.target_score} "
        f"(gap {plan.score_gap.total_gap}, {plan.score_gap.difficulty.replace('_', ' ')})",
        f"- Projected score: {plan.projected_score}",
        f"- Self-study: {plan.weekly_hours_recommended:g} hrs/week "
        f"({plan.study_intensity.value.replace('_', ' ')})",
        f"- Tutoring: {plan.tutoring.sessions_per_week}x/week, "
        f"{plan.tutoring.total_sessions} sessions total",
        "",
        "## Feasibility",
        "",
    ]

    feasibility = plan.feasibility
    if feasibility.is_feasible:
        lines.append(f"On track ({feasibility.confidence}% confidence).")
    else:
        lines.append(
            f"Projected to fall {feasibility.shortfall:.0f} points short "
            f"({feasibility.confidence}% confidence)."
        )
        lines.append("")
        for rec in feasibility.recommendations:
            lines.append(f"- **{rec.priority}**: {rec.message}")

    lines += ["", "## Phases", ""]
    for phase in plan.phases:
        mix = phase.content_distribution
        lines += [
            f"### {phase.name} (weeks {phase.start_week}-{phase.end_week})",
            "",
            f"{phase.focus}. {phase.weekly_hours:g} hrs/week: "
            f"{mix.learning}% learning, {mix.practice}% practice, "
            f"{mix.testing}% testing, {mix.review}% review.",
            "",
        ]
        lines += [f"- {objective}" for objective in phase.objectives]
        lines.append("")

    lines += ["## Weekly Plan", ""]
    for week in plan.weekly_plans:
        lines.append(
            f"### Week {week.week_number}: {week.phase} "
            f"({week.total_hours_with_tutoring:g} hrs, ~{week.target_problems} problems)"
        )
        lines.append("")
        for item in week.focus:
            lines.append(f"- {item}")
        for activity in week.activities:
            lines.append(f"- {activity.name}: {activity.duration} min")
        for session in week.tutoring_sessions:
            topics = ", ".join(session.suggested_topics) or "open"
            lines.append(f"- Tutoring session {session.session_number} ({session.duration} min): {topics}")
        lines.append("")

    return "\n".join(lines)


def save_plan(plan: StudyPlan, out_path: Path) -> None:
    """Write the plan as Markdown for .md paths, JSON otherwise (temp file then replace)."""
    if out_path.suffix.lower() == ".md":
        content = export_to_markdown(plan)
    else:
        content = export_to_json(plan)

    out_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = out_path.with_suffix(out_path.suffix + ".tmp")
    temp_path.write_text(content)
    temp_path.replace(out_path)
