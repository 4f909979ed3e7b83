"""CLI to generate an SAT study plan from a test date and score goal."""
import argparse
import logging
import os
import sys
from datetime import date
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from app.models.plan import StudyPlan
from app.tools.plan_export import PLAN_TYPE_LABELS, export_to_json, export_to_markdown, save_plan
from app.tools.study_plan import generate_study_plan
from app.tools.validation import PlanInputError, validate_plan_request


console = Console()
err_console = Console(stderr=True)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a week-by-week SAT study plan"
    )
    parser.add_argument(
        "--test-date",
        type=_parse_date,
        required=True,
        help="SAT test date (YYYY-MM-DD)"
    )
    parser.add_argument(
        "--current",
        type=int,
        required=True,
        help="Current SAT score (400-1600)"
    )
    parser.add_argument(
        "--target",
        type=int,
        required=True,
        help="Target SAT score (400-1600)"
    )
    parser.add_argument(
        "--tutoring",
        type=int,
        default=2,
        choices=[1, 2, 3, 4],
        help="Tutoring sessions per week (default: 2)"
    )
    parser.add_argument(
        "--today",
        type=_parse_date,
        default=None,
        help="Plan start date (default: today)"
    )
    parser.add_argument(
        "--format",
        choices=["table", "json", "markdown"],
        default="table",
        help="Output format for stdout"
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Also write the plan to this file (.md for Markdown, otherwise JSON)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging (shows every planning decision)"
    )
    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.debug:
        log_level = logging.DEBUG
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif args.verbose:
        log_level = logging.INFO
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        log_level = logging.getLevelName(os.getenv("STUDY_PLAN_LOG_LEVEL", "WARNING").upper())
        if not isinstance(log_level, int):
            log_level = logging.WARNING
        log_format = "%(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = build_parser().parse_args(argv)
    _configure_logging(args)

    try:
        plan_input = validate_plan_request(
            test_date=args.test_date,
            current_score=args.current,
            target_score=args.target,
            tutoring_sessions_per_week=args.tutoring,
            today=args.today,
        )
    except PlanInputError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    plan = generate_study_plan(plan_input, today=args.today)

    if args.format == "json":
        print(export_to_json(plan))
    elif args.format == "markdown":
        print(export_to_markdown(plan))
    else:
        _print_plan(plan)

    if args.output:
        save_plan(plan, args.output)
        err_console.print(f"\n✓ Saved plan to [yellow]{args.output}[/yellow]")


def _print_plan(plan: StudyPlan) -> None:
    """Render the plan summary, phases and weeks as rich tables."""
    label = PLAN_TYPE_LABELS.get(plan.plan_type.value, plan.plan_type.value)
    console.print(f"\n[bold cyan]{label}[/bold cyan] for test on {plan.test_date.isoformat()}\n")

    summary = Table(title="Plan Summary")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Value", style="magenta", justify="right")
    summary.add_row("Duration", f"{plan.total_weeks} weeks")
    summary.add_row("Typical for this gap", f"{plan.recommended_weeks} weeks")
    summary.add_row("Score gap", f"{plan.score_gap.total_gap} ({plan.score_gap.difficulty})")
    summary.add_row("Projected score", str(plan.projected_score))
    summary.add_row("Self-study", f"{plan.weekly_hours_recommended:g} hrs/wk ({plan.study_intensity.value})")
    summary.add_row("Tutoring", f"{plan.tutoring.sessions_per_week}x/wk, {plan.tutoring.total_sessions} total")
    summary.add_row(
        "Total time",
        f"{plan.weekly_hours_recommended + plan.tutoring.hours_per_week:.1f} hrs/wk",
    )
    summary.add_row("Confidence", f"{plan.feasibility.confidence}%")
    console.print(summary)

    feasibility = plan.feasibility
    if feasibility.is_feasible:
        console.print("\n[green]✓ Goal is on track[/green]")
    else:
        console.print(
            f"\n[yellow]⚠ Projected shortfall: {feasibility.shortfall:.0f} points[/yellow]"
        )
        for rec in feasibility.recommendations:
            console.print(f"  • {rec.priority.upper()}: {rec.message}")

    phases = Table(title="Phases")
    phases.add_column("Phase", style="cyan")
    phases.add_column("Weeks", justify="right")
    phases.add_column("Hrs/wk", justify="right")
    phases.add_column("Learn/Practice/Test/Review")
    for phase in plan.phases:
        mix = phase.content_distribution
        phases.add_row(
            phase.name,
            f"{phase.start_week}-{phase.end_week}",
            f"{phase.weekly_hours:g}",
            f"{mix.learning}/{mix.practice}/{mix.testing}/{mix.review}",
        )
    console.print()
    console.print(phases)

    weeks = Table(title="Weekly Plan")
    weeks.add_column("Week", justify="right")
    weeks.add_column("Phase", style="cyan")
    weeks.add_column("Focus")
    weeks.add_column("Hours", justify="right")
    weeks.add_column("Problems", justify="right")
    for week in plan.weekly_plans:
        weeks.add_row(
            str(week.week_number),
            week.phase,
            "; ".join(week.focus),
            f"{week.total_hours_with_tutoring:g}",
            str(week.target_problems),
        )
    console.print()
    console.print(weeks)


if __name__ == "__main__":
    main()
