#!/usr/bin/env python3
"""
ride-planner CLI.

Periodized cycling training plans from a rider profile.

Usage:
    ride-planner generate profile.json              # Plan with the LLM coach
    ride-planner generate profile.json --offline    # Rule-based plan only
    ride-planner generate profile.json --json --output plan.json
    ride-planner zones --age 30                     # Heart rate zones
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich import box

from .agents.advisor_agent import LLMPlanAdvisor, OfflineAdvisor
from .config import get_settings
from .exceptions import ProfileValidationError
from .metrics.zones import calculate_hr_zones_max_hr, estimate_max_hr
from .models.plans import TrainingPlan, WeekType
from .models.profile import parse_profile
from .models.zones import TrainingZoneSet
from .services.plan_service import generate_plan_sync
from .utils.log_sanitizer import install_log_sanitizer

console = Console()
err_console = Console(stderr=True)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_INPUT = 2


def get_week_type_color(week_type: WeekType) -> str:
    """Get rich color for a week type."""
    colors = {
        WeekType.BASE: "blue",
        WeekType.BUILD: "yellow",
        WeekType.PEAK: "red",
        WeekType.RECOVERY: "green",
        WeekType.TAPER: "magenta",
    }
    return colors.get(week_type, "white")


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    install_log_sanitizer()


def zones_table(zones: TrainingZoneSet, title: str = "Heart Rate Zones") -> Table:
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Zone", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Range", style="green")

    for number, (name, band) in enumerate(zones.bands(), start=1):
        table.add_row(str(number), name.title(), f"{band.min}-{band.max} bpm")
    return table


def print_validation_errors(error: ProfileValidationError) -> None:
    err_console.print(f"[red]{error.message}[/red]")
    table = Table(box=box.SIMPLE)
    table.add_column("Field", style="cyan")
    table.add_column("Problem", style="white")
    for item in error.errors:
        table.add_row(item["field"], item["message"])
    err_console.print(table)


def print_plan(plan: TrainingPlan) -> None:
    """Render a plan summary."""
    source = "AI-assisted" if plan.ai_generated else "rule-based"
    structure = plan.weekly_structure

    summary = f"""
[cyan]Duration:[/cyan]     {plan.duration.weeks} weeks ({plan.duration.start_date} to {plan.duration.end_date})
[cyan]Approach:[/cyan]     {plan.duration.philosophy}
[cyan]Weekly volume:[/cyan] {structure.total_hours} h, {structure.total_distance} km, {structure.number_of_workouts} workouts
[cyan]Source:[/cyan]       {source}
"""
    console.print(Panel(summary, title=plan.plan_name, box=box.ROUNDED))

    console.print(zones_table(plan.zones))

    workouts_table = Table(title="Workouts", box=box.ROUNDED)
    workouts_table.add_column("Day", style="cyan")
    workouts_table.add_column("Workout", style="white")
    workouts_table.add_column("Type")
    workouts_table.add_column("Min", justify="right")
    workouts_table.add_column("TSS", justify="right")
    for workout in plan.workouts:
        workouts_table.add_row(
            workout.day_of_week.value.title(),
            workout.name,
            workout.workout_type.value,
            str(workout.duration_min),
            str(workout.intensity.tss),
        )
    console.print(workouts_table)

    weeks_table = Table(title="Weeks", box=box.ROUNDED)
    weeks_table.add_column("Week", justify="right", style="cyan")
    weeks_table.add_column("Type")
    weeks_table.add_column("Load", justify="right")
    weeks_table.add_column("Phase")
    for week in plan.weeks:
        color = get_week_type_color(week.week_type)
        weeks_table.add_row(
            str(week.week_number),
            f"[{color}]{week.week_type.value}[/{color}]",
            str(week.total_load),
            week.phase.guidance if week.phase else "",
        )
    console.print(weeks_table)

    insights = plan.ai_insights
    console.print()
    console.print("[bold]Focus areas:[/bold] " + ", ".join(insights.focus_areas))
    console.print("[bold]Progression:[/bold] " + insights.progression_strategy)


def cmd_generate(args) -> int:
    """Generate a plan from a profile file."""
    path = Path(args.profile)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        err_console.print(f"[red]Cannot read profile {path}: {e}[/red]")
        return EXIT_ERROR
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        err_console.print(f"[red]Profile {path} is not valid UTF-8 JSON: {e}[/red]")
        return EXIT_INVALID_INPUT

    try:
        profile = parse_profile(raw)
    except ProfileValidationError as e:
        print_validation_errors(e)
        return EXIT_INVALID_INPUT

    advisor = OfflineAdvisor() if args.offline else LLMPlanAdvisor()
    plan = generate_plan_sync(profile, advisor, start_date=args.start_date)

    if args.output:
        Path(args.output).write_text(plan.to_json(), encoding="utf-8")
        console.print(f"[green]Plan written to {args.output}[/green]")

    if args.json:
        if not args.output:
            print(plan.to_json())
    else:
        print_plan(plan)

    return EXIT_OK


def cmd_zones(args) -> int:
    """Show heart rate zones for an age."""
    if not 13 <= args.age <= 100:
        err_console.print("[red]Age must be between 13 and 100[/red]")
        return EXIT_INVALID_INPUT

    max_hr = estimate_max_hr(args.age)
    zones = calculate_hr_zones_max_hr(max_hr)
    console.print(zones_table(zones, title=f"Heart Rate Zones (max HR {max_hr})"))
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ride-planner",
        description="ride-planner - periodized cycling training plans",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  ride-planner generate profile.json --offline
  ride-planner generate profile.json --json --output plan.json
  ride-planner zones --age 30
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    generate_p = subparsers.add_parser("generate", help="Generate a training plan")
    generate_p.add_argument("profile", help="Path to a rider profile JSON file")
    generate_p.add_argument(
        "--offline",
        action="store_true",
        help="Skip the LLM coach and build the plan from rules only",
    )
    generate_p.add_argument("--json", action="store_true", help="Print the plan as JSON")
    generate_p.add_argument("--output", help="Write the plan JSON to this file")
    generate_p.add_argument(
        "--start-date",
        type=date.fromisoformat,
        default=None,
        help="First day of the plan (YYYY-MM-DD, default today)",
    )

    zones_p = subparsers.add_parser("zones", help="Show heart rate zones")
    zones_p.add_argument("--age", type=int, required=True, help="Age in years")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(get_settings().log_level)

    if args.command == "generate":
        return cmd_generate(args)
    elif args.command == "zones":
        return cmd_zones(args)
    else:
        parser.print_help()
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
