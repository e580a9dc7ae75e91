"""CLI to manage study goals and subjects."""
import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from studyai.config import get_settings
from studyai.tools.dates import format_local_date
from studyai.tools.plan_store import StudyPlanStore
from studyai.tools.storage import JsonFileStore


console = Console()


def configure_logging(verbose: bool, debug: bool) -> None:
    if debug:
        log_level = logging.DEBUG
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    elif verbose:
        log_level = logging.INFO
        log_format = "%(asctime)s - %(levelname)s - %(message)s"
    else:
        log_level = logging.WARNING
        log_format = "%(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Manage your study goals and subjects")
    parser.add_argument(
        "--storage",
        type=Path,
        default=settings.storage_path,
        help="Path to the local storage file"
    )
    parser.add_argument(
        "--user-id",
        type=str,
        default=settings.user_id,
        help="User the study plan belongs to"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    sub = parser.add_subparsers(dest="command")
    sub.add_parser("show", help="Show goals, subjects and progress")

    add_goal = sub.add_parser("add-goal", help="Add a study goal")
    add_goal.add_argument("description", help="What you want to achieve")
    add_goal.add_argument("--target-date", help="Target date (YYYY-MM-DD)")

    toggle = sub.add_parser("toggle-goal", help="Mark a goal done or not done")
    toggle.add_argument("goal_id")

    delete = sub.add_parser("delete-goal", help="Delete a goal")
    delete.add_argument("goal_id")

    add_subject = sub.add_parser("add-subject", help="Add a subject")
    add_subject.add_argument("name")

    delete_subject = sub.add_parser("delete-subject", help="Remove a subject")
    delete_subject.add_argument("name")

    return parser


def render_plan(store: StudyPlanStore) -> None:
    """Print goals, subjects and progress."""
    plan = store.plan
    console.print(f"\n[bold cyan]📚 Study Planner[/bold cyan] - [bold]{plan.user_id}[/bold]\n")

    if plan.goals:
        table = Table(title="Your Study Goals")
        table.add_column("ID", style="dim")
        table.add_column("Done", justify="center")
        table.add_column("Goal")
        table.add_column("Target", style="magenta")
        for goal in plan.goals:
            table.add_row(
                goal.id,
                "[green]✓[/green]" if goal.completed else "",
                f"[strike]{goal.description}[/strike]" if goal.completed else goal.description,
                format_local_date(goal.target_date),
            )
        console.print(table)
    else:
        console.print("[italic]No goals set yet. Start adding some![/italic]")

    if plan.subjects:
        console.print(f"\n[bold]Subjects:[/bold] {', '.join(plan.subjects)}")
    else:
        console.print("\n[italic]No subjects added yet.[/italic]")

    progress = store.progress()
    console.print(
        f"\n[bold]Progress:[/bold] {progress['completed']} out of {progress['total']} goals completed "
        f"({progress['percent']:.0f}%)"
    )
    console.print(f"[dim]Last updated: {plan.last_updated}[/dim]")


def main(argv=None):
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.debug)

    store = StudyPlanStore(JsonFileStore(args.storage), user_id=args.user_id)
    store.load()
    if store.load_error:
        console.print(f"[yellow]⚠ {store.load_error}[/yellow]")

    command = args.command or "show"

    if command == "add-goal":
        if not args.description.strip():
            console.print("[red]✗ Goal description must not be empty[/red]")
            sys.exit(1)
        _, goal = store.create_goal(args.description, args.target_date)
        console.print(f"✓ [green]Added goal[/green] {goal.description} [dim]({goal.id})[/dim]")
    elif command == "toggle-goal":
        goal = store.toggle_goal(args.goal_id).goal_by_id(args.goal_id)
        if goal is None:
            console.print(f"[red]✗ Goal not found: {args.goal_id}[/red]")
            sys.exit(1)
        state = "completed" if goal.completed else "not completed"
        console.print(f"✓ Marked [yellow]{goal.description}[/yellow] as {state}")
    elif command == "delete-goal":
        _, goal = store.pop_goal(args.goal_id)
        if goal is None:
            console.print(f"[red]✗ Goal not found: {args.goal_id}[/red]")
            sys.exit(1)
        console.print("✓ Goal deleted")
    elif command == "add-subject":
        if not args.name.strip():
            console.print("[red]✗ Subject name must not be empty[/red]")
            sys.exit(1)
        store.add_subject(args.name)
        console.print(f"✓ [green]Added subject[/green] {args.name.strip()}")
    elif command == "delete-subject":
        _, found = store.discard_subject(args.name)
        if not found:
            console.print(f"[red]✗ Subject not found: {args.name}[/red]")
            sys.exit(1)
        console.print(f"✓ Removed subject {args.name}")
    else:
        render_plan(store)

    if store.save_error:
        console.print(f"[red]✗ {store.save_error}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
