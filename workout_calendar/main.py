"""
Main entry point for the workout calendar.

Provides a CLI for viewing the month grid, managing the workouts of
a day, and exporting or plotting a month.
"""

import sys
import logging
import argparse
from datetime import date, datetime, time
from pathlib import Path
from typing import List, Optional

from .calendar_grid import CalendarGridBuilder
from .config import AppConfig
from .errors import NotFoundError, PersistenceError, ValidationError
from .exporter import CalendarExporter
from .models import MonthGrid, Workout
from .store import WorkoutStore
from .views import DayEditor, MonthView


logger = logging.getLogger(__name__)

MUTATING_ACTIONS = {"add": "save", "edit": "save", "delete": "delete"}


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a date like 2024-03-15, got {value!r}")


def _parse_month(value: str) -> date:
    try:
        return datetime.strptime(value, "%Y-%m").date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a month like 2024-03, got {value!r}")


def _parse_time(value: str) -> time:
    try:
        return time.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a time like 18:30, got {value!r}")


def format_month(grid: MonthGrid) -> str:
    """
    Render a month grid as text.

    Days with workouts are marked with one '*' per workout, up to two.
    """
    lines = [grid.title.center(7 * 5).rstrip()]
    lines.append("".join(f"{h:>3}  " for h in grid.weekday_headers).rstrip())

    for row in grid.rows():
        parts = []
        for cell in row:
            if cell is None or cell.date is None:
                parts.append("     ")
            else:
                marks = "*" * min(cell.workout_count, 2)
                parts.append(f"{cell.date.day:>3}{marks:<2}")
        lines.append("".join(parts).rstrip())

    lines.append("")
    lines.append(f"You have done {grid.weekly_count} workouts this week")
    return "\n".join(lines)


def format_workout(workout: Workout) -> str:
    """One-line summary of a workout with display defaults applied."""
    return (
        f"[{workout.id}] {workout.date:%H:%M} {workout.display_title} - "
        f"{workout.display_description} (rating {workout.rating})"
    )


def print_day(editor: DayEditor) -> None:
    """Print the workouts logged on the editor's day."""
    print(editor.heading)
    if not editor.workouts:
        print("  No workouts logged")
        return

    print("Previous Workouts:")
    for workout in editor.workouts:
        print(f"  {format_workout(workout)}")


def _month_view(args: argparse.Namespace, store: WorkoutStore, builder: CalendarGridBuilder) -> MonthView:
    return MonthView(store, builder, getattr(args, "month", None))


def cmd_month(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """Show the month grid."""
    builder = CalendarGridBuilder(config.calendar)
    grid = _month_view(args, store, builder).render()
    print(format_month(grid))


def cmd_day(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """List workouts for a day."""
    builder = CalendarGridBuilder(config.calendar)
    editor = MonthView(store, builder, args.date).select_day(args.date)
    print_day(editor)


def cmd_add(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """Add a workout to a day."""
    builder = CalendarGridBuilder(config.calendar)
    editor = MonthView(store, builder, args.date).select_day(args.date)

    editor.title = args.title or ""
    editor.description = args.description or ""
    editor.rating = args.rating
    if args.time is not None:
        editor.time_of_day = args.time

    saved = editor.save()
    print(f"Saved {format_workout(saved)}")
    print_day(editor)


def cmd_edit(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """Edit an existing workout."""
    builder = CalendarGridBuilder(config.calendar)
    workout = store.get(args.id)

    editor = MonthView(store, builder).select_day(args.date or workout.date)
    editor.begin_edit(workout)

    if args.title is not None:
        editor.title = args.title
    if args.description is not None:
        editor.description = args.description
    if args.rating is not None:
        editor.rating = args.rating
    if args.time is not None:
        editor.time_of_day = args.time

    saved = editor.save()
    print(f"Updated {format_workout(saved)}")


def cmd_delete(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """Delete a workout."""
    builder = CalendarGridBuilder(config.calendar)
    workout = store.get(args.id)

    editor = MonthView(store, builder).select_day(workout.date)
    editor.delete(workout)
    print(f"Deleted workout {workout.id}")
    print_day(editor)


def cmd_week(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """Show the number of workouts this week."""
    builder = CalendarGridBuilder(config.calendar)
    start, end = builder.week_bounds()
    count = builder.count_workouts_in_current_week(store.list_all())
    print(f"Week {start:%b %d} - {end:%b %d, %Y}")
    print(f"You have done {count} workouts this week")


def cmd_export(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """Export a month to JSON."""
    builder = CalendarGridBuilder(config.calendar)
    grid = _month_view(args, store, builder).render()

    output_dir = Path(args.output) if args.output else config.paths.output_dir
    logger.info(f"Exporting to {output_dir}")
    CalendarExporter(output_dir).export_all(grid, store.list_all())


def cmd_plot(args: argparse.Namespace, config: AppConfig, store: WorkoutStore) -> None:
    """Plot the month heatmap and weekly counts."""
    # matplotlib is slow to import, only load it for this command
    from .visualizations import plot_month_heatmap, plot_weekly_counts

    builder = CalendarGridBuilder(config.calendar)
    grid = _month_view(args, store, builder).render()

    output_dir = Path(args.output) if args.output else config.paths.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    show = not args.no_show
    stem = f"{grid.month:%Y_%m}"
    logger.info("Generating calendar visualizations...")
    plot_month_heatmap(grid, output_dir / f"calendar_{stem}.png", show)
    plot_weekly_counts(grid, output_dir / f"weekly_{stem}.png", show)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(description="Workout calendar")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # month command
    month_parser = subparsers.add_parser("month", help="Show the month grid")
    month_parser.add_argument("--month", "-m", type=_parse_month, help="Month as YYYY-MM (default: this month)")

    # day command
    day_parser = subparsers.add_parser("day", help="List workouts for a day")
    day_parser.add_argument("date", type=_parse_date, help="Day as YYYY-MM-DD")

    # add command
    add_parser = subparsers.add_parser("add", help="Add a workout")
    add_parser.add_argument("date", type=_parse_date, help="Day as YYYY-MM-DD")
    add_parser.add_argument("--title", "-t", help="Workout title")
    add_parser.add_argument("--description", "-d", help="Workout description")
    add_parser.add_argument("--rating", "-r", type=int, default=1, help="Rating from 1 to 5")
    add_parser.add_argument("--time", type=_parse_time, help="Time of day as HH:MM")

    # edit command
    edit_parser = subparsers.add_parser("edit", help="Edit a workout")
    edit_parser.add_argument("id", help="Workout id")
    edit_parser.add_argument("--date", type=_parse_date, help="Move to another day")
    edit_parser.add_argument("--title", "-t", help="Workout title")
    edit_parser.add_argument("--description", "-d", help="Workout description")
    edit_parser.add_argument("--rating", "-r", type=int, help="Rating from 1 to 5")
    edit_parser.add_argument("--time", type=_parse_time, help="Time of day as HH:MM")

    # delete command
    delete_parser = subparsers.add_parser("delete", help="Delete a workout")
    delete_parser.add_argument("id", help="Workout id")

    # week command
    subparsers.add_parser("week", help="Show workouts this week")

    # export command
    export_parser = subparsers.add_parser("export", help="Export a month to JSON")
    export_parser.add_argument("--month", "-m", type=_parse_month, help="Month as YYYY-MM")
    export_parser.add_argument("--output", "-o", type=str, help="Output directory (default: output/)")

    # plot command
    plot_parser = subparsers.add_parser("plot", help="Generate calendar charts")
    plot_parser.add_argument("--month", "-m", type=_parse_month, help="Month as YYYY-MM")
    plot_parser.add_argument("--output", "-o", type=str, help="Output directory (default: output/)")
    plot_parser.add_argument("--no-show", action="store_true", help="Save plots without displaying")

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = AppConfig.load()
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    commands = {
        "month": cmd_month,
        "day": cmd_day,
        "add": cmd_add,
        "edit": cmd_edit,
        "delete": cmd_delete,
        "week": cmd_week,
        "export": cmd_export,
        "plot": cmd_plot,
    }

    with WorkoutStore.from_config(config) as store:
        try:
            commands[args.command](args, config, store)
        except ValidationError as e:
            print(f"Invalid workout: {e.message}")
            sys.exit(1)
        except NotFoundError as e:
            logger.warning(f"Workout {e.workout_id} not found")
            print("Workout not found. It may have been deleted already.")
            sys.exit(1)
        except PersistenceError as e:
            logger.error(f"Store error: {e.detail}")
            action = MUTATING_ACTIONS.get(args.command)
            if action:
                print(f"Could not {action} workout. Please try again.")
            else:
                print("Could not load workouts. Please try again.")
            sys.exit(1)


if __name__ == "__main__":
    main()
