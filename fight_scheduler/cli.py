"""Command-line interface for fight scheduling."""

import logging
from datetime import date
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from shared.time_utils import combinations, format_duration

from .config import SchedulerConfig
from .constraint_validator import validate_and_report
from .csv_exporter import export_schedule_csv
from .dtos import EventInput
from .event_json import export_event_json, import_event_export, load_event
from .excel_import import generate_excel_template, import_athletes_from_excel
from .functional_scheduler import generate_schedule
from .models import SchedulingStrategy
from .results import record_result as create_result
from .schedule_printer import format_schedule_for_printing, format_stats, format_warnings

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="schedule",
    help="Round-robin and time-boxed fight scheduling",
    no_args_is_help=True,
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@app.command("generate")
def generate(
    input_file: Annotated[
        Path,
        typer.Argument(help="Path to the event JSON file", exists=True, readable=True),
    ],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output export JSON path"),
    ] = None,
    strategy: Annotated[
        SchedulingStrategy | None,
        typer.Option("--strategy", "-s", help="Scheduling strategy (default from FIGHT_SCHEDULER_STRATEGY)"),
    ] = None,
    cycles: Annotated[
        int | None,
        typer.Option("--cycles", "-c", help="Round-robin repetitions (round_robin only)", min=1),
    ] = None,
    csv: Annotated[
        bool,
        typer.Option("--csv", help="Also write the schedule as CSV next to the JSON export"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Suppress detailed output"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Generate a fight schedule from an event JSON file."""
    config = SchedulerConfig.from_env()
    setup_logging(verbose or config.verbose)
    strategy = strategy or config.strategy

    try:
        event = load_event(input_file)
    except (ValueError, OSError) as e:
        typer.echo(f"Error reading event file: {e}", err=True)
        raise typer.Exit(1)

    if not quiet:
        typer.echo(
            f"Scheduling {event.name}: {len(event.areas)} area(s), "
            f"{len(event.groups)} group(s), {len(event.athletes)} athlete(s)"
        )
        typer.echo(f"Strategy: {strategy.value}")

    schedule = generate_schedule(event, strategy=strategy, cycles=cycles)

    if schedule.has_fatal_warning:
        typer.echo(f"\n{format_warnings(schedule)}", err=True)
        raise typer.Exit(1)

    # Sanity check only; round-robin schedules may run past the window
    is_valid, errors = validate_and_report(
        schedule.entries,
        event,
        check_window=strategy is SchedulingStrategy.TIME_BOXED,
    )
    if not is_valid:
        for error in errors:
            typer.echo(f"⚠️  Scheduler produced invalid schedule: {error}", err=True)

    if not quiet:
        typer.echo("")
        typer.echo(format_schedule_for_printing(schedule, event))
        typer.echo("")
        typer.echo(format_stats(schedule))
        if schedule.warnings:
            typer.echo("")
            typer.echo(format_warnings(schedule))

    output = output or config.output_dir / f"{event.id}_schedule.json"
    output.parent.mkdir(parents=True, exist_ok=True)
    export_event_json(event, schedule, output, strategy=strategy)
    typer.echo(f"\nSchedule saved to: {output.absolute()}")

    if csv:
        csv_output = output.with_suffix(".csv")
        rows = export_schedule_csv(schedule, event, csv_output)
        typer.echo(f"CSV schedule saved to: {csv_output.absolute()} ({rows} rows)")


@app.command("info")
def info(
    input_file: Annotated[
        Path,
        typer.Argument(help="Path to the event JSON file", exists=True, readable=True),
    ],
) -> None:
    """Show information about an event without scheduling."""
    try:
        event = load_event(input_file)
    except (ValueError, OSError) as e:
        typer.echo(f"Error reading event file: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Event: {event.name} ({event.date})")
    typer.echo(f"Window: {event.window_start}-{event.window_end}")
    typer.echo(
        f"Match duration: {event.match_duration_seconds}s, "
        f"rotation: {event.rotation_seconds}s, min rest: {event.min_rest_seconds}s"
    )

    slot = event.match_duration_seconds + event.rotation_seconds
    for area in event.areas:
        typer.echo(f"\n📍 {area.name}")
        total_pairs = 0
        for group in area.groups:
            size = len(group.athletes)
            pairs = combinations(size)
            total_pairs += pairs
            note = "" if group.is_schedulable else " (skipped, fewer than 2 athletes)"
            typer.echo(f"  {group.name}: {size} athlete(s), {pairs} pairing(s){note}")

        if total_pairs == 0:
            continue
        needed = total_pairs * slot - event.rotation_seconds
        if needed <= event.available_seconds:
            typer.echo(f"  ✅ Full round-robin fits: {format_duration(needed)}")
        else:
            typer.echo(
                f"  ⚠️  Full round-robin needs {format_duration(needed)}, "
                f"window is {format_duration(max(event.available_seconds, 0))}"
            )


@app.command("import-xlsx")
def import_xlsx(
    input_file: Annotated[
        Path,
        typer.Argument(help="Roster workbook (one sheet per area)", exists=True, readable=True),
    ],
    name: Annotated[str, typer.Option("--name", "-n", help="Event name")],
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Output event JSON path"),
    ] = Path("event.json"),
    event_date: Annotated[
        str | None,
        typer.Option("--date", help="Event date (YYYY-MM-DD, default today)"),
    ] = None,
    start: Annotated[str, typer.Option("--start", help="Window start (HH:MM)")] = "09:00",
    end: Annotated[str, typer.Option("--end", help="Window end (HH:MM)")] = "17:00",
    duration: Annotated[
        int,
        typer.Option("--duration", help="Match duration in seconds", min=1),
    ] = 120,
    rotation: Annotated[
        int,
        typer.Option("--rotation", help="Rotation time in seconds", min=0),
    ] = 30,
    min_rest: Annotated[
        int,
        typer.Option("--min-rest", help="Minimum rest between matches in seconds", min=0),
    ] = 0,
) -> None:
    """Create an event JSON file from an Excel roster."""
    result = import_athletes_from_excel(input_file)
    for warning in result.warnings:
        typer.echo(f"⚠️  {warning}", err=True)
    if not result.success:
        for error in result.errors:
            typer.echo(f"❌ {error}", err=True)
        raise typer.Exit(1)

    try:
        event_input = EventInput(
            name=name,
            date=event_date or date.today().isoformat(),
            match_duration_seconds=duration,
            rotation_seconds=rotation,
            window_start=start,
            window_end=end,
            min_rest_seconds=min_rest,
            areas=result.areas,
        )
    except ValidationError as e:
        typer.echo(f"❌ Invalid event parameters:\n{e}", err=True)
        raise typer.Exit(1)

    output.write_text(event_input.model_dump_json(indent=2), encoding="utf-8")

    group_count = sum(len(area.groups) for area in result.areas)
    typer.echo(f"Imported {len(result.areas)} area(s) and {group_count} group(s)")
    typer.echo(f"Event file saved to: {output.absolute()}")


@app.command("template")
def template(
    output: Annotated[
        Path,
        typer.Argument(help="Path of the template workbook to create"),
    ] = Path("roster_template.xlsx"),
) -> None:
    """Write an example roster workbook for import-xlsx."""
    generate_excel_template(output)
    typer.echo(f"Template saved to: {output.absolute()}")


@app.command("record-result")
def record_result(
    export_file: Annotated[
        Path,
        typer.Argument(help="Schedule export JSON (updated in place)", exists=True, readable=True),
    ],
    match_id: Annotated[str, typer.Argument(help="Match id of the schedule entry")],
    score1: Annotated[int, typer.Argument(help="Score of the first athlete", min=0)],
    score2: Annotated[int, typer.Argument(help="Score of the second athlete", min=0)],
    winner: Annotated[
        str | None,
        typer.Option("--winner", "-w", help="Winner athlete id (default: higher score, draw when equal)"),
    ] = None,
) -> None:
    """Record the score of a scheduled match in an export file."""
    try:
        exported = import_event_export(export_file)
    except (ValueError, OSError) as e:
        typer.echo(f"Error reading export file: {e}", err=True)
        raise typer.Exit(1)

    try:
        result = create_result(exported.schedule, match_id, score1, score2, winner_id=winner)
    except KeyError as e:
        typer.echo(f"❌ {e.args[0]}", err=True)
        raise typer.Exit(1)
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    results = {**exported.results, match_id: result}
    export_event_json(
        exported.event,
        exported.schedule,
        export_file,
        results=results,
        strategy=exported.strategy,
    )

    outcome = "draw" if result.winner_id is None else f"winner {result.winner_id}"
    typer.echo(f"Recorded {match_id}: {score1}-{score2} ({outcome})")
    typer.echo(f"{len(results)} result(s) in {export_file}")
