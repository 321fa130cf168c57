"""Command-line interface for schedule reports."""

from pathlib import Path
from typing import Annotated

import typer

from fight_scheduler.csv_exporter import export_schedule_csv
from fight_scheduler.event_json import ExportedEvent, import_event_export
from fight_scheduler.results import calculate_group_standings

app = typer.Typer(
    name="reports",
    help="Generate reports from schedule export files",
    no_args_is_help=True,
)


def _load_export(source: Path) -> ExportedEvent:
    try:
        return import_event_export(source)
    except (ValueError, OSError) as e:
        typer.echo(f"Error reading export file: {e}", err=True)
        raise typer.Exit(1)


@app.command("csv")
def csv_report(
    source: Annotated[Path, typer.Argument(help="Schedule export JSON", exists=True, readable=True)],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output CSV path (default: next to the export)"),
    ] = None,
) -> None:
    """Write the schedule as CSV."""
    exported = _load_export(source)
    output = output or source.with_suffix(".csv")
    rows = export_schedule_csv(exported.schedule, exported.event, output)
    typer.echo(f"CSV schedule saved to: {output.absolute()} ({rows} rows)")


@app.command("xlsx")
def xlsx_report(
    source: Annotated[Path, typer.Argument(help="Schedule export JSON", exists=True, readable=True)],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output workbook path (default: next to the export)"),
    ] = None,
) -> None:
    """Write event info, schedule with scores and standings to an Excel workbook."""
    from .xlsx_exporter import export_to_excel

    exported = _load_export(source)
    standings = calculate_group_standings(exported.event, exported.schedule, exported.results)
    output = output or source.with_suffix(".xlsx")
    export_to_excel(exported.schedule, exported.event, exported.results, standings, output)
    typer.echo(f"Excel report saved to: {output.absolute()}")


@app.command("pdf")
def pdf_report(
    source: Annotated[Path, typer.Argument(help="Schedule export JSON", exists=True, readable=True)],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Output PDF path (default: next to the export)"),
    ] = None,
    with_standings: Annotated[
        bool,
        typer.Option("--standings/--no-standings", help="Append group standings"),
    ] = True,
) -> None:
    """Write a printable PDF schedule."""
    from .schedule_pdf import create_schedule_pdf

    exported = _load_export(source)
    standings = (
        calculate_group_standings(exported.event, exported.schedule, exported.results)
        if with_standings
        else None
    )
    output = output or source.with_suffix(".pdf")
    create_schedule_pdf(exported.schedule, exported.event, output, exported.results, standings)
    typer.echo(f"PDF schedule saved to: {output.absolute()}")
