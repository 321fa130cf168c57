"""Consolidated CLI for the fight scheduling tools."""

import typer

from fight_reports.cli import app as reports_app
from fight_scheduler.cli import app as schedule_app

app = typer.Typer(
    name="fight-scheduler",
    help="Fight scheduling and reporting tools",
    no_args_is_help=True,
)

app.add_typer(schedule_app, name="schedule", help="Generate schedules and record results")
app.add_typer(reports_app, name="reports", help="Generate reports from schedule exports")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
