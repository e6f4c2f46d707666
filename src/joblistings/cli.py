# src/joblistings/cli.py
"""
Command-line interface for the job listing parser.

This module provides CLI commands to:
- Parse a saved Sheets API response into job listings
- Fetch a sheet and parse it in one go
- Explain what is wrong with a sheet's header row
"""

from dotenv import load_dotenv
load_dotenv(override=True)  # automatically looks for a .env file in the project root

import json
from pathlib import Path
from typing import List, Optional

import typer

from joblistings.config import load_settings, log_level_from_env
from joblistings.errors import JobListingsError
from joblistings.io.export import listings_to_frame, listings_to_json
from joblistings.io.sheets import load_sheet_values
from joblistings.logging_setup import configure_logging
from joblistings.models import JobListing, RowOutcome
from joblistings.pipeline.envelope import split_envelope
from joblistings.pipeline.filter import keep_parsed
from joblistings.pipeline.headers import describe_headers
from joblistings.pipeline.parse import parse_job_listing_rows

FORMATS = ("json", "csv")

# Typer app instance for CLI commands
app = typer.Typer(help="Job listings from a spreadsheet")


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG shows every dropped row"),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines"),
):
    configure_logging(log_level or log_level_from_env(), json_output=json_logs)


def _check_format(fmt: str) -> str:
    if fmt not in FORMATS:
        raise typer.BadParameter(f"choose one of: {', '.join(FORMATS)}")
    return fmt


def _load_payload(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        typer.echo(f"Could not read {path}: {e}", err=True)
        raise typer.Exit(code=1)


def _emit(listings: List[JobListing], fmt: str) -> None:
    if fmt == "csv":
        typer.echo(listings_to_frame(listings).to_csv(index=False), nl=False)
    else:
        typer.echo(json.dumps(listings_to_json(listings), indent=2, ensure_ascii=False))


def _report_dropped(outcomes: List[RowOutcome]) -> None:
    if not outcomes:
        typer.echo("Table rejected: the payload shape or the header row is invalid.", err=True)
        return
    for o in outcomes:
        if not o.ok:
            typer.echo(f"row {o.row_number}: {o.error}", err=True)


def _parse_and_emit(payload: object, fmt: str, show_dropped: bool) -> None:
    outcomes = parse_job_listing_rows(payload)
    _emit(keep_parsed(outcomes), fmt)
    if show_dropped:
        _report_dropped(outcomes)


@app.command()
def parse(
    path: Path = typer.Argument(..., help="JSON file holding a Sheets API values response"),
    fmt: str = typer.Option("json", "--format", "-f", callback=_check_format, help="json or csv"),
    show_dropped: bool = typer.Option(False, "--show-dropped", help="List skipped rows on stderr"),
):
    """
    Parse a saved API response and print the listings that validate.
    """
    _parse_and_emit(_load_payload(path), fmt, show_dropped)


@app.command()
def fetch(
    spreadsheet_id: Optional[str] = typer.Argument(None, help="Defaults to SHEETS_SPREADSHEET_ID"),
    sheet_range: Optional[str] = typer.Option(None, "--range", "-r", help="A1 range or tab name"),
    fmt: str = typer.Option("json", "--format", "-f", callback=_check_format, help="json or csv"),
    show_dropped: bool = typer.Option(False, "--show-dropped", help="List skipped rows on stderr"),
):
    """
    Fetch a sheet from the Sheets API (API key, or service account for private
    sheets) and print the listings that validate.
    """
    try:
        settings = load_settings()
    except JobListingsError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    if spreadsheet_id:
        settings = settings.model_copy(update={"spreadsheet_id": spreadsheet_id})
    if sheet_range:
        settings = settings.model_copy(update={"sheet_range": sheet_range})
    if not settings.spreadsheet_id:
        typer.echo("Pass a spreadsheet id or set SHEETS_SPREADSHEET_ID (in .env).", err=True)
        raise typer.Exit(code=1)

    try:
        payload = load_sheet_values(settings)
    except JobListingsError as e:
        typer.echo(f"Fetch failed: {e}", err=True)
        raise typer.Exit(code=1)

    _parse_and_emit(payload, fmt, show_dropped)


@app.command()
def headers(path: Path = typer.Argument(..., help="JSON file holding a Sheets API values response")):
    """
    Debug: show what the parser thinks of the header row.
    """
    table = split_envelope(_load_payload(path))
    if table is None:
        typer.echo("Not a usable values response (needs a header row and at least one data row).", err=True)
        raise typer.Exit(code=1)

    report = describe_headers(table.fields)
    typer.echo("Header row OK." if report.ok else "Header row rejected.")
    if report.missing:
        typer.echo(f"Missing required: {', '.join(report.missing)}")
    for name, guess in report.suggestions.items():
        typer.echo(f"  {name!r}: did you mean {guess!r}?")
    if report.duplicates:
        typer.echo(f"Duplicated: {', '.join(report.duplicates)}")
    if report.non_text:
        typer.echo(f"Non-text header cells at columns: {', '.join(str(i + 1) for i in report.non_text)}")
    if report.extras:
        typer.echo(f"Extra columns: {', '.join(report.extras)}")


if __name__ == "__main__":
    app()
