import logging
from datetime import date, datetime
from pathlib import Path
from typing import Annotated, NoReturn, Optional

import dotenv
import rich
import typer
from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from wellmeter import __version__
from wellmeter.allocation import allocate
from wellmeter.config import WellMeterSettings, get_settings, verbosity_from_count
from wellmeter.data_classes import WELL_CONFIGS, is_volume_exceeded
from wellmeter.entry_workflow import ALLOCATION_LOGGER_NAME, DailyEntryWorkflow
from wellmeter.enums import ExportFormat
from wellmeter.ledger import AllocationLedger, EntryNotFound
from wellmeter.named_types import ReportFilter
from wellmeter.report import (
    OVERFLOW_NOTE,
    export_report,
    filter_entries,
    filter_options,
    hourly_detail,
)

ENV_FILE_HELP_TEXT = "Optional path to a .env file with WELLMETER_ settings."

app = typer.Typer(
    no_args_is_help=True,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    help=f"Well meter allocation CLI, version {__version__}",
)
entry_app = typer.Typer(
    no_args_is_help=True,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    help="Daily meter entries.",
)
report_app = typer.Typer(
    no_args_is_help=True,
    pretty_exceptions_enable=False,
    rich_markup_mode="rich",
    help="Reports over saved entries.",
)
app.add_typer(entry_app, name="entry")
app.add_typer(report_app, name="report")

EnvFileOption = Annotated[str, typer.Option(help=ENV_FILE_HELP_TEXT)]
VerboseOption = Annotated[int, typer.Option("--verbose", "-v", count=True)]
WellFilterOption = Annotated[Optional[str], typer.Option("--well", help="Only this well.")]
YearFilterOption = Annotated[Optional[int], typer.Option("--year")]
MonthFilterOption = Annotated[Optional[int], typer.Option("--month", min=1, max=12)]
StartFilterOption = Annotated[
    Optional[datetime], typer.Option("--start", formats=["%Y-%m-%d"])
]
EndFilterOption = Annotated[
    Optional[datetime], typer.Option("--end", formats=["%Y-%m-%d"])
]


def _setup(env_file: str, verbose: int) -> WellMeterSettings:
    settings = get_settings(env_file)
    settings.verbosity = verbosity_from_count(verbose, settings.verbosity)
    logging.basicConfig(level=settings.verbosity)
    logging.getLogger(ALLOCATION_LOGGER_NAME).setLevel(
        min(settings.verbosity, settings.allocation_logging_level)
    )
    return settings


def _fail(message: str) -> NoReturn:
    rich.print(f"[red bold]{escape(message)}")
    raise typer.Exit(code=1)


def _as_date(value: Optional[datetime]) -> Optional[date]:
    return value.date() if value is not None else None


def _report_filter(
    well: Optional[str],
    year: Optional[int],
    month: Optional[int],
    start: Optional[datetime],
    end: Optional[datetime],
) -> ReportFilter:
    try:
        return ReportFilter(
            Well=well,
            Year=year,
            Month=month,
            StartDate=_as_date(start),
            EndDate=_as_date(end),
        )
    except ValidationError as e:
        _fail(f"Invalid filter: {e}")


def _volume_str(well: str, volume: float) -> str:
    if is_volume_exceeded(well, volume):
        return f"[red]{volume:.2f}[/red]"
    return f"{volume:.2f}"


@app.command()
def config(env_file: EnvFileOption = ".env") -> None:
    """Show WellMeterSettings."""

    dotenv_file = dotenv.find_dotenv(env_file, usecwd=True)
    dotenv_file_exists = Path(dotenv_file).exists() if dotenv_file else False
    rich.print(f"Env file: <{dotenv_file}>  exists:{dotenv_file_exists}")
    settings = get_settings(env_file)
    rich.print(settings)
    rich.print(f"Ledger: {settings.ledger_path}")


@app.command()
def wells() -> None:
    """Show the configured wells."""
    table = Table(title="Wells")
    table.add_column("Well")
    table.add_column("Hours")
    table.add_column("Limit (m3/h)", justify="right")
    table.add_column("Weights")
    for name, well_config in WELL_CONFIGS.items():
        table.add_row(
            name,
            ", ".join(str(h) for h in well_config.OperationalHours),
            "-" if well_config.HourlyLimitM3 is None else f"{well_config.HourlyLimitM3:g}",
            ", ".join(f"{w:g}" for w in well_config.WeightPattern),
        )
    rich.print(table)


@app.command("allocate")
def allocate_command(
    total: Annotated[float, typer.Argument(help="Day total in m3.")],
    well: Annotated[str, typer.Argument(help="Well identifier, e.g. MAAG.")],
    json: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
) -> None:
    """Allocate a day total over the hours of a well."""
    result = allocate(total, well)
    if json:
        print(result.model_dump_json(indent=2))
        return
    table = Table(title=f"{well}: {total:.2f} m3")
    table.add_column("Hour", justify="right")
    table.add_column("Volume (m3)", justify="right")
    for hourly in result.Allocation:
        table.add_row(f"{hourly.Hour}:00", _volume_str(well, hourly.VolumeM3))
    rich.print(table)
    rich.print(f"Allocated: {result.total_m3():.2f} m3")
    if result.OverflowWarning:
        rich.print(f"[yellow bold]{result.OverflowWarning}")


@entry_app.command("add")
def entry_add(
    day: Annotated[datetime, typer.Option("--date", formats=["%Y-%m-%d"])],
    well: Annotated[str, typer.Option("--well")],
    current: Annotated[float, typer.Option("--current", help="Meter reading at the end of the day.")],
    previous: Annotated[
        Optional[float],
        typer.Option(
            "--previous",
            help="Previous meter reading. Defaults to the latest earlier entry for the well.",
        ),
    ] = None,
    replaces: Annotated[
        Optional[str], typer.Option("--replaces", help="Key of the entry being edited.")
    ] = None,
    env_file: EnvFileOption = ".env",
    verbose: VerboseOption = 0,
) -> None:
    """Save a day's meter reading and its hourly allocation."""
    settings = _setup(env_file, verbose)
    workflow = DailyEntryWorkflow(AllocationLedger(settings.ledger_path))
    result = workflow.save(
        day.date(), well, current, previous_reading=previous, replaces=replaces
    )
    if result.is_err():
        _fail(f"Not saved: {result.err()}")
    entry = result.ok()
    rich.print(f"[green]Saved {entry.key}: {entry.TotalM3:.2f} m3")
    if entry.OverflowWarning:
        rich.print(f"[yellow bold]{entry.OverflowWarning}")


@entry_app.command("list")
def entry_list(
    well: WellFilterOption = None,
    year: YearFilterOption = None,
    month: MonthFilterOption = None,
    start: StartFilterOption = None,
    end: EndFilterOption = None,
    env_file: EnvFileOption = ".env",
    verbose: VerboseOption = 0,
) -> None:
    """List saved entries."""
    settings = _setup(env_file, verbose)
    report_filter = _report_filter(well, year, month, start, end)
    entries = filter_entries(AllocationLedger(settings.ledger_path).entries(), report_filter)
    table = Table(title="Entries")
    table.add_column("Key")
    table.add_column("Meter", justify="right")
    table.add_column("Total (m3)", justify="right")
    table.add_column("Note")
    for entry in entries:
        table.add_row(
            entry.key,
            f"{entry.MeterReading:.2f}",
            f"{entry.TotalM3:.2f}",
            entry.OverflowWarning or "",
        )
    rich.print(table)


@entry_app.command("delete")
def entry_delete(
    keys: Annotated[list[str], typer.Argument(help="Entry keys, e.g. 2024-03-01-MAAG.")],
    env_file: EnvFileOption = ".env",
    verbose: VerboseOption = 0,
) -> None:
    """Delete one or more entries."""
    settings = _setup(env_file, verbose)
    ledger = AllocationLedger(settings.ledger_path)
    if len(keys) == 1:
        try:
            ledger.delete(keys[0])
        except EntryNotFound as e:
            _fail(str(e))
        rich.print(f"Deleted {keys[0]}")
        return
    removed = ledger.bulk_delete(keys)
    rich.print(f"Deleted {removed} of {len(keys)} entries")


@report_app.command("show")
def report_show(
    key: Annotated[str, typer.Argument(help="Entry key, e.g. 2024-03-01-MAAG.")],
    env_file: EnvFileOption = ".env",
    verbose: VerboseOption = 0,
) -> None:
    """Show the hourly allocation and running meter of an entry."""
    settings = _setup(env_file, verbose)
    ledger = AllocationLedger(settings.ledger_path)
    try:
        entry = ledger.get(key)
    except EntryNotFound as e:
        _fail(str(e))
    table = Table(title=f"{entry.Well} {entry.Date.isoformat()}: {entry.TotalM3:.2f} m3")
    table.add_column("Hour", justify="right")
    table.add_column("Volume (m3)", justify="right")
    table.add_column("Meter", justify="right")
    table.add_column("Note")
    for row in hourly_detail(entry, ledger.entries()):
        exceeded = is_volume_exceeded(entry.Well, row.VolumeM3)
        table.add_row(
            f"{row.Hour}:00",
            _volume_str(entry.Well, row.VolumeM3),
            f"{row.MeterReading:.2f}",
            f"[red]{OVERFLOW_NOTE}[/red]" if exceeded else "",
        )
    rich.print(table)
    if entry.OverflowWarning:
        rich.print(f"[yellow bold]{entry.OverflowWarning}")


@report_app.command("options")
def report_options(
    env_file: EnvFileOption = ".env",
    verbose: VerboseOption = 0,
) -> None:
    """Show the years, months and wells present in the ledger."""
    settings = _setup(env_file, verbose)
    options = filter_options(AllocationLedger(settings.ledger_path).entries())
    rich.print(f"Years: {', '.join(str(y) for y in options.years) or '-'}")
    rich.print(f"Months: {', '.join(str(m) for m in options.months) or '-'}")
    rich.print(f"Wells: {', '.join(options.wells) or '-'}")


@report_app.command("export")
def report_export(
    well: WellFilterOption = None,
    year: YearFilterOption = None,
    month: MonthFilterOption = None,
    start: StartFilterOption = None,
    end: EndFilterOption = None,
    export_format: Annotated[
        ExportFormat, typer.Option("--format", case_sensitive=False)
    ] = ExportFormat.default(),
    out_dir: Annotated[Optional[Path], typer.Option("--out-dir")] = None,
    env_file: EnvFileOption = ".env",
    verbose: VerboseOption = 0,
) -> None:
    """Export one report file per well."""
    settings = _setup(env_file, verbose)
    report_filter = _report_filter(well, year, month, start, end)
    all_entries = AllocationLedger(settings.ledger_path).entries()
    entries = filter_entries(all_entries, report_filter)
    if not entries:
        _fail("No entries match the filter")
    paths = export_report(
        entries,
        out_dir or settings.export_dir,
        export_format=export_format,
        all_entries=all_entries,
    )
    for path in paths:
        rich.print(f"Wrote {path}")


def version_callback(value: bool):
    if value:
        print(f"wellmeter {__version__}")
        raise typer.Exit()


@app.callback()
def main_app_callback(
    _version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit."
        ),
    ] = None,
) -> None:
    """Commands for the wellmeter application"""


if __name__ == "__main__":
    app()
