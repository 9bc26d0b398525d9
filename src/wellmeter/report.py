import csv
import logging
import re
from datetime import date
from pathlib import Path
from typing import Iterable, Optional, Sequence

import openpyxl
from pydantic import BaseModel

from wellmeter.enums import ExportFormat
from wellmeter.ledger import sort_entries
from wellmeter.named_types import DailyEntry, HourlyMeterRow, ReportFilter

module_logger = logging.getLogger(__name__)

EXPORT_HEADERS = [
    "Date",
    "Well",
    "Hour",
    "Volume (m3)",
    "Meter",
    "Daily Total (m3)",
    "Note",
]
OVERFLOW_NOTE = "Flow limit exceeded"
SHEET_TITLE = "Report"


class FilterOptions(BaseModel):
    """Values present in the ledger, for building report filters"""

    years: list[int] = []
    months: list[int] = []
    wells: list[str] = []


def filter_entries(
    entries: Iterable[DailyEntry], report_filter: Optional[ReportFilter] = None
) -> list[DailyEntry]:
    if report_filter is None:
        return list(entries)
    return [
        entry for entry in entries if report_filter.matches(entry.Date, entry.Well)
    ]


def filter_options(entries: Iterable[DailyEntry]) -> FilterOptions:
    years: set[int] = set()
    months: set[int] = set()
    wells: set[str] = set()
    for entry in entries:
        years.add(entry.Date.year)
        months.add(entry.Date.month)
        wells.add(entry.Well)
    return FilterOptions(
        years=sorted(years, reverse=True),
        months=sorted(months),
        wells=sorted(wells),
    )


def starting_meter(entry: DailyEntry, all_entries: Iterable[DailyEntry]) -> float:
    """Meter value at the start of the entry's day: the previous entry's
    reading for the same well, else the entry's reading minus its total."""
    previous = [
        other
        for other in all_entries
        if other.Well == entry.Well and other.Date < entry.Date
    ]
    if previous:
        return max(previous, key=lambda other: other.Date).MeterReading
    return max(entry.MeterReading - entry.TotalM3, 0.0)


def hourly_detail(
    entry: DailyEntry, all_entries: Iterable[DailyEntry]
) -> list[HourlyMeterRow]:
    """The 24 hours of `entry` with the running meter value after each hour"""
    running = starting_meter(entry, all_entries)
    rows: list[HourlyMeterRow] = []
    for hourly in entry.full_day():
        running += hourly.VolumeM3
        rows.append(
            HourlyMeterRow(
                Hour=hourly.Hour, VolumeM3=hourly.VolumeM3, MeterReading=running
            )
        )
    return rows


def export_rows(
    entries: Iterable[DailyEntry], all_entries: Optional[Sequence[DailyEntry]] = None
) -> dict[str, list[list[str]]]:
    """
    Report rows grouped by well, one row per hour, days in date order.
    Date, well, daily total and note are only written on the first row of
    each day. Header row not included.
    """
    entries = sort_entries(entries)
    if all_entries is None:
        all_entries = entries
    rows_by_well: dict[str, list[list[str]]] = {}
    for entry in entries:
        rows = rows_by_well.setdefault(entry.Well, [])
        for row in hourly_detail(entry, all_entries):
            first = row.Hour == 0
            rows.append(
                [
                    entry.Date.strftime("%d/%m/%Y") if first else "",
                    entry.Well if first else "",
                    f"{row.Hour}:00",
                    f"{row.VolumeM3:.2f}",
                    f"{row.MeterReading:.2f}",
                    f"{entry.TotalM3:.2f}" if first else "",
                    OVERFLOW_NOTE if first and entry.OverflowWarning else "",
                ]
            )
    return rows_by_well


def report_file_name(well: str, today: date, export_format: ExportFormat) -> str:
    safe_well = re.sub(r"[^\w.-]", "_", well)
    return f"report_{safe_well}_{today.isoformat()}.{export_format.value}"


def export_csv(rows: Sequence[Sequence[str]], path: Path) -> Path:
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(EXPORT_HEADERS)
        writer.writerows(rows)
    return path


def export_xlsx(rows: Sequence[Sequence[str]], path: Path) -> Path:
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = SHEET_TITLE
    sheet.append(EXPORT_HEADERS)
    for row in rows:
        sheet.append(list(row))
    workbook.save(path)
    return path


def export_report(
    entries: Iterable[DailyEntry],
    directory: Path,
    export_format: ExportFormat = ExportFormat.Csv,
    today: Optional[date] = None,
    all_entries: Optional[Sequence[DailyEntry]] = None,
) -> list[Path]:
    """Write one report file per well to `directory`. Returns the paths."""
    today = today or date.today()
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    paths: list[Path] = []
    for well, rows in export_rows(entries, all_entries).items():
        path = directory / report_file_name(well, today, export_format)
        if export_format == ExportFormat.Xlsx:
            export_xlsx(rows, path)
        else:
            export_csv(rows, path)
        module_logger.info("Report for %s saved to %s", well, path)
        paths.append(path)
    return paths
