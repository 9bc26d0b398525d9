""" List of all the types """
from wellmeter.named_types.allocation_result import AllocationResult
from wellmeter.named_types.daily_entry import DailyEntry
from wellmeter.named_types.hourly_meter_row import HourlyMeterRow
from wellmeter.named_types.hourly_volume import HourlyVolume
from wellmeter.named_types.report_filter import ReportFilter
from wellmeter.named_types.well_config import WellConfig

__all__ = [
    "AllocationResult",
    "DailyEntry",
    "HourlyMeterRow",
    "HourlyVolume",
    "ReportFilter",
    "WellConfig",
]
