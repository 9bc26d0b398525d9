import logging
from datetime import date
from typing import Mapping, Optional

from result import Err, Ok, Result

from wellmeter.allocation import allocate
from wellmeter.data_classes.well_table import WELL_CONFIGS
from wellmeter.ledger import AllocationLedger
from wellmeter.named_types import DailyEntry, WellConfig

ALLOCATION_LOGGER_NAME: str = "WellAllocation"


class MeterReadingError(ValueError):
    previous: float
    current: float

    def __init__(self, previous: float, current: float, msg: str = "") -> None:
        super().__init__(msg)
        self.previous = previous
        self.current = current

    def __str__(self) -> str:
        s = self.__class__.__name__
        super_str = super().__str__()
        if super_str:
            s += f" <{super_str}>"
        s += f"  previous: {self.previous}  current: {self.current}"
        return s


def compute_total(previous_reading: float, current_reading: float) -> float:
    """Volume drawn between two meter readings. A meter that did not move
    forward counts as no consumption."""
    if previous_reading >= 0 and current_reading > previous_reading:
        return current_reading - previous_reading
    return 0.0


def validate_readings(previous_reading: float, current_reading: float) -> None:
    if previous_reading < 0 or current_reading < 0:
        raise MeterReadingError(
            previous_reading, current_reading, "Meter readings must be non-negative"
        )
    # A previous reading of 0 means the well has no history yet
    if previous_reading > 0 and current_reading < previous_reading:
        raise MeterReadingError(
            previous_reading,
            current_reading,
            "Current reading must be greater than or equal to the previous one",
        )


class DailyEntryWorkflow:
    """
    Turns a day's meter reading into a saved, allocated ledger entry.

    The previous reading defaults to the meter value of the latest earlier
    entry for the same well (0 if there is none). The day total is the
    difference between the two readings and is spread over the hours by
    the allocation engine.
    """

    ledger: AllocationLedger
    configs: Mapping[str, WellConfig]
    logger: logging.Logger

    def __init__(
        self,
        ledger: AllocationLedger,
        configs: Mapping[str, WellConfig] = WELL_CONFIGS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.ledger = ledger
        self.configs = configs
        self.logger = logger or logging.getLogger(ALLOCATION_LOGGER_NAME)

    def previous_reading(self, well: str, day: date) -> float:
        previous = self.ledger.previous_entry(well, day)
        if previous is None:
            return 0.0
        return previous.MeterReading

    def build_entry(
        self,
        day: date,
        well: str,
        current_reading: float,
        previous_reading: Optional[float] = None,
    ) -> DailyEntry:
        if previous_reading is None:
            previous_reading = self.previous_reading(well, day)
        validate_readings(previous_reading, current_reading)
        total = compute_total(previous_reading, current_reading)
        result = allocate(total, well, self.configs)
        self.logger.debug(
            "%s %s: previous %s, current %s, total %s m3",
            day, well, previous_reading, current_reading, total,
        )
        return DailyEntry.from_result(
            day=day,
            well=well,
            meter_reading=current_reading,
            total_m3=total,
            result=result,
        )

    def save(
        self,
        day: date,
        well: str,
        current_reading: float,
        previous_reading: Optional[float] = None,
        replaces: Optional[str] = None,
    ) -> Result[DailyEntry, BaseException]:
        """Allocate and store the entry for `well` on `day`. `replaces` is
        the key of the entry being edited, if any. Errors are logged and
        returned rather than raised."""
        try:
            entry = self.build_entry(day, well, current_reading, previous_reading)
            self.ledger.put(entry, replaces=replaces)
        except (ValueError, KeyError, OSError) as e:
            self.logger.error("Failed to save %s for %s: %s", well, day, e)
            return Err(e)
        if entry.OverflowWarning:
            self.logger.warning(
                "%s: %s (%.2f m3 requested, %.2f m3 allocated)",
                entry.key,
                entry.OverflowWarning,
                entry.TotalM3,
                sum(elt.VolumeM3 for elt in entry.Allocation),
            )
        else:
            self.logger.info("Saved %s: %.2f m3", entry.key, entry.TotalM3)
        return Ok(entry)
