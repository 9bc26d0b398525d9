from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, model_validator
from typing_extensions import Self

from wellmeter.named_types.allocation_result import HOURS_PER_DAY, AllocationResult
from wellmeter.named_types.hourly_volume import HourlyVolume
from wellmeter.property_format import MeterReadingM3, VolumeM3, WellName, entry_key


class DailyEntry(BaseModel):
    """
    One saved day of meter readings for one well.

    MeterReading is the cumulative meter value read at the end of the day,
    TotalM3 the volume drawn since the previous reading, and Allocation the
    hourly breakdown of TotalM3.
    """

    Date: date
    Well: WellName
    MeterReading: MeterReadingM3
    TotalM3: VolumeM3
    Allocation: List[HourlyVolume]
    OverflowWarning: Optional[str] = None
    TypeName: Literal["daily.entry"] = "daily.entry"
    Version: Literal["000"] = "000"

    @model_validator(mode="after")
    def check_axiom_1(self) -> Self:
        """
        Axiom 1: Allocation holds at most one entry per hour.
        Entries saved before an allocation existed may be empty; readers
        treat a missing hour as zero volume.
        """
        hours = [elt.Hour for elt in self.Allocation]
        if len(set(hours)) != len(hours):
            raise ValueError(f"Axiom 1 failed: duplicate hours in Allocation {hours}")
        return self

    @classmethod
    def from_result(
        cls,
        day: date,
        well: str,
        meter_reading: float,
        total_m3: float,
        result: AllocationResult,
    ) -> "DailyEntry":
        return cls(
            Date=day,
            Well=well,
            MeterReading=meter_reading,
            TotalM3=total_m3,
            Allocation=result.Allocation,
            OverflowWarning=result.OverflowWarning,
        )

    @property
    def key(self) -> str:
        return entry_key(self.Date, self.Well)

    def full_day(self) -> list[HourlyVolume]:
        """All 24 hours, zero-filled where Allocation has no entry"""
        by_hour = {elt.Hour: elt.VolumeM3 for elt in self.Allocation}
        return [
            HourlyVolume(Hour=h, VolumeM3=by_hour.get(h, 0.0))
            for h in range(HOURS_PER_DAY)
        ]
