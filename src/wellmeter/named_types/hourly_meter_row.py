from typing import Literal

from pydantic import BaseModel

from wellmeter.property_format import HourOfDay, MeterReadingM3, VolumeM3


class HourlyMeterRow(BaseModel):
    """
    An hour of a saved day with the meter value reconstructed at the end of
    that hour: the previous day's final reading plus the volumes allocated
    so far.
    """

    Hour: HourOfDay
    VolumeM3: VolumeM3
    MeterReading: MeterReadingM3
    TypeName: Literal["hourly.meter.row"] = "hourly.meter.row"
    Version: Literal["000"] = "000"
