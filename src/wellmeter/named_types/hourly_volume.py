from typing import Literal

from pydantic import BaseModel

from wellmeter.property_format import HourOfDay, VolumeM3


class HourlyVolume(BaseModel):
    """Volume in cubic meters allocated to one hour of the day."""

    Hour: HourOfDay
    VolumeM3: VolumeM3
    TypeName: Literal["hourly.volume"] = "hourly.volume"
    Version: Literal["000"] = "000"
