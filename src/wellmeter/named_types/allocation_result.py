from typing import List, Literal, Optional

from pydantic import BaseModel, model_validator
from typing_extensions import Self

from wellmeter.named_types.hourly_volume import HourlyVolume

HOURS_PER_DAY = 24


class AllocationResult(BaseModel):
    """
    Hourly allocation of one day's volume for one well.

    OverflowWarning is present if and only if the volume could not be kept
    under the well's hourly limit while still summing to the day total. When
    it is set the hourly volumes may sum to less than the requested total.
    """

    Allocation: List[HourlyVolume]
    OverflowWarning: Optional[str] = None
    TypeName: Literal["allocation.result"] = "allocation.result"
    Version: Literal["000"] = "000"

    @model_validator(mode="after")
    def check_axiom_1(self) -> Self:
        """
        Axiom 1: One entry per hour of the day, ordered by hour.
        Allocation has 24 entries with Hour equal to 0, 1, ..., 23.
        """
        hours = [elt.Hour for elt in self.Allocation]
        if hours != list(range(HOURS_PER_DAY)):
            raise ValueError(
                "Axiom 1 failed: Allocation must hold hours 0..23 in order. "
                f"Got {hours}"
            )
        return self

    @classmethod
    def zeros(cls) -> "AllocationResult":
        return cls(
            Allocation=[HourlyVolume(Hour=h, VolumeM3=0) for h in range(HOURS_PER_DAY)]
        )

    @property
    def has_overflow(self) -> bool:
        return self.OverflowWarning is not None

    def volumes(self) -> list[float]:
        return [elt.VolumeM3 for elt in self.Allocation]

    def total_m3(self) -> float:
        return sum(self.volumes())
