import math
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, PositiveFloat, model_validator
from typing_extensions import Self

from wellmeter.property_format import HourOfDay


class WellConfig(BaseModel):
    """
    Operating window, per-hour flow limit and allocation curve for one well.

    WeightPattern[i] is the relative weight of OperationalHours[i]. A
    HourlyLimitM3 of None means the well has no per-hour limit.
    """

    OperationalHours: tuple[HourOfDay, ...]
    HourlyLimitM3: Optional[PositiveFloat] = None
    WeightPattern: tuple[PositiveFloat, ...]
    TypeName: Literal["well.config"] = "well.config"
    Version: Literal["000"] = "000"

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def check_axiom_1(self) -> Self:
        """
        Axiom 1: OperationalHours is an ordered set.
        There is at least one hour and the hours are strictly increasing.
        """
        if len(self.OperationalHours) == 0:
            raise ValueError("Axiom 1 failed: OperationalHours must not be empty")
        for earlier, later in zip(self.OperationalHours, self.OperationalHours[1:]):
            if later <= earlier:
                raise ValueError(
                    "Axiom 1 failed: OperationalHours must be strictly increasing. "
                    f"Got {list(self.OperationalHours)}"
                )
        return self

    @model_validator(mode="after")
    def check_axiom_2(self) -> Self:
        """
        Axiom 2: WeightPattern has one weight per operational hour.
        """
        if len(self.WeightPattern) != len(self.OperationalHours):
            raise ValueError(
                f"Axiom 2 failed: WeightPattern has {len(self.WeightPattern)} weights "
                f"for {len(self.OperationalHours)} OperationalHours"
            )
        return self

    @property
    def hourly_limit(self) -> float:
        if self.HourlyLimitM3 is None:
            return math.inf
        return self.HourlyLimitM3

    @property
    def has_limit(self) -> bool:
        return self.HourlyLimitM3 is not None

    def max_daily_volume(self) -> float:
        """Largest total that fits in the window without breaking the limit"""
        return self.hourly_limit * len(self.OperationalHours)
