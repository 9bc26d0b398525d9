from datetime import date
from typing import Literal, Optional

from pydantic import BaseModel, Field, model_validator
from typing_extensions import Self

from wellmeter.property_format import WellName


class ReportFilter(BaseModel):
    """Selects ledger entries for reports. Unset fields match everything."""

    Well: Optional[WellName] = None
    Year: Optional[int] = Field(default=None, ge=1900, le=9999)
    Month: Optional[int] = Field(default=None, ge=1, le=12)
    StartDate: Optional[date] = None
    EndDate: Optional[date] = None
    TypeName: Literal["report.filter"] = "report.filter"
    Version: Literal["000"] = "000"

    @model_validator(mode="after")
    def check_axiom_1(self) -> Self:
        """
        Axiom 1: If both StartDate and EndDate are set, StartDate <= EndDate.
        """
        if self.StartDate and self.EndDate and self.StartDate > self.EndDate:
            raise ValueError(
                f"Axiom 1 failed: StartDate {self.StartDate} is after EndDate {self.EndDate}"
            )
        return self

    def matches(self, day: date, well: str) -> bool:
        if self.Well is not None and well != self.Well:
            return False
        if self.Year is not None and day.year != self.Year:
            return False
        if self.Month is not None and day.month != self.Month:
            return False
        if self.StartDate is not None and day < self.StartDate:
            return False
        if self.EndDate is not None and day > self.EndDate:
            return False
        return True

    @property
    def is_empty(self) -> bool:
        return (
            self.Well is None
            and self.Year is None
            and self.Month is None
            and self.StartDate is None
            and self.EndDate is None
        )
