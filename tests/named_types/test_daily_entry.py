"""Tests daily.entry type, version 000"""

from datetime import date

import pytest
from pydantic import ValidationError

from wellmeter.named_types import AllocationResult, DailyEntry


def test_daily_entry_generated() -> None:
    d = {
        "Date": "2024-03-01",
        "Well": "MAAG",
        "MeterReading": 1520.5,
        "TotalM3": 20.5,
        "Allocation": [
            {"Hour": 6, "VolumeM3": 10.0, "TypeName": "hourly.volume", "Version": "000"},
            {"Hour": 7, "VolumeM3": 10.5, "TypeName": "hourly.volume", "Version": "000"},
        ],
        "TypeName": "daily.entry",
        "Version": "000",
    }

    t = DailyEntry.model_validate(d)
    assert t.model_dump(exclude_none=True, mode="json") == d
    assert t.Date == date(2024, 3, 1)
    assert t.key == "2024-03-01-MAAG"

    full_day = t.full_day()
    assert [elt.Hour for elt in full_day] == list(range(24))
    assert full_day[6].VolumeM3 == 10.0
    assert full_day[7].VolumeM3 == 10.5
    assert sum(elt.VolumeM3 for elt in full_day) == 20.5

    # entries saved before an allocation existed
    assert DailyEntry.model_validate({**d, "Allocation": []}).full_day()[7].VolumeM3 == 0

    ######################################
    # Axiom 1: at most one entry per hour
    ######################################

    with pytest.raises(ValidationError):
        DailyEntry.model_validate(
            {**d, "Allocation": d["Allocation"] + [d["Allocation"][0]]}
        )

    with pytest.raises(ValidationError):
        DailyEntry.model_validate({**d, "Well": ""})

    with pytest.raises(ValidationError):
        DailyEntry.model_validate({**d, "Well": " MAAG"})

    with pytest.raises(ValidationError):
        DailyEntry.model_validate({**d, "MeterReading": -1})


def test_daily_entry_from_result() -> None:
    result = AllocationResult.zeros()
    t = DailyEntry.from_result(
        day=date(2024, 2, 29),
        well="PECUÁRIA",
        meter_reading=10.0,
        total_m3=0.0,
        result=result,
    )
    assert t.key == "2024-02-29-PECUÁRIA"
    assert t.Allocation == result.Allocation
    assert t.OverflowWarning is None
