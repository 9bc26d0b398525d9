"""Tests allocation.result type, version 000"""

import pytest
from pydantic import ValidationError

from wellmeter.named_types import AllocationResult


def hourly_dicts(volumes: list[float]) -> list[dict]:
    return [
        {
            "Hour": hour,
            "VolumeM3": volume,
            "TypeName": "hourly.volume",
            "Version": "000",
        }
        for hour, volume in enumerate(volumes)
    ]


def test_allocation_result_generated() -> None:
    volumes = [0.0] * 24
    volumes[8] = 4.25
    volumes[9] = 5.75
    d = {
        "Allocation": hourly_dicts(volumes),
        "OverflowWarning": "Hourly volume limit exceeded.",
        "TypeName": "allocation.result",
        "Version": "000",
    }

    t = AllocationResult.model_validate(d)
    assert t.model_dump(exclude_none=True) == d
    assert t.has_overflow
    assert t.volumes() == volumes
    assert t.total_m3() == 10.0

    d2 = {**d}
    del d2["OverflowWarning"]
    assert not AllocationResult.model_validate(d2).has_overflow

    ######################################
    # Axiom 1: hours 0..23 in order
    ######################################

    with pytest.raises(ValidationError):
        AllocationResult.model_validate({**d, "Allocation": hourly_dicts(volumes)[:23]})

    with pytest.raises(ValidationError):
        AllocationResult.model_validate(
            {**d, "Allocation": list(reversed(hourly_dicts(volumes)))}
        )

    with pytest.raises(ValidationError):
        AllocationResult.model_validate({**d, "Allocation": []})


def test_allocation_result_zeros() -> None:
    t = AllocationResult.zeros()
    assert [elt.Hour for elt in t.Allocation] == list(range(24))
    assert t.volumes() == [0.0] * 24
    assert t.OverflowWarning is None
