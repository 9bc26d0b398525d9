import math
from datetime import date
from typing import Annotated

from pydantic import BeforeValidator, Field

ENTRY_KEY_DATE_LENGTH = 10


def is_well_name(v: str) -> str:
    """
    WellName format: a non-empty free-form identifier with no leading or
    trailing whitespace. Matching against the well table is case-sensitive,
    so the value is not normalized.
    """
    if not isinstance(v, str):
        raise ValueError(f"<{v}> must be string. Got type <{type(v)}>")  # noqa: TRY004
    if not v:
        raise ValueError("WellName must not be empty")
    if v != v.strip():
        raise ValueError(f"<{v}>: WellName must not have surrounding whitespace")
    return v


def is_finite_non_negative(v: float) -> float:
    try:
        f = float(v)
    except (TypeError, ValueError) as e:
        raise ValueError(f"<{v}> is not a number") from e
    if not math.isfinite(f):
        raise ValueError(f"<{v}> must be finite")
    if f < 0:
        raise ValueError(f"<{v}> must be non-negative")
    return f


def is_entry_key(v: str) -> str:
    """
    EntryKey format: YYYY-MM-DD-<WellName>, e.g. 2024-03-01-MAAG.
    The well part may itself contain hyphens.
    """
    if not isinstance(v, str):
        raise ValueError(f"<{v}> must be string. Got type <{type(v)}>")  # noqa: TRY004
    date_part = v[:ENTRY_KEY_DATE_LENGTH]
    try:
        date.fromisoformat(date_part)
    except ValueError as e:
        raise ValueError(f"<{v}>: EntryKey must start with a YYYY-MM-DD date") from e
    if v[ENTRY_KEY_DATE_LENGTH : ENTRY_KEY_DATE_LENGTH + 1] != "-":
        raise ValueError(f"<{v}>: EntryKey date and well must be separated by '-'")
    is_well_name(v[ENTRY_KEY_DATE_LENGTH + 1 :])
    return v


def entry_key(day: date, well: str) -> str:
    return f"{day.isoformat()}-{well}"


EntryKey = Annotated[str, BeforeValidator(is_entry_key)]
HourOfDay = Annotated[int, Field(ge=0, le=23)]
MeterReadingM3 = Annotated[float, BeforeValidator(is_finite_non_negative)]
VolumeM3 = Annotated[float, BeforeValidator(is_finite_non_negative)]
WellName = Annotated[str, BeforeValidator(is_well_name)]
