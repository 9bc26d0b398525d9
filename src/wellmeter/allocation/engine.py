"""Deterministic hourly allocation of a day's drawn volume.

The day total is spread over the well's operational hours following its
weight pattern. Hours pushed over the hourly limit are clamped and the excess
is handed to the remaining hours in proportion to their headroom, for a
bounded number of rounds. A sum correction absorbs floating point slop, a
final clamp enforces the limit, and volumes are rounded to the cent.

When the limit makes an exact in-window distribution impossible the result
carries an OverflowWarning and its hours may sum to less than the total.
Nothing here does I/O or keeps state, and no float total makes it raise.
"""

import math
from decimal import ROUND_HALF_UP, Decimal
from typing import Mapping, Optional, Sequence

from wellmeter.data_classes.well_table import DEFAULT_WELL, WELL_CONFIGS, get_well_config
from wellmeter.named_types import AllocationResult, HourlyVolume, WellConfig
from wellmeter.named_types.allocation_result import HOURS_PER_DAY

MAX_REDISTRIBUTION_ROUNDS = 10
EXCESS_EPSILON = 0.01
SUM_TOLERANCE = 0.001
LIMIT_TOLERANCE = 0.001
OUTPUT_DECIMALS = 2
CENT = Decimal(1).scaleb(-OUTPUT_DECIMALS)
OVERFLOW_WARNING = "Hourly volume limit exceeded."


def allocate(
    total_daily_volume: float,
    well: str,
    configs: Mapping[str, WellConfig] = WELL_CONFIGS,
    default_well: str = DEFAULT_WELL,
) -> AllocationResult:
    """Allocate `total_daily_volume` (m3) over the hours of `well`.

    Unknown wells use the `default_well` configuration. A custom `configs`
    table without it raises MissingDefaultWell; build tables with
    make_well_table to catch that up front.
    """
    config = get_well_config(well, configs, default_well)
    return allocate_for_config(total_daily_volume, config)


def allocate_for_config(total_daily_volume: float, config: WellConfig) -> AllocationResult:
    # NaN and infinities are treated as no consumption
    if not math.isfinite(total_daily_volume) or total_daily_volume <= 0:
        return AllocationResult.zeros()

    hours = config.OperationalHours
    limit = config.hourly_limit
    volumes = _weighted_distribution(total_daily_volume, config)
    at_limit = [False] * HOURS_PER_DAY

    overflow = _enforce_limit(volumes, at_limit, hours, limit)
    if _correct_sum(total_daily_volume, volumes, at_limit, hours):
        overflow = True
    if _clamp_to_limit(volumes, limit):
        overflow = True

    # clamped volumes within LIMIT_TOLERANCE may still round up past the limit
    limit_in_cents = _floor_to_cent(limit)
    rounded = [min(_round_half_up(v), limit_in_cents) for v in volumes]
    if not overflow:
        overflow = _fold_rounding_residual(total_daily_volume, rounded, at_limit, hours, limit)

    return AllocationResult(
        Allocation=[HourlyVolume(Hour=h, VolumeM3=rounded[h]) for h in range(HOURS_PER_DAY)],
        OverflowWarning=OVERFLOW_WARNING if overflow else None,
    )


def _weighted_distribution(total: float, config: WellConfig) -> list[float]:
    volumes = [0.0] * HOURS_PER_DAY
    pattern_sum = sum(config.WeightPattern)
    for hour, weight in zip(config.OperationalHours, config.WeightPattern):
        volumes[hour] = total * weight / pattern_sum
    return volumes


def _enforce_limit(
    volumes: list[float],
    at_limit: list[bool],
    hours: Sequence[int],
    limit: float,
) -> bool:
    """
    Clamp hours over the limit and hand their excess to the hours that still
    have headroom, proportionally to that headroom. A clamped hour never
    receives volume again. Returns True if the excess could not be placed.
    """
    for _ in range(MAX_REDISTRIBUTION_ROUNDS):
        total_excess = 0.0
        for hour in hours:
            if not at_limit[hour] and volumes[hour] > limit:
                total_excess += volumes[hour] - limit
                volumes[hour] = limit
                at_limit[hour] = True

        if total_excess < EXCESS_EPSILON:
            return False

        pool = [hour for hour in hours if not at_limit[hour]]
        if not pool:
            return True

        headroom = {hour: limit - volumes[hour] for hour in pool}
        total_capacity = sum(headroom.values())

        if total_capacity < total_excess:
            # Place everything anyway; the final clamp drops what does not fit
            for hour in pool:
                if total_capacity > 0:
                    share = headroom[hour] / total_capacity
                else:
                    share = 1 / len(pool)
                volumes[hour] += total_excess * share
            return True

        for hour in pool:
            volumes[hour] += total_excess * headroom[hour] / total_capacity
    return False


def _correction_target(
    volumes: Sequence[float], at_limit: Sequence[bool], hours: Sequence[int]
) -> Optional[int]:
    """Operational hour below the limit with the largest volume (lowest hour on ties)"""
    eligible = [hour for hour in hours if not at_limit[hour]]
    if not eligible:
        return None
    return max(eligible, key=lambda hour: volumes[hour])


def _correct_sum(
    total: float,
    volumes: list[float],
    at_limit: list[bool],
    hours: Sequence[int],
) -> bool:
    """
    Put the gap between the requested total and the current sum on a single
    hour. If every operational hour is at its limit the gap goes to the first
    operational hour regardless and the allocation is flagged, even though
    that pushes the hour over the limit.
    """
    difference = total - sum(volumes)
    if abs(difference) <= SUM_TOLERANCE:
        return False
    target = _correction_target(volumes, at_limit, hours)
    if target is not None:
        volumes[target] += difference
        return False
    volumes[hours[0]] += difference
    return True


def _clamp_to_limit(volumes: list[float], limit: float) -> bool:
    if max(volumes) <= limit + LIMIT_TOLERANCE:
        return False
    for hour, volume in enumerate(volumes):
        if volume > limit:
            volumes[hour] = limit
    return True


def _round_half_up(volume: float) -> float:
    """Round to the cent with ties going up, on the exact binary value"""
    return float(Decimal(volume).quantize(CENT, rounding=ROUND_HALF_UP))


def _floor_to_cent(limit: float) -> float:
    if math.isinf(limit):
        return limit
    return math.floor(round(limit * 100, 6)) / 100


def _fold_rounding_residual(
    total: float,
    rounded: list[float],
    at_limit: list[bool],
    hours: Sequence[int],
    limit: float,
) -> bool:
    """
    Spread the cents lost or gained by rounding over the operational hours,
    starting with the correction target of the sum correction. Each hour
    takes only what keeps it within [0, limit]. Returns True if some of the
    residual could not be placed.
    """
    residual = round((total - sum(rounded)) * 100)
    if residual == 0:
        return False
    limit_cents = math.inf if math.isinf(limit) else round(_floor_to_cent(limit) * 100)
    for hour in sorted(hours, key=lambda h: (at_limit[h], -rounded[h], h)):
        cents = round(rounded[hour] * 100)
        if residual > 0:
            take = min(residual, max(limit_cents - cents, 0))
        else:
            take = max(residual, -cents)
        if take:
            rounded[hour] = (cents + take) / 100
            residual -= take
        if residual == 0:
            return False
    return True
