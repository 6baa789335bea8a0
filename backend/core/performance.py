"""Stall and approach speed calculations from POH performance tables.

Stall speeds are read off a weight-ordered table by piecewise-linear
interpolation. Approach speed (Vref) is 1.3 x stall plus half the gust
factor; the maneuvering reference (DMMS) is the clean stall speed times a
per-profile factor.
"""

import math
from typing import Dict, Optional, Sequence, Tuple

from backend.config.constants import (
    DEFAULT_WEIGHT,
    GUST_ADDITIVE_FACTOR,
    STALL_TO_APPROACH_FACTOR,
)
from backend.core.models import AircraftProfile, PerformanceResult, PerformanceSample, round_half_up
from common import logger as debug_logger


def interpolate(target_weight: float, config_key: str, samples: Sequence[PerformanceSample]) -> float:
    """Interpolate the speed for a configuration at a gross weight.

    Weights outside the table are clamped to the nearest end row rather than
    extrapolated. Samples must already be sorted by ascending weight.

    Args:
        target_weight: Gross weight in lbs
        config_key: Configuration key (e.g., "clean", "flaps15")
        samples: Weight-ascending performance rows

    Returns:
        Interpolated speed in knots (0 for missing values or an empty table)
    """
    if not samples:
        debug_logger.warning(f"Interpolation requested for '{config_key}' with an empty table")
        return 0.0

    lower = samples[0]
    upper = samples[-1]

    safe_weight = max(lower.weight, min(upper.weight, target_weight))

    for i in range(len(samples) - 1):
        if samples[i].weight <= safe_weight <= samples[i + 1].weight:
            lower = samples[i]
            upper = samples[i + 1]
            break

    if lower.weight == upper.weight:
        return lower.speed_for(config_key)

    lower_val = lower.speed_for(config_key)
    upper_val = upper.speed_for(config_key)

    ratio = (safe_weight - lower.weight) / (upper.weight - lower.weight)
    return lower_val + ratio * (upper_val - lower_val)


def gust_additive(gust_factor: float) -> float:
    """Knots added to Vref for a gust factor."""
    return gust_factor * GUST_ADDITIVE_FACTOR


def gust_additive_display(gust_factor: float) -> int:
    """Whole knots added to Vref, rounded up for display."""
    return math.ceil(gust_additive(gust_factor))


def approach_speed(stall_speed: float, gust_factor: float) -> float:
    """Vref for a stall speed and gust factor."""
    return stall_speed * STALL_TO_APPROACH_FACTOR + gust_additive(gust_factor)


def find_reference_key(profile: AircraftProfile) -> Optional[str]:
    """Key of the clean configuration that DMMS is based on.

    The first config whose key contains 'clean' wins, falling back to the
    first config of the profile.
    """
    for cfg in profile.configs:
        if "clean" in cfg.key:
            return cfg.key
    return profile.configs[0].key if profile.configs else None


def weight_bounds(profile: AircraftProfile) -> Tuple[float, float]:
    """Lightest and heaviest weight in the profile's table."""
    if not profile.performance_data:
        return (DEFAULT_WEIGHT, DEFAULT_WEIGHT)
    return (profile.performance_data[0].weight, profile.performance_data[-1].weight)


def clamp_weight(weight: float, profile: AircraftProfile) -> float:
    """Keep a weight inside the profile's table range."""
    min_weight, max_weight = weight_bounds(profile)
    return max(min_weight, min(max_weight, weight))


def compute_performance(weight: float, gust_factor: float, profile: AircraftProfile) -> PerformanceResult:
    """Compute stall, approach and maneuvering speeds for a profile.

    Args:
        weight: Gross weight in lbs
        gust_factor: Peak gust in knots (0 when calm)
        profile: Aircraft profile supplying table, configs and DMMS factor

    Returns:
        PerformanceResult with per-config stall/approach speeds and the
        maneuvering speed and buffer in whole knots
    """
    stall_speeds: Dict[str, float] = {}
    for cfg in profile.configs:
        stall_speeds[cfg.key] = interpolate(weight, cfg.key, profile.performance_data)

    approach_speeds: Dict[str, float] = {
        cfg.key: approach_speed(stall_speeds.get(cfg.key, 0), gust_factor)
        for cfg in profile.configs
    }

    reference_key = find_reference_key(profile)
    clean_stall = stall_speeds.get(reference_key, 0) if reference_key else 0

    maneuvering_speed = round_half_up(clean_stall * profile.dmms_factor)
    maneuvering_buffer = round_half_up(maneuvering_speed - clean_stall)

    return PerformanceResult(
        stall_speeds=stall_speeds,
        approach_speeds=approach_speeds,
        maneuvering_speed=maneuvering_speed,
        maneuvering_buffer=maneuvering_buffer,
        reference_key=reference_key,
    )
