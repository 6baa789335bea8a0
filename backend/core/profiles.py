"""Aircraft profile catalogue and profile-list state transitions.

Holds the built-in default profile, turns a user-entered table into a new
profile, and provides pure transitions over the (profiles, active id) pair
that the UI persists.
"""

import time
from dataclasses import dataclass, replace
from typing import Optional, Sequence, Tuple

from backend.config.constants import DEFAULT_DMMS_FACTOR, DEFAULT_WEIGHT
from backend.core.models import AircraftProfile, PerformanceSample, SpeedConfig, WeightPreset, round_half_up


# Default profile: Mooney M20J (201). Flaps 0 is labelled Gear Down.
MOONEY_M20J = AircraftProfile(
    id="mooney-m20j-default-v3",
    name="Mooney M20J (201)",
    short_name="M20J",
    dmms_factor=DEFAULT_DMMS_FACTOR,
    configs=(
        SpeedConfig("clean", "Flaps 0°", "Gear Down"),
        SpeedConfig("flaps15", "Flaps 15°", "Gear Down / Takeoff", color="blue"),
        SpeedConfig("flaps33", "Flaps 33°", "Gear Down / Full"),
    ),
    performance_data=(
        PerformanceSample(2200, {"clean": 56.0, "flaps15": 53.0, "flaps33": 50.0}),
        PerformanceSample(2400, {"clean": 59.0, "flaps15": 55.0, "flaps33": 52.0}),
        PerformanceSample(2600, {"clean": 61.5, "flaps15": 56.5, "flaps33": 53.5}),
        PerformanceSample(2740, {"clean": 63.0, "flaps15": 58.0, "flaps33": 56.0}),
    ),
    presets=(
        WeightPreset("Solo + Full Fuel", 1850, "User"),
        WeightPreset("Training (Dual)", 2100, "Users"),
        WeightPreset("Max Gross", 2740, "Weight"),
    ),
)


class ProfileValidationError(ValueError):
    """Raised when a user-entered performance table cannot become a profile."""


def _parse_number(value, what: str) -> float:
    try:
        return float(str(value).strip())
    except (TypeError, ValueError):
        raise ProfileValidationError(f"{what} must be a number (got '{value}')") from None


def _is_highlighted(label: str, sub_label: str) -> bool:
    label_lower = label.lower()
    return "15" in label_lower or "appr" in label_lower or "takeoff" in sub_label.lower()


def build_profile_from_table(
    name: str,
    weights: Sequence,
    columns: Sequence[Tuple[str, str]],
    speed_rows: Sequence[Sequence],
    now_ms: Optional[int] = None,
) -> AircraftProfile:
    """
    Build a profile from a table entered by the user.

    The first column is the clean reference configuration (keyed 'clean' so
    DMMS is computed from it); the rest are keyed 'col-<index>'. Rows are
    sorted by weight so the table is ready for interpolation.

    Args:
        name: Profile name
        weights: Gross weight of each row
        columns: (label, sub label) per configuration column
        speed_rows: Stall speeds, one sequence per row, one value per column
        now_ms: Creation timestamp in milliseconds (used for the id)

    Returns:
        A new AircraftProfile with Light/Mid/Max Gross presets

    Raises:
        ProfileValidationError: if the table is empty, ragged or not numeric
    """
    name = (name or "").strip()
    if not name:
        raise ProfileValidationError("Profile name is required")
    if not columns:
        raise ProfileValidationError("At least one configuration column is required")
    if not weights:
        raise ProfileValidationError("At least one weight row is required")
    if len(speed_rows) != len(weights):
        raise ProfileValidationError(
            f"Expected {len(weights)} speed rows, got {len(speed_rows)}"
        )
    for label, _sub_label in columns:
        if not label.strip():
            raise ProfileValidationError("Every configuration column needs a label")

    keys = ["clean" if i == 0 else f"col-{i}" for i in range(len(columns))]

    rows = []
    for weight, speeds in zip(weights, speed_rows):
        if len(speeds) != len(columns):
            raise ProfileValidationError(
                f"Row for {weight} lbs has {len(speeds)} speeds, expected {len(columns)}"
            )
        row_weight = _parse_number(weight, "Weight")
        row_speeds = {key: _parse_number(s, "Speed") for key, s in zip(keys, speeds)}
        rows.append(PerformanceSample(row_weight, row_speeds))

    rows.sort(key=lambda s: s.weight)
    min_w = rows[0].weight
    max_w = rows[-1].weight

    configs = tuple(
        SpeedConfig(
            key=key,
            label=label.strip(),
            sub_label=sub_label.strip(),
            color="blue" if _is_highlighted(label, sub_label) else None,
        )
        for key, (label, sub_label) in zip(keys, columns)
    )

    presets = (
        WeightPreset("Light", min_w, "User"),
        WeightPreset("Mid", round_half_up((min_w + max_w) / 2), "Users"),
        WeightPreset("Max Gross", max_w, "Weight"),
    )

    if now_ms is None:
        now_ms = int(time.time() * 1000)

    return AircraftProfile(
        id=f"custom-{now_ms}",
        name=name,
        short_name=name[:4].upper(),
        performance_data=tuple(rows),
        configs=configs,
        presets=presets,
        dmms_factor=DEFAULT_DMMS_FACTOR,
    )


def default_weight_for(profile: AircraftProfile) -> float:
    """Max gross preset of a profile, or the global default weight."""
    for preset in profile.presets:
        if preset.icon == "Weight":
            return preset.value
    return DEFAULT_WEIGHT


@dataclass(frozen=True)
class ProfileState:
    """The saved profile list and which profile is selected."""
    profiles: Tuple[AircraftProfile, ...] = (MOONEY_M20J,)
    active_id: str = MOONEY_M20J.id


def active_profile(state: ProfileState) -> AircraftProfile:
    """Selected profile, falling back to the first one when the id is stale."""
    for profile in state.profiles:
        if profile.id == state.active_id:
            return profile
    return state.profiles[0] if state.profiles else MOONEY_M20J


def add_profile(state: ProfileState, profile: AircraftProfile) -> ProfileState:
    """Append a profile and make it active."""
    return ProfileState(profiles=state.profiles + (profile,), active_id=profile.id)


def delete_profile(state: ProfileState, profile_id: str) -> ProfileState:
    """Remove a profile. The last remaining profile is never removed."""
    remaining = tuple(p for p in state.profiles if p.id != profile_id)
    if not remaining:
        return state
    active_id = state.active_id
    if active_id == profile_id:
        active_id = remaining[0].id
    return ProfileState(profiles=remaining, active_id=active_id)


def select_profile(state: ProfileState, profile_id: str) -> ProfileState:
    """Make a profile active. Unknown ids leave the state unchanged."""
    if not any(p.id == profile_id for p in state.profiles):
        return state
    return replace(state, active_id=profile_id)
