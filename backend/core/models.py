"""
Data models for aircraft performance profiles and calculator results.
Provides structured data classes instead of fragile dict-based access.

The ``to_dict``/``from_dict`` pairs use the persisted JSON shape
(camelCase keys, ``lbs``/``val`` field names) so stored profiles stay
readable across versions that share a store key.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from backend.config.constants import DEFAULT_DMMS_FACTOR


def round_half_up(value: float) -> int:
    """Round to whole knots/lbs with halves going up (60.5 -> 61)."""
    return math.floor(value + 0.5)


@dataclass(frozen=True)
class PerformanceSample:
    """One row of a POH stall-speed table: a gross weight and its speeds per configuration."""
    weight: float
    speeds: Dict[str, float] = field(default_factory=dict)

    def speed_for(self, config_key: str) -> float:
        """Speed for a configuration, 0 when the table has no value for it."""
        return self.speeds.get(config_key) or 0

    def to_dict(self) -> Dict[str, Any]:
        return {"lbs": self.weight, "speeds": dict(self.speeds)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PerformanceSample":
        return cls(
            weight=float(data.get("lbs", 0) or 0),
            speeds={k: float(v or 0) for k, v in (data.get("speeds") or {}).items()},
        )


@dataclass(frozen=True)
class SpeedConfig:
    """A flap/gear configuration column of the performance table."""
    key: str
    label: str
    sub_label: str = ""
    color: Optional[str] = None  # 'blue' marks the highlighted row

    @property
    def highlighted(self) -> bool:
        return self.color == "blue"

    def to_dict(self) -> Dict[str, Any]:
        data = {"key": self.key, "label": self.label, "subLabel": self.sub_label}
        if self.color:
            data["color"] = self.color
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpeedConfig":
        return cls(
            key=str(data["key"]),
            label=str(data.get("label", "")),
            sub_label=str(data.get("subLabel", "")),
            color=data.get("color"),
        )


@dataclass(frozen=True)
class WeightPreset:
    """A quick-pick gross weight. The 'Weight' icon marks max gross."""
    label: str
    value: float
    icon: str = "Weight"

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "val": self.value, "icon": self.icon}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeightPreset":
        return cls(
            label=str(data.get("label", "")),
            value=float(data.get("val", 0) or 0),
            icon=str(data.get("icon", "Weight")),
        )


@dataclass(frozen=True)
class AircraftProfile:
    """An aircraft's performance table, configuration columns and weight presets."""
    id: str
    name: str
    short_name: str
    performance_data: Tuple[PerformanceSample, ...]
    configs: Tuple[SpeedConfig, ...]
    presets: Tuple[WeightPreset, ...] = ()
    dmms_factor: float = DEFAULT_DMMS_FACTOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "shortName": self.short_name,
            "dmmsFactor": self.dmms_factor,
            "configs": [c.to_dict() for c in self.configs],
            "performanceData": [s.to_dict() for s in self.performance_data],
            "presets": [p.to_dict() for p in self.presets],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AircraftProfile":
        """
        Build a profile from its stored form.

        Raises:
            KeyError: if 'id' or a config 'key' is missing
            ValueError: if a numeric field cannot be converted
        """
        name = str(data.get("name", ""))
        return cls(
            id=str(data["id"]),
            name=name,
            short_name=str(data.get("shortName") or name[:4].upper()),
            performance_data=tuple(
                PerformanceSample.from_dict(s) for s in data.get("performanceData", [])
            ),
            configs=tuple(SpeedConfig.from_dict(c) for c in data.get("configs", [])),
            presets=tuple(WeightPreset.from_dict(p) for p in data.get("presets", [])),
            dmms_factor=float(data.get("dmmsFactor", DEFAULT_DMMS_FACTOR)),
        )


@dataclass
class PerformanceResult:
    """Speeds for one weight/gust combination."""
    stall_speeds: Dict[str, float]
    approach_speeds: Dict[str, float]
    maneuvering_speed: int
    maneuvering_buffer: int
    reference_key: Optional[str] = None

    def to_rows(self, configs: Tuple[SpeedConfig, ...]) -> list:
        """
        Convert to display rows in configuration order.

        Returns:
            List of tuples: (LABEL, SUB LABEL, STALL, APPROACH, ADDITIVE)
            Speeds are rounded to whole knots.
        """
        rows = []
        for cfg in configs:
            stall = self.stall_speeds.get(cfg.key, 0)
            approach = self.approach_speeds.get(cfg.key, 0)
            rows.append((
                cfg.label,
                cfg.sub_label,
                str(round_half_up(stall)),
                str(round_half_up(approach)),
                f"+{round_half_up(approach - stall)} kts",
            ))
        return rows
