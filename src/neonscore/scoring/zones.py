from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Literal

from neonscore.core.config.tunables import EngineConfig

GaugeStatus = Literal["STABLE", "CRITICAL"]


class Zone(str, Enum):
    GREEN = "green"
    YELLOW = "yellow"
    RED = "red"


@dataclass(frozen=True, slots=True)
class ZoneReading:
    zone: Zone
    multiplier: float


def classify(pressure: float, config: EngineConfig) -> ZoneReading:
    """
    Band pressure into a zone. Bounds belong to the lower zone.
    """
    multipliers = config.zone_multipliers
    if pressure <= config.green_max:
        return ZoneReading(zone=Zone.GREEN, multiplier=multipliers.green)
    if pressure <= config.yellow_max:
        return ZoneReading(zone=Zone.YELLOW, multiplier=multipliers.yellow)
    return ZoneReading(zone=Zone.RED, multiplier=multipliers.red)


def gauge_status(pressure: float, config: EngineConfig) -> GaugeStatus:
    threshold = min(config.critical_threshold, config.pressure_max)
    return "CRITICAL" if pressure > threshold else "STABLE"
