from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import orjson

from neonscore.core.engine.state import EngineState
from neonscore.core.session.eventlog import LogView
from neonscore.scoring.zones import GaugeStatus, Zone


@dataclass(frozen=True, slots=True)
class Snapshot:
    """
    Immutable view of the engine handed to the presentation layer.
    """

    state: EngineState
    session_id: str | None
    tick: int

    score: float
    high_score: float

    pressure: float
    zone: Zone
    zone_multiplier: float
    gauge_status: GaugeStatus

    combo: int
    combo_multiplier: float
    combo_timer: int

    log: LogView

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "session_id": self.session_id,
            "tick": self.tick,
            "score": self.score,
            "high_score": self.high_score,
            "pressure": self.pressure,
            "zone": self.zone.value,
            "zone_multiplier": self.zone_multiplier,
            "gauge_status": self.gauge_status,
            "combo": self.combo,
            "combo_multiplier": self.combo_multiplier,
            "combo_timer": self.combo_timer,
            "log": [
                {
                    "id": e.id,
                    "actor": e.actor,
                    "description": e.description,
                    "timestamp": e.timestamp,
                }
                for e in self.log
            ],
        }

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())
