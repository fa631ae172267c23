from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum


class EngineState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    EXPLODED = "exploded"
    FINISHED = "finished"


def new_session_id() -> str:
    created_at = datetime.now(timezone.utc)
    return f"{created_at.strftime('%Y%m%dT%H%M%SZ')}_{secrets.token_hex(4)}"


@dataclass(slots=True)
class SessionCounters:
    """
    Deterministic counters for one engine.

    - tick: ticks consumed by the current session
    - sequence: engine-lifetime monotonic ordering key for published events

    Guardrails:
      - next_tick only valid while a session is open
      - sequence never rewinds, not even across sessions
    """

    session_id: str | None = None
    tick: int = 0
    sequence: int = 0

    @property
    def is_open(self) -> bool:
        return self.session_id is not None

    def open(self, session_id: str) -> None:
        if self.is_open:
            raise RuntimeError("session already open")
        self.session_id = session_id
        self.tick = 0

    def close(self) -> None:
        self.session_id = None
        self.tick = 0

    def next_tick(self) -> int:
        if not self.is_open:
            raise RuntimeError("cannot advance tick without an open session")
        self.tick += 1
        return self.tick

    def next_sequence(self) -> int:
        self.sequence += 1
        return self.sequence
