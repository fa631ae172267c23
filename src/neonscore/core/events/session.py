# src/neonscore/core/events/session.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from neonscore.core.events.base import Event


@dataclass(frozen=True, slots=True)
class SessionStarted(Event):
    """
    Emitted on IDLE -> PLAYING.
    """

    event_type: ClassVar[str] = "session.started"

    session_id: str
    high_score: float


@dataclass(frozen=True, slots=True)
class SessionReset(Event):
    """
    Emitted whenever the engine returns to IDLE.
    """

    event_type: ClassVar[str] = "session.reset"

    session_id: str
    previous_state: str
    high_score: float


@dataclass(frozen=True, slots=True)
class Exploded(Event):
    """
    Pressure reached the ceiling. Score is preserved, transient state is not.
    """

    event_type: ClassVar[str] = "session.exploded"

    session_id: str
    score: float
    trigger: str  # action or "tick"


@dataclass(frozen=True, slots=True)
class ExplosionAcknowledged(Event):
    event_type: ClassVar[str] = "session.explosion_acknowledged"

    session_id: str
    resumed: bool  # False => went back to IDLE


@dataclass(frozen=True, slots=True)
class SessionFinished(Event):
    """
    Target score reached.
    """

    event_type: ClassVar[str] = "session.finished"

    session_id: str
    score: float
    target_score: float


@dataclass(frozen=True, slots=True)
class EngineTick(Event):
    """
    Emitted for every tick the engine consumed while PLAYING.
    """

    event_type: ClassVar[str] = "engine.tick"

    session_id: str
    tick: int
    pressure: float
    combo_expired: bool
    bleed_bonus: int
