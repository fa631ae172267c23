# src/neonscore/core/events/actions.py
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Literal

from neonscore.core.events.base import Event

PlayerAction = Literal["success", "fail", "release"]


@dataclass(frozen=True, slots=True)
class ActionApplied(Event):
    """
    A player action was accepted and folded into the engine state.
    """

    event_type: ClassVar[str] = "action.applied"

    session_id: str
    action: PlayerAction
    zone: str
    score_delta: float
    pressure: float
    combo: int
    combo_multiplier: float


@dataclass(frozen=True, slots=True)
class ActionIgnored(Event):
    """
    A call arrived in a state that does not accept it. Not an error.
    """

    event_type: ClassVar[str] = "action.ignored"

    session_id: str
    action: str
    state: str
