from __future__ import annotations

import structlog

from neonscore.core.engine.state import EngineState

log = structlog.get_logger()

_LEGAL: dict[EngineState, frozenset[EngineState]] = {
    EngineState.IDLE: frozenset({EngineState.PLAYING}),
    EngineState.PLAYING: frozenset({EngineState.EXPLODED, EngineState.FINISHED, EngineState.IDLE}),
    EngineState.EXPLODED: frozenset({EngineState.PLAYING, EngineState.IDLE}),
    EngineState.FINISHED: frozenset({EngineState.IDLE}),
}


class EngineLifecycle:
    """
    Explicit engine state holder.

    The engine checks `state` before doing anything, so an illegal
    transition reaching this class is a programming error and raises.
    Returning to IDLE is always allowed (reset).
    """

    def __init__(self) -> None:
        self._state = EngineState.IDLE

    @property
    def state(self) -> EngineState:
        return self._state

    def can_transition(self, target: EngineState) -> bool:
        return target is EngineState.IDLE or target in _LEGAL[self._state]

    def transition(self, target: EngineState) -> EngineState:
        previous = self._state
        if not self.can_transition(target):
            raise RuntimeError(f"illegal transition: {previous.value} -> {target.value}")

        self._state = target
        log.debug("engine.transition", previous=previous.value, state=target.value)
        return previous
