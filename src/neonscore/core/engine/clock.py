from __future__ import annotations

import asyncio
from typing import Any, Callable, Protocol

import structlog

log = structlog.get_logger()

TickHandler = Callable[[], Any]


class Clock(Protocol):
    """
    Periodic time source. One tick == one unit of decay / combo countdown.
    """

    @property
    def running(self) -> bool:
        ...

    def subscribe(self, handler: TickHandler) -> None:
        ...

    def start(self) -> None:
        ...

    def stop(self) -> None:
        ...


class _HandlerList:
    def __init__(self) -> None:
        self._handlers: list[TickHandler] = []
        self._ticks = 0

    @property
    def ticks(self) -> int:
        return self._ticks

    def subscribe(self, handler: TickHandler) -> None:
        self._handlers.append(handler)

    def _fire(self) -> None:
        self._ticks += 1
        for handler in self._handlers:
            handler()


class ManualClock(_HandlerList):
    """
    Logical clock for tests and replays: ticks only happen on advance().
    """

    def __init__(self) -> None:
        super().__init__()
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    def advance(self, ticks: int = 1) -> int:
        """
        Fire `ticks` ticks synchronously. Returns how many were delivered
        (0 while stopped).
        """
        if ticks < 0:
            raise ValueError("ticks must be >= 0")
        if not self._running:
            return 0

        for _ in range(ticks):
            self._fire()
        return ticks


class IntervalClock(_HandlerList):
    """
    Real-time driver: fires a tick every `interval_ms` on the running event loop.

    Handlers run on the loop thread, one after another, so the engine keeps
    its single-caller contract without locks.
    """

    def __init__(self, *, interval_ms: int) -> None:
        super().__init__()
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        self._interval = interval_ms / 1000.0
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        self._running = True

    def stop(self) -> None:
        self._running = False

    async def run(self, *, max_ticks: int | None = None) -> int:
        """
        Tick until stop() or until `max_ticks` ticks were delivered.
        Returns the number of ticks delivered by this call.
        """
        if max_ticks is not None and max_ticks <= 0:
            raise ValueError("max_ticks must be > 0")

        self.start()
        delivered = 0
        log.info("clock.started", interval_s=self._interval, max_ticks=max_ticks)

        try:
            while self._running and (max_ticks is None or delivered < max_ticks):
                await asyncio.sleep(self._interval)
                if not self._running:
                    break
                self._fire()
                delivered += 1
        finally:
            self._running = False
            log.info("clock.stopped", delivered=delivered)

        return delivered
