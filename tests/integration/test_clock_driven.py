from __future__ import annotations

import asyncio

import pytest

from neonscore.core.engine.clock import IntervalClock, ManualClock
from neonscore.core.engine.engine import PressureEngine
from neonscore.core.engine.state import EngineState


def test_manual_clock_drives_decay() -> None:
    engine = PressureEngine()
    clock = ManualClock()
    engine.attach(clock)

    engine.start()
    engine.success()

    assert clock.advance(4) == 0  # stopped clock delivers nothing
    assert engine.snapshot().pressure == 10.0

    clock.start()
    clock.advance(4)

    snap = engine.snapshot()
    assert snap.pressure == 8.0
    assert snap.tick == 4
    assert snap.combo_timer == 4


def test_engine_deaf_to_ticks_while_idle() -> None:
    engine = PressureEngine()
    clock = ManualClock()
    engine.attach(clock)
    clock.start()

    clock.advance(10)

    assert engine.state is EngineState.IDLE
    assert engine.snapshot().tick == 0
    assert clock.ticks == 10


def test_manual_clock_rejects_negative_advance() -> None:
    with pytest.raises(ValueError):
        ManualClock().advance(-1)


def test_interval_clock_delivers_requested_ticks() -> None:
    engine = PressureEngine()
    clock = IntervalClock(interval_ms=1)
    engine.attach(clock)
    engine.start()
    engine.success()

    delivered = asyncio.run(clock.run(max_ticks=3))

    assert delivered == 3
    assert not clock.running
    assert engine.snapshot().pressure == 8.5


def test_interval_clock_stops_from_handler() -> None:
    clock = IntervalClock(interval_ms=1)
    seen: list[int] = []

    def on_tick() -> None:
        seen.append(clock.ticks)
        if len(seen) == 2:
            clock.stop()

    clock.subscribe(on_tick)
    delivered = asyncio.run(clock.run())

    assert delivered == 2
    assert seen == [1, 2]


def test_interval_must_be_positive() -> None:
    with pytest.raises(ValueError):
        IntervalClock(interval_ms=0)
