from __future__ import annotations

import pytest

from neonscore.core.engine.engine import OVERLOAD_MESSAGE, PressureEngine
from neonscore.core.engine.state import EngineState


def _overload(engine: PressureEngine) -> None:
    # 10, 20, 30, 40, 50 (green) -> 65, 80 (yellow) -> 100 (red)
    for _ in range(8):
        engine.success()


def test_reaching_max_pressure_explodes() -> None:
    engine = PressureEngine()
    engine.start()

    _overload(engine)

    snap = engine.snapshot()
    assert snap.state is EngineState.EXPLODED
    assert snap.pressure == 0.0
    assert snap.combo == 0
    assert snap.combo_multiplier == 1.0
    assert snap.combo_timer == 0
    assert snap.score == pytest.approx(14.05)
    assert snap.high_score == snap.score

    overloads = [e for e in snap.log if e.description == OVERLOAD_MESSAGE]
    assert len(overloads) == 1
    assert overloads[0].actor == "SYSTEM"
    assert snap.log[0] is overloads[0]


def test_exploding_success_reports_flag() -> None:
    engine = PressureEngine()
    engine.start()
    for _ in range(7):
        assert not engine.success().exploded

    t = engine.success()

    assert t.exploded
    assert t.previous is EngineState.PLAYING
    assert t.state is EngineState.EXPLODED


def test_actions_ignored_while_exploded() -> None:
    engine = PressureEngine()
    engine.start()
    _overload(engine)
    before = engine.snapshot()

    assert engine.success().accepted is False
    assert engine.release().accepted is False
    assert engine.tick().accepted is False
    assert engine.snapshot() == before


def test_acknowledge_resumes_play_keeping_score() -> None:
    engine = PressureEngine()
    engine.start()
    _overload(engine)
    score = engine.snapshot().score

    t = engine.acknowledge_explosion()

    assert t.accepted
    assert t.state is EngineState.PLAYING
    assert t.snapshot.score == score
    assert t.snapshot.log[0].description == "PRESSURE SYSTEM REBOOTED"
    assert engine.success().accepted


def test_acknowledge_to_idle_resets() -> None:
    engine = PressureEngine()
    engine.start()
    _overload(engine)
    score = engine.snapshot().score

    t = engine.acknowledge_explosion(to_idle=True)

    assert t.state is EngineState.IDLE
    assert t.snapshot.score == 0.0
    assert t.snapshot.high_score == score
    assert t.snapshot.log == ()


def test_auto_recovery_counts_down_on_ticks() -> None:
    engine = PressureEngine(config={"explosion_recovery": "auto", "explosion_recovery_ticks": 2})
    engine.start()
    _overload(engine)

    engine.tick()
    assert engine.state is EngineState.EXPLODED

    engine.tick()
    assert engine.state is EngineState.PLAYING


def test_overload_checked_before_target() -> None:
    engine = PressureEngine(config={"pressure_gain": 50, "target_score": 2})
    engine.start()

    engine.success()  # 50, score 1
    t = engine.success()  # yellow: +75 -> 100, score 1 + 1.5 * 1.1

    assert t.exploded
    assert not t.finished
    assert t.state is EngineState.EXPLODED
