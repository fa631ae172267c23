from __future__ import annotations

import pytest

from neonscore.scoring.pressure import PressureRegulator


def test_apply_delta_clamps_both_ends() -> None:
    reg = PressureRegulator(maximum=100.0, loss_per_tick=0.5)

    change = reg.apply_delta(30)
    assert change.pressure == 30.0
    assert not change.clamped

    change = reg.apply_delta(90)
    assert change.pressure == 100.0
    assert change.clamped
    assert reg.saturated

    change = reg.apply_delta(-250)
    assert change.pressure == 0.0
    assert change.clamped


def test_decay_never_goes_negative() -> None:
    reg = PressureRegulator(maximum=100.0, loss_per_tick=0.5)
    reg.apply_delta(1.0)

    assert reg.decay_tick().pressure == 0.5
    assert reg.decay_tick().pressure == 0.0

    change = reg.decay_tick()
    assert change.pressure == 0.0
    assert change.clamped


def test_invalid_bounds_rejected() -> None:
    with pytest.raises(ValueError):
        PressureRegulator(maximum=0, loss_per_tick=0.5)
    with pytest.raises(ValueError):
        PressureRegulator(maximum=100, loss_per_tick=-1)


def test_tiny_decay_still_applies() -> None:
    reg = PressureRegulator(maximum=100.0, loss_per_tick=0.004)
    reg.apply_delta(10)

    for _ in range(100):
        reg.decay_tick()

    assert reg.pressure == 9.6


def test_fractional_deltas_accumulate_exactly() -> None:
    reg = PressureRegulator(maximum=100.0, loss_per_tick=0.5)
    for _ in range(3):
        reg.apply_delta(0.1)

    assert reg.pressure == 0.3
