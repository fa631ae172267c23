from __future__ import annotations

import pytest

from neonscore.scoring.combo import ComboTracker


def _tracker(**kw) -> ComboTracker:
    params = {"max_time": 5, "increment": 0.1, "cap": 3.0}
    params.update(kw)
    return ComboTracker(**params)


def test_first_success_plays_at_base_then_increments() -> None:
    combo = _tracker()

    assert combo.on_success() == 1.0
    assert combo.on_success() == 1.1
    assert combo.on_success() == 1.2
    assert combo.combo == 3
    assert combo.timer == 0


def test_multiplier_capped() -> None:
    combo = _tracker(increment=0.5, cap=2.0)
    for _ in range(10):
        combo.on_success()

    assert combo.multiplier == 2.0
    assert combo.combo == 10


def test_fail_resets_streak() -> None:
    combo = _tracker()
    combo.on_success()
    combo.on_success()
    combo.tick()

    combo.on_fail_or_release()

    assert (combo.combo, combo.multiplier, combo.timer) == (0, 1.0, 0)


def test_five_idle_ticks_expire_the_combo() -> None:
    combo = _tracker()
    for _ in range(3):
        combo.on_success()

    expired = [combo.tick() for _ in range(5)]

    assert expired == [False, False, False, False, True]
    assert combo.combo == 0
    assert combo.multiplier == 1.0
    assert combo.timer == 0


def test_tick_without_combo_does_nothing() -> None:
    combo = _tracker()
    assert combo.tick() is False
    assert combo.timer == 0


def test_success_restarts_countdown() -> None:
    combo = _tracker()
    combo.on_success()
    for _ in range(4):
        combo.tick()

    combo.on_success()
    assert combo.timer == 0
    assert combo.tick() is False
    assert combo.combo == 2


def test_invalid_parameters() -> None:
    with pytest.raises(ValueError):
        _tracker(max_time=0)
    with pytest.raises(ValueError):
        _tracker(cap=0.5)


def test_tiny_increment_still_grows_multiplier() -> None:
    combo = _tracker(increment=0.004)
    for _ in range(3):
        combo.on_success()

    assert combo.multiplier == 1.008
