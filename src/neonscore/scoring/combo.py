# src/neonscore/scoring/combo.py
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal

from neonscore.scoring.exact import Number, to_decimal

BASE_MULTIPLIER = Decimal("1.0")


@dataclass(slots=True)
class ComboTracker:
    """
    Success streak with a countdown and a growing multiplier.

    - the first success of a streak plays at BASE_MULTIPLIER
    - each further success adds `increment`, capped at `cap`
    - `max_time` ticks without a success expire the streak
    """

    max_time: int
    increment: Number
    cap: Number

    combo: int = 0
    timer: int = 0
    _multiplier: Decimal = field(default=BASE_MULTIPLIER, repr=False)

    def __post_init__(self) -> None:
        if self.max_time < 1:
            raise ValueError("max_time must be >= 1")
        if self.increment <= 0:
            raise ValueError("increment must be > 0")
        if self.cap < BASE_MULTIPLIER:
            raise ValueError("cap must be >= 1.0")
        self.increment = to_decimal(self.increment)
        self.cap = to_decimal(self.cap)

    @property
    def active(self) -> bool:
        return self.combo > 0

    @property
    def multiplier(self) -> float:
        return float(self._multiplier)

    def on_success(self) -> float:
        """
        Extend the streak. Returns the multiplier this success scores with.
        """
        if self.combo > 0:
            self._multiplier = min(self._multiplier + to_decimal(self.increment), to_decimal(self.cap))
        self.combo += 1
        self.timer = 0
        return float(self._multiplier)

    def on_fail_or_release(self) -> None:
        self.combo = 0
        self._multiplier = BASE_MULTIPLIER
        self.timer = 0

    def tick(self) -> bool:
        """
        Advance the countdown. Returns True when this tick expired the streak.
        """
        if self.combo <= 0:
            return False

        self.timer += 1
        if self.timer >= self.max_time:
            self.on_fail_or_release()
            return True
        return False

    def reset(self) -> None:
        self.on_fail_or_release()
