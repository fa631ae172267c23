from __future__ import annotations

from dataclasses import dataclass

from neonscore.scoring.exact import ZERO, Number, to_decimal


@dataclass(frozen=True, slots=True)
class PressureChange:
    pressure: float
    clamped: bool  # informational: the raw result fell outside [0, maximum]


class PressureRegulator:
    """
    Bounded pressure accumulator.

    Invariant: 0 <= pressure <= maximum after every operation.
    Arithmetic is exact decimal, so any decay or delta size is honoured.
    Overload detection belongs to the engine; the regulator only clamps.
    """

    def __init__(self, *, maximum: Number, loss_per_tick: Number) -> None:
        if maximum <= 0:
            raise ValueError("maximum must be > 0")
        if loss_per_tick < 0:
            raise ValueError("loss_per_tick must be >= 0")
        self._maximum = to_decimal(maximum)
        self._loss = to_decimal(loss_per_tick)
        self._pressure = ZERO

    @property
    def pressure(self) -> float:
        return float(self._pressure)

    @property
    def maximum(self) -> float:
        return float(self._maximum)

    @property
    def saturated(self) -> bool:
        return self._pressure >= self._maximum

    def apply_delta(self, amount: Number) -> PressureChange:
        raw = self._pressure + to_decimal(amount)
        bounded = min(max(raw, ZERO), self._maximum)
        self._pressure = bounded
        return PressureChange(pressure=float(bounded), clamped=bounded != raw)

    def decay_tick(self) -> PressureChange:
        return self.apply_delta(-self._loss)

    def reset(self) -> None:
        self._pressure = ZERO
