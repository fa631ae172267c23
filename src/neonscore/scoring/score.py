from __future__ import annotations

from decimal import Decimal

from neonscore.scoring.exact import ZERO, Number, round_half_up, to_decimal

BLEED_RATE = Decimal("0.01")


class ScoreAccumulator:
    """
    Score and high score, kept as exact decimals.

    Neither value ever decreases except through reset(), which only clears
    the score. high_score lives as long as the accumulator does.
    """

    def __init__(self, *, base_points: Number) -> None:
        if base_points <= 0:
            raise ValueError("base_points must be > 0")
        self._base_points = to_decimal(base_points)
        self._score = ZERO
        self._high_score = ZERO

    @property
    def score(self) -> float:
        return float(self._score)

    @property
    def high_score(self) -> float:
        return float(self._high_score)

    def on_success(self, *, zone_multiplier: Number, combo_multiplier: Number) -> float:
        delta = self._base_points * to_decimal(zone_multiplier) * to_decimal(combo_multiplier)
        self._add(delta)
        return float(delta)

    def bleed_tick(self, pressure: Number) -> int:
        """
        Passive trickle proportional to pressure, independent of zone and combo.
        """
        delta = round_half_up(max(to_decimal(pressure), ZERO) * BLEED_RATE)
        if delta:
            self._add(Decimal(delta))
        return delta

    def reset(self) -> None:
        self._score = ZERO

    def _add(self, delta: Decimal) -> None:
        if delta < 0:
            raise ValueError("score deltas must be >= 0")
        self._score += delta
        if self._score > self._high_score:
            self._high_score = self._score
