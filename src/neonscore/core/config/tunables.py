from __future__ import annotations

from typing import Any, Literal, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from neonscore.core.errors import ConfigurationError

ExplosionRecovery = Literal["acknowledge", "auto"]


class ZoneMultipliers(BaseModel):
    model_config = ConfigDict(frozen=True)

    green: float = Field(default=1.0, gt=0)
    yellow: float = Field(default=1.5, gt=0)
    red: float = Field(default=2.0, gt=0)


class EngineConfig(BaseModel):
    """
    Named tunables accepted by PressureEngine at construction.

    Ordering rules:
      - green_max < yellow_max < pressure_max
      - every multiplier, gain and release amount is > 0

    Building the model directly (or through AppSettings) surfaces pydantic's
    ValidationError. load_config(), and therefore PressureEngine and
    create_engine, convert it into ConfigurationError.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    # ---- Pressure ----------------------------------------------------

    pressure_max: float = Field(default=100.0, gt=0)
    pressure_gain: float = Field(default=10.0, gt=0)
    pressure_loss: float = Field(default=0.5, ge=0, description="Decay per tick")
    fail_pressure_release: float = Field(default=10.0, ge=0)
    pressure_release: float = Field(default=25.0, ge=0)

    # ---- Zones -------------------------------------------------------

    green_max: float = Field(default=40.0, gt=0)
    yellow_max: float = Field(default=75.0, gt=0)
    zone_multipliers: ZoneMultipliers = Field(default_factory=ZoneMultipliers)
    critical_threshold: float = Field(default=80.0, ge=0)

    # ---- Score & combo -----------------------------------------------

    base_points: float = Field(default=1.0, gt=0)
    combo_max_time: int = Field(default=5, ge=1, description="Ticks before a combo expires")
    combo_multiplier_increment: float = Field(default=0.1, gt=0)
    combo_multiplier_cap: float = Field(default=3.0, ge=1.0)
    target_score: float | None = Field(default=None, gt=0)
    bleed_bonus_enabled: bool = False

    # ---- Explosion ---------------------------------------------------

    explosion_recovery: ExplosionRecovery = "acknowledge"
    explosion_recovery_ticks: int = Field(default=2, ge=1)

    @model_validator(mode="after")
    def _validate_ordering(self) -> "EngineConfig":
        if not self.green_max < self.yellow_max < self.pressure_max:
            raise ValueError(
                f"zone bounds must satisfy green_max < yellow_max < pressure_max "
                f"(got {self.green_max}, {self.yellow_max}, {self.pressure_max})"
            )
        return self


def load_config(values: EngineConfig | Mapping[str, Any] | None = None) -> EngineConfig:
    """
    Build an EngineConfig, converting validation failures into ConfigurationError.
    """
    if values is None:
        return EngineConfig()
    if isinstance(values, EngineConfig):
        return values

    try:
        return EngineConfig.model_validate(dict(values))
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc
