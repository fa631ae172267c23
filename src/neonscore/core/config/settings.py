from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from neonscore.core.config.tunables import EngineConfig


class AppSettings(BaseSettings):
    """
    Process-level configuration.

    This class is the single source of truth for:
    - environment selection
    - logging behavior
    - clock cadence handed to the presentation layer
    - default engine tunables (NEONSCORE_ENGINE__PRESSURE_MAX=120, ...)
    """

    model_config = SettingsConfigDict(
        env_prefix="NEONSCORE_",
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # ---- Environment -------------------------------------------------

    env: Literal["local", "staging", "prod"] = "local"

    # ---- Logging -----------------------------------------------------

    log_level: str = "INFO"

    # False => human-readable console output for local play
    log_json: bool = True

    # ---- Timing ------------------------------------------------------

    tick_interval_ms: int = Field(
        default=1000,
        gt=0,
        description="Real-time length of one engine tick",
    )

    # Lockout shown by the presentation layer before acknowledging an explosion
    explosion_delay_ms: int = Field(
        default=2000,
        ge=0,
        description="Explosion overlay duration before acknowledge_explosion()",
    )

    # ---- Engine ------------------------------------------------------

    engine: EngineConfig = Field(default_factory=EngineConfig)


# Singleton settings object
settings = AppSettings()
