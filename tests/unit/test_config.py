from __future__ import annotations

import pytest
from pydantic import ValidationError

from neonscore.core.config.settings import AppSettings
from neonscore.core.config.tunables import EngineConfig, load_config
from neonscore.core.engine.engine import PressureEngine
from neonscore.core.errors import ConfigurationError


def test_defaults_are_consistent() -> None:
    cfg = load_config()
    assert cfg == EngineConfig()
    assert (cfg.green_max, cfg.yellow_max, cfg.pressure_max) == (40.0, 75.0, 100.0)
    assert cfg.combo_max_time == 5
    assert cfg.target_score is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"green_max": 80},
        {"yellow_max": 100},
        {"pressure_max": 60},
        {"zone_multipliers": {"green": 0}},
        {"combo_multiplier_increment": 0},
        {"base_points": -1},
        {"combo_max_time": 0},
        {"unknown_knob": 1},
    ],
)
def test_bad_tunables_fail_construction(overrides: dict) -> None:
    with pytest.raises(ConfigurationError):
        load_config(overrides)
    with pytest.raises(ConfigurationError):
        PressureEngine(config=overrides)


def test_configuration_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        load_config({"green_max": 99})


def test_settings_read_nested_engine_tunables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEONSCORE_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("NEONSCORE_TICK_INTERVAL_MS", "250")
    monkeypatch.setenv("NEONSCORE_ENGINE__PRESSURE_MAX", "120")
    monkeypatch.setenv("NEONSCORE_ENGINE__BLEED_BONUS_ENABLED", "true")

    s = AppSettings(_env_file=None)

    assert s.log_level == "DEBUG"
    assert s.tick_interval_ms == 250
    assert s.engine.pressure_max == 120.0
    assert s.engine.bleed_bonus_enabled is True


def test_small_pressure_ceiling_with_matching_zones_is_valid() -> None:
    cfg = load_config({"pressure_max": 60, "green_max": 20, "yellow_max": 40})
    assert cfg.pressure_max == 60.0

    engine = PressureEngine(config={"pressure_max": 60, "green_max": 20, "yellow_max": 40})
    engine.start()
    for _ in range(3):
        engine.success()
    assert engine.snapshot().gauge_status == "STABLE"


def test_direct_model_construction_raises_validation_error() -> None:
    # only load_config() translates into ConfigurationError
    with pytest.raises(ValidationError):
        EngineConfig(green_max=90)
    with pytest.raises(ConfigurationError):
        load_config({"green_max": 90})


def test_settings_with_bad_engine_env_raise_validation_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NEONSCORE_ENGINE__GREEN_MAX", "90")
    with pytest.raises(ValidationError):
        AppSettings(_env_file=None)
