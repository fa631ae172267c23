from __future__ import annotations

import asyncio
from typing import Any, Mapping

import structlog

from neonscore.core.config.settings import AppSettings, settings
from neonscore.core.engine.clock import IntervalClock
from neonscore.core.engine.engine import PressureEngine
from neonscore.core.events.bus import EventBus
from neonscore.core.logging.setup import configure_logging

log = structlog.get_logger()


def create_engine(
    *,
    overrides: Mapping[str, Any] | None = None,
    bus: EventBus | None = None,
    app_settings: AppSettings = settings,
    configure: bool = True,
) -> PressureEngine:
    """
    Engine factory.

    The single place where an engine is built from process settings.
    `overrides` are merged over the settings' engine tunables and validated
    again, so a bad value raises ConfigurationError here and never mid-game.
    """
    if configure:
        configure_logging(level=app_settings.log_level, json=app_settings.log_json)

    values: dict[str, Any] = app_settings.engine.model_dump()
    if overrides:
        values.update(overrides)

    engine = PressureEngine(config=values, bus=bus)
    log.info("app.engine_created", environment=app_settings.env, target_score=engine.config.target_score)
    return engine


def create_clock(*, app_settings: AppSettings = settings) -> IntervalClock:
    return IntervalClock(interval_ms=app_settings.tick_interval_ms)


async def run_session(engine: PressureEngine, clock: IntervalClock, *, max_ticks: int | None = None) -> None:
    """
    Start a session and let `clock` drive it until stop() or `max_ticks`.
    """
    engine.attach(clock)
    engine.start()
    await clock.run(max_ticks=max_ticks)

    snap = engine.snapshot()
    log.info("app.session_ended", state=snap.state.value, score=snap.score, high_score=snap.high_score)


if __name__ == "__main__":
    asyncio.run(run_session(create_engine(), create_clock(), max_ticks=10))
