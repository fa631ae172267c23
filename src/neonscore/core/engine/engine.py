from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, Mapping

import structlog

from neonscore.core.config.tunables import EngineConfig, load_config
from neonscore.core.engine.clock import Clock
from neonscore.core.engine.lifecycle import EngineLifecycle
from neonscore.core.engine.snapshot import Snapshot
from neonscore.core.engine.state import EngineState, SessionCounters, new_session_id
from neonscore.core.events.actions import ActionApplied, ActionIgnored, PlayerAction
from neonscore.core.events.base import Event
from neonscore.core.events.bus import EventBus
from neonscore.core.events.session import (
    EngineTick,
    Exploded,
    ExplosionAcknowledged,
    SessionFinished,
    SessionReset,
    SessionStarted,
)
from neonscore.core.logging.setup import bind_context, unbind_context
from neonscore.core.session.eventlog import EventLog, Now, utc_now
from neonscore.scoring.combo import ComboTracker
from neonscore.scoring.exact import to_decimal
from neonscore.scoring.pressure import PressureRegulator
from neonscore.scoring.score import ScoreAccumulator
from neonscore.scoring.zones import classify, gauge_status

log = structlog.get_logger()

TransitionKind = Literal["start", "success", "fail", "release", "tick", "acknowledge", "reset"]

OVERLOAD_MESSAGE = "AIR PRESSURE OVERLOAD!"


@dataclass(frozen=True, slots=True)
class Transition:
    """
    Result of one engine call.

    accepted=False means the call arrived in a state that does not take it
    and nothing changed. The flags tell the presentation layer which
    effects to play.
    """

    kind: TransitionKind
    accepted: bool
    previous: EngineState
    snapshot: Snapshot

    score_delta: float = 0.0
    combo_expired: bool = False
    exploded: bool = False
    finished: bool = False

    @property
    def state(self) -> EngineState:
        return self.snapshot.state


def _format_points(delta: float) -> str:
    return f"{delta:g}"


class PressureEngine:
    """
    Pressure-combo scoring state machine.

    IDLE --start--> PLAYING --(overload)--> EXPLODED --acknowledge--> PLAYING
                       |  \\--(target)--> FINISHED
                       \\-- success / fail / release / tick
    reset() returns to IDLE from anywhere and keeps the high score.

    All mutations are synchronous; the caller (or a Clock) must not call in
    from more than one thread.
    """

    def __init__(
        self,
        *,
        config: EngineConfig | Mapping[str, Any] | None = None,
        bus: EventBus | None = None,
        now: Now = utc_now,
    ) -> None:
        self._config = load_config(config)
        self._bus = bus

        self._lifecycle = EngineLifecycle()
        self._counters = SessionCounters()

        self._pressure = PressureRegulator(
            maximum=self._config.pressure_max,
            loss_per_tick=self._config.pressure_loss,
        )
        self._combo = ComboTracker(
            max_time=self._config.combo_max_time,
            increment=self._config.combo_multiplier_increment,
            cap=self._config.combo_multiplier_cap,
        )
        self._score = ScoreAccumulator(base_points=self._config.base_points)
        self._log = EventLog(now=now)

        self._recovery_ticks_left = 0

    # ---------------- Read side ----------------

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def state(self) -> EngineState:
        return self._lifecycle.state

    @property
    def event_log(self) -> EventLog:
        return self._log

    def snapshot(self) -> Snapshot:
        pressure = self._pressure.pressure
        reading = classify(pressure, self._config)
        return Snapshot(
            state=self._lifecycle.state,
            session_id=self._counters.session_id,
            tick=self._counters.tick,
            score=self._score.score,
            high_score=self._score.high_score,
            pressure=pressure,
            zone=reading.zone,
            zone_multiplier=reading.multiplier,
            gauge_status=gauge_status(pressure, self._config),
            combo=self._combo.combo,
            combo_multiplier=self._combo.multiplier,
            combo_timer=self._combo.timer,
            log=self._log.entries,
        )

    def attach(self, clock: Clock) -> None:
        """
        Let `clock` drive decay. The engine ignores ticks unless PLAYING.
        """
        clock.subscribe(self.tick)

    # ---------------- Lifecycle ----------------

    def start(self) -> Transition:
        previous = self._lifecycle.state
        if previous is not EngineState.IDLE:
            return self._ignored("start")

        self._clear_session_state()
        session_id = new_session_id()
        self._counters.open(session_id)
        self._lifecycle.transition(EngineState.PLAYING)

        bind_context(session_id=session_id, component="engine")
        self._publish(SessionStarted, session_id=session_id, high_score=self._score.high_score)
        log.info("engine.started", high_score=self._score.high_score)

        return self._result("start", previous)

    def reset(self) -> Transition:
        previous = self._lifecycle.state
        session_id = self._counters.session_id or ""

        self._clear_session_state()
        self._counters.close()
        self._lifecycle.transition(EngineState.IDLE)

        self._publish(
            SessionReset,
            session_id=session_id,
            previous_state=previous.value,
            high_score=self._score.high_score,
        )
        log.info("engine.reset", previous=previous.value, high_score=self._score.high_score)
        unbind_context("session_id", "component")

        return self._result("reset", previous)

    def acknowledge_explosion(self, *, to_idle: bool = False) -> Transition:
        """
        Leave EXPLODED: resume PLAYING, or go back to IDLE via a full reset.
        """
        previous = self._lifecycle.state
        if previous is not EngineState.EXPLODED:
            return self._ignored("acknowledge")

        session_id = self._counters.session_id or ""
        self._publish(ExplosionAcknowledged, session_id=session_id, resumed=not to_idle)

        if to_idle:
            reset = self.reset()
            return Transition(kind="acknowledge", accepted=True, previous=previous, snapshot=reset.snapshot)

        self._resume()
        return self._result("acknowledge", previous)

    # ---------------- Player actions ----------------

    def success(self) -> Transition:
        previous = self._lifecycle.state
        if previous is not EngineState.PLAYING:
            return self._ignored("success")

        cfg = self._config
        reading = classify(self._pressure.pressure, cfg)

        combo_multiplier = self._combo.on_success()
        delta = self._score.on_success(
            zone_multiplier=reading.multiplier,
            combo_multiplier=combo_multiplier,
        )
        self._pressure.apply_delta(to_decimal(cfg.pressure_gain) * to_decimal(reading.multiplier))
        self._log.append("PLAYER", f"SUCCESS +{_format_points(delta)} PTS")

        self._publish_action("success", zone=reading.zone.value, score_delta=delta)
        log.debug(
            "engine.success",
            zone=reading.zone.value,
            delta=delta,
            combo=self._combo.combo,
            pressure=self._pressure.pressure,
        )

        exploded, finished = self._check_thresholds(trigger="success")
        return self._result("success", previous, score_delta=delta, exploded=exploded, finished=finished)

    def fail(self) -> Transition:
        return self._release_action("fail", self._config.fail_pressure_release, "FAIL - PRESSURE RELEASED")

    def release(self) -> Transition:
        return self._release_action("release", self._config.pressure_release, "MANUAL PRESSURE RELEASE")

    # ---------------- Time ----------------

    def tick(self) -> Transition:
        previous = self._lifecycle.state

        if previous is EngineState.EXPLODED and self._config.explosion_recovery == "auto":
            return self._recovery_tick()
        if previous is not EngineState.PLAYING:
            return self._ignored("tick")

        tick = self._counters.next_tick()
        self._pressure.decay_tick()
        expired = self._combo.tick()

        bleed = 0
        if self._config.bleed_bonus_enabled:
            bleed = self._score.bleed_tick(self._pressure.pressure)

        self._publish(
            EngineTick,
            session_id=self._counters.session_id or "",
            tick=tick,
            pressure=self._pressure.pressure,
            combo_expired=expired,
            bleed_bonus=bleed,
        )
        if expired:
            log.debug("engine.combo_expired", tick=tick)

        exploded, finished = self._check_thresholds(trigger="tick")
        return self._result(
            "tick",
            previous,
            score_delta=float(bleed),
            combo_expired=expired,
            exploded=exploded,
            finished=finished,
        )

    # ---------------- Internals ----------------

    def _release_action(self, action: PlayerAction, amount: float, message: str) -> Transition:
        previous = self._lifecycle.state
        if previous is not EngineState.PLAYING:
            return self._ignored(action)

        reading = classify(self._pressure.pressure, self._config)
        self._combo.on_fail_or_release()
        self._pressure.apply_delta(-amount)
        self._log.append("PLAYER", message)

        self._publish_action(action, zone=reading.zone.value, score_delta=0.0)
        log.debug(f"engine.{action}", pressure=self._pressure.pressure)

        # release never raises pressure; thresholds only matter for odd configs
        exploded, finished = self._check_thresholds(trigger=action)
        return self._result(action, previous, exploded=exploded, finished=finished)

    def _check_thresholds(self, *, trigger: str) -> tuple[bool, bool]:
        """
        Overload wins over the target: both are checked after the mutation.
        """
        if self._pressure.saturated:
            self._explode(trigger=trigger)
            return True, False

        target = self._config.target_score
        if target is not None and self._score.score >= target:
            self._finish(target)
            return False, True

        return False, False

    def _explode(self, *, trigger: str) -> None:
        self._lifecycle.transition(EngineState.EXPLODED)
        self._log.append("SYSTEM", OVERLOAD_MESSAGE)

        self._pressure.reset()
        self._combo.reset()
        self._recovery_ticks_left = self._config.explosion_recovery_ticks

        self._publish(
            Exploded,
            session_id=self._counters.session_id or "",
            score=self._score.score,
            trigger=trigger,
        )
        log.warning("engine.exploded", trigger=trigger, score=self._score.score)

    def _finish(self, target: float) -> None:
        self._lifecycle.transition(EngineState.FINISHED)
        self._log.append("SYSTEM", f"TARGET {_format_points(target)} REACHED")

        self._publish(
            SessionFinished,
            session_id=self._counters.session_id or "",
            score=self._score.score,
            target_score=target,
        )
        log.info("engine.finished", score=self._score.score, target_score=target)

    def _resume(self) -> None:
        self._recovery_ticks_left = 0
        self._lifecycle.transition(EngineState.PLAYING)
        self._log.append("SYSTEM", "PRESSURE SYSTEM REBOOTED")
        log.info("engine.resumed")

    def _recovery_tick(self) -> Transition:
        previous = self._lifecycle.state
        self._recovery_ticks_left -= 1
        if self._recovery_ticks_left <= 0:
            self._publish(ExplosionAcknowledged, session_id=self._counters.session_id or "", resumed=True)
            self._resume()
        return self._result("tick", previous)

    def _clear_session_state(self) -> None:
        self._pressure.reset()
        self._combo.reset()
        self._score.reset()
        self._log.clear()
        self._recovery_ticks_left = 0

    def _ignored(self, action: str) -> Transition:
        state = self._lifecycle.state
        self._publish(ActionIgnored, session_id=self._counters.session_id or "", action=action, state=state.value)
        log.debug("engine.action_ignored", action=action, state=state.value)

        kind: TransitionKind = action  # type: ignore[assignment]
        return Transition(kind=kind, accepted=False, previous=state, snapshot=self.snapshot())

    def _result(self, kind: TransitionKind, previous: EngineState, **flags: Any) -> Transition:
        return Transition(kind=kind, accepted=True, previous=previous, snapshot=self.snapshot(), **flags)

    def _publish_action(self, action: PlayerAction, *, zone: str, score_delta: float) -> None:
        self._publish(
            ActionApplied,
            session_id=self._counters.session_id or "",
            action=action,
            zone=zone,
            score_delta=score_delta,
            pressure=self._pressure.pressure,
            combo=self._combo.combo,
            combo_multiplier=self._combo.multiplier,
        )

    def _publish(self, event_cls: type[Event], **fields: Any) -> None:
        if self._bus is None:
            return
        self._bus.publish(event_cls.create(sequence=self._counters.next_sequence(), **fields))
