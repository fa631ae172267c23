from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, Iterable, Protocol, Sequence, TypeAlias

import structlog

from neonscore.core.events.base import Event

log = structlog.get_logger()

EventHandler: TypeAlias = Callable[[Event], None]


class EventComponent(Protocol):
    """
    Anything that wants engine events: returns (event_type, handler) pairs.
    """

    def subscriptions(self) -> Sequence[tuple[str, EventHandler]]:
        ...


@dataclass(frozen=True)
class Subscription:
    event_type: str
    handler: EventHandler


class EventBus:
    """
    Deterministic synchronous event bus.

    - publish(event) dispatches to handlers subscribed to event.event_type
    - dispatch order is subscription order
    - handler failures propagate to the publisher
    """

    def __init__(self) -> None:
        self._handlers: DefaultDict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, *, event_type: str, handler: EventHandler) -> Subscription:
        if not event_type:
            raise ValueError("event_type must be non-empty")
        self._handlers[event_type].append(handler)
        log.debug("bus.subscribed", event_type=event_type, handler=getattr(handler, "__name__", "handler"))
        return Subscription(event_type=event_type, handler=handler)

    def register(self, components: Iterable[EventComponent]) -> tuple[Subscription, ...]:
        """
        Wire components in the order given, preserving each one's subscription order.
        """
        wired: list[Subscription] = []
        seen: set[tuple[str, int, int]] = set()

        for component in components:
            cname = type(component).__name__
            for event_type, handler in component.subscriptions():
                # bound methods are recreated on every access; key on owner + function
                owner = getattr(handler, "__self__", None)
                func = getattr(handler, "__func__", handler)
                key = (event_type, id(owner), id(func))
                if key in seen:
                    raise RuntimeError(f"duplicate subscription detected: component={cname} event_type={event_type}")
                seen.add(key)
                wired.append(self.subscribe(event_type=event_type, handler=handler))

        return tuple(wired)

    def publish(self, event: Event) -> None:
        handlers = self._handlers.get(event.event_type, [])
        log.debug(
            "bus.publish",
            event_type=event.event_type,
            sequence=event.sequence,
            handlers=len(handlers),
        )
        for handler in handlers:
            handler(event)

    def subscribers_for(self, event_type: str) -> tuple[EventHandler, ...]:
        return tuple(self._handlers.get(event_type, []))
