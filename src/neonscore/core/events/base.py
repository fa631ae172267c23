from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, ClassVar, TypeVar
from uuid import UUID, uuid4

E = TypeVar("E", bound="Event")


@dataclass(frozen=True, slots=True)
class Event:
    """
    Base for every engine event.

    - event_id: unique identity
    - timestamp_utc: wall-clock creation time (informational only)
    - sequence: engine-lifetime monotonic ordering key (never rewinds across sessions)
    """

    event_type: ClassVar[str] = "event"

    event_id: UUID
    timestamp_utc: datetime
    sequence: int

    @classmethod
    def create(cls: type[E], *, sequence: int, **fields: Any) -> E:
        return cls(
            event_id=uuid4(),
            timestamp_utc=datetime.now(timezone.utc),
            sequence=sequence,
            **fields,
        )
