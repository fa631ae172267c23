from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Literal, overload

Actor = Literal["PLAYER", "SYSTEM"]

Now = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True, slots=True)
class LogEntry:
    id: int
    actor: Actor
    description: str
    timestamp: str  # HH:MM:SS, 24h
    created_at: datetime

    def render(self) -> str:
        return f"{self.actor}: {self.description}"


@dataclass(frozen=True, slots=True)
class _Node:
    entry: LogEntry
    older: _Node | None
    size: int


class LogView(Sequence[LogEntry]):
    """
    Immutable newest-first view of the log at one point in time.

    Views share their nodes with the live log, so taking one is O(1)
    however long the session ran.
    """

    __slots__ = ("_head",)

    def __init__(self, head: _Node | None = None) -> None:
        self._head = head

    def __len__(self) -> int:
        return 0 if self._head is None else self._head.size

    def __iter__(self) -> Iterator[LogEntry]:
        node = self._head
        while node is not None:
            yield node.entry
            node = node.older

    @overload
    def __getitem__(self, index: int) -> LogEntry: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[LogEntry, ...]: ...

    def __getitem__(self, index: int | slice) -> LogEntry | tuple[LogEntry, ...]:
        if isinstance(index, slice):
            return tuple(self)[index]

        n = len(self)
        if index < 0:
            index += n
        if not 0 <= index < n:
            raise IndexError("log index out of range")

        for i, entry in enumerate(self):
            if i == index:
                return entry
        raise IndexError("log index out of range")

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, LogView):
            return self._head is other._head or tuple(self) == tuple(other)
        if isinstance(other, tuple):
            return tuple(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(tuple(self))

    def __repr__(self) -> str:
        return f"LogView({len(self)} entries)"


class EventLog:
    """
    Append-only session history, newest entry first.

    Ids are millisecond timestamps from the injected clock, bumped by one
    when two entries land in the same millisecond, so they stay strictly
    increasing. No size cap: windowing is the reader's concern.
    """

    def __init__(self, *, now: Now = utc_now) -> None:
        self._now = now
        self._head: _Node | None = None
        self._last_id = 0

    def append(self, actor: Actor, description: str) -> LogEntry:
        if actor not in ("PLAYER", "SYSTEM"):
            raise ValueError(f"unknown actor: {actor!r}")

        created = self._now()
        entry_id = max(int(created.timestamp() * 1000), self._last_id + 1)
        self._last_id = entry_id

        entry = LogEntry(
            id=entry_id,
            actor=actor,
            description=description,
            timestamp=created.strftime("%H:%M:%S"),
            created_at=created,
        )
        self._head = _Node(entry=entry, older=self._head, size=len(self) + 1)
        return entry

    @property
    def entries(self) -> LogView:
        return LogView(self._head)

    def recent(self, n: int) -> tuple[LogEntry, ...]:
        if n < 0:
            raise ValueError("n must be >= 0")

        out: list[LogEntry] = []
        for entry in self.entries:
            if len(out) >= n:
                break
            out.append(entry)
        return tuple(out)

    def clear(self) -> None:
        # ids keep increasing across clears
        self._head = None

    def __len__(self) -> int:
        return 0 if self._head is None else self._head.size

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self.entries)
