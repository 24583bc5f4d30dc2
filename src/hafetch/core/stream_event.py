#!/usr/bin/env python
"""Stream event record carried between fetchers and downstream consumers."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

import attrs
import pendulum

from hafetch.utils.config import EVENT_TIME_FORMAT, EVENT_TIMEZONE

__all__ = ["StreamEvent"]


def _to_tuple(data: Iterable[Any] | None) -> tuple[Any, ...]:
    if data is None:
        return ()
    return tuple(data)


def _freeze(value: Any) -> Any:
    """Hashable stand-in for ``value``, recursing into containers."""
    if isinstance(value, Mapping):
        return frozenset((key, _freeze(item)) for key, item in value.items())
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(item) for item in value)
    return value


@attrs.define(frozen=True, slots=True)
class StreamEvent:
    """Immutable event on a named stream.

    Equality and hashing cover all three fields. Lists, dicts and sets inside
    ``data`` are compared by content, so events carrying them stay hashable.
    ``str()`` renders None items as empty strings.

    Attributes:
        stream_id: Identifier of the stream the event belongs to.
        timestamp: Event time in epoch milliseconds.
        data: Field values, ordered as the stream's columns.

    Example:
        >>> event = StreamEvent("cpuStream", 0, ["host1", 0.9])
        >>> str(event)
        'StreamEvent[stream=CPUSTREAM,timestamp=1970-01-01 00:00:00,000,data=[host1,0.9]]'
    """

    stream_id: str | None
    timestamp: int = attrs.field(converter=int)
    data: tuple[Any, ...] = attrs.field(factory=tuple, converter=_to_tuple, eq=_freeze)

    def human_timestamp(self) -> str:
        """Render ``timestamp`` as a UTC date with millisecond precision."""
        seconds, millis = divmod(self.timestamp, 1000)
        moment = pendulum.from_timestamp(seconds, tz=EVENT_TIMEZONE).add(microseconds=millis * 1000)
        return moment.format(EVENT_TIME_FORMAT)

    def copy(self) -> "StreamEvent":
        return attrs.evolve(self)

    def evolve(self, **changes: Any) -> "StreamEvent":
        """Return a copy with ``changes`` applied."""
        return attrs.evolve(self, **changes)

    def select(self, columns: Sequence[str], column_index: Mapping[str, int]) -> tuple[Any, ...]:
        """Project ``data`` onto ``columns``.

        Args:
            columns: Column names to pick, in output order.
            column_index: Column name to position in ``data``.

        Raises:
            KeyError: If a column is not in ``column_index``.
        """
        return tuple(self.data[column_index[name]] for name in columns)

    def __str__(self) -> str:
        stream = self.stream_id.upper() if self.stream_id is not None else "NULL"
        values = ",".join("" if value is None else str(value) for value in self.data)
        return f"StreamEvent[stream={stream},timestamp={self.human_timestamp()},data=[{values}]]"
