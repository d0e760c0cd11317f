"""Event payload helpers: structure detection and field stamping."""

from __future__ import annotations

from collections.abc import MutableMapping
import time
from typing import Any


def now_ms() -> int:
    """Current time as integer milliseconds since the Unix epoch."""
    return time.time_ns() // 1_000_000


def is_structured(payload: Any) -> bool:
    """Return True when ``payload`` can carry named fields.

    Mutable mappings carry fields as keys; other objects qualify when they
    have an instance ``__dict__`` and carry fields as attributes.
    """
    if isinstance(payload, MutableMapping):
        return True
    return hasattr(payload, "__dict__")


def stamp(
    payload: Any,
    event_name: str,
    timestamp: int,
    *,
    timestamp_field: str = "timestamp",
    event_name_field: str = "eventName",
) -> None:
    """Inject the timestamp (if absent) and the event name into ``payload``."""
    if isinstance(payload, MutableMapping):
        if timestamp_field not in payload:
            payload[timestamp_field] = timestamp
        payload[event_name_field] = event_name
        return

    if not hasattr(payload, timestamp_field):
        setattr(payload, timestamp_field, timestamp)
    setattr(payload, event_name_field, event_name)
