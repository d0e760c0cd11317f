"""Top-level package for domlike-observable."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .config import PayloadConfig, load_config, load_payload_config
from .event_names import EventNames
from .exceptions import (
    AlreadyObservableError,
    ConfigValidationError,
    NotObservableError,
    ObservableError,
    UndefinedEventError,
)
from .observable import Observable, make_observable

if TYPE_CHECKING:
    from .logging_utils import configure_logging

__all__ = [
    "AlreadyObservableError",
    "ConfigValidationError",
    "EventNames",
    "NotObservableError",
    "Observable",
    "ObservableError",
    "PayloadConfig",
    "UndefinedEventError",
    "configure_logging",
    "load_config",
    "load_payload_config",
    "make_observable",
]


def __getattr__(name: str) -> Any:
    """Lazily import the logging bootstrap so structlog loads only on demand."""
    if name == "configure_logging":
        from .logging_utils import configure_logging

        return configure_logging
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
