"""Domain exception hierarchy for observable objects."""

from __future__ import annotations

from typing import Any


class ObservableError(RuntimeError):
    """Base class for all observable-related errors."""


class UndefinedEventError(ObservableError, ValueError):
    """Raised when an event name is not on the emitter's allow-list."""

    def __init__(self, event_name: str, defined_events: Any) -> None:
        super().__init__(
            f'the event name "{event_name}" is not one of the defined '
            f"event names: {defined_events}"
        )
        self.event_name = event_name
        self.defined_events = defined_events


class NotObservableError(ObservableError, TypeError):
    """Raised when a target cannot be turned into an observable."""

    def __init__(self, target: Any, reason: str = "cannot carry attributes") -> None:
        super().__init__(
            f"{type(target).__name__} object cannot be made observable: {reason}"
        )
        self.target = target
        self.reason = reason


class AlreadyObservableError(NotObservableError):
    """Raised when a target is made observable a second time."""

    def __init__(self, target: Any) -> None:
        super().__init__(target, "already observable")


class ConfigValidationError(ObservableError):
    """Raised when configuration cannot be validated safely."""
