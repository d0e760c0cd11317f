"""DOM-style event target that can be mixed into arbitrary objects.

Usage:
    button = Observable(["click"])
    button.add_event_listener("click", lambda event: print(event["eventName"]))
    button.dispatch_event("click", {"x": 1})

    # Or turn an existing object into an observable in place
    widget = make_observable(Widget(), ["resize"])
    widget.addEventListener("resize", on_resize)
"""

from __future__ import annotations

from collections.abc import Callable
import copy
import logging
from typing import Any
import weakref

from .config import PayloadConfig
from .event_names import EventNames
from .exceptions import AlreadyObservableError, NotObservableError, UndefinedEventError
from .payload import is_structured, now_ms, stamp

LOGGER = logging.getLogger(__name__)

Listener = Callable[[Any], Any]
Clock = Callable[[], int]

_READ_ONLY_MEMBERS = frozenset(
    {
        "add_event_listener",
        "remove_event_listener",
        "dispatch_event",
        "events",
        "addEventListener",
        "removeEventListener",
        "dispatchEvent",
    }
)


class Observable:
    """DOM-style event target restricted to an optional allow-list of names.

    The allow-list and the listener registry are private to each instance.
    The emitter members are read-only: assigning or deleting them on an
    instance raises ``AttributeError``.

    Subclasses must call ``super().__init__(events=...)``.
    """

    def __init__(
        self,
        events: Any = None,
        *,
        config: PayloadConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._bind_event_state(events, config=config, clock=clock)

    def _bind_event_state(
        self,
        events: Any,
        *,
        config: PayloadConfig | None,
        clock: Clock | None,
    ) -> None:
        state = {
            "_Observable__event_names": EventNames(events),
            "_Observable__listeners": {},
            "_Observable__config": config or PayloadConfig(),
            "_Observable__clock": clock or now_ms,
        }
        for key, value in state.items():
            object.__setattr__(self, key, value)

    @property
    def events(self) -> EventNames:
        """The event names this observable accepts; empty accepts any name."""
        return self.__event_names

    def __require_defined(self, name: str) -> None:
        if not self.__event_names.contains(name):
            LOGGER.debug(
                "observable.event.undefined",
                extra={"event": "observable.event.undefined", "event_name": name},
            )
            raise UndefinedEventError(name, self.__event_names)

    def add_event_listener(self, name: str, callback: Listener) -> bool:
        """Register ``callback`` for ``name``.

        Returns False for a non-string name, a non-callable callback, or a
        callback already registered for ``name``. Raises
        ``UndefinedEventError`` when ``name`` is not on the allow-list.
        """
        if not isinstance(name, str) or not callable(callback):
            return False

        self.__require_defined(name)

        listeners = self.__listeners.setdefault(name, [])
        if callback in listeners:
            LOGGER.debug(
                "observable.listener.duplicate",
                extra={"event": "observable.listener.duplicate", "event_name": name},
            )
            return False

        listeners.append(callback)
        LOGGER.debug(
            "observable.listener.added",
            extra={"event": "observable.listener.added", "event_name": name},
        )
        return True

    def remove_event_listener(self, name: str, callback: Listener) -> bool:
        """Unregister ``callback`` from ``name``; False when it was not registered."""
        if not isinstance(name, str) or not callable(callback):
            return False

        self.__require_defined(name)

        listeners = self.__listeners.get(name)
        if listeners is None:
            return False
        try:
            listeners.remove(callback)
        except ValueError:
            return False

        LOGGER.debug(
            "observable.listener.removed",
            extra={"event": "observable.listener.removed", "event_name": name},
        )
        return True

    def dispatch_event(self, name: str, payload: Any = None) -> bool:
        """Deliver ``payload`` to every listener registered for ``name``.

        A missing payload becomes a new dict. Before delivery the payload
        receives a timestamp (milliseconds since the epoch, only when not
        already present) and the event name (always overwritten). Listeners
        run in registration order and share the same payload object.

        Returns False without touching the payload for a non-string name, an
        unstructured payload, or when nobody listens. Raises
        ``UndefinedEventError`` for names outside the allow-list. Exceptions
        raised by listeners propagate and stop the remaining deliveries.

        The per-name listener list is iterated live: listeners added during
        a dispatch are called in that dispatch, and removing the current
        listener skips the one after it.
        """
        timestamp = self.__clock()

        if payload is None:
            payload = {}

        if not isinstance(name, str) or not is_structured(payload):
            return False

        self.__require_defined(name)

        listeners = self.__listeners.get(name)
        if not listeners:
            return False

        config = self.__config
        stamp(
            payload,
            name,
            timestamp,
            timestamp_field=config.timestamp_field,
            event_name_field=config.event_name_field,
        )

        LOGGER.debug(
            "observable.dispatch",
            extra={
                "event": "observable.dispatch",
                "event_name": name,
                "listener_count": len(listeners),
            },
        )
        for callback in listeners:
            callback(payload)
        return True

    addEventListener = add_event_listener
    removeEventListener = remove_event_listener
    dispatchEvent = dispatch_event

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _READ_ONLY_MEMBERS:
            raise AttributeError(f"{name!r} is read-only on observable objects")
        super().__setattr__(name, value)

    def __delattr__(self, name: str) -> None:
        if name in _READ_ONLY_MEMBERS:
            raise AttributeError(f"{name!r} is read-only on observable objects")
        super().__delattr__(name)

    def _copied_listeners(self) -> dict[str, list[Listener]]:
        return {name: list(callbacks) for name, callbacks in self.__listeners.items()}

    def __copy__(self) -> Observable:
        """Copy with its own registry holding the same listeners."""
        cls = type(self)
        clone = cls.__new__(cls)
        vars(clone).update(vars(self))
        object.__setattr__(clone, "_Observable__listeners", self._copied_listeners())
        return clone

    def __deepcopy__(self, memo: dict[int, Any]) -> Observable:
        """Deep-copy instance attributes; listeners are kept by reference."""
        cls = type(self)
        clone = cls.__new__(cls)
        memo[id(self)] = clone
        for key, value in vars(self).items():
            if not key.startswith("_Observable__"):
                value = copy.deepcopy(value, memo)
            object.__setattr__(clone, key, value)
        object.__setattr__(clone, "_Observable__listeners", self._copied_listeners())
        return clone


# Entries live as long as some object augmented from the class does.
_augmented_classes: weakref.WeakValueDictionary[type, type] = weakref.WeakValueDictionary()


def _restore_observable(cls: type, events: tuple[str, ...], config: PayloadConfig) -> Any:
    return make_observable(cls.__new__(cls), list(events), config=config)


def _observable_class(cls: type) -> type:
    """Return the observable subclass used to augment instances of ``cls``."""
    augmented = _augmented_classes.get(cls)
    if augmented is not None:
        return augmented

    def __reduce_ex__(self: Any, protocol: int) -> tuple[Any, ...]:
        # Pickle against the original class; listeners do not travel.
        state = self.__getstate__()
        if isinstance(state, dict):
            state = {k: v for k, v in state.items() if not k.startswith("_Observable__")}
        return (
            _restore_observable,
            (cls, tuple(self.events), self._Observable__config),
            state or None,
        )

    augmented = type(
        cls.__name__,
        (Observable, cls),
        {
            "__module__": cls.__module__,
            "__qualname__": cls.__qualname__,
            "__reduce_ex__": __reduce_ex__,
        },
    )
    _augmented_classes[cls] = augmented
    return augmented


def make_observable(
    target: Any = None,
    events: Any = None,
    *,
    config: PayloadConfig | None = None,
    clock: Clock | None = None,
) -> Any:
    """Turn ``target`` into an observable and return it.

    Without a target a new ``Observable`` is returned. Otherwise the target
    keeps its identity, attributes and behaviour, and gains the emitter
    members through a subclass of its own class.

    ``events`` is the allow-list: string items of a list or tuple are kept in
    order, anything else means every event name is accepted.

    Raises ``NotObservableError`` when the target cannot carry attributes
    (numbers, strings, builtin containers, functions, classes) and
    ``AlreadyObservableError`` when it is already observable.

    Augmented objects pickle through their original class: the restored
    object is made observable again with the same allow-list and payload
    config, but without listeners and with the default clock.
    """
    if target is None:
        return Observable(events, config=config, clock=clock)

    if isinstance(target, Observable):
        raise AlreadyObservableError(target)
    if isinstance(target, type) or not hasattr(target, "__dict__"):
        raise NotObservableError(target)

    original_class = type(target)
    try:
        object.__setattr__(target, "__class__", _observable_class(original_class))
    except (TypeError, AttributeError) as exc:
        # Enum classes and builtin types refuse to be subclassed or swapped.
        raise NotObservableError(target, str(exc)) from exc

    # Instance attributes would shadow the emitter methods.
    instance_dict = vars(target)
    for member in _READ_ONLY_MEMBERS:
        instance_dict.pop(member, None)

    Observable._bind_event_state(target, events, config=config, clock=clock)
    LOGGER.debug(
        "observable.installed",
        extra={"event": "observable.installed", "target": original_class.__name__},
    )
    return target
