"""Immutable allow-list of event names accepted by an observable."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
import json
from typing import Any, overload


class EventNames(Sequence[str]):
    """Frozen, ordered view of the event names an observable accepts.

    An empty allow-list accepts every event name. ``contains`` performs the
    acceptance check used by the observable, while ``in`` keeps the usual
    sequence meaning of literal membership.

    ``str()`` returns the names as a compact JSON array, e.g. ``["a","b"]``.
    """

    __slots__ = ("_names",)

    def __init__(self, names: Any = None) -> None:
        accepted: tuple[str, ...] = ()
        if isinstance(names, Sequence) and not isinstance(names, (str, bytes)):
            accepted = tuple(item for item in names if isinstance(item, str))
        object.__setattr__(self, "_names", accepted)

    def contains(self, name: str) -> bool:
        """Return True when ``name`` may be registered or dispatched."""
        if not self._names:
            return True
        return name in self._names

    def to_string(self) -> str:
        return json.dumps(list(self._names), ensure_ascii=False, separators=(",", ":"))

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"EventNames({list(self._names)!r})"

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[str, ...]: ...

    def __getitem__(self, index: int | slice) -> str | tuple[str, ...]:
        return self._names[index]

    def __len__(self) -> int:
        return len(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EventNames):
            return self._names == other._names
        if isinstance(other, (list, tuple)):
            return self._names == tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._names)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")
