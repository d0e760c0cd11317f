"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from domlike_observable.event_names import EventNames
from domlike_observable.exceptions import (
    AlreadyObservableError,
    ConfigValidationError,
    NotObservableError,
    ObservableError,
    UndefinedEventError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        self.assertTrue(issubclass(UndefinedEventError, ObservableError))
        self.assertTrue(issubclass(UndefinedEventError, ValueError))
        self.assertTrue(issubclass(NotObservableError, ObservableError))
        self.assertTrue(issubclass(NotObservableError, TypeError))
        self.assertTrue(issubclass(AlreadyObservableError, NotObservableError))
        self.assertTrue(issubclass(ConfigValidationError, ObservableError))
        self.assertTrue(issubclass(ObservableError, RuntimeError))

    def test_undefined_event_error_carries_details(self) -> None:
        events = EventNames(["a", "b"])
        error = UndefinedEventError("c", events)
        self.assertEqual(error.event_name, "c")
        self.assertIs(error.defined_events, events)
        self.assertIn('"c"', str(error))
        self.assertIn('["a","b"]', str(error))

    def test_not_observable_error_names_target_type(self) -> None:
        error = NotObservableError(42)
        self.assertEqual(error.target, 42)
        self.assertIn("int", str(error))
        self.assertEqual(AlreadyObservableError(object()).reason, "already observable")


if __name__ == "__main__":
    unittest.main()
