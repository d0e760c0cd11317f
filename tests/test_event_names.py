"""Tests for the immutable event-name allow-list."""

from __future__ import annotations

import unittest

from domlike_observable.event_names import EventNames


class EventNamesTests(unittest.TestCase):
    """Validate filtering, acceptance and serialization of allow-lists."""

    def test_empty_allow_list_accepts_every_name(self) -> None:
        names = EventNames()
        self.assertEqual(len(names), 0)
        for candidate in ("ping", "", "anything at all"):
            self.assertTrue(names.contains(candidate))

    def test_non_empty_allow_list_accepts_exact_matches_only(self) -> None:
        names = EventNames(["ping", "pong"])
        self.assertTrue(names.contains("ping"))
        self.assertTrue(names.contains("pong"))
        self.assertFalse(names.contains("Ping"))
        self.assertFalse(names.contains("ping "))
        self.assertFalse(names.contains("other"))

    def test_non_string_items_are_dropped_in_order(self) -> None:
        names = EventNames(["a", 1, None, "b", b"c", ["d"], "e"])
        self.assertEqual(list(names), ["a", "b", "e"])

    def test_tuple_input_is_accepted(self) -> None:
        self.assertEqual(list(EventNames(("x", "y"))), ["x", "y"])

    def test_non_sequence_input_means_open_acceptance(self) -> None:
        for raw in ("ping", {"ping": 1}, {"ping"}, 42, object()):
            names = EventNames(raw)
            self.assertEqual(len(names), 0, raw)
            self.assertTrue(names.contains("whatever"))

    def test_duplicates_are_preserved(self) -> None:
        names = EventNames(["a", "a", "b"])
        self.assertEqual(list(names), ["a", "a", "b"])
        self.assertTrue(names.contains("a"))

    def test_string_form_is_compact_json_array(self) -> None:
        self.assertEqual(str(EventNames(["ping", "pong"])), '["ping","pong"]')
        self.assertEqual(EventNames(["ping"]).to_string(), '["ping"]')
        self.assertEqual(str(EventNames()), "[]")

    def test_string_form_escapes_quotes(self) -> None:
        self.assertEqual(str(EventNames(['say "hi"'])), '["say \\"hi\\""]')

    def test_sequence_protocol(self) -> None:
        names = EventNames(["a", "b", "c"])
        self.assertEqual(names[0], "a")
        self.assertEqual(names[-1], "c")
        self.assertEqual(names[1:], ("b", "c"))
        self.assertIn("b", names)
        self.assertNotIn("z", names)
        self.assertEqual(names.index("c"), 2)

    def test_literal_membership_differs_from_acceptance_when_empty(self) -> None:
        names = EventNames([])
        self.assertNotIn("ping", names)
        self.assertTrue(names.contains("ping"))

    def test_equality_and_hash(self) -> None:
        self.assertEqual(EventNames(["a", "b"]), EventNames(["a", "b"]))
        self.assertEqual(EventNames(["a", "b"]), ["a", "b"])
        self.assertNotEqual(EventNames(["a"]), EventNames(["b"]))
        self.assertEqual(hash(EventNames(["a"])), hash(EventNames(("a",))))

    def test_is_immutable(self) -> None:
        names = EventNames(["a"])
        with self.assertRaises(AttributeError):
            names._names = ("b",)  # type: ignore[misc]
        with self.assertRaises(AttributeError):
            del names._names  # type: ignore[misc]
        with self.assertRaises(TypeError):
            names[0] = "b"  # type: ignore[index]
        self.assertEqual(list(names), ["a"])

    def test_input_list_mutation_does_not_leak(self) -> None:
        raw = ["a"]
        names = EventNames(raw)
        raw.append("b")
        self.assertFalse(names.contains("b"))


if __name__ == "__main__":
    unittest.main()
