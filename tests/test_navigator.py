"""
Unit tests for navigator.py - working set and pointer state machine.

Coverage focus:
- current/remaining_count on empty and non-empty working sets
- advance past the end, retreat at both boundaries
- remove_current keeping the pointer index
- insert/seek used by undo and redo
"""

import sys
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from navigator import Navigator
from path_set import PathEntry


def _entries(*names):
    return [PathEntry.file(f"/photos/{n}") for n in names]


class TestEmptyNavigator(unittest.TestCase):
    """An empty working set is a defined state, not an error."""

    def test_current_is_none(self):
        nav = Navigator()
        self.assertIsNone(nav.current())
        self.assertIsNone(nav.position)
        self.assertTrue(nav.is_empty)

    def test_remaining_count_is_zero(self):
        self.assertEqual(Navigator().remaining_count(), 0)

    def test_advance_retreat_remove_are_noops(self):
        nav = Navigator()
        nav.advance()
        nav.retreat()
        self.assertIsNone(nav.remove_current())
        self.assertIsNone(nav.current())
        self.assertEqual(len(nav), 0)


class TestAdvance(unittest.TestCase):

    def setUp(self):
        self.a, self.b, self.c = _entries("a.jpg", "b.jpg", "c.jpg")
        self.nav = Navigator([self.a, self.b, self.c])

    def test_starts_on_first_entry(self):
        self.assertEqual(self.nav.current(), self.a)
        self.assertEqual(self.nav.position, 0)
        self.assertEqual(self.nav.remaining_count(), 3)

    def test_advance_moves_forward(self):
        self.nav.advance()
        self.assertEqual(self.nav.current(), self.b)
        self.assertEqual(self.nav.remaining_count(), 2)

    def test_advancing_past_end_stays_empty(self):
        """Many more advances than entries never fault."""
        for _ in range(10):
            self.nav.advance()
            self.nav.current()
        self.assertIsNone(self.nav.current())
        self.assertIsNone(self.nav.position)
        self.assertEqual(self.nav.remaining_count(), 0)
        self.assertEqual(len(self.nav), 3)

    def test_retreat_from_end_lands_on_last(self):
        for _ in range(5):
            self.nav.advance()
        self.nav.retreat()
        self.assertEqual(self.nav.current(), self.c)

    def test_retreat_at_start_is_noop(self):
        self.nav.retreat()
        self.assertEqual(self.nav.position, 0)

    def test_extend_after_end_positions_on_new_entry(self):
        for _ in range(3):
            self.nav.advance()
        (d,) = _entries("d.jpg")
        self.assertEqual(self.nav.extend([d, self.a]), 1)
        self.assertEqual(self.nav.current(), d)
        self.assertEqual(len(self.nav), 4)


class TestRemoveCurrent(unittest.TestCase):

    def setUp(self):
        self.a, self.b = _entries("a.jpg", "b.jpg")
        self.nav = Navigator([self.a, self.b])

    def test_next_entry_slides_into_place(self):
        removed = self.nav.remove_current()
        self.assertEqual(removed, self.a)
        self.assertEqual(self.nav.position, 0)
        self.assertEqual(self.nav.current(), self.b)
        self.assertNotIn(self.a, self.nav)

    def test_removing_last_entry_goes_empty(self):
        self.nav.advance()
        self.nav.remove_current()
        self.assertIsNone(self.nav.current())
        self.assertEqual(self.nav.entries, [self.a])

    def test_insert_and_seek_restore_entry(self):
        self.nav.remove_current()
        self.nav.insert(0, self.a)
        self.nav.seek(0)
        self.assertEqual(self.nav.entries, [self.a, self.b])
        self.assertEqual(self.nav.current(), self.a)

    def test_discard_before_pointer_keeps_current(self):
        self.nav.advance()
        self.assertEqual(self.nav.discard(self.a.path), self.a)
        self.assertEqual(self.nav.current(), self.b)
        self.assertIsNone(self.nav.discard(self.a.path))

    def test_insert_rejects_duplicate(self):
        with self.assertRaises(ValueError):
            self.nav.insert(0, self.b)

    def test_seek_out_of_range(self):
        with self.assertRaises(IndexError):
            self.nav.seek(3)


if __name__ == "__main__":
    unittest.main()
