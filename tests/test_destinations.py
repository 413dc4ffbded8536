"""
Unit tests for path_set.py and destinations.py - dedup by canonical path.
"""

import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from destinations import DestinationRegistry
from errors import InvalidPathError
from path_set import EntryKind, PathEntry, PathSet


class TestPathSet(unittest.TestCase):

    def test_add_dedups_by_canonical_path(self):
        paths = PathSet()
        self.assertTrue(paths.add(PathEntry.file("/photos/a.jpg")))
        self.assertFalse(paths.add(PathEntry.file("/photos/./x/../a.jpg")))
        self.assertEqual(len(paths), 1)

    def test_views_keep_insertion_order(self):
        paths = PathSet([
            PathEntry.file("/p/b.jpg"),
            PathEntry.folder("/p/keep"),
            PathEntry.file("/p/a.jpg"),
        ])
        self.assertEqual([e.name for e in paths.files], ["b.jpg", "a.jpg"])
        self.assertEqual([e.kind for e in paths.folders], [EntryKind.FOLDER])

    def test_extend_returns_only_new_entries(self):
        paths = PathSet([PathEntry.file("/p/a.jpg")])
        new = paths.extend([PathEntry.file("/p/a.jpg"), PathEntry.file("/p/b.jpg")])
        self.assertEqual([e.name for e in new], ["b.jpg"])


class TestDestinationRegistry(unittest.TestCase):

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.keep = self.temp_path / "keep"
        self.keep.mkdir()
        self.registry = DestinationRegistry()

    def tearDown(self):
        self.temp_dir.cleanup()

    def test_adding_same_folder_twice_keeps_one(self):
        self.assertTrue(self.registry.add(str(self.keep)))
        self.assertFalse(self.registry.add(str(self.keep) + os.sep))
        self.assertEqual(len(self.registry), 1)
        self.assertIn(str(self.keep), self.registry)

    def test_symlinked_folder_is_same_destination(self):
        link = self.temp_path / "link"
        try:
            link.symlink_to(self.keep, target_is_directory=True)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported")
        self.registry.add(str(self.keep))
        self.assertFalse(self.registry.add(str(link)))

    def test_missing_folder_is_invalid(self):
        with self.assertRaises(InvalidPathError):
            self.registry.add(str(self.temp_path / "nope"))
        self.assertEqual(len(self.registry), 0)

    def test_file_is_not_a_destination(self):
        f = self.temp_path / "a.jpg"
        f.touch()
        with self.assertRaises(InvalidPathError):
            self.registry.add(str(f))

    def test_empty_path_is_invalid(self):
        with self.assertRaises(InvalidPathError):
            self.registry.add("  ")

    def test_clear(self):
        self.registry.add(str(self.keep))
        self.registry.clear()
        self.assertEqual(len(self.registry), 0)
        self.assertEqual(self.registry.folders, [])


if __name__ == "__main__":
    unittest.main()
