"""Tests for the high-level functional API."""

import sys
import unittest
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from nbtreelib import (
    NumericBinaryTree,
    MemoryStorageAdapter,
    InvalidValueError,
    VerificationError,
    build_tree,
    traverse_tree,
    collect_values,
    count_nodes,
    find_nodes,
    get_leaf_nodes,
    get_tree_stats,
    save_tree,
    load_tree,
)
from nbtreelib.testing import fixtures
from nbtreelib.testing.fixtures import standard_tree


class CorruptingStorage(MemoryStorageAdapter):
    def write_bytes(self, location, data):
        super().write_bytes(location, data[:-1] + bytes([data[-1] ^ 0xFF]))


class TestBuildTree(unittest.TestCase):

    def test_standard_shape(self):
        spec = (42, (21, 10, 30), (63, (50, None, 55), (70, 66)))
        self.assertEqual(build_tree(spec), standard_tree())

    def test_scalars_and_none(self):
        self.assertIsNone(build_tree(None))
        self.assertEqual(build_tree(3), NumericBinaryTree(3))
        self.assertEqual(build_tree((3,)), NumericBinaryTree(3))

    def test_existing_trees_pass_through(self):
        leaf = NumericBinaryTree(1)
        tree = build_tree((0, leaf))
        self.assertIs(tree.left_child(), leaf)

    def test_bad_specs(self):
        with self.assertRaises(ValueError):
            build_tree((1, 2, 3, 4))
        with self.assertRaises(ValueError):
            build_tree(())
        with self.assertRaises(InvalidValueError):
            build_tree((None, 1))


class TestTraversalHelpers(unittest.TestCase):

    def setUp(self):
        self.root = standard_tree()

    def test_traverse_tree(self):
        values = [node.value() for node in traverse_tree(self.root, "pre")]
        self.assertEqual(values, fixtures.STANDARD_PREORDER)
        values = [node.value() for node in traverse_tree(self.root)]
        self.assertEqual(values, fixtures.STANDARD_POSTORDER)

    def test_traverse_tree_depth_limits(self):
        values = [n.value() for n in traverse_tree(self.root, "in", max_depth=1)]
        self.assertEqual(values, [21, 42, 63])
        values = [n.value() for n in traverse_tree(self.root, "pre", min_depth=2, max_depth=2)]
        self.assertEqual(values, [10, 30, 50, 70])

    def test_collect_values(self):
        self.assertEqual(collect_values(self.root), fixtures.STANDARD_PREORDER)
        self.assertEqual(collect_values(self.root, "in"), fixtures.STANDARD_INORDER)
        self.assertEqual(collect_values(NumericBinaryTree(), "post"), [])

    def test_count_nodes(self):
        self.assertEqual(count_nodes(self.root), 9)
        self.assertEqual(count_nodes(self.root, lambda n: n.value() > 50), 4)
        self.assertEqual(count_nodes(self.root, max_depth=1), 3)
        self.assertEqual(count_nodes(NumericBinaryTree()), 0)

    def test_find_nodes(self):
        found = [n.value() for n in find_nodes(self.root, lambda n: n.value() % 2 == 0)]
        self.assertEqual(found, [42, 10, 30, 50, 70, 66])

    def test_get_leaf_nodes(self):
        leaves = [n.value() for n in get_leaf_nodes(self.root)]
        self.assertEqual(leaves, [10, 30, 55, 66])
        self.assertEqual(len(leaves), self.root.leaf_count())

    def test_get_tree_stats(self):
        stats = get_tree_stats(self.root)
        self.assertEqual(stats['total_nodes'], 9)
        self.assertEqual(stats['leaf_nodes'], 4)
        self.assertEqual(stats['internal_nodes'], 5)
        self.assertEqual(stats['height'], 3)
        self.assertEqual(stats['depths'], {0: 1, 1: 2, 2: 4, 3: 2})

    def test_get_tree_stats_empty(self):
        stats = get_tree_stats(NumericBinaryTree())
        self.assertEqual(stats['total_nodes'], 0)
        self.assertEqual(stats['height'], -1)
        self.assertEqual(stats['depths'], {})


class TestPersistenceHelpers(unittest.TestCase):

    def test_save_and_load(self):
        storage = MemoryStorageAdapter()
        self.assertTrue(save_tree(standard_tree(), "a", storage=storage))
        self.assertEqual(load_tree("a", storage=storage), standard_tree())

    def test_load_missing_returns_none(self):
        self.assertIsNone(load_tree("missing", storage=MemoryStorageAdapter()))

    def test_save_non_strict_returns_false(self):
        self.assertFalse(save_tree(standard_tree(), "a", storage=CorruptingStorage()))

    def test_save_strict_raises(self):
        with self.assertRaises(VerificationError):
            save_tree(standard_tree(), "a", storage=CorruptingStorage(), strict=True)


if __name__ == "__main__":
    unittest.main()
