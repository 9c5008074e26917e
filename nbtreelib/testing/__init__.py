"""Testing utilities for nbtreelib consumers."""

from .fixtures import standard_tree, search_tree, degenerate_tree

__all__ = ['standard_tree', 'search_tree', 'degenerate_tree']
