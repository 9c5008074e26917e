"""High-level API for nbtreelib.

This module provides simple, functional interfaces for common tree
operations. These functions wrap the object-oriented API for ease of use
in simple cases.
"""

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .config import PersistenceConfig, TraversalOrder
from .core.collector import ValueCollector
from .core.traverser import create_traverser
from .core.tree import NumericBinaryTree
from .errors import PersistenceError
from .persistence.storage import Location, StorageAdapter
from .persistence.store import read_tree, write_tree

logger = logging.getLogger(__name__)

OrderLike = Union[TraversalOrder, str]


def build_tree(spec: Any) -> Optional[NumericBinaryTree]:
    """Build a tree from nested tuples.

    A spec is ``None`` (no tree), a bare number (a leaf), or a tuple
    ``(value, left_spec, right_spec)``; ``(value,)`` and ``(value, left_spec)``
    are accepted with the missing children taken as ``None``.

    Raises:
        InvalidValueError: If a node value is None or not numeric
        ValueError: If a tuple is empty or has more than three entries

    Example:
        >>> tree = build_tree((2, 1, (3, None, 4)))
        >>> tree.inorder_values()
        [1, 2, 3, 4]
    """
    if spec is None:
        return None
    if isinstance(spec, NumericBinaryTree):
        return spec
    if not isinstance(spec, tuple):
        return NumericBinaryTree(spec)
    if not 1 <= len(spec) <= 3:
        raise ValueError(f"Tree spec tuples need 1 to 3 entries, got {len(spec)}")

    value, *children = spec
    children += [None] * (2 - len(children))
    return NumericBinaryTree(value, build_tree(children[0]), build_tree(children[1]))


def traverse_tree(
    tree: NumericBinaryTree,
    order: OrderLike = TraversalOrder.POSTORDER,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
) -> Iterator[NumericBinaryTree]:
    """Simple interface for tree traversal.

    Args:
        tree: Root of the traversal
        order: TraversalOrder or its name (pre, in, post)
        max_depth: Maximum depth to traverse (None = unlimited)
        min_depth: Minimum depth before yielding subtrees

    Yields:
        Subtrees in the requested order

    Example:
        >>> for node in traverse_tree(tree, "in", max_depth=1):
        ...     print(node.value())
    """
    traverser = create_traverser(order)
    for node, _ in traverser.traverse(tree, max_depth, min_depth):
        yield node


def collect_values(
    tree: NumericBinaryTree,
    order: OrderLike = TraversalOrder.PREORDER,
    max_depth: Optional[int] = None,
    min_depth: int = 0,
) -> List[Any]:
    """Return the values of tree in the requested order."""
    return ValueCollector().collect_all(create_traverser(order), tree, max_depth, min_depth)


def count_nodes(
    tree: NumericBinaryTree,
    predicate: Optional[Callable[[NumericBinaryTree], bool]] = None,
    **kwargs
) -> int:
    """Count subtrees, optionally only those matching predicate.

    Args:
        tree: Root of the traversal
        predicate: Function that returns True for subtrees to count
        **kwargs: Traversal options (see traverse_tree)
    """
    count = 0
    for node in traverse_tree(tree, **kwargs):
        if predicate is None or predicate(node):
            count += 1
    return count


def find_nodes(
    tree: NumericBinaryTree,
    predicate: Callable[[NumericBinaryTree], bool],
    order: OrderLike = TraversalOrder.PREORDER,
    **kwargs
) -> Iterator[NumericBinaryTree]:
    """Find subtrees that match a predicate.

    Example:
        >>> # Find all nodes holding negative values
        >>> for node in find_nodes(tree, lambda n: n.value() < 0):
        ...     print(node.value())
    """
    for node in traverse_tree(tree, order, **kwargs):
        if predicate(node):
            yield node


def get_leaf_nodes(
    tree: NumericBinaryTree,
    order: OrderLike = TraversalOrder.PREORDER,
) -> Iterator[NumericBinaryTree]:
    """Yield every leaf of tree in the requested order."""
    for node in traverse_tree(tree, order):
        if node.is_leaf():
            yield node


def get_tree_stats(tree: NumericBinaryTree) -> Dict[str, Any]:
    """Get statistics about a tree.

    Returns:
        Dictionary with total_nodes, leaf_nodes, internal_nodes, height
        and depths (node count per depth)

    Example:
        >>> stats = get_tree_stats(tree)
        >>> print(f"Total nodes: {stats['total_nodes']}")
    """
    stats = {
        'total_nodes': 0,
        'leaf_nodes': 0,
        'height': -1,
        'depths': {},
    }

    for node, depth in create_traverser(TraversalOrder.PREORDER).traverse(tree):
        stats['total_nodes'] += 1
        if node.is_leaf():
            stats['leaf_nodes'] += 1
        stats['height'] = max(stats['height'], depth)
        stats['depths'][depth] = stats['depths'].get(depth, 0) + 1

    stats['internal_nodes'] = stats['total_nodes'] - stats['leaf_nodes']
    return stats


def save_tree(
    tree: NumericBinaryTree,
    location: Optional[Location] = None,
    storage: Optional[StorageAdapter] = None,
    strict: bool = False,
    config: Optional[PersistenceConfig] = None,
) -> bool:
    """Save tree, verifying the result.

    Args:
        tree: Tree to save
        location: Where to write (None = default location)
        storage: StorageAdapter (None = filesystem)
        strict: Raise the PersistenceError instead of returning False
        config: Persistence options

    Returns:
        True if saved and verified

    Raises:
        PersistenceError: Only when strict is True
        OSError: If the write fails
    """
    if not strict:
        return tree.save(location, storage=storage, config=config)
    write_tree(tree, location, storage=storage, config=config)
    return True


def load_tree(
    location: Optional[Location] = None,
    storage: Optional[StorageAdapter] = None,
    config: Optional[PersistenceConfig] = None,
) -> Optional[NumericBinaryTree]:
    """Load a tree into a new object.

    Returns:
        The loaded tree, or None if nothing valid was stored at location

    Raises:
        OSError: If the location was opened but reading it failed
    """
    try:
        return read_tree(location, storage=storage, config=config)
    except PersistenceError as e:
        logger.warning("Could not load tree: %s", e)
        return None
