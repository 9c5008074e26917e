"""NumericBinaryTree, the tree engine of nbtreelib.

A NumericBinaryTree is either the empty tree or a node holding a numeric
value together with a left and a right subtree, each of which is again a
NumericBinaryTree. Absent children are represented internally by a private,
immutable empty sentinel, so every node always has two subtrees; the public
accessors report such a slot as ``None``.

The structure is a proper binary tree: callers must not make one node
reachable twice from the same root, nor make a tree its own descendant.
The engine never creates such aliasing itself.
"""

import logging
import numbers
from decimal import Decimal
from typing import Iterator, List, Optional, Union

from ..config import TraversalOrder, PersistenceConfig
from ..errors import EmptyTreeOperationError, InvalidValueError, PersistenceError
from ..rendering import render_tree, render_compact
from .collector import SubtreeCollector, ValueCollector
from .traverser import (
    InOrderTraverser,
    PostOrderTraverser,
    PreOrderTraverser,
    create_traverser,
)

logger = logging.getLogger(__name__)

_NO_VALUE = object()

# Hash contribution of an empty subtree
_EMPTY_HASH = 2

_PREORDER = PreOrderTraverser()
_INORDER = InOrderTraverser()
_POSTORDER = PostOrderTraverser()
_VALUES = ValueCollector()
_SUBTREES = SubtreeCollector()


def _check_value(value) -> None:
    """Raise InvalidValueError unless value can be stored in a node."""
    if value is None or isinstance(value, bool) or not isinstance(value, numbers.Number):
        raise InvalidValueError(value)
    # Signaling NaNs raise on comparison and cannot be hashed
    if isinstance(value, Decimal) and value.is_snan():
        raise InvalidValueError(value, f"Signaling NaN cannot be stored in a tree: {value!r}")


def _is_nan(value) -> bool:
    return value != value


def _components(value) -> tuple:
    """Parts compared NaN-aware: (real, imag) for complex values, else (value,)."""
    if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
        return (value.real, value.imag)
    return (value,)


def _values_equal(a, b) -> bool:
    """Numeric equality, except that NaN equals NaN so trees stay reflexive.

    Complex values match NaN per component, so ``complex(nan, 1)`` differs
    from ``complex(nan, 2)`` and from a real NaN.
    """
    if a == b:
        return True
    parts_a, parts_b = _components(a), _components(b)
    if len(parts_a) != len(parts_b):
        return False
    return all(x == y or (_is_nan(x) and _is_nan(y)) for x, y in zip(parts_a, parts_b))


def _value_hash(value) -> int:
    parts = _components(value)
    if not any(_is_nan(part) for part in parts):
        return hash(value)
    if len(parts) == 1:
        return 0
    return hash(tuple(0 if _is_nan(part) else hash(part) for part in parts))


class NumericBinaryTree:
    """A binary tree whose nodes hold non-null numeric values.

    Construction:
        NumericBinaryTree()                    the empty tree
        NumericBinaryTree(value)               a leaf
        NumericBinaryTree(value, left, right)  a node; None children are empty

    The empty tree answers ``is_empty()``, ``node_count()`` and ``height()``
    (True, 0 and -1). Every other query and every mutator raises
    EmptyTreeOperationError on it.

    Two trees are equal when they have the same shape and equal values at
    corresponding nodes. Iterating a tree yields its subtrees in postorder.

    Example:
        >>> tree = NumericBinaryTree(2, NumericBinaryTree(1), NumericBinaryTree(3))
        >>> tree.inorder_values()
        [1, 2, 3]
    """

    def __init__(self,
                 value=_NO_VALUE,
                 left: Optional["NumericBinaryTree"] = None,
                 right: Optional["NumericBinaryTree"] = None):
        """Create an empty tree (no arguments) or a node.

        Args:
            value: Numeric value of the root; omit for the empty tree
            left: Left subtree, None or empty for no left child
            right: Right subtree, None or empty for no right child

        Raises:
            InvalidValueError: If value is None or not a number
        """
        if value is _NO_VALUE:
            if left is not None or right is not None:
                raise InvalidValueError(
                    None, "An empty tree cannot have children; supply a value"
                )
            self._value = _NO_VALUE
            self._left = None
            self._right = None
            return

        _check_value(value)
        self._value = value
        self._left = _as_subtree(left)
        self._right = _as_subtree(right)

    @classmethod
    def empty(cls) -> "NumericBinaryTree":
        """Return a new empty tree."""
        return cls()

    @classmethod
    def node(cls,
             value,
             left: Optional["NumericBinaryTree"] = None,
             right: Optional["NumericBinaryTree"] = None) -> "NumericBinaryTree":
        """Return a new node holding value; see the constructor."""
        return cls(value, left, right)

    # ------------------------------------------------------------------
    # Total queries

    def is_empty(self) -> bool:
        """True iff this tree holds no value."""
        return self._value is _NO_VALUE

    def node_count(self) -> int:
        """Number of nodes in the tree; 0 for the empty tree."""
        count = 0
        for _ in _PREORDER.traverse(self):
            count += 1
        return count

    def height(self) -> int:
        """Length of the longest downward path to a leaf; -1 for the empty tree."""
        return max((depth for _, depth in _PREORDER.traverse(self)), default=-1)

    # ------------------------------------------------------------------
    # Node queries

    def _require_node(self, operation: str) -> None:
        if self._value is _NO_VALUE:
            raise EmptyTreeOperationError(operation)

    def value(self):
        """Return the value stored at the root."""
        self._require_node("value")
        return self._value

    def left_child(self) -> Optional["NumericBinaryTree"]:
        """Return the left subtree, or None when there is no left child."""
        self._require_node("left_child")
        if self._left.is_empty():
            return None
        return self._left

    def right_child(self) -> Optional["NumericBinaryTree"]:
        """Return the right subtree, or None when there is no right child."""
        self._require_node("right_child")
        if self._right.is_empty():
            return None
        return self._right

    def is_leaf(self) -> bool:
        """True iff this node has no children."""
        self._require_node("is_leaf")
        return self._left.is_empty() and self._right.is_empty()

    def is_internal(self) -> bool:
        """True iff this node has at least one child."""
        self._require_node("is_internal")
        return not (self._left.is_empty() and self._right.is_empty())

    def child_count(self) -> int:
        """Number of children of this node (0, 1 or 2)."""
        self._require_node("child_count")
        return int(not self._left.is_empty()) + int(not self._right.is_empty())

    def leaf_count(self) -> int:
        """Number of leaves in the tree rooted here."""
        self._require_node("leaf_count")
        return sum(1 for node, _ in _PREORDER.traverse(self) if node.is_leaf())

    # ------------------------------------------------------------------
    # Mutators

    def set_value(self, value) -> None:
        """Replace the value stored at the root.

        Raises:
            EmptyTreeOperationError: If the tree is empty
            InvalidValueError: If value is None or not a number
        """
        self._require_node("set_value")
        _check_value(value)
        self._value = value

    def set_left_child(self, subtree: Optional["NumericBinaryTree"]) -> None:
        """Replace the left subtree; None (or an empty tree) removes it."""
        self._require_node("set_left_child")
        self._left = _as_subtree(subtree)

    def set_right_child(self, subtree: Optional["NumericBinaryTree"]) -> None:
        """Replace the right subtree; None (or an empty tree) removes it."""
        self._require_node("set_right_child")
        self._right = _as_subtree(subtree)

    # ------------------------------------------------------------------
    # Traversals

    def preorder_values(self) -> List[numbers.Number]:
        return _VALUES.collect_all(_PREORDER, self)

    def inorder_values(self) -> List[numbers.Number]:
        return _VALUES.collect_all(_INORDER, self)

    def postorder_values(self) -> List[numbers.Number]:
        return _VALUES.collect_all(_POSTORDER, self)

    def preorder_subtrees(self) -> List["NumericBinaryTree"]:
        return _SUBTREES.collect_all(_PREORDER, self)

    def inorder_subtrees(self) -> List["NumericBinaryTree"]:
        return _SUBTREES.collect_all(_INORDER, self)

    def postorder_subtrees(self) -> List["NumericBinaryTree"]:
        return _SUBTREES.collect_all(_POSTORDER, self)

    def traverse(self, order: Union[TraversalOrder, str] = TraversalOrder.POSTORDER) -> List["NumericBinaryTree"]:
        """Return every subtree in the given order.

        Args:
            order: TraversalOrder or its name ("pre", "in", "post", ...)

        Raises:
            ValueError: If the order name is not recognized
        """
        return create_traverser(order).subtrees(self)

    def __iter__(self) -> Iterator["NumericBinaryTree"]:
        """Iterate over every subtree in postorder."""
        for node, _ in _POSTORDER.traverse(self):
            yield node

    # ------------------------------------------------------------------
    # Equality, hashing and rendering

    def __eq__(self, other: object) -> bool:
        """Trees are equal if they have the same shape and equal values."""
        if not isinstance(other, NumericBinaryTree):
            return NotImplemented

        pending = [(self, other)]
        while pending:
            a, b = pending.pop()
            if a is b:
                continue
            if a.is_empty() or b.is_empty():
                if a.is_empty() and b.is_empty():
                    continue
                return False
            if not _values_equal(a._value, b._value):
                return False
            pending.append((a._right, b._right))
            pending.append((a._left, b._left))
        return True

    def __hash__(self) -> int:
        """Structural hash, consistent with __eq__."""
        if self.is_empty():
            return _EMPTY_HASH

        hashes = {}
        for node, _ in _POSTORDER.traverse(self):
            left_hash = hashes[id(node._left)] if not node._left.is_empty() else _EMPTY_HASH
            right_hash = hashes[id(node._right)] if not node._right.is_empty() else _EMPTY_HASH
            hashes[id(node)] = hash((_value_hash(node._value), left_hash, right_hash))
        return hashes[id(self)]

    def __str__(self) -> str:
        return render_tree(self)

    def __repr__(self) -> str:
        return render_compact(self)

    # ------------------------------------------------------------------
    # Persistence

    def save(self,
             destination=None,
             storage=None,
             config: Optional[PersistenceConfig] = None) -> bool:
        """Write this tree to destination and verify it reads back identically.

        Args:
            destination: Location to write (defaults to ``nbt.ser``)
            storage: StorageAdapter to write through (defaults to the filesystem)
            config: PersistenceConfig overriding the default location/verification

        Returns:
            True if the tree was written and the written bytes decode to a
            tree that is equal to, and renders the same as, this one

        Raises:
            OSError: If writing fails
        """
        from ..persistence.store import write_tree

        try:
            write_tree(self, destination, storage=storage, config=config)
        except PersistenceError as e:
            logger.warning("Save did not verify: %s", e)
            return False
        return True

    def restore(self,
                source=None,
                storage=None,
                config: Optional[PersistenceConfig] = None) -> bool:
        """Replace this tree's content with a tree read from source.

        On any failure this tree is left exactly as it was.

        Args:
            source: Location to read (defaults to ``nbt.ser``)
            storage: StorageAdapter to read through (defaults to the filesystem)
            config: PersistenceConfig overriding the default location

        Returns:
            True if a well-formed tree was read and adopted

        Raises:
            OSError: If the location was opened but reading it failed
        """
        from ..persistence.store import read_tree

        try:
            restored = read_tree(source, storage=storage, config=config)
        except PersistenceError as e:
            logger.warning("Restore rejected: %s", e)
            return False

        self._value = restored._value
        self._left = restored._left
        self._right = restored._right
        return True


def _as_subtree(subtree: Optional[NumericBinaryTree]) -> NumericBinaryTree:
    """Normalize a child argument, mapping None and empty trees to the sentinel."""
    if subtree is None:
        return _EMPTY
    if not isinstance(subtree, NumericBinaryTree):
        raise TypeError(
            f"Children must be NumericBinaryTree or None, got {type(subtree).__name__}"
        )
    if subtree.is_empty():
        return _EMPTY
    return subtree


_EMPTY = NumericBinaryTree()
