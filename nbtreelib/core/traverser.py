"""Tree traversal strategies for nbtreelib.

Traversers implement the three depth-first orders over a binary tree.
They only use the public accessors of the tree (``is_empty``,
``left_child``, ``right_child``), and they walk with an explicit stack so
that degenerate trees deeper than the interpreter recursion limit are
still traversable.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple, Union, TYPE_CHECKING

from ..config import TraversalOrder

if TYPE_CHECKING:
    from .tree import NumericBinaryTree


class TreeTraverser(ABC):
    """Abstract base class for binary tree traversal strategies.

    Subclasses decide the visitation order. All of them yield
    ``(subtree, depth)`` pairs where depth is relative to the root, and all
    of them yield nothing for the empty tree.
    """

    order: TraversalOrder

    @abstractmethod
    def traverse(self,
                 root: "NumericBinaryTree",
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple["NumericBinaryTree", int]]:
        """Traverse the tree starting from root.

        Args:
            root: Starting tree for traversal
            max_depth: Maximum depth to traverse (None = unlimited)
            min_depth: Minimum depth before yielding nodes

        Yields:
            Tuples of (subtree, depth) where depth is relative to root
        """
        pass

    def subtrees(self, root: "NumericBinaryTree") -> List["NumericBinaryTree"]:
        """Eagerly collect every subtree of root in this traverser's order."""
        return [node for node, _ in self.traverse(root)]

    def _should_yield(self, depth: int, min_depth: int, max_depth: Optional[int]) -> bool:
        """Check if a node at given depth should be yielded."""
        if depth < min_depth:
            return False
        if max_depth is not None and depth > max_depth:
            return False
        return True

    def _should_explore(self, depth: int, max_depth: Optional[int]) -> bool:
        """Check if children of node at given depth should be explored."""
        if max_depth is None:
            return True
        return depth < max_depth


class PreOrderTraverser(TreeTraverser):
    """Depth-first pre-order: node, then left subtree, then right subtree.

    Good for copying trees; it is also the order the persistence codec
    writes records in.
    """

    order = TraversalOrder.PREORDER

    def traverse(self,
                 root: "NumericBinaryTree",
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple["NumericBinaryTree", int]]:
        if root.is_empty():
            return

        stack = [(root, 0)]
        while stack:
            node, depth = stack.pop()

            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)

            if self._should_explore(depth, max_depth):
                # Right is pushed first so that left is visited first
                right = node.right_child()
                if right is not None:
                    stack.append((right, depth + 1))
                left = node.left_child()
                if left is not None:
                    stack.append((left, depth + 1))


class InOrderTraverser(TreeTraverser):
    """Depth-first in-order: left subtree, then node, then right subtree."""

    order = TraversalOrder.INORDER

    def traverse(self,
                 root: "NumericBinaryTree",
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple["NumericBinaryTree", int]]:
        if root.is_empty():
            return

        stack: List[Tuple["NumericBinaryTree", int]] = []
        current, depth = root, 0

        while stack or current is not None:
            # Descend as far left as allowed
            while current is not None:
                stack.append((current, depth))
                if self._should_explore(depth, max_depth):
                    current = current.left_child()
                else:
                    current = None
                depth += 1

            node, depth = stack.pop()
            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)

            if self._should_explore(depth, max_depth):
                current = node.right_child()
            else:
                current = None
            depth += 1


class PostOrderTraverser(TreeTraverser):
    """Depth-first post-order: left subtree, then right subtree, then node.

    Children are visited before their parent, which makes this the natural
    order for bottom-up aggregation. It is the tree's default iteration
    order.
    """

    order = TraversalOrder.POSTORDER

    def traverse(self,
                 root: "NumericBinaryTree",
                 max_depth: Optional[int] = None,
                 min_depth: int = 0) -> Iterator[Tuple["NumericBinaryTree", int]]:
        if root.is_empty():
            return

        # Node-right-left pre-order, reversed, is left-right-node post-order
        stack = [(root, 0)]
        visited: List[Tuple["NumericBinaryTree", int]] = []
        while stack:
            node, depth = stack.pop()
            visited.append((node, depth))
            if self._should_explore(depth, max_depth):
                left = node.left_child()
                if left is not None:
                    stack.append((left, depth + 1))
                right = node.right_child()
                if right is not None:
                    stack.append((right, depth + 1))

        for node, depth in reversed(visited):
            if self._should_yield(depth, min_depth, max_depth):
                yield (node, depth)


_TRAVERSERS = {
    traverser.order: traverser
    for traverser in (PreOrderTraverser, InOrderTraverser, PostOrderTraverser)
}


def create_traverser(order: Union[TraversalOrder, str]) -> TreeTraverser:
    """Create a traverser instance by order.

    Args:
        order: A TraversalOrder or its name (pre, in, post, preorder, ...)

    Returns:
        TreeTraverser instance

    Raises:
        ValueError: If the order name is not recognized
    """
    return _TRAVERSERS[TraversalOrder.parse(order)]()
