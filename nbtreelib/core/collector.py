"""Data collection strategies for nbtreelib.

DataCollectors define what is extracted from each subtree during a
traversal. The same traverser produces value sequences or subtree
sequences depending on the collector it is paired with.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Iterable, List, Optional, TYPE_CHECKING

from .traverser import TreeTraverser

if TYPE_CHECKING:
    from numbers import Number
    from .tree import NumericBinaryTree


class DataCollector(ABC):
    """Abstract base class for data collection strategies."""

    @abstractmethod
    def collect(self, node: "NumericBinaryTree", depth: int) -> Any:
        """Collect data from a non-empty subtree.

        Args:
            node: The subtree to collect data from
            depth: Depth of the subtree relative to the traversal root

        Returns:
            Collected data (type depends on collector)
        """
        pass

    def collect_all(self,
                    traverser: TreeTraverser,
                    root: "NumericBinaryTree",
                    max_depth: Optional[int] = None,
                    min_depth: int = 0) -> List[Any]:
        """Run traverser over root and collect from every yielded subtree."""
        return [
            self.collect(node, depth)
            for node, depth in traverser.traverse(root, max_depth, min_depth)
        ]


class ValueCollector(DataCollector):
    """Collects the numeric value stored at each node."""

    def collect(self, node: "NumericBinaryTree", depth: int) -> "Number":
        return node.value()


class SubtreeCollector(DataCollector):
    """Collects the subtree handles themselves (live nodes, not copies)."""

    def collect(self, node: "NumericBinaryTree", depth: int) -> "NumericBinaryTree":
        return node


class CustomCollector(DataCollector):
    """Collector that uses a user-provided function.

    Allows custom data collection logic without subclassing.
    """

    def __init__(self, collect_func: Callable[["NumericBinaryTree", int], Any]):
        """Initialize with custom collection function.

        Args:
            collect_func: Function(node, depth) -> Any
        """
        self.collect_func = collect_func

    def collect(self, node: "NumericBinaryTree", depth: int) -> Any:
        return self.collect_func(node, depth)


def values_of(trees: Iterable[Optional["NumericBinaryTree"]]) -> List[Optional["Number"]]:
    """Map a sequence of tree handles to their root values.

    A ``None`` entry contributes a ``None`` placeholder, an empty tree
    contributes nothing, and a non-empty tree contributes its value.

    Example:
        >>> values_of([None, NumericBinaryTree(), NumericBinaryTree(5)])
        [None, 5]
    """
    values: List[Optional["Number"]] = []
    for tree in trees:
        if tree is None:
            values.append(None)
        elif not tree.is_empty():
            values.append(tree.value())
    return values
