"""Core components of nbtreelib: the tree engine, traversers and collectors."""

from .tree import NumericBinaryTree
from .traverser import (
    TreeTraverser,
    PreOrderTraverser,
    InOrderTraverser,
    PostOrderTraverser,
    create_traverser,
)
from .collector import (
    DataCollector,
    ValueCollector,
    SubtreeCollector,
    CustomCollector,
    values_of,
)

__all__ = [
    'NumericBinaryTree',
    'TreeTraverser',
    'PreOrderTraverser',
    'InOrderTraverser',
    'PostOrderTraverser',
    'create_traverser',
    'DataCollector',
    'ValueCollector',
    'SubtreeCollector',
    'CustomCollector',
    'values_of',
]
