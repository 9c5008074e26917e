"""nbtreelib - Numeric Binary Tree Library.

nbtreelib provides NumericBinaryTree, a binary tree whose nodes hold
numeric values, with structural queries, in-place mutation, preorder /
inorder / postorder traversal, structural equality, and verified
persistence to a byte stream.

    from nbtreelib import NumericBinaryTree

    tree = NumericBinaryTree(2, NumericBinaryTree(1), NumericBinaryTree(3))
    tree.inorder_values()        # [1, 2, 3]
    tree.save("tree.nbt")        # True once written and verified
"""

__version__ = "0.1.0"

from .core import (
    NumericBinaryTree,
    TreeTraverser,
    PreOrderTraverser,
    InOrderTraverser,
    PostOrderTraverser,
    create_traverser,
    DataCollector,
    ValueCollector,
    SubtreeCollector,
    CustomCollector,
    values_of,
)
from .config import (
    TraversalOrder,
    RenderConfig,
    PersistenceConfig,
    DEFAULT_LOCATION,
)
from .errors import (
    NumericTreeError,
    InvalidValueError,
    EmptyTreeOperationError,
    PersistenceError,
    TreeDecodeError,
    TreeEncodeError,
    LocationUnavailableError,
    VerificationError,
)
from .rendering import render_tree
from .persistence import StorageAdapter, FileStorageAdapter, MemoryStorageAdapter
from .api import (
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

__all__ = [
    "__version__",
    # Core
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
    # Config
    'TraversalOrder',
    'RenderConfig',
    'PersistenceConfig',
    'DEFAULT_LOCATION',
    # Errors
    'NumericTreeError',
    'InvalidValueError',
    'EmptyTreeOperationError',
    'PersistenceError',
    'TreeDecodeError',
    'TreeEncodeError',
    'LocationUnavailableError',
    'VerificationError',
    # Rendering and persistence
    'render_tree',
    'StorageAdapter',
    'FileStorageAdapter',
    'MemoryStorageAdapter',
    # API
    'build_tree',
    'traverse_tree',
    'collect_values',
    'count_nodes',
    'find_nodes',
    'get_leaf_nodes',
    'get_tree_stats',
    'save_tree',
    'load_tree',
]
