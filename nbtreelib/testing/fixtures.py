"""Test fixtures for nbtreelib consumers.

Canonical trees with known shapes and traversal orders, so that test
suites built on nbtreelib do not each have to hand-assemble them.
"""

from typing import List

from ..core.tree import NumericBinaryTree


# Values of the standard nine-node tree, named by their path from the root
ROOT = 42
LEFT = 21
RIGHT = 63
LEFT_LEFT = 10
LEFT_RIGHT = 30
RIGHT_LEFT = 50
RIGHT_RIGHT = 70
RIGHT_LEFT_RIGHT = 55
RIGHT_RIGHT_LEFT = 66

STANDARD_NODE_COUNT = 9
STANDARD_LEAF_COUNT = 4
STANDARD_HEIGHT = 3

STANDARD_PREORDER: List[int] = [
    ROOT, LEFT, LEFT_LEFT, LEFT_RIGHT,
    RIGHT, RIGHT_LEFT, RIGHT_LEFT_RIGHT, RIGHT_RIGHT, RIGHT_RIGHT_LEFT,
]
STANDARD_INORDER: List[int] = [
    LEFT_LEFT, LEFT, LEFT_RIGHT,
    ROOT, RIGHT_LEFT, RIGHT_LEFT_RIGHT, RIGHT, RIGHT_RIGHT_LEFT, RIGHT_RIGHT,
]
STANDARD_POSTORDER: List[int] = [
    LEFT_LEFT, LEFT_RIGHT, LEFT,
    RIGHT_LEFT_RIGHT, RIGHT_LEFT, RIGHT_RIGHT_LEFT, RIGHT_RIGHT, RIGHT, ROOT,
]

SEARCH_INORDER: List[int] = list(range(11))
SEARCH_POSTORDER: List[int] = [0, 2, 1, 4, 3, 6, 10, 9, 8, 7, 5]


def standard_tree() -> NumericBinaryTree:
    """Build the standard nine-node test tree.

    Structure::

                 42
              /      \\
            21        63
           /  \\     /    \\
         10    30  50      70
                     \\    /
                      55  66
    """
    return NumericBinaryTree(
        ROOT,
        NumericBinaryTree(
            LEFT,
            NumericBinaryTree(LEFT_LEFT),
            NumericBinaryTree(LEFT_RIGHT),
        ),
        NumericBinaryTree(
            RIGHT,
            NumericBinaryTree(RIGHT_LEFT, None, NumericBinaryTree(RIGHT_LEFT_RIGHT)),
            NumericBinaryTree(RIGHT_RIGHT, NumericBinaryTree(RIGHT_RIGHT_LEFT), None),
        ),
    )


def search_tree() -> NumericBinaryTree:
    """Build an eleven-node tree whose inorder values are 0..10."""
    return NumericBinaryTree(
        5,
        NumericBinaryTree(
            3,
            NumericBinaryTree(1, NumericBinaryTree(0), NumericBinaryTree(2)),
            NumericBinaryTree(4),
        ),
        NumericBinaryTree(
            7,
            NumericBinaryTree(6),
            NumericBinaryTree(8, None, NumericBinaryTree(9, None, NumericBinaryTree(10))),
        ),
    )


def degenerate_tree(depth: int, leftward: bool = False) -> NumericBinaryTree:
    """Build a single-path tree of depth + 1 nodes holding 0..depth.

    Built bottom-up without recursion, so depth may exceed the interpreter
    recursion limit.
    """
    node = NumericBinaryTree(depth)
    for value in range(depth - 1, -1, -1):
        if leftward:
            node = NumericBinaryTree(value, node, None)
        else:
            node = NumericBinaryTree(value, None, node)
    return node
