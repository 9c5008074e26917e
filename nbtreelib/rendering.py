"""Text rendering of numeric binary trees.

A node renders as its quoted value followed by its left and right
renderings, one level deeper and separated by a comma::

    ["42":
      ["21":
        ["10":
         _,
         _],
       _],
     _]

An empty tree renders as ``X_`` and an absent child slot as ``_``. Every
value in the tree appears in the output as ``str(value)``.
"""

from typing import List, Optional, TYPE_CHECKING

from .config import RenderConfig, DEFAULT_RENDER_CONFIG

if TYPE_CHECKING:
    from .core.tree import NumericBinaryTree


def render_tree(tree: "NumericBinaryTree", config: Optional[RenderConfig] = None) -> str:
    """Render tree as indented multi-line text.

    Args:
        tree: Tree to render (may be empty)
        config: Layout options (defaults to DEFAULT_RENDER_CONFIG)

    Returns:
        Non-empty string containing every value in the tree

    Raises:
        ValueError: If config is invalid
    """
    config = config or DEFAULT_RENDER_CONFIG
    problems = config.validate()
    if problems:
        raise ValueError(f"Invalid render configuration: {'; '.join(problems)}")

    if tree.is_empty():
        return config.empty_marker

    parts: List[str] = []
    # Work items are either literal text or (subtree, level) pairs
    stack: list = [(tree, 0)]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        node, level = item
        indent = " " * (config.indent_width * level)
        parts.append(f'{indent}["{node.value()}":\n')

        slots = []
        for child in (node.left_child(), node.right_child()):
            if child is None:
                slots.append(f"{indent} {config.missing_marker}")
            else:
                slots.append((child, level + 1))

        stack.append("]")
        stack.append(slots[1])
        stack.append(",\n")
        stack.append(slots[0])

    return "".join(parts)


def render_compact(tree: "NumericBinaryTree") -> str:
    """Render tree as a one-line constructor expression, as used by repr()."""
    if tree.is_empty():
        return "NumericBinaryTree()"

    parts: List[str] = []
    stack: list = [tree]
    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        left, right = item.left_child(), item.right_child()
        if left is None and right is None:
            parts.append(f"NumericBinaryTree({item.value()!r})")
            continue

        parts.append(f"NumericBinaryTree({item.value()!r}, ")
        stack.append(")")
        stack.append(right if right is not None else "None")
        stack.append(", ")
        stack.append(left if left is not None else "None")

    return "".join(parts)
