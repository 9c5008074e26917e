"""Configuration system for nbtreelib.

This module defines the knobs callers can turn: which traversal order to
use, how trees are rendered as text, and where and how trees are persisted.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Union


DEFAULT_LOCATION = "nbt.ser"
FORMAT_VERSION = 1


class TraversalOrder(Enum):
    """Depth-first visitation orders supported by the tree engine."""
    PREORDER = "pre"      # Node, then left, then right
    INORDER = "in"        # Left, then node, then right
    POSTORDER = "post"    # Left, then right, then node

    @classmethod
    def parse(cls, order: Union["TraversalOrder", str]) -> "TraversalOrder":
        """Accept an enum member, its value, or a common alias.

        Raises:
            ValueError: If the name is not recognized
        """
        if isinstance(order, cls):
            return order

        aliases = {
            'pre': cls.PREORDER,
            'preorder': cls.PREORDER,
            'dfs_pre': cls.PREORDER,
            'in': cls.INORDER,
            'inorder': cls.INORDER,
            'symmetric': cls.INORDER,
            'post': cls.POSTORDER,
            'postorder': cls.POSTORDER,
            'dfs_post': cls.POSTORDER,
        }
        key = str(order).lower().replace('-', '')
        if key not in aliases:
            raise ValueError(
                f"Unknown traversal order: {order}. "
                f"Choose from: {', '.join(aliases.keys())}"
            )
        return aliases[key]


@dataclass
class RenderConfig:
    """Layout of the multi-line text rendering."""

    indent_width: int = 2        # Spaces per level of depth
    empty_marker: str = "X_"     # Rendering of a whole empty tree
    missing_marker: str = "_"    # Rendering of an absent child slot

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the config is usable."""
        errors = []
        if self.indent_width < 0:
            errors.append(f"indent_width must be >= 0, got {self.indent_width}")
        if not self.empty_marker:
            errors.append("empty_marker must be a non-empty string")
        if not self.missing_marker:
            errors.append("missing_marker must be a non-empty string")
        return errors


@dataclass
class PersistenceConfig:
    """Where trees are saved by default and how saves are checked."""

    default_location: str = DEFAULT_LOCATION
    verify_on_save: bool = True   # Read back and compare after every write

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the config is usable."""
        errors = []
        if not self.default_location:
            errors.append("default_location must be a non-empty location")
        return errors

    def resolve(self, location=None):
        """Return ``location`` or the configured default when it is None."""
        if location is None:
            return self.default_location
        return location


DEFAULT_RENDER_CONFIG = RenderConfig()
DEFAULT_PERSISTENCE_CONFIG = PersistenceConfig()
