"""Tree-model creation and read-only node access.

Defines the node arena built once from walker output. Fold flags live in
``itree.navigation`` so the tree itself never changes after construction.
"""

from __future__ import annotations

from .build import build_tree, child_sort_key, relative_parts, root_display_name
from .types import Node, NodeKind, TreeModel, WalkEntry

__all__ = [
    "Node",
    "NodeKind",
    "TreeModel",
    "WalkEntry",
    "build_tree",
    "child_sort_key",
    "relative_parts",
    "root_display_name",
]
