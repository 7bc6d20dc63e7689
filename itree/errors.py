"""Exception types raised by tree construction and fold operations.

Construction errors abort startup before any navigation begins.
``NotFoldable`` is a per-event signal the navigator swallows.
"""

from __future__ import annotations

from pathlib import PurePath


class TreeError(Exception):
    """Base class for itree core errors."""


class TreeBuildError(TreeError):
    """Walker output could not be turned into a tree."""

    def __init__(self, path: PurePath | str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class MalformedWalkOrder(TreeBuildError):
    """An entry arrived before its parent directory (or duplicated a path)."""

    def __init__(self, path: PurePath | str, reason: str = "parent directory not seen before entry") -> None:
        super().__init__(path, reason)
        self.reason = reason


class PathEscapesRoot(TreeBuildError):
    """An entry path does not lie strictly under the tree root."""

    def __init__(self, path: PurePath | str, root: PurePath | str) -> None:
        super().__init__(path, f"path is outside root {root}")
        self.root = root


class NotFoldable(TreeError):
    """Fold change requested for a node that cannot be folded."""

    def __init__(self, node_id: int, reason: str = "not a directory") -> None:
        super().__init__(f"node {node_id} cannot be folded: {reason}")
        self.node_id = node_id
        self.reason = reason


__all__ = [
    "TreeError",
    "TreeBuildError",
    "MalformedWalkOrder",
    "PathEscapesRoot",
    "NotFoldable",
]
