"""Tree datatypes: walker records, arena nodes, and the read-only tree."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from pathlib import Path, PurePath


class NodeKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class WalkEntry:
    """One record emitted by a directory walker.

    Only ``path`` and ``is_dir`` are required; the rest decorate rendered rows.
    """

    path: PurePath
    is_dir: bool
    is_symlink: bool = False
    link_target: str | None = None
    unreadable: bool = False


@dataclass(frozen=True)
class Node:
    """One arena slot. ``parent`` is a back-reference, not ownership."""

    id: int
    name: str
    kind: NodeKind
    parent: int | None
    children: tuple[int, ...]
    depth: int
    path: PurePath
    link_target: str | None = None
    unreadable: bool = False

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY


class TreeModel:
    """Immutable directory hierarchy stored as an arena of ``Node`` values.

    Node ids are arena indexes; the root is always id ``0``. Fold flags are not
    stored here, see ``itree.navigation.FoldState``.
    """

    root_id = 0

    def __init__(self, root_path: Path, nodes: tuple[Node, ...]) -> None:
        self.root_path = root_path
        self.nodes = nodes
        self._ids_by_path = {node.path: node.id for node in nodes}
        self._last_child = {
            node.id: node.children[-1] for node in nodes if node.children
        }
        self.directory_count = sum(1 for node in nodes[1:] if node.is_dir)
        self.file_count = len(nodes) - 1 - self.directory_count

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    @property
    def root(self) -> Node:
        return self.nodes[self.root_id]

    def node(self, node_id: int) -> Node:
        return self.nodes[node_id]

    def children(self, node_id: int) -> tuple[int, ...]:
        return self.nodes[node_id].children

    def parent(self, node_id: int) -> int | None:
        return self.nodes[node_id].parent

    def is_last_child(self, node_id: int) -> bool:
        """Return whether ``node_id`` is its parent's final child (root counts as last)."""
        parent = self.nodes[node_id].parent
        if parent is None:
            return True
        return self._last_child.get(parent) == node_id

    def ancestors(self, node_id: int) -> list[int]:
        """Return ancestor ids, nearest first, ending with the root."""
        out: list[int] = []
        parent = self.nodes[node_id].parent
        while parent is not None:
            out.append(parent)
            parent = self.nodes[parent].parent
        return out

    def find(self, relative_path: PurePath | str) -> int | None:
        """Return the id for a root-relative path, or ``None`` when absent."""
        return self._ids_by_path.get(PurePath(relative_path))

    def summary(self) -> str:
        dirs = self.directory_count
        files = self.file_count
        dir_noun = "directory" if dirs == 1 else "directories"
        file_noun = "file" if files == 1 else "files"
        return f"{dirs} {dir_noun}, {files} {file_noun}"


__all__ = ["NodeKind", "WalkEntry", "Node", "TreeModel"]
