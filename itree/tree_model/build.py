"""Tree construction from ordered walker records."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path, PurePath

from ..errors import MalformedWalkOrder, PathEscapesRoot
from .types import Node, NodeKind, TreeModel, WalkEntry

logger = logging.getLogger(__name__)


def child_sort_key(
    name: str,
    is_dir: bool,
    *,
    dirs_first: bool = True,
    case_sensitive: bool = False,
) -> tuple[int, str] | tuple[int, str, str]:
    """Display-order key for siblings.

    Case-insensitive ordering breaks ties on the raw name so the order stays
    deterministic for names differing only in case.
    """
    group = 0 if (is_dir or not dirs_first) else 1
    if case_sensitive:
        return (group, name)
    return (group, name.casefold(), name)


def root_display_name(root: PurePath) -> str:
    text = str(root)
    if len(text) > 1:
        text = text.rstrip("/")
    return text or "."


def _lexical_parts(path: PurePath, absolute: bool) -> tuple[str, ...]:
    raw = os.fspath(path)
    normalized = os.path.abspath(raw) if absolute else os.path.normpath(raw)
    parts = PurePath(normalized).parts
    if parts == (".",):
        return ()
    return parts


def relative_parts(root: PurePath, path: PurePath) -> tuple[str, ...]:
    """Return ``path`` relative to ``root`` as name parts, lexically.

    An empty tuple means ``path`` is the root itself. Raises
    ``PathEscapesRoot`` for anything outside the root.
    """
    absolute = PurePath(root).is_absolute() or PurePath(path).is_absolute()
    root_parts = _lexical_parts(PurePath(root), absolute)
    entry_parts = _lexical_parts(PurePath(path), absolute)
    if entry_parts[: len(root_parts)] != root_parts:
        raise PathEscapesRoot(path, root)
    rel = entry_parts[len(root_parts):]
    if rel and rel[0] == os.pardir:
        raise PathEscapesRoot(path, root)
    return rel


def build_tree(
    root: Path | str,
    entries: Iterable[WalkEntry],
    *,
    dirs_first: bool = True,
    case_sensitive: bool = False,
) -> TreeModel:
    """Build a ``TreeModel`` from walker records delivered parents-first.

    Entries may be absolute or relative in the same way ``root`` is; an entry
    naming the root itself is folded into the root node. Raises
    ``MalformedWalkOrder`` when a parent is missing, is not a directory, or a
    path repeats, and ``PathEscapesRoot`` for paths outside ``root``.
    """
    root_path = Path(root)
    names: list[str] = [root_display_name(root_path)]
    kinds: list[NodeKind] = [NodeKind.DIRECTORY]
    parents: list[int | None] = [None]
    depths: list[int] = [0]
    paths: list[PurePath] = [PurePath(".")]
    link_targets: list[str | None] = [None]
    unreadable: list[bool] = [False]
    children: list[list[int]] = [[]]
    ids_by_parts: dict[tuple[str, ...], int] = {(): 0}

    for entry in entries:
        parts = relative_parts(root_path, entry.path)
        if not parts:
            unreadable[0] = unreadable[0] or entry.unreadable
            continue
        if parts in ids_by_parts:
            raise MalformedWalkOrder(entry.path, "duplicate entry")
        parent_id = ids_by_parts.get(parts[:-1])
        if parent_id is None:
            raise MalformedWalkOrder(entry.path)
        if kinds[parent_id] is not NodeKind.DIRECTORY:
            raise MalformedWalkOrder(entry.path, "parent is not a directory")

        if entry.is_dir:
            kind = NodeKind.DIRECTORY
        elif entry.is_symlink:
            kind = NodeKind.SYMLINK
        else:
            kind = NodeKind.FILE

        node_id = len(names)
        names.append(parts[-1])
        kinds.append(kind)
        parents.append(parent_id)
        depths.append(depths[parent_id] + 1)
        paths.append(PurePath(*parts))
        link_targets.append(entry.link_target)
        unreadable.append(entry.unreadable)
        children.append([])
        children[parent_id].append(node_id)
        ids_by_parts[parts] = node_id

    for child_ids in children:
        child_ids.sort(
            key=lambda cid: child_sort_key(
                names[cid],
                kinds[cid] is NodeKind.DIRECTORY,
                dirs_first=dirs_first,
                case_sensitive=case_sensitive,
            )
        )

    nodes = tuple(
        Node(
            id=node_id,
            name=names[node_id],
            kind=kinds[node_id],
            parent=parents[node_id],
            children=tuple(children[node_id]),
            depth=depths[node_id],
            path=paths[node_id],
            link_target=link_targets[node_id],
            unreadable=unreadable[node_id],
        )
        for node_id in range(len(names))
    )
    tree = TreeModel(root_path, nodes)
    logger.debug("built tree for %s: %s", root_path, tree.summary())
    return tree


__all__ = ["build_tree", "child_sort_key", "relative_parts", "root_display_name"]
