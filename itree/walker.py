"""Filesystem walker producing parent-first ``WalkEntry`` records.

Applies hidden-file, gitignore, and custom-pattern filtering while scanning,
so the tree builder only ever sees entries that should be displayed.
"""

from __future__ import annotations

import fnmatch
import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from .gitignore import GitIgnoreMatcher, get_gitignore_matcher
from .tree_model import WalkEntry

logger = logging.getLogger(__name__)

LINK_ERROR_TARGET = "<error reading dest>"


@dataclass(frozen=True)
class WalkOptions:
    """Filtering and traversal switches for ``walk``."""

    show_hidden: bool = False
    respect_ignore: bool = True
    respect_git_exclude: bool = True
    ignore_patterns: tuple[str, ...] = ()
    ignore_case: bool = False
    max_depth: int | None = None
    follow_links: bool = False
    max_filesize: int | None = None
    only_dirs: bool = False


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory child plus the metadata the walker needs."""

    name: str
    path: Path
    is_dir: bool
    is_symlink: bool
    link_target: str | None


def matches_ignore_pattern(
    name: str,
    relative_path: str,
    patterns: tuple[str, ...],
    ignore_case: bool = False,
) -> bool:
    """Return whether a custom glob matches the entry name or its relative path."""
    if not patterns:
        return False
    if ignore_case:
        name = name.casefold()
        relative_path = relative_path.casefold()
    for pattern in patterns:
        candidate = pattern.casefold() if ignore_case else pattern
        candidate = candidate.rstrip("/")
        if fnmatch.fnmatchcase(name, candidate) or fnmatch.fnmatchcase(relative_path, candidate):
            return True
    return False


def _link_target_name(path: Path) -> str:
    try:
        target = os.readlink(path)
    except OSError:
        return LINK_ERROR_TARGET
    return Path(target).name or target


def _directory_key(path: Path) -> tuple[int, int] | None:
    try:
        stat = os.stat(path)
    except OSError:
        return None
    return (stat.st_dev, stat.st_ino)


def list_directory_children(
    directory: Path,
    root: Path,
    options: WalkOptions,
    ignore_matcher: GitIgnoreMatcher | None = None,
) -> tuple[list[DirectoryChild], OSError | None]:
    """List filtered children of ``directory`` in name order.

    Returns ``(children, scan_error)``; ``scan_error`` is set when the
    directory cannot be opened.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for child in entries:
                name = child.name
                if not options.show_hidden and name.startswith("."):
                    continue
                child_path = Path(child.path)
                if ignore_matcher is not None and ignore_matcher.is_ignored(child_path):
                    continue
                if options.ignore_patterns:
                    relative = child_path.relative_to(root).as_posix()
                    if matches_ignore_pattern(name, relative, options.ignore_patterns, options.ignore_case):
                        continue

                try:
                    is_symlink = child.is_symlink()
                except OSError:
                    is_symlink = False
                try:
                    is_dir = child.is_dir(follow_symlinks=options.follow_links)
                except OSError:
                    is_dir = False

                if options.only_dirs and not is_dir:
                    continue
                if not is_dir and options.max_filesize is not None:
                    try:
                        size = child.stat(follow_symlinks=options.follow_links).st_size
                    except OSError:
                        size = None
                    if size is not None and size > options.max_filesize:
                        continue

                children.append(
                    DirectoryChild(
                        name=name,
                        path=child_path,
                        is_dir=is_dir,
                        is_symlink=is_symlink,
                        link_target=_link_target_name(child_path) if is_symlink else None,
                    )
                )
    except OSError as exc:
        return [], exc

    children.sort(key=lambda item: item.name)
    return children, None


def walk(root: Path | str, options: WalkOptions | None = None) -> Iterator[WalkEntry]:
    """Yield the root and then every visible descendant, parents first.

    Directories that cannot be opened are yielded with ``unreadable=True`` and
    no children. A directory already visited (reached again through a followed
    link) is yielded but not descended into again.
    """
    options = options or WalkOptions()
    root_path = Path(root)
    ignore_matcher = None
    if options.respect_ignore or options.respect_git_exclude:
        ignore_matcher = get_gitignore_matcher(
            root_path,
            per_directory=options.respect_ignore,
            info_exclude=options.respect_git_exclude,
        )

    children, scan_error = list_directory_children(root_path, root_path, options, ignore_matcher)
    if scan_error is not None:
        logger.warning("cannot open %s: %s", root_path, scan_error)
    yield WalkEntry(root_path, True, unreadable=scan_error is not None)

    root_key = _directory_key(root_path)
    visited: set[tuple[int, int]] = {root_key} if root_key is not None else set()
    stack: list[tuple[Iterator[DirectoryChild], int]] = [(iter(children), 1)]
    while stack:
        pending, depth = stack[-1]
        child = next(pending, None)
        if child is None:
            stack.pop()
            continue
        if not child.is_dir:
            yield WalkEntry(child.path, False, child.is_symlink, child.link_target)
            continue

        grandchildren: list[DirectoryChild] = []
        scan_error = None
        if options.max_depth is None or depth < options.max_depth:
            key = _directory_key(child.path)
            if key is not None and key in visited:
                logger.debug("not following link loop at %s", child.path)
            else:
                if key is not None:
                    visited.add(key)
                grandchildren, scan_error = list_directory_children(
                    child.path,
                    root_path,
                    options,
                    ignore_matcher,
                )
                if scan_error is not None:
                    logger.warning("cannot open %s: %s", child.path, scan_error)

        yield WalkEntry(
            child.path,
            True,
            child.is_symlink,
            child.link_target,
            unreadable=scan_error is not None,
        )
        if grandchildren:
            stack.append((iter(grandchildren), depth + 1))


__all__ = [
    "WalkOptions",
    "DirectoryChild",
    "list_directory_children",
    "matches_ignore_pattern",
    "walk",
]
