"""Pure projection of (tree, fold state, cursor) into styled display lines.

Identical inputs always produce identical output, so the same code path serves
the interactive screen and the print-once listing.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..navigation import FoldState
from ..tree_model import Node, NodeKind, TreeModel

MID_BRANCH = "├── "
END_BRANCH = "└── "
BAR_INDENT = "│   "
BLANK_INDENT = "    "

DIR_MARK = "/"
FOLD_MARK = "*"
LINK_MARK = " -> "
RESTRICTED_MARK = " [error opening dir]"


class LineStyle(Enum):
    GUIDE = "guide"
    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    FOLD_MARK = "fold_mark"
    NOTE = "note"
    CURSOR = "cursor"


@dataclass(frozen=True)
class StyleSpan:
    """Half-open ``[start, end)`` character range carrying one style."""

    start: int
    end: int
    style: LineStyle


@dataclass(frozen=True)
class DisplayLine:
    """One rendered row: plain text plus style spans over it."""

    text: str
    spans: tuple[StyleSpan, ...]
    node_id: int
    is_cursor: bool = False


def name_segments(node: Node, collapsed: bool, *, is_root: bool = False) -> list[tuple[str, LineStyle]]:
    """Return decorated name pieces for ``node``."""
    if node.kind is NodeKind.DIRECTORY:
        segments = [(node.name if is_root else node.name + DIR_MARK, LineStyle.DIRECTORY)]
        if collapsed and node.children:
            segments.append((FOLD_MARK, LineStyle.FOLD_MARK))
        if node.link_target is not None:
            segments.append((LINK_MARK + node.link_target, LineStyle.SYMLINK))
        if node.unreadable:
            segments.append((RESTRICTED_MARK, LineStyle.NOTE))
        return segments
    if node.kind is NodeKind.SYMLINK:
        segments = [(node.name, LineStyle.SYMLINK)]
        if node.link_target is not None:
            segments.append((LINK_MARK + node.link_target, LineStyle.NOTE))
        return segments
    return [(node.name, LineStyle.FILE)]


def _display_line(node: Node, prefix: str, collapsed: bool, is_root: bool, is_cursor: bool) -> DisplayLine:
    spans: list[StyleSpan] = []
    parts: list[str] = []
    offset = 0
    if prefix:
        parts.append(prefix)
        spans.append(StyleSpan(0, len(prefix), LineStyle.GUIDE))
        offset = len(prefix)
    name_start = offset
    for text, style in name_segments(node, collapsed, is_root=is_root):
        parts.append(text)
        spans.append(StyleSpan(offset, offset + len(text), style))
        offset += len(text)
    if is_cursor:
        spans.append(StyleSpan(name_start, offset, LineStyle.CURSOR))
    return DisplayLine("".join(parts), tuple(spans), node.id, is_cursor)


def render_tree(tree: TreeModel, fold_state: FoldState, cursor: int | None = None) -> list[DisplayLine]:
    """Render every visible node, root first, with guide-line prefixes.

    ``cursor=None`` omits cursor highlighting (print-once mode).
    """
    root = tree.root
    lines = [_display_line(root, "", False, True, cursor == root.id)]
    # Stack items carry the indent contributed by ancestors below the root.
    stack: list[tuple[int, str]] = [(child, "") for child in reversed(root.children)]
    while stack:
        node_id, indent = stack.pop()
        node = tree.node(node_id)
        last = tree.is_last_child(node_id)
        collapsed = fold_state.is_collapsed(node_id)
        prefix = indent + (END_BRANCH if last else MID_BRANCH)
        lines.append(_display_line(node, prefix, collapsed, False, cursor == node_id))
        if collapsed or not node.children:
            continue
        child_indent = indent + (BLANK_INDENT if last else BAR_INDENT)
        stack.extend((child, child_indent) for child in reversed(node.children))
    return lines


def render_text(
    tree: TreeModel,
    fold_state: FoldState,
    cursor: int | None = None,
    *,
    summary: bool = True,
) -> str:
    """Plain-text listing, optionally followed by a blank line and the summary."""
    out = [line.text for line in render_tree(tree, fold_state, cursor)]
    if summary:
        out.append("")
        out.append(tree.summary())
    return "\n".join(out) + "\n"


__all__ = [
    "MID_BRANCH",
    "END_BRANCH",
    "BAR_INDENT",
    "BLANK_INDENT",
    "DIR_MARK",
    "FOLD_MARK",
    "LINK_MARK",
    "RESTRICTED_MARK",
    "LineStyle",
    "StyleSpan",
    "DisplayLine",
    "name_segments",
    "render_tree",
    "render_text",
]
