"""Visible-sequence projection of a tree under a fold state."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from ..tree_model import TreeModel
from .fold_state import FoldState


def visible_sequence(tree: TreeModel, fold_state: FoldState) -> list[int]:
    """Return preorder node ids, root first, skipping collapsed subtrees."""
    out: list[int] = []
    stack = [tree.root_id]
    while stack:
        node_id = stack.pop()
        out.append(node_id)
        if fold_state.is_collapsed(node_id):
            continue
        stack.extend(reversed(tree.children(node_id)))
    return out


class VisibleSequence(Sequence[int]):
    """Immutable visible id list with O(1) id -> index lookup."""

    def __init__(self, tree: TreeModel, fold_state: FoldState) -> None:
        self.ids = tuple(visible_sequence(tree, fold_state))
        self._index = {node_id: idx for idx, node_id in enumerate(self.ids)}

    def __len__(self) -> int:
        return len(self.ids)

    def __getitem__(self, idx):
        return self.ids[idx]

    def __iter__(self) -> Iterator[int]:
        return iter(self.ids)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._index

    def index(self, node_id: int) -> int:
        """Position of a visible ``node_id``; ``ValueError`` if it is hidden."""
        try:
            return self._index[node_id]
        except KeyError:
            raise ValueError(f"node {node_id} is not visible") from None


__all__ = ["visible_sequence", "VisibleSequence"]
