"""Collapsed-directory bookkeeping keyed by stable node id."""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import NotFoldable
from ..tree_model import TreeModel


class FoldState:
    """Set of collapsed directory ids. Absence means expanded.

    Only directory ids other than the root are ever stored.
    """

    def __init__(self, tree: TreeModel, collapsed: Iterable[int] = ()) -> None:
        self.tree = tree
        self._collapsed: set[int] = set()
        for node_id in collapsed:
            self.collapse(node_id)

    @classmethod
    def initial(cls, tree: TreeModel, fold_depth: int | None = None) -> FoldState:
        """Collapse every directory at ``depth >= fold_depth``; ``None`` expands all."""
        if fold_depth is None:
            return cls(tree)
        return cls(
            tree,
            (
                node.id
                for node in tree
                if node.is_dir and node.depth > 0 and node.depth >= fold_depth
            ),
        )

    @property
    def collapsed(self) -> frozenset[int]:
        return frozenset(self._collapsed)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._collapsed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FoldState):
            return NotImplemented
        return self.tree is other.tree and self._collapsed == other._collapsed

    def __repr__(self) -> str:
        return f"FoldState(collapsed={sorted(self._collapsed)!r})"

    def _check_foldable(self, node_id: int) -> None:
        if node_id == self.tree.root_id:
            raise NotFoldable(node_id, "the root is never collapsed")
        if not self.tree.node(node_id).is_dir:
            raise NotFoldable(node_id)

    def is_collapsed(self, node_id: int) -> bool:
        return node_id in self._collapsed

    def collapse(self, node_id: int) -> None:
        self._check_foldable(node_id)
        self._collapsed.add(node_id)

    def expand(self, node_id: int) -> None:
        self._check_foldable(node_id)
        self._collapsed.discard(node_id)

    def toggle(self, node_id: int) -> bool:
        """Flip ``node_id`` and return whether it is now collapsed."""
        self._check_foldable(node_id)
        if node_id in self._collapsed:
            self._collapsed.remove(node_id)
            return False
        self._collapsed.add(node_id)
        return True

    def expand_all_ancestors(self, node_id: int) -> None:
        """Make ``node_id`` reachable by expanding every ancestor."""
        for ancestor in self.tree.ancestors(node_id):
            self._collapsed.discard(ancestor)


__all__ = ["FoldState"]
