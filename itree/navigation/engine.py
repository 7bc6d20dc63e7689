"""Cursor and folding state machine.

Each ``NavEvent`` maps synchronously to a new (fold state, cursor) pair or to
termination. Boundary conditions are no-ops, never errors.
"""

from __future__ import annotations

import logging

from ..errors import NotFoldable
from ..tree_model import TreeModel
from .events import NavEvent
from .fold_state import FoldState
from .visible import VisibleSequence

logger = logging.getLogger(__name__)


class Navigator:
    """Owns the fold state and cursor for one browsing session.

    ``left_collapses`` couples move-left with folding: leaving a directory
    collapses it again (the root excepted).
    """

    def __init__(
        self,
        tree: TreeModel,
        fold_state: FoldState | None = None,
        *,
        fold_depth: int | None = None,
        cursor: int | None = None,
        left_collapses: bool = True,
    ) -> None:
        self.tree = tree
        self.fold_state = fold_state if fold_state is not None else FoldState.initial(tree, fold_depth)
        self.left_collapses = left_collapses
        self.finished = False
        self._visible = VisibleSequence(tree, self.fold_state)
        root_children = tree.children(tree.root_id)
        self._cursor = root_children[0] if root_children else tree.root_id
        if cursor is not None:
            self.reveal(cursor)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def cursor_index(self) -> int:
        return self._visible.index(self._cursor)

    @property
    def visible(self) -> VisibleSequence:
        return self._visible

    def _refresh_visible(self) -> None:
        self._visible = VisibleSequence(self.tree, self.fold_state)
        if self._cursor not in self._visible:
            # Nearest visible ancestor keeps the cursor on screen.
            for ancestor in self.tree.ancestors(self._cursor):
                if ancestor in self._visible:
                    self._cursor = ancestor
                    break

    def handle(self, event: NavEvent) -> bool:
        """Apply ``event`` and return ``False`` once the session should end."""
        if self.finished:
            return False
        if event is NavEvent.QUIT:
            self.finished = True
            return False
        handler = {
            NavEvent.CURSOR_UP: self.move_up,
            NavEvent.CURSOR_DOWN: self.move_down,
            NavEvent.MOVE_LEFT: self.move_left,
            NavEvent.MOVE_RIGHT: self.move_right,
            NavEvent.TOGGLE_FOLD: self.toggle_fold,
        }.get(event)
        if handler is None:
            logger.debug("ignoring unknown event %r", event)
            return True
        try:
            handler()
        except NotFoldable as exc:
            logger.debug("fold request ignored: %s", exc)
        return True

    def move_up(self) -> bool:
        idx = self.cursor_index
        if idx == 0:
            return False
        self._cursor = self._visible[idx - 1]
        return True

    def move_down(self) -> bool:
        idx = self.cursor_index
        if idx >= len(self._visible) - 1:
            return False
        self._cursor = self._visible[idx + 1]
        return True

    def move_right(self) -> bool:
        """Expand a collapsed directory, otherwise step into its first child."""
        node = self.tree.node(self._cursor)
        if not node.is_dir:
            return False
        if self.fold_state.is_collapsed(node.id):
            self.fold_state.expand(node.id)
            self._refresh_visible()
            return True
        if not node.children:
            return False
        self._cursor = node.children[0]
        return True

    def move_left(self) -> bool:
        """Go to the parent, collapsing it behind us unless it is the root."""
        parent = self.tree.parent(self._cursor)
        if parent is None:
            return False
        self._cursor = parent
        if self.left_collapses and parent != self.tree.root_id:
            self.fold_state.collapse(parent)
            self._refresh_visible()
        return True

    def toggle_fold(self) -> bool:
        """Toggle the cursor's directory. Raises ``NotFoldable`` for files and the root."""
        collapsed = self.fold_state.toggle(self._cursor)
        self._refresh_visible()
        return collapsed

    def reveal(self, node_id: int) -> None:
        """Place the cursor on ``node_id``, expanding collapsed ancestors first."""
        self.fold_state.expand_all_ancestors(node_id)
        self._cursor = node_id
        self._refresh_visible()


__all__ = ["Navigator"]
