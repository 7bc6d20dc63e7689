"""Fold state, visible-sequence projection, and the cursor state machine.

This package has no terminal or drawing concerns; it only turns abstract
``NavEvent`` values into new fold/cursor state.
"""

from __future__ import annotations

from .engine import Navigator
from .events import NavEvent
from .fold_state import FoldState
from .visible import VisibleSequence, visible_sequence

__all__ = [
    "FoldState",
    "NavEvent",
    "Navigator",
    "VisibleSequence",
    "visible_sequence",
]
