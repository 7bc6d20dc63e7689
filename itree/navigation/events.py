"""Abstract input events understood by the navigation engine."""

from __future__ import annotations

from enum import Enum


class NavEvent(Enum):
    CURSOR_UP = "cursor-up"
    CURSOR_DOWN = "cursor-down"
    MOVE_LEFT = "move-left"
    MOVE_RIGHT = "move-right"
    TOGGLE_FOLD = "toggle-fold"
    QUIT = "quit"


__all__ = ["NavEvent"]
