"""Key-token dispatch and the default tree browser key map."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

from ..navigation import NavEvent


@dataclass(frozen=True)
class KeyComboBinding:
    """Key tokens that all trigger the same handler."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Exact-match table from key tokens to handlers.

    Later bindings win when they share a token with an earlier one.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def dispatch(self, key: str) -> bool | None:
        """Run the handler bound to ``key``; ``None`` when nothing is bound."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


DEFAULT_EVENT_KEYS: dict[NavEvent, tuple[str, ...]] = {
    NavEvent.CURSOR_UP: ("UP", "k"),
    NavEvent.CURSOR_DOWN: ("DOWN", "j"),
    NavEvent.MOVE_LEFT: ("LEFT", "h", "BACKSPACE"),
    NavEvent.MOVE_RIGHT: ("RIGHT", "l", "ENTER"),
    NavEvent.TOGGLE_FOLD: (" ", "TAB", "z"),
    NavEvent.QUIT: ("q", "CTRL_C", "ESC"),
}


def default_key_bindings(
    handle_event: Callable[[NavEvent], bool | None],
    event_keys: dict[NavEvent, Iterable[str]] | None = None,
) -> KeyComboRegistry:
    """Build a registry that routes the default key map into ``handle_event``.

    ``handle_event`` is usually ``Navigator.handle``; its return value becomes
    the dispatch result so a ``False`` from ``QUIT`` reaches the main loop.
    """
    registry = KeyComboRegistry()
    for event, keys in (event_keys or DEFAULT_EVENT_KEYS).items():
        registry.register_binding(
            KeyComboBinding(tuple(keys), lambda event=event: handle_event(event))
        )
    return registry


__all__ = [
    "DEFAULT_EVENT_KEYS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "default_key_bindings",
]
