"""Keyboard input decoding and key-to-event dispatch."""

from .keys import (
    DEFAULT_EVENT_KEYS,
    KeyComboBinding,
    KeyComboRegistry,
    default_key_bindings,
)
from .reader import read_key

__all__ = [
    "DEFAULT_EVENT_KEYS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "default_key_bindings",
    "read_key",
]
