"""Read-only JSON config defaults.

Values in the file seed the command-line defaults; flags always win. All
access is defensive: a missing or malformed file behaves like an empty one.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..ui_theme import normalize_color_name

logger = logging.getLogger(__name__)

APP_NAME = "itree"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.debug("ignoring config %s: %s", CONFIG_PATH, exc)
        return {}
    if not isinstance(data, dict):
        logger.debug("ignoring config %s: top level is not an object", CONFIG_PATH)
        return {}
    return data


def _load_bool(data: dict[str, object], key: str) -> bool | None:
    value = data.get(key)
    return value if isinstance(value, bool) else None


def _load_fold_depth(data: dict[str, object]) -> int | None:
    value = data.get("fold_depth")
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


def _load_theme(data: dict[str, object]) -> str | None:
    value = data.get("theme")
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def _load_color(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    return normalize_color_name(value)


def load_defaults() -> dict[str, object]:
    """Return validated config values keyed by their CLI destination names.

    Only keys holding a usable value are present.
    """
    data = load_config()
    values: dict[str, object | None] = {
        "theme": _load_theme(data),
        "fold_depth": _load_fold_depth(data),
        "dirs_first": _load_bool(data, "dirs_first"),
        "case_sensitive": _load_bool(data, "case_sensitive"),
        "show_hidden": _load_bool(data, "show_hidden"),
        "fg_color": _load_color(data, "fg_color"),
        "bg_color": _load_color(data, "bg_color"),
    }
    return {key: value for key, value in values.items() if value is not None}


__all__ = ["APP_NAME", "CONFIG_FILENAME", "CONFIG_PATH", "load_config", "load_defaults"]
