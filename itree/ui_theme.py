"""UI theme definitions and selection helpers.

Themes are ANSI palettes keyed by the renderer's ``LineStyle`` names. Named
colors for ``--fg-color`` / ``--bg-color`` come from ``pygments.console``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from pygments.console import codes as console_codes
from pygments.console import dark_colors, light_colors


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    guide: str
    directory: str
    file: str
    symlink: str
    fold_mark: str
    note: str
    cursor: str
    status: str

    def code_for(self, style_name: str) -> str:
        """Return the escape sequence for a ``LineStyle`` value."""
        return getattr(self, style_name, "")


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    guide="\033[2;38;5;250m",
    directory="\033[1;34m",
    file="\033[38;5;252m",
    symlink="\033[38;5;44m",
    fold_mark="\033[1;38;5;214m",
    note="\033[2;38;5;250m",
    cursor="\033[7m",
    status="\033[7m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    guide="\033[2;38;5;31m",
    directory="\033[1;38;5;45m",
    file="\033[38;5;252m",
    symlink="\033[38;5;117m",
    fold_mark="\033[1;38;5;215m",
    note="\033[2;38;5;110m",
    cursor="\033[7m",
    status="\033[7m",
)

# Reverse video is kept without color so the cursor stays visible.
PLAIN_THEME = UITheme(
    name="plain",
    reset="\033[0m",
    guide="",
    directory="",
    file="",
    symlink="",
    fold_mark="",
    note="",
    cursor="\033[7m",
    status="\033[7m",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


# Pygments calls SGR 37 "gray" and SGR 97 "white"; users say "white" and
# "brightwhite" for those.
_CONSOLE_COLORS: dict[str, str] = {
    **{("white" if name == "gray" else name): name for name in dark_colors},
    **{("brightwhite" if name == "white" else name): name for name in light_colors},
}


def available_color_names() -> tuple[str, ...]:
    """Return color names accepted by ``--fg-color`` / ``--bg-color``."""
    return tuple(_CONSOLE_COLORS)


def normalize_color_name(name: str) -> str | None:
    """Map user color text onto one of ``available_color_names()``.

    ``light*`` spellings are accepted as aliases of ``bright*``, and
    ``gray``/``grey`` as aliases of ``white``.
    """
    candidate = str(name).strip().lower().replace("-", "").replace("_", "")
    if candidate.startswith("light"):
        candidate = "bright" + candidate[len("light"):]
    if candidate in ("gray", "grey"):
        candidate = "white"
    if candidate in _CONSOLE_COLORS:
        return candidate
    return None


def _console_color(name: str) -> str:
    normalized = normalize_color_name(name)
    if normalized is None:
        raise ValueError(f"unknown color: {name!r}")
    return _CONSOLE_COLORS[normalized]


def foreground_code(name: str) -> str:
    return console_codes[_console_color(name)]


def background_code(name: str) -> str:
    """Return the background SGR sequence for a color name."""
    console_name = _console_color(name)
    if console_name in dark_colors:
        return f"\033[{40 + dark_colors.index(console_name)}m"
    return f"\033[{100 + light_colors.index(console_name)}m"


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if not candidate:
        return DEFAULT_THEME.name
    if candidate == PLAIN_THEME.name:
        return DEFAULT_THEME.name
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(
    name: str | None,
    *,
    no_color: bool = False,
    fg_color: str | None = None,
    bg_color: str | None = None,
) -> UITheme:
    """Return concrete theme for requested name, color mode, and overrides.

    ``fg_color`` recolors guides and file names; ``bg_color`` replaces the
    cursor's reverse video with a background color.
    """
    if no_color:
        return PLAIN_THEME
    theme = _THEMES.get(normalize_theme_name(name), DEFAULT_THEME)
    if fg_color:
        fg = foreground_code(fg_color)
        theme = replace(theme, guide=fg, file=fg)
    if bg_color:
        theme = replace(theme, cursor=background_code(bg_color))
    return theme


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "available_color_names",
    "normalize_color_name",
    "foreground_code",
    "background_code",
    "normalize_theme_name",
    "resolve_theme",
]
