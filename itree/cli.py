"""Command-line front door for itree.

Parses CLI options on top of the config-file defaults, resolves the root
directory, and dispatches into the browser runtime.
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .errors import TreeBuildError
from .runtime import run_browser
from .runtime.app import MODE_INTERACTIVE, MODE_PRINT, MODE_QUIET, BrowserOptions
from .runtime.config import load_defaults
from .ui_theme import available_color_names, available_theme_names, normalize_color_name
from .walker import WalkOptions

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _non_negative_int(value: str) -> int:
    """argparse type for integer values that may be zero."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _color_name(value: str) -> str:
    normalized = normalize_color_name(value)
    if normalized is None:
        raise argparse.ArgumentTypeError(
            f"unknown color {value!r} (choose from {', '.join(available_color_names())})"
        )
    return normalized


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="itree",
        description="Browse a directory tree interactively, folding and unfolding subtrees.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Root directory. Defaults to current directory.")

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--no-interact", action="store_true", help="Print the whole tree once and exit.")
    mode.add_argument("-q", "--quiet", action="store_true", help="Print only the directory/file summary.")

    walking = parser.add_argument_group("walking")
    walking.add_argument("--only-dirs", action="store_true", help="List directories only.")
    walking.add_argument("-L", "--max-level", type=_positive_int, default=None, help="Descend at most N levels.")
    walking.add_argument("-l", "--follow-links", action="store_true", help="Follow symbolic links to directories.")
    walking.add_argument(
        "--max-filesize",
        type=_non_negative_int,
        default=None,
        metavar="BYTES",
        help="Skip files larger than BYTES.",
    )
    walking.add_argument("--hidden", dest="show_hidden", action="store_true", help="Show hidden entries.")
    walking.add_argument("--no-ignore", action="store_true", help="Do not apply .gitignore files or global excludes.")
    walking.add_argument("--no-exclude", action="store_true", help="Do not apply .git/info/exclude.")
    walking.add_argument(
        "-I",
        "--ignore",
        action="append",
        default=[],
        metavar="PATTERN",
        help="Skip entries matching the glob PATTERN (repeatable).",
    )
    walking.add_argument("--ignore-case", action="store_true", help="Match --ignore patterns case-insensitively.")

    display = parser.add_argument_group("display")
    display.add_argument(
        "--fold-depth",
        type=_non_negative_int,
        default=None,
        metavar="N",
        help="Start with directories at depth N and deeper collapsed.",
    )
    display.add_argument(
        "--files-first",
        dest="dirs_first",
        action="store_false",
        help="Do not list directories before files.",
    )
    display.add_argument("--case-sensitive", action="store_true", help="Sort names case-sensitively.")
    display.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    display.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    display.add_argument("-c", "--bg-color", type=_color_name, default=None, help="Cursor background color.")
    display.add_argument("-f", "--fg-color", type=_color_name, default=None, help="Tree foreground color.")
    display.add_argument("--focus", metavar="PATH", default=None, help="Start with the cursor on PATH.")

    diagnostics = parser.add_argument_group("diagnostics")
    diagnostics.add_argument("--log-file", type=Path, default=None, help="Write log records to this file.")
    diagnostics.add_argument("-v", "--verbose", action="store_true", help="Log debug details (with --log-file).")
    return parser


def configure_logging(log_file: Path | None, verbose: bool) -> None:
    """Send log records to ``log_file``; without one the package stays silent."""
    if log_file is None:
        return
    logging.basicConfig(
        filename=str(log_file),
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
    )


def options_from_args(args: argparse.Namespace) -> BrowserOptions:
    """Translate parsed arguments into ``BrowserOptions``."""
    if args.quiet:
        mode = MODE_QUIET
    elif args.no_interact:
        mode = MODE_PRINT
    else:
        mode = MODE_INTERACTIVE
    walk_options = WalkOptions(
        show_hidden=args.show_hidden,
        respect_ignore=not args.no_ignore,
        respect_git_exclude=not args.no_exclude,
        ignore_patterns=tuple(args.ignore),
        ignore_case=args.ignore_case,
        max_depth=args.max_level,
        follow_links=args.follow_links,
        max_filesize=args.max_filesize,
        only_dirs=args.only_dirs,
    )
    return BrowserOptions(
        walk=walk_options,
        fold_depth=args.fold_depth,
        dirs_first=args.dirs_first,
        case_sensitive=args.case_sensitive,
        theme=args.theme,
        no_color=args.no_color,
        fg_color=args.fg_color,
        bg_color=args.bg_color,
        mode=mode,
        focus=args.focus,
    )


def main(default_path: Path | None = None) -> None:
    """Parse CLI arguments and launch itree on a directory.

    ``default_path`` is primarily for tests; when omitted the current working
    directory is used. Values from the config file become argument defaults.
    """
    parser = build_parser()
    parser.set_defaults(**load_defaults())
    args = parser.parse_args()
    configure_logging(args.log_file, args.verbose)

    if default_path is None:
        default_path = Path(".")
    path = Path(args.path) if args.path is not None else default_path
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")
    if not path.is_dir():
        raise SystemExit(f"Not a directory: {path}")

    try:
        run_browser(path, options_from_args(args))
    except TreeBuildError as exc:
        raise SystemExit(f"Cannot build tree: {exc}") from exc
