"""Git-backed ignore matching for the directory walker.

Asks git which untracked paths under the browsed root are ignored, using
whichever ignore sources are enabled (``.gitignore`` files with global
excludes, ``.git/info/exclude``, or both). Results are cached briefly per
root and source combination.
"""

from __future__ import annotations

from collections import OrderedDict
import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GITIGNORE_MATCHER_CACHE_MAX = 64
GITIGNORE_MATCHER_CACHE_TTL_SECONDS = 2.0


def _is_within(path: Path, root: Path) -> bool:
    return path == root or root in path.parents


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Snapshot of ignored paths under ``root``.

    Paths are stored resolved. An ignored directory hides everything below it,
    so lookups walk up from the queried path until they reach ``root``.
    """

    root: Path
    ignored_files: frozenset[Path]
    ignored_dirs: frozenset[Path]

    def is_ignored(self, path: Path) -> bool:
        resolved = path.resolve()
        if not _is_within(resolved, self.root):
            return False
        if resolved in self.ignored_files or resolved in self.ignored_dirs:
            return True
        for parent in resolved.parents:
            if parent in self.ignored_dirs:
                return True
            if parent == self.root:
                break
        return False


def _git_output(args: list[str]) -> str | None:
    """Run ``git`` with ``args``; stripped stdout, or ``None`` on any failure."""
    try:
        proc = subprocess.run(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return proc.stdout.strip()


def _global_excludes_file(repo_root: Path) -> Path | None:
    """Return git's global excludes file (``core.excludesFile`` or XDG default)."""
    configured = _git_output(["-C", str(repo_root), "config", "--path", "--get", "core.excludesFile"])
    if configured:
        candidate = Path(configured).expanduser()
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        candidate = Path(xdg) / "git" / "ignore"
    return candidate if candidate.is_file() else None


def _exclude_args(repo_root: Path, per_directory: bool, info_exclude: bool) -> list[str] | None:
    """Translate enabled ignore sources into ``git ls-files`` options."""
    if per_directory and info_exclude:
        return ["--exclude-standard"]
    if per_directory:
        args = ["--exclude-per-directory=.gitignore"]
        global_file = _global_excludes_file(repo_root)
        if global_file is not None:
            args.append(f"--exclude-from={global_file}")
        return args
    if info_exclude:
        git_path = _git_output(["-C", str(repo_root), "rev-parse", "--git-path", "info/exclude"])
        if not git_path:
            return None
        exclude_file = Path(git_path)
        if not exclude_file.is_absolute():
            exclude_file = repo_root / exclude_file
        if not exclude_file.is_file():
            return None
        return [f"--exclude-from={exclude_file}"]
    return None


def _split_ignored(output: bytes, repo_root: Path, root: Path) -> tuple[set[Path], set[Path]]:
    """Split NUL-separated ``ls-files`` output into ignored files and directories.

    Entries outside ``root`` are dropped. git marks collapsed directories with a
    trailing slash; anything else that is a directory on disk counts as one too.
    """
    files: set[Path] = set()
    dirs: set[Path] = set()
    for raw in output.split(b"\x00"):
        rel = raw.decode("utf-8", errors="replace")
        if not rel.rstrip("/"):
            continue
        path = (repo_root / rel.rstrip("/")).resolve()
        if not _is_within(path, root):
            continue
        if rel.endswith("/") or path.is_dir():
            dirs.add(path)
        else:
            files.add(path)
    return files, dirs


def _load_matcher(root: Path, per_directory: bool = True, info_exclude: bool = True) -> GitIgnoreMatcher | None:
    """Query git for ignored paths under ``root``.

    Returns ``None`` when git is missing, ``root`` is outside any repository,
    no ignore source is enabled, or git fails.
    """
    if shutil.which("git") is None:
        return None

    root = root.resolve()
    top_level = _git_output(["-C", str(root), "rev-parse", "--show-toplevel"])
    if not top_level:
        return None
    repo_root = Path(top_level).resolve()
    if not _is_within(root, repo_root):
        return None

    exclude_args = _exclude_args(repo_root, per_directory, info_exclude)
    if exclude_args is None:
        return None

    command = ["git", "-C", str(repo_root), "ls-files", "-z", "--others", "-i", *exclude_args, "--directory"]
    try:
        proc = subprocess.run(command, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL, check=True)
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.warning("git ls-files failed under %s: %s", repo_root, exc)
        return None

    files, dirs = _split_ignored(proc.stdout, repo_root, root)
    logger.debug("gitignore matcher for %s: %d files, %d dirs", root, len(files), len(dirs))
    return GitIgnoreMatcher(root=root, ignored_files=frozenset(files), ignored_dirs=frozenset(dirs))


@dataclass(frozen=True)
class _MatcherCacheEntry:
    matcher: GitIgnoreMatcher | None
    root_mtime_ns: int | None
    loaded_at: float

    def is_fresh(self, root_mtime_ns: int | None, now: float) -> bool:
        return (
            self.root_mtime_ns == root_mtime_ns
            and now - self.loaded_at <= GITIGNORE_MATCHER_CACHE_TTL_SECONDS
        )


_GITIGNORE_MATCHER_CACHE: OrderedDict[str, _MatcherCacheEntry] = OrderedDict()


def clear_gitignore_cache() -> None:
    _GITIGNORE_MATCHER_CACHE.clear()


def get_gitignore_matcher(
    root: Path,
    *,
    per_directory: bool = True,
    info_exclude: bool = True,
) -> GitIgnoreMatcher | None:
    """Return a matcher for ``root``, reusing a cached one while it is fresh.

    A cached matcher goes stale when the root directory's mtime changes or
    after ``GITIGNORE_MATCHER_CACHE_TTL_SECONDS``.
    """
    resolved_root = root.resolve()
    key = f"{resolved_root}|{int(per_directory)}{int(info_exclude)}"
    try:
        root_mtime_ns: int | None = resolved_root.stat().st_mtime_ns
    except OSError:
        root_mtime_ns = None
    now = time.monotonic()

    cached = _GITIGNORE_MATCHER_CACHE.get(key)
    if cached is not None and cached.is_fresh(root_mtime_ns, now):
        _GITIGNORE_MATCHER_CACHE.move_to_end(key)
        return cached.matcher

    matcher = _load_matcher(resolved_root, per_directory, info_exclude)
    _GITIGNORE_MATCHER_CACHE[key] = _MatcherCacheEntry(matcher, root_mtime_ns, now)
    _GITIGNORE_MATCHER_CACHE.move_to_end(key)
    while len(_GITIGNORE_MATCHER_CACHE) > GITIGNORE_MATCHER_CACHE_MAX:
        _GITIGNORE_MATCHER_CACHE.popitem(last=False)
    return matcher


__all__ = [
    "GitIgnoreMatcher",
    "clear_gitignore_cache",
    "get_gitignore_matcher",
]
