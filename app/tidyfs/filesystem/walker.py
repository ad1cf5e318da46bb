"""Recursive file enumeration with pattern, depth and hidden-file filters.

The walker keeps an explicit stack of pending directories instead of
recursing, so very deep trees cannot exhaust the call stack, and yields
files lazily so callers can stop early.

Depth counts directory descents from the root: files directly inside
the root are at depth 0, files in its subdirectories at depth 1, and
so on. Symbolic links to directories are never followed.
"""

import fnmatch
import logging
import os
from collections.abc import Iterator
from pathlib import Path

from tidyfs.filesystem.hidden import is_hidden
from tidyfs.filesystem.models import ErrorCallback, TraversalConfig

logger = logging.getLogger(__name__)


class RootError(Exception):
    """Raised when the traversal root itself cannot be walked."""

    def __init__(self, root: Path, reason: str) -> None:
        super().__init__(f"{reason}: {root}")
        self.root = root
        self.reason = reason


class RootNotFoundError(RootError):
    """Raised when the root does not exist or is not a directory."""


class RootAccessError(RootError):
    """Raised when the root directory cannot be listed."""


_MATCH_ALL = frozenset({"*", ".*", "*.*"})


def extension_pattern(extension: str | None) -> str:
    """Build a file name glob from an extension.

    Accepts the usual spellings: "txt", ".txt", "*txt" and "*.txt" all
    give "*.txt". None or an empty string matches every file.

    Args:
        extension: Extension to match, with or without dot and star.

    Returns:
        Glob pattern for fnmatch.
    """
    if not extension:
        return "*"
    ext = extension.strip().lstrip("*")
    if not ext or ext == ".*":
        return "*"
    if not ext.startswith("."):
        ext = "." + ext
    return f"*{ext}"


def _scan(directory: Path) -> list[os.DirEntry[str]]:
    with os.scandir(directory) as it:
        return list(it)


class TreeWalker:
    """Enumerates files under a root according to a TraversalConfig.

    Args:
        config: Traversal settings. Defaults to every non-hidden file at any depth.
        on_error: Called with the path and error for every directory or
            entry that could not be read.
    """

    def __init__(
        self,
        config: TraversalConfig | None = None,
        *,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._config = config or TraversalConfig()
        self._on_error = on_error

    @property
    def config(self) -> TraversalConfig:
        """The traversal settings in use."""
        return self._config

    def walk(self, root: str | os.PathLike[str]) -> Iterator[Path]:
        """Start a traversal of root.

        The root is validated and listed immediately; everything below it
        is visited lazily as the returned iterator is consumed.

        Args:
            root: Directory to walk.

        Returns:
            Iterator over matching file paths in directory-listing order.

        Raises:
            RootNotFoundError: If root does not exist or is not a directory.
            RootAccessError: If root cannot be listed.
        """
        root_path = Path(root)
        if not root_path.is_dir():
            raise RootNotFoundError(root_path, "Not a directory")

        try:
            entries = _scan(root_path)
        except OSError as e:
            raise RootAccessError(root_path, f"Cannot list directory ({e.strerror or e})") from e

        return self._iter_tree(root_path, entries)

    def _iter_tree(self, root: Path, root_entries: list[os.DirEntry[str]]) -> Iterator[Path]:
        """Yield files depth-first, a directory's files before its subdirectories."""
        pending: list[tuple[Path, int, list[os.DirEntry[str]] | None]] = [(root, 0, root_entries)]

        while pending:
            directory, depth, entries = pending.pop()

            if entries is None:
                try:
                    entries = _scan(directory)
                except OSError as e:
                    self._report(directory, e)
                    continue

            subdirectories: list[Path] = []
            for entry in entries:
                if not self._config.include_hidden and self._entry_is_hidden(entry):
                    continue

                try:
                    if entry.is_dir(follow_symlinks=False):
                        subdirectories.append(Path(entry.path))
                        continue
                    if not entry.is_file():
                        continue
                except OSError as e:
                    self._report(Path(entry.path), e)
                    continue

                if fnmatch.fnmatch(entry.name, self._config.pattern):
                    yield Path(entry.path)

            child_depth = depth + 1
            if subdirectories and self._config.allows_depth(child_depth):
                # Reversed so the stack pops them in listing order
                pending.extend((d, child_depth, None) for d in reversed(subdirectories))

    @staticmethod
    def _entry_is_hidden(entry: os.DirEntry[str]) -> bool:
        try:
            st = entry.stat(follow_symlinks=False) if os.name == "nt" else None
        except OSError:
            st = None
        return is_hidden(entry.path, st)

    def _report(self, path: Path, error: OSError) -> None:
        logger.warning("Skipping unreadable path %s: %s", path, error)
        if self._on_error is not None:
            self._on_error(path, error)


def normalize_pattern(pattern: str | None) -> str:
    """Turn a user-supplied filter into a file name glob.

    Real globs ("report-*.csv") pass through unchanged; anything that is
    only an extension, optionally star-prefixed, goes through
    extension_pattern(). The match-all spellings "*", ".*" and "*.*"
    select every file, not only dot-files.
    """
    if pattern and pattern.strip() in _MATCH_ALL:
        return "*"
    if pattern and any(ch in pattern.lstrip("*") for ch in "*?["):
        return pattern
    return extension_pattern(pattern)
