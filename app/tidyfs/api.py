"""Public operations for callers such as the CLI or automation scripts.

Every function returns an OperationResult instead of raising when the
directory it was given is missing or unreadable; the value is then empty
and ``error`` says why. Failures on individual files inside the tree
never fail the whole call; they are logged and passed to ``on_error``.
"""

import logging
import os
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path
from typing import TypeVar

from tidyfs.filesystem.cleanup import CleanupOrchestrator
from tidyfs.filesystem.duplicates import DuplicateGrouper
from tidyfs.filesystem.hasher import ContentHasher
from tidyfs.filesystem.hidden import is_hidden
from tidyfs.filesystem.models import (
    DuplicateGroups,
    ErrorCallback,
    OperationResult,
    ProgressCallback,
    TraversalConfig,
)
from tidyfs.filesystem.protected import DEFAULT_PROTECTED_PATTERNS
from tidyfs.filesystem.walker import RootError, TreeWalker, normalize_pattern

logger = logging.getLogger(__name__)

StrPath = str | os.PathLike[str]
T = TypeVar("T")


def find_files(
    directory: StrPath,
    pattern: str = "*",
    recursive: bool = True,
    include_hidden: bool = False,
    max_depth: int = -1,
    *,
    on_error: ErrorCallback | None = None,
) -> OperationResult[list[Path]]:
    """Find files under directory whose names match pattern.

    Args:
        directory: Root directory (depth 0).
        pattern: Glob matched against file names.
        recursive: Whether to descend into subdirectories.
        include_hidden: Whether to visit hidden files and directories.
        max_depth: Deepest directory visited, -1 for unlimited.
        on_error: Called for every unreadable subdirectory or entry.

    Returns:
        OperationResult holding matching paths in directory-listing order.
    """
    config = TraversalConfig(
        pattern=pattern,
        recursive=recursive,
        include_hidden=include_hidden,
        max_depth=max_depth,
    )
    try:
        files = list(TreeWalker(config, on_error=on_error).walk(directory))
    except RootError as e:
        return _failed([], e)
    return OperationResult(files)


def find_duplicate_files(
    directory: StrPath,
    recursive: bool = True,
    *,
    hasher: ContentHasher | None = None,
    workers: int = 1,
    size_prefilter: bool = True,
    on_error: ErrorCallback | None = None,
    progress: ProgressCallback | None = None,
) -> OperationResult[DuplicateGroups]:
    """Group files under directory by identical content.

    Returns:
        OperationResult holding digest to paths, groups of two or more only.
    """
    grouper = DuplicateGrouper(
        hasher,
        workers=workers,
        size_prefilter=size_prefilter,
        on_error=on_error,
        progress=progress,
    )
    try:
        groups = grouper.find_duplicates(directory, recursive=recursive)
    except RootError as e:
        return _failed({}, e)
    return OperationResult(groups)


def get_old_files(
    directory: StrPath,
    days: int,
    extension: str | None = None,
    *,
    recursive: bool = False,
    include_hidden: bool = False,
    now: datetime | None = None,
    on_error: ErrorCallback | None = None,
) -> OperationResult[list[Path]]:
    """List files in directory not modified within the last ``days`` days."""
    orchestrator = CleanupOrchestrator(
        recursive=recursive,
        include_hidden=include_hidden,
        on_error=on_error,
    )
    try:
        old = orchestrator.find_old_files(directory, days, extension, now)
    except RootError as e:
        return _failed([], e)
    return OperationResult(old)


def cleanup_old_files(
    directory: StrPath,
    days: int,
    extension: str | None = None,
    *,
    recursive: bool = False,
    include_hidden: bool = False,
    dry_run: bool = False,
    protected_patterns: Iterable[str] = DEFAULT_PROTECTED_PATTERNS,
    now: datetime | None = None,
    on_error: ErrorCallback | None = None,
) -> OperationResult[int]:
    """Delete files in directory not modified within the last ``days`` days.

    Returns:
        OperationResult holding the number of files actually deleted.
    """
    orchestrator = CleanupOrchestrator(
        recursive=recursive,
        include_hidden=include_hidden,
        dry_run=dry_run,
        protected_patterns=protected_patterns,
        on_error=on_error,
    )
    try:
        report = orchestrator.cleanup(directory, days, extension, now)
    except RootError as e:
        return _failed(0, e)
    return OperationResult(report.deleted_count)


def list_folders(directory: StrPath, include_hidden: bool = True) -> OperationResult[list[Path]]:
    """List the immediate subdirectories of directory."""
    root = Path(directory)
    if not root.is_dir():
        return _failed([], RootError(root, "Not a directory"))

    try:
        with os.scandir(root) as it:
            entries = list(it)
    except OSError as e:
        return _failed([], RootError(root, f"Cannot list directory ({e.strerror or e})"))

    folders: list[Path] = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError as e:
            logger.warning("Cannot inspect %s: %s", entry.path, e)
            continue
        if include_hidden or not is_hidden(entry.path):
            folders.append(Path(entry.path))
    return OperationResult(folders)


def file_count(
    directory: StrPath,
    extension: str | None = None,
    recursive: bool = False,
    include_hidden: bool = False,
) -> OperationResult[int]:
    """Count files in directory matching an extension or glob."""
    result = find_files(
        directory,
        pattern=normalize_pattern(extension),
        recursive=recursive,
        include_hidden=include_hidden,
    )
    return OperationResult(len(result.value), result.error)


def directory_size(directory: StrPath) -> OperationResult[int]:
    """Total size in bytes of every file under directory, hidden ones included.

    Files that vanish or cannot be read while summing are left out.
    """
    result = find_files(directory, include_hidden=True)
    total = 0
    for path in result.value:
        try:
            total += path.stat().st_size
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
    return OperationResult(total, result.error)


def file_size(path: StrPath) -> OperationResult[int]:
    """Size of a single file in bytes."""
    try:
        return OperationResult(Path(path).stat().st_size)
    except OSError as e:
        logger.warning("Cannot read size of %s: %s", path, e)
        return OperationResult(0, f"Cannot read file size ({e.strerror or e}): {path}")


def _failed(value: T, error: RootError) -> OperationResult[T]:
    logger.warning("%s", error)
    return OperationResult(value, str(error))
