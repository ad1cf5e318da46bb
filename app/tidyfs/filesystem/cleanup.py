"""Age-based file cleanup.

Enumerates files under a directory, keeps those older than a threshold
and deletes them one by one. Deletion is best-effort: a file that cannot
be removed is reported and the remaining files are still processed.
Failed deletions are not retried.
"""

import logging
import os
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from tidyfs.filesystem.age import partition_by_age
from tidyfs.filesystem.models import (
    CleanupReport,
    DeletionResult,
    ErrorCallback,
    TraversalConfig,
)
from tidyfs.filesystem.protected import DEFAULT_PROTECTED_PATTERNS, is_protected_path
from tidyfs.filesystem.walker import TreeWalker, normalize_pattern

logger = logging.getLogger(__name__)


class CleanupOrchestrator:
    """Deletes files older than a threshold from a directory.

    Args:
        recursive: Whether to include files in subdirectories.
        include_hidden: Whether hidden files are candidates.
        dry_run: If True, report what would be deleted without deleting.
        protected_patterns: Glob patterns for paths that are never deleted.
        on_error: Called with the path and error for every failed listing
            or deletion.
    """

    def __init__(
        self,
        *,
        recursive: bool = False,
        include_hidden: bool = False,
        dry_run: bool = False,
        protected_patterns: Iterable[str] = DEFAULT_PROTECTED_PATTERNS,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._recursive = recursive
        self._include_hidden = include_hidden
        self._dry_run = dry_run
        self._protected_patterns = tuple(protected_patterns)
        self._on_error = on_error

    def find_old_files(
        self,
        root: str | os.PathLike[str],
        threshold_days: int,
        pattern: str | None = None,
        now: datetime | None = None,
    ) -> list[Path]:
        """List files under root older than threshold_days.

        Args:
            root: Directory to search.
            threshold_days: Age threshold in days.
            pattern: File name glob or bare extension ("log", ".log", "*.log").
            now: Reference time. Defaults to the current local time.

        Raises:
            RootNotFoundError: If root does not exist or is not a directory.
            RootAccessError: If root cannot be listed.
        """
        config = TraversalConfig(
            pattern=normalize_pattern(pattern),
            recursive=self._recursive,
            include_hidden=self._include_hidden,
        )
        files = TreeWalker(config, on_error=self._on_error).walk(root)
        return partition_by_age(files, threshold_days, now).old

    def cleanup(
        self,
        root: str | os.PathLike[str],
        threshold_days: int,
        pattern: str | None = None,
        now: datetime | None = None,
    ) -> CleanupReport:
        """Delete files under root older than threshold_days.

        Args:
            root: Directory to clean.
            threshold_days: Age threshold in days.
            pattern: File name glob or bare extension ("log", ".log", "*.log").
            now: Reference time. Defaults to the current local time.

        Returns:
            CleanupReport listing candidates and one result per candidate.

        Raises:
            RootNotFoundError: If root does not exist or is not a directory.
            RootAccessError: If root cannot be listed.
        """
        candidates = self.find_old_files(root, threshold_days, pattern, now)
        logger.debug(
            "Found %s files older than %s days in %s", len(candidates), threshold_days, root
        )
        return self.delete_files(root, candidates)

    def delete_files(self, root: str | os.PathLike[str], candidates: list[Path]) -> CleanupReport:
        """Delete exactly the given candidates, one result per path.

        Used when candidates were already listed, for example to show them
        before asking for confirmation. Age is not re-checked.
        """
        report = CleanupReport(root=Path(root), candidates=list(candidates))
        for path in report.candidates:
            report.results.append(self._delete_single(path))

        if self._dry_run:
            logger.info("Dry-run: %s files in %s would be deleted", len(candidates), root)
        else:
            logger.info("Cleaned up %s old files from %s", report.deleted_count, root)
        return report

    def _delete_single(self, path: Path) -> DeletionResult:
        """Delete one file, isolating any failure to its own result."""
        if is_protected_path(os.path.abspath(path), self._protected_patterns):
            logger.warning("Refusing to delete protected path %s", path)
            return DeletionResult(
                path=path,
                success=False,
                error=f"Protected path cannot be deleted: {path}",
            )

        if self._dry_run:
            logger.info("Dry-run: would delete %s", path)
            return DeletionResult(path=path, success=True, dry_run=True)

        try:
            path.unlink()
        except FileNotFoundError as e:
            self._report(path, e)
            return DeletionResult(path=path, success=False, error=f"Path does not exist: {path}")
        except OSError as e:
            self._report(path, e)
            return DeletionResult(path=path, success=False, error=str(e))

        logger.debug("Deleted %s", path)
        return DeletionResult(path=path, success=True)

    def _report(self, path: Path, error: OSError) -> None:
        logger.warning("Could not delete %s: %s", path, error)
        if self._on_error is not None:
            self._on_error(path, error)
