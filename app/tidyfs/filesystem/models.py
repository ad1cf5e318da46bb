"""Filesystem domain models for traversal, classification and cleanup.

This module defines the value objects passed between the walker,
the duplicate grouper, the age filter and the cleanup orchestrator,
plus the result type returned by the public API.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Generic, TypeVar

T = TypeVar("T")

# Receives the path that failed and the error raised for it.
ErrorCallback = Callable[[Path, OSError], None]

# Receives the number of files processed so far and the total.
ProgressCallback = Callable[[int, int], None]

# Digest (hex) to the paths sharing that content, in traversal order.
DuplicateGroups = dict[str, list[Path]]


@dataclass(frozen=True, slots=True)
class TraversalConfig:
    """Immutable settings for a single directory traversal.

    Attributes:
        pattern: Glob matched against file names (not full paths).
        recursive: If False, only the root's immediate files are reported.
        include_hidden: If False, hidden files and hidden directories
            (with everything beneath them) are skipped.
        max_depth: Deepest directory visited, root being 0. -1 means unlimited.
    """

    pattern: str = "*"
    recursive: bool = True
    include_hidden: bool = False
    max_depth: int = -1

    def __post_init__(self) -> None:
        """Validate traversal settings after initialization."""
        if not self.pattern:
            msg = "Pattern cannot be empty"
            raise ValueError(msg)
        if self.max_depth < -1:
            msg = f"max_depth must be -1 (unlimited) or >= 0, got {self.max_depth}"
            raise ValueError(msg)

    def allows_depth(self, depth: int) -> bool:
        """Check whether a directory at the given depth may be visited."""
        if depth == 0:
            return True
        if not self.recursive:
            return False
        return self.max_depth < 0 or depth <= self.max_depth


@dataclass(frozen=True, slots=True)
class AgePartition:
    """Files split by last-modified time against a cutoff.

    Attributes:
        old: Files modified strictly before the cutoff.
        kept: Files modified at or after the cutoff, or whose mtime is unreadable.
    """

    old: list[Path] = field(default_factory=list)
    kept: list[Path] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class DeletionResult:
    """Result of a single file deletion.

    Attributes:
        path: Path that was operated on.
        success: Whether the file was removed.
        error: Error message if the deletion failed, None otherwise.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: Path
    success: bool
    error: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class CleanupReport:
    """Outcome of an age-based cleanup run.

    Attributes:
        root: Directory that was cleaned.
        candidates: Files that were old enough to delete.
        results: One DeletionResult per candidate, in candidate order.
    """

    root: Path
    candidates: list[Path] = field(default_factory=list)
    results: list[DeletionResult] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        """Number of files actually removed from disk."""
        return sum(1 for r in self.results if r.success and not r.dry_run)

    @property
    def failed(self) -> list[DeletionResult]:
        """Deletions that did not succeed."""
        return [r for r in self.results if not r.success]


@dataclass(frozen=True, slots=True)
class OperationResult(Generic[T]):
    """Value returned by a public operation, with the reason if it failed.

    A failed operation still carries an empty value so callers that only
    need the data can ignore the error.

    Attributes:
        value: The operation's output.
        error: Why the operation failed as a whole, None on success.
    """

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Check if the operation succeeded."""
        return self.error is None
