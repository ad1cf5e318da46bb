"""Directory traversal, duplicate detection and age-based cleanup.

This module provides the tree walker and its hidden-file classifier,
content hashing, duplicate grouping, age partitioning and the cleanup
orchestrator.
"""

from tidyfs.filesystem.age import is_file_older_than, partition_by_age
from tidyfs.filesystem.cleanup import CleanupOrchestrator
from tidyfs.filesystem.duplicates import DuplicateGrouper
from tidyfs.filesystem.hasher import ContentHasher
from tidyfs.filesystem.hidden import is_hidden
from tidyfs.filesystem.models import (
    AgePartition,
    CleanupReport,
    DeletionResult,
    OperationResult,
    TraversalConfig,
)
from tidyfs.filesystem.protected import DEFAULT_PROTECTED_PATTERNS, is_protected_path
from tidyfs.filesystem.walker import (
    RootAccessError,
    RootError,
    RootNotFoundError,
    TreeWalker,
    extension_pattern,
    normalize_pattern,
)

__all__ = [
    "DEFAULT_PROTECTED_PATTERNS",
    "AgePartition",
    "CleanupOrchestrator",
    "CleanupReport",
    "ContentHasher",
    "DeletionResult",
    "DuplicateGrouper",
    "OperationResult",
    "RootAccessError",
    "RootError",
    "RootNotFoundError",
    "TraversalConfig",
    "TreeWalker",
    "extension_pattern",
    "is_file_older_than",
    "is_hidden",
    "is_protected_path",
    "normalize_pattern",
    "partition_by_age",
]
