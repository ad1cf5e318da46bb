"""Duplicate file detection by content digest.

Walks a directory, hashes every candidate file and groups paths whose
digests are equal. Only groups with two or more members are returned.
Digest collisions are accepted as negligible and are not re-checked
byte by byte.
"""

import logging
import os
from collections import Counter
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from tidyfs.filesystem.hasher import ContentHasher
from tidyfs.filesystem.models import (
    DuplicateGroups,
    ErrorCallback,
    ProgressCallback,
    TraversalConfig,
)
from tidyfs.filesystem.walker import TreeWalker

logger = logging.getLogger(__name__)


class DuplicateGrouper:
    """Groups files under a directory by identical content.

    Hidden files and hidden directories are never scanned.

    Args:
        hasher: Digest function. Defaults to a SHA-256 ContentHasher.
        workers: Number of threads used for hashing. 1 hashes sequentially.
        size_prefilter: If True, files whose size no other file shares are
            not hashed. This never changes the result.
        on_error: Called with the path and error for every unreadable file.
        progress: Called with (processed, total) after each file is hashed.
    """

    def __init__(
        self,
        hasher: ContentHasher | None = None,
        *,
        workers: int = 1,
        size_prefilter: bool = True,
        on_error: ErrorCallback | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        if workers < 1:
            msg = f"workers must be at least 1, got {workers}"
            raise ValueError(msg)

        self._hasher = hasher or ContentHasher()
        self._workers = workers
        self._size_prefilter = size_prefilter
        self._on_error = on_error
        self._progress = progress

    def find_duplicates(
        self,
        root: str | os.PathLike[str],
        recursive: bool = True,
    ) -> DuplicateGroups:
        """Find files with identical content under root.

        Args:
            root: Directory to scan.
            recursive: Whether to scan subdirectories.

        Returns:
            Mapping of hex digest to the paths sharing it, in traversal
            order. Every group has at least two paths.

        Raises:
            RootNotFoundError: If root does not exist or is not a directory.
            RootAccessError: If root cannot be listed.
        """
        config = TraversalConfig(pattern="*", recursive=recursive, include_hidden=False)
        walker = TreeWalker(config, on_error=self._on_error)
        files = list(walker.walk(root))
        logger.debug("Found %s files under %s", len(files), root)

        candidates = self._filter_by_size(files) if self._size_prefilter else files
        logger.debug("Hashing %s of %s files", len(candidates), len(files))

        groups: dict[str, list[Path]] = {}
        for path, digest in self._digest_all(candidates):
            if digest is None:
                continue
            groups.setdefault(digest, []).append(path)

        duplicates = {digest: paths for digest, paths in groups.items() if len(paths) > 1}
        logger.info("Found %s duplicate groups under %s", len(duplicates), root)
        return duplicates

    def _filter_by_size(self, files: list[Path]) -> list[Path]:
        """Drop files whose size is unique, keeping traversal order."""
        sizes: dict[Path, int] = {}
        for path in files:
            try:
                sizes[path] = path.stat().st_size
            except OSError as e:
                self._report(path, e)

        counts = Counter(sizes.values())
        return [path for path in files if path in sizes and counts[sizes[path]] > 1]

    def _digest_all(self, paths: list[Path]) -> Iterator[tuple[Path, str | None]]:
        """Yield (path, digest) pairs in the order of paths."""
        total = len(paths)
        if self._workers == 1 or total < 2:
            results: Iterable[str | None] = map(self._safe_digest, paths)
            yield from self._with_progress(paths, results, total)
            return

        # Executor.map returns results in submission order
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            results = pool.map(self._safe_digest, paths)
            yield from self._with_progress(paths, results, total)

    def _with_progress(
        self,
        paths: list[Path],
        results: Iterable[str | None],
        total: int,
    ) -> Iterator[tuple[Path, str | None]]:
        for processed, (path, digest) in enumerate(zip(paths, results, strict=True), 1):
            if self._progress is not None:
                self._progress(processed, total)
            yield path, digest

    def _safe_digest(self, path: Path) -> str | None:
        try:
            return self._hasher.digest(path)
        except OSError as e:
            self._report(path, e)
            return None

    def _report(self, path: Path, error: OSError) -> None:
        logger.warning("Skipping unreadable file %s: %s", path, error)
        if self._on_error is not None:
            self._on_error(path, error)
