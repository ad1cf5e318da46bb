"""Age-based classification of files by last-modified time.

A file is old when its modification time is strictly before
``now - threshold_days``. A file modified exactly at the cutoff is kept.
"""

import logging
import os
from collections.abc import Iterable
from datetime import datetime, timedelta
from pathlib import Path

from tidyfs.filesystem.models import AgePartition

logger = logging.getLogger(__name__)


def age_cutoff(threshold_days: int, now: datetime | None = None) -> float:
    """Return the POSIX timestamp before which a file counts as old.

    Args:
        threshold_days: Age threshold in days.
        now: Reference time. Defaults to the current local time.

    Raises:
        ValueError: If threshold_days is negative.
    """
    if threshold_days < 0:
        msg = f"threshold_days must be non-negative, got {threshold_days}"
        raise ValueError(msg)
    reference = now or datetime.now()
    return (reference - timedelta(days=threshold_days)).timestamp()


def partition_by_age(
    entries: Iterable[str | os.PathLike[str]],
    threshold_days: int,
    now: datetime | None = None,
) -> AgePartition:
    """Split files into old and kept by last-modified time.

    Files whose modification time cannot be read (for example, removed
    since they were listed) are kept.

    Args:
        entries: Files to classify.
        threshold_days: Age threshold in days.
        now: Reference time. Defaults to the current local time.

    Returns:
        AgePartition with both lists in input order.
    """
    cutoff = age_cutoff(threshold_days, now)
    partition = AgePartition()

    for entry in entries:
        path = Path(entry)
        try:
            mtime = path.stat().st_mtime
        except OSError as e:
            logger.debug("Cannot read mtime of %s, keeping it: %s", path, e)
            partition.kept.append(path)
            continue

        if mtime < cutoff:
            partition.old.append(path)
        else:
            partition.kept.append(path)

    return partition


def is_file_older_than(
    path: str | os.PathLike[str],
    days: int,
    now: datetime | None = None,
) -> bool:
    """Check whether a single file is older than the given number of days.

    Returns False for files that do not exist or cannot be read.
    """
    return bool(partition_by_age([path], days, now).old)
