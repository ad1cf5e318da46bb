"""Hidden file detection.

A path is hidden when the platform marks it so: the hidden attribute on
Windows, the UF_HIDDEN flag on macOS/BSD, or a leading dot in the name
on POSIX systems.
"""

import os
import stat
from pathlib import Path

_WINDOWS_HIDDEN: int = getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0x2)
_UF_HIDDEN: int = getattr(stat, "UF_HIDDEN", 0x8000)

# Linux stat results carry neither attribute nor flag fields.
_HAS_HIDDEN_METADATA: bool = os.name == "nt" or hasattr(os.stat_result, "st_flags")


def is_hidden(path: str | os.PathLike[str], st: os.stat_result | None = None) -> bool:
    """Check whether a path is hidden.

    Never raises: a path whose metadata cannot be read is reported as
    not hidden.

    Args:
        path: Path to classify.
        st: Optional lstat result already available to the caller.

    Returns:
        True if the platform considers the path hidden.
    """
    name = Path(path).name
    if os.name != "nt" and name.startswith(".") and name not in (".", ".."):
        return True

    if st is None and not _HAS_HIDDEN_METADATA:
        return False

    try:
        info = st if st is not None else os.lstat(path)
    except (OSError, ValueError):
        return False

    attributes = getattr(info, "st_file_attributes", None)
    if attributes is not None:
        return bool(attributes & _WINDOWS_HIDDEN)

    flags = getattr(info, "st_flags", None)
    if flags is not None:
        return bool(flags & _UF_HIDDEN)

    return False
