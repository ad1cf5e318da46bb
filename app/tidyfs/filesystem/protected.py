"""Protected filesystem paths that cleanup must never delete.

Patterns are glob-style. Patterns starting with ~ are expanded to the
user's home directory before matching; all others are matched as-is.
"""

import fnmatch
from collections.abc import Iterable
from pathlib import Path

DEFAULT_PROTECTED_PATTERNS: tuple[str, ...] = (
    # SSH and security
    "~/.ssh/*",
    "~/.gnupg/*",
    "~/.gpg/*",
    # Keyrings
    "~/.local/share/keyrings/*",
    # tidyfs itself
    "~/.config/tidyfs/*",
    # System
    "/etc/*",
    "/boot/*",
    "/bin/*",
    "/sbin/*",
    "/usr/*",
)


def expand_pattern(pattern: str) -> str:
    """Expand a leading ~ in a pattern to the home directory."""
    if pattern.startswith("~"):
        return str(Path.home()) + pattern[1:]
    return pattern


def is_protected_path(path: str, patterns: Iterable[str] = DEFAULT_PROTECTED_PATTERNS) -> bool:
    """Check if a filesystem path is protected and must not be deleted.

    Args:
        path: Absolute filesystem path to check.
        patterns: Glob patterns to check against.

    Returns:
        True if the path matches any pattern, False otherwise.
    """
    return any(fnmatch.fnmatch(path, expand_pattern(pattern)) for pattern in patterns)
