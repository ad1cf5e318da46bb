"""tidyfs - directory walking, duplicate detection and age-based cleanup."""

__version__ = "0.3.0"
