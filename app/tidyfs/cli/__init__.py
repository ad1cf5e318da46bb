"""Command-line interface for tidyfs."""
