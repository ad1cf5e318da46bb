"""Core infrastructure: paths, configuration, theme and caching."""
