"""Utility helpers shared by the CLI."""
