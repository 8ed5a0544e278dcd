"""Command-line interface for mdlinks."""
