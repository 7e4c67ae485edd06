"""Command-line interface for YC Scout."""
