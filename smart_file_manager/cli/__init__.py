"""Command-line interface for the Smart File Manager."""
