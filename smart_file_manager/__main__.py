"""Main entry point for the Smart File Manager.

This allows the package to be run as:
    python -m smart_file_manager
"""

from .cli.main import cli

if __name__ == "__main__":
    cli()
