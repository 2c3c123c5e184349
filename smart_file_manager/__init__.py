"""Smart File Manager - scan a folder, sort files by type, search names and spot duplicates."""

__version__ = "1.0.0"
__description__ = "Scan a directory, organize files by extension, search and find duplicates"

# Import main components for programmatic access
from .core.models import FileRecord, ScanResult, OrganizeResult
from .core.categories import FileCategory, category_for
from .core.scanner import FileScanner
from .core.organizer import FileOrganizer
from .core.searcher import FileSearcher

__all__ = [
    "FileRecord",
    "ScanResult",
    "OrganizeResult",
    "FileCategory",
    "category_for",
    "FileScanner",
    "FileOrganizer",
    "FileSearcher",
]
