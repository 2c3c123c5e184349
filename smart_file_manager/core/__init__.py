"""Core engine for scanning, categorizing, searching and deduplicating files."""

from .models import FileRecord, ExtractionResult, ScanResult, OrganizeResult, extract_extension, extract_metadata
from .categories import FileCategory, category_for, category_table
from .scanner import FileScanner, validate_directory
from .organizer import FileOrganizer
from .searcher import FileSearcher

__all__ = [
    "FileRecord",
    "ExtractionResult",
    "ScanResult",
    "OrganizeResult",
    "extract_extension",
    "extract_metadata",
    "FileCategory",
    "category_for",
    "category_table",
    "FileScanner",
    "validate_directory",
    "FileOrganizer",
    "FileSearcher",
]
