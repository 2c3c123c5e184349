"""Core data models and metadata extraction for the Smart File Manager."""

import stat
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class FileRecord:
    """Represents one scanned file."""
    name: str
    path: Path
    extension: str
    size: int
    content_hash: str = ""

    @property
    def signature(self) -> str:
        """Cheap duplicate key made of the exact size and name, e.g. ``1024_file.txt``."""
        return f"{self.size}_{self.name}"

    @classmethod
    def create(cls, file_path: Path) -> "FileRecord":
        """Create a FileRecord from a file path. Raises OSError if the file cannot be read."""
        file_stat = file_path.stat()
        if not stat.S_ISREG(file_stat.st_mode):
            raise ValueError(f"Not a regular file: {file_path}")

        return cls(
            name=file_path.name,
            path=file_path,
            extension=extract_extension(file_path.name),
            size=file_stat.st_size,
        )


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of extracting metadata for a single path."""
    path: Path
    record: Optional[FileRecord] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


@dataclass
class ScanResult:
    """Result of a directory scan operation."""
    directory: Path
    files: List[FileRecord] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    duration: float = 0.0

    @property
    def count(self) -> int:
        return len(self.files)


@dataclass
class OrganizeResult:
    """Result of moving scanned files into category folders."""
    base_directory: Path
    moved: List[Tuple[FileRecord, Path]] = field(default_factory=list)
    skipped: List[Tuple[FileRecord, str]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def moved_count(self) -> int:
        return len(self.moved)

    @property
    def total_processed(self) -> int:
        return len(self.moved) + len(self.skipped)


def extract_extension(filename: str) -> str:
    """
    Derive the normalized extension of a filename.

    The extension runs from the last ``.`` to the end of the name and is
    lowercased. A ``.`` at position 0 does not count, so dotfiles such as
    ``.gitignore`` have no extension.

    Args:
        filename: Bare filename, without directory components

    Returns:
        Extension including the leading dot, or an empty string
    """
    dot_pos = filename.rfind(".")
    if dot_pos > 0:
        return filename[dot_pos:].lower()
    return ""


def extract_metadata(file_path: Path) -> ExtractionResult:
    """
    Extract metadata from a file.

    Failures are reported in the returned result instead of being raised.

    Args:
        file_path: Path to a regular file

    Returns:
        ExtractionResult holding either the FileRecord or an error description
    """
    file_path = Path(file_path)
    try:
        return ExtractionResult(path=file_path, record=FileRecord.create(file_path))
    except (OSError, ValueError) as e:
        return ExtractionResult(path=file_path, error=f"Could not read {file_path}: {e}")
