"""Extension to category mapping used when organizing files."""

from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping


class FileCategory(Enum):
    """Folder categories files are sorted into. Values are the folder names."""
    DOCUMENTS = "Documents"
    IMAGES = "Images"
    VIDEOS = "Videos"
    AUDIO = "Audio"
    ARCHIVES = "Archives"
    CODE = "Code"
    EXECUTABLES = "Executables"
    OTHERS = "Others"

    @classmethod
    def get_extensions(cls) -> Mapping[str, "FileCategory"]:
        """Get the read-only mapping of file extensions to categories."""
        return _EXTENSION_CATEGORIES

    @classmethod
    def from_extension(cls, extension: str) -> "FileCategory":
        """Categorize a normalized extension, falling back to OTHERS."""
        return _EXTENSION_CATEGORIES.get(extension, cls.OTHERS)


def _build_extension_table() -> Mapping[str, FileCategory]:
    groups = {
        FileCategory.DOCUMENTS: (
            ".txt", ".pdf", ".doc", ".docx", ".xlsx", ".xls",
            ".ppt", ".pptx", ".odt", ".rtf",
        ),
        FileCategory.IMAGES: (
            ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".svg", ".ico",
            ".tiff", ".webp",
        ),
        FileCategory.VIDEOS: (
            ".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv", ".webm", ".m4v",
        ),
        FileCategory.AUDIO: (
            ".mp3", ".wav", ".flac", ".aac", ".ogg", ".wma", ".m4a",
        ),
        FileCategory.ARCHIVES: (
            ".zip", ".rar", ".7z", ".tar", ".gz", ".bz2", ".xz",
        ),
        FileCategory.CODE: (
            ".cpp", ".h", ".hpp", ".c", ".py", ".java", ".js", ".ts",
            ".html", ".css", ".php", ".rb", ".go", ".rs",
        ),
        FileCategory.EXECUTABLES: (
            ".exe", ".dll", ".so", ".app", ".deb", ".rpm",
        ),
    }

    table: Dict[str, FileCategory] = {}
    for category, extensions in groups.items():
        for extension in extensions:
            if extension in table:
                raise ValueError(
                    f"Extension {extension} mapped to both "
                    f"{table[extension].value} and {category.value}"
                )
            table[extension] = category
    return MappingProxyType(table)


_EXTENSION_CATEGORIES = _build_extension_table()

FALLBACK_CATEGORY = FileCategory.OTHERS.value


def category_for(extension: str) -> str:
    """Return the category label for a normalized extension such as ``.jpg``."""
    return FileCategory.from_extension(extension).value


def category_table() -> Dict[str, List[str]]:
    """
    Group the extension table by category label.

    Labels and the extensions under each label are sorted so the table can be
    displayed reproducibly.
    """
    grouped: Dict[str, List[str]] = {}
    for extension, category in _EXTENSION_CATEGORIES.items():
        grouped.setdefault(category.value, []).append(extension)

    return {label: sorted(grouped[label]) for label in sorted(grouped)}
