"""Name search and duplicate detection over a scanned file collection."""

import logging
from typing import Dict, Iterable, List, Optional

from .models import FileRecord


class FileSearcher:
    """Read-only queries over a list of FileRecord objects."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def search_by_name(self, files: Iterable[FileRecord], term: str) -> List[FileRecord]:
        """
        Case-insensitive substring search on file names.

        An empty term matches every file. Results keep collection order.
        """
        lowered_term = term.lower()
        self.logger.info(f"Searching for files containing: {term}")

        results = []
        for record in files:
            if lowered_term in record.name.lower():
                results.append(record)
                self.logger.info(f"Match found: {record.name}")

        self.logger.info(f"Search complete: {len(results)} matches found")
        return results

    def find_duplicates(self, files: Iterable[FileRecord]) -> Dict[str, List[FileRecord]]:
        """
        Group files that share a size and name.

        File contents are never compared, so two unrelated files with the
        same name and size are reported, while copies under different names
        are not.

        Returns:
            Signature to records, for groups of two or more, in the order each
            signature was first seen
        """
        files = list(files)
        self.logger.info(f"Starting duplicate detection on {len(files)} files")

        groups: Dict[str, List[FileRecord]] = {}
        for record in files:
            groups.setdefault(record.signature, []).append(record)

        duplicates = {}
        for signature, group in groups.items():
            if len(group) >= 2:
                duplicates[signature] = group
                self.logger.info(f"Duplicate group found: {len(group)} files ({signature})")

        self.logger.info(f"Duplicate detection complete: {len(duplicates)} groups found")
        return duplicates
