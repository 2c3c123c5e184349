"""Moves scanned files into category subfolders."""

import os
import shutil
import logging
from pathlib import Path
from typing import Iterable, Optional, Union

from .categories import category_for
from .models import FileRecord, OrganizeResult
from .exceptions import DestinationExistsError, FileManagerError, OrganizeError
from .error_handler import ErrorHandler


class FileOrganizer:
    """Sorts files into ``<base>/<Category>/<name>`` without ever overwriting."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)

    def organize(
        self,
        files: Iterable[FileRecord],
        base_directory: Union[str, Path],
        dry_run: bool = False,
    ) -> OrganizeResult:
        """
        Move each file into the folder for its category.

        Records are handled independently and in order. A record is skipped
        when its category folder cannot be created, when its destination is
        already occupied, or when the move fails; the rest of the batch still
        runs. Paths in ``files`` are stale afterwards, so callers should
        re-scan.

        Args:
            files: Records from a scan
            base_directory: Directory the category folders are created in
            dry_run: Only report what would be moved

        Returns:
            OrganizeResult with moved and skipped records
        """
        base_directory = Path(base_directory)
        result = OrganizeResult(base_directory=base_directory, dry_run=dry_run)

        self.logger.info(f"Starting file organization in: {base_directory}")

        for record in files:
            try:
                destination = self._organize_record(record, base_directory, dry_run)
            except DestinationExistsError as e:
                self.logger.info(f"SKIPPED: {e}")
                result.skipped.append((record, str(e)))
                continue
            except FileManagerError as e:
                self.logger.error(f"ERROR moving {record.name}: {e}")
                result.skipped.append((record, str(e)))
                result.errors.append(str(e))
                continue

            result.moved.append((record, destination))

        if dry_run:
            self.logger.info(f"Dry run complete: {result.moved_count} files would be moved")
        else:
            self.logger.info(f"Organization complete: {result.moved_count} files moved")

        if result.errors:
            self.error_handler.log_error_summary(
                [OrganizeError(err) for err in result.errors], "file organization"
            )
        return result

    def _organize_record(self, record: FileRecord, base_directory: Path, dry_run: bool) -> Path:
        category = category_for(record.extension)
        category_path = base_directory / category
        destination = category_path / record.name

        if dry_run:
            self._check_directory(category_path)
        else:
            self._ensure_directory(category_path)

        if os.path.lexists(destination):
            raise DestinationExistsError(destination)

        if dry_run:
            self.logger.info(f"[DRY RUN] Move {record.name} -> {category}/")
            return destination

        try:
            shutil.move(str(record.path), str(destination))
        except (OSError, shutil.Error) as e:
            raise OrganizeError(
                f"{self.error_handler.translate_file_system_error(e, record.path)}"
            ) from e

        self.logger.info(f"Moved: {record.name} -> {category}/")
        return destination

    def _check_directory(self, path: Path) -> None:
        if path.exists() and not path.is_dir():
            self.logger.error(f"ERROR: Failed to create directory: {path}")
            raise OrganizeError(f"Cannot create {path}: a file with that name already exists")

    def _ensure_directory(self, path: Path) -> None:
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self.logger.error(f"ERROR: Failed to create directory: {path}")
            raise OrganizeError(
                f"Cannot create {path}: {self.error_handler.translate_file_system_error(e, path)}"
            ) from e
