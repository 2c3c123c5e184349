"""Directory scanner for the Smart File Manager."""

import os
import time
import logging
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Union

from .models import FileRecord, ScanResult, extract_metadata
from .exceptions import FileSystemError, NotADirectoryPathError, PathNotFoundError
from .error_handler import ErrorHandler


def validate_directory(path: Union[str, Path]) -> Path:
    """
    Validate that a path exists and is a directory.

    Args:
        path: Path to validate

    Returns:
        The path as a Path object

    Raises:
        PathNotFoundError: If path doesn't exist
        NotADirectoryPathError: If path is not a directory
        FileSystemError: If the path cannot be inspected
    """
    path = Path(path)
    try:
        if not path.exists():
            raise PathNotFoundError(f"Directory does not exist: {path}")
        if not path.is_dir():
            raise NotADirectoryPathError(f"Path is not a directory: {path}")
    except OSError as e:
        ErrorHandler().handle_file_system_error(e, path)
    return path


class FileScanner:
    """Holds the file collection for one target directory."""

    def __init__(
        self,
        directory: Union[str, Path],
        logger: Optional[logging.Logger] = None,
        progress_callback: Optional[Callable[[int], None]] = None,
        exclude: Optional[Iterable[Union[str, Path]]] = None,
    ):
        """
        Initialize the file scanner.

        Args:
            directory: Directory whose immediate files are scanned
            logger: Logger receiving activity messages. Defaults to the module logger.
            progress_callback: Optional callback called with the running file count
            exclude: Files never collected, such as the open activity log
        """
        self.directory = Path(directory)
        self.logger = logger or logging.getLogger(__name__)
        self.error_handler = ErrorHandler(self.logger)
        self.progress_callback = progress_callback
        self._files: List[FileRecord] = []
        self.exclude = {Path(p).resolve() for p in exclude or ()}

        self.logger.info(f"FileScanner initialized for directory: {self.directory}")
        if not self.directory_exists():
            self.logger.warning(f"Directory does not exist: {self.directory}")

    @property
    def files(self) -> List[FileRecord]:
        """Files found by the most recent scan."""
        return self._files

    def directory_exists(self) -> bool:
        """Check whether the target directory exists and is a directory."""
        try:
            return self.directory.is_dir()
        except OSError as e:
            self.logger.error(f"ERROR checking directory: {e}")
            return False

    def change_directory(self, directory: Union[str, Path]) -> None:
        """Point the scanner at another directory and drop the current collection."""
        self.directory = Path(directory)
        self._files = []
        self.logger.info(f"Target directory changed to: {self.directory}")

    def scan(self) -> ScanResult:
        """
        Scan the target directory for regular files.

        The previous collection is discarded first. Entries that cannot be
        read are logged and left out; if the directory listing itself fails
        the whole scan is abandoned and an empty result is returned.

        Returns:
            ScanResult with the new collection and any errors
        """
        start_time = time.time()
        self._files = []
        result = ScanResult(directory=self.directory)

        if not self.directory_exists():
            message = f"ERROR: Cannot scan non-existent directory: {self.directory}"
            self.logger.error(message)
            result.errors.append(message)
            result.duration = time.time() - start_time
            return result

        files: List[FileRecord] = []
        try:
            for entry_path in self._iter_regular_files():
                extraction = extract_metadata(entry_path)
                if not extraction.ok:
                    self.logger.error(f"ERROR reading file info: {extraction.error}")
                    result.errors.append(extraction.error)
                    continue

                record = extraction.record
                files.append(record)
                self.logger.info(f"Found file: {record.name} ({record.size} bytes)")

                if self.progress_callback:
                    try:
                        self.progress_callback(len(files))
                    except Exception as e:
                        self.logger.warning(f"Progress callback error: {e}")

        except OSError as e:
            translated = self.error_handler.translate_file_system_error(e, self.directory)
            message = f"ERROR scanning directory: {translated}"
            self.logger.error(message)
            result.errors.append(message)
            result.duration = time.time() - start_time
            return result

        self._files = files
        result.files = files
        result.duration = time.time() - start_time

        self.logger.info(f"Scan complete: {len(files)} files found")
        if result.errors:
            self.error_handler.log_error_summary(
                [FileSystemError(err) for err in result.errors], "directory scan"
            )
        return result

    def _iter_regular_files(self) -> Iterator[Path]:
        """Yield immediate regular files of the target directory, skipping symlinks."""
        with os.scandir(self.directory) as entries:
            for entry in entries:
                try:
                    if not entry.is_file(follow_symlinks=False):
                        continue
                except OSError as e:
                    self.logger.warning(f"Could not inspect {entry.path}: {e}")
                    continue
                path = self.directory / entry.name
                if self.exclude and path.resolve() in self.exclude:
                    self.logger.debug(f"Skipping excluded file: {entry.name}")
                    continue
                yield path
