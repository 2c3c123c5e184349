"""Error handling utilities for the Smart File Manager."""

import errno
import logging
from pathlib import Path
from typing import List, Optional, Union

from .exceptions import (
    FileManagerError, FileSystemError, AccessDeniedError, PathNotFoundError,
    NotADirectoryPathError
)


class ErrorHandler:
    """Translates low-level failures into project exceptions and reports them."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize error handler.

        Args:
            logger: Logger instance to use for error reporting
        """
        self.logger = logger or logging.getLogger(__name__)

    def translate_file_system_error(self, error: Exception, file_path: Union[str, Path]) -> FileManagerError:
        """
        Map an OS-level exception onto the project's exception hierarchy.

        Args:
            error: The exception that occurred
            file_path: Path where the error occurred

        Returns:
            A FileManagerError subclass instance describing the failure
        """
        if isinstance(error, FileManagerError):
            return error

        if isinstance(error, OSError):
            if error.errno in (errno.EACCES, errno.EPERM):
                return AccessDeniedError(f"Permission denied: {file_path}")
            elif error.errno == errno.ENOENT:
                return PathNotFoundError(f"Path not found: {file_path}")
            elif error.errno == errno.ENOTDIR:
                return NotADirectoryPathError(f"Not a directory: {file_path}")
            elif error.errno == errno.ENOSPC:
                return FileSystemError(f"No space left on device: {file_path}")
            return FileSystemError(f"File system error at {file_path}: {error}")

        return FileSystemError(f"Unexpected file system error at {file_path}: {error}")

    def handle_file_system_error(self, error: Exception, file_path: Union[str, Path]) -> None:
        """
        Log a file system error and re-raise it as a project exception.

        Args:
            error: The exception that occurred
            file_path: Path where the error occurred

        Raises:
            FileManagerError: Always; the translated form of ``error``
        """
        translated = self.translate_file_system_error(error, file_path)

        if isinstance(translated, (AccessDeniedError, PathNotFoundError)):
            self.logger.warning(f"{translated}")
        else:
            self.logger.error(f"{translated}")

        raise translated from error

    def log_error_summary(self, errors: List[Exception], operation: str = "operation"):
        """
        Log a summary of errors that occurred during an operation.

        Args:
            errors: List of exceptions that occurred
            operation: Description of the operation
        """
        if not errors:
            return

        error_counts = {}
        for error in errors:
            error_type = type(error).__name__
            error_counts[error_type] = error_counts.get(error_type, 0) + 1

        self.logger.warning(f"Error summary for {operation}:")
        for error_type, count in error_counts.items():
            self.logger.warning(f"  {error_type}: {count} occurrences")

        # Log first few unique error messages
        unique_messages = set()
        for error in errors[:10]:
            message = str(error)
            if message not in unique_messages:
                unique_messages.add(message)
                self.logger.warning(f"  Example: {message}")
