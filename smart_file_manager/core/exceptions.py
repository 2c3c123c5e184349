"""Custom exceptions for the Smart File Manager."""


class FileManagerError(Exception):
    """Base exception for file management errors."""
    pass


class FileSystemError(FileManagerError):
    """Exception for file system related errors."""
    pass


class OrganizeError(FileManagerError):
    """Exception for errors while moving files into category folders."""
    pass


class ConfigurationError(FileManagerError):
    """Exception for configuration related errors."""
    pass


class AccessDeniedError(FileSystemError):
    """Exception for file permission errors."""
    pass


class PathNotFoundError(FileSystemError):
    """Exception for path not found errors."""
    pass


class NotADirectoryPathError(FileSystemError):
    """Exception raised when a directory was expected but something else was found."""
    pass


class DestinationExistsError(FileSystemError):
    """Exception raised when a move target is already occupied."""

    def __init__(self, destination):
        super().__init__(f"File already exists: {destination}")
        self.destination = destination
