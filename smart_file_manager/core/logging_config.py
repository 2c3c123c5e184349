"""Logging configuration and utilities for the Smart File Manager."""

import logging
import sys
from pathlib import Path
from typing import Dict, Optional
from .config import LoggingConfig, get_config


PACKAGE_LOGGER = "smart_file_manager"


class ColoredFormatter(logging.Formatter):
    """Custom formatter that adds colors to console output."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Format log record with colors."""
        original = record.levelname
        if original in self.COLORS:
            record.levelname = f"{self.COLORS[original]}{original}{self.COLORS['RESET']}"
        try:
            return super().format(record)
        finally:
            record.levelname = original


class LoggingManager:
    """
    Owns the handlers of the package logger.

    Every module logger under ``smart_file_manager`` propagates here, so the
    activity log file receives scanner, organizer and searcher messages
    alike. The root logger is left untouched.
    """

    def __init__(self, config: Optional[LoggingConfig] = None):
        """
        Initialize logging manager.

        Args:
            config: Logging configuration. If None, uses global config.
        """
        self.config = config or get_config().logging
        self.handlers: Dict[str, logging.Handler] = {}
        self.logger = logging.getLogger(PACKAGE_LOGGER)
        self._setup_package_logger()

    def _setup_package_logger(self):
        self._clear_handlers()

        try:
            log_level = getattr(logging, self.config.level.upper())
            self.logger.setLevel(log_level)
        except AttributeError:
            self.logger.setLevel(logging.INFO)
            self.logger.warning(f"Invalid log level '{self.config.level}', using INFO")

        if self.config.console_enabled:
            self.add_handler('console', self._create_console_handler())

        if self.config.file_enabled and self.config.file_path:
            file_handler = self._create_file_handler()
            if file_handler:
                self.add_handler('file', file_handler)

    def _create_console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(ColoredFormatter(self.config.console_format))
        return handler

    def _create_file_handler(self) -> Optional[logging.Handler]:
        """Create the append-only activity log handler."""
        try:
            self.config.file_path.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(self.config.file_path, mode='a', encoding='utf-8')
        except OSError as e:
            print(f"ERROR: Failed to open log file {self.config.file_path}: {e}", file=sys.stderr)
            return None

        handler.setFormatter(logging.Formatter(self.config.format, datefmt=self.config.date_format))
        return handler

    def _clear_handlers(self):
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get a logger that writes through the package handlers.

        Args:
            name: Logger name; prefixed with the package name when needed

        Returns:
            Logger instance
        """
        if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
            name = f"{PACKAGE_LOGGER}.{name}"
        return logging.getLogger(name)

    @property
    def log_file_path(self) -> Optional[Path]:
        """Path of the activity log currently being written, if any."""
        handler = self.handlers.get('file')
        if handler is None:
            return None
        return Path(handler.baseFilename)

    def add_handler(self, name: str, handler: logging.Handler):
        """
        Add a handler to the package logger.

        Args:
            name: Handler name for reference
            handler: Handler instance to add
        """
        self.logger.addHandler(handler)
        self.handlers[name] = handler

    def session_started(self):
        self.logger.info("=== File Management System Started ===")

    def shutdown(self):
        """Write the closing marker and release the handlers."""
        self.logger.info("=== File Management System Stopped ===")
        self._clear_handlers()


# Global logging manager instance
_logging_manager = None


def setup_logging(config: Optional[LoggingConfig] = None) -> LoggingManager:
    """
    Set up global logging configuration.

    Args:
        config: Optional logging configuration

    Returns:
        LoggingManager instance
    """
    global _logging_manager
    if _logging_manager is not None:
        _logging_manager._clear_handlers()
    _logging_manager = LoggingManager(config)
    return _logging_manager


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance below the package logger.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()

    return _logging_manager.get_logger(name)
