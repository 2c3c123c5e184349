"""Configuration management for the Smart File Manager."""

import logging
from pathlib import Path
from typing import Optional
from dataclasses import dataclass, field, asdict
import configparser
import json


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "INFO"
    format: str = "[%(asctime)s] %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"
    file_enabled: bool = True
    file_path: Optional[Path] = None
    console_enabled: bool = False
    console_format: str = "%(levelname)s - %(message)s"

    def __post_init__(self):
        if self.file_path is None:
            self.file_path = Path("file_manager.log")


@dataclass
class OrganizeConfig:
    """Settings for the organize command."""
    confirm: bool = True
    dry_run: bool = False


@dataclass
class AppConfig:
    """Main application configuration."""
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    organize: OrganizeConfig = field(default_factory=OrganizeConfig)
    default_directory: Optional[Path] = None

    # Application metadata
    app_name: str = "Smart File Manager"
    version: str = "1.0.0"

    def resolve_directory(self, directory: Optional[Path] = None) -> Path:
        """Pick the directory to work on: explicit argument, configured default, then cwd."""
        if directory is not None:
            return Path(directory)
        if self.default_directory is not None:
            return Path(self.default_directory)
        return Path.cwd()


def default_config_file() -> Path:
    return Path.home() / ".smart_file_manager" / "config.ini"


class ConfigManager:
    """Manages application configuration stored in an INI file."""

    def __init__(self, config_file: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Path to configuration file. If None, uses default location.
        """
        if config_file is None:
            config_file = default_config_file()

        self.config_file = Path(config_file)
        self.config = AppConfig()
        self.logger = logging.getLogger(__name__)

        if self.config_file.exists():
            self.load_from_file()

    def load_from_file(self) -> None:
        """Load configuration from INI file. Invalid values leave the defaults in place."""
        try:
            parser = configparser.ConfigParser(interpolation=None)
            parser.read(self.config_file)

            if 'general' in parser:
                general = parser['general']
                directory = general.get('default_directory')
                if directory and directory != 'None':
                    self.config.default_directory = Path(directory)

            if 'organize' in parser:
                org_section = parser['organize']
                if 'confirm' in org_section:
                    self.config.organize.confirm = org_section.getboolean('confirm')
                if 'dry_run' in org_section:
                    self.config.organize.dry_run = org_section.getboolean('dry_run')

            if 'logging' in parser:
                log_section = parser['logging']
                if 'level' in log_section:
                    self.config.logging.level = log_section.get('level')
                if 'format' in log_section:
                    self.config.logging.format = log_section.get('format')
                if 'date_format' in log_section:
                    self.config.logging.date_format = log_section.get('date_format')
                if 'file_enabled' in log_section:
                    self.config.logging.file_enabled = log_section.getboolean('file_enabled')
                if 'file_path' in log_section:
                    self.config.logging.file_path = Path(log_section.get('file_path'))
                if 'console_enabled' in log_section:
                    self.config.logging.console_enabled = log_section.getboolean('console_enabled')
                if 'console_format' in log_section:
                    self.config.logging.console_format = log_section.get('console_format')

            self.logger.info(f"Configuration loaded from {self.config_file}")

        except (configparser.Error, ValueError) as e:
            self.logger.error(f"Error loading configuration from {self.config_file}: {e}")

    def save_to_file(self) -> None:
        """Save current configuration to INI file."""
        try:
            self.config_file.parent.mkdir(parents=True, exist_ok=True)

            parser = configparser.ConfigParser(interpolation=None)

            parser['general'] = {
                'default_directory': str(self.config.default_directory),
            }

            parser['organize'] = {
                'confirm': str(self.config.organize.confirm),
                'dry_run': str(self.config.organize.dry_run),
            }

            parser['logging'] = {
                'level': self.config.logging.level,
                'format': self.config.logging.format,
                'date_format': self.config.logging.date_format,
                'file_enabled': str(self.config.logging.file_enabled),
                'file_path': str(self.config.logging.file_path),
                'console_enabled': str(self.config.logging.console_enabled),
                'console_format': self.config.logging.console_format,
            }

            with open(self.config_file, 'w') as f:
                parser.write(f)

            self.logger.info(f"Configuration saved to {self.config_file}")

        except OSError as e:
            self.logger.error(f"Error saving configuration to {self.config_file}: {e}")

    def get_config(self) -> AppConfig:
        """Get the current configuration."""
        return self.config

    def reset_to_defaults(self) -> None:
        """Reset configuration to default values."""
        self.config = AppConfig()
        self.save_to_file()
        self.logger.info("Configuration reset to defaults")

    def export_to_json(self, file_path: Path) -> None:
        """
        Export configuration to JSON format.

        Args:
            file_path: Path to save JSON file
        """
        config_dict = asdict(self.config)
        config_dict['default_directory'] = (
            str(self.config.default_directory) if self.config.default_directory else None
        )
        config_dict['logging']['file_path'] = str(self.config.logging.file_path)

        with open(file_path, 'w') as f:
            json.dump(config_dict, f, indent=2)

        self.logger.info(f"Configuration exported to {file_path}")


# Global configuration instance
_config_manager = None


def get_config() -> AppConfig:
    """Get the global application configuration."""
    return get_config_manager().get_config()


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def setup_config(config_file: Optional[Path] = None) -> ConfigManager:
    """
    Set up global configuration.

    Args:
        config_file: Optional path to configuration file

    Returns:
        ConfigManager instance
    """
    global _config_manager
    _config_manager = ConfigManager(config_file)
    return _config_manager
