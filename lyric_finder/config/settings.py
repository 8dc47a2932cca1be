"""
Configuration management for Lyric-Finder

This module handles loading, validation, and management of application settings
from multiple sources including YAML files and environment variables. It provides
a centralized configuration system that supports reloading and validation.

The configuration is organized into logical sections using dataclasses:
- Server settings (bind address, port)
- Lyrics provider settings (endpoints, timeouts, credentials)
- Logging options (level, file output, rotation)

Sensitive data (the Genius API key) should be loaded from environment variables
or a .env file, while non-sensitive settings can be stored in YAML files.
"""

import os
import yaml
from pathlib import Path
from typing import Dict, Any, List, Optional
from dataclasses import dataclass, asdict
from dotenv import load_dotenv

from ..exceptions import ConfigError

# Load environment variables from .env file if present
load_dotenv()


VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


@dataclass
class ServerConfig:
    """
    Web server configuration

    Controls where the aiohttp application listens. The port can be overridden
    with the PORT environment variable, which is how container platforms
    usually inject it.
    """
    host: str = "0.0.0.0"
    port: int = 3000
    app_name: str = "Lyric-Finder"


@dataclass
class LyricsConfig:
    """
    Lyrics provider configuration

    Settings for the primary lookup provider (LRCLIB) and the secondary
    search-based provider (Genius). The Genius API key is required for the
    secondary provider; without it the chain simply skips to "not found"
    after the primary provider is exhausted.
    """
    lrclib_base_url: str = "https://lrclib.net/api"
    timeout: int = 15
    user_agent: str = "Lyric-Finder/1.0 (https://github.com/lyric-finder/lyric-finder)"
    genius_api_key: str = ""
    genius_per_page: int = 10
    log_candidates: int = 5


@dataclass
class LoggingConfig:
    """
    Logging configuration and output settings

    Controls log level, optional file output with rotation, and console
    formatting. File output is written through a background listener so
    request handling never waits on disk I/O.
    """
    level: str = "INFO"
    file: str = "lyric-finder.log"
    max_size: str = "10MB"
    backup_count: int = 3
    console_output: bool = True
    colored_output: bool = True


class Settings:
    """
    Main settings class that manages all configuration

    This class serves as the central configuration manager, loading settings
    from multiple sources (YAML files, environment variables) and providing
    a unified interface for accessing configuration throughout the application.

    Precedence (highest first):
    1. Environment variables
    2. YAML configuration file
    3. Dataclass defaults
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize settings from config file and environment variables

        Args:
            config_path: Path to custom config file, if None uses default locations
        """
        self.config_path = config_path
        self.config_dir = Path.home() / ".lyric-finder"
        self.loaded_from: Optional[Path] = None

        # Initialize all configuration objects with default values
        self.server = ServerConfig()
        self.lyrics = LyricsConfig()
        self.logging = LoggingConfig()

        # Load configuration from various sources in order of precedence
        self._load_config()
        self._load_environment_variables()

    def _load_config(self) -> None:
        """
        Load configuration from YAML file

        Searches for configuration files in multiple locations in order of
        precedence. The first existing file is used.

        Raises:
            ConfigError: If a config file exists but cannot be parsed
        """
        config_paths = [
            self.config_path,
            self.config_dir / "config.yaml",
            Path("config/config.yaml"),
            Path("config.yaml")
        ]

        config_data = {}
        for path in config_paths:
            if path and Path(path).exists():
                try:
                    with open(path, 'r', encoding='utf-8') as f:
                        config_data = yaml.safe_load(f) or {}
                except (OSError, yaml.YAMLError) as e:
                    raise ConfigError(
                        f"Failed to load config from {path}: {e}",
                        details={'file_path': str(path)}
                    )
                self.loaded_from = Path(path)
                break

        if not isinstance(config_data, dict):
            raise ConfigError(
                f"Config file {self.loaded_from} must contain a mapping",
                details={'file_path': str(self.loaded_from)}
            )

        self._apply_config(config_data)

    def _apply_config(self, config_data: Dict[str, Any]) -> None:
        """
        Apply configuration data to dataclass instances

        Only attributes that exist in both the config file and the dataclass
        definition are updated; unknown keys are ignored.

        Args:
            config_data: Dictionary containing configuration sections
        """
        config_mapping = {
            'server': self.server,
            'lyrics': self.lyrics,
            'logging': self.logging,
        }

        for section_name, section_data in config_data.items():
            if section_name in config_mapping and isinstance(section_data, dict):
                config_obj = config_mapping[section_name]
                for key, value in section_data.items():
                    if hasattr(config_obj, key):
                        setattr(config_obj, key, value)

    def _load_environment_variables(self) -> None:
        """
        Load configuration overrides from environment variables

        Environment variables take precedence over file-based configuration.
        This allows deployment without storing credentials in files.
        """
        env_mappings = {
            'HOST': lambda v: setattr(self.server, 'host', v),
            'PORT': lambda v: setattr(self.server, 'port', int(v)),
            'GENIUS_API_KEY': lambda v: setattr(self.lyrics, 'genius_api_key', v),
            'LRCLIB_BASE_URL': lambda v: setattr(self.lyrics, 'lrclib_base_url', v),
            'LOG_LEVEL': lambda v: setattr(self.logging, 'level', v),
            'LOG_FILE': lambda v: setattr(self.logging, 'file', v),
        }

        for env_var, setter in env_mappings.items():
            value = os.getenv(env_var)
            if value:
                try:
                    setter(value)
                except ValueError as e:
                    raise ConfigError(
                        f"Invalid value for {env_var}: {value!r}",
                        details={'original_error': str(e)}
                    )

    def get_log_file_path(self) -> Optional[Path]:
        """
        Get the resolved log file path

        Relative paths are resolved against the current working directory,
        which matches where the server is started from.

        Returns:
            Path to the log file, or None when file logging is disabled
        """
        if not self.logging.file:
            return None
        return Path(self.logging.file).expanduser()

    def validate(self) -> List[str]:
        """
        Validate current configuration

        Returns:
            List of human-readable problems; empty when the configuration is valid
        """
        errors = []

        if not isinstance(self.server.port, int) or not 1 <= self.server.port <= 65535:
            errors.append(f"server.port must be between 1 and 65535, got {self.server.port!r}")

        if str(self.logging.level).upper() not in VALID_LOG_LEVELS:
            errors.append(f"Invalid logging level: {self.logging.level}")

        if not str(self.lyrics.lrclib_base_url).startswith(('http://', 'https://')):
            errors.append(f"Invalid LRCLIB base URL: {self.lyrics.lrclib_base_url}")

        if self.lyrics.timeout <= 0:
            errors.append(f"lyrics.timeout must be positive, got {self.lyrics.timeout}")

        if self.lyrics.genius_per_page < 1:
            errors.append("lyrics.genius_per_page must be at least 1")

        return errors

    def require_valid(self) -> None:
        """
        Raise if the configuration is invalid

        Raises:
            ConfigError: With every validation problem listed in details
        """
        errors = self.validate()
        if errors:
            raise ConfigError(
                "Invalid configuration: " + "; ".join(errors),
                details={'errors': errors}
            )

    def to_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        """
        Convert settings to a plain dictionary

        Args:
            mask_secrets: Replace API keys with a placeholder

        Returns:
            Dictionary keyed by section name
        """
        data = {
            'server': asdict(self.server),
            'lyrics': asdict(self.lyrics),
            'logging': asdict(self.logging),
        }
        if mask_secrets and data['lyrics']['genius_api_key']:
            data['lyrics']['genius_api_key'] = "********"
        return data

    def __str__(self) -> str:
        """
        String representation of settings

        Returns:
            Short summary of key configuration values
        """
        sections = [
            f"Server: {self.server.host}:{self.server.port}",
            f"LRCLIB: {self.lyrics.lrclib_base_url}",
            f"Genius: {'configured' if self.lyrics.genius_api_key else 'not configured'}",
            f"Log level: {self.logging.level}",
        ]
        return f"Settings({', '.join(sections)})"


# Global settings instance, created on first access
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the global settings instance

    Provides access to the singleton settings instance that is shared
    throughout the application.

    Returns:
        The global Settings instance
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings(config_path: Optional[str] = None) -> Settings:
    """
    Reload settings from configuration files

    Creates a new settings instance with updated configuration from files
    and environment variables.

    Args:
        config_path: Optional path to specific config file

    Returns:
        New Settings instance with reloaded configuration
    """
    global _settings
    _settings = Settings(config_path)
    return _settings
