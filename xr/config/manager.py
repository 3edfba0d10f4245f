"""Configuration management with hierarchical loading.

Supports hierarchical configuration loading:
1. Local .xr.conf in current directory
2. User config in platform-specific config directory
3. Built-in defaults if neither exists
"""

import configparser
from pathlib import Path
from typing import Any, Dict, List, Optional

from xr.utils.errors import ConfigError
from xr.utils.platform import get_user_config_dir

LOCAL_CONFIG_NAME = ".xr.conf"
USER_CONFIG_NAME = "config"

DEFAULTS: Dict[str, Dict[str, str]] = {
    "matching": {
        "tolerance": "1.0",
    },
    "catalog": {
        "cache_enabled": "true",
        "cache_ttl_days": "7",
        "timeout": "30",
    },
    "logging": {
        "level": "WARNING",
    },
}


class Config:
    """
    Configuration manager with hierarchical loading.

    Loads configuration from the first file found of:
    1. Local .xr.conf in current directory
    2. User config directory (platform-specific)

    Values missing from the file fall back to built-in defaults, and running
    without any file at all is allowed.
    """

    def __init__(self, local_path: Optional[Path] = None, user_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            local_path: Path to local config file (default: ./.xr.conf)
            user_path: Path to user config file (default: platform-specific)
        """
        self._parser = configparser.ConfigParser()
        self._parser.read_dict(DEFAULTS)
        self._local_path = local_path or Path.cwd() / LOCAL_CONFIG_NAME
        self._user_path = user_path or get_user_config_dir() / USER_CONFIG_NAME
        self._active_config_path: Optional[Path] = None

        self._load()

    def _load(self) -> None:
        """
        Load configuration from hierarchical sources.

        Raises:
            ConfigError: If a config file exists but cannot be parsed
        """
        for path in (self._local_path, self._user_path):
            if not path.exists():
                continue

            try:
                self._parser.read(path)
            except configparser.Error as e:
                raise ConfigError(f"Invalid configuration file {path}: {e}") from e

            self._active_config_path = path
            return

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Args:
            section: Configuration section
            key: Configuration key
            fallback: Fallback value if not found

        Returns:
            str | None: Configuration value or fallback
        """
        return self._parser.get(section, key, fallback=fallback)

    def get_bool(self, section: str, key: str, fallback: bool = False) -> bool:
        """Get a boolean configuration value.

        Raises:
            ConfigError: If the stored value is not a boolean
        """
        try:
            return self._parser.getboolean(section, key, fallback=fallback)
        except ValueError as e:
            raise ConfigError(f"{section}.{key} must be true or false: {e}") from e

    def get_int(self, section: str, key: str, fallback: int = 0) -> int:
        """Get an integer configuration value.

        Raises:
            ConfigError: If the stored value is not an integer
        """
        try:
            return self._parser.getint(section, key, fallback=fallback)
        except ValueError as e:
            raise ConfigError(f"{section}.{key} must be an integer: {e}") from e

    def get_float(self, section: str, key: str, fallback: float = 0.0) -> float:
        """Get a float configuration value.

        Raises:
            ConfigError: If the stored value is not a number
        """
        try:
            return self._parser.getfloat(section, key, fallback=fallback)
        except ValueError as e:
            raise ConfigError(f"{section}.{key} must be a number: {e}") from e

    @property
    def tolerance(self) -> float:
        """Matching tolerance in seconds."""
        value = self.get_float("matching", "tolerance", fallback=1.0)
        if value < 0:
            raise ConfigError("matching.tolerance cannot be negative")
        return value

    def set(self, section: str, key: str, value: Any) -> None:
        """
        Set a configuration value (does not save).

        Args:
            section: Configuration section
            key: Configuration key
            value: Value to set
        """
        if not self._parser.has_section(section):
            self._parser.add_section(section)

        self._parser.set(section, key, str(value))

    def save(self, target: Optional[str] = None) -> None:
        """
        Save configuration to file.

        Args:
            target: Target location ('local' or 'user'). If None, saves to the
                active config, or the user config when no file was loaded.

        Raises:
            ConfigError: If target is invalid or the file cannot be written
        """
        if target == "local":
            save_path = self._local_path
        elif target == "user":
            save_path = self._user_path
        elif target is None:
            save_path = self._active_config_path or self._user_path
        else:
            raise ConfigError(f"Invalid target '{target}'. Use 'local' or 'user'")

        save_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(save_path, "w") as f:
                self._parser.write(f)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {save_path}: {e}")

        self._active_config_path = save_path

    def get_sections(self) -> List[str]:
        """
        Get all configuration sections.

        Returns:
            List[str]: List of section names
        """
        return self._parser.sections()

    def get_all(self, section: str) -> Dict[str, str]:
        """
        Get all key-value pairs in a section.

        Args:
            section: Configuration section

        Returns:
            Dict[str, str]: Dictionary of all keys and values in section
        """
        if not self._parser.has_section(section):
            return {}

        return dict(self._parser.items(section))

    @property
    def config_path(self) -> Optional[Path]:
        """
        Get the active configuration file path.

        Returns:
            Path | None: Path to active config file
        """
        return self._active_config_path

    def __repr__(self) -> str:
        """String representation showing active config path."""
        return f"Config(active={self._active_config_path})"
