"""Platform-specific helper functions."""

from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

APP_NAME = "xr"


def get_user_config_dir() -> Path:
    """
    Get the platform-specific user configuration directory.

    Returns:
        Path: User config directory
            - macOS: ~/Library/Application Support/xr
            - Linux: ~/.config/xr
            - Windows: %APPDATA%/xr
    """
    return Path(user_config_dir(APP_NAME, appauthor=False))


def get_user_cache_dir() -> Path:
    """Get the platform-specific user cache directory."""
    return Path(user_cache_dir(APP_NAME, appauthor=False))
