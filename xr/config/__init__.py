"""Configuration management."""

from xr.config.manager import Config

__all__ = ["Config"]
