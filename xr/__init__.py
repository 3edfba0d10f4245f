"""xr - match and rename DVD extras by playback duration."""

__version__ = "0.1.0"
