"""Playback duration extraction using pymediainfo."""

import logging
from pathlib import Path
from typing import Optional, Protocol, Union

from pymediainfo import MediaInfo as PyMediaInfo

logger = logging.getLogger(__name__)


class DurationOracle(Protocol):
    """Anything that can report a media file's duration in seconds."""

    def get_duration(self, file_path: Union[str, Path]) -> Optional[float]:
        """Return the duration in seconds, or None if it cannot be read."""
        ...


class MediaMetadataExtractor:
    """Read playback duration from media containers using pymediainfo."""

    def extract_duration(self, file_path: Path) -> Optional[float]:
        """Extract duration from a media file.

        The General track is preferred; the first Video track with a
        duration is used as a fallback.

        Args:
            file_path: Path to media file

        Returns:
            float | None: Duration in seconds, or None if extraction fails
        """
        if not file_path.is_file():
            return None

        try:
            media_info = PyMediaInfo.parse(str(file_path))

            duration = None
            for track in media_info.tracks:
                if track.track_type == "General" and track.duration:
                    duration = float(track.duration) / 1000.0  # ms -> seconds
                    break

            if duration is None:
                for track in media_info.tracks:
                    if track.track_type == "Video" and track.duration:
                        duration = float(track.duration) / 1000.0
                        break

            return duration

        except Exception as e:
            # Corrupt or unsupported containers are skipped, not fatal
            logger.debug(f"Error reading duration for {file_path}: {e}")
            return None

    def get_duration(self, file_path: Union[str, Path]) -> Optional[float]:
        """Get duration of a media file (convenience method).

        Args:
            file_path: Path to media file

        Returns:
            float | None: Duration in seconds, or None if extraction fails
        """
        return self.extract_duration(Path(file_path))
