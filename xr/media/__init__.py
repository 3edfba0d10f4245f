"""Video discovery, duration reading and duration matching."""

from xr.media.cache import DurationCache
from xr.media.matcher import (
    CancelToken,
    MatchEngine,
    MatchRecord,
    ProgressEvent,
    ProgressLog,
)
from xr.media.metadata import DurationOracle, MediaMetadataExtractor
from xr.media.renamer import rename_video_file, strip_extension
from xr.media.scanner import MediaScanner, VideoFile

__all__ = [
    "CancelToken",
    "DurationCache",
    "DurationOracle",
    "MatchEngine",
    "MatchRecord",
    "MediaMetadataExtractor",
    "MediaScanner",
    "ProgressEvent",
    "ProgressLog",
    "VideoFile",
    "rename_video_file",
    "strip_extension",
]
