"""In-memory duration cache keyed by absolute file path."""

import logging
import time
from pathlib import Path
from typing import Dict, Optional, Union

from xr.media.metadata import DurationOracle, MediaMetadataExtractor

logger = logging.getLogger(__name__)


class DurationCache:
    """Memoize duration reads for the lifetime of one matching session.

    Failed reads are cached as None so a broken file is only probed once.
    Entries are never evicted and are not invalidated when a file changes
    on disk; build a new cache to force fresh reads.
    """

    def __init__(self, oracle: Optional[DurationOracle] = None):
        """Initialize duration cache.

        Args:
            oracle: Duration source (defaults to pymediainfo extraction)
        """
        self.oracle = oracle if oracle is not None else MediaMetadataExtractor()
        self._durations: Dict[str, Optional[float]] = {}
        self.hits = 0
        self.misses = 0

    @staticmethod
    def _key(path: Union[str, Path]) -> str:
        return str(Path(path).absolute())

    def contains(self, path: Union[str, Path]) -> bool:
        """Check whether a path has already been read."""
        return self._key(path) in self._durations

    def get_duration(self, path: Union[str, Path], cancel_token=None) -> Optional[float]:
        """Return the cached duration for a path, reading it on first use.

        Args:
            path: Media file path
            cancel_token: Checked before a read is started

        Returns:
            float | None: Duration in seconds, or None if unreadable

        Raises:
            MatchCancelled: If cancellation was requested before the read
        """
        key = self._key(path)

        if key in self._durations:
            self.hits += 1
            duration = self._durations[key]
            logger.debug(f"[CACHE] {Path(key).name} -> {_format_seconds(duration)}")
            return duration

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        start = time.monotonic()
        duration = self.oracle.get_duration(key)
        elapsed_ms = (time.monotonic() - start) * 1000

        self._durations[key] = duration
        self.misses += 1

        if duration is None:
            logger.debug(f"[FAIL] {Path(key).name} (could not read)")
        else:
            logger.debug(f"[READ] {Path(key).name} -> {duration:.1f}s ({elapsed_ms:.0f}ms)")

        return duration

    def clear(self) -> None:
        """Drop every cached entry."""
        self._durations.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._durations)


def _format_seconds(duration: Optional[float]) -> str:
    return "unreadable" if duration is None else f"{duration:.1f}s"
