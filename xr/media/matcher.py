"""Duration-based matching of video files against catalog extras."""

import logging
import threading
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from xr.catalog.base import CatalogEntry
from xr.media.cache import DurationCache
from xr.media.scanner import MediaScanner, VideoFile
from xr.parsers.duration import parse_duration
from xr.utils.errors import DirectoryNotFoundError, FileSystemError, MatchCancelled

logger = logging.getLogger(__name__)

# Progress sink signature: (message, total file count, files processed so far)
ProgressCallback = Callable[[str, int, int], None]


class CancelToken:
    """Cooperative cancellation handle shared between a caller and a run."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        """Request cancellation."""
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """Raise MatchCancelled if cancellation has been requested."""
        if self._event.is_set():
            raise MatchCancelled("Matching was cancelled")


@dataclass(frozen=True)
class ProgressEvent:
    """A single progress line emitted during a matching run."""

    message: str
    total: int
    processed: int


@dataclass
class ProgressLog:
    """Progress sink that records every event in emission order."""

    events: List[ProgressEvent] = field(default_factory=list)

    def __call__(self, message: str, total: int, processed: int) -> None:
        self.events.append(ProgressEvent(message, total, processed))

    @property
    def messages(self) -> List[str]:
        return [event.message for event in self.events]


@dataclass
class MatchRecord:
    """A video file together with every extra whose duration it matches.

    ``candidate_titles`` follows catalog order. The representative values
    (``extra_duration_text`` and ``duration_difference``) always describe
    the first candidate, not the closest one.
    """

    video_file: str
    candidate_titles: List[str]
    video_duration: float  # seconds
    extra_duration_text: str
    duration_difference: float  # absolute difference in seconds
    full_path: str = ""

    @property
    def extra_title(self) -> str:
        """Title of the first (representative) candidate."""
        return self.candidate_titles[0] if self.candidate_titles else ""

    @property
    def has_collision(self) -> bool:
        """True when several extras share this file's duration."""
        return len(self.candidate_titles) > 1

    def __str__(self) -> str:
        if len(self.candidate_titles) == 1:
            title = self.candidate_titles[0]
        else:
            title = f"[{len(self.candidate_titles)} options]"
        return (
            f"✓ {self.video_file} → {title} "
            f"(video: {self.video_duration:.1f}s, extra: {self.extra_duration_text}, "
            f"diff: {self.duration_difference:.2f}s)"
        )


class MatchEngine:
    """Match the videos in a directory to catalog extras by duration.

    The engine owns a DurationCache, so re-running over the same directory
    only re-reads files it has not seen before. Catalog comparisons are
    always re-run. One run at a time per engine instance.
    """

    DEFAULT_TOLERANCE = 1.0  # seconds, inclusive on both sides

    def __init__(
        self,
        cache: Optional[DurationCache] = None,
        tolerance: float = DEFAULT_TOLERANCE,
        scanner: Optional[MediaScanner] = None,
    ):
        """Initialize match engine.

        Args:
            cache: Duration cache (a pymediainfo-backed one is created if omitted)
            tolerance: Absolute tolerance in seconds
            scanner: Directory scanner
        """
        self.cache = cache if cache is not None else DurationCache()
        self.tolerance = tolerance
        self.scanner = scanner or MediaScanner()

    def match_directory(
        self,
        directory: Union[str, Path],
        catalog: Sequence[CatalogEntry],
        progress: Optional[ProgressCallback] = None,
        cancel_token: Optional[CancelToken] = None,
    ) -> List[MatchRecord]:
        """Match every video file in a directory against the catalog.

        Args:
            directory: Directory to scan (non-recursive)
            catalog: Extras in catalog order
            progress: Sink for human-readable progress lines
            cancel_token: Polled before each file and each catalog comparison

        Returns:
            List[MatchRecord]: One record per matched file, in enumeration order.
                Empty if the directory does not exist.

        Raises:
            MatchCancelled: If the run was cancelled; no partial result is returned
            FileSystemError: If the directory exists but cannot be listed
        """
        emit = progress or _discard_progress

        try:
            video_files = self.scanner.scan_directory(directory)
        except DirectoryNotFoundError:
            logger.info(f"Directory does not exist: {directory}")
            emit("❌ Directory does not exist.", 0, 0)
            return []
        except FileSystemError as e:
            emit(f"❌ Cannot read directory: {e}", 0, 0)
            raise

        total = len(video_files)
        emit(f"🔍 Scanning directory for {total} video file(s)...", total, 0)
        logger.info(f"Starting metadata extraction - {total} files")

        start = time.monotonic()
        matches: List[MatchRecord] = []

        for processed, video_file in enumerate(video_files, start=1):
            _check_cancelled(cancel_token)

            was_cached = self.cache.contains(video_file.full_path)
            duration = self.cache.get_duration(video_file.full_path, cancel_token)
            prefix = f"⏳ [{processed}/{total}] {video_file.name}"

            if duration is None:
                emit(f"{prefix} - ⚠️  Could not read duration, skipping", total, processed)
                continue

            cached_note = " (cached)" if was_cached else ""
            prefix = f"{prefix} - Duration: {duration:.1f}s{cached_note}"

            record = self.match_file(video_file, duration, catalog, cancel_token)

            if record is None:
                emit(f"{prefix} - No matches found", total, processed)
                continue

            matches.append(record)
            titles = ", ".join(record.candidate_titles)
            message = f"{prefix}\n    ✅ MATCH: {titles} (diff: {record.duration_difference:.2f}s)"
            if record.has_collision:
                message += (
                    f" ⚠️ COLLISION: {len(record.candidate_titles)} extras share this "
                    "duration - pick one before renaming"
                )
            emit(message, total, processed)

        elapsed = time.monotonic() - start
        emit(
            f"{'=' * 50}\n✅ Complete! Found {len(matches)} match(es) in {elapsed:.2f}s.",
            total,
            total,
        )
        logger.info(
            f"Metadata extraction complete - {total} files processed in {elapsed:.2f}s "
            f"(cache hits: {self.cache.hits}, reads: {self.cache.misses})"
        )

        return matches

    def match_file(
        self,
        video_file: VideoFile,
        duration: float,
        catalog: Sequence[CatalogEntry],
        cancel_token: Optional[CancelToken] = None,
    ) -> Optional[MatchRecord]:
        """Compare one file's duration against the whole catalog.

        Args:
            video_file: File being matched
            duration: Its duration in seconds
            catalog: Extras in catalog order
            cancel_token: Polled once per catalog entry

        Returns:
            MatchRecord | None: Record listing every qualifying extra, or None
        """
        candidates = self.find_candidates(duration, catalog, cancel_token)
        if not candidates:
            return None

        first_entry, first_diff = candidates[0]
        return MatchRecord(
            video_file=video_file.name,
            candidate_titles=[entry.title for entry, _ in candidates],
            video_duration=duration,
            extra_duration_text=first_entry.duration_text,
            duration_difference=first_diff,
            full_path=video_file.full_path,
        )

    def find_candidates(
        self,
        duration: float,
        catalog: Sequence[CatalogEntry],
        cancel_token: Optional[CancelToken] = None,
    ) -> List[Tuple[CatalogEntry, float]]:
        """Return ``(entry, difference)`` for every extra within tolerance.

        Entries whose duration text does not parse are ignored.
        """
        candidates: List[Tuple[CatalogEntry, float]] = []

        for entry in catalog:
            _check_cancelled(cancel_token)

            extra_seconds = parse_duration(entry.duration_text)
            if extra_seconds is None:
                continue

            diff = abs(duration - extra_seconds)
            if diff <= self.tolerance:
                candidates.append((entry, diff))

        return candidates


def _check_cancelled(cancel_token: Optional[CancelToken]) -> None:
    if cancel_token is not None:
        cancel_token.raise_if_cancelled()


def _discard_progress(message: str, total: int, processed: int) -> None:
    pass
