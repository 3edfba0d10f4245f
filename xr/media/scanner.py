"""Video file detection for a single directory."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

from xr.utils.errors import DirectoryNotFoundError, FileSystemError


@dataclass(frozen=True)
class VideoFile:
    """Represents a detected video file."""

    name: str
    full_path: str
    extension: str  # lower-case, with leading dot


class MediaScanner:
    """Scanner for video files directly inside a directory.

    The scan is not recursive: extras ripped from one disc live side by side
    in a single folder.
    """

    VIDEO_EXTENSIONS = {".mp4", ".mkv", ".avi", ".mov", ".flv", ".wmv", ".webm"}

    def scan_directory(self, path: Union[str, Path]) -> List[VideoFile]:
        """Scan a directory for video files.

        Args:
            path: Directory path to scan

        Returns:
            List[VideoFile]: Video files in filesystem enumeration order

        Raises:
            DirectoryNotFoundError: If the directory does not exist
            FileSystemError: If the directory exists but cannot be listed
        """
        directory = Path(path)
        if not directory.is_dir():
            raise DirectoryNotFoundError(f"Directory does not exist: {directory}")

        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise FileSystemError(f"Cannot list directory {directory}: {e}") from e

        video_files: List[VideoFile] = []
        for entry in entries:
            video_file = self._check_video_file(entry)
            if video_file:
                video_files.append(video_file)

        return video_files

    def is_video_file(self, path: Path) -> bool:
        """Check whether a path has an allow-listed video extension."""
        return path.suffix.lower() in self.VIDEO_EXTENSIONS

    def _check_video_file(self, path: Path) -> Optional[VideoFile]:
        """Build a VideoFile for a regular file with a video extension."""
        if not self.is_video_file(path):
            return None

        try:
            if not path.is_file():
                return None
        except OSError:
            return None

        return VideoFile(
            name=path.name,
            full_path=str(path.absolute()),
            extension=path.suffix.lower(),
        )
