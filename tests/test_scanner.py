"""Tests for the video file scanner."""

import pytest

from xr.media.scanner import MediaScanner, VideoFile
from xr.utils.errors import DirectoryNotFoundError


class TestScanDirectory:
    """Test directory scanning."""

    @pytest.fixture
    def scanner(self):
        """Create a scanner for testing."""
        return MediaScanner()

    def test_finds_allow_listed_extensions(self, scanner, tmp_path):
        """Test that every allow-listed extension is picked up."""
        for ext in ("mp4", "mkv", "avi", "mov", "flv", "wmv", "webm"):
            (tmp_path / f"video.{ext}").touch()
        (tmp_path / "readme.txt").touch()
        (tmp_path / "poster.jpg").touch()
        (tmp_path / "movie.srt").touch()

        result = scanner.scan_directory(tmp_path)

        assert len(result) == 7
        assert {f.extension for f in result} == MediaScanner.VIDEO_EXTENSIONS

    def test_extension_case_insensitive(self, scanner, tmp_path):
        """Test upper-case extensions are matched and normalised."""
        (tmp_path / "CLIP.MKV").touch()

        result = scanner.scan_directory(tmp_path)

        assert len(result) == 1
        assert result[0].name == "CLIP.MKV"
        assert result[0].extension == ".mkv"

    def test_not_recursive(self, scanner, tmp_path):
        """Test that subdirectories are not scanned."""
        (tmp_path / "top.mp4").touch()
        nested = tmp_path / "Disc 2"
        nested.mkdir()
        (nested / "nested.mp4").touch()

        result = scanner.scan_directory(tmp_path)

        assert [f.name for f in result] == ["top.mp4"]

    def test_directory_named_like_video_skipped(self, scanner, tmp_path):
        """Test that a directory with a video extension is not a video file."""
        (tmp_path / "folder.mkv").mkdir()

        assert scanner.scan_directory(tmp_path) == []

    def test_full_path_is_absolute(self, scanner, tmp_path):
        """Test VideoFile carries an absolute path."""
        (tmp_path / "clip.mp4").touch()

        video = scanner.scan_directory(tmp_path)[0]

        assert isinstance(video, VideoFile)
        assert video.full_path == str((tmp_path / "clip.mp4").absolute())

    def test_empty_directory(self, scanner, tmp_path):
        """Test scanning an empty directory."""
        assert scanner.scan_directory(tmp_path) == []

    def test_missing_directory_raises(self, scanner, tmp_path):
        """Test that a missing directory raises DirectoryNotFoundError."""
        with pytest.raises(DirectoryNotFoundError):
            scanner.scan_directory(tmp_path / "missing")

    def test_file_path_raises(self, scanner, tmp_path):
        """Test that a file path is treated as a missing directory."""
        video = tmp_path / "clip.mp4"
        video.touch()

        with pytest.raises(DirectoryNotFoundError):
            scanner.scan_directory(video)
