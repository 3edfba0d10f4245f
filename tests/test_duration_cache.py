"""Tests for the in-memory duration cache."""

import pytest

from xr.media.cache import DurationCache
from xr.media.matcher import CancelToken
from xr.utils.errors import MatchCancelled


class TestDurationCache:
    """Test DurationCache behaviour."""

    def test_first_read_uses_oracle(self, make_oracle, tmp_path):
        """Test that the first request reads through the oracle."""
        oracle = make_oracle({"clip.mp4": 326.4})
        cache = DurationCache(oracle)

        assert cache.get_duration(tmp_path / "clip.mp4") == 326.4
        assert len(oracle.calls) == 1
        assert cache.misses == 1

    def test_second_read_is_cached(self, make_oracle, tmp_path):
        """Test that repeated requests do not hit the oracle again."""
        oracle = make_oracle({"clip.mp4": 326.4})
        cache = DurationCache(oracle)

        cache.get_duration(tmp_path / "clip.mp4")
        assert cache.get_duration(str(tmp_path / "clip.mp4")) == 326.4

        assert len(oracle.calls) == 1
        assert cache.hits == 1

    def test_failed_read_is_cached(self, make_oracle, tmp_path):
        """Test that unreadable results are remembered too."""
        oracle = make_oracle({"broken.mkv": None})
        cache = DurationCache(oracle)

        assert cache.get_duration(tmp_path / "broken.mkv") is None
        assert cache.contains(tmp_path / "broken.mkv")
        assert cache.get_duration(tmp_path / "broken.mkv") is None
        assert len(oracle.calls) == 1

    def test_keyed_by_absolute_path(self, make_oracle, tmp_path, monkeypatch):
        """Test that relative and absolute spellings share an entry."""
        monkeypatch.chdir(tmp_path)
        oracle = make_oracle({"clip.mp4": 10.0})
        cache = DurationCache(oracle)

        cache.get_duration("clip.mp4")
        cache.get_duration(tmp_path / "clip.mp4")

        assert len(oracle.calls) == 1

    def test_cancel_checked_before_read(self, make_oracle, tmp_path):
        """Test that a cancelled token stops the read from starting."""
        oracle = make_oracle({"clip.mp4": 10.0})
        cache = DurationCache(oracle)
        token = CancelToken()
        token.cancel()

        with pytest.raises(MatchCancelled):
            cache.get_duration(tmp_path / "clip.mp4", token)

        assert oracle.calls == []
        assert len(cache) == 0

    def test_cached_value_ignores_cancel(self, make_oracle, tmp_path):
        """Test that a cache hit needs no read and so is not cancelled."""
        oracle = make_oracle({"clip.mp4": 10.0})
        cache = DurationCache(oracle)
        cache.get_duration(tmp_path / "clip.mp4")
        token = CancelToken()
        token.cancel()

        assert cache.get_duration(tmp_path / "clip.mp4", token) == 10.0

    def test_clear(self, make_oracle, tmp_path):
        """Test clearing the cache forces a new read."""
        oracle = make_oracle({"clip.mp4": 10.0})
        cache = DurationCache(oracle)
        cache.get_duration(tmp_path / "clip.mp4")

        cache.clear()
        cache.get_duration(tmp_path / "clip.mp4")

        assert len(oracle.calls) == 2
        assert len(cache) == 1

    def test_default_oracle(self):
        """Test that pymediainfo extraction is the default oracle."""
        from xr.media.metadata import MediaMetadataExtractor

        assert isinstance(DurationCache().oracle, MediaMetadataExtractor)
