"""Shared fixtures for xr tests."""

from pathlib import Path
from typing import Dict, List, Optional

import pytest

from xr.catalog.base import CatalogEntry


class FakeOracle:
    """Duration oracle backed by a filename -> seconds mapping."""

    def __init__(self, durations: Dict[str, Optional[float]]):
        self.durations = durations
        self.calls: List[str] = []

    def get_duration(self, file_path) -> Optional[float]:
        self.calls.append(str(file_path))
        return self.durations.get(Path(file_path).name)


@pytest.fixture
def make_oracle():
    """Factory for fake duration oracles."""
    return FakeOracle


@pytest.fixture
def extras_dir(tmp_path):
    """Directory with two ripped extras and some non-video clutter."""
    directory = tmp_path / "extras"
    directory.mkdir()
    (directory / "clip1.mp4").write_bytes(b"fake")
    (directory / "clip2.mkv").write_bytes(b"fake")
    (directory / "notes.txt").write_text("not a video")
    return directory


@pytest.fixture
def catalog():
    """Catalog with a collision on the first clip's duration."""
    return [
        CatalogEntry("Making Of", "5:26"),
        CatalogEntry("Alt Making Of", "5:27"),
        CatalogEntry("Storyboards", "0:59"),
    ]
