"""Rename matched video files to their extra's title."""

import logging
import os
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def strip_extension(title: str) -> str:
    """Remove a trailing file extension from a chosen title.

    Examples:
        >>> strip_extension("Making Of.mkv")
        'Making Of'
        >>> strip_extension("Making Of")
        'Making Of'
    """
    return Path(title).stem if title else title


def build_target_path(full_path: Union[str, Path], new_title: str) -> Path:
    """Return the destination path for renaming a file to ``new_title``.

    The source file's extension is preserved.
    """
    source = Path(full_path)
    return source.with_name(f"{new_title}{source.suffix}")


def rename_video_file(full_path: Union[str, Path], new_title: str) -> bool:
    """Rename a video file in place, keeping its extension.

    Refuses to overwrite an existing file other than the source itself.

    Args:
        full_path: Path of the file to rename
        new_title: New base name, without extension

    Returns:
        bool: True if the file now has the new name
    """
    source = Path(full_path)

    try:
        target = build_target_path(source, new_title)

        if target.exists() and target.resolve() != source.resolve():
            logger.error(f"Error renaming file: '{target.name}' already exists")
            return False

        os.replace(source, target)
        logger.info(f"Renamed '{source.name}' to '{target.name}'")
        return True

    except (OSError, ValueError) as e:
        logger.error(f"Error renaming file: {e}")
        return False
