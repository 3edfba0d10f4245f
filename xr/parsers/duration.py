"""Parse catalog duration strings (MM:SS or HH:MM:SS) into seconds."""

import re
from typing import Optional, Tuple

# ASCII digits with an optional sign; int() alone also takes "1_0" and non-ASCII digits
_SEGMENT = re.compile(r"\s*[+-]?\d+\s*", re.ASCII)


def parse_duration(text: Optional[str]) -> Optional[float]:
    """Convert a catalog duration string to seconds.

    Only two forms are accepted: ``MM:SS`` and ``HH:MM:SS``. Every segment
    must be an integer. Magnitudes are not range-checked, so ``90:00`` is
    5400 seconds.

    Args:
        text: Duration string from the catalog

    Returns:
        float | None: Duration in seconds, or None if the text is malformed

    Examples:
        >>> parse_duration("5:26")
        326.0
        >>> parse_duration("1:02:03")
        3723.0
        >>> parse_duration("1:2:3:4") is None
        True
    """
    if not text:
        return None

    parts = text.split(":")
    if len(parts) not in (2, 3):
        return None

    if not all(_SEGMENT.fullmatch(part) for part in parts):
        return None

    values = [int(part) for part in parts]

    if len(values) == 2:
        minutes, seconds = values
        return float(minutes * 60 + seconds)

    hours, minutes, seconds = values
    return float(hours * 3600 + minutes * 60 + seconds)


def try_parse_duration(text: Optional[str]) -> Tuple[float, bool]:
    """Parse a duration string, returning ``(seconds, ok)``.

    ``seconds`` is 0.0 whenever ``ok`` is False.
    """
    seconds = parse_duration(text)
    if seconds is None:
        return 0.0, False
    return seconds, True
