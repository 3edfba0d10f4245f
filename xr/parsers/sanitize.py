"""Title cleanup and filename sanitization utilities."""

import re
import unicodedata
from typing import Dict

from xr.utils.errors import ValidationError

# Reserved characters that cannot be used in filenames (Windows + Unix)
RESERVED_CHARS: Dict[str, str] = {
    "<": "",
    ">": "",
    ":": "",
    '"': "",
    "/": "",
    "\\": "",
    "|": "",
    "?": "",
    "*": "",
}

_RESERVED_CHARS_PATTERN = re.compile("|".join(re.escape(char) for char in RESERVED_CHARS.keys()))

# Straight, curly and angle quotes
_QUOTES_PATTERN = re.compile("[\"'‘’“”«»]")

_TRAILING_FEATURETTE = re.compile(r"\s+featurette\b", re.IGNORECASE)
_LEADING_FEATURETTE = re.compile(r"^featurette\s+", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

_LEADING_ARTICLES = ("the", "an", "a")


def normalize_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim."""
    return _WHITESPACE.sub(" ", text or "").strip()


def sanitize_filename(filename: str, replacement: str = "") -> str:
    """Sanitize a filename by removing/replacing reserved characters.

    Args:
        filename: The filename to sanitize
        replacement: String to replace reserved characters with (default: empty string)

    Returns:
        str: Sanitized filename

    Raises:
        ValidationError: If filename becomes empty after sanitization

    Examples:
        >>> sanitize_filename('Making Of: Part 1')
        'Making Of Part 1'
        >>> sanitize_filename('File<name>', '_')
        'File_name'
    """
    if not filename:
        raise ValidationError("Filename cannot be empty")

    sanitized = unicodedata.normalize("NFC", filename)
    sanitized = _RESERVED_CHARS_PATTERN.sub(replacement, sanitized)

    # Remove leading/trailing whitespace and dots
    sanitized = sanitized.strip().strip(".")

    if not sanitized:
        raise ValidationError(
            f"Filename '{filename}' becomes empty after sanitization. "
            "Please provide a filename with valid characters."
        )

    return sanitized


def clean_extra_title(title: str) -> str:
    """Clean an extra's title for display and use as a filename.

    Removes quote marks, the "featurette" descriptor and reserved filename
    characters, then collapses whitespace. Unlike ``sanitize_filename`` this
    never raises; an unusable title comes back as an empty string.

    Examples:
        >>> clean_extra_title('"Behind the Scenes" featurette')
        'Behind the Scenes'
        >>> clean_extra_title('Featurette “On Set”')
        'On Set'
    """
    if not title or not title.strip():
        return ""

    cleaned = _QUOTES_PATTERN.sub("", title)
    cleaned = _TRAILING_FEATURETTE.sub("", cleaned)
    cleaned = _LEADING_FEATURETTE.sub("", cleaned)
    cleaned = _RESERVED_CHARS_PATTERN.sub("", cleaned)

    return normalize_whitespace(cleaned)


def format_title_for_search(title: str) -> str:
    """Move a leading article to the end, the way the catalog indexes titles.

    Examples:
        >>> format_title_for_search("The Matrix")
        'Matrix (The)'
        >>> format_title_for_search("Alien")
        'Alien'
    """
    if not title or not title.strip():
        return title

    trimmed = title.strip()
    lower = trimmed.lower()

    for article in _LEADING_ARTICLES:
        prefix = f"{article} "
        if lower.startswith(prefix):
            rest = trimmed[len(prefix):].strip()
            return f"{rest} ({article.capitalize()})"

    return trimmed
