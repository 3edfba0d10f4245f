"""Custom exception classes for xr."""


class XrError(Exception):
    """Base exception for all xr errors."""

    pass


class ConfigError(XrError):
    """Configuration-related errors."""

    pass


class ValidationError(XrError):
    """Input validation errors."""

    pass


class FileSystemError(XrError):
    """File system operation errors."""

    pass


class DirectoryNotFoundError(FileSystemError):
    """Raised when a directory to scan does not exist."""

    pass


class MatchCancelled(Exception):
    """Raised when a matching run is cancelled before it completes.

    Not an XrError: a cancelled run is an outcome, not a failure, and
    callers must not confuse it with a run that found nothing.
    """

    pass
