"""Catalog data types and exceptions."""

from dataclasses import dataclass

from xr.utils.errors import XrError


class CatalogError(XrError):
    """Base exception for catalog lookup errors."""

    pass


class NotFoundError(CatalogError):
    """Raised when a requested catalog page does not exist."""

    pass


@dataclass(frozen=True)
class CatalogEntry:
    """A named extra and its duration as printed in the catalog.

    ``duration_text`` is taken verbatim from the page and may not parse.
    """

    title: str
    duration_text: str


@dataclass(frozen=True)
class CatalogSearchResult:
    """One release returned by a catalog search."""

    title: str
    href: str
    winner: str = ""
