"""Catalog lookups: searching releases and reading their extras."""

from xr.catalog.base import CatalogEntry, CatalogError, CatalogSearchResult, NotFoundError
from xr.catalog.cache import CatalogCache
from xr.catalog.client import DVDCompareClient
from xr.catalog.parser import parse_extras, parse_search_results

__all__ = [
    "CatalogCache",
    "CatalogEntry",
    "CatalogError",
    "CatalogSearchResult",
    "DVDCompareClient",
    "NotFoundError",
    "parse_extras",
    "parse_search_results",
]
