"""dvdcompare.net catalog client.

dvdcompare.net has no API: releases are found through the advanced search
form and extras are scraped from each release's comparison page.
"""

import logging
from typing import List, Optional
from urllib.parse import urljoin

import requests

from xr.catalog.base import CatalogEntry, CatalogError, CatalogSearchResult, NotFoundError
from xr.catalog.cache import CatalogCache
from xr.catalog.parser import parse_extras, parse_search_results

logger = logging.getLogger(__name__)


class DVDCompareClient:
    """Client for searching dvdcompare.net and reading release extras."""

    BASE_URL = "https://www.dvdcompare.net/comparisons/"
    SEARCH_ENDPOINT = "adv_search_results.php"

    DEFAULT_TIMEOUT = 30  # seconds

    def __init__(
        self,
        cache: Optional[CatalogCache] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize catalog client.

        Args:
            cache: Response cache (a default sqlite cache is created if omitted)
            timeout: Request timeout in seconds
        """
        self.cache = cache if cache is not None else CatalogCache()
        self.session = self.cache.get_session()
        self.timeout = timeout

    def _request(self, method: str, endpoint: str, **kwargs) -> str:
        """Perform a request and return the response body.

        Raises:
            NotFoundError: If the page does not exist
            CatalogError: On any other network or HTTP failure
        """
        url = urljoin(self.BASE_URL, endpoint)
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            raise CatalogError(f"Request to {url} failed: {e}") from e

        if response.status_code == 404:
            raise NotFoundError(f"Catalog page not found: {url}")

        try:
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise CatalogError(f"Catalog returned HTTP {response.status_code} for {url}") from e

        if getattr(response, "from_cache", False):
            logger.debug(f"Served from cache: {url}")

        return response.text

    def search(
        self,
        title: str,
        director: str = "",
        year: str = "",
        country: str = "",
        company: str = "",
        edition: str = "",
        and_or: str = "and",
    ) -> List[CatalogSearchResult]:
        """Search the catalog for releases.

        Args:
            title: Release title, already in catalog form (see format_title_for_search)
            director: Director name filter
            year: Release year filter
            country: Country filter
            company: Company filter
            edition: Edition filter
            and_or: "and" requires every filter to match, "or" any of them

        Returns:
            List[CatalogSearchResult]: Matching releases
        """
        form = {
            "title_search": title,
            "director_search": director,
            "year_search": year,
            "country_search": country,
            "company_search": company,
            "edition_search": edition,
            "and_or": and_or,
        }
        html = self._request("POST", self.SEARCH_ENDPOINT, data=form)
        results = parse_search_results(html)
        logger.info(f"Catalog search for '{title}' returned {len(results)} result(s)")
        return results

    def fetch_details(self, href: str) -> str:
        """Fetch a release comparison page.

        Args:
            href: Page reference as returned in a search result (e.g. "film.php?fid=1234")

        Returns:
            str: Page HTML
        """
        if not href:
            raise CatalogError("A release reference is required")
        return self._request("GET", href)

    def get_extras(self, href: str) -> List[CatalogEntry]:
        """Fetch a release page and parse its extras.

        Args:
            href: Page reference

        Returns:
            List[CatalogEntry]: Extras in page order
        """
        extras = parse_extras(self.fetch_details(href))
        logger.info(f"Loaded {len(extras)} extra(s) from {href}")
        return extras

    def page_url(self, href: str) -> str:
        """Full URL of a release page, for display."""
        return urljoin(self.BASE_URL, href)
