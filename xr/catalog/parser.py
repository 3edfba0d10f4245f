"""Parse catalog HTML pages into search results and extras.

Pages are plain server-rendered HTML; BeautifulSoup decodes entities, so
text pulled from nodes is already human readable.
"""

import re
from typing import List, Set, Tuple

from bs4 import BeautifulSoup, Tag

from xr.catalog.base import CatalogEntry, CatalogSearchResult
from xr.parsers.sanitize import clean_extra_title, normalize_whitespace

# "Title" documentary (58:58), Sub-title featurette (5:26), Commentary (1:45:02)
EXTRA_PATTERN = re.compile(r"(.*?)\s*\((\d{1,2}:\d{2}(?::\d{2})?)\)")

_LEADING_DASHES = re.compile(r"^-+\s*")

MISSING = "ERROR"


def parse_search_results(html: str) -> List[CatalogSearchResult]:
    """Parse the advanced-search results page.

    Args:
        html: Raw HTML of the results page

    Returns:
        List[CatalogSearchResult]: Results in page order (empty if none)
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    results: List[CatalogSearchResult] = []

    for li in soup.select("div.col1-1 ul li"):
        link = li.find("a")
        winner = li.find("i")

        title = normalize_whitespace(link.get_text()) if link else MISSING
        href = link.get("href", MISSING) if link else MISSING

        results.append(
            CatalogSearchResult(
                title=title,
                href=href,
                winner=winner.get_text().strip() if winner else MISSING,
            )
        )

    return results


def _extras_blocks(soup: BeautifulSoup) -> List[Tag]:
    """Find the description block after every "Extras:" label (one per disc)."""
    blocks: List[Tag] = []

    for label in soup.find_all("div", class_="label"):
        if normalize_whitespace(label.get_text()) != "Extras:":
            continue

        description = label.find_next_sibling("div", class_="description")
        if description is not None:
            blocks.append(description)

    return blocks


def parse_extras(html: str) -> List[CatalogEntry]:
    """Extract every extra with a duration from a release page.

    Titles are cleaned for use as filenames. Duplicate ``(title, duration)``
    pairs across discs are kept once, in first-seen order.

    Args:
        html: Raw HTML of the release comparison page

    Returns:
        List[CatalogEntry]: Extras in page order
    """
    if not html:
        return []

    soup = BeautifulSoup(html, "html.parser")
    seen: Set[Tuple[str, str]] = set()
    extras: List[CatalogEntry] = []

    for block in _extras_blocks(soup):
        text = normalize_whitespace(block.get_text(" "))

        for match in EXTRA_PATTERN.finditer(text):
            title = _LEADING_DASHES.sub("", match.group(1).strip()).strip()
            title = clean_extra_title(title)
            duration = match.group(2)

            if not title:
                continue

            key = (title, duration)
            if key in seen:
                continue

            seen.add(key)
            extras.append(CatalogEntry(title=title, duration_text=duration))

    return extras
