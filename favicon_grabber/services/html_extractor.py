"""Extract favicon references from HTML content."""
import logging
import re
from typing import List, Optional

import chardet
from bs4 import BeautifulSoup

from favicon_grabber.core.overrides import FetchOverrides
from favicon_grabber.utils.url_normalizer import resolve_href

logger = logging.getLogger(__name__)

# .ico/.png/.jpg/.jpeg, optionally followed by a query string or fragment
ICON_HREF_RE = re.compile(r"\.(?:ico|png|jpe?g)(?:[?#].*)?$", re.IGNORECASE)


def detect_charset(content: bytes, default: str = "utf-8") -> str:
    """Detect charset from content."""
    try:
        result = chardet.detect(content)
        encoding = result.get("encoding", default)
        return encoding or default
    except Exception:
        return default


def decode_html(content: bytes, charset: Optional[str] = None) -> str:
    """Decode a page body, sniffing the charset when none was declared."""
    encoding = charset or detect_charset(content)
    try:
        return content.decode(encoding, errors="replace")
    except LookupError:
        logger.debug(f"Unknown charset {encoding!r}, falling back to utf-8")
        return content.decode("utf-8", errors="replace")


class FaviconExtractor:
    """Collect icon references from ``<link>`` (and optionally ``<meta>``) tags.

    Results keep document order, and every link reference comes before
    any meta reference.
    """

    def __init__(self, base_url: Optional[str] = None, search_meta_tags: bool = False):
        self.base_url = base_url
        self.search_meta_tags = search_meta_tags

    @staticmethod
    def _icon_values(soup: BeautifulSoup, tag: str, attribute: str) -> List[str]:
        values = []
        for element in soup.find_all(tag):
            value = element.get(attribute)
            if not isinstance(value, str):
                continue
            value = value.strip()
            if value and ICON_HREF_RE.search(value):
                values.append(value)
        return values

    def extract(self, html: str) -> List[str]:
        soup = BeautifulSoup(html, "html.parser")

        favicons = self._icon_values(soup, "link", "href")
        if self.search_meta_tags:
            favicons += self._icon_values(soup, "meta", "content")

        if self.base_url is not None:
            favicons = [resolve_href(href, self.base_url) for href in favicons]
        return favicons


def get_favicons_from_html_string(
    html: str,
    base_url: Optional[str] = None,
    overrides: Optional[FetchOverrides] = None,
) -> Optional[List[str]]:
    """Turn an HTML string into a list of favicon references.

    Args:
        html: HTML content string
        base_url: Prefix for relative references, or ``None`` to return
            them as written
        overrides: ``search_meta_tags`` also scans ``<meta content=...>``

    Returns:
        References in priority order (``[]`` if the page declares none),
        or ``None`` if the HTML could not be parsed
    """
    overrides = FetchOverrides.from_options(overrides)
    try:
        extractor = FaviconExtractor(base_url, search_meta_tags=overrides.search_meta_tags)
        favicons = extractor.extract(html)
    except Exception as e:
        logger.error(f"Error during parsing favicons from HTML: {e}")
        return None

    logger.debug(f"Extracted {len(favicons)} favicon reference(s)")
    return favicons
