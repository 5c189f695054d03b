"""Services module - Fetching, extraction and the fallback resolver."""

from favicon_grabber.services.content_negotiator import ContentNegotiator
from favicon_grabber.services.file_saver import save_response
from favicon_grabber.services.html_extractor import (
    FaviconExtractor,
    get_favicons_from_html_string,
)
from favicon_grabber.services.favicon_resolver import (
    FaviconResolver,
    StrategyResult,
    download_favicon,
    download_favicon_from_duckduckgo,
    download_favicon_from_google,
)

__all__ = [
    "ContentNegotiator",
    "save_response",
    "FaviconExtractor",
    "get_favicons_from_html_string",
    "FaviconResolver",
    "StrategyResult",
    "download_favicon",
    "download_favicon_from_duckduckgo",
    "download_favicon_from_google",
]
