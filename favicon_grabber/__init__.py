"""Fetch a website's favicon through a chain of fallback strategies."""
import logging

from favicon_grabber.core.errors import (
    FaviconError,
    InvalidURLError,
    HttpError,
    EmptyFileError,
    ValidationError,
    ExtractionError,
    FaviconNotFoundError,
)
from favicon_grabber.core.overrides import FetchOverrides
from favicon_grabber.services import (
    FaviconResolver,
    download_favicon,
    download_favicon_from_duckduckgo,
    download_favicon_from_google,
    get_favicons_from_html_string,
)
from favicon_grabber.utils.output_format import parse_output_format

# Silent unless the host application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "FaviconResolver",
    "FetchOverrides",
    "download_favicon",
    "download_favicon_from_duckduckgo",
    "download_favicon_from_google",
    "get_favicons_from_html_string",
    "parse_output_format",
    # Errors
    "FaviconError",
    "InvalidURLError",
    "HttpError",
    "EmptyFileError",
    "ValidationError",
    "ExtractionError",
    "FaviconNotFoundError",
]
