"""Core module - Configuration, overrides, errors and schemas."""

from favicon_grabber.core.config import (
    DEBUG,
    ICON_MIME_TYPES,
    HTML_MIME_TYPES,
    OUTPUT_DIR,
)
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

__all__ = [
    # Config
    "DEBUG",
    "ICON_MIME_TYPES",
    "HTML_MIME_TYPES",
    "OUTPUT_DIR",
    # Errors
    "FaviconError",
    "InvalidURLError",
    "HttpError",
    "EmptyFileError",
    "ValidationError",
    "ExtractionError",
    "FaviconNotFoundError",
    # Overrides
    "FetchOverrides",
]
