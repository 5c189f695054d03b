"""Application configuration - Centralized environment and settings management."""

import os

# ============================================================================
# HTTP Configuration
# ============================================================================

REQUEST_TIMEOUT = float(os.getenv("FAVICON_GRABBER_TIMEOUT", "10.0"))  # seconds
USER_AGENT = os.getenv(
    "FAVICON_GRABBER_USER_AGENT",
    "Mozilla/5.0 (compatible; FaviconGrabber/1.0)"
)
FOLLOW_REDIRECTS = os.getenv("FAVICON_GRABBER_FOLLOW_REDIRECTS", "true").lower() == "true"

# ============================================================================
# Content Negotiation
# ============================================================================

# Substrings matched against the content-type header
ICON_MIME_TYPES = (
    "image/x-icon",
    "image/vnd.microsoft.icon",
    "image/ico",
    "image/icon",
    "image/png",
    "image/jpeg",
    "image/jpg",
)
HTML_MIME_TYPES = (
    "text/html",
    "application/xhtml+xml",
)

# ============================================================================
# External Providers
# ============================================================================

DUCKDUCKGO_PROVIDER_PREFIX = "https://icons.duckduckgo.com/ip3/"
DUCKDUCKGO_PROVIDER_SUFFIX = ".ico"
GOOGLE_PROVIDER_PREFIX = "https://www.google.com/s2/favicons?domain="
GOOGLE_PROVIDER_SUFFIX = ""

# ============================================================================
# Output
# ============================================================================

DEFAULT_OUT_PATH_FORMAT = "%basename%"
OUTPUT_DIR = os.getenv("FAVICON_GRABBER_OUTPUT_DIR", "./favicons")
SIGNATURE_READ_BYTES = 16

# ============================================================================
# Logging Configuration
# ============================================================================

# Read once at import, never mutated
DEBUG = os.getenv("FAVICON_GRABBER_DEBUG", "false").lower() in ("1", "true", "yes")
LOG_LEVEL = "DEBUG" if DEBUG else os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ============================================================================
# API Configuration
# ============================================================================

APP_NAME = "Favicon Grabber API"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Fetch a website's favicon through a chain of fallback strategies"

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8080))
API_RELOAD = os.getenv("API_RELOAD", "false").lower() == "true"
