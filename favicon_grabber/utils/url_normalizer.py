import posixpath
from urllib.parse import urlparse

from favicon_grabber.core.errors import InvalidURLError


def parse_target_url(url) -> str:
    """Validate a target reference and return it as a string.

    Accepts ``str`` or any URL object whose ``str()`` is the URL
    (``httpx.URL``, ``yarl.URL``...). Only absolute http(s) URLs pass.
    """
    if url is None:
        raise InvalidURLError(url, "no URL given")
    text = str(url).strip()
    try:
        parsed = urlparse(text)
        # Accessing .port validates it
        parsed.port
    except ValueError as e:
        raise InvalidURLError(url, str(e)) from e
    if parsed.scheme.lower() not in ("http", "https"):
        raise InvalidURLError(url)
    if not parsed.hostname:
        raise InvalidURLError(url, "missing host")
    return text


def get_origin(url: str) -> str:
    """Return ``scheme://host[:port]`` of ``url``, without credentials."""
    parsed = urlparse(str(url))
    netloc = parsed.netloc.rsplit("@", 1)[-1].lower()
    return f"{parsed.scheme.lower()}://{netloc}"


def get_hostname(url: str) -> str:
    return urlparse(str(url)).hostname or ""


def get_extension(url: str) -> str:
    """Extension of the last path segment, query string excluded."""
    path = urlparse(str(url)).path
    return posixpath.splitext(posixpath.basename(path))[1]


def has_file_extension(url: str) -> bool:
    """Check if the URL path names a file (e.g. ``/favicon.ico``)."""
    return get_extension(url) != ""


def resolve_href(href: str, base_url: str) -> str:
    """Prefix a page-relative icon reference with ``base_url``.
    - ``https://cdn/x.png`` is already absolute and kept
    - ``//cdn/x.png`` takes the scheme of the base
    - ``/x.png`` is appended to the base as is
    - ``x.png`` is joined to the base with a ``/``
    """
    if "://" in href:
        return href
    base = str(base_url).rstrip("/")
    if href.startswith("//"):
        scheme = urlparse(base).scheme or "https"
        return f"{scheme}:{href}"
    if href.startswith("/"):
        return base + href
    return base + "/" + href
