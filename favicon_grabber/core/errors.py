"""Exception hierarchy for favicon resolution."""
from typing import List, Optional, Sequence, Tuple


class FaviconError(Exception):
    """Base class for every favicon-grabber failure."""
    pass


class InvalidURLError(FaviconError, ValueError):
    """Raised when the target reference is not an absolute http(s) URL."""

    def __init__(self, url, reason: str = "not an absolute http(s) URL"):
        self.url = url
        super().__init__(f"Invalid URL {url!r}: {reason}")


class HttpError(FaviconError):
    """Raised on an error status or when the request never completed.

    ``status_code`` is ``None`` for network failures.
    """

    def __init__(self, url: str, status_code: Optional[int] = None, message: Optional[str] = None):
        self.url = url
        self.status_code = status_code
        if message is None:
            message = f"HTTP {status_code} while requesting {url}"
        super().__init__(message)


class EmptyFileError(HttpError):
    """Raised when a fetched file turned out to be zero bytes."""

    def __init__(self, url: str, output_path: str):
        self.output_path = output_path
        super().__init__(
            url,
            message=(
                f"Output file {output_path} size is 0. "
                "The file has been automatically cleaned up"
            ),
        )


class ValidationError(FaviconError):
    """Raised when the declared content-type is not in the allow-list."""

    def __init__(self, url: str, content_type: str, allowed: Sequence[str]):
        self.url = url
        self.content_type = content_type
        self.allowed = tuple(allowed)
        super().__init__(
            f"Content-type {content_type!r} of {url} is not one of {', '.join(self.allowed)}"
        )


class ExtractionError(FaviconError):
    """Raised when no usable favicon reference could be read from a page."""
    pass


class FaviconNotFoundError(FaviconError):
    """Raised once every strategy has failed.

    ``last_error`` is the error of the final strategy attempted and
    ``attempts`` lists ``(strategy_name, error)`` in attempt order.
    """

    def __init__(self, url: str, attempts: List[Tuple[str, Exception]]):
        self.url = url
        self.attempts = list(attempts)
        self.last_error = attempts[-1][1] if attempts else None
        tried = ", ".join(name for name, _ in self.attempts)
        super().__init__(
            f"Could not fetch a favicon for {url} (tried: {tried}). Last error: {self.last_error}"
        )
