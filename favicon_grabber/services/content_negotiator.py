"""Single validated HTTP GET used by every favicon strategy."""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

import httpx

from favicon_grabber.core.errors import HttpError, ValidationError
from favicon_grabber.core.overrides import FetchOverrides
from favicon_grabber.utils.mime import content_type_matches

logger = logging.getLogger(__name__)


class ContentNegotiator:
    """Fetches a URL and checks status and content-type.

    Responses are opened in streaming mode so the body can be written to
    disk chunk by chunk; callers close them (or use :meth:`stream`).
    """

    def __init__(self, client: httpx.AsyncClient, log: Optional[logging.Logger] = None):
        self.client = client
        self.logger = log or logger

    async def fetch(
        self,
        url: str,
        allowed_mime_types: Sequence[str],
        overrides: Optional[FetchOverrides] = None,
    ) -> httpx.Response:
        """GET ``url`` and validate the response.

        Args:
            url: URL to request
            allowed_mime_types: Substrings, one of which the content-type
                header must contain
            overrides: ``ignore_content_type_header`` skips the content-type check

        Returns:
            The open streaming response

        Raises:
            ValueError: ``allowed_mime_types`` missing or empty
            HttpError: Network failure or status >= 400
            ValidationError: Content-type not in the allow-list
        """
        if not allowed_mime_types:
            raise ValueError("allowed_mime_types is required")
        if isinstance(allowed_mime_types, str):
            allowed_mime_types = (allowed_mime_types,)
        overrides = FetchOverrides.from_options(overrides)

        try:
            request = self.client.build_request("GET", str(url))
            response = await self.client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.debug(f"Error whilst requesting data from {url}: {e}")
            raise HttpError(str(url), message=f"Request to {url} failed: {e}") from e

        if response.status_code >= 400:
            await response.aclose()
            raise HttpError(str(url), response.status_code)

        if not overrides.ignore_content_type_header:
            content_type = response.headers.get("content-type", "")
            if not content_type_matches(content_type, allowed_mime_types):
                await response.aclose()
                raise ValidationError(str(url), content_type, allowed_mime_types)

        self.logger.debug(
            f"GET {url} -> {response.status_code} ({response.headers.get('content-type', 'no content-type')})"
        )
        return response

    @asynccontextmanager
    async def stream(
        self,
        url: str,
        allowed_mime_types: Sequence[str],
        overrides: Optional[FetchOverrides] = None,
    ) -> AsyncIterator[httpx.Response]:
        """Same as :meth:`fetch`, closing the response on exit."""
        response = await self.fetch(url, allowed_mime_types, overrides)
        try:
            yield response
        finally:
            await response.aclose()
