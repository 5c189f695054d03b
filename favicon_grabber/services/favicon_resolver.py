"""Favicon resolver with multiple fallback strategies."""
import functools
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional, Sequence, Tuple

import httpx

from favicon_grabber.core import config
from favicon_grabber.core.errors import (
    ExtractionError,
    FaviconError,
    FaviconNotFoundError,
)
from favicon_grabber.core.overrides import FetchOverrides
from favicon_grabber.services.content_negotiator import ContentNegotiator
from favicon_grabber.services.file_saver import save_response
from favicon_grabber.services.html_extractor import decode_html, get_favicons_from_html_string
from favicon_grabber.utils.output_format import parse_output_format
from favicon_grabber.utils.url_normalizer import (
    get_hostname,
    get_origin,
    has_file_extension,
    parse_target_url,
)

logger = logging.getLogger(__name__)


@dataclass
class StrategyResult:
    """Outcome of one strategy: a saved path or the error that stopped it."""
    strategy: str
    path: Optional[str] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.path is not None


Strategy = Callable[[str, str, FetchOverrides], Awaitable[StrategyResult]]


def strategy(name: str):
    """Turn a path-returning coroutine method into a :data:`Strategy`.

    Favicon and filesystem errors become a failed :class:`StrategyResult`
    instead of propagating.
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(self, target: str, out_path_format: str, overrides: FetchOverrides) -> StrategyResult:
            try:
                path = await func(self, target, out_path_format, overrides)
            except (FaviconError, OSError) as e:
                self.logger.debug(f"❌ [{name}] {target}: {e}")
                return StrategyResult(name, error=e)
            return StrategyResult(name, path=path)

        return wrapper

    return decorator


class FaviconResolver:
    """Downloads a website's favicon, falling back strategy by strategy.

    1. The URL names a file: download it directly (no fallback)
    2. ``<origin>/favicon.ico``
    3. The first icon referenced by the page HTML
    4. DuckDuckGo's icon service
    5. Google's icon service

    The resolver owns its HTTP client unless one is passed in.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.http_client = client
        self._owns_client = client is None
        self.logger = log or logger

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Get or initialize HTTP client."""
        if self.http_client is None:
            self.http_client = httpx.AsyncClient(
                timeout=config.REQUEST_TIMEOUT,
                follow_redirects=config.FOLLOW_REDIRECTS,
                headers={"User-Agent": config.USER_AGENT},
            )
        return self.http_client

    async def aclose(self) -> None:
        if self._owns_client and self.http_client is not None:
            await self.http_client.aclose()
            self.http_client = None

    async def __aenter__(self) -> "FaviconResolver":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _negotiator(self) -> ContentNegotiator:
        return ContentNegotiator(await self._get_http_client(), self.logger)

    async def _save(
        self,
        url: str,
        out_path_format: str,
        overrides: FetchOverrides,
        allowed_mime_types: Sequence[str] = config.ICON_MIME_TYPES,
        source: Optional[str] = None,
    ) -> str:
        """Fetch ``url`` and save it under the path rendered from ``source``."""
        output_path = parse_output_format(out_path_format, source or url)
        negotiator = await self._negotiator()
        async with negotiator.stream(url, allowed_mime_types, overrides) as response:
            return await save_response(response, output_path, overrides, self.logger)

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    @strategy("direct_file")
    async def _from_direct_file(self, target: str, out_path_format: str, overrides: FetchOverrides) -> str:
        return await self._save(target, out_path_format, overrides)

    @strategy("origin_favicon")
    async def _from_origin(self, target: str, out_path_format: str, overrides: FetchOverrides) -> str:
        return await self._save(get_origin(target) + "/favicon.ico", out_path_format, overrides)

    async def _page_favicons(self, target: str, overrides: FetchOverrides) -> List[str]:
        negotiator = await self._negotiator()
        async with negotiator.stream(target, config.HTML_MIME_TYPES, overrides) as response:
            content = await response.aread()
            html = decode_html(content, response.charset_encoding)

        favicons = get_favicons_from_html_string(html, get_origin(target), overrides)
        if favicons is None:
            raise ExtractionError(f"Error during parsing favicons from HTML of {target}")
        return favicons

    @strategy("html_page")
    async def _from_html(self, target: str, out_path_format: str, overrides: FetchOverrides) -> str:
        favicons = await self._page_favicons(target, overrides)
        if not favicons:
            raise ExtractionError(f"No favicons found from HTML of {target}")

        self.logger.debug(f"Favicon declared by {target}: {favicons[0]}")
        return await self._resolve(favicons[0], out_path_format, overrides, nested=True)

    async def _from_external_provider(
        self,
        target: str,
        out_path_format: str,
        overrides: FetchOverrides,
        prefix: str,
        suffix: str,
    ) -> str:
        provider_url = prefix + get_hostname(target) + suffix
        # Provider content-types are unreliable, trust the bytes instead
        overrides = overrides.with_options(file_ext_from_magic_number=True)
        return await self._save(provider_url, out_path_format, overrides, source=target)

    @strategy("duckduckgo")
    async def _from_duckduckgo(self, target: str, out_path_format: str, overrides: FetchOverrides) -> str:
        return await self._from_external_provider(
            target, out_path_format, overrides,
            config.DUCKDUCKGO_PROVIDER_PREFIX, config.DUCKDUCKGO_PROVIDER_SUFFIX,
        )

    @strategy("google")
    async def _from_google(self, target: str, out_path_format: str, overrides: FetchOverrides) -> str:
        return await self._from_external_provider(
            target, out_path_format, overrides,
            config.GOOGLE_PROVIDER_PREFIX, config.GOOGLE_PROVIDER_SUFFIX,
        )

    def strategies(self, nested: bool = False) -> List[Strategy]:
        """Fallback chain for a URL without a file name, in attempt order.

        A nested resolution (an icon found in a page) stops after the
        origin ``favicon.ico``.
        """
        chain = [self._from_origin]
        if not nested:
            chain += [self._from_html, self._from_duckduckgo, self._from_google]
        return chain

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def resolve(
        self,
        url,
        out_path_format: str = config.DEFAULT_OUT_PATH_FORMAT,
        overrides=None,
    ) -> str:
        """Download the favicon of ``url``.

        Args:
            url: Website, or a direct link to an icon file
            out_path_format: Output path template, see
                :func:`~favicon_grabber.utils.output_format.parse_output_format`
            overrides: :class:`FetchOverrides` or a mapping of its options

        Returns:
            Local path to the downloaded favicon

        Raises:
            InvalidURLError: ``url`` is not an absolute http(s) URL
            FaviconNotFoundError: Every strategy failed
        """
        return await self._resolve(url, out_path_format, FetchOverrides.from_options(overrides))

    async def _resolve(
        self,
        url,
        out_path_format: str,
        overrides: FetchOverrides,
        nested: bool = False,
    ) -> str:
        target = parse_target_url(url)

        # A URL naming a file is authoritative
        if has_file_extension(target):
            chain = [self._from_direct_file]
        else:
            chain = self.strategies(nested)

        attempts: List[Tuple[str, Exception]] = []
        for attempt in chain:
            result = await attempt(target, out_path_format, overrides)
            if result.ok:
                self.logger.info(f"✅ Favicon for {target} saved to {result.path} ({result.strategy})")
                return result.path
            attempts.append((result.strategy, result.error))

        self.logger.warning(f"⚠️ No favicon found for {target} after {len(attempts)} strategies")
        raise FaviconNotFoundError(target, attempts) from attempts[-1][1]

    async def find_favicons(self, url, overrides=None) -> List[str]:
        """Fetch the page at ``url`` and list the icons it references.

        Raises:
            InvalidURLError, HttpError, ValidationError: Page could not be fetched
            ExtractionError: The HTML could not be parsed
        """
        target = parse_target_url(url)
        return await self._page_favicons(target, FetchOverrides.from_options(overrides))

    async def _run_single(self, attempt: Strategy, url, out_path_format: str, overrides) -> str:
        target = parse_target_url(url)
        result = await attempt(target, out_path_format, FetchOverrides.from_options(overrides))
        if not result.ok:
            raise FaviconNotFoundError(target, [(result.strategy, result.error)]) from result.error
        return result.path

    async def from_duckduckgo(self, url, out_path_format: str = config.DEFAULT_OUT_PATH_FORMAT, overrides=None) -> str:
        """Download the favicon of ``url`` from DuckDuckGo only."""
        return await self._run_single(self._from_duckduckgo, url, out_path_format, overrides)

    async def from_google(self, url, out_path_format: str = config.DEFAULT_OUT_PATH_FORMAT, overrides=None) -> str:
        """Download the favicon of ``url`` from Google only."""
        return await self._run_single(self._from_google, url, out_path_format, overrides)


async def download_favicon(
    url,
    out_path_format: str = config.DEFAULT_OUT_PATH_FORMAT,
    overrides=None,
    client: Optional[httpx.AsyncClient] = None,
    log: Optional[logging.Logger] = None,
) -> str:
    """Download an icon for ``url``, using fallbacks where needed.

    Example:
        >>> await download_favicon("https://example.com", "icons/%basename%")
        'icons/favicon.ico'
    """
    async with FaviconResolver(client=client, log=log) as resolver:
        return await resolver.resolve(url, out_path_format, overrides)


async def download_favicon_from_duckduckgo(url, out_path_format: str = config.DEFAULT_OUT_PATH_FORMAT,
                                           overrides=None, client: Optional[httpx.AsyncClient] = None) -> str:
    async with FaviconResolver(client=client) as resolver:
        return await resolver.from_duckduckgo(url, out_path_format, overrides)


async def download_favicon_from_google(url, out_path_format: str = config.DEFAULT_OUT_PATH_FORMAT,
                                       overrides=None, client: Optional[httpx.AsyncClient] = None) -> str:
    async with FaviconResolver(client=client) as resolver:
        return await resolver.from_google(url, out_path_format, overrides)
