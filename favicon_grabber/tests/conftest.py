"""Pytest configuration and shared fixtures."""
from typing import Dict, List, Optional, Tuple

import httpx
import pytest

PNG_BYTES = bytes.fromhex("89504E470D0A1A0A0000000D49484452") + b"\x00" * 32
ICO_BYTES = bytes.fromhex("00000100010010100000010020006804") + b"\x00" * 32
JPEG_BYTES = bytes.fromhex("FFD8FFE000104A464946000101000001") + b"\x00" * 32
GIF_BYTES = b"GIF89a" + b"\x00" * 32


def _key(url) -> Tuple[str, str, bytes]:
    url = httpx.URL(str(url))
    return (url.host, url.path or "/", url.query)


class FakeWeb:
    """Routes for an ``httpx.MockTransport``; unknown URLs answer 404."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str, bytes], Tuple[int, dict, bytes]] = {}
        self.requests: List[str] = []

    def add(
        self,
        url: str,
        content: bytes = b"",
        content_type: Optional[str] = "image/x-icon",
        status_code: int = 200,
    ) -> None:
        headers = {"content-type": content_type} if content_type else {}
        self.routes[_key(url)] = (status_code, headers, content)

    def add_html(self, url: str, html: str, content_type: str = "text/html; charset=utf-8") -> None:
        self.add(url, html.encode("utf-8"), content_type)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(str(request.url))
        route = self.routes.get(_key(request.url))
        if route is None:
            return httpx.Response(404, headers={"content-type": "text/html"}, content=b"Not found")
        status_code, headers, content = route
        return httpx.Response(status_code, headers=headers, content=content)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def web() -> FakeWeb:
    """Fake websites served through a mock transport."""
    return FakeWeb()


@pytest.fixture
def icon_page_html() -> str:
    """Page declaring three link icons, one stylesheet and two meta icons."""
    return """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta property="og:image" content="https://cdn.example.com/og-image.png">
  <link rel="stylesheet" href="/static/site.css">
  <link rel="icon" href="/favicon.ico?v=4393bde228f3">
  <link rel="icon" type="image/png"
        sizes="32x32"
        href="favicon-32x32.PNG?v=2b275943c6da">
  <link rel="apple-touch-icon" href="https://cdn.example.com/apple-touch-icon.jpg">
  <meta name="msapplication-TileImage" content="/mstile-144x144.png">
  <meta name="description" content="Not an icon">
</head>
<body><img src="/logo.png"></body>
</html>
"""
