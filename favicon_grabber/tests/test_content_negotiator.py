"""Tests for the validated HTTP fetch and saving to disk."""
import httpx
import pytest

from favicon_grabber.core.config import HTML_MIME_TYPES, ICON_MIME_TYPES
from favicon_grabber.core.errors import EmptyFileError, HttpError, ValidationError
from favicon_grabber.core.overrides import FetchOverrides
from favicon_grabber.services.content_negotiator import ContentNegotiator
from favicon_grabber.services.file_saver import save_response
from favicon_grabber.tests.conftest import ICO_BYTES, JPEG_BYTES, PNG_BYTES

ICON_URL = "https://example.com/favicon.ico"


@pytest.mark.asyncio
class TestContentNegotiator:
    """Status and content-type validation."""

    async def test_accepts_allow_listed_type(self, web):
        web.add(ICON_URL, ICO_BYTES, "image/x-icon")
        async with web.client() as client:
            response = await ContentNegotiator(client).fetch(ICON_URL, ICON_MIME_TYPES)
            assert response.status_code == 200
            assert await response.aread() == ICO_BYTES
            await response.aclose()

    async def test_content_type_parameters_are_tolerated(self, web):
        web.add(ICON_URL, PNG_BYTES, "Image/PNG; charset=binary")
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES) as response:
                assert response.status_code == 200

    async def test_error_status_raises_http_error(self, web):
        web.add(ICON_URL, b"gone", "image/x-icon", status_code=410)
        async with web.client() as client:
            with pytest.raises(HttpError) as exc_info:
                await ContentNegotiator(client).fetch(ICON_URL, ICON_MIME_TYPES)
        assert exc_info.value.status_code == 410
        assert exc_info.value.url == ICON_URL

    async def test_html_fails_icon_validation(self, web):
        web.add_html(ICON_URL, "<html>soft 404</html>")
        async with web.client() as client:
            with pytest.raises(ValidationError) as exc_info:
                await ContentNegotiator(client).fetch(ICON_URL, ICON_MIME_TYPES)
        assert "text/html" in exc_info.value.content_type

    async def test_missing_content_type_fails_validation(self, web):
        web.add(ICON_URL, ICO_BYTES, content_type=None)
        async with web.client() as client:
            with pytest.raises(ValidationError):
                await ContentNegotiator(client).fetch(ICON_URL, ICON_MIME_TYPES)

    async def test_ignore_content_type_header(self, web):
        web.add_html(ICON_URL, "<html>soft 404</html>")
        overrides = FetchOverrides(ignore_content_type_header=True)
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES, overrides) as response:
                assert response.headers["content-type"].startswith("text/html")

    async def test_ignore_content_type_does_not_hide_error_status(self, web):
        overrides = FetchOverrides(ignore_content_type_header=True)
        async with web.client() as client:
            with pytest.raises(HttpError):
                await ContentNegotiator(client).fetch(ICON_URL, ICON_MIME_TYPES, overrides)

    @pytest.mark.parametrize("allowed", [None, (), []])
    async def test_allow_list_is_mandatory(self, web, allowed):
        async with web.client() as client:
            with pytest.raises(ValueError):
                await ContentNegotiator(client).fetch(ICON_URL, allowed)
        assert web.requests == []

    async def test_network_failure_raises_http_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(HttpError) as exc_info:
                await ContentNegotiator(client).fetch(ICON_URL, HTML_MIME_TYPES)
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
class TestSaveResponse:
    """Writing responses to disk."""

    async def test_writes_body(self, web, tmp_path):
        web.add(ICON_URL, ICO_BYTES)
        output = tmp_path / "icons" / "favicon.ico"
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES) as response:
                path = await save_response(response, str(output))
        assert path == str(output)
        assert output.read_bytes() == ICO_BYTES

    async def test_truncates_existing_file(self, web, tmp_path):
        web.add(ICON_URL, ICO_BYTES)
        output = tmp_path / "favicon.ico"
        output.write_bytes(b"x" * 500)
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES) as response:
                await save_response(response, str(output))
        assert output.read_bytes() == ICO_BYTES

    async def test_empty_file_is_removed(self, web, tmp_path):
        web.add(ICON_URL, b"")
        output = tmp_path / "favicon.ico"
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES) as response:
                with pytest.raises(EmptyFileError) as exc_info:
                    await save_response(response, str(output))
        assert not output.exists()
        assert isinstance(exc_info.value, HttpError)

    async def test_extension_from_content_type(self, web, tmp_path):
        web.add(ICON_URL, PNG_BYTES, "image/png")
        output = tmp_path / "favicon"
        overrides = FetchOverrides(file_ext_from_content_type_header=True)
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES) as response:
                path = await save_response(response, str(output), overrides)
        assert path == str(tmp_path / "favicon.png")

    async def test_extension_from_content_type_not_doubled(self, web, tmp_path):
        web.add(ICON_URL, ICO_BYTES, "image/x-icon")
        output = tmp_path / "favicon.ico"
        overrides = FetchOverrides(file_ext_from_content_type_header=True)
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES) as response:
                path = await save_response(response, str(output), overrides)
        assert path == str(output)

    async def test_extension_from_magic_number(self, web, tmp_path):
        web.add(ICON_URL, PNG_BYTES, "image/x-icon")
        output = tmp_path / "favicon.ico"
        overrides = FetchOverrides(file_ext_from_magic_number=True)
        async with web.client() as client:
            async with ContentNegotiator(client).stream(ICON_URL, ICON_MIME_TYPES) as response:
                path = await save_response(response, str(output), overrides)
        assert path == str(tmp_path / "favicon.png")
        assert not output.exists()

    async def test_extension_alias_is_not_doubled(self, tmp_path):
        photo_url = "https://example.com/photo.jpeg"
        output = tmp_path / "photo.jpeg"
        overrides = FetchOverrides(file_ext_from_content_type_header=True)
        response = httpx.Response(
            200,
            headers={"content-type": "image/jpeg"},
            content=JPEG_BYTES,
            request=httpx.Request("GET", photo_url),
        )

        path = await save_response(response, str(output), overrides)

        assert path == str(output)
        assert output.read_bytes() == JPEG_BYTES

    async def test_failed_write_removes_partial_file(self, tmp_path):
        async def body():
            yield ICO_BYTES[:8]
            raise OSError(28, "No space left on device")

        output = tmp_path / "favicon.ico"
        response = httpx.Response(
            200,
            headers={"content-type": "image/x-icon"},
            content=body(),
            request=httpx.Request("GET", ICON_URL),
        )

        with pytest.raises(OSError):
            await save_response(response, str(output))
        assert not output.exists()
