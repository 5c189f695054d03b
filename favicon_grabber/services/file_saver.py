"""Write a fetched favicon to disk."""
import logging
import os
from typing import Optional

import httpx

from favicon_grabber.core.errors import EmptyFileError, HttpError
from favicon_grabber.core.overrides import FetchOverrides
from favicon_grabber.utils.mime import extension_from_content_type, path_has_extension_for
from favicon_grabber.utils.signature_sniffer import fix_extension

logger = logging.getLogger(__name__)


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass


async def save_response(
    response: httpx.Response,
    output_path: str,
    overrides: Optional[FetchOverrides] = None,
    log: Optional[logging.Logger] = None,
) -> str:
    """Stream ``response`` into ``output_path`` (created or truncated).

    Zero-byte results are deleted and raise :class:`EmptyFileError`. An
    interrupted write never leaves a partial file behind.

    Returns:
        Final path, which differs from ``output_path`` when an extension
        was appended or the file was renamed after signature sniffing
    """
    log = log or logger
    overrides = FetchOverrides.from_options(overrides)
    url = str(response.url)

    if overrides.file_ext_from_content_type_header:
        content_type = response.headers.get("content-type")
        extension = extension_from_content_type(content_type)
        if extension and not path_has_extension_for(output_path, content_type):
            output_path += extension

    directory = os.path.dirname(output_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    try:
        with open(output_path, "wb") as f:
            async for chunk in response.aiter_bytes():
                f.write(chunk)
    except httpx.HTTPError as e:
        _remove_quietly(output_path)
        raise HttpError(url, message=f"Download of {url} interrupted: {e}") from e
    except BaseException:
        _remove_quietly(output_path)
        raise

    if os.stat(output_path).st_size == 0:
        os.remove(output_path)
        raise EmptyFileError(url, output_path)

    if overrides.file_ext_from_magic_number:
        output_path = fix_extension(output_path, log)

    log.debug(f"💾 Saved {url} to {output_path}")
    return output_path
