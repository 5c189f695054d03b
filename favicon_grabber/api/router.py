"""FastAPI router for favicon endpoints."""
import logging
import os
import shutil
import tempfile
import time
from typing import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, JSONResponse
from starlette.background import BackgroundTask

from favicon_grabber.core import config
from favicon_grabber.core.errors import (
    ExtractionError,
    FaviconNotFoundError,
    HttpError,
    InvalidURLError,
    ValidationError,
)
from favicon_grabber.core.schemas import FaviconErrorResponse, FaviconLinksResponse
from favicon_grabber.services.favicon_resolver import FaviconResolver
from favicon_grabber.utils.mime import media_type_for_path
from favicon_grabber.utils.url_normalizer import get_hostname, parse_target_url

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/favicon",
    tags=["favicon"],
    responses={404: {"description": "No favicon found"}},
)


async def get_resolver() -> AsyncIterator[FaviconResolver]:
    """One resolver (and HTTP client) per request."""
    async with FaviconResolver() as resolver:
        yield resolver


def _validate(url: str) -> str:
    try:
        return parse_target_url(url)
    except InvalidURLError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("")
async def fetch_favicon(
    url: str,
    search_meta_tags: bool = False,
    ignore_content_type_header: bool = False,
    resolver: FaviconResolver = Depends(get_resolver),
):
    """Download the favicon of a website and return the file.

    Every request downloads into its own scratch directory, removed once
    the response has been sent.
    """
    target = _validate(url)
    os.makedirs(config.OUTPUT_DIR, exist_ok=True)
    workdir = tempfile.mkdtemp(prefix=f"{get_hostname(target)}-", dir=config.OUTPUT_DIR)
    out_path_format = os.path.join(workdir, "%basename%")
    overrides = {
        "search_meta_tags": search_meta_tags,
        "ignore_content_type_header": ignore_content_type_header,
    }

    try:
        path = await resolver.resolve(target, out_path_format, overrides)
    except FaviconNotFoundError as e:
        shutil.rmtree(workdir, ignore_errors=True)
        logger.warning(f"⚠️ {e}")
        body = FaviconErrorResponse.from_attempts(target, str(e.last_error), e.attempts)
        return JSONResponse(status_code=404, content=body.model_dump())
    except BaseException:
        shutil.rmtree(workdir, ignore_errors=True)
        raise

    return FileResponse(
        path,
        media_type=media_type_for_path(path),
        filename=os.path.basename(path),
        background=BackgroundTask(shutil.rmtree, workdir, ignore_errors=True),
    )


@router.get("/links", response_model=FaviconLinksResponse)
async def favicon_links(
    url: str,
    search_meta_tags: bool = False,
    resolver: FaviconResolver = Depends(get_resolver),
):
    """List the icon references declared by a page, best first."""
    target = _validate(url)
    start = time.time()

    try:
        favicons = await resolver.find_favicons(target, {"search_meta_tags": search_meta_tags})
    except (HttpError, ValidationError) as e:
        logger.error(f"Error fetching {target}: {e}")
        raise HTTPException(status_code=502, detail=str(e))
    except ExtractionError as e:
        raise HTTPException(status_code=422, detail=str(e))

    took_ms = int((time.time() - start) * 1000)
    return FaviconLinksResponse(
        url=target,
        count=len(favicons),
        favicons=favicons,
        took_ms=took_ms,
    )
