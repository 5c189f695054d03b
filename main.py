"""FastAPI application serving favicons fetched through the fallback resolver."""
import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from favicon_grabber.api import router
from favicon_grabber.core import config
from favicon_grabber.core.schemas import HealthResponse

# Configure logging
logging.basicConfig(
    level=config.LOG_LEVEL,
    format=config.LOG_FORMAT,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: prepare the output directory."""
    logger.info("🚀 Starting Favicon Grabber...")
    try:
        os.makedirs(config.OUTPUT_DIR, exist_ok=True)
        logger.info(f"📁 Output directory: {os.path.abspath(config.OUTPUT_DIR)}")
    except OSError as e:
        logger.error(f"❌ Cannot create output directory {config.OUTPUT_DIR}: {e}")
        raise
    if config.DEBUG:
        logger.debug("🔍 Debug logging enabled")
    logger.info("🌟 Application startup complete")

    yield

    logger.info("🙋 Application shutdown complete")


app = FastAPI(
    title=config.APP_NAME,
    description=config.APP_DESCRIPTION,
    version=config.APP_VERSION,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/health", response_model=HealthResponse)
async def health():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        version=config.APP_VERSION,
        debug=config.DEBUG,
        output_dir=config.OUTPUT_DIR,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=config.API_HOST,
        port=config.API_PORT,
        reload=config.API_RELOAD,
    )
