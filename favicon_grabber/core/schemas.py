"""Pydantic schemas for request/response validation."""

from pydantic import BaseModel, Field
from typing import List, Optional, Tuple


# ============================================================================
# Favicon
# ============================================================================

class FaviconLinksResponse(BaseModel):
    """Icon references found in a page."""
    url: str
    count: int
    favicons: List[str]
    took_ms: int


class FaviconAttempt(BaseModel):
    """One failed strategy of a resolution."""
    strategy: str
    error: str


class FaviconErrorResponse(BaseModel):
    """Body returned when no favicon could be fetched."""
    url: str
    detail: str
    attempts: List[FaviconAttempt] = Field(default_factory=list)

    @classmethod
    def from_attempts(cls, url: str, detail: str, attempts: List[Tuple[str, Exception]]):
        return cls(
            url=url,
            detail=detail,
            attempts=[FaviconAttempt(strategy=name, error=str(err)) for name, err in attempts],
        )


# ============================================================================
# Health
# ============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str
    debug: bool = False
    output_dir: Optional[str] = None
