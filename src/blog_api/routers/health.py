import logging

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ..lib.wordpress import WordPressAPIError

router = APIRouter(tags=["health"])

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    status: str


class UpstreamHealthResponse(BaseModel):
    status: str
    api_url: str
    detail: str | None = None


@router.get("/health", response_model=HealthResponse, status_code=200)
async def healthcheck():
    return {"status": "ok"}


@router.get("/health/upstream", response_model=UpstreamHealthResponse)
async def upstream_healthcheck(request: Request) -> UpstreamHealthResponse:
    """Probe the WordPress API with a cheap ``/types`` request."""
    wp = request.app.state.wp
    try:
        await wp.request("types")
    except WordPressAPIError as exc:
        logger.warning("WordPress API unreachable: %s", exc)
        return UpstreamHealthResponse(status="degraded", api_url=wp.api_url, detail=str(exc))
    return UpstreamHealthResponse(status="ok", api_url=wp.api_url)
