"""Diagnostics for the WordPress connection (API key required).

GET /debug
    Upstream URLs plus, for each recent post, how its featured image
    resolves: embedded bundle, direct media fetch, and the alt text used.
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from ..lib.wordpress import (
    PostQuery,
    get_featured_image_alt,
    has_featured_image,
    resolve_image_url,
    resolve_image_url_async,
)
from ..security import verify_api_key

router = APIRouter(tags=["debug"], dependencies=[Depends(verify_api_key)])

logger = logging.getLogger(__name__)


class ImageDiagnostics(BaseModel):
    post_id: int
    slug: str
    featured_media: int
    has_featured_image: bool
    embedded_url: str | None = None
    resolved_url: str | None = None
    alt: str = ""


class DebugResponse(BaseModel):
    site_url: str
    api_url: str
    post_count: int
    posts: list[ImageDiagnostics]


@router.get("/debug", response_model=DebugResponse)
async def debug_report(
    request: Request,
    size: str = Query("medium", description="Image size to resolve"),
    per_page: int = Query(5, ge=1, le=20),
) -> DebugResponse:
    wp = request.app.state.wp
    posts = await wp.get_posts(PostQuery(per_page=per_page))

    report = []
    for post in posts:
        embedded_url = resolve_image_url(post, size)
        resolved_url = embedded_url or await resolve_image_url_async(wp, post, size)
        if post.featured_media and embedded_url is None:
            logger.info(
                "Post %s references media %s but it was not embedded",
                post.id,
                post.featured_media,
            )
        report.append(
            ImageDiagnostics(
                post_id=post.id,
                slug=post.slug,
                featured_media=post.featured_media,
                has_featured_image=has_featured_image(post),
                embedded_url=embedded_url,
                resolved_url=resolved_url,
                alt=get_featured_image_alt(post),
            )
        )

    return DebugResponse(
        site_url=wp.site_url,
        api_url=wp.api_url,
        post_count=len(posts),
        posts=report,
    )
