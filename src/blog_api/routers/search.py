"""Search router – site-wide search over posts, pages and terms."""

from typing import Literal

from fastapi import APIRouter, Query, Request
from pydantic import BaseModel

from ..lib.wordpress import SearchQuery
from ..models import SearchResult

router = APIRouter(tags=["search"])


class SearchResponse(BaseModel):
    query: str
    results: list[SearchResult]


@router.get("/search", response_model=SearchResponse)
async def search_content(
    request: Request,
    q: str = Query(..., min_length=1, description="Search terms"),
    type: Literal["post", "term", "post-format"] | None = Query(None),
    subtype: str | None = Query(None, description="e.g. 'post', 'page', 'category'"),
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
) -> SearchResponse:
    wp = request.app.state.wp
    results = await wp.search(
        SearchQuery(search=q, type=type, subtype=subtype, page=page, per_page=per_page)
    )
    return SearchResponse(query=q, results=results)
