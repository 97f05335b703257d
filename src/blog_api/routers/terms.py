"""Taxonomy archive router.

GET /categories/{slug}
GET /tags/{slug}
    The term and its most recent posts.  404 when no term has that slug.
"""

import logging

from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from ..lib.wordpress import PostQuery
from ..models import Category, Tag
from .posts import PostSummary, summarize_posts

router = APIRouter(tags=["terms"])

logger = logging.getLogger(__name__)

ARCHIVE_PAGE_SIZE = 12


class CategoryArchiveResponse(BaseModel):
    category: Category
    posts: list[PostSummary]


class TagArchiveResponse(BaseModel):
    tag: Tag
    posts: list[PostSummary]


@router.get("/categories/{slug}", response_model=CategoryArchiveResponse)
async def category_archive(
    request: Request,
    slug: str,
    per_page: int = Query(ARCHIVE_PAGE_SIZE, ge=1, le=100),
) -> CategoryArchiveResponse:
    wp = request.app.state.wp
    category = await wp.get_category_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")

    posts = await wp.get_posts(PostQuery(categories=[category.id], per_page=per_page))
    logger.debug("Category '%s' has %d posts on the first page", slug, len(posts))
    return CategoryArchiveResponse(category=category, posts=await summarize_posts(wp, posts))


@router.get("/tags/{slug}", response_model=TagArchiveResponse)
async def tag_archive(
    request: Request,
    slug: str,
    per_page: int = Query(ARCHIVE_PAGE_SIZE, ge=1, le=100),
) -> TagArchiveResponse:
    wp = request.app.state.wp
    tag = await wp.get_tag_by_slug(slug)
    if tag is None:
        raise HTTPException(status_code=404, detail="Tag not found")

    posts = await wp.get_posts(PostQuery(tags=[tag.id], per_page=per_page))
    logger.debug("Tag '%s' has %d posts on the first page", slug, len(posts))
    return TagArchiveResponse(tag=tag, posts=await summarize_posts(wp, posts))
