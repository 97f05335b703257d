"""Posts router – blog listing, post detail and comments.

GET /posts
    Paginated post summaries, optionally filtered by search, category or tag.

GET /posts/{slug}
    One post with its terms and a few related posts.

GET /posts/{post_id}/comments
    Approved comments as a reply tree.

POST /posts/{post_id}/comments
    Submit a comment for moderation.
"""

import asyncio
import logging

from fastapi import APIRouter, HTTPException, Query, Request, status
from pydantic import BaseModel, Field, field_validator

from ..lib.wordpress import (
    CommentQuery,
    PostQuery,
    get_featured_image_alt,
    resolve_image_url_async,
)
from ..lib.wordpress.helpers import (
    build_comment_tree,
    format_date,
    get_author_name,
    get_excerpt_text,
    get_post_categories,
    get_post_tags,
    is_sticky,
    strip_html,
)
from ..models import (
    Category,
    CommentNode,
    CommentSubmission,
    CommentSubmissionResult,
    Post,
    Tag,
)

router = APIRouter(tags=["posts"])

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 160
RELATED_POSTS = 3


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class PostSummary(BaseModel):
    """What a listing card needs to render a post."""

    id: int
    slug: str
    title: str
    excerpt: str
    date: str | None = Field(None, description="Raw publication timestamp")
    display_date: str = Field("", description="e.g. 'January 5, 2024'")
    author: str
    image_url: str | None = None
    image_alt: str = ""
    categories: list[str] = Field(default_factory=list)
    sticky: bool = False


class PostListResponse(BaseModel):
    posts: list[PostSummary]


class PostDetail(PostSummary):
    content: str = ""
    category_terms: list[Category] = Field(default_factory=list)
    tag_terms: list[Tag] = Field(default_factory=list)
    related: list[PostSummary] = Field(default_factory=list)


class CommentTreeResponse(BaseModel):
    total: int
    comments: list[CommentNode]


class CommentForm(BaseModel):
    author_name: str = Field(..., min_length=1)
    author_email: str = Field(..., min_length=3)
    author_url: str = ""
    content: str = Field(..., min_length=1)
    parent: int = Field(0, ge=0)

    @field_validator("author_name", "author_email", "content")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

async def summarize_post(wp, post: Post, image_size: str = "medium") -> PostSummary:
    image_url = await resolve_image_url_async(wp, post, image_size)
    return PostSummary(
        id=post.id,
        slug=post.slug,
        title=strip_html(post.title.rendered if post.title else ""),
        excerpt=get_excerpt_text(post.excerpt.rendered if post.excerpt else "", EXCERPT_LENGTH),
        date=post.date,
        display_date=format_date(post.date),
        author=get_author_name(post),
        image_url=image_url,
        image_alt=get_featured_image_alt(post),
        categories=[category.name for category in get_post_categories(post)],
        sticky=is_sticky(post),
    )


async def summarize_posts(wp, posts: list[Post], image_size: str = "medium") -> list[PostSummary]:
    """Summaries in input order; image lookups run concurrently."""
    return list(await asyncio.gather(*(summarize_post(wp, post, image_size) for post in posts)))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/posts", response_model=PostListResponse)
async def list_posts(
    request: Request,
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, description="Full-text search"),
    category: int | None = Query(None, description="Category id"),
    tag: int | None = Query(None, description="Tag id"),
) -> PostListResponse:
    wp = request.app.state.wp
    options = PostQuery(
        page=page,
        per_page=per_page,
        search=search,
        categories=[category] if category is not None else None,
        tags=[tag] if tag is not None else None,
    )
    posts = await wp.get_posts(options)
    return PostListResponse(posts=await summarize_posts(wp, posts))


@router.get("/posts/{slug}", response_model=PostDetail)
async def get_post(request: Request, slug: str) -> PostDetail:
    wp = request.app.state.wp
    post = await wp.get_post_by_slug(slug)
    if post is None:
        raise HTTPException(status_code=404, detail="Post not found")

    summary, related = await asyncio.gather(
        summarize_post(wp, post, "large"),
        wp.get_posts(PostQuery(per_page=RELATED_POSTS, exclude=[post.id])),
    )
    return PostDetail(
        **summary.model_dump(),
        content=post.content.rendered if post.content else "",
        category_terms=get_post_categories(post),
        tag_terms=get_post_tags(post),
        related=await summarize_posts(wp, related),
    )


@router.get("/posts/{post_id}/comments", response_model=CommentTreeResponse)
async def list_comments(request: Request, post_id: int) -> CommentTreeResponse:
    wp = request.app.state.wp
    comments = await wp.get_comments(
        CommentQuery(post=post_id, per_page=100, order="asc", status="approve")
    )
    return CommentTreeResponse(total=len(comments), comments=build_comment_tree(comments))


@router.post(
    "/posts/{post_id}/comments",
    response_model=CommentSubmissionResult,
    status_code=status.HTTP_202_ACCEPTED,
)
async def submit_comment(
    request: Request,
    post_id: int,
    payload: CommentForm,
) -> CommentSubmissionResult:
    """Forward a comment to WordPress.  It is held for moderation, so it will
    not show up in ``GET /posts/{post_id}/comments`` right away."""
    wp = request.app.state.wp
    result = await wp.submit_comment(
        CommentSubmission(post=post_id, **payload.model_dump())
    )
    if not result.ok:
        logger.warning("Comment on post %s rejected: %s", post_id, result.message)
        raise HTTPException(status_code=502, detail=result.message)
    return result
