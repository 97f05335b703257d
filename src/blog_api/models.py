"""Typed records for the entities served by the WordPress REST API.

Every model ignores fields the client does not consume, so the same model
parses both ``_fields``-projected responses and full responses.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WPModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Rendered(WPModel):
    """WordPress ``{"rendered": ...}`` wrapper."""

    rendered: str = ""


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

class MediaSize(WPModel):
    source_url: str | None = None
    width: int | None = None
    height: int | None = None


class MediaDetails(WPModel):
    width: int | None = None
    height: int | None = None
    file: str | None = None
    # Only the sizes the server actually generated are present.
    sizes: dict[str, MediaSize] = Field(default_factory=dict)


class Media(WPModel):
    """A media attachment (``/wp/v2/media``)."""

    id: int
    source_url: str | None = None
    slug: str | None = None
    date: str | None = None
    title: Rendered | None = None
    alt_text: str | None = None
    media_type: str | None = None
    mime_type: str | None = None
    media_details: MediaDetails | None = None
    post: int | None = None

    @field_validator("media_details", mode="before")
    @classmethod
    def _empty_details(cls, value: Any) -> Any:
        # Non-image attachments report ``media_details`` as an empty array.
        if not isinstance(value, dict):
            return None
        return value


# ---------------------------------------------------------------------------
# Taxonomy terms, users, comments
# ---------------------------------------------------------------------------

class Term(WPModel):
    id: int
    name: str = ""
    slug: str = ""
    count: int | None = None
    description: str | None = None
    link: str | None = None
    taxonomy: str | None = None


class Category(Term):
    """Hierarchical taxonomy term.  ``parent`` is 0 for top-level categories."""

    parent: int = 0


class Tag(Term):
    """Flat taxonomy term."""


class User(WPModel):
    id: int
    name: str = ""
    slug: str = ""
    url: str | None = None
    description: str | None = None
    link: str | None = None
    # Keyed by pixel size: "24", "48", "96".
    avatar_urls: dict[str, str] = Field(default_factory=dict)


class Comment(WPModel):
    id: int
    post: int
    parent: int = 0
    author: int | None = None
    author_name: str = ""
    author_url: str | None = None
    date: str | None = None
    content: Rendered | None = None
    link: str | None = None
    status: str | None = None
    author_avatar_urls: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Content items
# ---------------------------------------------------------------------------

def _entities_only(value: Any) -> Any:
    # The server embeds error objects (``{"code": "rest_forbidden", ...}``)
    # in place of entities the current user may not read.
    if isinstance(value, list):
        return [item for item in value if not isinstance(item, dict) or "id" in item]
    return value


class Embedded(WPModel):
    """Side-loaded related entities returned when ``_embed`` is requested."""

    featured_media: list[Media] = Field(default_factory=list, alias="wp:featuredmedia")
    author: list[User] = Field(default_factory=list)
    terms: list[list[Category | Tag]] = Field(default_factory=list, alias="wp:term")

    @field_validator("featured_media", "author", mode="before")
    @classmethod
    def _drop_errors(cls, value: Any) -> Any:
        return _entities_only(value)

    @field_validator("terms", mode="before")
    @classmethod
    def _split_terms(cls, value: Any) -> Any:
        """Parse each term as a ``Category`` when it carries ``parent``, else a ``Tag``."""
        if not isinstance(value, list):
            return []
        groups = []
        for group in value:
            terms = []
            for term in _entities_only(group if isinstance(group, list) else []):
                if isinstance(term, dict):
                    model = Category if "parent" in term else Tag
                    term = model.model_validate(term)
                terms.append(term)
            groups.append(terms)
        return groups


class ContentItem(WPModel):
    """Fields shared by posts and pages."""

    id: int
    slug: str = ""
    status: str | None = None
    link: str | None = None
    date: str | None = None
    title: Rendered | None = None
    excerpt: Rendered | None = None
    content: Rendered | None = None
    author: int | None = None
    # 0 means the item has no featured image.
    featured_media: int = 0
    embedded: Embedded | None = Field(None, alias="_embedded")


class Post(ContentItem):
    categories: list[int] = Field(default_factory=list)
    tags: list[int] = Field(default_factory=list)
    sticky: bool | None = None
    format: str | None = None


class Page(ContentItem):
    parent: int | None = None
    menu_order: int | None = None


# ---------------------------------------------------------------------------
# Descriptors and search
# ---------------------------------------------------------------------------

class Taxonomy(WPModel):
    name: str
    slug: str
    description: str | None = None
    types: list[str] = Field(default_factory=list)
    hierarchical: bool = False
    rest_base: str | None = None
    rest_namespace: str | None = None


class PostType(WPModel):
    name: str
    slug: str
    description: str | None = None
    hierarchical: bool = False
    taxonomies: list[str] = Field(default_factory=list)
    rest_base: str | None = None
    rest_namespace: str | None = None


class SearchResult(WPModel):
    """Lightweight projection returned by ``/wp/v2/search``."""

    id: int
    title: str = ""
    url: str = ""
    type: str | None = None
    subtype: str | None = None


# ---------------------------------------------------------------------------
# Comment submission
# ---------------------------------------------------------------------------

class CommentSubmission(WPModel):
    """Body of ``POST /wp/v2/comments``.  New comments always await moderation."""

    post: int
    author_name: str
    author_email: str
    author_url: str = ""
    content: str
    parent: int = 0
    status: Literal["hold"] = "hold"


class CommentSubmissionResult(WPModel):
    ok: bool
    message: str
    status_code: int | None = None
    comment: Comment | None = None


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

class CommentNode(WPModel):
    """A comment together with its nested replies."""

    comment: Comment
    replies: list["CommentNode"] = Field(default_factory=list)


class FullPostData(WPModel):
    """A post with its categories, tags, author and approved comments fetched
    individually rather than from the embedded bundle."""

    post: Post
    categories: list[Category] = Field(default_factory=list)
    tags: list[Tag] = Field(default_factory=list)
    author: User | None = None
    comments: list[Comment] = Field(default_factory=list)
