"""Query-string builders for the WordPress collection endpoints.

Each endpoint has an options model whose field names are the query keys the
server expects.  ``build_query`` turns an options instance into a canonical
query string:

* ``None`` options, empty strings and empty lists are omitted, as are
  empty strings inside lists.
* List options are joined with commas (``include=1,2,3``).
* Booleans are sent as ``"true"``/``"false"`` whenever they are set, so
  ``hide_empty=False`` still reaches the server.
* Posts and pages always carry a ``_fields`` projection and an ``_embed``
  directive, and default to ``status=publish``.
"""

from typing import ClassVar, Literal
from urllib.parse import urlencode

from pydantic import BaseModel, ConfigDict, Field

POST_FIELDS = "id,slug,title,excerpt,content,date,author,featured_media,categories,tags,sticky,format,_links,_embedded"
POST_EMBED = "wp:featuredmedia,author,wp:term"

PAGE_FIELDS = "id,slug,title,excerpt,content,date,author,featured_media,parent,menu_order,_links,_embedded"
PAGE_EMBED = "wp:featuredmedia,author"


class ListQuery(BaseModel):
    """Options shared by every paginated collection."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # Implicit parameters sent ahead of the options.
    projection: ClassVar[str | None] = None
    embed: ClassVar[str | None] = None
    leading: ClassVar[tuple[str, ...]] = ()

    per_page: int | None = Field(None, alias="perPage", ge=1, le=100)
    page: int | None = Field(None, ge=1)
    search: str | None = None
    orderby: str | None = None
    order: Literal["asc", "desc"] | None = None
    include: list[int] | None = None
    exclude: list[int] | None = None


class PostQuery(ListQuery):
    projection: ClassVar[str | None] = POST_FIELDS
    embed: ClassVar[str | None] = POST_EMBED
    leading: ClassVar[tuple[str, ...]] = ("status",)

    status: str = "publish"
    author: int | None = None
    categories: list[int] | None = None
    tags: list[int] | None = None
    slug: list[str] | None = None
    before: str | None = None
    after: str | None = None
    sticky: bool | None = None


class PageQuery(ListQuery):
    projection: ClassVar[str | None] = PAGE_FIELDS
    embed: ClassVar[str | None] = PAGE_EMBED
    leading: ClassVar[tuple[str, ...]] = ("status",)

    status: str = "publish"
    author: int | None = None
    parent: int | None = None
    slug: list[str] | None = None


class MediaQuery(ListQuery):
    author: int | None = None
    parent: int | None = None
    media_type: str | None = None
    mime_type: str | None = None


class TagQuery(ListQuery):
    hide_empty: bool | None = None
    slug: list[str] | None = None


class CategoryQuery(TagQuery):
    parent: int | None = None


class UserQuery(ListQuery):
    roles: list[str] | None = None
    slug: list[str] | None = None


class CommentQuery(ListQuery):
    author: int | None = None
    post: int | None = None
    parent: int | None = None
    status: str | None = None
    type: str | None = None


class TaxonomyQuery(BaseModel):
    model_config = ConfigDict(extra="forbid")

    projection: ClassVar[str | None] = None
    embed: ClassVar[str | None] = None
    leading: ClassVar[tuple[str, ...]] = ()

    type: str | None = None


class SearchQuery(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    projection: ClassVar[str | None] = None
    embed: ClassVar[str | None] = None
    leading: ClassVar[tuple[str, ...]] = ()

    search: str = Field(..., min_length=1)
    type: str | None = None
    subtype: str | None = None
    per_page: int | None = Field(None, alias="perPage", ge=1, le=100)
    page: int | None = Field(None, ge=1)


def _serialize(value) -> str | None:
    """Render one option value, or ``None`` when it must be left out."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        items = [str(item) for item in value if item is not None and item != ""]
        return ",".join(items) if items else None
    if isinstance(value, str) and not value:
        return None
    return str(value)


def query_params(options: BaseModel) -> list[tuple[str, str]]:
    """Return the ordered ``(key, value)`` pairs for *options*."""
    params: list[tuple[str, str]] = []
    if options.projection:
        params.append(("_fields", options.projection))
    if options.embed:
        params.append(("_embed", options.embed))
    values = options.model_dump(exclude_none=True)
    keys = [key for key in options.leading if key in values]
    keys += [key for key in values if key not in options.leading]
    for key in keys:
        rendered = _serialize(values[key])
        if rendered is not None:
            params.append((key, rendered))
    return params


def build_query(options: BaseModel) -> str:
    """Build the urlencoded query string for *options*."""
    return urlencode(query_params(options))


def item_query(options_cls: type[BaseModel]) -> str:
    """Query string for a single-item lookup (``/posts/{id}``).

    Only the projection and embed directive apply; there is no status filter.
    """
    params: list[tuple[str, str]] = []
    if options_cls.projection:
        params.append(("_fields", options_cls.projection))
    if options_cls.embed:
        params.append(("_embed", options_cls.embed))
    return urlencode(params)
