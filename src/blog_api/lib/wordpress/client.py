"""Async client for the WordPress REST API (``/wp-json/wp/v2``).

Two layers:

* ``request`` / ``fetch_*`` talk to the server and raise ``WordPressAPIError``
  on transport errors, non-2xx statuses, non-JSON responses and bodies that
  do not match the expected model.
* The public ``get_*`` methods catch that error at their boundary, log it and
  degrade: collections to ``[]``, single entities to ``None``, descriptor
  maps to ``{}``.  They never raise for a failed request, and options that
  do not validate degrade the same way.

Every request advertises ``Accept: application/json`` and a
``Cache-Control: max-age`` equal to the configured revalidation window.
"""

import asyncio
import logging
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from ...config import Settings
from ...models import (
    Category,
    Comment,
    CommentSubmission,
    CommentSubmissionResult,
    FullPostData,
    Media,
    Page,
    Post,
    PostType,
    SearchResult,
    Tag,
    Taxonomy,
    User,
)
from .batch import gather_settled
from .query import (
    CategoryQuery,
    CommentQuery,
    MediaQuery,
    PageQuery,
    PostQuery,
    SearchQuery,
    TagQuery,
    TaxonomyQuery,
    UserQuery,
    build_query,
    item_query,
)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Collection endpoint -> (options model, entity model).
COLLECTIONS: dict[str, tuple[type[BaseModel], type[BaseModel]]] = {
    "posts": (PostQuery, Post),
    "pages": (PageQuery, Page),
    "media": (MediaQuery, Media),
    "categories": (CategoryQuery, Category),
    "tags": (TagQuery, Tag),
    "users": (UserQuery, User),
    "comments": (CommentQuery, Comment),
}

COMMENT_SUBMITTED_MESSAGE = (
    "Your comment has been submitted successfully! It may take a moment to appear."
)


class WordPressAPIError(Exception):
    """A request to the WordPress API failed or returned an unusable body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        endpoint: str | None = None,
        detail: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.endpoint = endpoint
        # ``message`` field of a WordPress error body, when there was one.
        self.detail = detail


def _error_detail(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and isinstance(body.get("message"), str):
        return body["message"]
    return None


class WordPressClient:
    """Content access client.  Configuration and logger are fixed at construction.

    An ``httpx.AsyncClient`` may be supplied; otherwise one is created and
    closed by ``aclose`` (or by leaving the ``async with`` block).
    """

    def __init__(
        self,
        settings: Settings,
        http: httpx.AsyncClient | None = None,
        logger: logging.Logger | None = None,
    ):
        self._settings = settings
        self._owns_http = http is None
        self._http = http or httpx.AsyncClient(timeout=settings.timeout_seconds)
        self._logger = logger or logging.getLogger(__name__)

    @property
    def site_url(self) -> str:
        return self._settings.wp_api_base

    @property
    def api_url(self) -> str:
        return self._settings.api_url

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def __aenter__(self) -> "WordPressClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "application/json",
            "Cache-Control": f"max-age={self._settings.revalidate_seconds}",
        }

    async def request(
        self,
        endpoint: str,
        query: str = "",
        *,
        method: str = "GET",
        json: dict | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body."""
        url = f"{self.api_url}/{endpoint}"
        if query:
            url = f"{url}?{query}"
        self._logger.debug("WordPress %s %s", method, url)

        try:
            response = await self._http.request(method, url, headers=self._headers(), json=json)
        except httpx.HTTPError as exc:
            raise WordPressAPIError(
                f"Request to {endpoint} failed: {exc}", endpoint=endpoint
            ) from exc

        if not response.is_success:
            raise WordPressAPIError(
                f"WordPress API error: {response.status_code}",
                status_code=response.status_code,
                endpoint=endpoint,
                detail=_error_detail(response),
            )

        content_type = response.headers.get("content-type", "")
        if "application/json" not in content_type:
            raise WordPressAPIError(
                f"WordPress API returned non-JSON response ({content_type or 'no content type'})",
                status_code=response.status_code,
                endpoint=endpoint,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise WordPressAPIError(
                "WordPress API returned an invalid JSON body",
                status_code=response.status_code,
                endpoint=endpoint,
            ) from exc

    async def fetch_list(self, endpoint: str, query: str, model: type[ModelT]) -> list[ModelT]:
        data = await self.request(endpoint, query)
        if not isinstance(data, list):
            raise WordPressAPIError(f"Expected a JSON array from {endpoint}", endpoint=endpoint)
        try:
            return [model.model_validate(item) for item in data]
        except ValidationError as exc:
            raise WordPressAPIError(f"Unexpected {endpoint} payload: {exc}", endpoint=endpoint) from exc

    async def fetch_item(self, endpoint: str, model: type[ModelT], query: str = "") -> ModelT:
        data = await self.request(endpoint, query)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise WordPressAPIError(f"Unexpected {endpoint} payload: {exc}", endpoint=endpoint) from exc

    async def fetch_mapping(self, endpoint: str, model: type[ModelT], query: str = "") -> dict[str, ModelT]:
        data = await self.request(endpoint, query)
        if not isinstance(data, dict):
            raise WordPressAPIError(f"Expected a JSON object from {endpoint}", endpoint=endpoint)
        try:
            return {key: model.model_validate(value) for key, value in data.items()}
        except ValidationError as exc:
            raise WordPressAPIError(f"Unexpected {endpoint} payload: {exc}", endpoint=endpoint) from exc

    async def fetch_collection(self, name: str, options: BaseModel | None = None) -> list:
        """Raising fetch of a named collection (``posts``, ``tags``, ...)."""
        try:
            options_cls, model = COLLECTIONS[name]
        except KeyError:
            raise ValueError(f"Unknown collection: {name}") from None
        if options is None:
            options = options_cls()
        return await self.fetch_list(name, build_query(options), model)

    # ------------------------------------------------------------------
    # Degrading wrappers
    # ------------------------------------------------------------------

    def _log_failure(self, action: str, exc: WordPressAPIError) -> None:
        self._logger.error(
            "Error %s: %s",
            action,
            exc,
            extra={"endpoint": exc.endpoint, "status_code": exc.status_code},
        )

    def _log_invalid(self, action: str, endpoint: str, exc: ValidationError) -> None:
        self._logger.error(
            "Error %s: invalid options: %s",
            action,
            exc,
            extra={"endpoint": endpoint, "status_code": None},
        )

    async def _list(self, name: str, options: BaseModel | None = None, **kwargs) -> list:
        """Fetch a collection, building its options from *kwargs* when no model is given."""
        try:
            if options is None:
                options = COLLECTIONS[name][0](**kwargs)
            return await self.fetch_collection(name, options)
        except ValidationError as exc:
            self._log_invalid(f"fetching {name}", name, exc)
            return []
        except WordPressAPIError as exc:
            self._log_failure(f"fetching {name}", exc)
            return []

    async def _item(self, endpoint: str, model: type[ModelT], query: str = "") -> ModelT | None:
        try:
            return await self.fetch_item(endpoint, model, query)
        except WordPressAPIError as exc:
            self._log_failure(f"fetching {endpoint}", exc)
            return None

    async def _first_by_slug(self, name: str, slug: str):
        if not slug:
            return None
        items = await self._list(name, slug=[slug])
        return items[0] if items else None

    # ------------------------------------------------------------------
    # Posts and pages
    # ------------------------------------------------------------------

    async def get_posts(self, options: PostQuery | None = None, **kwargs) -> list[Post]:
        return await self._list("posts", options, **kwargs)

    async def get_post_by_id(self, post_id: int) -> Post | None:
        return await self._item(f"posts/{post_id}", Post, item_query(PostQuery))

    async def get_post_by_slug(self, slug: str) -> Post | None:
        return await self._first_by_slug("posts", slug)

    async def get_pages(self, options: PageQuery | None = None, **kwargs) -> list[Page]:
        return await self._list("pages", options, **kwargs)

    async def get_page_by_id(self, page_id: int) -> Page | None:
        return await self._item(f"pages/{page_id}", Page, item_query(PageQuery))

    async def get_page_by_slug(self, slug: str) -> Page | None:
        return await self._first_by_slug("pages", slug)

    # ------------------------------------------------------------------
    # Media
    # ------------------------------------------------------------------

    async def get_media(self, options: MediaQuery | None = None, **kwargs) -> list[Media]:
        return await self._list("media", options, **kwargs)

    async def get_media_by_id(self, media_id: int) -> Media | None:
        if not media_id:
            return None
        return await self._item(f"media/{media_id}", Media)

    # ------------------------------------------------------------------
    # Taxonomy terms
    # ------------------------------------------------------------------

    async def get_categories(self, options: CategoryQuery | None = None, **kwargs) -> list[Category]:
        return await self._list("categories", options, **kwargs)

    async def get_category_by_id(self, category_id: int) -> Category | None:
        return await self._item(f"categories/{category_id}", Category)

    async def get_category_by_slug(self, slug: str) -> Category | None:
        return await self._first_by_slug("categories", slug)

    async def get_tags(self, options: TagQuery | None = None, **kwargs) -> list[Tag]:
        return await self._list("tags", options, **kwargs)

    async def get_tag_by_id(self, tag_id: int) -> Tag | None:
        return await self._item(f"tags/{tag_id}", Tag)

    async def get_tag_by_slug(self, slug: str) -> Tag | None:
        return await self._first_by_slug("tags", slug)

    # ------------------------------------------------------------------
    # Users and comments
    # ------------------------------------------------------------------

    async def get_users(self, options: UserQuery | None = None, **kwargs) -> list[User]:
        return await self._list("users", options, **kwargs)

    async def get_user_by_id(self, user_id: int) -> User | None:
        return await self._item(f"users/{user_id}", User)

    async def get_comments(self, options: CommentQuery | None = None, **kwargs) -> list[Comment]:
        return await self._list("comments", options, **kwargs)

    async def get_comment_by_id(self, comment_id: int) -> Comment | None:
        return await self._item(f"comments/{comment_id}", Comment)

    async def submit_comment(self, submission: CommentSubmission) -> CommentSubmissionResult:
        """Post a new comment.  It is created with status ``hold`` and awaits moderation."""
        try:
            data = await self.request("comments", method="POST", json=submission.model_dump())
        except WordPressAPIError as exc:
            self._log_failure("submitting comment", exc)
            if exc.status_code is None:
                message = "Network error. Please check your connection and try again."
            else:
                message = exc.detail or (
                    f"Failed to submit comment ({exc.status_code}). "
                    "Comments may be disabled or require approval."
                )
            return CommentSubmissionResult(ok=False, message=message, status_code=exc.status_code)

        try:
            comment = Comment.model_validate(data)
        except ValidationError:
            self._logger.warning("Comment accepted but response body was not a comment")
            comment = None
        return CommentSubmissionResult(ok=True, message=COMMENT_SUBMITTED_MESSAGE, comment=comment)

    # ------------------------------------------------------------------
    # Descriptors, search and settings
    # ------------------------------------------------------------------

    async def get_taxonomies(self, options: TaxonomyQuery | None = None, **kwargs) -> dict[str, Taxonomy]:
        try:
            query = build_query(options or TaxonomyQuery(**kwargs))
            return await self.fetch_mapping("taxonomies", Taxonomy, query)
        except ValidationError as exc:
            self._log_invalid("fetching taxonomies", "taxonomies", exc)
            return {}
        except WordPressAPIError as exc:
            self._log_failure("fetching taxonomies", exc)
            return {}

    async def get_post_types(self) -> dict[str, PostType]:
        try:
            return await self.fetch_mapping("types", PostType)
        except WordPressAPIError as exc:
            self._log_failure("fetching post types", exc)
            return {}

    async def search(self, options: SearchQuery | None = None, **kwargs) -> list[SearchResult]:
        try:
            query = build_query(options or SearchQuery(**kwargs))
            return await self.fetch_list("search", query, SearchResult)
        except ValidationError as exc:
            self._log_invalid("searching content", "search", exc)
            return []
        except WordPressAPIError as exc:
            self._log_failure("searching content", exc)
            return []

    async def get_settings(self) -> dict:
        """Site settings.  Usually requires authentication, so ``{}`` is common."""
        try:
            data = await self.request("settings")
        except WordPressAPIError as exc:
            self._log_failure("fetching settings", exc)
            return {}
        return data if isinstance(data, dict) else {}

    # ------------------------------------------------------------------
    # Aggregates
    # ------------------------------------------------------------------

    async def get_full_post_data(self, post_id: int) -> FullPostData | None:
        """Load a post and, concurrently, its categories, tags, author and
        approved comments.  Each related lookup degrades on its own."""
        post = await self.get_post_by_id(post_id)
        if post is None:
            return None

        async def by_ids(fetch, ids):
            found = await asyncio.gather(*(fetch(item_id) for item_id in ids))
            return [item for item in found if item is not None]

        async def no_author():
            return None

        related = await gather_settled({
            "categories": by_ids(self.get_category_by_id, post.categories),
            "tags": by_ids(self.get_tag_by_id, post.tags),
            "author": self.get_user_by_id(post.author) if post.author else no_author(),
            "comments": self.get_comments(CommentQuery(post=post_id, status="approve")),
        })
        for name, outcome in related.items():
            if not outcome.ok:
                self._logger.error("Error loading %s for post %s: %s", name, post_id, outcome.error)

        return FullPostData(
            post=post,
            categories=related["categories"].value or [],
            tags=related["tags"].value or [],
            author=related["author"].value,
            comments=related["comments"].value or [],
        )
