"""WordPress REST API content access.

Query building, entity fetchers, featured-image resolution, concurrent batch
loading and pure helpers over fetched entities.
"""

from .batch import BatchRequest, BatchResult, Settled, fetch_many, gather_settled
from .client import WordPressAPIError, WordPressClient
from .images import (
    get_featured_image_alt,
    has_featured_image,
    resolve_image_url,
    resolve_image_url_async,
)
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
)

__all__ = [
    "BatchRequest",
    "BatchResult",
    "Settled",
    "fetch_many",
    "gather_settled",
    "WordPressAPIError",
    "WordPressClient",
    "get_featured_image_alt",
    "has_featured_image",
    "resolve_image_url",
    "resolve_image_url_async",
    "CategoryQuery",
    "CommentQuery",
    "MediaQuery",
    "PageQuery",
    "PostQuery",
    "SearchQuery",
    "TagQuery",
    "TaxonomyQuery",
    "UserQuery",
    "build_query",
]
