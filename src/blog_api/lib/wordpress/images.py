"""Featured-image resolution for posts and pages.

Resolution order for an attachment:

1. the requested size,
2. the first available of ``FALLBACK_SIZES``,
3. the attachment's ``source_url``.

``resolve_image_url`` applies this to the embedded attachment only.
``resolve_image_url_async`` additionally fetches the attachment by id when
the embedded bundle is missing but ``featured_media`` is set.  Some servers
drop ``wp:featuredmedia`` from ``_embedded`` even though the reference is
valid, and this costs exactly one extra request in that case.
"""

import logging
from typing import Protocol

from ...models import ContentItem, Media
from .helpers import strip_html

logger = logging.getLogger(__name__)

FALLBACK_SIZES = ("medium", "large", "medium_large", "thumbnail", "full")


class MediaSource(Protocol):
    async def get_media_by_id(self, media_id: int) -> Media | None: ...


def embedded_media(item: ContentItem) -> Media | None:
    if item.embedded and item.embedded.featured_media:
        return item.embedded.featured_media[0]
    return None


def media_image_url(media: Media, size: str = "medium") -> str | None:
    """Best URL for *media* at *size*, falling back through other sizes."""
    sizes = media.media_details.sizes if media.media_details else {}

    requested = sizes.get(size)
    if requested and requested.source_url:
        return requested.source_url

    for fallback in FALLBACK_SIZES:
        candidate = sizes.get(fallback)
        if candidate and candidate.source_url:
            return candidate.source_url

    return media.source_url or None


def resolve_image_url(item: ContentItem, size: str = "medium") -> str | None:
    media = embedded_media(item)
    if media is None:
        logger.debug(
            "No embedded featured media for item %s (featured_media=%s)",
            item.id,
            item.featured_media,
        )
        return None
    return media_image_url(media, size)


async def resolve_image_url_async(
    source: MediaSource, item: ContentItem, size: str = "medium"
) -> str | None:
    """Like ``resolve_image_url`` but fetches the attachment directly when
    the embedded bundle does not yield a URL."""
    url = resolve_image_url(item, size)
    if url:
        return url

    if not item.featured_media or item.featured_media <= 0:
        return None

    logger.debug("Fetching media %s directly for item %s", item.featured_media, item.id)
    media = await source.get_media_by_id(item.featured_media)
    if media is None:
        return None
    return media_image_url(media, size)


def get_featured_image_alt(item: ContentItem) -> str:
    """Alt text, else the attachment title, else the item's plain title."""
    title = strip_html(item.title.rendered if item.title else "")
    media = embedded_media(item)
    if media is None:
        return title
    if media.alt_text:
        return media.alt_text
    if media.title and media.title.rendered:
        return media.title.rendered
    return title


def has_featured_image(item: ContentItem) -> bool:
    """True when the item references an attachment and it was embedded."""
    return bool(item.featured_media) and embedded_media(item) is not None
