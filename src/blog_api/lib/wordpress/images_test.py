"""Tests for featured-image resolution."""

import pytest

from ...models import Media, Post
from .images import (
    get_featured_image_alt,
    has_featured_image,
    media_image_url,
    resolve_image_url,
    resolve_image_url_async,
)


def make_media(sizes: dict | None = None, **fields) -> dict:
    media = {"id": 42, "source_url": "http://wp.test/original.jpg", **fields}
    if sizes is not None:
        media["media_details"] = {
            "sizes": {name: {"source_url": url, "width": 1, "height": 1} for name, url in sizes.items()}
        }
    return media


def make_post(media: dict | None = None, featured_media: int = 42, **fields) -> Post:
    data = {
        "id": 1,
        "slug": "p",
        "title": {"rendered": "<b>Post</b> title"},
        "featured_media": featured_media,
        **fields,
    }
    if media is not None:
        data["_embedded"] = {"wp:featuredmedia": [media]}
    return Post.model_validate(data)


class FakeMediaSource:
    def __init__(self, media: dict | None = None):
        self.media = Media.model_validate(media) if media else None
        self.calls: list[int] = []

    async def get_media_by_id(self, media_id: int):
        self.calls.append(media_id)
        return self.media


# ---------------------------------------------------------------------------
# Synchronous path
# ---------------------------------------------------------------------------

class TestResolveImageUrl:
    def test_requested_size(self):
        post = make_post(make_media({"medium": "m.jpg", "large": "l.jpg"}))
        assert resolve_image_url(post, "large") == "l.jpg"

    def test_falls_back_to_full_when_only_full_exists(self):
        post = make_post(make_media({"full": "full.jpg"}))
        assert resolve_image_url(post, "medium") == "full.jpg"

    def test_fallback_order(self):
        post = make_post(make_media({"thumbnail": "t.jpg", "medium_large": "ml.jpg", "large": "l.jpg"}))
        # requested size missing: medium, then large
        assert resolve_image_url(post, "full") == "l.jpg"

        post = make_post(make_media({"thumbnail": "t.jpg", "medium_large": "ml.jpg"}))
        assert resolve_image_url(post, "full") == "ml.jpg"

    def test_source_url_when_no_sizes(self):
        post = make_post(make_media())
        assert resolve_image_url(post) == "http://wp.test/original.jpg"

    def test_ignores_sizes_without_url(self):
        media = make_media()
        media["media_details"] = {"sizes": {"medium": {"width": 10, "height": 10}}}
        assert resolve_image_url(make_post(media)) == "http://wp.test/original.jpg"

    def test_no_embedded_bundle(self):
        assert resolve_image_url(make_post()) is None

    def test_media_image_url_without_source(self):
        media = Media.model_validate({"id": 1})
        assert media_image_url(media) is None


# ---------------------------------------------------------------------------
# Extended path
# ---------------------------------------------------------------------------

class TestResolveImageUrlAsync:
    @pytest.mark.asyncio
    async def test_fetches_media_when_bundle_missing(self):
        source = FakeMediaSource(make_media({"medium": "direct-medium.jpg"}))
        post = make_post(featured_media=42)

        url = await resolve_image_url_async(source, post, "medium")

        assert url == "direct-medium.jpg"
        assert source.calls == [42]

    @pytest.mark.asyncio
    async def test_fetched_media_uses_fallback_chain(self):
        source = FakeMediaSource(make_media({"thumbnail": "t.jpg"}))
        url = await resolve_image_url_async(source, make_post(), "large")
        assert url == "t.jpg"

    @pytest.mark.asyncio
    async def test_embedded_bundle_avoids_extra_request(self):
        source = FakeMediaSource(make_media({"medium": "other.jpg"}))
        post = make_post(make_media({"medium": "embedded.jpg"}))
        assert await resolve_image_url_async(source, post) == "embedded.jpg"
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_no_featured_media_reference(self):
        source = FakeMediaSource(make_media({"medium": "m.jpg"}))
        assert await resolve_image_url_async(source, make_post(featured_media=0)) is None
        assert source.calls == []

    @pytest.mark.asyncio
    async def test_media_lookup_fails(self):
        source = FakeMediaSource(None)
        assert await resolve_image_url_async(source, make_post()) is None
        assert source.calls == [42]


# ---------------------------------------------------------------------------
# Alt text and predicate
# ---------------------------------------------------------------------------

class TestAltText:
    def test_prefers_alt_text(self):
        post = make_post(make_media(alt_text="A cat", title={"rendered": "cat.jpg"}))
        assert get_featured_image_alt(post) == "A cat"

    def test_falls_back_to_media_title(self):
        post = make_post(make_media(alt_text="", title={"rendered": "cat.jpg"}))
        assert get_featured_image_alt(post) == "cat.jpg"

    def test_falls_back_to_post_title(self):
        post = make_post(make_media(alt_text=""))
        assert get_featured_image_alt(post) == "Post title"

    def test_without_media(self):
        assert get_featured_image_alt(make_post()) == "Post title"


class TestHasFeaturedImage:
    def test_reference_and_bundle(self):
        assert has_featured_image(make_post(make_media())) is True

    def test_reference_without_bundle(self):
        assert has_featured_image(make_post(featured_media=42)) is False

    def test_bundle_without_reference(self):
        assert has_featured_image(make_post(make_media(), featured_media=0)) is False
