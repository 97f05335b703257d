import pytest
from fastapi.testclient import TestClient

from ..main import app


@pytest.fixture
def client(wp):
    """TestClient whose app talks to the fake ``wordpress`` instead of a real site."""
    app.state.wp = wp
    yield TestClient(app)
    try:
        delattr(app.state, "wp")
    except Exception:
        pass


def make_post(post_id: int, slug: str, featured_media: int = 0, embed_media: bool = True, **fields) -> dict:
    post = {
        "id": post_id,
        "slug": slug,
        "title": {"rendered": f"<em>{slug.title()}</em>"},
        "excerpt": {"rendered": f"<p>About {slug}</p>"},
        "content": {"rendered": f"<p>Body of {slug}</p>"},
        "date": "2024-01-05T10:00:00",
        "author": 2,
        "featured_media": featured_media,
        "categories": [3],
        "tags": [4],
        "sticky": False,
        "_embedded": {
            "author": [{"id": 2, "name": "Ada", "slug": "ada"}],
            "wp:term": [
                [{"id": 3, "name": "News", "slug": "news", "taxonomy": "category", "parent": 0}],
                [{"id": 4, "name": "Python", "slug": "python", "taxonomy": "post_tag"}],
            ],
        },
        **fields,
    }
    if featured_media and embed_media:
        post["_embedded"]["wp:featuredmedia"] = [
            {
                "id": featured_media,
                "source_url": f"http://wp.test/{featured_media}.jpg",
                "alt_text": f"image {featured_media}",
                "media_details": {
                    "sizes": {
                        "medium": {"source_url": f"http://wp.test/{featured_media}-m.jpg", "width": 300, "height": 200},
                        "large": {"source_url": f"http://wp.test/{featured_media}-l.jpg", "width": 1024, "height": 683},
                    }
                },
            }
        ]
    return post
