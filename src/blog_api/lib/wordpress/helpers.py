"""Pure helpers over entities that have already been fetched.

None of these raise: missing or malformed input yields an empty string, an
empty list or a fixed fallback value.
"""

import re
from datetime import datetime

from ...models import Category, Comment, CommentNode, ContentItem, Post, Tag

UNKNOWN_AUTHOR = "Unknown Author"

_TAG_RE = re.compile(r"<[^>]*>")

MONTHS = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def strip_html(html: str | None) -> str:
    """Remove ``<...>`` sequences.  Entities are left as they are."""
    if not html:
        return ""
    return _TAG_RE.sub("", html)


def truncate_text(text: str | None, length: int = 150) -> str:
    if not text:
        return ""
    if len(text) <= length:
        return text
    return text[:length].strip() + "..."


def get_excerpt_text(excerpt: str | None, length: int | None = None) -> str:
    """Plain-text excerpt, optionally truncated to *length* characters."""
    plain = strip_html(excerpt)
    return truncate_text(plain, length) if length else plain


def _parse_date(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def format_date(value: str | None) -> str:
    """``2024-01-05T10:00:00`` -> ``January 5, 2024``."""
    parsed = _parse_date(value)
    if parsed is None:
        return ""
    return f"{MONTHS[parsed.month - 1]} {parsed.day}, {parsed.year}"


def format_date_time(value: str | None) -> str:
    """``2024-01-05T15:07:00`` -> ``January 5, 2024 at 3:07 PM``."""
    parsed = _parse_date(value)
    if parsed is None:
        return ""
    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return f"{format_date(value)} at {hour}:{parsed.minute:02d} {meridiem}"


def get_relative_time(value: str | None, now: datetime | None = None) -> str:
    """Coarse "time ago" label such as ``3 hours ago``."""
    parsed = _parse_date(value)
    if parsed is None:
        return ""
    if now is None:
        now = datetime.now(parsed.tzinfo)
    try:
        seconds = int((now - parsed).total_seconds())
    except TypeError:
        # naive vs aware timestamps
        return ""

    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60} minutes ago"
    if seconds < 86400:
        return f"{seconds // 3600} hours ago"
    if seconds < 2592000:
        return f"{seconds // 86400} days ago"
    if seconds < 31536000:
        return f"{seconds // 2592000} months ago"
    return f"{seconds // 31536000} years ago"


def generate_slug(text: str | None) -> str:
    if not text:
        return ""
    slug = re.sub(r"[^a-z0-9 -]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip()


def is_sticky(post: Post) -> bool:
    return bool(post.sticky)


def has_post_format(post: Post, post_format: str) -> bool:
    return post.format == post_format


def get_author_name(item: ContentItem) -> str:
    embedded = item.embedded
    if embedded and embedded.author and embedded.author[0].name:
        return embedded.author[0].name
    return UNKNOWN_AUTHOR


def get_post_categories(post: ContentItem) -> list[Category]:
    """Categories from the first embedded term group.

    A term is a category when it carries a ``parent`` field.
    """
    if not post.embedded or not post.embedded.terms:
        return []
    return [term for term in post.embedded.terms[0] if isinstance(term, Category)]


def get_post_tags(post: ContentItem) -> list[Tag]:
    """Terms without a ``parent`` field, from every embedded term group."""
    if not post.embedded:
        return []
    return [
        term
        for group in post.embedded.terms
        for term in group
        if isinstance(term, Tag)
    ]


def build_comment_tree(comments: list[Comment]) -> list[CommentNode]:
    """Nest *comments* under their parents, preserving input order.

    Replies whose parent is not in *comments* are promoted to the top level.
    """
    nodes = {comment.id: CommentNode(comment=comment) for comment in comments}
    roots: list[CommentNode] = []
    for comment in comments:
        node = nodes[comment.id]
        parent = nodes.get(comment.parent) if comment.parent else None
        if parent is None or parent is node:
            roots.append(node)
        else:
            parent.replies.append(node)
    return roots
