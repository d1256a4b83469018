"""Checks applied to a blog payload before it is persisted."""

import json
import re
import time
from collections.abc import Sequence
from typing import Any

from blog_richtext.config import (
    MAX_CONTENT_CHARS,
    MAX_DESCRIPTION_CHARS,
    MAX_TAG_CHARS,
    MAX_TAGS,
    MAX_TITLE_CHARS,
)
from blog_richtext.core.importer.json_reader import document_to_dict
from blog_richtext.errors import ContentValidationError
from blog_richtext.models.node import Document

_SLUG_JUNK_RE = re.compile(r"[^a-z0-9]+")
_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def content_size(content: Any) -> int:
    """Length of the compact JSON serialization of the content.

    Parsed Documents are serialized back to TipTap JSON first; raw content
    is measured as stored. ``None`` counts as ``{}``.

    Raises:
        ContentValidationError: Raw content is nested too deeply to encode.
    """
    if isinstance(content, Document):
        content = document_to_dict(content)
    elif content is None:
        content = {}
    try:
        return len(json.dumps(content, separators=(",", ":"), ensure_ascii=False))
    except RecursionError as e:
        msg = "Content is nested too deeply."
        raise ContentValidationError(msg) from e


def validate_blog_payload(
    *,
    title: str | None = None,
    description: str | None = None,
    tags: Sequence[str] | None = None,
    content: Any = None,
) -> None:
    """Raise ContentValidationError if the payload breaks a storage limit.

    Raises:
        ContentValidationError: Title, description, tags or content are
            too large.
    """
    if title and len(title) > MAX_TITLE_CHARS:
        msg = f"Title too long. Maximum {MAX_TITLE_CHARS} characters."
        raise ContentValidationError(msg)

    if description and len(description) > MAX_DESCRIPTION_CHARS:
        msg = f"Description too long. Maximum {MAX_DESCRIPTION_CHARS} characters."
        raise ContentValidationError(msg)

    if tags and (len(tags) > MAX_TAGS or any(len(t) > MAX_TAG_CHARS for t in tags)):
        msg = f"Maximum {MAX_TAGS} tags allowed, each up to {MAX_TAG_CHARS} characters."
        raise ContentValidationError(msg)

    if content_size(content) > MAX_CONTENT_CHARS:
        msg = "Content too large. Please reduce the blog size."
        raise ContentValidationError(msg)


def _base36(value: int) -> str:
    if value == 0:
        return "0"
    digits: list[str] = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_slug(title: str, now: float | None = None) -> str:
    """Build a URL slug from a title, made unique by a base-36 timestamp.

    Args:
        title: Blog title.
        now: Unix time in seconds; defaults to the current time.
    """
    stamp = int((time.time() if now is None else now) * 1000)
    base = _SLUG_JUNK_RE.sub("-", title.lower()).strip("-")
    return f"{base}-{_base36(stamp)}"
