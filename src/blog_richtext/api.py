"""Read-only client for the public blog feed API."""

from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests
from loguru import logger

from blog_richtext.config import (
    API_TIMEOUT_SECONDS,
    FEED_PAGE_MAX,
    FEED_SEARCH_MAX_CHARS,
    resolve_api_base_url,
)
from blog_richtext.errors import FeedApiError


@dataclass(frozen=True)
class FeedPage:
    """One page of published blog summaries."""

    blogs: tuple[dict[str, Any], ...] = ()
    next_cursor: str | None = None
    has_more: bool = False


class BlogFeedClient:
    """Fetches published blogs from the feed endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        session: requests.Session | None = None,
        timeout: float = API_TIMEOUT_SECONDS,
    ) -> None:
        self.base_url = (base_url or resolve_api_base_url()).rstrip("/")
        self.sess = session or requests.Session()
        self.timeout = timeout
        logger.debug("Feed client ready: base_url {!r}", self.base_url)

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = f"{self.base_url}/{path}"
        logger.debug("GET {} {!r}", url, params or {})
        r = self.sess.get(url, params=params, timeout=self.timeout)

        try:
            body = r.json()
        except ValueError:
            body = None

        if isinstance(body, dict) and body.get("success") is False:
            error = body.get("error") or {}
            msg = f"Feed API call failed: {path!r} -> ({error.get('code')!r}, {error.get('message')!r})"
            raise FeedApiError(msg, code=error.get("code"), status=r.status_code)

        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            msg = f"Feed API call failed: {path!r} -> HTTP {r.status_code}"
            raise FeedApiError(msg, status=r.status_code) from e

        if not isinstance(body, dict) or "data" not in body:
            msg = f"Feed API returned an unexpected body for {path!r}"
            raise FeedApiError(msg, status=r.status_code)
        return body["data"]

    def list_feed(
        self,
        *,
        cursor: str | None = None,
        limit: int = 10,
        search: str | None = None,
    ) -> FeedPage:
        """Fetch one page of the public feed, newest first.

        Args:
            cursor: ``next_cursor`` of the previous page.
            limit: Page size, clamped to 1..50.
            search: Title/author filter, trimmed to 100 characters.
        """
        params: dict[str, Any] = {"limit": max(1, min(limit, FEED_PAGE_MAX))}
        if cursor:
            params["cursor"] = cursor
        if search and search.strip():
            params["search"] = search.strip()[:FEED_SEARCH_MAX_CHARS]

        data = self._get("feed", params)
        return FeedPage(
            blogs=tuple(data.get("blogs") or ()),
            next_cursor=data.get("nextCursor"),
            has_more=bool(data.get("hasMore")),
        )

    def get_blog(self, slug: str) -> dict[str, Any]:
        """Fetch a single published blog record, including its content."""
        data = self._get(f"feed/{quote(slug, safe='')}")
        blog = data.get("blog") if isinstance(data, dict) else None
        if not isinstance(blog, dict):
            msg = f"Feed API returned no blog for slug {slug!r}"
            raise FeedApiError(msg)
        return blog
