"""Tests for BlogFeedClient, the HTTP client for the public feed."""

from typing import Any
from unittest.mock import MagicMock

import pytest
import requests

from blog_richtext.api import BlogFeedClient, FeedPage
from blog_richtext.errors import FeedApiError
from tests.unit.builders import SAMPLE_RECORD


@pytest.fixture
def client_with_mock_session() -> tuple[BlogFeedClient, MagicMock]:
    """Create a BlogFeedClient over a mocked requests.Session."""
    mock_session = MagicMock()
    client = BlogFeedClient("https://blog.example/api/v1/", session=mock_session, timeout=3.0)
    return client, mock_session


def _make_response(data: Any, status: int = 200) -> MagicMock:
    """Create a mock HTTP response with given JSON body."""
    response = MagicMock()
    response.status_code = status
    response.json.return_value = data
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    return response


def test_base_url_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Without an explicit base URL the BLOG_API_URL variable is used."""
    monkeypatch.setenv("BLOG_API_URL", "https://env.example/api/v1/")
    client = BlogFeedClient(session=MagicMock())
    assert client.base_url == "https://env.example/api/v1"


def test_list_feed_sends_clamped_params(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    mock_session.get.return_value = _make_response(
        {"success": True, "data": {"blogs": [], "nextCursor": None, "hasMore": False}}
    )

    client.list_feed(cursor="abc", limit=500, search="  " + "x" * 150 + "  ")

    call_args = mock_session.get.call_args
    assert call_args.args[0] == "https://blog.example/api/v1/feed"
    params = call_args.kwargs["params"]
    assert params["limit"] == 50
    assert params["cursor"] == "abc"
    assert params["search"] == "x" * 100
    assert call_args.kwargs["timeout"] == 3.0


def test_list_feed_omits_empty_search_and_raises_low_limit(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    mock_session.get.return_value = _make_response({"success": True, "data": {"blogs": []}})

    client.list_feed(limit=0, search="   ")

    params = mock_session.get.call_args.kwargs["params"]
    assert params == {"limit": 1}


def test_list_feed_returns_page(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    summary = {"slug": "a", "title": "A"}
    mock_session.get.return_value = _make_response(
        {"success": True, "data": {"blogs": [summary], "nextCursor": "c2", "hasMore": True}}
    )

    page = client.list_feed()

    assert page == FeedPage(blogs=(summary,), next_cursor="c2", has_more=True)


def test_get_blog_quotes_slug_and_returns_record(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    mock_session.get.return_value = _make_response(
        {"success": True, "data": {"blog": SAMPLE_RECORD}}
    )

    blog = client.get_blog("a b/c")

    assert blog["title"] == "Chai Notes"
    assert mock_session.get.call_args.args[0] == "https://blog.example/api/v1/feed/a%20b%2Fc"


def test_error_envelope_raises_with_code(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    mock_session.get.return_value = _make_response(
        {"success": False, "error": {"code": "NOT_FOUND", "message": "Blog not found"}},
        status=404,
    )

    with pytest.raises(FeedApiError, match="NOT_FOUND") as exc_info:
        client.get_blog("missing")

    assert exc_info.value.code == "NOT_FOUND"
    assert exc_info.value.status == 404


def test_http_error_without_envelope_raises(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    response = _make_response(None, status=502)
    response.json.side_effect = ValueError("not json")
    mock_session.get.return_value = response

    with pytest.raises(FeedApiError, match="HTTP 502") as exc_info:
        client.list_feed()

    assert exc_info.value.status == 502
    assert exc_info.value.code is None


def test_unexpected_body_raises(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    mock_session.get.return_value = _make_response(["not", "a", "dict"])

    with pytest.raises(FeedApiError, match="unexpected body"):
        client.list_feed()


def test_get_blog_without_blog_raises(
    client_with_mock_session: tuple[BlogFeedClient, MagicMock],
) -> None:
    client, mock_session = client_with_mock_session
    mock_session.get.return_value = _make_response({"success": True, "data": {}})

    with pytest.raises(FeedApiError, match="no blog"):
        client.get_blog("x")
