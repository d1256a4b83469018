"""Tests for the blog-richtext CLI."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import patch

import pytest
from loguru import logger
from typer.testing import CliRunner

from blog_richtext.cli import app
from tests.unit.builders import SAMPLE_DOC, SAMPLE_RECORD, TRUSTED_IMAGE, doc, para, text
from tests.unit.fakes import FakeFeedClient

runner = CliRunner()


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    """Drop the sink the CLI callback bound to the runner's stderr."""
    yield
    logger.remove()


@pytest.fixture
def fake_client() -> Iterator[FakeFeedClient]:
    client = FakeFeedClient()
    client.add_blog(SAMPLE_RECORD)
    with patch("blog_richtext.cli._make_client", return_value=client):
        yield client


def _write_json(path: Path, data: Any) -> Path:
    path.write_text(json.dumps(data))
    return path


def test_stats_counts_record_title(sample_record_file: Path) -> None:
    result = runner.invoke(app, ["stats", str(sample_record_file)])
    assert result.exit_code == 0
    assert "12 words · 1 min read" in result.stdout
    assert "6 blocks" in result.stdout


def test_stats_json_with_title_override(sample_record_file: Path) -> None:
    result = runner.invoke(app, ["stats", str(sample_record_file), "--json", "--title", ""])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["word_count"] == 10
    assert data["reading_time"] == 1
    assert data["block_count"] == 6
    assert data["content_size"] > 0


def test_stats_missing_file_exits_1(tmp_path: Path) -> None:
    result = runner.invoke(app, ["stats", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_preview(sample_doc_file: Path) -> None:
    result = runner.invoke(app, ["preview", str(sample_doc_file)])
    assert result.exit_code == 0
    assert result.stdout.strip() == "Hello  world Foo bar baz"


def test_preview_fallback(tmp_path: Path) -> None:
    path = _write_json(tmp_path / "empty.json", doc())
    result = runner.invoke(app, ["preview", str(path), "--fallback", "Nothing yet"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "Nothing yet"


def test_cover_resolves_trusted_image(sample_doc_file: Path) -> None:
    result = runner.invoke(app, ["cover", str(sample_doc_file)])
    assert result.exit_code == 0
    assert result.stdout.strip() == TRUSTED_IMAGE


def test_cover_prefers_record_cover(tmp_path: Path) -> None:
    record = {**SAMPLE_RECORD, "coverImage": "https://cdn.example/hero.jpg"}
    path = _write_json(tmp_path / "record.json", record)
    result = runner.invoke(app, ["cover", str(path)])
    assert result.stdout.strip() == "https://cdn.example/hero.jpg"

    result = runner.invoke(app, ["cover", str(path), "-e", "https://other.example/x.png"])
    assert result.stdout.strip() == "https://other.example/x.png"


def test_cover_without_image_exits_1(tmp_path: Path) -> None:
    path = _write_json(tmp_path / "plain.json", doc(para(text("no images"))))
    result = runner.invoke(app, ["cover", str(path)])
    assert result.exit_code == 1
    assert "No cover image." in result.stdout


def test_render_web_html(sample_doc_file: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_doc_file)])
    assert result.exit_code == 0
    assert "<h1>Chai and code</h1>" in result.stdout
    assert 'class="external-image"' in result.stdout


def test_render_mobile_outputs_tree(sample_doc_file: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_doc_file), "--target", "mobile"])
    assert result.exit_code == 0
    tree = json.loads(result.stdout)
    assert tree["tag"] == "View"
    assert tree["props"] == {"variant": "content"}


def test_render_web_json(sample_doc_file: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_doc_file), "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["props"] == {"class": "prose-content"}


def test_render_unknown_target_exits_1(sample_doc_file: Path) -> None:
    result = runner.invoke(app, ["render", str(sample_doc_file), "--target", "tv"])
    assert result.exit_code == 1


def test_render_skip_cover(tmp_path: Path) -> None:
    path = _write_json(tmp_path / "record.json", {**SAMPLE_RECORD, "coverImage": TRUSTED_IMAGE})

    kept = runner.invoke(app, ["render", str(path)])
    skipped = runner.invoke(app, ["render", str(path), "--skip-cover"])

    assert TRUSTED_IMAGE in kept.stdout
    assert TRUSTED_IMAGE not in skipped.stdout


def test_to_text(sample_record_file: Path) -> None:
    result = runner.invoke(app, ["to-text", str(sample_record_file)])
    assert result.exit_code == 0
    assert result.stdout == "Chai and code\n\nHello world\n\nFoo bar baz\n"


def test_from_text(tmp_path: Path) -> None:
    path = tmp_path / "note.txt"
    path.write_text("One\n\nTwo")
    result = runner.invoke(app, ["from-text", str(path)])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["type"] == "doc"
    assert [p["content"][0]["text"] for p in data["content"]] == ["One", "Two"]


def test_from_text_missing_file_exits_1(tmp_path: Path) -> None:
    result = runner.invoke(app, ["from-text", str(tmp_path / "missing.txt")])
    assert result.exit_code == 1


def test_validate_ok(sample_record_file: Path) -> None:
    result = runner.invoke(app, ["validate", str(sample_record_file)])
    assert result.exit_code == 0
    assert result.stdout.startswith("OK (")


def test_validate_rejects_long_title(sample_doc_file: Path) -> None:
    result = runner.invoke(app, ["validate", str(sample_doc_file), "--title", "t" * 201])
    assert result.exit_code == 1
    assert "Invalid: Title too long" in result.stdout


def test_validate_rejects_too_many_tags(sample_doc_file: Path) -> None:
    args = ["validate", str(sample_doc_file)]
    for i in range(6):
        args += ["--tag", f"t{i}"]
    result = runner.invoke(app, args)
    assert result.exit_code == 1
    assert "Maximum 5 tags" in result.stdout


def test_fetch_prints_summary(fake_client: FakeFeedClient) -> None:
    result = runner.invoke(app, ["fetch", "chai-notes-abc123"])
    assert result.exit_code == 0
    assert "Chai Notes  by Priya" in result.stdout
    assert "12 words · 1 min read" in result.stdout
    assert "Hello  world Foo bar baz" in result.stdout
    assert fake_client.calls == [("get_blog", {"slug": "chai-notes-abc123"})]


def test_fetch_render(fake_client: FakeFeedClient) -> None:
    result = runner.invoke(app, ["fetch", "chai-notes-abc123", "--render"])
    assert result.exit_code == 0
    assert "<h1>Chai and code</h1>" in result.stdout


def test_fetch_json(fake_client: FakeFeedClient) -> None:
    result = runner.invoke(app, ["fetch", "chai-notes-abc123", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["content"] == SAMPLE_DOC


def test_fetch_unknown_slug_exits_1(fake_client: FakeFeedClient) -> None:
    result = runner.invoke(app, ["fetch", "nope"])
    assert result.exit_code == 1


def test_feed_lists_blogs(fake_client: FakeFeedClient) -> None:
    result = runner.invoke(app, ["feed", "--limit", "5", "--search", "chai"])
    assert result.exit_code == 0
    assert "1 blogs:" in result.stdout
    assert "Chai Notes  [chai-notes-abc123]" in result.stdout
    assert fake_client.calls == [("list_feed", {"cursor": None, "limit": 5, "search": "chai"})]


def test_serve_help() -> None:
    result = runner.invoke(app, ["serve", "--help"])
    assert result.exit_code == 0
