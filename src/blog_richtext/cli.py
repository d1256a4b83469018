"""CLI for blog rich content (stats, previews, rendering, feed fetch, MCP server)."""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from loguru import logger

from blog_richtext.api import BlogFeedClient
from blog_richtext.config import DEFAULT_PREVIEW_FALLBACK, FEED_PREVIEW_CHARS
from blog_richtext.core.importer.json_reader import (
    document_to_dict,
    load_document_file,
    parse_document,
    read_blog_file,
)
from blog_richtext.core.media.images import resolve_cover_image
from blog_richtext.core.render.mobile import MobileTarget
from blog_richtext.core.render.projection import render_blog
from blog_richtext.core.render.web import WebTarget, to_html
from blog_richtext.core.text.metrics import document_stats, preview_text
from blog_richtext.core.text.plaintext import from_plain_text, to_plain_text
from blog_richtext.core.validation import content_size, validate_blog_payload
from blog_richtext.errors import ContentValidationError, DocumentLoadError, FeedApiError
from blog_richtext.logging_config import configure_logging
from blog_richtext.models.node import Document
from blog_richtext.protocols import FeedClientProtocol

app = typer.Typer(help="Blog rich content: metrics, previews, rendering and the public feed.")

FileArg = Annotated[Path, typer.Argument(help="TipTap document JSON, or a blog record JSON")]


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def _load(path: Path) -> tuple[Document, dict[str, Any]]:
    """Load a document file, exiting with status 1 if it cannot be read."""
    try:
        return load_document_file(path)
    except DocumentLoadError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e


def _make_client() -> FeedClientProtocol:
    return BlogFeedClient()


def _render(doc: Document, target: str, as_json: bool, cover_image: str | None) -> str:
    if target not in ("web", "mobile"):
        logger.error("Unknown target {!r}, use 'web' or 'mobile'", target)
        raise typer.Exit(1)
    render_target = WebTarget() if target == "web" else MobileTarget()
    tree = render_blog(doc, render_target, cover_image)
    if as_json or target == "mobile":
        return json.dumps(tree.to_dict(), indent=2, ensure_ascii=False)
    return to_html(tree)


@app.command()
def stats(
    path: FileArg,
    title: Annotated[
        str | None,
        typer.Option("--title", "-t", help="Title counted with the body (default: record title)"),
    ] = None,
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show word count and reading time."""
    doc, record = _load(path)
    effective_title = title if title is not None else str(record.get("title") or "")
    result = document_stats(doc, effective_title)

    if output_json:
        data = {
            "word_count": result.word_count,
            "reading_time": result.reading_time,
            "char_count": result.char_count,
            "block_count": result.block_count,
            "content_size": content_size(doc),
        }
        typer.echo(json.dumps(data, indent=2))
    else:
        typer.echo(f"{result.word_count} words · {result.reading_time} min read")
        typer.echo(f"  {result.block_count} blocks, {result.char_count} characters of text")


@app.command()
def preview(
    path: FileArg,
    max_chars: int = typer.Option(FEED_PREVIEW_CHARS, "--max-chars", "-n", help="Snippet length"),
    fallback: str = typer.Option(
        DEFAULT_PREVIEW_FALLBACK, "--fallback", help="Shown when there is no paragraph text"
    ),
) -> None:
    """Print the listing-card preview snippet."""
    doc, _record = _load(path)
    typer.echo(preview_text(doc, max_chars, fallback))


@app.command()
def cover(
    path: FileArg,
    explicit: Annotated[
        str | None,
        typer.Option("--explicit", "-e", help="Explicit cover image (default: record coverImage)"),
    ] = None,
) -> None:
    """Print the resolved cover image URL."""
    doc, record = _load(path)
    stored = record.get("coverImage")
    explicit_cover = explicit or (stored if isinstance(stored, str) else None)
    url = resolve_cover_image(doc, explicit_cover)
    if url is None:
        typer.echo("No cover image.")
        raise typer.Exit(1)
    typer.echo(url)


@app.command()
def render(
    path: FileArg,
    target: str = typer.Option("web", "--target", "-T", help="'web' or 'mobile'"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output the element tree as JSON"),
    skip_cover: bool = typer.Option(
        False, "--skip-cover", help="Skip the in-body copy of the record's cover image"
    ),
) -> None:
    """Render a document as HTML (web) or an element tree (mobile)."""
    doc, record = _load(path)
    stored = record.get("coverImage")
    cover_image = stored if skip_cover and isinstance(stored, str) else None
    typer.echo(_render(doc, target, output_json, cover_image))


@app.command(name="to-text")
def to_text(path: FileArg) -> None:
    """Convert a document to the flat editor text."""
    doc, _record = _load(path)
    typer.echo(to_plain_text(doc))


@app.command(name="from-text")
def from_text(
    path: Annotated[Path, typer.Argument(help="Plain text file, paragraphs split by blank lines")],
) -> None:
    """Convert flat editor text to a TipTap document."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Cannot read {}: {}", path, e)
        raise typer.Exit(1) from e
    typer.echo(json.dumps(document_to_dict(from_plain_text(text)), indent=2, ensure_ascii=False))


@app.command()
def validate(
    path: FileArg,
    title: Annotated[str | None, typer.Option("--title", "-t", help="Blog title")] = None,
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Blog description")
    ] = None,
    tag: Annotated[list[str] | None, typer.Option("--tag", help="Tag (repeatable)")] = None,
) -> None:
    """Check a payload against the storage limits."""
    try:
        content, record = read_blog_file(path)
    except DocumentLoadError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    record_tags = record.get("tags")
    try:
        validate_blog_payload(
            title=title if title is not None else record.get("title"),
            description=description if description is not None else record.get("description"),
            tags=tag if tag else (record_tags if isinstance(record_tags, list) else None),
            content=content,
        )
    except ContentValidationError as e:
        typer.echo(f"Invalid: {e}")
        raise typer.Exit(1) from e
    typer.echo(f"OK ({content_size(content)} characters of content)")


@app.command()
def fetch(
    slug: str = typer.Argument(..., help="Blog slug"),
    render_body: bool = typer.Option(False, "--render", "-r", help="Render the body"),
    target: str = typer.Option("web", "--target", "-T", help="'web' or 'mobile' when rendering"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output the raw blog record"),
) -> None:
    """Fetch a published blog from the feed API."""
    client = _make_client()
    try:
        blog = client.get_blog(slug)
    except FeedApiError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    if output_json:
        typer.echo(json.dumps(blog, indent=2, ensure_ascii=False))
        return

    doc = parse_document(blog.get("content"))
    title = str(blog.get("title") or "")
    result = document_stats(doc, title)
    typer.echo(f"{title}  by {blog.get('authorName') or 'Anonymous'}")
    typer.echo(f"  {result.word_count} words · {result.reading_time} min read")
    if render_body:
        stored = blog.get("coverImage")
        typer.echo()
        typer.echo(_render(doc, target, False, stored if isinstance(stored, str) else None))
    else:
        typer.echo(f"  {preview_text(doc, FEED_PREVIEW_CHARS, 'No preview available...')}")


@app.command()
def feed(
    limit: int = typer.Option(10, "--limit", "-n", help="Page size (max 50)"),
    cursor: Annotated[str | None, typer.Option("--cursor", "-c", help="Page cursor")] = None,
    search: Annotated[str | None, typer.Option("--search", "-s", help="Title/author filter")] = None,
) -> None:
    """List published blogs from the feed API."""
    client = _make_client()
    try:
        page = client.list_feed(cursor=cursor, limit=limit, search=search)
    except FeedApiError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e

    typer.echo(f"{len(page.blogs)} blogs:\n")
    for blog in page.blogs:
        typer.echo(f"  {blog.get('title', '')}  [{blog.get('slug', '')}]")
        typer.echo(f"    by {blog.get('authorName') or 'Anonymous'}")
    if page.has_more:
        typer.echo(f"\nMore: --cursor {page.next_cursor}")


@app.command()
def serve() -> None:
    """Start the MCP server (stdio transport)."""
    from blog_richtext.mcp.server import run_mcp_server

    run_mcp_server()
