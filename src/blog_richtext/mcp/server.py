"""MCP server exposing blog content derivation and rendering tools."""

from typing import Any

from loguru import logger
from mcp.server.fastmcp import FastMCP

from blog_richtext.config import DEFAULT_PREVIEW_FALLBACK, FEED_PREVIEW_CHARS
from blog_richtext.core.importer.json_reader import coerce_document, document_to_dict
from blog_richtext.core.media.images import resolve_cover_image
from blog_richtext.core.render.mobile import MobileTarget
from blog_richtext.core.render.projection import render_blog
from blog_richtext.core.render.web import WebTarget, to_html
from blog_richtext.core.text.metrics import derive_description, document_stats, preview_text
from blog_richtext.core.text.plaintext import from_plain_text, to_plain_text
from blog_richtext.core.validation import content_size, validate_blog_payload
from blog_richtext.errors import ContentValidationError

Content = dict[str, Any] | str | None

RENDER_TARGETS = ("web", "mobile")


# --- Core functions (testable without MCP context) ---


def blog_document_stats(content: Content, *, title: str = "") -> dict[str, Any]:
    """Word count, reading time and size of a blog document."""
    doc = coerce_document(content)
    stats = document_stats(doc, title)
    return {
        "word_count": stats.word_count,
        "reading_time": stats.reading_time,
        "char_count": stats.char_count,
        "block_count": stats.block_count,
        "content_size": content_size(doc),
    }


def blog_preview(
    content: Content,
    *,
    max_chars: int = FEED_PREVIEW_CHARS,
    fallback: str = DEFAULT_PREVIEW_FALLBACK,
    description: str | None = None,
) -> dict[str, Any]:
    """Listing-card preview plus the SEO description for a document."""
    doc = coerce_document(content)
    return {
        "preview": preview_text(doc, max_chars, fallback),
        "description": derive_description(doc, description),
    }


def blog_cover_image(content: Content, *, explicit_cover_image: str | None = None) -> dict[str, Any]:
    cover = resolve_cover_image(content, explicit_cover_image)
    return {"cover_image": cover, "explicit": bool(explicit_cover_image)}


def blog_render(
    content: Content,
    *,
    target: str = "web",
    output_format: str = "html",
    cover_image: str | None = None,
) -> dict[str, Any]:
    """Render a document for the web page (HTML or tree) or the mobile screen (tree).

    Args:
        content: TipTap document JSON.
        target: "web" or "mobile".
        output_format: "html" (web only) or "json".
        cover_image: Hero image already shown above the body; its first
            in-body copy is skipped.
    """
    if target not in RENDER_TARGETS:
        return {"error": f"Unknown target {target!r}. Use one of {list(RENDER_TARGETS)}."}
    if output_format not in ("html", "json"):
        return {"error": f"Unknown output_format {output_format!r}. Use 'html' or 'json'."}
    if target == "mobile" and output_format == "html":
        return {"error": "The mobile target only renders to 'json'."}

    render_target = WebTarget() if target == "web" else MobileTarget()
    tree = render_blog(content, render_target, cover_image)
    if output_format == "html":
        return {"target": target, "format": "html", "content": to_html(tree)}
    return {"target": target, "format": "json", "content": tree.to_dict()}


def blog_to_plain_text(content: Content) -> dict[str, Any]:
    return {"text": to_plain_text(content)}


def blog_from_plain_text(text: str) -> dict[str, Any]:
    return {"content": document_to_dict(from_plain_text(text))}


def blog_validate(
    content: Content,
    *,
    title: str | None = None,
    description: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Check a blog payload against the storage limits."""
    try:
        validate_blog_payload(title=title, description=description, tags=tags, content=content)
    except ContentValidationError as e:
        return {"valid": False, "error": str(e)}
    return {"valid": True, "content_size": content_size(content)}


# --- MCP Server Setup ---


mcp_server = FastMCP(
    "blog-richtext",
    instructions="""\
Tools for rich blog content stored as TipTap JSON (a "doc" root with nested
"content" arrays of typed nodes).

- blog_document_stats_tool: word count and reading time (title included).
- blog_preview_tool: snippet for listing cards and an SEO description.
- blog_cover_image_tool: cover image, explicit or first trusted image.
- blog_render_tool: HTML for the web page or a widget tree for mobile.
- blog_to_plain_text_tool / blog_from_plain_text_tool: the flat editor format.
- blog_validate_tool: size limits checked before saving.

Malformed content never fails a tool; it renders or counts as empty.
""",
)


@mcp_server.tool()
async def blog_document_stats_tool(content: Content, title: str = "") -> dict[str, Any]:
    """Count words and estimate reading time for a document.

    Args:
        content: TipTap document JSON.
        title: Blog title, counted with the body.
    """
    return blog_document_stats(content, title=title)


@mcp_server.tool()
async def blog_preview_tool(
    content: Content,
    max_chars: int = FEED_PREVIEW_CHARS,
    fallback: str = DEFAULT_PREVIEW_FALLBACK,
    description: str | None = None,
) -> dict[str, Any]:
    """Build a preview snippet from the document's top-level paragraphs.

    Args:
        content: TipTap document JSON.
        max_chars: Snippet length (100 dashboard, 200 feed, 160 SEO).
        fallback: Text returned when no paragraph has text.
        description: Author-written description, preferred for SEO.
    """
    return blog_preview(content, max_chars=max_chars, fallback=fallback, description=description)


@mcp_server.tool()
async def blog_cover_image_tool(
    content: Content, explicit_cover_image: str | None = None
) -> dict[str, Any]:
    """Resolve the cover image: explicit value, else first trusted https image.

    Args:
        content: TipTap document JSON.
        explicit_cover_image: Cover image stored on the blog record.
    """
    return blog_cover_image(content, explicit_cover_image=explicit_cover_image)


@mcp_server.tool()
async def blog_render_tool(
    content: Content,
    target: str = "web",
    output_format: str = "html",
    cover_image: str | None = None,
) -> dict[str, Any]:
    """Render a document for a reading surface.

    Args:
        content: TipTap document JSON.
        target: "web" or "mobile".
        output_format: "html" (web only) or "json" (element tree).
        cover_image: Hero image URL shown above the article, skipped in the body.
    """
    return blog_render(content, target=target, output_format=output_format, cover_image=cover_image)


@mcp_server.tool()
async def blog_to_plain_text_tool(content: Content) -> dict[str, Any]:
    """Convert a document to blank-line separated text (paragraphs and headings only)."""
    return blog_to_plain_text(content)


@mcp_server.tool()
async def blog_from_plain_text_tool(text: str) -> dict[str, Any]:
    """Convert blank-line separated text to a document of paragraphs."""
    return blog_from_plain_text(text)


@mcp_server.tool()
async def blog_validate_tool(
    content: Content,
    title: str | None = None,
    description: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Check title, description, tags and content size before saving.

    Args:
        content: TipTap document JSON.
        title: Blog title (max 200 chars).
        description: Description (max 300 chars).
        tags: Up to 5 tags of up to 30 chars.
    """
    return blog_validate(content, title=title, description=description, tags=tags)


def run_mcp_server() -> None:
    """Run the MCP server with stdio transport."""
    from blog_richtext.logging_config import configure_logging

    configure_logging(verbose=False)
    logger.debug("Starting blog-richtext MCP server")
    mcp_server.run(transport="stdio")
