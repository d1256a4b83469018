"""Shared render traversal over rich content.

One structural recursion maps every node type to target constructors. The
target's capabilities decide the few places where surfaces differ (list
items, table cells, image trust tier), so web and mobile cannot drift apart.
"""

from collections.abc import Callable, Sequence
from typing import Any

from loguru import logger

from blog_richtext.core.importer.json_reader import coerce_document
from blog_richtext.core.media.images import is_trusted_image_src, is_valid_image_src
from blog_richtext.core.media.links import is_safe_href
from blog_richtext.core.media.youtube import extract_youtube_id, youtube_embed_url
from blog_richtext.core.text.extract import extract_inline_text
from blog_richtext.models.node import (
    BLOCKQUOTE,
    BOLD,
    BULLET_LIST,
    CODE,
    CODE_BLOCK,
    HEADING,
    HORIZONTAL_RULE,
    IMAGE,
    ITALIC,
    LINK,
    LIST_ITEM,
    ORDERED_LIST,
    PARAGRAPH,
    SECTION_SEPARATOR,
    TABLE,
    TABLE_CELL,
    TABLE_HEADER,
    TABLE_ROW,
    TEXT,
    UNDERLINE,
    YOUTUBE,
    CellAttrs,
    HeadingAttrs,
    ImageAttrs,
    Node,
    YoutubeAttrs,
)
from blog_richtext.models.presentation import Element
from blog_richtext.protocols import Rendered, RenderTarget

EMPHASIS_MARKS = (BOLD, ITALIC, UNDERLINE)

Handler = Callable[[Node, RenderTarget], Rendered | None]


def _render_text(node: Node, target: RenderTarget) -> Rendered | None:
    if not node.text:
        return None

    # Inline code takes the whole visual slot: bold/italic/underline are dropped.
    if node.has_mark(CODE):
        out = target.inline_code(node.text)
    else:
        out = target.text(node.text)
        for mark in node.marks:
            if mark.type in EMPHASIS_MARKS:
                out = target.emphasis(mark.type, out)

    link = node.find_mark(LINK)
    if link is not None:
        out = target.link(out, link.href) if is_safe_href(link.href) else target.plain_link(out)
    return out


def _render_paragraph(node: Node, target: RenderTarget) -> Rendered | None:
    children = render_children(node.children, target)
    if not children:
        return target.spacer()
    return target.paragraph(children)


def _render_heading(node: Node, target: RenderTarget) -> Rendered | None:
    level = node.attrs.level if isinstance(node.attrs, HeadingAttrs) else 3
    return target.heading(level, render_children(node.children, target))


def _render_list_item(node: Node, target: RenderTarget, number: int | None) -> Rendered:
    if target.capabilities.rich_list_items:
        children = render_children(node.children, target)
    else:
        text = extract_inline_text(node.children[0]) if node.children else ""
        children = [target.text(text)] if text else []
    return target.list_item(children, number)


def _render_list_items(node: Node, target: RenderTarget, *, ordered: bool) -> list[Rendered]:
    items: list[Rendered] = []
    number = 0
    for child in node.children:
        if child.type == LIST_ITEM:
            number += 1
            rendered = _guarded(
                child, lambda c, t: _render_list_item(c, t, number if ordered else None), target
            )
        else:
            rendered = render_node(child, target)
        if rendered is not None:
            items.append(rendered)
    return items


def _render_bullet_list(node: Node, target: RenderTarget) -> Rendered | None:
    return target.bullet_list(_render_list_items(node, target, ordered=False))


def _render_ordered_list(node: Node, target: RenderTarget) -> Rendered | None:
    return target.ordered_list(_render_list_items(node, target, ordered=True))


def _render_stray_list_item(node: Node, target: RenderTarget) -> Rendered | None:
    return _render_list_item(node, target, None)


def _render_blockquote(node: Node, target: RenderTarget) -> Rendered | None:
    return target.blockquote(render_children(node.children, target))


def _render_code_block(node: Node, target: RenderTarget) -> Rendered | None:
    return target.code_block("\n".join(c.text for c in node.children if c.is_text))


def _render_horizontal_rule(_node: Node, target: RenderTarget) -> Rendered | None:
    return target.horizontal_rule()


def _render_section_separator(_node: Node, target: RenderTarget) -> Rendered | None:
    return target.section_separator()


def _render_image(node: Node, target: RenderTarget) -> Rendered | None:
    attrs = node.attrs if isinstance(node.attrs, ImageAttrs) else ImageAttrs()
    if not is_valid_image_src(attrs.src):
        logger.debug("Image source rejected: {!r}", attrs.src[:80])
        return target.missing_image()

    caps = target.capabilities
    if caps.image_trust_tier and not is_trusted_image_src(attrs.src, caps.trusted_domains):
        return target.external_image(attrs.src)
    return target.image(attrs.src, attrs.alt, attrs.title)


def _render_youtube(node: Node, target: RenderTarget) -> Rendered | None:
    src = node.attrs.src if isinstance(node.attrs, YoutubeAttrs) else ""
    video_id = extract_youtube_id(src)
    if not video_id:
        logger.debug("No YouTube video id in {!r}", src[:80])
        return None
    return target.youtube(video_id, youtube_embed_url(video_id))


def _render_table(node: Node, target: RenderTarget) -> Rendered | None:
    return target.table(render_children(node.children, target))


def _render_table_row(node: Node, target: RenderTarget) -> Rendered | None:
    return target.table_row(render_children(node.children, target))


def _render_table_cell(node: Node, target: RenderTarget) -> Rendered | None:
    attrs = node.attrs if isinstance(node.attrs, CellAttrs) else CellAttrs()
    if target.capabilities.rich_table_cells:
        children = render_children(node.children, target)
    else:
        first = node.children[0] if node.children else None
        runs = [c for c in first.children if c.is_text] if first is not None else []
        children = render_children(runs, target)
    return target.table_cell(
        children,
        header=node.type == TABLE_HEADER,
        colspan=attrs.colspan,
        rowspan=attrs.rowspan,
    )


def _render_unknown(node: Node, target: RenderTarget) -> Rendered | None:
    children = render_children(node.children, target)
    if not children:
        return None
    logger.debug("Rendering children of unknown node type {!r}", node.type)
    return target.fragment(children)


_HANDLERS: dict[str, Handler] = {
    TEXT: _render_text,
    PARAGRAPH: _render_paragraph,
    HEADING: _render_heading,
    BULLET_LIST: _render_bullet_list,
    ORDERED_LIST: _render_ordered_list,
    LIST_ITEM: _render_stray_list_item,
    BLOCKQUOTE: _render_blockquote,
    CODE_BLOCK: _render_code_block,
    HORIZONTAL_RULE: _render_horizontal_rule,
    SECTION_SEPARATOR: _render_section_separator,
    IMAGE: _render_image,
    YOUTUBE: _render_youtube,
    TABLE: _render_table,
    TABLE_ROW: _render_table_row,
    TABLE_HEADER: _render_table_cell,
    TABLE_CELL: _render_table_cell,
}


def _guarded(node: Node, handler: Handler, target: RenderTarget) -> Rendered | None:
    try:
        return handler(node, target)
    except Exception:
        # One broken node must not blank the whole article.
        logger.opt(exception=True).warning("Dropping {!r} node that failed to render", node.type)
        return None


def render_node(node: Node, target: RenderTarget) -> Rendered | None:
    """Render one node, or None when it contributes nothing."""
    return _guarded(node, _HANDLERS.get(node.type, _render_unknown), target)


def render_children(children: Sequence[Node], target: RenderTarget) -> list[Rendered]:
    rendered: list[Rendered] = []
    for child in children:
        out = render_node(child, target)
        if out is not None:
            rendered.append(out)
    return rendered


def render(doc: Any, target: RenderTarget) -> Element:
    """Render a document for a reading surface.

    Args:
        doc: Document, or the raw stored content.
        target: The surface's element constructors and capabilities.

    Returns:
        The root presentation element. Malformed nodes degrade to nothing
        or to a fallback element; this never raises for bad content.
    """
    document = coerce_document(doc)
    return target.document(render_children(document.children, target))


def render_blog(doc: Any, target: RenderTarget, cover_image: str | None = None) -> Element:
    """Render an article body that is shown below its cover image.

    The first top-level image whose source equals ``cover_image`` is skipped
    so the hero image is not shown twice.
    """
    document = coerce_document(doc)
    children: list[Node] = list(document.children)
    if cover_image:
        for i, node in enumerate(children):
            if (
                node.type == IMAGE
                and isinstance(node.attrs, ImageAttrs)
                and node.attrs.src == cover_image
            ):
                del children[i]
                break
    return target.document(render_children(children, target))
