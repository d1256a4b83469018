"""Web render target: HTML element trees and serialization."""

import html
from collections.abc import Sequence
from typing import Any

from blog_richtext.core.render.projection import render
from blog_richtext.models.node import BOLD, ITALIC, UNDERLINE
from blog_richtext.models.presentation import Capabilities, Element
from blog_richtext.protocols import Rendered

FRAGMENT = "#fragment"

VOID_TAGS = frozenset({"img", "hr", "br"})

_EMPHASIS_TAGS = {BOLD: "strong", ITALIC: "em", UNDERLINE: "u"}

_EXTERNAL_REL = "noopener noreferrer"

_IFRAME_ALLOW = (
    "accelerometer; autoplay; clipboard-write; encrypted-media; gyroscope; picture-in-picture"
)


def _el(tag: str, props: dict[str, Any] | None = None, *children: Rendered) -> Element:
    return Element(tag=tag, props=props or {}, children=tuple(children))


class WebTarget:
    """Builds HTML-equivalent elements for the web article page."""

    def __init__(self, capabilities: Capabilities | None = None) -> None:
        self.capabilities = capabilities or Capabilities()

    def document(self, children: Sequence[Rendered]) -> Element:
        return _el("div", {"class": "prose-content"}, *children)

    def text(self, text: str) -> Rendered:
        return text

    def emphasis(self, kind: str, child: Rendered) -> Rendered:
        return _el(_EMPHASIS_TAGS.get(kind, "span"), None, child)

    def inline_code(self, text: str) -> Rendered:
        return _el("code", None, text)

    def link(self, child: Rendered, href: str) -> Rendered:
        return _el("a", {"href": href, "target": "_blank", "rel": _EXTERNAL_REL}, child)

    def plain_link(self, child: Rendered) -> Rendered:
        return _el("span", {"class": "link-unsafe", "style": "text-decoration: underline"}, child)

    def paragraph(self, children: Sequence[Rendered]) -> Element:
        return _el("p", None, *children)

    def spacer(self) -> Element:
        return _el("div", {"class": "paragraph-spacer", "aria-hidden": "true"})

    def heading(self, level: int, children: Sequence[Rendered]) -> Element:
        return _el(f"h{level}", None, *children)

    def bullet_list(self, items: Sequence[Rendered]) -> Element:
        return _el("ul", None, *items)

    def ordered_list(self, items: Sequence[Rendered]) -> Element:
        return _el("ol", None, *items)

    def list_item(self, children: Sequence[Rendered], number: int | None) -> Element:
        return _el("li", {"value": number} if number is not None else None, *children)

    def blockquote(self, children: Sequence[Rendered]) -> Element:
        return _el("blockquote", None, *children)

    def code_block(self, code: str) -> Element:
        return _el("pre", None, _el("code", None, code))

    def horizontal_rule(self) -> Element:
        return _el("hr")

    def section_separator(self) -> Element:
        dots = [_el("span", None, "•") for _ in range(3)]
        return _el("div", {"class": "section-separator", "data-type": "section-separator"}, *dots)

    def image(self, src: str, alt: str, title: str | None) -> Element:
        img = _el(
            "img",
            {"src": src, "alt": alt, "width": 800, "height": 450, "loading": "lazy"},
        )
        if title:
            return _el("figure", None, img, _el("figcaption", None, title))
        return _el("figure", None, img)

    def external_image(self, src: str) -> Element:
        return _el(
            "figure",
            {"class": "external-image"},
            _el("p", None, "External image"),
            _el("a", {"href": src, "target": "_blank", "rel": _EXTERNAL_REL}, "View image externally"),
        )

    def missing_image(self) -> Element | None:
        return _el("figure", {"class": "image-unavailable"}, _el("div", None, "Image not available"))

    def youtube(self, video_id: str, embed_url: str) -> Element:
        iframe = _el(
            "iframe",
            {
                "src": embed_url,
                "title": "YouTube video player",
                "allow": _IFRAME_ALLOW,
                "allowfullscreen": True,
                "data-video-id": video_id,
            },
        )
        return _el("div", {"class": "video-embed"}, iframe)

    def table(self, rows: Sequence[Rendered]) -> Element:
        return _el("table", None, _el("tbody", None, *rows))

    def table_row(self, cells: Sequence[Rendered]) -> Element:
        return _el("tr", None, *cells)

    def table_cell(
        self,
        children: Sequence[Rendered],
        *,
        header: bool,
        colspan: int,
        rowspan: int,
    ) -> Element:
        return _el("th" if header else "td", {"colspan": colspan, "rowspan": rowspan}, *children)

    def fragment(self, children: Sequence[Rendered]) -> Element:
        return _el(FRAGMENT, None, *children)


def _attrs_html(props: dict[str, Any]) -> str:
    parts: list[str] = []
    for name, value in props.items():
        if value is None or value is False:
            continue
        if value is True:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{html.escape(str(value), quote=True)}"')
    return "".join(parts)


def to_html(node: Rendered) -> str:
    """Serialize a web element tree to an HTML string. Text is escaped."""
    if isinstance(node, str):
        return html.escape(node, quote=False)

    inner = "".join(to_html(child) for child in node.children)
    if node.tag == FRAGMENT:
        return inner
    attrs = _attrs_html(node.props)
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    return f"<{node.tag}{attrs}>{inner}</{node.tag}>"


def render_html(doc: Any, capabilities: Capabilities | None = None) -> str:
    """Render stored content straight to HTML for the web article page."""
    return to_html(render(doc, WebTarget(capabilities)))
