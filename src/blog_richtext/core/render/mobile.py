"""Mobile render target: native widget trees for the article screen."""

from collections.abc import Sequence
from typing import Any

from blog_richtext.config import TRUSTED_IMAGE_DOMAINS
from blog_richtext.models.node import BOLD, ITALIC, UNDERLINE
from blog_richtext.models.presentation import Capabilities, Element
from blog_richtext.protocols import Rendered

# The mobile screen shows one line of text per list item and table cell, and
# shows every valid image inline.
MOBILE_CAPABILITIES = Capabilities(
    rich_list_items=False,
    rich_table_cells=False,
    image_trust_tier=False,
    trusted_domains=TRUSTED_IMAGE_DOMAINS,
)

_EMPHASIS_STYLES: dict[str, dict[str, str]] = {
    BOLD: {"fontWeight": "700"},
    ITALIC: {"fontStyle": "italic"},
    UNDERLINE: {"textDecorationLine": "underline"},
}

SPACER_HEIGHT = 16


def _widget(tag: str, props: dict[str, Any] | None = None, *children: Rendered) -> Element:
    return Element(tag=tag, props=props or {}, children=tuple(children))


class MobileTarget:
    """Builds native-widget elements (View, Text, Image, ...)."""

    def __init__(self, capabilities: Capabilities | None = None) -> None:
        self.capabilities = capabilities or MOBILE_CAPABILITIES

    def document(self, children: Sequence[Rendered]) -> Element:
        return _widget("View", {"variant": "content"}, *children)

    def text(self, text: str) -> Rendered:
        return text

    def emphasis(self, kind: str, child: Rendered) -> Rendered:
        return _widget("Text", {"style": dict(_EMPHASIS_STYLES.get(kind, {}))}, child)

    def inline_code(self, text: str) -> Rendered:
        return _widget("Text", {"variant": "inlineCode"}, text)

    def link(self, child: Rendered, href: str) -> Rendered:
        return _widget("Text", {"variant": "link", "href": href, "accessibilityRole": "link"}, child)

    def plain_link(self, child: Rendered) -> Rendered:
        return _widget("Text", {"style": {"textDecorationLine": "underline"}}, child)

    def paragraph(self, children: Sequence[Rendered]) -> Element:
        return _widget("Text", {"variant": "paragraph"}, *children)

    def spacer(self) -> Element:
        return _widget("View", {"style": {"height": SPACER_HEIGHT}})

    def heading(self, level: int, children: Sequence[Rendered]) -> Element:
        return _widget("Text", {"variant": f"h{level}", "accessibilityRole": "header"}, *children)

    def bullet_list(self, items: Sequence[Rendered]) -> Element:
        return _widget("View", {"variant": "list"}, *items)

    def ordered_list(self, items: Sequence[Rendered]) -> Element:
        return _widget("View", {"variant": "list", "ordered": True}, *items)

    def list_item(self, children: Sequence[Rendered], number: int | None) -> Element:
        marker = f"{number}." if number is not None else "•"
        return _widget(
            "View",
            {"variant": "listItem"},
            _widget("Text", {"variant": "bullet"}, marker),
            _widget("Text", {"variant": "listItemText"}, *children),
        )

    def blockquote(self, children: Sequence[Rendered]) -> Element:
        return _widget("View", {"variant": "blockquote"}, *children)

    def code_block(self, code: str) -> Element:
        return _widget(
            "ScrollView",
            {"variant": "codeBlock", "horizontal": True},
            _widget("Text", {"variant": "code"}, code),
        )

    def horizontal_rule(self) -> Element:
        return _widget("View", {"variant": "hr"})

    def section_separator(self) -> Element:
        return _widget("Text", {"variant": "sectionSeparator"}, "• • •")

    def image(self, src: str, alt: str, title: str | None) -> Element:
        img = _widget(
            "Image",
            {"source": {"uri": src}, "resizeMode": "contain", "accessibilityLabel": alt or title},
        )
        if alt:
            return _widget(
                "View", {"variant": "imageContainer"}, img, _widget("Text", {"variant": "caption"}, alt)
            )
        return _widget("View", {"variant": "imageContainer"}, img)

    def external_image(self, src: str) -> Element:
        return _widget(
            "View",
            {"variant": "externalImage"},
            _widget("Text", {"variant": "link", "href": src, "accessibilityRole": "link"}, "View image"),
        )

    def missing_image(self) -> Element | None:
        return None

    def youtube(self, video_id: str, embed_url: str) -> Element:
        return _widget("VideoEmbed", {"uri": embed_url, "videoId": video_id})

    def table(self, rows: Sequence[Rendered]) -> Element:
        return _widget(
            "ScrollView",
            {"variant": "tableContainer", "horizontal": True},
            _widget("View", {"variant": "table"}, *rows),
        )

    def table_row(self, cells: Sequence[Rendered]) -> Element:
        return _widget("View", {"variant": "tableRow"}, *cells)

    def table_cell(
        self,
        children: Sequence[Rendered],
        *,
        header: bool,
        colspan: int,
        rowspan: int,
    ) -> Element:
        variant = "tableHeader" if header else "tableCell"
        return _widget(
            "View",
            {"variant": variant, "colspan": colspan, "rowspan": rowspan},
            _widget("Text", {"variant": f"{variant}Text"}, *children),
        )

    def fragment(self, children: Sequence[Rendered]) -> Element:
        return _widget("Fragment", None, *children)
