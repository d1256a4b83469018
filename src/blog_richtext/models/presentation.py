"""Presentation-layer element tree produced by the renderers."""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from blog_richtext.config import TRUSTED_IMAGE_DOMAINS


@dataclass(frozen=True)
class Element:
    """A rendered element: an HTML tag on web, a native widget on mobile."""

    tag: str
    props: dict[str, Any] = field(default_factory=dict)
    children: tuple["Element | str", ...] = ()

    def iter(self) -> Iterator["Element"]:
        """Yield this element and every descendant element, pre-order."""
        yield self
        for child in self.children:
            if isinstance(child, Element):
                yield from child.iter()

    def find_all(self, tag: str) -> list["Element"]:
        return [el for el in self.iter() if el.tag == tag]

    def text_content(self) -> str:
        """Concatenate all string children, depth-first."""
        parts: list[str] = []
        for child in self.children:
            if isinstance(child, Element):
                parts.append(child.text_content())
            else:
                parts.append(child)
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tag": self.tag,
            "props": dict(self.props),
            "children": [c.to_dict() if isinstance(c, Element) else c for c in self.children],
        }


@dataclass(frozen=True)
class Capabilities:
    """What a render target can express.

    Targets without rich list items or table cells get one line of text
    per item or cell. Without the image trust tier every valid image is
    shown inline.
    """

    rich_list_items: bool = True
    rich_table_cells: bool = True
    image_trust_tier: bool = True
    trusted_domains: tuple[str, ...] = TRUSTED_IMAGE_DOMAINS
