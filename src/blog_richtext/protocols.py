"""Protocols for dependency injection in render targets and API clients."""

from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

from blog_richtext.models.presentation import Capabilities, Element

Rendered = Element | str


@runtime_checkable
class RenderTarget(Protocol):
    """Builds presentation elements for one reading surface.

    The shared traversal decides what to render; a target only decides how
    each piece looks on its surface.
    """

    capabilities: Capabilities

    def document(self, children: Sequence[Rendered]) -> Element: ...

    def text(self, text: str) -> Rendered: ...

    def emphasis(self, kind: str, child: Rendered) -> Rendered:
        """Wrap a run in bold, italic or underline (``kind`` is the mark type)."""
        ...

    def inline_code(self, text: str) -> Rendered: ...

    def link(self, child: Rendered, href: str) -> Rendered: ...

    def plain_link(self, child: Rendered) -> Rendered:
        """Render a link whose href failed the safety check, as styled text."""
        ...

    def paragraph(self, children: Sequence[Rendered]) -> Element: ...

    def spacer(self) -> Element: ...

    def heading(self, level: int, children: Sequence[Rendered]) -> Element: ...

    def bullet_list(self, items: Sequence[Rendered]) -> Element: ...

    def ordered_list(self, items: Sequence[Rendered]) -> Element: ...

    def list_item(self, children: Sequence[Rendered], number: int | None) -> Element:
        """Render a list item. ``number`` is 1-based inside ordered lists, else None."""
        ...

    def blockquote(self, children: Sequence[Rendered]) -> Element: ...

    def code_block(self, code: str) -> Element: ...

    def horizontal_rule(self) -> Element: ...

    def section_separator(self) -> Element: ...

    def image(self, src: str, alt: str, title: str | None) -> Element: ...

    def external_image(self, src: str) -> Element: ...

    def missing_image(self) -> Element | None: ...

    def youtube(self, video_id: str, embed_url: str) -> Element: ...

    def table(self, rows: Sequence[Rendered]) -> Element: ...

    def table_row(self, cells: Sequence[Rendered]) -> Element: ...

    def table_cell(
        self,
        children: Sequence[Rendered],
        *,
        header: bool,
        colspan: int,
        rowspan: int,
    ) -> Element: ...

    def fragment(self, children: Sequence[Rendered]) -> Element:
        """Hold the children of a node type the target does not know."""
        ...


@runtime_checkable
class FeedClientProtocol(Protocol):
    """Protocol for public feed API clients."""

    def list_feed(
        self,
        *,
        cursor: str | None = None,
        limit: int = 10,
        search: str | None = None,
    ) -> Any:
        """Fetch one page of published blogs."""
        ...

    def get_blog(self, slug: str) -> dict[str, Any]:
        """Fetch a single published blog record by slug."""
        ...
