"""Domain models for rich blog content."""

from dataclasses import dataclass, field

DOC = "doc"
PARAGRAPH = "paragraph"
HEADING = "heading"
BULLET_LIST = "bulletList"
ORDERED_LIST = "orderedList"
LIST_ITEM = "listItem"
BLOCKQUOTE = "blockquote"
CODE_BLOCK = "codeBlock"
HORIZONTAL_RULE = "horizontalRule"
SECTION_SEPARATOR = "sectionSeparator"
IMAGE = "image"
YOUTUBE = "youtube"
TABLE = "table"
TABLE_ROW = "tableRow"
TABLE_HEADER = "tableHeader"
TABLE_CELL = "tableCell"
TEXT = "text"

NODE_TYPES: frozenset[str] = frozenset(
    {
        PARAGRAPH,
        HEADING,
        BULLET_LIST,
        ORDERED_LIST,
        LIST_ITEM,
        BLOCKQUOTE,
        CODE_BLOCK,
        HORIZONTAL_RULE,
        SECTION_SEPARATOR,
        IMAGE,
        YOUTUBE,
        TABLE,
        TABLE_ROW,
        TABLE_HEADER,
        TABLE_CELL,
        TEXT,
    }
)

BOLD = "bold"
ITALIC = "italic"
UNDERLINE = "underline"
CODE = "code"
LINK = "link"

MARK_TYPES: frozenset[str] = frozenset({BOLD, ITALIC, UNDERLINE, CODE, LINK})

HEADING_LEVELS: tuple[int, ...] = (1, 2, 3)


@dataclass(frozen=True)
class HeadingAttrs:
    """Attributes of a heading node. Level is always 1, 2 or 3."""

    level: int = 3


@dataclass(frozen=True)
class ImageAttrs:
    """Attributes of an image node."""

    src: str = ""
    alt: str = ""
    title: str | None = None


@dataclass(frozen=True)
class YoutubeAttrs:
    """Attributes of an embedded YouTube video."""

    src: str = ""


@dataclass(frozen=True)
class CellAttrs:
    """Span attributes of a table header or cell."""

    colspan: int = 1
    rowspan: int = 1


@dataclass(frozen=True)
class LinkAttrs:
    """Attributes of a link mark."""

    href: str = ""


NodeAttrs = HeadingAttrs | ImageAttrs | YoutubeAttrs | CellAttrs


@dataclass(frozen=True)
class Mark:
    """An inline mark applied to a text run."""

    type: str
    attrs: LinkAttrs | None = None

    @property
    def href(self) -> str:
        return self.attrs.href if self.attrs is not None else ""


@dataclass(frozen=True)
class Node:
    """A single node of rich content.

    ``type`` may be outside NODE_TYPES: unknown nodes are kept so their
    children stay reachable.
    """

    type: str
    attrs: NodeAttrs | None = None
    children: tuple["Node", ...] = ()
    marks: tuple[Mark, ...] = ()
    text: str = ""

    @property
    def is_text(self) -> bool:
        return self.type == TEXT

    @property
    def is_known(self) -> bool:
        return self.type in NODE_TYPES

    def has_mark(self, mark_type: str) -> bool:
        return any(m.type == mark_type for m in self.marks)

    def find_mark(self, mark_type: str) -> Mark | None:
        return next((m for m in self.marks if m.type == mark_type), None)


@dataclass(frozen=True)
class Document:
    """The root of a rich content tree."""

    children: tuple[Node, ...] = field(default_factory=tuple)
    type: str = DOC

    @property
    def is_empty(self) -> bool:
        return not self.children


def paragraph(text: str = "") -> Node:
    """Build a paragraph holding one plain text run (or nothing)."""
    return Node(type=PARAGRAPH, children=(Node(type=TEXT, text=text),) if text else ())
