"""Parse stored TipTap JSON into domain models, and back.

The stored content is an opaque JSON blob written by the editor, so parsing
never raises: malformed pieces are replaced by their defaults or skipped.
"""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from loguru import logger

from blog_richtext.config import MAX_NODE_DEPTH
from blog_richtext.errors import DocumentLoadError
from blog_richtext.models.node import (
    DOC,
    HEADING,
    HEADING_LEVELS,
    IMAGE,
    LINK,
    TABLE_CELL,
    TABLE_HEADER,
    TEXT,
    YOUTUBE,
    CellAttrs,
    Document,
    HeadingAttrs,
    ImageAttrs,
    LinkAttrs,
    Mark,
    Node,
    NodeAttrs,
    YoutubeAttrs,
)

Tree = Document | Node


def _as_int(value: Any) -> int | None:
    """Interpret a JSON scalar as an int, or None if it is not one."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    return None


def _as_str(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _parse_attrs(node_type: str, raw: Any) -> NodeAttrs | None:
    attrs: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}

    if node_type == HEADING:
        level = _as_int(attrs.get("level"))
        return HeadingAttrs(level=level if level in HEADING_LEVELS else 3)

    if node_type == IMAGE:
        title = attrs.get("title")
        return ImageAttrs(
            src=_as_str(attrs.get("src")),
            alt=_as_str(attrs.get("alt")),
            title=title if isinstance(title, str) and title else None,
        )

    if node_type == YOUTUBE:
        return YoutubeAttrs(src=_as_str(attrs.get("src")))

    if node_type in (TABLE_HEADER, TABLE_CELL):
        colspan = _as_int(attrs.get("colspan"))
        rowspan = _as_int(attrs.get("rowspan"))
        return CellAttrs(
            colspan=colspan if colspan is not None and colspan >= 1 else 1,
            rowspan=rowspan if rowspan is not None and rowspan >= 1 else 1,
        )

    return None


def _parse_marks(raw: Any) -> tuple[Mark, ...]:
    if not isinstance(raw, list):
        return ()
    marks: list[Mark] = []
    for item in raw:
        if not isinstance(item, Mapping) or not isinstance(item.get("type"), str):
            logger.debug("Skipping malformed mark: {!r}", item)
            continue
        if item["type"] == LINK:
            raw_attrs = item.get("attrs")
            href = raw_attrs.get("href") if isinstance(raw_attrs, Mapping) else None
            marks.append(Mark(type=LINK, attrs=LinkAttrs(href=_as_str(href))))
        else:
            marks.append(Mark(type=item["type"]))
    return tuple(marks)


def _parse_children(raw: Any, depth: int) -> tuple[Node, ...]:
    if not isinstance(raw, list):
        return ()
    if depth > MAX_NODE_DEPTH:
        logger.debug("Dropping {} nodes nested deeper than {}", len(raw), MAX_NODE_DEPTH)
        return ()
    children: list[Node] = []
    for item in raw:
        child = _parse_node(item, depth)
        if child is None:
            logger.debug("Skipping malformed node: {!r}", item)
            continue
        children.append(child)
    return tuple(children)


def _parse_node(data: Any, depth: int) -> Node | None:
    if not isinstance(data, Mapping):
        return None

    node_type = _as_str(data.get("type"))
    if node_type == TEXT:
        return Node(
            type=TEXT,
            text=_as_str(data.get("text")),
            marks=_parse_marks(data.get("marks")),
        )

    return Node(
        type=node_type,
        attrs=_parse_attrs(node_type, data.get("attrs")),
        children=_parse_children(data.get("content"), depth + 1),
    )


def parse_node(data: Any) -> Node | None:
    """Parse one raw node mapping.

    Args:
        data: Raw node as stored (a mapping with ``type``, ``attrs``,
            ``content``, ``marks``, ``text``).

    Returns:
        The parsed Node, or None when ``data`` is not a mapping. Content
        nested more than MAX_NODE_DEPTH levels below it is dropped.
    """
    return _parse_node(data, 1)


def parse_document(data: Any) -> Document:
    """Parse stored blog content into a Document.

    Args:
        data: The stored ``content`` value. A mapping is read as a ``doc``
            root; a string is legacy plain-text content and becomes
            paragraphs; anything else is an empty document.

    Returns:
        A Document with every attribute default filled in. Nodes nested
        more than MAX_NODE_DEPTH levels deep are dropped.
    """
    if isinstance(data, Document):
        return data
    if isinstance(data, str):
        from blog_richtext.core.text.plaintext import from_plain_text

        return from_plain_text(data)
    if not isinstance(data, Mapping):
        return Document()
    return Document(children=_parse_children(data.get("content"), 1))


def coerce_tree(value: Any) -> Tree | None:
    """Accept a parsed tree or raw stored JSON and return a parsed tree.

    Raw mappings typed ``doc`` (or untyped with a ``content`` list) become
    Documents; other mappings become Nodes. Returns None for anything else.
    """
    if isinstance(value, (Document, Node)):
        return value
    if isinstance(value, str):
        return parse_document(value)
    if isinstance(value, Mapping):
        node_type = value.get("type")
        if node_type == DOC or (node_type is None and isinstance(value.get("content"), list)):
            return parse_document(value)
        return parse_node(value)
    return None


def coerce_document(value: Any) -> Document:
    """Like coerce_tree, but always return a Document root."""
    tree = coerce_tree(value)
    if tree is None:
        return Document()
    if isinstance(tree, Node):
        return Document(children=(tree,))
    return tree


def _attrs_to_dict(attrs: NodeAttrs | None) -> dict[str, Any] | None:
    if isinstance(attrs, HeadingAttrs):
        return {"level": attrs.level}
    if isinstance(attrs, ImageAttrs):
        return {"src": attrs.src, "alt": attrs.alt, "title": attrs.title}
    if isinstance(attrs, YoutubeAttrs):
        return {"src": attrs.src}
    if isinstance(attrs, CellAttrs):
        return {"colspan": attrs.colspan, "rowspan": attrs.rowspan}
    return None


def node_to_dict(node: Node) -> dict[str, Any]:
    """Serialize a Node back into TipTap JSON."""
    out: dict[str, Any] = {"type": node.type}
    if node.is_text:
        out["text"] = node.text
        if node.marks:
            out["marks"] = [
                {"type": m.type, "attrs": {"href": m.href}} if m.type == LINK else {"type": m.type}
                for m in node.marks
            ]
        return out

    attrs = _attrs_to_dict(node.attrs)
    if attrs is not None:
        out["attrs"] = attrs
    if node.children:
        out["content"] = [node_to_dict(c) for c in node.children]
    return out


def document_to_dict(doc: Document) -> dict[str, Any]:
    """Serialize a Document back into TipTap JSON."""
    return {"type": DOC, "content": [node_to_dict(c) for c in doc.children]}


def _unwrap_record(data: Any) -> tuple[Any, dict[str, Any]]:
    """Split a loaded JSON value into (content, blog record metadata)."""
    if not isinstance(data, dict):
        return data, {}
    # API envelope: {"success": true, "data": {"blog": {...}}}
    envelope = data.get("data")
    if isinstance(envelope, dict) and isinstance(envelope.get("blog"), dict):
        data = envelope["blog"]
    if data.get("type") == DOC or "content" not in data:
        return data, {}
    record = {k: v for k, v in data.items() if k != "content"}
    return data["content"], record


def read_blog_file(path: Path) -> tuple[Any, dict[str, Any]]:
    """Read raw stored content and blog record metadata from a JSON file.

    The file may hold a bare TipTap document, a blog record with a
    ``content`` field, or a feed API response wrapping such a record.

    Args:
        path: JSON file to read.

    Returns:
        Tuple of (raw content value, record metadata such as ``title`` and
        ``coverImage``; empty for a bare document).

    Raises:
        DocumentLoadError: The file is missing, not valid JSON, or nested
            too deeply to decode.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        msg = f"Cannot read document file {str(path)!r}: {e}"
        raise DocumentLoadError(msg) from e
    except json.JSONDecodeError as e:
        msg = f"Invalid JSON in {str(path)!r}: {e}"
        raise DocumentLoadError(msg) from e
    except RecursionError as e:
        msg = f"JSON in {str(path)!r} is nested too deeply"
        raise DocumentLoadError(msg) from e
    return _unwrap_record(raw)


def load_document_file(path: Path) -> tuple[Document, dict[str, Any]]:
    """Read and parse a document file. See read_blog_file for accepted shapes."""
    content, record = read_blog_file(path)
    doc = parse_document(content)
    logger.debug("Loaded {} top-level nodes from {}", len(doc.children), path)
    return doc, record
