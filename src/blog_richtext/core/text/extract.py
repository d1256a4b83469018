"""Plain-text extraction from rich content trees."""

from typing import Any

from blog_richtext.core.importer.json_reader import Tree, coerce_tree
from blog_richtext.models.node import Node


def _extract(node: Tree | None) -> str:
    if node is None:
        return ""
    if isinstance(node, Node) and node.is_text:
        return node.text
    if node.children:
        return " ".join(_extract(child) for child in node.children)
    return ""


def extract_text(node: Any) -> str:
    """Return the plain text of a document or node.

    Text runs are returned as-is (marks ignored); container nodes join the
    text of their children with a single space; leaf nodes such as
    horizontal rules contribute nothing. Raw stored JSON is accepted and
    malformed parts read as empty.
    """
    return _extract(coerce_tree(node))


def extract_inline_text(node: Any) -> str:
    """Concatenate the text runs that are direct children of a block.

    This is the one-line reading of a paragraph or heading, without the
    spaces extract_text puts between sibling runs.
    """
    tree = coerce_tree(node)
    if tree is None:
        return ""
    if isinstance(tree, Node) and tree.is_text:
        return tree.text
    return "".join(c.text for c in tree.children if c.is_text)
