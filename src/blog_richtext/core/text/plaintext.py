"""Bridge between rich documents and the flat mobile editor text.

The mapping is lossy on purpose: only paragraphs and headings survive the
trip to plain text. Lists, tables, images and code blocks are dropped.
"""

from typing import Any

from blog_richtext.core.importer.json_reader import coerce_document
from blog_richtext.core.text.extract import extract_inline_text
from blog_richtext.models.node import HEADING, PARAGRAPH, Document, paragraph

PARAGRAPH_SEPARATOR = "\n\n"


def to_plain_text(doc: Any) -> str:
    """Join top-level paragraphs and headings with blank lines."""
    blocks = [
        extract_inline_text(node)
        for node in coerce_document(doc).children
        if node.type in (PARAGRAPH, HEADING)
    ]
    return PARAGRAPH_SEPARATOR.join(blocks)


def from_plain_text(text: str) -> Document:
    """Turn blank-line separated text into a document of paragraphs.

    Empty segments become empty paragraphs so extra blank lines survive.
    """
    return Document(children=tuple(paragraph(seg) for seg in text.split(PARAGRAPH_SEPARATOR)))
