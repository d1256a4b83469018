"""Reading metrics and preview snippets derived from content."""

import math
from dataclasses import dataclass
from typing import Any

from blog_richtext.config import DEFAULT_PREVIEW_FALLBACK, SEO_DESCRIPTION_CHARS, WORDS_PER_MINUTE
from blog_richtext.core.importer.json_reader import coerce_document
from blog_richtext.core.text.extract import extract_text
from blog_richtext.core.text.plaintext import to_plain_text
from blog_richtext.models.node import PARAGRAPH


@dataclass(frozen=True)
class DocumentStats:
    """Summary numbers shown next to an article."""

    word_count: int
    reading_time: int
    char_count: int
    block_count: int


def word_count(doc: Any, title: str = "") -> int:
    """Count whitespace-separated words in the title plus the body."""
    text = f"{title or ''} {extract_text(doc)}"
    return len(text.split())


def reading_time(doc: Any, title: str = "") -> int:
    """Estimate reading time in minutes. Never less than one minute."""
    return max(1, math.ceil(word_count(doc, title) / WORDS_PER_MINUTE))


def document_stats(doc: Any, title: str = "") -> DocumentStats:
    document = coerce_document(doc)
    words = word_count(document, title)
    return DocumentStats(
        word_count=words,
        reading_time=max(1, math.ceil(words / WORDS_PER_MINUTE)),
        char_count=len(extract_text(document)),
        block_count=len(document.children),
    )


def preview_text(doc: Any, max_chars: int, fallback: str = DEFAULT_PREVIEW_FALLBACK) -> str:
    """Build a listing-card snippet from the top-level paragraphs.

    Headings, lists and other blocks are skipped. Accumulation stops once
    more than ``max_chars`` characters are collected; the result is trimmed
    and cut to ``max_chars``.

    Args:
        doc: Document or raw stored content.
        max_chars: Maximum snippet length (100 on the dashboard, 200 in the
            feed, 160 for SEO descriptions).
        fallback: Returned instead of an empty snippet.

    Returns:
        The snippet, or ``fallback`` when no paragraph has text.
    """
    text = ""
    for node in coerce_document(doc).children:
        if node.type == PARAGRAPH:
            piece = extract_text(node)
            if piece:
                text += piece + " "
        if len(text) > max_chars:
            break
    snippet = text.strip()[: max(max_chars, 0)]
    return snippet or fallback


def derive_description(
    doc: Any,
    description: str | None = None,
    max_chars: int = SEO_DESCRIPTION_CHARS,
) -> str:
    """Return the author's description, or the opening of the plain text."""
    if description and description.strip():
        return description.strip()
    return to_plain_text(doc)[:max_chars]
