"""Rich blog content: document model, derived metrics and render targets."""

from blog_richtext.core.importer.json_reader import coerce_document, document_to_dict, parse_document
from blog_richtext.core.media.images import resolve_cover_image
from blog_richtext.core.render.mobile import MobileTarget
from blog_richtext.core.render.projection import render, render_blog
from blog_richtext.core.render.web import WebTarget, render_html, to_html
from blog_richtext.core.text.extract import extract_text
from blog_richtext.core.text.metrics import preview_text, reading_time, word_count
from blog_richtext.core.text.plaintext import from_plain_text, to_plain_text
from blog_richtext.models.node import Document, Mark, Node

__all__ = [
    "Document",
    "Mark",
    "MobileTarget",
    "Node",
    "WebTarget",
    "coerce_document",
    "document_to_dict",
    "extract_text",
    "from_plain_text",
    "parse_document",
    "preview_text",
    "reading_time",
    "render",
    "render_blog",
    "render_html",
    "resolve_cover_image",
    "to_html",
    "to_plain_text",
    "word_count",
]
