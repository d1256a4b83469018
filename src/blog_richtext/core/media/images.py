"""Image source validation and cover image resolution."""

from collections.abc import Iterable, Iterator
from typing import Any
from urllib.parse import urlsplit

from blog_richtext.config import TRUSTED_IMAGE_DOMAINS, VALID_IMAGE_PREFIXES
from blog_richtext.core.importer.json_reader import Tree, coerce_tree
from blog_richtext.models.node import IMAGE, ImageAttrs, Node


def is_valid_image_src(src: object) -> bool:
    """Check that an image source can be rendered at all.

    Accepts http(s) URLs and root-relative paths. ``blob:`` URLs are
    editor-local and protocol-relative ``//host`` URLs are not
    root-relative, so both are rejected.
    """
    if not isinstance(src, str) or not src:
        return False
    if src.startswith("blob:") or src.startswith("//"):
        return False
    return src.startswith(VALID_IMAGE_PREFIXES)


def _host(src: str) -> str:
    try:
        return urlsplit(src).hostname or ""
    except ValueError:
        return ""


def is_trusted_image_src(
    src: object,
    trusted_domains: Iterable[str] = TRUSTED_IMAGE_DOMAINS,
) -> bool:
    """Check whether an image comes from an allow-listed host.

    A source is trusted when its host contains one of ``trusted_domains``.
    Root-relative paths have no host and are never trusted.
    """
    if not isinstance(src, str) or not is_valid_image_src(src):
        return False
    host = _host(src)
    return bool(host) and any(domain in host for domain in trusted_domains)


def iter_images(tree: Tree | None) -> Iterator[Node]:
    """Yield image nodes depth-first, pre-order."""
    if tree is None:
        return
    if isinstance(tree, Node) and tree.type == IMAGE:
        yield tree
    for child in tree.children:
        yield from iter_images(child)


def resolve_cover_image(
    doc: Any,
    explicit_cover_image: str | None = None,
    trusted_domains: Iterable[str] = TRUSTED_IMAGE_DOMAINS,
) -> str | None:
    """Pick the image shown on cards, link previews and meta tags.

    Args:
        doc: Document or raw stored content.
        explicit_cover_image: The cover stored on the blog record. When set
            it is returned unchanged.
        trusted_domains: Hosts an in-content image must come from.

    Returns:
        The explicit cover, else the first https image from a trusted host
        found depth-first, else None.
    """
    if explicit_cover_image:
        return explicit_cover_image

    domains = tuple(trusted_domains)
    for node in iter_images(coerce_tree(doc)):
        src = node.attrs.src if isinstance(node.attrs, ImageAttrs) else ""
        if src.startswith("https://") and is_trusted_image_src(src, domains):
            return src
    return None
