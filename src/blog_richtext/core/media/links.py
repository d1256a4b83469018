"""Link safety checks."""

from blog_richtext.config import SAFE_LINK_PREFIXES


def is_safe_href(href: object) -> bool:
    """Return True if ``href`` may be rendered as a clickable anchor.

    Only http(s), root-relative, fragment and mailto links qualify, so
    ``javascript:`` and ``data:`` URLs never become anchors.
    """
    return isinstance(href, str) and href.startswith(SAFE_LINK_PREFIXES)
