"""Configuration constants for blog-richtext."""

import os

# Image hosts allowed to render inline and to be promoted to cover images.
TRUSTED_IMAGE_DOMAINS: tuple[str, ...] = (
    "ik.imagekit.io",  # ImageKit CDN
    "img.clerk.com",  # Clerk user images
    "images.clerk.dev",
    "avatars.githubusercontent.com",
    "lh3.googleusercontent.com",
)

# Link hrefs rendered as clickable anchors. Anything else degrades to plain text.
SAFE_LINK_PREFIXES: tuple[str, ...] = ("http://", "https://", "/", "#", "mailto:")

# Image sources accepted at all. blob: URLs do not survive persistence.
VALID_IMAGE_PREFIXES: tuple[str, ...] = ("https://", "http://", "/")

# Stored content nested deeper than this is dropped at load time.
MAX_NODE_DEPTH: int = 64

WORDS_PER_MINUTE: int = 200

# Preview lengths used by the listing surfaces.
DASHBOARD_PREVIEW_CHARS: int = 100
FEED_PREVIEW_CHARS: int = 200
SEO_DESCRIPTION_CHARS: int = 160

DEFAULT_PREVIEW_FALLBACK: str = "Read more..."

# Limits enforced before a blog record is persisted.
MAX_TITLE_CHARS: int = 200
MAX_DESCRIPTION_CHARS: int = 300
MAX_TAGS: int = 5
MAX_TAG_CHARS: int = 30
MAX_CONTENT_CHARS: int = 500_000

YOUTUBE_EMBED_PREFIX: str = "https://www.youtube-nocookie.com/embed/"

# Public feed API. BLOG_API_URL overrides the default.
DEFAULT_API_BASE_URL: str = "http://localhost:4000/api/v1"
FEED_PAGE_MAX: int = 50
FEED_SEARCH_MAX_CHARS: int = 100
API_TIMEOUT_SECONDS: float = 10.0


def resolve_api_base_url() -> str:
    """Return the feed API base URL, honouring the BLOG_API_URL env var."""
    return os.environ.get("BLOG_API_URL", DEFAULT_API_BASE_URL).rstrip("/")
