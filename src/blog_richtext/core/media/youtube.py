"""YouTube embed helpers."""

import re

from blog_richtext.config import YOUTUBE_EMBED_PREFIX

# watch?v=, /embed/, /v/, /e/, /<user>/<x>/ and youtu.be/ forms.
_YOUTUBE_ID_RE = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)


def extract_youtube_id(url: object) -> str:
    """Return the 11-character video ID in ``url``, or "" if there is none."""
    if not isinstance(url, str):
        return ""
    match = _YOUTUBE_ID_RE.search(url)
    return match.group(1) if match else ""


def youtube_embed_url(video_id: str) -> str:
    """Privacy-enhanced (no-cookie) player URL for a video ID."""
    return f"{YOUTUBE_EMBED_PREFIX}{video_id}"
