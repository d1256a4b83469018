"""Exception types raised at the package boundaries.

The pure document functions never raise for malformed content; these are
only used where I/O or persistence rules are involved.
"""


class BlogRichtextError(Exception):
    """Base class for blog-richtext errors."""


class DocumentLoadError(BlogRichtextError):
    """A document file could not be read or is not valid JSON."""


class ContentValidationError(BlogRichtextError, ValueError):
    """A blog payload breaks a persistence limit."""


class FeedApiError(BlogRichtextError, RuntimeError):
    """The feed API returned an error envelope or an HTTP failure."""

    def __init__(self, message: str, *, code: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.status = status
