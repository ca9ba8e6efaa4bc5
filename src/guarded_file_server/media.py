"""Content-type detection based on file extensions."""

from __future__ import annotations

import mimetypes
from pathlib import PurePath

DEFAULT_MEDIA_TYPE = "application/octet-stream"

# Types missing from older mimetypes databases.
_EXTRA_TYPES: dict[str, str] = {
    ".webp": "image/webp",
    ".avif": "image/avif",
    ".heic": "image/heic",
    ".woff2": "font/woff2",
    ".md": "text/markdown",
    ".mjs": "text/javascript",
}

_TEXT_LIKE = {"application/json", "application/javascript", "application/xml", "image/svg+xml"}


def guess_media_type(path: PurePath) -> str:
    """Return the media type for ``path``, with a charset for text types."""
    suffix = path.suffix.lower()
    media_type = _EXTRA_TYPES.get(suffix)
    if media_type is None:
        media_type, _ = mimetypes.guess_type(path.name, strict=False)
    if media_type is None:
        return DEFAULT_MEDIA_TYPE
    if media_type.startswith("text/") or media_type in _TEXT_LIKE:
        return f"{media_type}; charset=utf-8"
    return media_type
