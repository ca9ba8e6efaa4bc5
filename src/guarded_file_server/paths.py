"""Pure path-safety checks for caller supplied storage paths."""

from __future__ import annotations

import re
from pathlib import Path, PurePosixPath

from .errors import InvalidPathError

_SEPARATORS = re.compile(r"[\\/]")
_DRIVE_PREFIX = re.compile(r"^[A-Za-z]:")


def clean_relative_path(requested: str) -> PurePosixPath:
    """Validate ``requested`` and return it as a normalized relative path.

    Both ``/`` and ``\\`` count as separators. Empty input, NUL bytes,
    absolute prefixes (POSIX, UNC or drive letters) and any ``..`` segment
    raise :class:`InvalidPathError`. Empty and ``.`` segments are dropped.
    Nothing here touches the filesystem.
    """
    if not requested or not requested.strip():
        raise InvalidPathError(requested, "Empty path")
    if "\x00" in requested:
        raise InvalidPathError(requested, "Path contains a NUL byte")
    if requested[0] in "/\\" or _DRIVE_PREFIX.match(requested):
        raise InvalidPathError(requested, "Absolute paths are not allowed")

    parts: list[str] = []
    for segment in _SEPARATORS.split(requested):
        if segment in ("", "."):
            continue
        if segment == "..":
            raise InvalidPathError(requested, "Parent directory segments are not allowed")
        parts.append(segment)

    if not parts:
        raise InvalidPathError(requested, "Path does not name a file")
    return PurePosixPath(*parts)


def is_within(root: Path, candidate: Path) -> bool:
    """Return True when ``candidate`` equals or descends from ``root``.

    Both arguments must already be canonical (``Path.resolve()``).
    """
    return candidate == root or candidate.is_relative_to(root)
