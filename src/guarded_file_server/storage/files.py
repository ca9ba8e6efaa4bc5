"""Read access to files kept under a single storage root."""

from __future__ import annotations

import os
import stat
from pathlib import Path

from ..errors import FileNotFoundInStorageError, InvalidPathError
from ..paths import clean_relative_path, is_within


class FileStorage:
    """Resolve caller supplied paths strictly inside a safe root."""

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = Path(base_dir).resolve()

    def resolve_path(self, relative_path: str) -> Path:
        """Resolve a user-provided path under the storage root.

        The lexical check runs first, so a rejected path is never joined
        with the root. The canonical result is checked again to catch
        symlinks that lead out of the root.
        """
        cleaned = clean_relative_path(relative_path)
        try:
            candidate = (self.base_dir / cleaned).resolve()
        except (OSError, RuntimeError) as exc:
            # Symlink loops raise RuntimeError before Python 3.13.
            raise InvalidPathError(relative_path, "Path cannot be resolved") from exc
        if not is_within(self.base_dir, candidate) or candidate == self.base_dir:
            raise InvalidPathError(relative_path, "Path resolves outside the storage directory")
        return candidate

    def stat_file(self, target: Path, relative_path: str) -> os.stat_result:
        """Return the stat of ``target``, which must be a regular file."""
        try:
            stat_result = target.stat()
        except OSError as exc:
            raise FileNotFoundInStorageError(relative_path) from exc
        if not stat.S_ISREG(stat_result.st_mode):
            raise FileNotFoundInStorageError(relative_path, "Not a regular file")
        return stat_result
