"""Guarded file responder: path safety, authorization and lookup."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Optional

from .auth import AuthContext
from .errors import FileNotFoundInStorageError, UnauthorizedError
from .media import guess_media_type
from .paths import clean_relative_path, is_within
from .storage.files import FileStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResponderConfig:
    """Explicit configuration handed to the responder."""

    storage_root: Path
    require_auth: bool = False
    protected_prefixes: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ServedFile:
    """A file that passed every check and may be streamed to the caller."""

    path: Path
    media_type: str
    size: int
    protected: bool = False

    @property
    def filename(self) -> str:
        return self.path.name


class GuardedFileResponder:
    """Resolve requests against the storage root and enforce access rules."""

    def __init__(self, config: ResponderConfig, storage: Optional[FileStorage] = None) -> None:
        self.config = config
        self.storage = storage or FileStorage(config.storage_root)
        prefixes = [prefix.strip("/") for prefix in config.protected_prefixes if prefix.strip("/")]
        # Requested paths are matched case-insensitively so a case-folding
        # filesystem cannot be used to sidestep a prefix.
        self._protected_names = tuple(PurePosixPath(prefix.casefold()) for prefix in prefixes)
        self._protected_dirs = tuple(self._canonical_prefix(prefix) for prefix in prefixes)

    def _canonical_prefix(self, prefix: str) -> Path:
        candidate = self.storage.base_dir / clean_relative_path(prefix)
        try:
            return candidate.resolve()
        except (OSError, RuntimeError):
            return candidate

    def is_protected(self, requested: PurePosixPath, target: Path) -> bool:
        """True when either the requested path or its canonical target lies under a protected prefix."""
        if self.config.require_auth:
            return True
        folded = PurePosixPath(requested.as_posix().casefold())
        if any(folded == prefix or folded.is_relative_to(prefix) for prefix in self._protected_names):
            return True
        return any(is_within(directory, target) for directory in self._protected_dirs)

    def serve(self, requested_path: str, auth_context: AuthContext) -> ServedFile:
        """Return the file behind ``requested_path`` or raise a FileAccessError.

        Authorization is decided before existence, so an unauthorized caller
        cannot probe which protected files exist.
        """
        requested = clean_relative_path(requested_path)
        target = self.storage.resolve_path(requested_path)

        protected = self.is_protected(requested, target)
        if protected and not auth_context():
            logger.debug("Denied unauthenticated request for %s", requested_path)
            raise UnauthorizedError(requested_path)

        try:
            stat_result = self.storage.stat_file(target, requested_path)
        except FileNotFoundInStorageError:
            logger.debug("No regular file at %s", requested_path)
            raise

        served = ServedFile(
            path=target,
            media_type=guess_media_type(target),
            size=stat_result.st_size,
            protected=protected,
        )
        logger.debug("Serving %s (%s, %d bytes)", requested_path, served.media_type, served.size)
        return served
