"""Public URLs and the symlink that exposes the storage root."""

from __future__ import annotations

import logging
from pathlib import Path
from urllib.parse import quote

from .config import Settings
from .errors import LinkExistsError
from .paths import clean_relative_path

logger = logging.getLogger(__name__)


def public_url(settings: Settings, relative_path: str) -> str:
    """Return the URL under which ``relative_path`` is served."""
    cleaned = clean_relative_path(relative_path)
    return f"{settings.public_base_url}{settings.url_prefix}/{quote(cleaned.as_posix())}"


def create_storage_link(target: Path, link_path: Path, *, force: bool = False) -> Path:
    """Create ``link_path`` as a symlink to ``target``.

    An existing symlink is only replaced with ``force``; a real file or
    directory at ``link_path`` is never touched.
    """
    target = Path(target).resolve()
    link_path = Path(link_path).absolute()
    if link_path.is_symlink():
        if not force:
            raise LinkExistsError(link_path)
        link_path.unlink()
    elif link_path.exists():
        raise LinkExistsError(link_path)

    link_path.parent.mkdir(parents=True, exist_ok=True)
    link_path.symlink_to(target, target_is_directory=True)
    logger.info("Linked %s -> %s", link_path, target)
    return link_path
