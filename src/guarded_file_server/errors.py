"""Error taxonomy shared by the storage, responder and API layers."""

from __future__ import annotations


class FileAccessError(Exception):
    """Base class for failures scoped to a single file request."""

    status_code: int = 404

    def __init__(self, requested_path: str, message: str | None = None) -> None:
        self.requested_path = requested_path
        super().__init__(message or self.__class__.__doc__ or "File access failed")


class InvalidPathError(FileAccessError):
    """Requested path is malformed or escapes the storage root."""

    # Same status as a miss so the response never reveals the layout.
    status_code = 404


class UnauthorizedError(FileAccessError):
    """Caller is not permitted to read from a protected location."""

    status_code = 403


class FileNotFoundInStorageError(FileAccessError):
    """No regular file exists at the requested path."""

    status_code = 404


class LinkExistsError(Exception):
    """The public link location is already occupied."""

    def __init__(self, link_path: object) -> None:
        self.link_path = link_path
        super().__init__(f"Link path already exists: {link_path}")
