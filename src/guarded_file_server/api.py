"""FastAPI application exposing files from the storage root."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.responses import FileResponse

from .auth import AuthContext, get_auth_context
from .config import Settings, get_settings
from .errors import FileAccessError
from .responder import GuardedFileResponder

logger = logging.getLogger(__name__)


async def get_responder(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> GuardedFileResponder:
    state = request.app.state
    if not hasattr(state, "file_responder"):
        state.file_responder = GuardedFileResponder(settings.responder_config())
    return state.file_responder


async def file_access_error_handler(request: Request, exc: FileAccessError) -> Response:
    logger.debug("%s %s -> %d (%s)", request.method, request.url.path, exc.status_code, type(exc).__name__)
    return Response(status_code=exc.status_code)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; ``settings`` defaults to the cached environment settings."""
    settings = settings or get_settings()
    app = FastAPI(title="Guarded File Server", version="0.1.0")
    app.state.settings = settings
    app.dependency_overrides[get_settings] = lambda: settings
    app.add_exception_handler(FileAccessError, file_access_error_handler)

    @app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route(f"{settings.url_prefix}/{{path:path}}", methods=["GET", "HEAD"])
    def serve_file(
        path: str,
        responder: GuardedFileResponder = Depends(get_responder),
        auth_context: AuthContext = Depends(get_auth_context),
    ) -> FileResponse:
        served = responder.serve(path, auth_context)
        if served.protected:
            cache_control = "private, no-store"
        else:
            cache_control = f"public, max-age={settings.cache_max_age}"
        return FileResponse(
            served.path,
            media_type=served.media_type,
            filename=served.filename,
            content_disposition_type="inline",
            headers={"Cache-Control": cache_control},
        )

    return app
