"""Command line entrypoint: run the server and manage public links."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from .config import get_settings
from .errors import InvalidPathError, LinkExistsError
from .links import create_storage_link, public_url

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (defaults to HOST setting)."),
    port: Optional[int] = typer.Option(None, help="Bind port (defaults to PORT setting)."),
    reload: bool = typer.Option(False, help="Reload on code changes (development only)."),
) -> None:
    """Run the HTTP server."""
    settings = get_settings()
    _configure_logging(settings.log_level)
    uvicorn.run(
        "guarded_file_server.api:create_app",
        factory=True,
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level,
    )


@app.command("link")
def link(
    link_path: Path = typer.Argument(..., help="Where to create the public symlink, e.g. public/storage."),
    force: bool = typer.Option(False, help="Replace an existing symlink."),
) -> None:
    """Expose the storage root through a symbolic link."""
    settings = get_settings()
    _configure_logging(settings.log_level)
    try:
        created = create_storage_link(settings.storage_root, link_path, force=force)
    except LinkExistsError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Linked {created} -> {settings.storage_root}")


@app.command("url")
def url(path: str = typer.Argument(..., help="Path relative to the storage root.")) -> None:
    """Print the public URL of a stored file."""
    try:
        typer.echo(public_url(get_settings(), path))
    except InvalidPathError as exc:
        typer.echo(f"Invalid path: {exc}", err=True)
        raise typer.Exit(code=2) from exc
