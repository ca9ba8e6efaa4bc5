"""Entrypoint for ``python -m guarded_file_server``."""

from __future__ import annotations

from .cli import app


def main() -> None:
    app(prog_name="guarded-file-server")


if __name__ == "__main__":
    main()
