from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from guarded_file_server.config import Settings, get_settings


class RecordingAuth:
    """Auth context that records how often it was consulted."""

    def __init__(self, permitted: bool) -> None:
        self.permitted = permitted
        self.calls = 0

    def __call__(self) -> bool:
        self.calls += 1
        return self.permitted


@pytest.fixture
def recording_auth():
    """Factory for auth contexts that count how often they are consulted."""
    return RecordingAuth


@pytest.fixture
def storage_root(tmp_path: Path) -> Path:
    root = tmp_path / "data" / "public"
    (root / "fee_attachments").mkdir(parents=True)
    (root / "fee_attachments" / "1.jpg").write_bytes(b"\xff\xd8\xff\xe0fake-jpeg")
    (root / "private").mkdir()
    (root / "private" / "report.pdf").write_bytes(b"%PDF-1.7 fake")
    (tmp_path / "data" / "secrets.txt").write_text("top secret", encoding="utf-8")
    return root


@pytest.fixture
def make_settings(storage_root: Path):
    def factory(**overrides) -> Settings:
        values = {"storage_root": storage_root, "public_base_url": "https://files.example.com"}
        values.update(overrides)
        return Settings(**values)

    return factory


@pytest.fixture
def env_settings(storage_root: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Settings]:
    monkeypatch.setenv("STORAGE_ROOT", str(storage_root))
    monkeypatch.setenv("PUBLIC_BASE_URL", "https://files.example.com/")
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()
