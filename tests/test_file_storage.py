from __future__ import annotations

from pathlib import Path

import pytest

from guarded_file_server.errors import FileNotFoundInStorageError, InvalidPathError
from guarded_file_server.storage.files import FileStorage


def test_resolve_and_stat_nested_file(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "c.png"
    target.parent.mkdir(parents=True)
    target.write_bytes(b"\x89PNG\r\n")

    storage = FileStorage(tmp_path)
    resolved = storage.resolve_path("a/b/c.png")
    assert resolved == target.resolve()
    assert storage.stat_file(resolved, "a/b/c.png").st_size == len(b"\x89PNG\r\n")


def test_resolve_path_stays_under_root(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path)
    assert storage.resolve_path("x/y.txt") == tmp_path.resolve() / "x" / "y.txt"
    with pytest.raises(InvalidPathError):
        storage.resolve_path("../outside.txt")
    with pytest.raises(InvalidPathError):
        storage.resolve_path("./")


def test_resolve_path_does_not_create_directories(tmp_path: Path) -> None:
    storage = FileStorage(tmp_path)
    storage.resolve_path("new/folder/file.txt")
    assert not (tmp_path / "new").exists()


def test_symlink_escaping_root_is_rejected(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    outside = tmp_path / "outside"
    outside.mkdir()
    (outside / "secret.txt").write_text("nope", encoding="utf-8")
    (root / "escape").symlink_to(outside, target_is_directory=True)

    storage = FileStorage(root)
    with pytest.raises(InvalidPathError):
        storage.resolve_path("escape/secret.txt")


def test_symlink_loop_is_not_a_file(tmp_path: Path) -> None:
    (tmp_path / "loop").symlink_to(tmp_path / "loop")
    storage = FileStorage(tmp_path)

    # Older interpreters fail while resolving, newer ones while reading.
    with pytest.raises((InvalidPathError, FileNotFoundInStorageError)):
        target = storage.resolve_path("loop/x.txt")
        storage.stat_file(target, "loop/x.txt")


def test_stat_file_requires_regular_file(tmp_path: Path) -> None:
    (tmp_path / "folder").mkdir()
    storage = FileStorage(tmp_path)
    with pytest.raises(FileNotFoundInStorageError):
        storage.stat_file(storage.resolve_path("folder"), "folder")
    with pytest.raises(FileNotFoundInStorageError):
        storage.stat_file(storage.resolve_path("missing.txt"), "missing.txt")
