import errno
import os
from pathlib import Path

import pytest

from xdgtrash.errors import DestinationMissingError
from xdgtrash.services import relocate
from xdgtrash.services.relocate import move_path


def test_moves_file(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.write_text("hello\n", encoding="utf-8")
    dst = tmp_path / "files" / "a.txt"
    dst.parent.mkdir()

    move_path(src, dst)

    assert not src.exists()
    assert dst.read_text(encoding="utf-8") == "hello\n"


def test_moves_directory_tree(tmp_path: Path) -> None:
    src = tmp_path / "project"
    (src / "nested").mkdir(parents=True)
    (src / "nested" / "data.bin").write_bytes(b"\x00\x01")
    dst = tmp_path / "files" / "project"
    dst.parent.mkdir()

    move_path(src, dst)

    assert not src.exists()
    assert (dst / "nested" / "data.bin").read_bytes() == b"\x00\x01"


def test_moves_symlink_not_target(tmp_path: Path) -> None:
    target = tmp_path / "target.txt"
    target.write_text("target", encoding="utf-8")
    link = tmp_path / "link"
    link.symlink_to(target)
    dst = tmp_path / "files" / "link"
    dst.parent.mkdir()

    move_path(link, dst)

    assert dst.is_symlink()
    assert os.readlink(dst) == str(target)
    assert target.read_text(encoding="utf-8") == "target"


def test_refuses_to_overwrite(tmp_path: Path) -> None:
    src = tmp_path / "new.txt"
    src.write_text("new", encoding="utf-8")
    dst = tmp_path / "old.txt"
    dst.write_text("old", encoding="utf-8")

    with pytest.raises(FileExistsError):
        move_path(src, dst)

    assert src.read_text(encoding="utf-8") == "new"
    assert dst.read_text(encoding="utf-8") == "old"


def test_refuses_to_replace_dangling_symlink(tmp_path: Path) -> None:
    src = tmp_path / "new.txt"
    src.touch()
    dst = tmp_path / "dangling"
    dst.symlink_to(tmp_path / "nowhere")

    with pytest.raises(FileExistsError):
        move_path(src, dst)

    assert src.exists()


def test_missing_destination_dir_is_distinguished(tmp_path: Path) -> None:
    src = tmp_path / "a.txt"
    src.touch()
    dst = tmp_path / "missing" / "a.txt"

    with pytest.raises(DestinationMissingError) as excinfo:
        move_path(src, dst)

    assert isinstance(excinfo.value, FileNotFoundError)
    assert excinfo.value.filename == str(tmp_path / "missing")
    assert src.exists()


def test_missing_source_is_not_destination_missing(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError) as excinfo:
        move_path(tmp_path / "ghost", tmp_path / "dest")

    assert not isinstance(excinfo.value, DestinationMissingError)


def test_destination_created_after_check_is_kept(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    src = tmp_path / "mine.txt"
    src.write_text("mine", encoding="utf-8")
    dst = tmp_path / "theirs.txt"
    dst.write_text("theirs", encoding="utf-8")
    # Another agent creates dst just after the existence check passes.
    monkeypatch.setattr(relocate, "_occupied", lambda path: False)

    with pytest.raises(FileExistsError):
        move_path(src, dst)

    assert dst.read_text(encoding="utf-8") == "theirs"
    assert src.read_text(encoding="utf-8") == "mine"


def test_falls_back_to_copy_across_devices(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    def cross_device(*args: object, **kwargs: object) -> None:
        raise OSError(errno.EXDEV, os.strerror(errno.EXDEV))

    monkeypatch.setattr(relocate.os, "link", cross_device)
    src = tmp_path / "a.txt"
    src.write_text("hello\n", encoding="utf-8")
    dst = tmp_path / "files" / "a.txt"
    dst.parent.mkdir()

    move_path(src, dst)

    assert not src.exists()
    assert dst.read_text(encoding="utf-8") == "hello\n"
