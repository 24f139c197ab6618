import stat
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

import pytest

from xdgtrash.services import reserve
from xdgtrash.services.reserve import reserve_info_file


def count_dir_creation(monkeypatch: pytest.MonkeyPatch, *, create: bool = True) -> list[Path]:
    calls: list[Path] = []
    real = reserve.ensure_trash_dir

    def fake(path: Path) -> None:
        calls.append(path)
        if create:
            real(path)

    monkeypatch.setattr(reserve, "ensure_trash_dir", fake)
    return calls


def test_creates_missing_info_dir(tmp_path: Path) -> None:
    info_dir = tmp_path / "Trash" / "info"

    with reserve_info_file(info_dir, "test.txt") as reservation:
        pass

    assert reservation.path == info_dir / "test.txt.trashinfo"
    assert reservation.internal_name == "test.txt"
    assert reservation.handle.closed
    assert reservation.path.is_file()


def test_repeated_reservations_get_numbered_names(tmp_path: Path) -> None:
    info_dir = tmp_path / "info"
    names = []
    for _ in range(4):
        with reserve_info_file(info_dir, "base") as reservation:
            names.append(reservation.path.name)

    assert names == [
        "base.trashinfo",
        "base.2.trashinfo",
        "base.3.trashinfo",
        "base.4.trashinfo",
    ]


def test_internal_name_includes_duplicate_suffix(tmp_path: Path) -> None:
    (tmp_path / "report.txt.trashinfo").touch()

    with reserve_info_file(tmp_path, "report.txt") as reservation:
        assert reservation.internal_name == "report.txt.2"


def test_never_overwrites_existing_metadata(tmp_path: Path) -> None:
    existing = tmp_path / "a.trashinfo"
    existing.write_text("keep me", encoding="utf-8")

    with reserve_info_file(tmp_path, "a") as reservation:
        reservation.handle.write("new")

    assert existing.read_text(encoding="utf-8") == "keep me"
    assert (tmp_path / "a.2.trashinfo").read_text(encoding="utf-8") == "new"


def test_info_dir_is_created_only_once(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = count_dir_creation(monkeypatch)
    info_dir = tmp_path / "Trash" / "info"

    reserve_info_file(info_dir, "one").close()
    reserve_info_file(info_dir, "one").close()
    reserve_info_file(info_dir, "two").close()

    assert calls == [info_dir]


def test_gives_up_when_info_dir_stays_missing(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    calls = count_dir_creation(monkeypatch, create=False)

    with pytest.raises(FileNotFoundError):
        reserve_info_file(tmp_path / "missing" / "info", "x")

    assert len(calls) == 1


def test_other_errors_propagate(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    calls = count_dir_creation(monkeypatch)
    not_a_dir = tmp_path / "info"
    not_a_dir.write_text("", encoding="utf-8")

    with pytest.raises(NotADirectoryError):
        reserve_info_file(not_a_dir, "x")

    assert calls == []


@pytest.mark.parametrize("name", ["", "a/b", "..", "."])
def test_rejects_unusable_base_names(tmp_path: Path, name: str) -> None:
    with pytest.raises(ValueError):
        reserve_info_file(tmp_path, name)

    assert list(tmp_path.iterdir()) == []


def test_reserved_file_is_private(tmp_path: Path) -> None:
    with reserve_info_file(tmp_path, "secret") as reservation:
        pass

    assert stat.S_IMODE(reservation.path.stat().st_mode) == 0o600


def test_concurrent_reservations_are_distinct(tmp_path: Path) -> None:
    info_dir = tmp_path / "Trash" / "info"
    attempts = 24

    def claim(_: int) -> Path:
        with reserve_info_file(info_dir, "race.txt") as reservation:
            reservation.handle.write(reservation.path.name)
        return reservation.path

    with ThreadPoolExecutor(max_workers=8) as pool:
        paths = list(pool.map(claim, range(attempts)))

    expected = {"race.txt.trashinfo"} | {f"race.txt.{n}.trashinfo" for n in range(2, attempts + 1)}
    assert len(set(paths)) == attempts
    assert {path.name for path in paths} == expected
    for path in paths:
        assert path.read_text(encoding="utf-8") == path.name
