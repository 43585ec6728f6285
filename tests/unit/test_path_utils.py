from pathlib import Path

from photo_date_sync.utils import path_utils


def test_resolve_single_file(tmp_path: Path) -> None:
    path = tmp_path / "photo.jpg"
    path.write_bytes(b"x")
    assert path_utils.resolve_input_files(path) == [path]


def test_resolve_directory_is_not_recursive(tmp_path: Path) -> None:
    (tmp_path / "b.jpg").write_bytes(b"x")
    (tmp_path / "a.png").write_bytes(b"x")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "c.jpg").write_bytes(b"x")

    files = path_utils.resolve_input_files(tmp_path)

    assert files == [tmp_path / "a.png", tmp_path / "b.jpg"]


def test_resolve_missing_path(tmp_path: Path) -> None:
    assert path_utils.resolve_input_files(tmp_path / "missing") is None


def test_is_eligible_is_case_insensitive() -> None:
    assert path_utils.is_eligible(Path("IMG_0001.JPG")) is True
    assert path_utils.is_eligible(Path("scan.Png")) is True
    assert path_utils.is_eligible(Path("anim.gif")) is True
    assert path_utils.is_eligible(Path("notes.txt")) is False
    assert path_utils.is_eligible(Path("photo.jpgx")) is False
    assert path_utils.is_eligible(Path("README")) is False


def test_is_eligible_with_configured_extensions() -> None:
    assert path_utils.is_eligible(Path("photo.jpeg"), [".jpeg"]) is True
    assert path_utils.is_eligible(Path("photo.jpg"), [".jpeg"]) is False


def test_is_same_location(tmp_path: Path) -> None:
    assert path_utils.is_same_location(tmp_path, tmp_path / "sub" / "..") is True
    assert path_utils.is_same_location(tmp_path, tmp_path / "out") is False
