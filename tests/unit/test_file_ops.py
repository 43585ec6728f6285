from pathlib import Path
from unittest.mock import patch

from photo_date_sync.utils import file_ops


def test_ensure_output_copy_copies_once(tmp_path: Path) -> None:
    src = tmp_path / "source.jpg"
    dst = tmp_path / "out" / "source.jpg"
    dst.parent.mkdir()
    src.write_bytes(b"first")

    first = file_ops.ensure_output_copy(src, dst)
    src.write_bytes(b"second")
    second = file_ops.ensure_output_copy(src, dst)

    assert first.success is True
    assert first.value == "COPIED"
    assert second.success is True
    assert second.value == "EXISTS"
    assert dst.read_bytes() == b"first"


def test_safe_makedirs(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"
    result = file_ops.safe_makedirs(target)
    assert result.success is True
    assert target.is_dir()


def test_safe_makedirs_reports_failure(tmp_path: Path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")

    with patch("photo_date_sync.utils.file_ops.time.sleep", return_value=None):
        result = file_ops.safe_makedirs(blocker / "child", max_retries=1)

    assert result.success is False
    assert result.retry_count == 1
    assert result.error_message is not None


def test_safe_copy2_retry_success(tmp_path: Path) -> None:
    src = tmp_path / "source.txt"
    dst = tmp_path / "dest.txt"
    src.write_text("hello", encoding="utf-8")

    with patch("photo_date_sync.utils.file_ops.time.sleep", return_value=None), patch(
        "photo_date_sync.utils.file_ops.shutil.copy2",
        side_effect=[OSError("Network error"), OSError("Network error"), None],
    ):
        result = file_ops.safe_copy2(src, dst, max_retries=5)

    assert result.success is True
    assert result.retry_count == 2


def test_safe_copy2_retry_failed(tmp_path: Path) -> None:
    src = tmp_path / "source.txt"
    dst = tmp_path / "dest.txt"
    src.write_text("hello", encoding="utf-8")

    with patch("photo_date_sync.utils.file_ops.time.sleep", return_value=None), patch(
        "photo_date_sync.utils.file_ops.shutil.copy2",
        side_effect=OSError("Network error"),
    ):
        result = file_ops.safe_copy2(src, dst, max_retries=2)

    assert result.success is False
    assert result.retry_count == 2
    assert result.error_message is not None
    assert "Network error" in result.error_message
