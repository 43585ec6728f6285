from datetime import datetime
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from photo_date_sync.config import ConfigManager
from photo_date_sync.core import BatchAbortedError, DateReconciler, MetadataReadError, reconcile_dates
from photo_date_sync.models import ErrorLevel, FileContext, FileTimes, SyncStatus
from photo_date_sync.utils.error_handler import ErrorHandler
from photo_date_sync.utils.time_utils import CaptureTimeParseError

CREATED = datetime(2020, 5, 1)
MODIFIED = datetime(2020, 6, 1)


def _context(tmp_path: Path) -> FileContext:
    source = tmp_path / "photo.jpg"
    source.write_bytes(b"jpeg-bytes")
    output_dir = tmp_path / "out"
    output_dir.mkdir()
    return FileContext.for_output_dir(source, output_dir)


def _reconciler(accessor, config=None) -> DateReconciler:
    config = config or ConfigManager()
    config.set("retry.max_retries", 0)
    return DateReconciler(config, accessor=accessor, error_handler=ErrorHandler())


def test_reconcile_dates_without_capture() -> None:
    assert reconcile_dates(CREATED, MODIFIED) == CREATED
    assert reconcile_dates(MODIFIED, CREATED) == CREATED


def test_reconcile_dates_with_earlier_capture() -> None:
    assert reconcile_dates(CREATED, MODIFIED, datetime(2019, 1, 1)) == datetime(2019, 1, 1)


def test_reconcile_dates_ignores_later_capture() -> None:
    assert reconcile_dates(CREATED, MODIFIED, datetime(2021, 1, 1)) == CREATED


def test_reconcile_applies_in_order(tmp_path: Path) -> None:
    context = _context(tmp_path)
    calls: list[str] = []
    accessor = MagicMock()
    accessor.get_capture_time.return_value = datetime(2019, 1, 1)

    def _set_capture(ctx, value):
        calls.append("capture")
        ctx.output_path.write_bytes(b"with-exif")
        return True

    accessor.set_capture_time.side_effect = _set_capture
    reconciler = _reconciler(accessor)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(CREATED, MODIFIED)), patch(
        "photo_date_sync.core.reconciler.file_times.set_created_time",
        side_effect=lambda path, value: calls.append("created"),
    ), patch(
        "photo_date_sync.core.reconciler.file_times.set_modified_time",
        side_effect=lambda path, value: calls.append("modified"),
    ):
        result = reconciler.reconcile(context)

    assert calls == ["capture", "created", "modified"]
    assert result.status == SyncStatus.SYNCED
    assert result.reconciled == datetime(2019, 1, 1)
    accessor.set_capture_time.assert_called_once_with(context, datetime(2019, 1, 1))
    assert context.output_path.read_bytes() == b"with-exif"


def test_reconcile_skips_unset_times(tmp_path: Path) -> None:
    context = _context(tmp_path)
    accessor = MagicMock()
    reconciler = _reconciler(accessor)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(None, MODIFIED)):
        result = reconciler.reconcile(context)

    assert result.status == SyncStatus.SKIPPED_INVALID_TIMES
    accessor.get_capture_time.assert_not_called()
    accessor.set_capture_time.assert_not_called()
    assert not context.output_path.exists()


def test_reconcile_reports_partial_failure(tmp_path: Path) -> None:
    context = _context(tmp_path)
    accessor = MagicMock()
    accessor.get_capture_time.return_value = None
    accessor.set_capture_time.return_value = False
    reconciler = _reconciler(accessor)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(CREATED, MODIFIED)):
        result = reconciler.reconcile(context)

    assert result.status == SyncStatus.PARTIAL_FAILURE
    assert result.capture_time_set is False
    assert result.created_time_set is True
    assert result.modified_time_set is True
    assert context.output_path.read_bytes() == b"jpeg-bytes"
    warnings = reconciler.error_handler.get_by_level(ErrorLevel.RECOVERABLE)
    assert [warning.code for warning in warnings] == ["W-101"]
    assert warnings[0].status is SyncStatus.PARTIAL_FAILURE


def test_reconcile_partial_failure_when_setter_raises(tmp_path: Path) -> None:
    context = _context(tmp_path)
    accessor = MagicMock()
    accessor.get_capture_time.return_value = None
    accessor.set_capture_time.return_value = True
    reconciler = _reconciler(accessor)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(CREATED, MODIFIED)), patch(
        "photo_date_sync.core.reconciler.file_times.set_created_time",
        side_effect=PermissionError("denied"),
    ):
        result = reconciler.reconcile(context)

    assert result.status == SyncStatus.PARTIAL_FAILURE
    assert result.created_time_set is False
    assert result.modified_time_set is True


def test_reconcile_dry_run_writes_nothing(tmp_path: Path) -> None:
    context = _context(tmp_path)
    accessor = MagicMock()
    accessor.get_capture_time.return_value = None
    reconciler = _reconciler(accessor)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(CREATED, MODIFIED)):
        result = reconciler.reconcile(context, dry_run=True)

    assert result.status == SyncStatus.PLANNED
    assert result.reconciled == CREATED
    accessor.set_capture_time.assert_not_called()
    assert not context.output_path.exists()


def test_invalid_capture_time_skips_by_default(tmp_path: Path) -> None:
    context = _context(tmp_path)
    accessor = MagicMock()
    accessor.get_capture_time.side_effect = CaptureTimeParseError("bad")
    reconciler = _reconciler(accessor)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(CREATED, MODIFIED)):
        result = reconciler.reconcile(context)

    assert result.status == SyncStatus.SKIPPED_INVALID_METADATA
    accessor.set_capture_time.assert_not_called()
    assert not context.output_path.exists()
    (warning,) = reconciler.error_handler.get_by_level(ErrorLevel.RECOVERABLE)
    assert warning.code == "W-102"
    assert warning.status is SyncStatus.SKIPPED_INVALID_METADATA


def test_invalid_capture_time_ignored_when_configured(tmp_path: Path) -> None:
    context = _context(tmp_path)
    accessor = MagicMock()
    accessor.get_capture_time.side_effect = MetadataReadError("bad block")
    accessor.set_capture_time.return_value = True
    config = ConfigManager()
    config.set("metadata.on_invalid_date", "ignore")
    reconciler = _reconciler(accessor, config)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(CREATED, MODIFIED)):
        result = reconciler.reconcile(context)

    assert result.status == SyncStatus.SYNCED
    assert result.reconciled == CREATED


def test_invalid_capture_time_aborts_when_configured(tmp_path: Path) -> None:
    context = _context(tmp_path)
    accessor = MagicMock()
    accessor.get_capture_time.side_effect = CaptureTimeParseError("bad")
    config = ConfigManager()
    config.set("metadata.on_invalid_date", "abort")
    reconciler = _reconciler(accessor, config)

    with patch.object(DateReconciler, "read_times", return_value=FileTimes(CREATED, MODIFIED)):
        with pytest.raises(BatchAbortedError):
            reconciler.reconcile(context)

    assert len(reconciler.error_handler.get_by_level(ErrorLevel.FATAL)) == 1
