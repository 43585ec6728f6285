"""拍攝時間與檔案系統時間的對齊。"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..config import ConfigManager
from ..models import FileContext, FileTimes, SyncResult, SyncStatus
from ..utils import file_ops, file_times
from ..utils.error_handler import ErrorHandler
from ..utils.logger import get_logger
from ..utils.time_utils import CaptureTimeParseError, earliest_date, format_display_time
from .exif_fields import CaptureTimeAccessor, MetadataReadError, MetadataWriteError

POLICY_IGNORE = "ignore"
POLICY_ABORT = "abort"


class BatchAbortedError(Exception):
    """拍攝時間無效且設定為 abort 時中止整批處理。"""


def reconcile_dates(
    created: datetime,
    modified: datetime,
    capture: Optional[datetime] = None,
) -> datetime:
    earliest = earliest_date(created, modified)
    if capture is not None:
        earliest = earliest_date(earliest, capture)
    return earliest


class DateReconciler:
    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        accessor: Optional[CaptureTimeAccessor] = None,
        error_handler: Optional[ErrorHandler] = None,
        logger=None,
    ) -> None:
        self.config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.accessor = accessor or CaptureTimeAccessor(self.config, logger=self.logger)
        self.error_handler = error_handler or ErrorHandler()
        self.invalid_date_policy = self.config.invalid_date_policy
        self.unset_max_epoch = self.config.unset_max_epoch

    def read_times(self, context: FileContext) -> FileTimes:
        return file_times.read_file_times(context.source_path, self.unset_max_epoch)

    def reconcile(self, context: FileContext, *, dry_run: bool = False) -> SyncResult:
        source = context.source_path
        times = self.read_times(context)
        if not times.is_valid:
            self.logger.info(f"SKIPPED_INVALID_TIMES: {source}")
            self.error_handler.add_info(
                "I-101", "檔案系統時間未設定", str(source), status=SyncStatus.SKIPPED_INVALID_TIMES
            )
            return SyncResult(source, SyncStatus.SKIPPED_INVALID_TIMES, reason="unset filesystem timestamps")

        try:
            capture = self.accessor.get_capture_time(context)
        except (CaptureTimeParseError, MetadataReadError) as exc:
            skipped = self._handle_invalid_metadata(context, exc)
            if skipped is not None:
                return skipped
            capture = None

        reconciled = reconcile_dates(times.created, times.modified, capture)
        if dry_run:
            self.logger.info(f"PLANNED: {source} -> {format_display_time(reconciled)}")
            return SyncResult(source, SyncStatus.PLANNED, reconciled=reconciled)

        # 拍攝時間須先寫入：輸出副本由此產生，之後的檔案時間才落在同一份副本上
        capture_set = self._apply_capture_time(context, reconciled)
        created_set = self._apply_file_time(context, file_times.set_created_time, reconciled)
        modified_set = self._apply_file_time(context, file_times.set_modified_time, reconciled)

        result = SyncResult(
            source,
            SyncStatus.SYNCED,
            reconciled=reconciled,
            capture_time_set=capture_set,
            created_time_set=created_set,
            modified_time_set=modified_set,
        )
        if not (capture_set and created_set and modified_set):
            result.status = SyncStatus.PARTIAL_FAILURE
            self.logger.warning(f"部分時間未能正確設定: {source}")
            self.error_handler.add_warning("W-101", "部分時間未能正確設定", str(source), status=result.status)
        else:
            self.logger.info(f"SYNCED: {source} -> {format_display_time(reconciled)}")
        return result

    def _handle_invalid_metadata(self, context: FileContext, exc: Exception) -> Optional[SyncResult]:
        source = context.source_path
        message = f"拍攝時間無法解析: {source} ({exc})"
        if self.invalid_date_policy == POLICY_ABORT:
            self.error_handler.add_fatal("E-101", message, str(source))
            raise BatchAbortedError(message) from exc
        self.logger.warning(message)
        if self.invalid_date_policy == POLICY_IGNORE:
            self.error_handler.add_warning("W-102", message, str(source))
            return None
        self.error_handler.add_warning(
            "W-102", message, str(source), status=SyncStatus.SKIPPED_INVALID_METADATA
        )
        return SyncResult(source, SyncStatus.SKIPPED_INVALID_METADATA, reason=str(exc))

    def _apply_capture_time(self, context: FileContext, value: datetime) -> bool:
        try:
            return self.accessor.set_capture_time(context, value)
        except (MetadataReadError, MetadataWriteError, OSError) as exc:
            self.logger.warning(f"無法寫入拍攝時間: {context.source_path} ({exc})")
            return False

    def _apply_file_time(
        self,
        context: FileContext,
        setter: Callable[..., None],
        value: datetime,
    ) -> bool:
        copy_result = file_ops.ensure_output_copy(
            context.source_path, context.output_path, config=self.config, logger=self.logger
        )
        if not copy_result.success:
            return False

        @file_ops.safe_op(config=self.config, logger=self.logger)
        def _set() -> None:
            setter(context.output_path, value)

        return _set().success
