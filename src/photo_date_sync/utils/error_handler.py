"""錯誤收集工具。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..models.error_record import ErrorLevel, ProcessError
from ..models.sync_result import SyncStatus


@dataclass
class ErrorHandler:
    """集中管理單次執行中的錯誤與警告。"""

    errors: List[ProcessError] = field(default_factory=list)

    def add(self, error: ProcessError) -> None:
        self.errors.append(error)

    def add_info(
        self, code: str, message: str, file_path: Optional[str] = None, *, status: Optional[SyncStatus] = None
    ) -> None:
        self.add(ProcessError(code, ErrorLevel.INFO, message, file_path, status))

    def add_warning(
        self, code: str, message: str, file_path: Optional[str] = None, *, status: Optional[SyncStatus] = None
    ) -> None:
        self.add(ProcessError(code, ErrorLevel.RECOVERABLE, message, file_path, status))

    def add_fatal(
        self, code: str, message: str, file_path: Optional[str] = None, *, status: Optional[SyncStatus] = None
    ) -> None:
        self.add(ProcessError(code, ErrorLevel.FATAL, message, file_path, status))

    def get_by_level(self, level: ErrorLevel) -> List[ProcessError]:
        return [error for error in self.errors if error.level == level]
