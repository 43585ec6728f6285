"""處理過程中的錯誤與警告記錄。"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .sync_result import SyncStatus


class ErrorLevel(str, Enum):
    INFO = "I"
    RECOVERABLE = "W"
    FATAL = "E"


@dataclass
class ProcessError:
    """code 以等級字母開頭（I-/W-/E-），status 為記錄當下該檔案的同步結果。"""

    code: str
    level: ErrorLevel
    message: str
    file_path: Optional[str] = None
    status: Optional[SyncStatus] = None

    def describe(self) -> str:
        label = f"[{self.code}]"
        if self.status is not None:
            label = f"[{self.code} {self.status.value}]"
        return f"{label} {self.file_path or '-'}: {self.message}"
