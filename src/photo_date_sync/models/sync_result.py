"""單一檔案的同步結果。"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional


class SyncStatus(str, Enum):
    SYNCED = "SYNCED"
    PLANNED = "PLANNED"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    SKIPPED_INVALID_TIMES = "SKIPPED_INVALID_TIMES"
    SKIPPED_INVALID_METADATA = "SKIPPED_INVALID_METADATA"


@dataclass
class SyncResult:
    source_path: Path
    status: SyncStatus
    reconciled: Optional[datetime] = None
    capture_time_set: bool = False
    created_time_set: bool = False
    modified_time_set: bool = False
    reason: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "source_path": str(self.source_path),
            "status": self.status.value,
            "reconciled": self.reconciled.strftime("%Y-%m-%d %H:%M:%S") if self.reconciled else None,
            "capture_time_set": self.capture_time_set,
            "created_time_set": self.created_time_set,
            "modified_time_set": self.modified_time_set,
            "reason": self.reason,
        }
