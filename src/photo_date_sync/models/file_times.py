"""單一檔案處理期間使用的路徑與時間戳。"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class FileContext:
    """來源檔案與其輸出位置；每個檔案建立一次，不再變動。"""

    source_path: Path
    output_path: Path

    @classmethod
    def for_output_dir(cls, source_path: Path, output_dir: Path) -> "FileContext":
        return cls(source_path=source_path, output_path=output_dir / source_path.name)


@dataclass(frozen=True)
class FileTimes:
    created: Optional[datetime]
    modified: Optional[datetime]

    @property
    def is_valid(self) -> bool:
        return self.created is not None and self.modified is not None
