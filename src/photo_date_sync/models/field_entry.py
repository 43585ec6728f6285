"""EXIF 目錄中的單一欄位。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

ASCII_TYPE = 2


@dataclass
class FieldEntry:
    """ASCII 欄位的 payload 為含結尾 NUL 的 bytes；其他型別保留 piexif 解出的值。"""

    ifd: str
    tag: int
    type_code: int
    payload: Any

    @property
    def length(self) -> int:
        if isinstance(self.payload, (bytes, tuple)):
            return len(self.payload)
        return 1
