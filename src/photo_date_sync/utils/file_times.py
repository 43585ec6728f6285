"""檔案系統時間戳的讀取與寫入。"""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from ..models import FileTimes


def read_file_times(path: Path, unset_max_epoch: float = 0) -> FileTimes:
    stat = path.stat()
    created_ts = getattr(stat, "st_birthtime", None)
    if created_ts is None:
        created_ts = stat.st_ctime
    return FileTimes(
        created=to_local_datetime(created_ts, unset_max_epoch),
        modified=to_local_datetime(stat.st_mtime, unset_max_epoch),
    )


def to_local_datetime(timestamp: float, unset_max_epoch: float = 0) -> Optional[datetime]:
    """轉成精確到秒的本地時間；未設定的時間戳回傳 None。"""
    if timestamp <= unset_max_epoch:
        return None
    try:
        return datetime.fromtimestamp(timestamp).replace(microsecond=0)
    except (OverflowError, OSError, ValueError):
        return None


def set_modified_time(path: Path, value: datetime) -> None:
    stat = path.stat()
    os.utime(path, (stat.st_atime, value.timestamp()))


def set_created_time(path: Path, value: datetime) -> None:
    """Windows 直接寫入建立時間。

    其他平台沒有可寫的建立時間 API，改以 utime 回推 atime/mtime；
    macOS 會在 mtime 早於 birth time 時一併回推 birth time。
    """
    if sys.platform == "win32":
        _set_windows_creation_time(path, value)
        return
    timestamp = value.timestamp()
    os.utime(path, (timestamp, timestamp))


def _set_windows_creation_time(path: Path, value: datetime) -> None:
    import pywintypes
    import win32file

    handle = win32file.CreateFile(
        str(path),
        win32file.GENERIC_WRITE,
        win32file.FILE_SHARE_READ | win32file.FILE_SHARE_WRITE,
        None,
        win32file.OPEN_EXISTING,
        win32file.FILE_ATTRIBUTE_NORMAL,
        None,
    )
    try:
        win32file.SetFileTime(handle, pywintypes.Time(value), None, None)
    finally:
        handle.Close()
