"""資料模型模組。"""

from .error_record import ErrorLevel, ProcessError
from .field_entry import ASCII_TYPE, FieldEntry
from .file_times import FileContext, FileTimes
from .sync_result import SyncResult, SyncStatus

__all__ = [
    "ASCII_TYPE",
    "ErrorLevel",
    "FieldEntry",
    "FileContext",
    "FileTimes",
    "ProcessError",
    "SyncResult",
    "SyncStatus",
]
