"""工具模組。"""

from . import file_ops, file_times, path_utils, reporting, time_utils

__all__ = ["file_ops", "file_times", "path_utils", "reporting", "time_utils"]
