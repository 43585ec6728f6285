"""核心流程模組。"""

from .batch import BatchResult, BatchRunner
from .exif_fields import (
    CAPTURE_TIME_TAG,
    DIGITIZED_TIME_TAG,
    CaptureTimeAccessor,
    MetadataDirectory,
    MetadataReadError,
    MetadataWriteError,
    has_capture_time,
    read_capture_time,
    write_capture_time,
)
from .reconciler import BatchAbortedError, DateReconciler, reconcile_dates

__all__ = [
    "BatchAbortedError",
    "BatchResult",
    "BatchRunner",
    "CAPTURE_TIME_TAG",
    "CaptureTimeAccessor",
    "DIGITIZED_TIME_TAG",
    "DateReconciler",
    "MetadataDirectory",
    "MetadataReadError",
    "MetadataWriteError",
    "has_capture_time",
    "read_capture_time",
    "reconcile_dates",
    "write_capture_time",
]
