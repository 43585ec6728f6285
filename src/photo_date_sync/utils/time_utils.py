"""EXIF 日期字串的編碼與解碼。

EXIF 的 DateTimeOriginal / DateTimeDigitized 以固定格式
``YYYY:MM:DD HH:MM:SS`` 加上一個結尾 NUL 儲存，每個字元一個 byte。
"""

from __future__ import annotations

import re
from datetime import datetime

EXIF_DATE_FORMAT = "%Y:%m:%d %H:%M:%S"
EXIF_TERMINATOR = b"\x00"

_EXIF_DATE_PATTERN = re.compile(r"\d{4}:\d{2}:\d{2} \d{2}:\d{2}:\d{2}")


class CaptureTimeParseError(ValueError):
    """EXIF 日期欄位不符合固定格式。"""


def encode_exif_date(value: datetime) -> bytes:
    text = (
        f"{value.year:04d}:{value.month:02d}:{value.day:02d} "
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    return text.encode("ascii") + EXIF_TERMINATOR


def decode_exif_date(payload: object) -> datetime:
    if not isinstance(payload, bytes) or not payload:
        raise CaptureTimeParseError(f"日期欄位為空或型別錯誤: {payload!r}")
    try:
        text = payload[:-1].decode("ascii")
    except UnicodeDecodeError as exc:
        raise CaptureTimeParseError(f"日期欄位含非 ASCII 字元: {payload!r}") from exc
    if not _EXIF_DATE_PATTERN.fullmatch(text):
        raise CaptureTimeParseError(f"日期格式不符: {text!r}")
    try:
        return datetime.strptime(text, EXIF_DATE_FORMAT)
    except ValueError as exc:
        raise CaptureTimeParseError(f"日期數值無效: {text!r}") from exc


def earliest_date(first: datetime, second: datetime) -> datetime:
    """回傳較早者；相等時回傳 first。"""
    if second < first:
        return second
    return first


def format_display_time(value: datetime) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S")
