"""EXIF 拍攝時間欄位的讀取與改寫。

EXIF 區塊被攤平成有序的 FieldEntry 清單（0th、Exif、GPS、Interop、1st），
拍攝時間由 DateTimeOriginal (0x9003) 與 DateTimeDigitized (0x9004) 共同表示。
"""

from __future__ import annotations

import struct
from datetime import datetime
from pathlib import Path
from typing import Iterator, Optional

import piexif
from PIL import Image

from ..models import ASCII_TYPE, FieldEntry, FileContext
from ..utils import file_ops
from ..utils.logger import get_logger
from ..utils.time_utils import EXIF_TERMINATOR, decode_exif_date, earliest_date, encode_exif_date

CAPTURE_TIME_TAG = piexif.ExifIFD.DateTimeOriginal
DIGITIZED_TIME_TAG = piexif.ExifIFD.DateTimeDigitized
CAPTURE_TIME_TAGS = (CAPTURE_TIME_TAG, DIGITIZED_TIME_TAG)

IFD_NAMES = ("0th", "Exif", "GPS", "Interop", "1st")
POINTER_TAGS = {
    piexif.ImageIFD.ExifTag,
    piexif.ImageIFD.GPSTag,
    piexif.ExifIFD.InteroperabilityTag,
}
UNDEFINED_TYPE = 7
JPEG_FORMATS = {"JPEG", "MPO"}

SLOT_APPEND = "append"
SLOT_REPURPOSE = "repurpose"


class MetadataReadError(Exception):
    """EXIF 區塊無法解析。"""


class MetadataWriteError(Exception):
    """EXIF 區塊無法重新編碼。"""


class MetadataDirectory:
    """單一影像的 EXIF 欄位目錄。"""

    def __init__(
        self,
        entries: Optional[list[FieldEntry]] = None,
        *,
        thumbnail: Optional[bytes] = None,
        slot_strategy: str = SLOT_APPEND,
    ) -> None:
        self.entries: list[FieldEntry] = list(entries or [])
        self.thumbnail = thumbnail
        self.slot_strategy = slot_strategy

    @classmethod
    def from_exif_bytes(cls, data: Optional[bytes], *, slot_strategy: str = SLOT_APPEND) -> "MetadataDirectory":
        if not data:
            return cls(slot_strategy=slot_strategy)
        # piexif 直接信任欄位中的 offset 與 count，損毀的區塊可能拋出任何例外
        try:
            exif_dict = piexif.load(data)
            entries: list[FieldEntry] = []
            for ifd in IFD_NAMES:
                for tag, value in (exif_dict.get(ifd) or {}).items():
                    if ifd in ("0th", "Exif") and tag in POINTER_TAGS:
                        continue
                    type_code = piexif.TAGS[ifd][tag]["type"]
                    entries.append(FieldEntry(ifd, tag, type_code, _to_payload(type_code, value)))
        except Exception as exc:
            raise MetadataReadError(f"{type(exc).__name__}: {exc}") from exc
        return cls(entries, thumbnail=exif_dict.get("thumbnail"), slot_strategy=slot_strategy)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FieldEntry]:
        return iter(self.entries)

    def find(self, tag: int) -> Optional[FieldEntry]:
        for entry in self.entries:
            if entry.tag == tag:
                return entry
        return None

    def upsert(self, tag: int, payload: bytes, *, ifd: str = "Exif", type_code: int = ASCII_TYPE) -> FieldEntry:
        """寫入指定 tag。

        已存在時就地覆寫 payload 並保留型別；不存在時依 slot_strategy
        新增欄位，或改用第一個非拍攝時間欄位的位置。
        """
        existing = self.find(tag)
        if existing is not None:
            existing.payload = payload
            return existing

        if self.slot_strategy == SLOT_REPURPOSE:
            victim = next((entry for entry in self.entries if entry.tag not in CAPTURE_TIME_TAGS), None)
            if victim is not None:
                victim.ifd = ifd
                victim.tag = tag
                victim.type_code = type_code
                victim.payload = payload
                return victim

        entry = FieldEntry(ifd, tag, type_code, payload)
        self.entries.append(entry)
        return entry

    def to_exif_dict(self) -> dict[str, object]:
        exif_dict: dict[str, object] = {name: {} for name in IFD_NAMES}
        for entry in self.entries:
            value = entry.payload
            if entry.type_code == ASCII_TYPE and isinstance(value, bytes) and value.endswith(EXIF_TERMINATOR):
                # piexif 寫出 ASCII 時會自行補上 NUL
                value = value[:-1]
            exif_dict[entry.ifd][entry.tag] = value
        exif_dict["thumbnail"] = self.thumbnail
        return exif_dict

    def dump(self) -> bytes:
        try:
            return piexif.dump(self.to_exif_dict())
        except (ValueError, KeyError, TypeError, struct.error) as exc:
            raise MetadataWriteError(str(exc)) from exc


def _to_payload(type_code: int, value: object) -> object:
    if type_code == ASCII_TYPE and isinstance(value, bytes):
        return value + EXIF_TERMINATOR
    if type_code == UNDEFINED_TYPE and isinstance(value, int):
        # piexif 會把單 byte 的 UNDEFINED 讀成 int，寫回時卻只接受 bytes
        return bytes([value])
    return value


def has_capture_time(directory: MetadataDirectory) -> bool:
    if len(directory) == 0:
        return False
    return any(entry.tag in CAPTURE_TIME_TAGS for entry in directory)


def read_capture_time(directory: MetadataDirectory) -> Optional[datetime]:
    """解析拍攝時間與數位化時間，回傳較早者；格式錯誤時拋出 CaptureTimeParseError。"""
    if not has_capture_time(directory):
        return None
    result: Optional[datetime] = None
    for tag in CAPTURE_TIME_TAGS:
        entry = directory.find(tag)
        if entry is None:
            continue
        decoded = decode_exif_date(entry.payload)
        result = decoded if result is None else earliest_date(result, decoded)
    return result


def write_capture_time(directory: MetadataDirectory, value: datetime) -> bool:
    if len(directory) == 0:
        return False
    payload = encode_exif_date(value)
    for tag in CAPTURE_TIME_TAGS:
        directory.upsert(tag, payload)
    return True


def _read_exif_bytes(image: Image.Image) -> Optional[bytes]:
    exif_bytes = image.info.get("exif")
    if exif_bytes is None and image.format == "PNG":
        # eXIf 位於 IDAT 之後時，需載入影像才會出現在 info
        image.load()
        exif_bytes = image.info.get("exif")
    return exif_bytes


class CaptureTimeAccessor:
    """以 FileContext 為單位存取影像的拍攝時間。"""

    def __init__(self, config=None, logger=None) -> None:
        self.config = config
        self.logger = logger or get_logger(self.__class__.__name__)
        get = getattr(config, "get", None)
        self.slot_strategy = get("metadata.slot_strategy", SLOT_APPEND) if callable(get) else SLOT_APPEND

    def load_directory(self, path: Path) -> MetadataDirectory:
        with Image.open(path) as image:
            exif_bytes = _read_exif_bytes(image)
        return MetadataDirectory.from_exif_bytes(exif_bytes, slot_strategy=self.slot_strategy)

    def has_capture_time(self, context: FileContext) -> bool:
        return has_capture_time(self.load_directory(context.source_path))

    def get_capture_time(self, context: FileContext) -> Optional[datetime]:
        return read_capture_time(self.load_directory(context.source_path))

    def set_capture_time(self, context: FileContext, value: datetime) -> bool:
        with Image.open(context.source_path) as image:
            directory = MetadataDirectory.from_exif_bytes(
                _read_exif_bytes(image), slot_strategy=self.slot_strategy
            )
            if not write_capture_time(directory, value):
                self.logger.warning(f"無法設定拍攝時間，沒有可用的 EXIF 欄位: {context.source_path}")
                return False
            exif_bytes = directory.dump()

            if context.output_path.exists():
                return True
            if image.format in JPEG_FORMATS:
                return self._write_jpeg(context, exif_bytes)
            image.save(context.output_path, format=image.format, exif=exif_bytes)
        return True

    def _write_jpeg(self, context: FileContext, exif_bytes: bytes) -> bool:
        copy_result = file_ops.safe_copy2(
            context.source_path, context.output_path, config=self.config, logger=self.logger
        )
        if not copy_result.success:
            self.logger.warning(f"無法複製檔案: {context.source_path} ({copy_result.error_message})")
            return False
        try:
            piexif.insert(exif_bytes, str(context.output_path))
        except (ValueError, OSError) as exc:
            context.output_path.unlink(missing_ok=True)
            raise MetadataWriteError(str(exc)) from exc
        return True
