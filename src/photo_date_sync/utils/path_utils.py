"""路徑處理工具。"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

DEFAULT_IMAGE_EXTENSIONS = (".jpg", ".png", ".gif")


def resolve_input_files(input_path: Path) -> Optional[list[Path]]:
    """單一檔案回傳自身；資料夾回傳第一層的檔案（不遞迴）；其他情況回傳 None。"""
    if input_path.is_file():
        return [input_path]
    if input_path.is_dir():
        return sorted(child for child in input_path.iterdir() if child.is_file())
    return None


def is_eligible(path: Path, extensions: Optional[Iterable[str]] = None) -> bool:
    allowed = {ext.lower() for ext in (extensions or DEFAULT_IMAGE_EXTENSIONS)}
    return path.suffix.lower() in allowed


def is_same_location(first: Path, second: Path) -> bool:
    return first.resolve() == second.resolve()
