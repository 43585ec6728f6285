"""執行摘要輸出工具。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List

from ..models import ProcessError, SyncResult


@dataclass
class SummaryInfo:
    run_time: str
    mode: str
    source: str
    output_dir: str
    total_files: int
    ineligible_count: int
    status_counts: Dict[str, int]
    warnings: List[ProcessError] = field(default_factory=list)
    results: List[SyncResult] = field(default_factory=list)


def build_summary_info(
    *,
    mode: str,
    source: Path,
    output_dir: Path,
    total_files: int,
    ineligible_count: int,
    status_counts: Dict[str, int],
    warnings: List[ProcessError],
    results: List[SyncResult],
) -> SummaryInfo:
    return SummaryInfo(
        run_time=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        mode=mode,
        source=str(source),
        output_dir=str(output_dir),
        total_files=total_files,
        ineligible_count=ineligible_count,
        status_counts=status_counts,
        warnings=warnings,
        results=results,
    )


def _format_result(result: SyncResult) -> str:
    data = result.to_dict()
    flags = "".join(
        mark if data[key] else "-"
        for key, mark in (("capture_time_set", "E"), ("created_time_set", "C"), ("modified_time_set", "M"))
    )
    line = f"{data['source_path']}: {data['status']} {data['reconciled'] or '-'} [{flags}]"
    if data["reason"]:
        line += f" ({data['reason']})"
    return line


def build_summary_text(info: SummaryInfo) -> str:
    lines = [
        "=== photo-date-sync 執行摘要 ===",
        f"執行時間: {info.run_time}",
        f"模式: {info.mode}",
        f"來源: {info.source}",
        f"輸出目錄: {info.output_dir}",
        "",
        "--- 處理結果 ---",
        f"總檔案數: {info.total_files} 個",
        f"略過（副檔名不符）: {info.ineligible_count} 個",
    ]
    if info.status_counts:
        for status, count in info.status_counts.items():
            lines.append(f"{status}: {count} 個")
    else:
        lines.append("無")

    # 旗標依序為 EXIF 拍攝時間、建立時間、修改時間
    lines.extend(["", "--- 檔案 ---"])
    if info.results:
        lines.extend(_format_result(result) for result in info.results)
    else:
        lines.append("無")

    lines.extend(["", "--- 記錄 ---"])
    if info.warnings:
        lines.extend(warning.describe() for warning in info.warnings)
    else:
        lines.append("無")

    return "\n".join(lines) + "\n"


def write_summary(report_path: Path, info: SummaryInfo) -> Path:
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(build_summary_text(info), encoding="utf-8")
    return report_path
