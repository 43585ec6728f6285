"""逐檔執行時間同步。"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from ..config import ConfigManager
from ..models import FileContext, SyncResult, SyncStatus
from ..utils import path_utils
from ..utils.error_handler import ErrorHandler
from ..utils.logger import get_logger
from .reconciler import BatchAbortedError, DateReconciler


@dataclass
class BatchResult:
    results: List[SyncResult] = field(default_factory=list)
    ineligible: List[Path] = field(default_factory=list)

    def count(self, status: SyncStatus) -> int:
        return sum(1 for result in self.results if result.status == status)

    def status_counts(self) -> dict[str, int]:
        counts = Counter(result.status.value for result in self.results)
        return dict(sorted(counts.items()))


class BatchRunner:
    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        reconciler: Optional[DateReconciler] = None,
        error_handler: Optional[ErrorHandler] = None,
        logger=None,
    ) -> None:
        self.config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.error_handler = error_handler or ErrorHandler()
        self.reconciler = reconciler or DateReconciler(
            self.config, error_handler=self.error_handler, logger=self.logger
        )
        self.extensions = self.config.image_extensions

    def run(self, files: Iterable[Path], output_dir: Path, *, dry_run: bool = False) -> BatchResult:
        batch = BatchResult()
        for path in files:
            if not path_utils.is_eligible(path, self.extensions):
                batch.ineligible.append(path)
                continue

            context = FileContext.for_output_dir(path, output_dir)
            try:
                result = self.reconciler.reconcile(context, dry_run=dry_run)
            except BatchAbortedError:
                raise
            except Exception as exc:
                # 單一檔案的任何錯誤都不可中斷整批處理
                self.logger.warning(f"無法處理檔案: {path} ({type(exc).__name__}: {exc})")
                result = SyncResult(path, SyncStatus.PARTIAL_FAILURE, reason=str(exc))
                self.error_handler.add_warning(
                    "W-101", f"無法處理檔案: {exc}", str(path), status=result.status
                )

            batch.results.append(result)
        return batch
