"""安全檔案操作（copy/makedirs）。"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
import shutil
import time
from pathlib import Path
from typing import Any, Callable, Optional

from ..config.manager import ConfigManager

from .logger import get_logger


@dataclass
class OperationResult:
    success: bool
    error_message: Optional[str] = None
    retry_count: int = 0
    elapsed_time: float = 0.0
    value: Any = None


def safe_op(
    *,
    config,
    max_retries: Optional[int] = None,
    backoff_base_sec: Optional[float] = None,
    backoff_cap_sec: Optional[float] = None,
    exceptions: Optional[tuple[type[BaseException], ...]] = None,
    logger=None,
) -> Callable:
    """包裝檔案操作，提供重試與指數退避。"""

    cfg_get = getattr(config, "get", None)
    if not callable(cfg_get):
        raise TypeError("config 必須提供 get(key, default) 方法")

    resolved_max = int(max_retries if max_retries is not None else cfg_get("retry.max_retries", 2))
    resolved_base = float(
        backoff_base_sec if backoff_base_sec is not None else cfg_get("retry.backoff_base_sec", 0.5)
    )
    resolved_cap = float(backoff_cap_sec if backoff_cap_sec is not None else cfg_get("retry.backoff_cap_sec", 5.0))
    resolved_exceptions = exceptions if exceptions is not None else (OSError,)
    op_logger = logger or get_logger("FileOps")

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> OperationResult:
            start_time = time.time()
            last_error: BaseException | None = None

            for attempt in range(resolved_max + 1):
                try:
                    value = func(*args, **kwargs)
                    return OperationResult(
                        success=True,
                        retry_count=attempt,
                        elapsed_time=time.time() - start_time,
                        value=value,
                    )
                except resolved_exceptions as exc:
                    last_error = exc
                    if attempt < resolved_max:
                        wait_time = min(resolved_base * (2**attempt), resolved_cap)
                        op_logger.warning(
                            "檔案操作重試 %s/%s，等待 %.2fs：%s",
                            attempt + 1,
                            resolved_max,
                            wait_time,
                            exc,
                        )
                        time.sleep(wait_time)
                    else:
                        op_logger.error("檔案操作最終失敗（重試 %s 次）：%s", resolved_max, exc)

            return OperationResult(
                success=False,
                error_message=str(last_error) if last_error is not None else "Unknown error",
                retry_count=resolved_max,
                elapsed_time=time.time() - start_time,
            )

        return wrapper

    return decorator


def _resolve_config(config) -> ConfigManager:
    if config is None:
        return ConfigManager()
    return config


def safe_copy2(
    src_path: Path,
    dst_path: Path,
    *,
    config=None,
    max_retries: Optional[int] = None,
    logger=None,
) -> OperationResult:
    cfg = _resolve_config(config)

    @safe_op(config=cfg, max_retries=max_retries, logger=logger or get_logger("FileOps"))
    def _copy() -> None:
        shutil.copy2(src_path, dst_path)

    return _copy()


def safe_makedirs(
    path: Path,
    *,
    config=None,
    max_retries: Optional[int] = None,
    logger=None,
) -> OperationResult:
    cfg = _resolve_config(config)

    @safe_op(config=cfg, max_retries=max_retries, logger=logger or get_logger("FileOps"))
    def _makedirs() -> None:
        path.mkdir(parents=True, exist_ok=True)

    return _makedirs()


def ensure_output_copy(
    src_path: Path,
    dst_path: Path,
    *,
    config=None,
    logger=None,
) -> OperationResult:
    """目的地不存在時才複製；已存在則視為成功且不覆寫。"""
    if dst_path.exists():
        return OperationResult(success=True, value="EXISTS")
    result = safe_copy2(src_path, dst_path, config=config, logger=logger)
    if result.success:
        result.value = "COPIED"
    return result
