"""設定檔驗證邏輯。"""

from __future__ import annotations

from typing import Any

SLOT_STRATEGIES = {"append", "repurpose"}
INVALID_DATE_POLICIES = {"skip", "ignore", "abort"}


def validate_config(config: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    def add_error(path: str, message: str) -> None:
        errors.append(f"{path}: {message}")

    file_extensions = config.get("file_extensions", {})
    image_exts = file_extensions.get("image", [])
    if not isinstance(image_exts, list) or any(not isinstance(item, str) for item in image_exts):
        add_error("file_extensions.image", "必須是字串清單")
    elif any(not item.startswith(".") for item in image_exts):
        add_error("file_extensions.image", "副檔名必須以 . 開頭")

    metadata = config.get("metadata", {})
    slot_strategy = metadata.get("slot_strategy", "append")
    if slot_strategy not in SLOT_STRATEGIES:
        add_error("metadata.slot_strategy", "必須是 append 或 repurpose")
    on_invalid_date = metadata.get("on_invalid_date", "skip")
    if on_invalid_date not in INVALID_DATE_POLICIES:
        add_error("metadata.on_invalid_date", "必須是 skip、ignore 或 abort")

    timestamps = config.get("timestamps", {})
    unset_max_epoch = timestamps.get("unset_max_epoch", 0)
    if isinstance(unset_max_epoch, bool) or not isinstance(unset_max_epoch, (int, float)):
        add_error("timestamps.unset_max_epoch", "必須是數值")

    retry = config.get("retry", {})
    max_retries = retry.get("max_retries", 2)
    backoff_base_sec = retry.get("backoff_base_sec", 0.5)
    backoff_cap_sec = retry.get("backoff_cap_sec", 5.0)
    if not isinstance(max_retries, int) or max_retries < 0:
        add_error("retry.max_retries", "必須是大於等於 0 的整數")
    if not isinstance(backoff_base_sec, (int, float)) or backoff_base_sec <= 0:
        add_error("retry.backoff_base_sec", "必須是大於 0 的數值")
    if not isinstance(backoff_cap_sec, (int, float)) or backoff_cap_sec <= 0:
        add_error("retry.backoff_cap_sec", "必須是大於 0 的數值")
    if (
        isinstance(backoff_base_sec, (int, float))
        and isinstance(backoff_cap_sec, (int, float))
        and backoff_base_sec > backoff_cap_sec
    ):
        add_error("retry", "backoff_base_sec 不可大於 backoff_cap_sec")

    error_log = config.get("logging", {}).get("error_log")
    if error_log is not None and (not isinstance(error_log, str) or not error_log.strip()):
        add_error("logging.error_log", "必須是非空字串或 null")

    return errors
