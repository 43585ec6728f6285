"""預設設定值。"""

DEFAULT_CONFIG = {
    "file_extensions": {
        "image": [".jpg", ".png", ".gif"],
    },
    "metadata": {
        "slot_strategy": "append",
        "on_invalid_date": "skip",
    },
    "timestamps": {
        "unset_max_epoch": 0,
    },
    "retry": {
        "max_retries": 2,
        "backoff_base_sec": 0.5,
        "backoff_cap_sec": 5.0,
    },
    "logging": {
        "error_log": None,
    },
}
