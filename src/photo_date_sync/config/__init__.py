"""設定模組。"""

from .manager import ConfigError, ConfigManager
from .schema import validate_config

__all__ = ["ConfigError", "ConfigManager", "validate_config"]
