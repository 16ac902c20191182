"""Configuration loading"""

from .loader import get_config_path, invalidate_config_cache, load_config
from .schema import ClawSlackConfig, SlackConfig

__all__ = [
    "ClawSlackConfig",
    "SlackConfig",
    "get_config_path",
    "invalidate_config_cache",
    "load_config",
]
