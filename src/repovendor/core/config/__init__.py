"""repovendor configuration.

Layered YAML configuration (bundled defaults < project < environment) with
typed domain accessors.
"""
from __future__ import annotations

from .cache import clear_all_caches, get_cached_config
from .manager import ConfigManager
from .domains import LoggingConfig, VcsConfig, VendorConfig

__all__ = [
    "ConfigManager",
    "get_cached_config",
    "clear_all_caches",
    "LoggingConfig",
    "VcsConfig",
    "VendorConfig",
]
