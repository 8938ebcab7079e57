"""Domain-specific configuration accessors."""
from __future__ import annotations

from .logging import LoggingConfig
from .vcs import VcsConfig
from .vendor import VendorConfig

__all__ = ["LoggingConfig", "VcsConfig", "VendorConfig"]
