"""Domain-specific configuration for the vendor tree and its manifest."""
from __future__ import annotations

from functools import cached_property
from pathlib import Path

from ..base import BaseDomainConfig


class VendorConfig(BaseDomainConfig):
    """Typed access to the ``vendor`` section.

    Both paths are resolved against the repo root and must stay inside it.
    """

    def _config_section(self) -> str:
        return "vendor"

    def _confined(self, key: str, default: str) -> Path:
        raw = str(self.section.get(key) or default)
        path = Path(raw)
        if path.is_absolute() or raw.startswith("~"):
            raise ValueError(f"vendor.{key} must be relative to the project root: {raw}")
        resolved = (self.repo_root / path).resolve()
        if not resolved.is_relative_to(self.repo_root.resolve()):
            raise ValueError(f"vendor.{key} escapes the project root: {raw}")
        return self.repo_root / path

    @cached_property
    def manifest_path(self) -> Path:
        return self._confined("manifest_path", "vendor/manifest")

    @cached_property
    def vendor_dir(self) -> Path:
        return self._confined("vendor_dir", "vendor/src")


__all__ = ["VendorConfig"]
