"""Domain-specific configuration for version-control tooling.

Covers which executables run for each backend, where working copies are
allocated and how long a single tool invocation may take.
"""
from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

from ..base import BaseDomainConfig

if TYPE_CHECKING:
    from repovendor.core.vendors.models import VcsOptions

_BACKENDS = ("git", "hg", "bzr")


class VcsConfig(BaseDomainConfig):
    """Typed access to the ``vcs`` section."""

    def _config_section(self) -> str:
        return "vcs"

    @cached_property
    def executables(self) -> Dict[str, str]:
        """Executable per backend tag; unset entries fall back to the tag."""
        raw = self.section.get("executables") or {}
        return {name: str(raw.get(name) or name) for name in _BACKENDS}

    @cached_property
    def temp_dir(self) -> Optional[Path]:
        raw = self.section.get("temp_dir")
        if not raw:
            return None
        path = Path(str(raw)).expanduser()
        return path if path.is_absolute() else self.repo_root / path

    @cached_property
    def temp_prefix(self) -> str:
        return str(self.section.get("temp_prefix") or "repovendor-")

    @cached_property
    def protected_dir_name(self) -> str:
        return str(self.section.get("protected_dir_name") or "src")

    @cached_property
    def timeout_seconds(self) -> Optional[float]:
        raw = self.section.get("timeout_seconds")
        if raw is None:
            return None
        value = float(raw)
        if value <= 0:
            raise ValueError(f"vcs.timeout_seconds must be positive, got {raw!r}")
        return value

    def options(self) -> "VcsOptions":
        """Build the runtime options consumed by repositories and working copies."""
        from repovendor.core.vendors.models import VcsOptions

        return VcsOptions(
            executables=dict(self.executables),
            temp_dir=self.temp_dir,
            temp_prefix=self.temp_prefix,
            protected_dir_name=self.protected_dir_name,
            timeout_seconds=self.timeout_seconds,
        )


__all__ = ["VcsConfig"]
