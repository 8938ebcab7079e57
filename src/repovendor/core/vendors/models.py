"""Vendor data models.

Provides the backend tag, runtime options and the dependency record.
"""
from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from repovendor.core.vendors.exceptions import ManifestError, UnknownBackendError


class Backend(str, Enum):
    """Supported version-control systems."""

    GIT = "git"
    HG = "hg"
    BZR = "bzr"

    @classmethod
    def from_kind(cls, kind: str) -> Backend:
        """Map a kind string (as reported by vanity metadata) to a backend.

        Raises:
            UnknownBackendError: If ``kind`` names no supported backend
        """
        try:
            return cls(kind)
        except ValueError:
            raise UnknownBackendError(
                f"unknown repository type: {kind!r}", context={"kind": kind}
            ) from None


@dataclass(frozen=True, slots=True)
class VcsOptions:
    """Runtime options for repositories and working copies.

    Attributes:
        executables: Executable per backend tag
        temp_dir: Parent for fresh checkouts (None uses the system temp dir)
        temp_prefix: Name prefix for checkout directories
        protected_dir_name: Directory name never pruned by destroy
        timeout_seconds: Per-command timeout (None blocks until exit)
    """

    executables: Dict[str, str] = field(
        default_factory=lambda: {b.value: b.value for b in Backend}
    )
    temp_dir: Optional[Path] = None
    temp_prefix: str = "repovendor-"
    protected_dir_name: str = "src"
    timeout_seconds: Optional[float] = None

    def executable(self, backend: Backend) -> str:
        return self.executables.get(backend.value) or backend.value

    def temp_root(self) -> Path:
        return Path(self.temp_dir) if self.temp_dir is not None else Path(tempfile.gettempdir())


@dataclass(frozen=True, slots=True)
class Dependency:
    """One vendored import path.

    Attributes:
        importpath: Name by which this dependency is known
        repository: Remote location the dependency was fetched from
        revision: Revision of the remote the dependency was taken at
        branch: Branch the revision was located on (may be blank)
        path: Path inside the repository the dependency was fetched from
    """

    importpath: str
    repository: str
    revision: str
    branch: str = ""
    path: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary (manifest field order)."""
        return {
            "importpath": self.importpath,
            "repository": self.repository,
            "revision": self.revision,
            "branch": self.branch,
            "path": self.path,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Dependency:
        """Create from dictionary."""
        required_keys = {"importpath", "repository", "revision"}
        missing = required_keys - set(data.keys())
        if missing:
            raise ManifestError(f"Dependency missing required keys: {sorted(missing)}")
        return cls(
            importpath=data["importpath"],
            repository=data["repository"],
            revision=data["revision"],
            branch=data.get("branch") or "",
            path=data.get("path") or "",
        )


__all__ = ["Backend", "VcsOptions", "Dependency"]
