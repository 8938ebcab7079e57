"""Vendor manifest support.

The manifest records every vendored import path as a JSON document::

    {"version": 0, "dependencies": [{"importpath": ..., "repository": ...,
      "revision": ..., "branch": ..., "path": ...}]}

Documents are validated against the bundled ``manifest`` schema on load.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import jsonschema

from repovendor.core.utils.io import PathLike, read_json, write_json_atomic
from repovendor.core.vendors.exceptions import (
    DependencyExistsError,
    DependencyNotFoundError,
    ManifestError,
)
from repovendor.core.vendors.models import Dependency
from repovendor.data import read_yaml

MANIFEST_VERSION = 0


def _manifest_schema() -> Dict[str, Any]:
    return read_yaml("schemas", "manifest.yaml")


@dataclass
class Manifest:
    """Ordered list of vendored dependencies plus a format version.

    At most one dependency is recorded per import path.
    """

    version: int = MANIFEST_VERSION
    dependencies: List[Dependency] = field(default_factory=list)

    def add_dependency(self, dep: Dependency) -> None:
        """Append ``dep``.

        Raises:
            DependencyExistsError: If its import path is already recorded
        """
        if self.has_importpath(dep.importpath):
            raise DependencyExistsError(
                f"{dep.importpath} already registered", context={"importpath": dep.importpath}
            )
        self.dependencies.append(dep)

    def remove_dependency(self, dep: Dependency) -> None:
        """Remove the record equal to ``dep`` in every field.

        Raises:
            DependencyNotFoundError: If no such record exists (the list is left unchanged)
        """
        for i, d in enumerate(self.dependencies):
            if d == dep:
                del self.dependencies[i]
                return
        raise DependencyNotFoundError(
            f"dependency {dep.importpath} does not exist", context={"importpath": dep.importpath}
        )

    def has_importpath(self, path: str) -> bool:
        """Report whether the manifest contains the import path."""
        return any(d.importpath == path for d in self.dependencies)

    def get_dependency_for_importpath(self, path: str) -> Dependency:
        """Return the dependency recorded for ``path``.

        Raises:
            DependencyNotFoundError: If ``path`` is not recorded
        """
        for d in self.dependencies:
            if d.importpath == path:
                return d
        raise DependencyNotFoundError(
            f"dependency for {path} does not exist", context={"importpath": path}
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "dependencies": [d.to_dict() for d in self.dependencies],
        }

    @classmethod
    def from_dict(cls, data: Any) -> Manifest:
        """Validate and build a manifest from decoded JSON.

        Raises:
            ManifestError: If ``data`` does not match the manifest schema
        """
        try:
            jsonschema.validate(instance=data, schema=_manifest_schema())
        except jsonschema.ValidationError as e:
            where = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise ManifestError(f"invalid manifest at {where}: {e.message}") from e
        deps = data.get("dependencies") or []
        manifest = cls(version=data["version"])
        for item in deps:
            try:
                manifest.add_dependency(Dependency.from_dict(item))
            except DependencyExistsError as e:
                raise ManifestError(f"invalid manifest: {e}") from e
        return manifest


def encode_manifest(manifest: Manifest) -> str:
    """Serialize ``manifest`` to JSON text."""
    try:
        return json.dumps(manifest.to_dict(), indent=2) + "\n"
    except (TypeError, ValueError) as e:
        raise ManifestError(f"could not encode manifest: {e}") from e


def decode_manifest(text: str) -> Manifest:
    """Parse JSON text into a ``Manifest``.

    Raises:
        ManifestError: On malformed JSON or schema violations
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"could not decode manifest: {e}") from e
    return Manifest.from_dict(data)


def read_manifest(path: PathLike) -> Manifest:
    """Read a manifest from ``path``; a missing file yields an empty manifest.

    Raises:
        ManifestError: If the file exists but cannot be decoded
    """
    p = Path(path)
    if not p.exists():
        return Manifest()
    try:
        data = read_json(p)
    except json.JSONDecodeError as e:
        raise ManifestError(f"could not decode manifest {p}: {e}") from e
    return Manifest.from_dict(data)


def write_manifest(path: PathLike, manifest: Manifest) -> None:
    """Write ``manifest`` to ``path``, creating or replacing it atomically."""
    try:
        write_json_atomic(Path(path), manifest.to_dict())
    except (TypeError, ValueError) as e:
        raise ManifestError(f"could not encode manifest {path}: {e}") from e


__all__ = [
    "MANIFEST_VERSION",
    "Manifest",
    "encode_manifest",
    "decode_manifest",
    "read_manifest",
    "write_manifest",
]
