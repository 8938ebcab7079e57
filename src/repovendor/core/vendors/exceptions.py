"""Vendor subsystem exceptions.

Provides a stable classification for every way resolving, checking out or
recording a dependency can fail.
"""
from __future__ import annotations

from repovendor.core.exceptions import RepoVendorError


class VendorError(RepoVendorError):
    """Base exception for vendor subsystem errors."""


class InvalidImportPathError(VendorError, ValueError):
    """Raised when an import path fails the shape check."""

    def __init__(self, path: str) -> None:
        VendorError.__init__(self, f"{path!r} is not a valid import path", context={"path": path})
        ValueError.__init__(self, f"{path!r} is not a valid import path")
        self.path = path


class UnknownBackendError(VendorError):
    """Raised when no supported version-control system fits a repository."""


class ProbeError(VendorError):
    """Raised when a remote repository is unreachable or does not exist."""


class CheckoutError(VendorError):
    """Raised when cloning or updating a working copy fails."""


class VendorFilesystemError(VendorError, OSError):
    """Raised when creating, removing or pruning directories fails."""

    def __init__(self, message: str, *, path: str | None = None) -> None:
        VendorError.__init__(self, message, context={"path": path} if path else None)
        OSError.__init__(self, message)


class ManifestError(VendorError):
    """Raised when a manifest cannot be encoded, decoded or validated."""


class DependencyExistsError(VendorError):
    """Raised when adding a dependency whose import path is already recorded."""


class DependencyNotFoundError(VendorError, LookupError):
    """Raised when a dependency is not present in the manifest."""


class MetadataError(VendorError):
    """Raised when vanity import metadata cannot be fetched or matched."""


__all__ = [
    "VendorError",
    "InvalidImportPathError",
    "UnknownBackendError",
    "ProbeError",
    "CheckoutError",
    "VendorFilesystemError",
    "ManifestError",
    "DependencyExistsError",
    "DependencyNotFoundError",
    "MetadataError",
]
