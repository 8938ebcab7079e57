"""repovendor vendor subsystem.

Resolves import paths to git, Mercurial or Bazaar remotes and produces
throwaway working copies of them.

Key components:
- ImportPathResolver: Map an import path to a probed RemoteRepo and sub-path
- RemoteRepo / WorkingCopy: Backend-tagged remote and local checkout
- Manifest: Record of vendored dependencies (vendor/manifest)
- VendorFetcher: Resolve, check out, copy and record in one step
"""
from __future__ import annotations

from repovendor.core.vendors.exceptions import (
    CheckoutError,
    DependencyExistsError,
    DependencyNotFoundError,
    InvalidImportPathError,
    ManifestError,
    MetadataError,
    ProbeError,
    UnknownBackendError,
    VendorError,
    VendorFilesystemError,
)
from repovendor.core.vendors.fetch import VendorFetcher
from repovendor.core.vendors.manifest import (
    Manifest,
    decode_manifest,
    encode_manifest,
    read_manifest,
    write_manifest,
)
from repovendor.core.vendors.metadata import ImportedRepo, parse_metadata
from repovendor.core.vendors.models import Backend, Dependency, VcsOptions
from repovendor.core.vendors.repo import RemoteRepo, WorkingCopy, open_remote
from repovendor.core.vendors.resolver import ImportPathResolver, deduce_remote_repo

__all__ = [
    # Resolution
    "ImportPathResolver",
    "deduce_remote_repo",
    "ImportedRepo",
    "parse_metadata",
    # Repositories
    "Backend",
    "VcsOptions",
    "RemoteRepo",
    "WorkingCopy",
    "open_remote",
    # Manifest
    "Dependency",
    "Manifest",
    "encode_manifest",
    "decode_manifest",
    "read_manifest",
    "write_manifest",
    # Workflow
    "VendorFetcher",
    # Exceptions
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
