"""Vendor fetch workflow.

High-level orchestration of resolve, checkout, copy and manifest update for
a single import path.
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import Optional

from repovendor.core.config import VcsConfig, VendorConfig
from repovendor.core.utils.subprocess import CommandRunner
from repovendor.core.vendors.exceptions import (
    DependencyExistsError,
    InvalidImportPathError,
    VendorFilesystemError,
)
from repovendor.core.vendors.fs import clean_path, remove_tree
from repovendor.core.vendors.manifest import read_manifest, write_manifest
from repovendor.core.vendors.metadata import MetadataLookup
from repovendor.core.vendors.models import Dependency
from repovendor.core.vendors.resolver import ImportPathResolver

logger = logging.getLogger(__name__)

_VCS_METADATA_DIRS = (".git", ".hg", ".bzr")


def _is_within(path: Path, root: Path) -> bool:
    return path.resolve().is_relative_to(root.resolve())


class VendorFetcher:
    """Fetches import paths into the project's vendor tree.

    Coordinates config loading, resolution, checkout and manifest updates.
    """

    def __init__(
        self,
        repo_root: Path,
        *,
        runner: Optional[CommandRunner] = None,
        lookup: Optional[MetadataLookup] = None,
    ) -> None:
        """Initialize the fetcher.

        Args:
            repo_root: Path to the project root
            runner: Process runner override (tests)
            lookup: Vanity metadata lookup override (tests)
        """
        self.repo_root = Path(repo_root)
        self.config = VendorConfig(self.repo_root)
        self.resolver = ImportPathResolver(
            runner=runner,
            lookup=lookup,
            options=VcsConfig(self.repo_root).options(),
        )

    @property
    def manifest_path(self) -> Path:
        return self.config.manifest_path

    def vendored_path(self, importpath: str) -> Path:
        """Directory ``importpath`` is vendored into.

        Raises:
            InvalidImportPathError: If the result would leave the vendor dir
        """
        vendor_dir = self.config.vendor_dir
        target = vendor_dir / importpath
        if target == vendor_dir or not _is_within(target, vendor_dir):
            raise InvalidImportPathError(importpath)
        return target

    def fetch(self, importpath: str, *, branch: str = "", revision: str = "") -> Dependency:
        """Vendor ``importpath`` and record it in the manifest.

        Raises:
            DependencyExistsError: If the import path is already vendored
            VendorError: Any resolution, checkout or filesystem failure
        """
        manifest = read_manifest(self.manifest_path)
        if manifest.has_importpath(importpath):
            raise DependencyExistsError(
                f"{importpath} is already vendored", context={"importpath": importpath}
            )
        target = self.vendored_path(importpath)

        repo, extra = self.resolver.resolve(importpath)
        wc = repo.checkout(branch, revision)
        try:
            dep = Dependency(
                importpath=importpath,
                repository=repo.url,
                revision=wc.revision(),
                branch=wc.branch(),
                path=extra,
            )
            self._copy_tree(wc.dir, extra.lstrip("/"), target)
        finally:
            wc.destroy()

        manifest.add_dependency(dep)
        write_manifest(self.manifest_path, manifest)
        logger.info("vendored %s at %s", importpath, dep.revision)
        return dep

    def delete(self, importpath: str) -> Dependency:
        """Remove a vendored import path and its manifest record.

        Raises:
            DependencyNotFoundError: If the import path is not vendored
        """
        manifest = read_manifest(self.manifest_path)
        dep = manifest.get_dependency_for_importpath(importpath)
        target = self.vendored_path(importpath)
        remove_tree(target)
        clean_path(target.parent, boundary=self.config.vendor_dir)
        manifest.remove_dependency(dep)
        write_manifest(self.manifest_path, manifest)
        logger.info("deleted %s", importpath)
        return dep

    def _copy_tree(self, checkout: Path, sub_path: str, dst: Path) -> None:
        src = checkout / sub_path
        if not _is_within(src, checkout):
            raise VendorFilesystemError(f"{sub_path} leaves the checkout", path=str(src))
        if not src.is_dir():
            raise VendorFilesystemError(f"{src} is not a directory in the checkout", path=str(src))
        if dst.exists():
            raise VendorFilesystemError(f"refusing to overwrite {dst}", path=str(dst))
        try:
            shutil.copytree(src, dst, symlinks=True, ignore=shutil.ignore_patterns(*_VCS_METADATA_DIRS))
        except OSError as e:
            raise VendorFilesystemError(f"could not copy {src} to {dst}: {e}", path=str(dst)) from e


__all__ = ["VendorFetcher"]
