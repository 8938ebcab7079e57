"""Filesystem helpers for working copies.

Checkouts live in uniquely named temporary directories. Destroying a working
copy removes its tree and then prunes the ancestors it left empty.
"""
from __future__ import annotations

import errno
import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from repovendor.core.vendors.exceptions import VendorFilesystemError

logger = logging.getLogger(__name__)


def make_temp_dir(root: Optional[Path] = None, prefix: str = "repovendor-") -> Path:
    """Create a fresh, uniquely named directory under ``root``.

    Raises:
        VendorFilesystemError: If the directory cannot be created
    """
    try:
        if root is not None:
            Path(root).mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix=prefix, dir=str(root) if root is not None else None))
    except OSError as e:
        raise VendorFilesystemError(
            f"could not create temporary directory: {e}", path=str(root) if root else None
        ) from e


def remove_tree(path: Path) -> None:
    """Recursively remove ``path``; a missing path is not an error.

    Raises:
        VendorFilesystemError: If removal fails for any other reason
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as e:
        raise VendorFilesystemError(f"could not remove {path}: {e}", path=str(path)) from e


def _is_empty(path: Path) -> bool:
    try:
        return next(path.iterdir(), None) is None
    except FileNotFoundError:
        return True
    except OSError as e:
        raise VendorFilesystemError(f"could not read {path}: {e}", path=str(path)) from e


def clean_path(path: Path, *, protected_name: str = "src", boundary: Optional[Path] = None) -> None:
    """Remove ``path`` and its ancestors while they are empty.

    The walk stops at the first directory that still has entries, is named
    ``protected_name``, is ``boundary`` itself, or is the filesystem root.
    Symlinked ancestors are followed as-is.

    Raises:
        VendorFilesystemError: On permission or other I/O failures
    """
    current = Path(path)
    stop = Path(boundary) if boundary is not None else None
    while True:
        if current.name == protected_name or current.parent == current:
            return
        if stop is not None and current == stop:
            return
        if not _is_empty(current):
            return
        try:
            current.rmdir()
        except FileNotFoundError:
            pass
        except OSError as e:
            if e.errno in (errno.ENOTEMPTY, errno.EEXIST):
                # Something appeared since the emptiness check.
                return
            raise VendorFilesystemError(f"could not remove {current}: {e}", path=str(current)) from e
        logger.debug("pruned empty directory %s", current)
        current = current.parent


__all__ = ["make_temp_dir", "remove_tree", "clean_path"]
