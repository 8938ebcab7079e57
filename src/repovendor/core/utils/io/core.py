"""Filesystem write primitives."""
from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Callable, TextIO, Union

PathLike = Union[str, Path]


def ensure_parent_dir(path: PathLike) -> Path:
    """Create the directory that will hold ``path`` and return it."""
    parent = Path(path).parent
    parent.mkdir(parents=True, exist_ok=True)
    return parent


def atomic_write(
    path: PathLike,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Replace ``path`` with whatever ``write_fn`` writes, all at once.

    Readers see either the old file or the complete new one. The scratch
    file lives next to the target so the final rename stays on one
    filesystem, and it is removed if ``write_fn`` or the flush fails.
    """
    target = Path(path)
    parent = ensure_parent_dir(target)

    fd, scratch = tempfile.mkstemp(prefix=f".{target.name}.", dir=str(parent))
    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(scratch, target)
    except BaseException:
        Path(scratch).unlink(missing_ok=True)
        raise


__all__ = ["PathLike", "ensure_parent_dir", "atomic_write"]
