"""JSON documents on disk."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .core import PathLike, atomic_write

_NO_DEFAULT = object()


def read_json(file_path: PathLike, *, default: Any = _NO_DEFAULT) -> Any:
    """Load ``file_path``; ``default`` is returned for a missing file when given.

    Raises:
        FileNotFoundError: Missing file and no default
        json.JSONDecodeError: Malformed content
    """
    path = Path(file_path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        if default is _NO_DEFAULT:
            raise
        return default
    return json.loads(text)


def write_json_atomic(file_path: PathLike, data: Any, *, indent: int = 2) -> None:
    """Serialize ``data`` with keys in insertion order and a trailing newline."""
    text = json.dumps(data, indent=indent, ensure_ascii=False) + "\n"
    atomic_write(file_path, lambda f: f.write(text))


__all__ = ["read_json", "write_json_atomic"]
