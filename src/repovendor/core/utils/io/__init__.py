"""File I/O helpers: atomic replacement, JSON documents and YAML config."""
from __future__ import annotations

from .core import PathLike, atomic_write, ensure_parent_dir
from .json import read_json, write_json_atomic
from .yaml import parse_yaml_string, read_yaml

__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "atomic_write",
    "read_json",
    "write_json_atomic",
    "read_yaml",
    "parse_yaml_string",
]
