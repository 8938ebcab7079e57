"""Centralized configuration caching.

Provides a single source of truth for loaded configuration across all domain
configs. Cache keys include a fingerprint of REPOVENDOR_* environment variables
and of the project config files so that edits made after the first load are
picked up.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Dict, Optional

_config_cache: Dict[str, Dict[str, Any]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        return Path.cwd().resolve()
    return Path(repo_root).expanduser().resolve()


def _cache_key(repo_root: Path) -> str:
    env_items = sorted(
        (k, os.environ.get(k, ""))
        for k in os.environ.keys()
        if k.startswith("REPOVENDOR_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    from .manager import project_config_dir

    cfg_dir = project_config_dir(repo_root)
    files: list[tuple[str, int, int]] = []
    if cfg_dir.is_dir():
        for p in sorted(cfg_dir.glob("*.y*ml")):
            st = p.stat()
            files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    cfg_fp = hashlib.sha256(repr(files).encode("utf-8")).hexdigest()[:12]

    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Get configuration with caching.

    Returns the same config dict instance for the same repo_root (as long as
    environment and project config files are unchanged), avoiding repeated
    file I/O.
    """
    root = _normalize_repo_root(repo_root)
    key = _cache_key(root)
    cached = _config_cache.get(key)
    if cached is not None:
        return cached

    from .manager import ConfigManager

    cfg = ConfigManager(root).load_config()
    _config_cache[key] = cfg
    return cfg


def clear_all_caches() -> None:
    """Drop every cached configuration."""
    _config_cache.clear()


__all__ = ["get_cached_config", "clear_all_caches"]
