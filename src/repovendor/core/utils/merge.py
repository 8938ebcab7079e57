"""Merging of layered configuration mappings."""
from __future__ import annotations

from typing import Any, Dict, Mapping


def deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Return ``base`` overlaid with ``override``; neither input is modified.

    Nested mappings merge key by key. Any other value in ``override``
    (lists and nulls included) replaces the one in ``base``.

        >>> deep_merge({"vcs": {"git": "git", "hg": "hg"}}, {"vcs": {"hg": "/opt/hg"}})
        {'vcs': {'git': 'git', 'hg': '/opt/hg'}}
    """
    merged: Dict[str, Any] = dict(base)
    for key, value in (override or {}).items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


__all__ = ["deep_merge"]
