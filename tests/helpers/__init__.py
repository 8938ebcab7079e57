"""Test helpers for repovendor.

- vcs: FakeRunner, a process runner double for git/hg/bzr
- cache_utils: reset module-level caches between tests
"""
from __future__ import annotations

from helpers.vcs import FakeRunner

__all__ = ["FakeRunner"]
