"""Shared utilities for repovendor core."""
