"""repovendor core library package."""

from . import exceptions  # noqa: F401

__all__ = ["exceptions"]
