"""Import path resolution.

Maps a bare import path to a probed ``RemoteRepo`` and the sub-path left
over inside that repository. Well-known hosts are recognised by pattern;
anything else is resolved through vanity import metadata.
"""
from __future__ import annotations

import logging
import re
from typing import Optional, Tuple

from repovendor.core.utils.subprocess import CommandRunner, run_command
from repovendor.core.vendors.exceptions import (
    InvalidImportPathError,
    ProbeError,
    UnknownBackendError,
)
from repovendor.core.vendors.metadata import MetadataLookup, parse_metadata
from repovendor.core.vendors.models import Backend, VcsOptions
from repovendor.core.vendors.repo import RemoteRepo, open_remote

logger = logging.getLogger(__name__)

_SEGMENT = r"[A-Za-z0-9_.-]+"


class ImportPathResolver:
    """Resolve import paths to remote repositories.

    Every repository returned has been probed. The process runner and the
    vanity metadata lookup are injectable.
    """

    VALID_IMPORT = re.compile(r"^[A-Za-z0-9-]+(\.[A-Za-z0-9-]+)+(/[A-Za-z0-9_.-]+)+$")
    GITHUB = re.compile(rf"^github\.com/({_SEGMENT})/({_SEGMENT})(/.+)?$")
    BITBUCKET = re.compile(rf"^bitbucket\.org/({_SEGMENT})/({_SEGMENT})(/.+)?$")
    LAUNCHPAD = re.compile(rf"^launchpad\.net/({_SEGMENT})(/{_SEGMENT})?(/.+)?$")

    def __init__(
        self,
        *,
        runner: Optional[CommandRunner] = None,
        lookup: Optional[MetadataLookup] = None,
        options: Optional[VcsOptions] = None,
    ) -> None:
        self.runner = runner or run_command
        self.lookup = lookup or parse_metadata
        self.options = options or VcsOptions()

    def _open(self, backend: Backend, url: str) -> RemoteRepo:
        return open_remote(backend, url, options=self.options, runner=self.runner)

    def resolve(self, path: str) -> Tuple[RemoteRepo, str]:
        """Return ``(repository, sub_path)`` for ``path``.

        ``sub_path`` is empty or starts with "/".

        Raises:
            InvalidImportPathError: If ``path`` is not shaped like an import path
            UnknownBackendError: If no supported backend serves the repository
            ProbeError: If the repository is unreachable
            MetadataError: If vanity metadata cannot be resolved
        """
        if not self.VALID_IMPORT.match(path):
            raise InvalidImportPathError(path)
        # Sub-paths and import paths become filesystem paths.
        if any(seg in (".", "..") for seg in path.split("/")):
            raise InvalidImportPathError(path)

        m = self.GITHUB.match(path)
        if m:
            owner, project, extra = m.group(1), m.group(2), m.group(3) or ""
            return self._open(Backend.GIT, f"https://github.com/{owner}/{project}"), extra

        m = self.BITBUCKET.match(path)
        if m:
            owner, project, extra = m.group(1), m.group(2), m.group(3) or ""
            url = f"https://bitbucket.org/{owner}/{project}"
            # Bitbucket has hosted both git and Mercurial repositories.
            for backend in (Backend.GIT, Backend.HG):
                try:
                    return self._open(backend, url), extra
                except ProbeError:
                    logger.debug("%s probe failed for %s", backend.value, url)
            raise UnknownBackendError(
                f"unknown repository type: {url}", context={"url": url}
            )

        m = self.LAUNCHPAD.match(path)
        if m:
            project, series, extra = m.group(1), m.group(2), m.group(3) or ""
            if not series:
                return self._open(Backend.BZR, f"https://launchpad.net/{project}"), ""
            url = f"https://launchpad.net/{project}/{series.lstrip('/')}"
            return self._open(Backend.BZR, url), extra

        prefix, kind, root = self.lookup(path)
        extra = path[len(prefix):]
        backend = Backend.from_kind(kind)
        logger.debug("resolved %s via metadata to %s %s", path, kind, root)
        return self._open(backend, root), extra


def deduce_remote_repo(
    path: str,
    *,
    runner: Optional[CommandRunner] = None,
    lookup: Optional[MetadataLookup] = None,
    options: Optional[VcsOptions] = None,
) -> Tuple[RemoteRepo, str]:
    """Shortcut for ``ImportPathResolver(...).resolve(path)``."""
    return ImportPathResolver(runner=runner, lookup=lookup, options=options).resolve(path)


__all__ = ["ImportPathResolver", "deduce_remote_repo"]
