"""Remote repositories and working copies.

A ``RemoteRepo`` is a reachable, not yet fetched remote location. Its
``checkout`` materializes a ``WorkingCopy`` in a fresh temporary directory.
Both are tagged with a ``Backend`` and dispatch on it through a fixed table
of command builders, one per supported tool:

- git: probe with ``ls-remote --exit-code``, clone, ``rev-parse``
- hg:  probe with ``identify``, clone, ``id -i`` / ``branch``
- bzr: probe with ``info``, ``branch`` into ``<tmp>/wc``
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional

from repovendor.core.exceptions import CommandError
from repovendor.core.utils.redaction import redact_text_credentials, redact_url_credentials
from repovendor.core.utils.subprocess import CommandRunner, run_command
from repovendor.core.vendors.exceptions import CheckoutError, ProbeError, VendorFilesystemError
from repovendor.core.vendors.fs import clean_path, make_temp_dir, remove_tree
from repovendor.core.vendors.models import Backend, VcsOptions

logger = logging.getLogger(__name__)

# bzr working copies expose no cheap revision/branch query with the bzr
# versions in use, so these fixed values are reported instead.
BZR_PLACEHOLDER_REVISION = "1"
BZR_PLACEHOLDER_BRANCH = "master"

# Subdirectory bzr branches into; `bzr branch` wants a destination it creates.
BZR_WORKDIR = "wc"


@dataclass(frozen=True)
class _Commands:
    probe: Callable[[str, str], List[str]]
    clone: Callable[[str, str, str, str, str], List[str]]
    update: Optional[Callable[[str, str, str], List[str]]]
    revision: Optional[Callable[[str, str], List[str]]]
    branch: Optional[Callable[[str, str], List[str]]]
    nested_workdir: bool = False


def _git_clone(exe: str, url: str, dest: str, branch: str, revision: str) -> List[str]:
    args = [exe, "clone", url, dest]
    if branch:
        args += ["--branch", branch]
    return args


def _hg_clone(exe: str, url: str, dest: str, branch: str, revision: str) -> List[str]:
    args = [exe, "clone", url, dest]
    if branch:
        args += ["--branch", branch]
    return args


def _bzr_branch(exe: str, url: str, dest: str, branch: str, revision: str) -> List[str]:
    args = [exe, "branch"]
    if revision:
        args += ["-r", revision]
    return args + [url, dest]


_COMMANDS: Dict[Backend, _Commands] = {
    Backend.GIT: _Commands(
        probe=lambda exe, url: [exe, "ls-remote", "--exit-code", url, "HEAD"],
        clone=_git_clone,
        update=lambda exe, d, rev: [exe, "-C", d, "checkout", "--quiet", rev],
        revision=lambda exe, d: [exe, "-C", d, "rev-parse", "HEAD"],
        branch=lambda exe, d: [exe, "-C", d, "rev-parse", "--abbrev-ref", "HEAD"],
    ),
    Backend.HG: _Commands(
        probe=lambda exe, url: [exe, "identify", url],
        clone=_hg_clone,
        update=lambda exe, d, rev: [exe, "--cwd", d, "update", "-r", rev],
        revision=lambda exe, d: [exe, "--cwd", d, "id", "-i"],
        branch=lambda exe, d: [exe, "--cwd", d, "branch"],
    ),
    Backend.BZR: _Commands(
        probe=lambda exe, url: [exe, "info", url],
        clone=_bzr_branch,
        update=None,
        revision=None,
        branch=None,
        nested_workdir=True,
    ),
}


@dataclass
class WorkingCopy:
    """A local checkout of a remote repository.

    Attributes:
        backend: Tool that owns the checkout
        path: Root directory of the checkout
        boundary: Directory the checkout was allocated under; destroy never
            prunes it or anything above it. None prunes up to the protected
            name or the first non-empty ancestor.
    """

    backend: Backend
    path: Path
    boundary: Optional[Path] = None
    options: VcsOptions = field(default_factory=VcsOptions, repr=False, compare=False)
    runner: CommandRunner = field(default=run_command, repr=False, compare=False)

    @property
    def dir(self) -> Path:
        """Root of this working copy."""
        return self.path

    def _query(self, build: Callable[[str, str], List[str]]) -> str:
        argv = build(self.options.executable(self.backend), str(self.path))
        return self.runner(argv, timeout=self.options.timeout_seconds).strip()

    def revision(self) -> str:
        """Revision the working copy is at."""
        cmds = _COMMANDS[self.backend]
        if cmds.revision is None:
            return BZR_PLACEHOLDER_REVISION
        return self._query(cmds.revision)

    def branch(self) -> str:
        """Branch the working copy belongs to."""
        cmds = _COMMANDS[self.backend]
        if cmds.branch is None:
            return BZR_PLACEHOLDER_BRANCH
        return self._query(cmds.branch)

    def destroy(self) -> None:
        """Remove the working copy and prune the now-empty directories above it."""
        remove_tree(self.path)
        clean_path(
            self.path.parent,
            protected_name=self.options.protected_dir_name,
            boundary=self.boundary,
        )


@dataclass(frozen=True)
class RemoteRepo:
    """A remote repository of a given backend.

    Use ``open_remote`` to obtain a probed instance.
    """

    backend: Backend
    url: str
    options: VcsOptions = field(default_factory=VcsOptions, repr=False, compare=False)
    runner: CommandRunner = field(default=run_command, repr=False, compare=False)

    def _run(self, argv: List[str]) -> str:
        return self.runner(argv, timeout=self.options.timeout_seconds)

    def probe(self) -> None:
        """Check the remote exists without fetching it.

        Raises:
            ProbeError: If the tool reports the remote as missing or unreachable
        """
        argv = _COMMANDS[self.backend].probe(self.options.executable(self.backend), self.url)
        try:
            self._run(argv)
        except CommandError as e:
            raise ProbeError(
                f"{self.backend.value} repository not reachable: {redact_url_credentials(self.url)}",
                context={"backend": self.backend.value, "returncode": e.returncode},
            ) from e

    def checkout(self, branch: str = "", revision: str = "") -> WorkingCopy:
        """Check out ``branch`` (tool default when empty) at ``revision``.

        An empty revision keeps whatever the clone produced. Failures leave
        nothing behind in the temporary directory root.

        Raises:
            CheckoutError: If a clone/update command fails
            VendorFilesystemError: If the temporary directory cannot be managed
        """
        cmds = _COMMANDS[self.backend]
        exe = self.options.executable(self.backend)
        root = self.options.temp_root()
        tmp = make_temp_dir(root, self.options.temp_prefix)
        dest = tmp / BZR_WORKDIR if cmds.nested_workdir else tmp

        try:
            self._run(cmds.clone(exe, self.url, str(dest), branch, revision))
            if revision and cmds.update is not None:
                self._run(cmds.update(exe, str(dest), revision))
        except CommandError as e:
            logger.warning(
                "checkout of %s failed, removing %s", redact_url_credentials(self.url), tmp
            )
            context = {"backend": self.backend.value, "branch": branch, "revision": revision}
            reason = redact_text_credentials(str(e))
            try:
                remove_tree(tmp)
            except VendorFilesystemError as cleanup:
                logger.warning("could not remove %s after failed checkout", tmp)
                context["residue"] = str(tmp)
                context["cleanup_error"] = str(cleanup)
                reason = f"{reason} (leftover {tmp} could not be removed: {cleanup})"
            raise CheckoutError(
                f"{self.backend.value} checkout of {redact_url_credentials(self.url)} failed: {reason}",
                context=context,
            ) from e

        logger.debug("checked out %s into %s", redact_url_credentials(self.url), dest)
        return WorkingCopy(
            backend=self.backend,
            path=dest,
            boundary=root,
            options=self.options,
            runner=self.runner,
        )


def open_remote(
    backend: Backend,
    url: str,
    *,
    options: Optional[VcsOptions] = None,
    runner: Optional[CommandRunner] = None,
) -> RemoteRepo:
    """Return a probed ``RemoteRepo`` for ``url``.

    Raises:
        ProbeError: If the remote cannot be reached
    """
    repo = RemoteRepo(
        backend=backend,
        url=url,
        options=options or VcsOptions(),
        runner=runner or run_command,
    )
    repo.probe()
    return repo


__all__ = [
    "RemoteRepo",
    "WorkingCopy",
    "open_remote",
    "BZR_PLACEHOLDER_REVISION",
    "BZR_PLACEHOLDER_BRANCH",
    "BZR_WORKDIR",
]
