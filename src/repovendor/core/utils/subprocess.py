from __future__ import annotations

"""Subprocess helpers for running version-control tools.

This module provides the single seam through which repovendor talks to
external programs:
- No shell=True (security)
- Output captured as text, exit status checked
- Optional timeout (None blocks until the tool exits)

Anything that shells out accepts a ``CommandRunner`` so tests can substitute
a fake that records argv instead of spawning processes.
"""

import logging
import subprocess
from pathlib import Path
from typing import Optional, Protocol, Sequence

from repovendor.core.exceptions import CommandError
from repovendor.core.utils.redaction import redact_args, redact_text_credentials

logger = logging.getLogger(__name__)


class CommandRunner(Protocol):
    """Run ``argv`` and return its standard output.

    Implementations raise ``CommandError`` when the program cannot be
    started or exits with a non-zero status.
    """

    def __call__(
        self,
        argv: Sequence[str],
        *,
        cwd: Optional[Path | str] = None,
        timeout: Optional[float] = None,
    ) -> str: ...


def _to_cwd(cwd: Optional[Path | str]) -> Optional[str]:
    return str(cwd) if cwd is not None else None


def run_command(
    argv: Sequence[str],
    *,
    cwd: Optional[Path | str] = None,
    timeout: Optional[float] = None,
) -> str:
    """
    Thin wrapper around subprocess.run with safe defaults.

    Args:
        argv: Command sequence to execute
        cwd: Working directory (Path or str)
        timeout: Timeout in seconds (None waits indefinitely)

    Returns:
        Captured standard output

    Raises:
        CommandError: If the command is missing, times out or exits non-zero
    """
    cmd = [str(a) for a in argv]
    safe_cmd = " ".join(redact_args(cmd))
    logger.debug("running: %s", safe_cmd)

    try:
        result = subprocess.run(
            cmd,
            cwd=_to_cwd(cwd),
            capture_output=True,
            text=True,
            check=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CommandError(f"Command not found: {cmd[0]}", argv=redact_args(cmd)) from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(
            f"Command timed out after {timeout}s: {safe_cmd}", argv=redact_args(cmd)
        ) from e
    except subprocess.CalledProcessError as e:
        safe_output = redact_text_credentials((e.stderr or e.stdout or "").strip())
        raise CommandError(
            f"Command failed ({e.returncode}): {safe_cmd}\n{safe_output}".rstrip(),
            argv=redact_args(cmd),
            returncode=e.returncode,
            stderr=safe_output,
        ) from e

    if result.stderr:
        logger.debug("%s: %s", cmd[0], redact_text_credentials(result.stderr.strip()))
    return result.stdout


__all__ = ["CommandRunner", "run_command"]
