from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence


class RepoVendorError(Exception):
    """Base exception for repovendor."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class CommandError(RepoVendorError, RuntimeError):
    """Raised when an external command cannot run or exits non-zero."""

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        returncode: int | None = None,
        stderr: str = "",
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx["argv"] = list(argv)
        if returncode is not None:
            ctx["returncode"] = returncode
        RepoVendorError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr


__all__ = [
    "RepoVendorError",
    "CommandError",
]
