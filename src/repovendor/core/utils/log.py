from __future__ import annotations

import logging
from pathlib import Path

from repovendor.core.utils.io import ensure_parent_dir

_CONFIGURED_LOG_PATH: str | None = None
_FILE_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Configure stdlib logging to write to `log_path`.

    Idempotent per-process: if already configured for the same file, no-op.
    """
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    if _CONFIGURED_LOG_PATH == resolved and _FILE_HANDLER is not None:
        return

    ensure_parent_dir(resolved)

    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    # Replace our file handler when switching paths.
    if _FILE_HANDLER is not None:
        root.removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
        _FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(fh)

    _FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def configure_from_config(repo_root: Path | None = None) -> bool:
    """Apply the ``logging`` config section. Returns True if a file log was installed."""
    from repovendor.core.config.domains.logging import LoggingConfig

    cfg = LoggingConfig(repo_root=repo_root)
    if cfg.path is None:
        logging.getLogger("repovendor").setLevel(_level_from_name(cfg.level))
        return False
    configure_stdlib_logging(log_path=cfg.path, level=cfg.level)
    return True


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the handler installed by configure_stdlib_logging."""
    global _CONFIGURED_LOG_PATH, _FILE_HANDLER
    if _FILE_HANDLER is not None:
        logging.getLogger().removeHandler(_FILE_HANDLER)
        _FILE_HANDLER.close()
    _CONFIGURED_LOG_PATH = None
    _FILE_HANDLER = None


__all__ = [
    "configure_stdlib_logging",
    "configure_from_config",
    "reset_stdlib_logging_for_tests",
]
