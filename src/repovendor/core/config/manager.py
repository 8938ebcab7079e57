"""
repovendor configuration management (YAML, layered).
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from repovendor.core.utils.io import parse_yaml_string, read_yaml
from repovendor.core.utils.merge import deep_merge
from repovendor.data import get_data_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "REPOVENDOR_"
PROJECT_CONFIG_DIRNAME = ".repovendor"


def project_config_dir(repo_root: Path) -> Path:
    """Directory holding project config overrides."""
    return Path(repo_root) / PROJECT_CONFIG_DIRNAME / "config"


class ConfigManager:
    """Load and merge repovendor configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: REPOVENDOR_<section>__<key>
    2. Project config: <repo_root>/.repovendor/config/*.yaml (alphabetical order)
    3. Bundled defaults: repovendor.data/config/*.yaml (alphabetical order)
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root) if repo_root is not None else Path.cwd()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = project_config_dir(self.repo_root)

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        data = read_yaml(path, default={}, raise_on_error=True)
        if not isinstance(data, dict):
            raise ValueError(f"Config file must contain a mapping: {path}")
        return data

    def _load_directory(self, directory: Path, cfg: Dict[str, Any]) -> Dict[str, Any]:
        if not directory.is_dir():
            return cfg
        for path in sorted(directory.glob("*.y*ml")):
            logger.debug("loading config %s", path)
            cfg = deep_merge(cfg, self.load_yaml(path))
        return cfg

    def _iter_env_overrides(self) -> Iterator[Tuple[List[str], Any]]:
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX):
                continue
            raw = key[len(ENV_PREFIX):]
            segs = [s.lower() for s in raw.split("__")]
            if not raw or any(s == "" for s in segs):
                raise ValueError(f"Malformed {ENV_PREFIX}* key: '{key}'")
            yield segs, parse_yaml_string(os.environ[key])

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> Dict[str, Any]:
        for path, value in self._iter_env_overrides():
            override: Dict[str, Any] = {path[-1]: value}
            for seg in reversed(path[:-1]):
                override = {seg: override}
            cfg = deep_merge(cfg, override)
        return cfg

    def load_config(self) -> Dict[str, Any]:
        """Return the fully merged configuration dict."""
        cfg: Dict[str, Any] = {}
        cfg = self._load_directory(self.core_config_dir, cfg)
        cfg = self._load_directory(self.project_config_dir, cfg)
        return self.apply_env_overrides(cfg)


__all__ = ["ConfigManager", "project_config_dir", "ENV_PREFIX"]
