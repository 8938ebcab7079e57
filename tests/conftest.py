import os
import sys
from pathlib import Path

import pytest

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'repovendor' and tests/ importable as 'helpers'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))


from helpers.cache_utils import reset_repovendor_caches
from helpers.vcs import FakeRunner


@pytest.fixture(autouse=True)
def _isolate_repovendor(monkeypatch):
    """Fresh caches and no developer REPOVENDOR_* overrides for every test."""
    for key in list(os.environ):
        if key.startswith("REPOVENDOR_"):
            monkeypatch.delenv(key, raising=False)
    reset_repovendor_caches()
    yield
    reset_repovendor_caches()


@pytest.fixture
def runner() -> FakeRunner:
    """Process runner double that records argv and simulates checkouts."""
    return FakeRunner()


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    """Directory checkouts are allocated under."""
    root = tmp_path / "tmp"
    root.mkdir()
    return root


@pytest.fixture
def options(temp_root: Path):
    from repovendor.core.vendors.models import VcsOptions

    return VcsOptions(temp_dir=temp_root)
