import os
import time
from pathlib import Path

import pytest

FIXTURE_FILES = ("a/aa/foo.ts", "a/aa/bar.ts", "a/ab/foo.ts")


def _touch(path: str | Path) -> None:
    """Rewrite a file with its own content, moving its mtime forward."""
    path = Path(path)
    path.write_text(path.read_text())
    # Filesystem clocks are coarse; push mtime clearly past any entry just added
    ts = time.time() + 2
    os.utime(path, (ts, ts))


def _add_upper_case(cache, path: str) -> None:
    """Stand-in for an expensive conversion: cache the upper-cased file content."""
    cache.add(path, Path(path).read_text().upper())


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config files and SDB_CACHE_* variables out of every test."""
    for name in list(os.environ):
        if name.startswith("SDB_CACHE_"):
            monkeypatch.delenv(name)
    monkeypatch.setattr(
        "simple_db_cache.config.hierarchy._GLOBAL_CONFIG_PATH",
        tmp_path / "no-global-config.yaml",
    )
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def fixture_files(tmp_path):
    """Source files a/aa/foo.ts, a/aa/bar.ts and a/ab/foo.ts, last modified an hour ago.

    Each file holds a single comment line naming itself, e.g. ``// a/aa/foo.ts``.
    """
    root = tmp_path / "fixtures"
    past = time.time() - 3600
    paths = {}
    for rel in FIXTURE_FILES:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"// {rel}\n")
        os.utime(path, (past, past))
        paths[rel] = str(path)
    return paths


@pytest.fixture
def touch():
    return _touch


@pytest.fixture
def add_upper_case():
    return _add_upper_case
