"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path

import pytest

from bindlib.storage.backends.filesystem import FileLibrary
from bindlib.storage.registry import set_registry


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    """Isolate environment variables and data directories for each test.

    This prevents test pollution where one test's environment
    changes affect other tests, and keeps default data paths out of the
    user's home directory.
    """
    original_env = os.environ.copy()
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    for name in ("BINDLIB_BACKEND", "BINDLIB_DATA_DIR", "BINDLIB_NAMESPACE"):
        monkeypatch.delenv(name, raising=False)

    yield

    FileLibrary.default_directory = None
    set_registry(None)
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def temp_dir():
    """Temporary directory for test data."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)
