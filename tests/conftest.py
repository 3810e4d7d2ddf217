# tests/conftest.py
from __future__ import annotations

import pytest

from decodeways.fibcache import FibonacciCache
from decodeways.runtime import reset


@pytest.fixture(autouse=True)
def workspace(tmp_path, monkeypatch):
    """Point the workspace at a temp dir and start every test with a fresh runtime."""
    home = tmp_path / "ws"
    monkeypatch.setenv("DECODEWAYS_HOME", str(home))
    monkeypatch.delenv("PYTHONINTMAXSTRDIGITS", raising=False)
    reset()
    yield home
    reset()


@pytest.fixture
def cache():
    return FibonacciCache()
