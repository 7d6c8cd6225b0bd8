"""
Pytest configuration and shared fixtures for searchable tests.
"""

import pytest

from searchable.setup import SetupRegistry
from searchable.utils.config import reset_config


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch, tmp_path):
    """Run every test without a config file and with fresh cached configuration."""
    monkeypatch.delenv("SEARCHABLE_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def registry():
    """Fresh registry over live Python classes."""
    return SetupRegistry()
