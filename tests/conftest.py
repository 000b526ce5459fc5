"""
Shared test fixtures.

Author: git-obsidian-sync Project
License: MIT
"""

import json
import logging

import pytest

from obsidian_sync.utils.logger import LOGGER_NAMESPACE


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep host environment overrides out of the tests."""
    monkeypatch.delenv("OBSIDIAN_SYNC_CONFIG", raising=False)
    monkeypatch.delenv("OBSIDIAN_SYNC_TARGET_VAULT", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def write_config(tmp_path):
    """Write a configuration document and return its path."""
    def _write(data, name=".git-obsidian-sync.json"):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
