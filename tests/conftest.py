"""
Pytest configuration and shared fixtures for Arbor tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_common = importlib.import_module("fixtures.common")

make_letter_leaves = _common.make_letter_leaves
make_leaves = _common.make_leaves
make_random_leaves = _common.make_random_leaves


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def letter_leaves():
    """Leaves A through H."""
    return make_letter_leaves(8)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove ARBOR_* variables so config tests see only what they set."""
    import os
    for key in list(os.environ):
        if key.startswith("ARBOR_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def reset_default_config():
    """Restore the process-wide default config after the test."""
    from arbor.config.runtime import set_default_config
    yield
    set_default_config(None)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
