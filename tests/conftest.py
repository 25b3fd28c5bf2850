"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from process-wide configuration
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

make_tree = _common.make_tree

from hashtree.config.runtime import set_default_config
from hashtree.crypto.hashing import sha256
from hashtree.merkle import build_tree


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

_CONFIG_ENV_VARS = ("HASHTREE_HASH_ALGORITHM", "HASHTREE_RENDER_PREVIEW_BYTES")


@pytest.fixture(autouse=True)
def reset_default_config(monkeypatch):
    """Start every test from an unset default config and a clean environment."""
    for name in _CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def abc_blocks():
    """The three-block scenario: a, b, c."""
    return [b"a", b"b", b"c"]


@pytest.fixture
def abc_tree(abc_blocks):
    """Tree over a, b, c with SHA-256."""
    return build_tree(abc_blocks, hash_function=sha256)


@pytest.fixture
def seven_tree():
    """Tree over seven blocks (odd block count)."""
    return make_tree(7)


@pytest.fixture
def five_tree():
    """Tree over five blocks: odd row 0 and odd row 1."""
    return make_tree(5)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
