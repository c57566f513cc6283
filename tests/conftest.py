"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used trees as fixtures via pytest's autodiscovery
3. Keeps environment variables and config files from leaking into tests
4. Configures pytest markers
"""

import os
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

from hashtree.crypto.hashing import hash_text  # noqa: E402
from hashtree.merkle import HashTree  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def merkle_values():
    """The four raw values used by the worked examples."""
    return ["Merkle Tree", "Ralph Merkle", "Hash Function", "Inclusion Proof"]


@pytest.fixture
def merkle_digests(merkle_values):
    return [hash_text(v) for v in merkle_values]


@pytest.fixture
def four_leaf_tree(merkle_values):
    """A full depth-2 tree with four distinct leaves."""
    return HashTree.build(merkle_values, raw=True)


@pytest.fixture
def empty_tree():
    return HashTree()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch, tmp_path):
    """Keep HASHTREE_* variables and local config files out of tests."""
    for name in list(os.environ):
        if name.startswith("HASHTREE_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
