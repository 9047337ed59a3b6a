"""
Pytest configuration and shared fixtures for witness ledger tests.

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

make_blob = _common.make_blob
make_record = _common.make_record
make_committed_ledger = _common.make_committed_ledger


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

CHUNK_SIZE = 32


@pytest.fixture
def chunk_size():
    """Chunk size used by the shared fixtures."""
    return CHUNK_SIZE


@pytest.fixture
def sample_blob():
    """A blob of exactly five 32-byte chunks."""
    return make_blob(num_chunks=5, chunk_size=CHUNK_SIZE)


@pytest.fixture
def sample_tree(sample_blob):
    """MerkleTree over sample_blob."""
    from core.merkle import MerkleTree
    return MerkleTree.from_blob(sample_blob, CHUNK_SIZE)


@pytest.fixture
def committed_ledger(sample_blob):
    """(ledger, tree) with sample_blob committed under account "A"."""
    return make_committed_ledger("A", sample_blob, CHUNK_SIZE)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove WITNESS_* variables so config tests start from defaults."""
    for name in ("WITNESS_CHUNK_SIZE", "WITNESS_LOG_LEVEL", "WITNESS_LOG_FILE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
