"""
Pytest configuration and shared fixtures for merkle-anchor tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
"""

import os
import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from core.anchor import AnchorClient  # noqa: E402
from core.crypto.hashing import blake2s256  # noqa: E402
from core.ledger import InMemoryLedger  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def leaves():
    """Four leaves: hashes of "a", "b", "c", "d"."""
    return [blake2s256(s.encode()) for s in ("a", "b", "c", "d")]


@pytest.fixture
def ledger():
    """Fresh in-memory ledger."""
    return InMemoryLedger()


@pytest.fixture
def client(ledger):
    """Anchor client over the in-memory ledger."""
    return AnchorClient(ledger)


@pytest.fixture(autouse=True)
def _clean_anchor_env(monkeypatch):
    """Keep ANCHOR_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("ANCHOR_"):
            monkeypatch.delenv(key, raising=False)
