"""
Pytest configuration and shared fixtures for stylecoach tests.

This module provides:
- Fixture paths (FIXTURES_DIR, LEXICON_FIXTURES_DIR)
- Lexicon fixtures (packaged v2/v1 and the minimal test lexicon)
"""

from pathlib import Path

import pytest

from stylecoach.common.lexicon import Lexicon, LexiconStore, load_lexicon


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------

TESTS_DIR = Path(__file__).parent
FIXTURES_DIR = TESTS_DIR / "fixtures"
LEXICON_FIXTURES_DIR = FIXTURES_DIR / "lexicon"


# ---------------------------------------------------------------------------
# Lexicon Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def lexicon() -> Lexicon:
    """Packaged default lexicon (v2)."""
    return load_lexicon("v2")


@pytest.fixture
def lexicon_v1() -> Lexicon:
    """Packaged baseline lexicon (v1)."""
    return load_lexicon("v1")


@pytest.fixture
def minimal_lexicon() -> Lexicon:
    """Two categories: planner (plan/roadmap/make sure 1.0, TICKET-n 0.5) and builder (build/implement 2.0)."""
    store = LexiconStore(LEXICON_FIXTURES_DIR / "minimal_valid.yaml")
    store.load()
    return store.lexicon
