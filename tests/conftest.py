"""
Pytest configuration and fixtures for envbind tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture(autouse=True)
def clear_descriptor_cache():
    """Descriptor tables are cached per type; start each test from an empty cache."""
    from envbind.core.directives import describe

    describe.cache_clear()
    yield
