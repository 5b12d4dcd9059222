"""Pytest configuration and shared fixtures for the metapivot test suite."""

import pandas as pd
import pytest

from metapivot.metadata import build_metadata
from metapivot.transform import reshape_long


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "cli: marks tests that drive the command-line interface"
    )


@pytest.fixture
def wide():
    """Two rows, identifier `id`, measure columns a, b, c."""
    return pd.DataFrame({
        'id': [1, 2],
        'a': [10, 20],
        'b': [11, 21],
        'c': [12, 22],
    })


@pytest.fixture
def metadata():
    """a and b belong to group1, c to group2."""
    return build_metadata({'a': 'group1', 'b': 'group1', 'c': 'group2'})


@pytest.fixture
def long(wide):
    return reshape_long(wide, 'id')
