"""Shared test fixtures for rsubset tests."""

import numpy as np
import pandas as pd
import pytest

from rsubset import RList, Vector, array, matrix


@pytest.fixture
def x():
    """Unnamed numeric vector used throughout the examples."""
    return Vector([2.1, 4.2, 3.3, 5.4])


@pytest.fixture
def named_x():
    """The same vector with names a-d."""
    return Vector([2.1, 4.2, 3.3, 5.4], names=["a", "b", "c", "d"])


@pytest.fixture
def ab_list():
    """List with names a and b."""
    return RList({"a": 1, "b": 2})


@pytest.fixture
def m():
    """3x3 matrix of 1..9 filled by column, columns named A-C."""
    return matrix(range(1, 10), nrow=3, dimnames=[None, ["A", "B", "C"]])


@pytest.fixture
def vals():
    """5x5 matrix whose cells spell out their own coordinates."""
    cells = [f"{i},{j}" for j in range(1, 6) for i in range(1, 6)]
    return matrix(cells, nrow=5)


@pytest.fixture
def cube():
    """2x3x4 array of 1..24."""
    return array(range(1, 25), (2, 3, 4))


@pytest.fixture
def df():
    """Sample DataFrame for testing."""
    return pd.DataFrame({"x": [1, 2, 3], "y": [3, 2, 1], "z": ["a", "b", "c"]})


@pytest.fixture
def m_np():
    """numpy twin of the ``m`` fixture, for building masks."""
    return np.arange(1, 10).reshape((3, 3), order="F")
