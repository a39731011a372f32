"""Pytest configuration and shared fixtures."""

import pytest
import sys
from pathlib import Path

import numpy as np

# Add the project root to the path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from particle_field.core_types import SignalSnapshot  # noqa: E402
from particle_field.modes import ModeCatalog  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: statistical tests over many trials")


@pytest.fixture
def rng():
    """Provide a deterministic random source."""
    return np.random.default_rng(1234)


@pytest.fixture
def small_catalog():
    """Mode table with particle counts scaled down for fast tests."""
    return ModeCatalog(count_scale=0.01)


@pytest.fixture
def quiet_signal():
    """Pointer at the centre, no audio and no gesture."""
    return SignalSnapshot()


@pytest.fixture(scope="session")
def project_root_path():
    """Provide the project root path."""
    return Path(__file__).parent.parent
