"""Shared test fixtures for WorldWater test suite."""

import os

import pytest

# Ensure test environment variables are set before any config import
os.environ.setdefault("WWL_API_KEY", "test-api-key")
os.environ.setdefault("WWL_DEMO_MODE", "true")


@pytest.fixture(autouse=True)
def fresh_config():
    """Reset the config singleton so env patches in one test don't leak."""
    import worldwater.config
    worldwater.config._config = None
    yield
    worldwater.config._config = None


@pytest.fixture
def config():
    from worldwater.config import get_config
    return get_config()


@pytest.fixture
def result_2c():
    """A reproducible +2C run used across summary tests."""
    from worldwater.simulation import run_simulation
    return run_simulation(2.0, 2000, seed=1337)


@pytest.fixture
def small_geoid():
    """3x3 grid with a known gradient: values grow east and south."""
    import numpy as np
    from worldwater.flood.geoid import GeoidGrid
    return GeoidGrid(np.array([
        [0.0, 1.0, 2.0],
        [10.0, 11.0, 12.0],
        [20.0, 21.0, 22.0],
    ]))
