"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def shot_lengths(rng):
    """Right-skewed shot durations resembling one film (seconds)."""
    return rng.lognormal(mean=1.5, sigma=0.8, size=400)


@pytest.fixture
def silent_and_sound(rng):
    """Two small groups of films with different shot-length scales."""
    silent = {
        f"silent_{i}": rng.lognormal(mean=1.3, sigma=0.7, size=300 + 20 * i)
        for i in range(3)
    }
    sound = {
        f"sound_{i}": rng.lognormal(mean=2.0, sigma=0.7, size=250 + 10 * i)
        for i in range(2)
    }
    return silent, sound
