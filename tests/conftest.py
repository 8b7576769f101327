"""
Pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from seqscope.config import Settings, get_settings
from seqscope.worker import AlignmentCoordinator


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast, in-process tests")
    config.addinivalue_line("markers", "integration: tests that start a worker process")


@pytest.fixture
def rng():
    """Seeded generator so random inputs are reproducible."""
    return np.random.default_rng(20240611)


@pytest.fixture
def random_dna(rng):
    """Factory for random ACGT strings of a given length."""
    def make(length: int) -> str:
        return "".join(rng.choice(list("ACGT"), size=length))
    return make


@pytest.fixture
def worker_settings():
    return Settings(worker_poll_interval=0.05, max_alignment_residues=0)


@pytest.fixture
def coordinator(worker_settings):
    """Coordinator whose worker is stopped after the test."""
    coord = AlignmentCoordinator(worker_settings)
    yield coord
    coord.shutdown()


@pytest.fixture
def env_settings(monkeypatch):
    """Set SEQSCOPE_* variables, then reload the cached settings."""
    def configure(**values):
        for key, value in values.items():
            monkeypatch.setenv(f"SEQSCOPE_{key.upper()}", str(value))
        get_settings.cache_clear()
        return get_settings()

    get_settings.cache_clear()
    yield configure
    get_settings.cache_clear()
