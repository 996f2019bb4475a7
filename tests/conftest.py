"""Shared pytest fixtures and markers for all tests."""

import random

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def payoffs():
    """Provide a default payoff matrix for testing."""
    from trustsim.models.payoffs import PayoffMatrix
    return PayoffMatrix()


@pytest.fixture
def seeded_rng():
    """Provide a seeded random source for reproducible tests."""
    return random.Random(12345)


@pytest.fixture
def make_agents():
    """Factory for a population with sequential IDs from a list of kinds."""
    from trustsim.agent import Agent

    def _make(*kinds, rng=None):
        return [Agent(i, kind, rng=rng) for i, kind in enumerate(kinds)]

    return _make
