"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by every test package.
"""

import random

import pytest

from treasurechest.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus.reset()
    yield
    EventBus.reset()


@pytest.fixture
def seeded_rng():
    """A deterministic random source."""
    return random.Random(1234)
