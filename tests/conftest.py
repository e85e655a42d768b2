"""Shared fixtures for PulseWatch tests."""

import pytest

from tests.doubles import FakeClock


@pytest.fixture
def clock():
    """A fake millisecond clock starting at 1,000,000."""
    return FakeClock()
