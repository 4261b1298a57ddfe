# ==============================================================================
# Shared Test Fixtures
# ==============================================================================
"""
Pytest fixtures shared across all test modules.

Provides:
- A MagicMock vendor client constrained to the VendorClient interface
- A translator factory building a fresh, immutable config per test variant
- A controllable millisecond clock for session tests
"""

from unittest.mock import MagicMock

import pytest

from amplitude_adapter.base import VendorClient
from amplitude_adapter.core import AmplitudeConfig, AmplitudeTranslator


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> int:
        self.now += ms
        return self.now


@pytest.fixture()
def client():
    """A mock Amplitude client. Only VendorClient methods may be called on it."""
    return MagicMock(spec=VendorClient)


@pytest.fixture()
def make_translator(client):
    """Build a translator around the shared mock client.

    Keyword arguments are settings-bag keys (camelCase), e.g.
    ``make_translator(trackNamedPages=True)``.
    """

    def _make(**settings) -> AmplitudeTranslator:
        return AmplitudeTranslator(client, AmplitudeConfig.from_settings(settings))

    return _make


@pytest.fixture()
def translator(make_translator):
    """A translator with default configuration."""
    return make_translator()


@pytest.fixture()
def clock():
    return FakeClock()
