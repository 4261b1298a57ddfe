# ==============================================================================
# Amplitude Adapter Utilities
# ==============================================================================
"""
Shared utilities for the adapter CLI.

This module exports configuration and input helpers.
"""

from amplitude_adapter.utils.config import (
    AmplitudeSettings,
    SessionSettings,
    Settings,
    get_settings,
)
from amplitude_adapter.utils.events import load_settings_bag, parse_event_lines

__all__ = [
    # Config
    "AmplitudeSettings",
    "SessionSettings",
    "Settings",
    "get_settings",
    # Input
    "load_settings_bag",
    "parse_event_lines",
]
