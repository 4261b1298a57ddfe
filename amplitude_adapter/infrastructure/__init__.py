# ==============================================================================
# Infrastructure Adapters
# ==============================================================================
"""
Concrete implementations of the base interfaces.

- recording.py - RecordingClient, a dry-run VendorClient
"""

from amplitude_adapter.infrastructure.recording import RecordingClient

__all__ = [
    "RecordingClient",
]
