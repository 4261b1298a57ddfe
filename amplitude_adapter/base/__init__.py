# ==============================================================================
# Base Abstract Classes
# ==============================================================================
"""
Abstract base classes defining the seams between the adapter and its host.

- VendorClient: the Amplitude SDK surface the translator drives
- Middleware: a pre-fan-out pipeline stage
- Destination: a consumer of resolved events
"""

from amplitude_adapter.base.client import VendorClient
from amplitude_adapter.base.destination import Destination
from amplitude_adapter.base.middleware import Middleware, Proceed

__all__ = [
    "Destination",
    "Middleware",
    "Proceed",
    "VendorClient",
]
