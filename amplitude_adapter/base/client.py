# ==============================================================================
# Vendor Client Abstract Class
# ==============================================================================
"""
Contract for the Amplitude client the translator drives.

The translator only issues calls. Delivery, batching and retries belong to
the concrete client supplied by the surrounding pipeline.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from amplitude_adapter.core.models import IdentifyOperations, Revenue


class VendorClient(ABC):
    """Base class for Amplitude client implementations."""

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    @abstractmethod
    def initialize(self, api_key: Optional[str]) -> None:
        """Initialize the SDK with a project API key."""
        ...

    @abstractmethod
    def enable_foreground_tracking(self) -> None:
        """Let the SDK follow application foreground/background transitions."""
        ...

    @abstractmethod
    def track_session_events(self, enabled: bool) -> None:
        """Toggle automatic session start/end events."""
        ...

    @abstractmethod
    def enable_location_listening(self) -> None: ...

    @abstractmethod
    def use_advertising_id_for_device_id(self) -> None: ...

    # ==========================================================================
    # Users
    # ==========================================================================

    @abstractmethod
    def set_user_id(self, user_id: Optional[str]) -> None:
        """Set the current user id. None clears it."""
        ...

    @abstractmethod
    def set_user_properties(self, properties: dict[str, Any]) -> None:
        """Set user properties."""
        ...

    @abstractmethod
    def apply_identify_operations(self, operations: IdentifyOperations) -> None:
        """Apply a batch of increment / set-once operations."""
        ...

    @abstractmethod
    def set_group(self, group_type: str, group_name: Any) -> None:
        """
        Assign the current user to a group.

        Args:
            group_type: Group type label (e.g. "company")
            group_name: Group value, a scalar or a list of scalars
        """
        ...

    # ==========================================================================
    # Events
    # ==========================================================================

    @abstractmethod
    def log_event(
        self,
        name: str,
        properties: dict[str, Any],
        groups: Optional[dict[str, Any]],
        out_of_session: bool,
    ) -> None:
        """Log a named event."""
        ...

    @abstractmethod
    def log_revenue(
        self,
        product_id: Optional[str],
        quantity: int,
        amount: Optional[float],
        receipt: Optional[str],
        receipt_signature: Optional[str],
    ) -> None:
        """Log revenue using the legacy single-call API."""
        ...

    @abstractmethod
    def log_revenue_v2(self, revenue: Revenue) -> None:
        """Log a structured revenue record."""
        ...

    @abstractmethod
    def upload_events(self) -> None:
        """Flush queued events to the vendor."""
        ...

    @abstractmethod
    def regenerate_device_id(self) -> None:
        """Forget the current device and start a new anonymous identity."""
        ...
