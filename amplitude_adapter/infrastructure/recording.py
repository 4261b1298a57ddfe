# ==============================================================================
# Recording Vendor Client
# ==============================================================================
"""
Dry-run implementation of the VendorClient interface.

Records every call instead of sending it anywhere and logs it at DEBUG. Used
by the ``replay`` command to show what the translator would send, and as a
concrete client in tests.
"""

import logging
from typing import Any, Optional

from amplitude_adapter.base import VendorClient
from amplitude_adapter.core.models import IdentifyOperations, Revenue, VendorCall

logger = logging.getLogger(__name__)


class RecordingClient(VendorClient):
    """VendorClient that records calls in memory."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self.calls: list[VendorCall] = []
        self.initialized = False
        self._log = log or logger

    def _record(self, method: str, *args: Any) -> None:
        self.calls.append(VendorCall(method=method, args=args))
        self._log.debug("%s%r", method, args)

    def clear(self) -> list[VendorCall]:
        """Return the recorded calls and start over."""
        calls, self.calls = self.calls, []
        return calls

    def initialize(self, api_key: Optional[str]) -> None:
        self.initialized = True
        self._record("initialize", api_key)

    def enable_foreground_tracking(self) -> None:
        self._record("enable_foreground_tracking")

    def track_session_events(self, enabled: bool) -> None:
        self._record("track_session_events", enabled)

    def enable_location_listening(self) -> None:
        self._record("enable_location_listening")

    def use_advertising_id_for_device_id(self) -> None:
        self._record("use_advertising_id_for_device_id")

    def set_user_id(self, user_id: Optional[str]) -> None:
        self._record("set_user_id", user_id)

    def set_user_properties(self, properties: dict[str, Any]) -> None:
        self._record("set_user_properties", properties)

    def apply_identify_operations(self, operations: IdentifyOperations) -> None:
        self._record("apply_identify_operations", operations)

    def set_group(self, group_type: str, group_name: Any) -> None:
        self._record("set_group", group_type, group_name)

    def log_event(
        self,
        name: str,
        properties: dict[str, Any],
        groups: Optional[dict[str, Any]],
        out_of_session: bool,
    ) -> None:
        self._record("log_event", name, properties, groups, out_of_session)

    def log_revenue(
        self,
        product_id: Optional[str],
        quantity: int,
        amount: Optional[float],
        receipt: Optional[str],
        receipt_signature: Optional[str],
    ) -> None:
        self._record("log_revenue", product_id, quantity, amount, receipt, receipt_signature)

    def log_revenue_v2(self, revenue: Revenue) -> None:
        self._record("log_revenue_v2", revenue)

    def upload_events(self) -> None:
        self._record("upload_events")

    def regenerate_device_id(self) -> None:
        self._record("regenerate_device_id")
