# ==============================================================================
# Destination Abstract Class
# ==============================================================================
"""
Base class for event destinations.

A destination receives events after all middleware has run. The pipeline
hands the same event object to every destination, so destinations must not
mutate it.
"""

from abc import ABC, abstractmethod

from amplitude_adapter.core.models import BaseEvent, VendorCall


class Destination(ABC):
    """Base class for pipeline destinations."""

    #: Name used in an event's ``integrations`` to address this destination
    key: str

    @abstractmethod
    def handle(self, event: BaseEvent) -> list[VendorCall]:
        """
        Process one event.

        Returns:
            The vendor calls issued for the event, in order
        """
        ...

    @abstractmethod
    def flush(self) -> list[VendorCall]:
        """Ask the destination to deliver anything it has queued."""
        ...

    @abstractmethod
    def reset(self) -> list[VendorCall]:
        """Forget the current user."""
        ...
