# ==============================================================================
# Middleware Abstract Class
# ==============================================================================
"""
Base class for pipeline middleware.

Middleware runs on every event before it is fanned out to destinations. Each
stage receives the event and a ``proceed`` callable and must call ``proceed``
exactly once, with the original event or a transformed copy.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from amplitude_adapter.core.models import BaseEvent

Proceed = Callable[[BaseEvent], None]


class Middleware(ABC):
    """Base class for event middleware."""

    @abstractmethod
    def intercept(self, event: BaseEvent, proceed: Proceed) -> None:
        """
        Inspect or annotate an event and hand it to the next stage.

        Args:
            event: Incoming event (never mutated)
            proceed: Callback forwarding the event to the next stage
        """
        ...
