# ==============================================================================
# Analytics Pipeline - Middleware Chain and Destination Fan-out
# ==============================================================================
"""
Runs events through middleware and hands the result to every destination.

Flow for one event:

    middleware[0].intercept -> ... -> middleware[n].intercept -> fan-out

Middleware runs to completion before fan-out, so state it resolves (such as
the session id) is computed once per event and every destination observes
the same value. Destinations are called in registration order on the calling
thread.

A destination is skipped for an event whose ``integrations`` maps the
destination key to ``False``.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from amplitude_adapter.base.destination import Destination
from amplitude_adapter.base.middleware import Middleware
from amplitude_adapter.core.models import BaseEvent, VendorCall

logger = logging.getLogger(__name__)


class MiddlewareContractError(RuntimeError):
    """Raised when a middleware does not call proceed exactly once."""


class AnalyticsPipeline:
    """
    Middleware chain followed by destination fan-out.

    Not thread-safe: one pipeline per analytics client, fed from one thread.
    """

    def __init__(
        self,
        middlewares: Sequence[Middleware] = (),
        destinations: Sequence[Destination] = (),
        log: Optional[logging.Logger] = None,
    ):
        self._middlewares = list(middlewares)
        self._destinations = list(destinations)
        self._log = log or logger

    @property
    def destinations(self) -> list[Destination]:
        return list(self._destinations)

    def add_middleware(self, middleware: Middleware) -> None:
        self._middlewares.append(middleware)

    def add_destination(self, destination: Destination) -> None:
        self._destinations.append(destination)

    def resolve(self, event: BaseEvent) -> BaseEvent:
        """
        Run the middleware chain.

        Args:
            event: Incoming event

        Returns:
            The event as forwarded by the last middleware

        Raises:
            MiddlewareContractError: If a middleware skips proceed or calls it twice
        """
        for middleware in self._middlewares:
            event = self._run_middleware(middleware, event)
        return event

    @staticmethod
    def _run_middleware(middleware: Middleware, event: BaseEvent) -> BaseEvent:
        name = type(middleware).__name__
        forwarded: list[BaseEvent] = []

        def proceed(next_event: BaseEvent) -> None:
            if forwarded:
                raise MiddlewareContractError(f"{name} called proceed more than once")
            forwarded.append(next_event)

        middleware.intercept(event, proceed)
        if not forwarded:
            raise MiddlewareContractError(f"{name} did not call proceed")
        return forwarded[0]

    def process(self, event: BaseEvent) -> dict[str, list[VendorCall]]:
        """
        Resolve an event and deliver it to every enabled destination.

        Returns:
            Vendor calls issued, keyed by destination key
        """
        return self.deliver(self.resolve(event))

    def deliver(self, event: BaseEvent) -> dict[str, list[VendorCall]]:
        """
        Fan an already resolved event out to the destinations.

        Returns:
            Vendor calls issued, keyed by destination key
        """
        results: dict[str, list[VendorCall]] = {}
        for destination in self._destinations:
            if event.integrations.get(destination.key) is False:
                self._log.debug("Destination %s disabled for event", destination.key)
                continue
            results[destination.key] = destination.handle(event)
        return results

    def flush(self) -> dict[str, list[VendorCall]]:
        return {destination.key: destination.flush() for destination in self._destinations}

    def reset(self) -> dict[str, list[VendorCall]]:
        return {destination.key: destination.reset() for destination in self._destinations}
