# ==============================================================================
# Session Correlator - Session Id Middleware
# ==============================================================================
"""
Middleware that stamps every event with an Amplitude session id.

A session starts when the app is opened and ends when it is backgrounded.
While a session is active it is rolled forward to a new id once the idle
window has elapsed since the session started. The check happens lazily when
the id is read; there is no background timer.

The stamp is written to ``integrations["Actions Amplitude"]["session_id"]``
on a copy of the event. While no session is active the stamp is
UNSET_SESSION_ID.
"""

import logging
import time
from collections.abc import Callable
from typing import Optional

from amplitude_adapter.base.middleware import Middleware, Proceed
from amplitude_adapter.core.models import BaseEvent, TrackEvent

logger = logging.getLogger(__name__)

SESSION_KEY = "Actions Amplitude"
UNSET_SESSION_ID = -1
DEFAULT_IDLE_WINDOW_MS = 300_000

APPLICATION_OPENED = "Application Opened"
APPLICATION_BACKGROUNDED = "Application Backgrounded"


def current_time_ms() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


class SessionCorrelator(Middleware):
    """
    Session id middleware.

    One instance per analytics client. It must run before events are fanned
    out to destinations so that every destination sees the same session id.
    """

    def __init__(
        self,
        idle_window_ms: int = DEFAULT_IDLE_WINDOW_MS,
        clock: Optional[Callable[[], int]] = None,
        log: Optional[logging.Logger] = None,
    ):
        """
        Initialize the correlator in the inactive state.

        Args:
            idle_window_ms: Session age after which a new session id is issued
            clock: Returns the current time in milliseconds. Defaults to wall clock.
            log: Optional logger override. Defaults to this module's logger.
        """
        if idle_window_ms <= 0:
            raise ValueError("idle_window_ms must be positive")
        self.idle_window_ms = idle_window_ms
        self._clock = clock or current_time_ms
        self._log = log or logger
        self._session_id = UNSET_SESSION_ID

    @property
    def active(self) -> bool:
        return self._session_id != UNSET_SESSION_ID

    def get_session_id(self) -> int:
        """
        Get the current session id, rolling it forward if the window has elapsed.

        Returns:
            Session start time in milliseconds, or UNSET_SESSION_ID when inactive
        """
        if not self.active:
            return UNSET_SESSION_ID

        now = self._clock()
        if now - self._session_id >= self.idle_window_ms:
            self._log.debug("Session %d expired, starting session %d", self._session_id, now)
            self._session_id = now
        return self._session_id

    def start_session(self) -> int:
        """Start a new session at the current time."""
        self._session_id = self._clock()
        self._log.debug("Session %d started", self._session_id)
        return self._session_id

    def end_session(self) -> None:
        """End the current session."""
        if self.active:
            self._log.debug("Session %d ended", self._session_id)
        self._session_id = UNSET_SESSION_ID

    def intercept(self, event: BaseEvent, proceed: Proceed) -> None:
        if isinstance(event, TrackEvent):
            if event.event == APPLICATION_BACKGROUNDED:
                self.end_session()
            elif event.event == APPLICATION_OPENED:
                self.start_session()

        proceed(event.with_integration_option(SESSION_KEY, session_id=self.get_session_id()))
