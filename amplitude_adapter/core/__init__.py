# ==============================================================================
# Core Domain Logic
# ==============================================================================
"""
Pure domain logic with no I/O.

This module contains:
- Domain models (events, revenue records, vendor call records)
- Adapter configuration (AmplitudeConfig)
- Event translation (AmplitudeTranslator)
- Session id middleware (SessionCorrelator)
- Middleware chain and destination fan-out (AnalyticsPipeline)

All code here is framework-agnostic and easily unit-testable.
"""

from amplitude_adapter.core.models import (
    AliasEvent,
    AnalyticsEvent,
    BaseEvent,
    EventType,
    GroupEvent,
    IdentifyEvent,
    IdentifyOperation,
    IdentifyOperations,
    Revenue,
    RevenueProperties,
    ScreenEvent,
    TrackEvent,
    VendorCall,
    parse_event,
)
from amplitude_adapter.core.config import AmplitudeConfig
from amplitude_adapter.core.translator import AMPLITUDE_KEY, AmplitudeTranslator
from amplitude_adapter.core.session import SESSION_KEY, UNSET_SESSION_ID, SessionCorrelator
from amplitude_adapter.core.pipeline import AnalyticsPipeline, MiddlewareContractError

__all__ = [
    "AMPLITUDE_KEY",
    "SESSION_KEY",
    "UNSET_SESSION_ID",
    "AliasEvent",
    "AnalyticsPipeline",
    "AmplitudeConfig",
    "AmplitudeTranslator",
    "AnalyticsEvent",
    "BaseEvent",
    "EventType",
    "GroupEvent",
    "IdentifyEvent",
    "IdentifyOperation",
    "IdentifyOperations",
    "MiddlewareContractError",
    "Revenue",
    "RevenueProperties",
    "ScreenEvent",
    "SessionCorrelator",
    "TrackEvent",
    "VendorCall",
    "parse_event",
]
