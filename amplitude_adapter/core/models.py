# ==============================================================================
# Analytics Event Domain Models
# ==============================================================================
"""
Pydantic models for analytics events and the Amplitude payloads derived from them.

These models are used for:
- Validating events read from the analytics pipeline (JSON wire format)
- Copy-on-write annotation of events by middleware
- Describing the vendor calls issued by the translator

This module is part of the core domain layer and has no external dependencies
beyond Pydantic.
"""

from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import (
    BaseModel,
    Field,
    TypeAdapter,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
)


class EventType(str, Enum):
    """Event types emitted by the analytics pipeline."""

    IDENTIFY = "identify"
    TRACK = "track"
    SCREEN = "screen"
    GROUP = "group"
    ALIAS = "alias"


# ==============================================================================
# Events
# ==============================================================================


class BaseEvent(BaseModel):
    """
    Attributes shared by every analytics event.

    Events are frozen. Middleware that needs to annotate an event builds a new
    one with with_integration_option() so that every destination consuming
    the original keeps seeing the same value.

    Attributes:
        integrations: Per-destination options, keyed by destination name
        anonymous_id: Device-scoped anonymous identifier
        user_id: Known user identifier, if any
        message_id: Unique message identifier assigned by the pipeline
        timestamp: ISO-8601 timestamp assigned by the pipeline
        context: Extension metadata (device, app, library, ...)
    """

    model_config = {"frozen": True, "populate_by_name": True}

    integrations: dict[str, Any] = Field(
        default_factory=dict, description="Per-destination integration options"
    )
    anonymous_id: Optional[str] = Field(None, alias="anonymousId")
    user_id: Optional[str] = Field(None, alias="userId")
    message_id: Optional[str] = Field(None, alias="messageId")
    timestamp: Optional[str] = Field(None, description="ISO-8601 event timestamp")
    context: dict[str, Any] = Field(default_factory=dict)

    def integration_options(self, key: str) -> dict[str, Any]:
        """
        Get the options bag for a destination.

        Returns an empty dict when the destination has no options or when its
        entry is not a mapping (e.g. a plain ``True``/``False`` toggle).
        """
        options = self.integrations.get(key)
        if isinstance(options, dict):
            return options
        return {}

    def with_integration_option(self, key: str, **values: Any) -> "BaseEvent":
        """
        Return a copy of this event with values merged into a destination's options.

        The receiver is left untouched.

        Args:
            key: Destination name
            **values: Option values to set for that destination

        Returns:
            New event of the same type
        """
        integrations = dict(self.integrations)
        merged = dict(self.integration_options(key))
        merged.update(values)
        integrations[key] = merged
        return self.model_copy(update={"integrations": integrations})


class IdentifyEvent(BaseEvent):
    """Associates a user with their traits."""

    type: Literal["identify"] = "identify"
    traits: dict[str, Any] = Field(default_factory=dict)


class TrackEvent(BaseEvent):
    """A named user action with arbitrary properties."""

    type: Literal["track"] = "track"
    event: str = Field(..., description="Event name")
    properties: dict[str, Any] = Field(default_factory=dict)


class ScreenEvent(BaseEvent):
    """A mobile screen view."""

    type: Literal["screen"] = "screen"
    name: Optional[str] = None
    category: Optional[str] = None
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def event_name(self) -> str:
        """Screen name, falling back to category."""
        return self.name or self.category or ""


class GroupEvent(BaseEvent):
    """Associates the current user with a group (company, team, ...)."""

    type: Literal["group"] = "group"
    group_id: str = Field(..., alias="groupId")
    traits: Optional[dict[str, Any]] = None


class AliasEvent(BaseEvent):
    """Links a previous identity to the current one."""

    type: Literal["alias"] = "alias"
    previous_id: Optional[str] = Field(None, alias="previousId")


AnalyticsEvent = Annotated[
    Union[IdentifyEvent, TrackEvent, ScreenEvent, GroupEvent, AliasEvent],
    Field(discriminator="type"),
]

_EVENT_ADAPTER: TypeAdapter = TypeAdapter(AnalyticsEvent)


def parse_event(data: dict) -> BaseEvent:
    """
    Validate a wire-format event dict into the matching event model.

    Raises:
        pydantic.ValidationError: If the type is unknown or fields are invalid
    """
    return _EVENT_ADAPTER.validate_python(data)


# ==============================================================================
# Revenue
# ==============================================================================


class RevenueProperties(BaseModel):
    """
    Validated view of the reserved revenue keys in a track event's properties.

    Presence of a key, not its value, drives the revenue rules: a revenue of
    0 or a negative refund still has to be reported. Presence is read from
    model_fields_set, so a key set to a falsy value counts as present.

    Numeric fields are read independently. A value that cannot be read as a
    number (or a whole number, for quantity) resolves to None and the caller
    applies its own default, so one bad key never hides the others.
    """

    model_config = {"populate_by_name": True, "extra": "ignore"}

    revenue: Optional[float] = None
    total: Optional[float] = None
    price: Optional[float] = None
    quantity: Optional[int] = None
    product_id: Optional[str] = Field(None, alias="productId")
    revenue_type: Optional[str] = Field(None, alias="revenueType")
    receipt: Optional[str] = None
    receipt_signature: Optional[str] = Field(None, alias="receiptSignature")

    @field_validator("revenue", "total", "price", "quantity", mode="wrap")
    @classmethod
    def _unreadable_as_none(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return None

    @field_validator("product_id", "revenue_type", "receipt", "receipt_signature", mode="before")
    @classmethod
    def _stringify(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> "RevenueProperties":
        """Build the view from a properties mapping."""
        return cls.model_validate(properties)

    def has(self, field: str) -> bool:
        """Check whether a field was present in the source properties."""
        return field in self.model_fields_set

    @property
    def has_revenue(self) -> bool:
        """True when either revenue or total was supplied."""
        return self.has("revenue") or self.has("total")

    @property
    def amount(self) -> Optional[float]:
        """Revenue amount, preferring revenue over total. None when neither is readable."""
        if self.revenue is not None:
            return self.revenue
        return self.total


class Revenue(BaseModel):
    """
    Structured revenue record sent with logRevenueV2.

    Attributes:
        price: Unit price
        quantity: Number of units
        product_id: Product identifier (optional)
        revenue_type: Revenue classification, e.g. "purchase" or "refund"
        receipt: Store receipt (only set together with receipt_signature)
        receipt_signature: Store receipt signature
        event_properties: The full properties of the originating event
    """

    model_config = {"frozen": True}

    price: Optional[float] = None
    quantity: int = 1
    product_id: Optional[str] = None
    revenue_type: Optional[str] = None
    receipt: Optional[str] = None
    receipt_signature: Optional[str] = None
    event_properties: dict[str, Any] = Field(default_factory=dict)


# ==============================================================================
# Identify operations
# ==============================================================================


class IdentifyOperation(BaseModel):
    """A single user-property operation."""

    model_config = {"frozen": True}

    op: Literal["add", "set_once"]
    key: str
    value: Any = None


class IdentifyOperations(BaseModel):
    """Ordered batch of user-property operations applied in one identify call."""

    model_config = {"frozen": True}

    operations: tuple[IdentifyOperation, ...] = ()

    def add(self, key: str, value: Any) -> "IdentifyOperations":
        """Return a copy with an increment operation appended."""
        return self._append(IdentifyOperation(op="add", key=key, value=value))

    def set_once(self, key: str, value: Any) -> "IdentifyOperations":
        """Return a copy with a set-once operation appended."""
        return self._append(IdentifyOperation(op="set_once", key=key, value=value))

    def _append(self, operation: IdentifyOperation) -> "IdentifyOperations":
        return IdentifyOperations(operations=self.operations + (operation,))

    def __len__(self) -> int:
        return len(self.operations)


# ==============================================================================
# Vendor calls
# ==============================================================================


class VendorCall(BaseModel):
    """
    Record of one call issued on the vendor client.

    Attributes:
        method: VendorClient method name, e.g. "log_event"
        args: Positional arguments the method was called with
    """

    model_config = {"frozen": True}

    method: str
    args: tuple[Any, ...] = ()

    def to_dict(self) -> dict:
        """Serialize for JSON output."""
        return {
            "method": self.method,
            "args": [arg.model_dump() if isinstance(arg, BaseModel) else arg for arg in self.args],
        }
