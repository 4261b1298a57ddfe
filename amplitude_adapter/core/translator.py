# ==============================================================================
# Amplitude Translator - Event to Vendor Call Mapping
# ==============================================================================
"""
Translates analytics events into Amplitude client calls.

Per event type:
- identify: user id, user properties, increment/set-once operations, groups
- track: logEvent, followed by revenue reporting when the event carries revenue
- screen: one logEvent chosen by the screen tracking policy, or nothing
- group: a single setGroup
- alias: nothing

The translator keeps no state besides its configuration, so translating the
same event twice issues the same calls. Exceptions raised by the vendor client
propagate to the caller.
"""

import logging
from typing import TYPE_CHECKING, Any, Optional

from amplitude_adapter.base.destination import Destination
from amplitude_adapter.core.config import AmplitudeConfig
from amplitude_adapter.core.models import (
    AliasEvent,
    BaseEvent,
    GroupEvent,
    IdentifyEvent,
    IdentifyOperations,
    Revenue,
    RevenueProperties,
    ScreenEvent,
    TrackEvent,
    VendorCall,
)

if TYPE_CHECKING:
    from amplitude_adapter.base.client import VendorClient

logger = logging.getLogger(__name__)

AMPLITUDE_KEY = "Amplitude"
VIEWED_EVENT_FORMAT = "Viewed {} Screen"
LOADED_SCREEN_EVENT = "Loaded a Screen"
DEFAULT_GROUP_TYPE = "[Segment] Group"

_SCALAR_TYPES = (str, int, float, bool)


# ==============================================================================
# Option helpers
# ==============================================================================


def _group_value(value: Any) -> Any:
    if isinstance(value, _SCALAR_TYPES):
        return value
    if isinstance(value, (list, tuple)):
        for item in value:
            if not isinstance(item, _SCALAR_TYPES):
                raise ValueError(f"unsupported list item of type {type(item).__name__}")
        return list(value)
    raise ValueError(f"unsupported value of type {type(value).__name__}")


def extract_groups(event: BaseEvent, log: Optional[logging.Logger] = None) -> Optional[dict]:
    """
    Read the groups bag from an event's Amplitude options.

    Each group value must be a scalar or a list of scalars. Entries that are
    neither are logged and dropped; the remaining entries are kept.

    Args:
        event: Any analytics event
        log: Optional logger override

    Returns:
        Mapping of group type to group value, or None when there are no groups
    """
    groups = event.integration_options(AMPLITUDE_KEY).get("groups")
    if not isinstance(groups, dict):
        return None

    result = {}
    for group_type, value in groups.items():
        try:
            result[group_type] = _group_value(value)
        except ValueError as e:
            (log or logger).error("Unable to read group %r: %s", group_type, e)
    return result or None


def _trait_value(traits: dict[str, Any], key: Optional[str]) -> Any:
    """Trait value, or None when the key is unset, missing, None or empty."""
    if not key:
        return None
    value = traits.get(key)
    if value is None or value == "":
        return None
    return value


def is_out_of_session(event: BaseEvent) -> bool:
    """True only when the outOfSession option is the boolean True."""
    value = event.integration_options(AMPLITUDE_KEY).get("outOfSession")
    return isinstance(value, bool) and value


def build_revenue(fields: RevenueProperties, properties: dict[str, Any]) -> Revenue:
    """
    Build a logRevenueV2 record.

    With a readable price, price and quantity (default 1) are used as given.
    Without one, the amount is reported as a single unit at that price and any
    supplied quantity is ignored. The receipt is attached only when both the
    receipt and its signature are present.

    Args:
        fields: Validated revenue view of the properties
        properties: The full event properties

    Returns:
        Revenue record
    """
    if fields.price is not None:
        price = fields.price
        quantity = fields.quantity if fields.quantity is not None else 1
    else:
        price = fields.amount
        quantity = 1

    values: dict[str, Any] = {
        "price": price,
        "quantity": quantity,
        "event_properties": dict(properties),
    }
    if fields.has("product_id"):
        values["product_id"] = fields.product_id
    if fields.has("revenue_type"):
        values["revenue_type"] = fields.revenue_type
    if fields.has("receipt") and fields.has("receipt_signature"):
        values["receipt"] = fields.receipt
        values["receipt_signature"] = fields.receipt_signature
    return Revenue(**values)


# ==============================================================================
# Translator
# ==============================================================================


class AmplitudeTranslator(Destination):
    """
    Destination that forwards events to an Amplitude client.

    The client is injected at construction; the translator never creates or
    looks one up. Every public method returns the VendorCall records it
    issued, in order.
    """

    key = AMPLITUDE_KEY

    def __init__(
        self,
        client: "VendorClient",
        config: Optional[AmplitudeConfig] = None,
        log: Optional[logging.Logger] = None,
    ):
        """
        Initialize the translator.

        Args:
            client: Amplitude client receiving the calls
            config: Adapter configuration. Defaults to all features off.
            log: Optional logger override. Defaults to this module's logger.
        """
        self._client = client
        self._config = config or AmplitudeConfig()
        self._log = log or logger

    @property
    def client(self) -> "VendorClient":
        return self._client

    @property
    def config(self) -> AmplitudeConfig:
        return self._config

    def _call(self, calls: list[VendorCall], method: str, *args: Any) -> None:
        getattr(self._client, method)(*args)
        calls.append(VendorCall(method=method, args=args))
        self._log.debug("Amplitude.%s(%s)", method, ", ".join(repr(arg) for arg in args))

    # ==========================================================================
    # Lifecycle
    # ==========================================================================

    def setup(self) -> list[VendorCall]:
        """Initialize the vendor SDK from the configuration."""
        calls: list[VendorCall] = []
        self._call(calls, "initialize", self._config.api_key)
        self._call(calls, "enable_foreground_tracking")
        self._call(calls, "track_session_events", self._config.track_session_events)
        if self._config.enable_location_listening:
            self._call(calls, "enable_location_listening")
        if self._config.use_advertising_id_for_device_id:
            self._call(calls, "use_advertising_id_for_device_id")
        return calls

    def flush(self) -> list[VendorCall]:
        calls: list[VendorCall] = []
        self._call(calls, "upload_events")
        return calls

    def reset(self) -> list[VendorCall]:
        calls: list[VendorCall] = []
        self._call(calls, "set_user_id", None)
        self._call(calls, "regenerate_device_id")
        return calls

    # ==========================================================================
    # Events
    # ==========================================================================

    def handle(self, event: BaseEvent) -> list[VendorCall]:
        """Translate one event into vendor calls."""
        match event:
            case IdentifyEvent():
                return self.identify(event)
            case TrackEvent():
                return self.track(event)
            case ScreenEvent():
                return self.screen(event)
            case GroupEvent():
                return self.group(event)
            case AliasEvent():
                return self.alias(event)
            case _:
                self._log.debug("Ignoring unsupported event %s", type(event).__name__)
                return []

    def identify(self, event: IdentifyEvent) -> list[VendorCall]:
        calls: list[VendorCall] = []
        increment = self._config.traits_to_increment
        set_once = self._config.traits_to_set_once

        if event.user_id is not None:
            self._call(calls, "set_user_id", event.user_id)

        user_properties = {
            trait: value
            for trait, value in event.traits.items()
            if trait not in increment and trait not in set_once
        }
        self._call(calls, "set_user_properties", user_properties)

        operations = IdentifyOperations()
        for trait, value in event.traits.items():
            if trait in increment:
                operations = operations.add(trait, value)
            if trait in set_once:
                operations = operations.set_once(trait, value)
        if len(operations):
            self._call(calls, "apply_identify_operations", operations)

        groups = extract_groups(event, self._log) or {}
        for group_type, group_value in groups.items():
            self._call(calls, "set_group", group_type, group_value)
        return calls

    def track(self, event: TrackEvent) -> list[VendorCall]:
        calls: list[VendorCall] = []
        self._log_event(calls, event.event, event.properties, event)
        self._log_revenue(calls, event.properties)
        return calls

    def screen(self, event: ScreenEvent) -> list[VendorCall]:
        calls: list[VendorCall] = []
        config = self._config
        if config.track_all_pages_v2:
            properties = dict(event.properties)
            if event.name is not None:
                properties["name"] = event.name
            self._log_event(calls, LOADED_SCREEN_EVENT, properties, event)
        elif config.track_all_pages:
            # Unnamed, uncategorized screens have nothing to put in the format
            if event.event_name:
                name = VIEWED_EVENT_FORMAT.format(event.event_name)
            else:
                name = LOADED_SCREEN_EVENT
            self._log_event(calls, name, event.properties, event)
        elif config.track_categorized_pages and event.category:
            self._log_event(
                calls, VIEWED_EVENT_FORMAT.format(event.category), event.properties, event
            )
        elif config.track_named_pages and event.name:
            self._log_event(calls, VIEWED_EVENT_FORMAT.format(event.name), event.properties, event)
        return calls

    def group(self, event: GroupEvent) -> list[VendorCall]:
        calls: list[VendorCall] = []
        traits = event.traits or {}
        type_trait = self._config.group_type_trait
        value_trait = self._config.group_value_trait

        group_type = _trait_value(traits, type_trait)
        if group_type is None:
            group_type = _trait_value(traits, "name")
        if group_type is None:
            group_type = DEFAULT_GROUP_TYPE

        group_value = _trait_value(traits, value_trait)
        if group_value is None:
            group_value = event.group_id

        self._call(calls, "set_group", group_type, group_value)
        return calls

    def alias(self, event: AliasEvent) -> list[VendorCall]:
        # Amplitude has no alias equivalent on the client API
        return []

    # ==========================================================================
    # Helpers
    # ==========================================================================

    def _log_event(
        self,
        calls: list[VendorCall],
        name: str,
        properties: dict[str, Any],
        event: BaseEvent,
    ) -> None:
        self._call(
            calls,
            "log_event",
            name,
            dict(properties),
            extract_groups(event, self._log),
            is_out_of_session(event),
        )

    def _log_revenue(self, calls: list[VendorCall], properties: dict[str, Any]) -> None:
        # Key presence, not truthiness: revenue may be zero or negative
        if "revenue" not in properties and "total" not in properties:
            return

        fields = RevenueProperties.from_properties(properties)
        if fields.amount is None:
            self._log.error(
                "Unable to read revenue amount %r, skipping revenue",
                properties.get("revenue", properties.get("total")),
            )
            return

        if self._config.use_log_revenue_v2:
            if fields.has("price") and fields.price is None:
                self._log.warning(
                    "Unable to read price %r, reporting the amount as one unit",
                    properties["price"],
                )
            self._call(calls, "log_revenue_v2", build_revenue(fields, properties))
            return

        quantity = fields.quantity if fields.quantity is not None else 0
        self._call(
            calls,
            "log_revenue",
            fields.product_id,
            quantity,
            fields.amount,
            fields.receipt,
            fields.receipt_signature,
        )
