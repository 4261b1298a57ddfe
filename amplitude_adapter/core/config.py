# ==============================================================================
# Adapter Configuration
# ==============================================================================
"""
Immutable per-instance configuration for the Amplitude translator.

The analytics pipeline delivers destination settings as a flat key/value bag
using the vendor's camelCase names (``trackAllPages``, ``useLogRevenueV2``,
``traitsToIncrement``, ...). AmplitudeConfig reads the keys it knows, applies
defaults for the missing ones and ignores the rest.
"""

from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class AmplitudeConfig(BaseModel):
    """Translator configuration, frozen after construction."""

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    api_key: Optional[str] = Field(default=None, alias="apiKey")

    # Screen tracking policy
    track_all_pages_v2: bool = Field(default=False, alias="trackAllPagesV2")
    track_all_pages: bool = Field(default=False, alias="trackAllPages")
    track_categorized_pages: bool = Field(default=False, alias="trackCategorizedPages")
    track_named_pages: bool = Field(default=False, alias="trackNamedPages")

    # Revenue
    use_log_revenue_v2: bool = Field(
        default=False,
        validation_alias=AliasChoices("useLogRevenueV2", "useRevenueV2", "use_log_revenue_v2"),
    )

    # Group and user property mapping
    group_type_trait: Optional[str] = Field(default=None, alias="groupTypeTrait")
    group_value_trait: Optional[str] = Field(default=None, alias="groupValueTrait")
    traits_to_increment: frozenset[str] = Field(default=frozenset(), alias="traitsToIncrement")
    traits_to_set_once: frozenset[str] = Field(default=frozenset(), alias="traitsToSetOnce")

    # SDK lifecycle
    track_session_events: bool = Field(default=False, alias="trackSessionEvents")
    enable_location_listening: bool = Field(default=False, alias="enableLocationListening")
    use_advertising_id_for_device_id: bool = Field(
        default=False, alias="useAdvertisingIdForDeviceId"
    )

    @field_validator("group_type_trait", "group_value_trait", mode="before")
    @classmethod
    def _blank_is_unset(cls, value: Any) -> Any:
        # The settings UI sends "" for an untouched text field
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("traits_to_increment", "traits_to_set_once", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        if value is None:
            return frozenset()
        return value

    @classmethod
    def from_settings(cls, settings: dict[str, Any]) -> "AmplitudeConfig":
        """
        Build a config from a flat settings bag.

        Args:
            settings: Destination settings as delivered by the pipeline

        Returns:
            Frozen AmplitudeConfig
        """
        return cls.model_validate(settings)
