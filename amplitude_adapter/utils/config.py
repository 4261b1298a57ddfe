# ==============================================================================
# Application Configuration
# ==============================================================================
"""
Configuration management using pydantic-settings.

All configuration is loaded from environment variables, with support for
.env files via python-dotenv. Set-valued settings (traits to increment or
set once) are given as JSON arrays, e.g.
``AMPLITUDE_TRAITS_TO_INCREMENT='["logins"]'``.
"""

from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from amplitude_adapter.core.config import AmplitudeConfig
from amplitude_adapter.core.session import DEFAULT_IDLE_WINDOW_MS

# Load .env file before any settings are instantiated
load_dotenv()


class AmplitudeSettings(BaseSettings):
    """Amplitude destination settings."""

    model_config = SettingsConfigDict(env_prefix="AMPLITUDE_")

    api_key: Optional[str] = Field(default=None, description="Amplitude project API key")

    # Screen tracking policy
    track_all_pages_v2: bool = Field(
        default=False, description="Log every screen as 'Loaded a Screen'"
    )
    track_all_pages: bool = Field(default=False, description="Log every screen")
    track_categorized_pages: bool = Field(
        default=False, description="Log screens that have a category"
    )
    track_named_pages: bool = Field(default=False, description="Log screens that have a name")

    use_log_revenue_v2: bool = Field(
        default=False, description="Report revenue with logRevenueV2"
    )

    group_type_trait: Optional[str] = Field(
        default=None, description="Group trait holding the group type"
    )
    group_value_trait: Optional[str] = Field(
        default=None, description="Group trait holding the group value"
    )
    traits_to_increment: frozenset[str] = Field(
        default=frozenset(), description="User traits sent as increments"
    )
    traits_to_set_once: frozenset[str] = Field(
        default=frozenset(), description="User traits sent as set-once"
    )

    track_session_events: bool = Field(
        default=False, description="Let the SDK log session start/end events"
    )
    enable_location_listening: bool = Field(default=False, description="Record device location")
    use_advertising_id_for_device_id: bool = Field(
        default=False, description="Use the advertising id as device id"
    )

    def to_config(self) -> AmplitudeConfig:
        """Build the immutable translator configuration."""
        return AmplitudeConfig.model_validate(self.model_dump())


class SessionSettings(BaseSettings):
    """Session id middleware settings."""

    model_config = SettingsConfigDict(env_prefix="SESSION_")

    idle_timeout_ms: int = Field(
        default=DEFAULT_IDLE_WINDOW_MS,
        description="Session age in milliseconds after which a new session id is issued",
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        extra="ignore",
    )

    # Nested settings
    amplitude: AmplitudeSettings = Field(default_factory=AmplitudeSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)

    # General settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded once and cached for subsequent calls.
    """
    return Settings()
