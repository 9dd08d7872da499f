"""Configuration for the OMI wearable integration."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class OmiSettings(BaseSettings):
    """OMI app credentials and notification settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="OMI_"
    )

    app_id: str = Field(default="", description="OMI integration app ID")
    app_secret: str = Field(default="", description="OMI integration app secret")
    base_url: str = Field(default="https://api.omi.me", description="OMI API base URL")
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    reply_message: str = Field(
        default="Got it! Hooli is on it and will call for you shortly.",
        description="Notification pushed back for every inbound OMI message",
    )


_omi_settings: OmiSettings | None = None


def get_omi_settings() -> OmiSettings:
    global _omi_settings
    if _omi_settings is None:
        _omi_settings = OmiSettings()
    return _omi_settings


def set_omi_settings(settings: OmiSettings) -> None:
    global _omi_settings
    _omi_settings = settings
