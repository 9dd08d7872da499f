"""
Configuration management for the Voice AI integration package.

This module handles environment variable configuration and validation
for Voice AI integrations using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from voice_bridge.ai.voice_ai.constants import VoiceAIProvider
from voice_bridge.utils.logger import logger

DEFAULT_SYSTEM_PROMPT = (
    "You are a friendly, efficient voice assistant calling a business on behalf of "
    "a customer. State the customer's request clearly, answer the business's "
    "questions from the context you were given, confirm any details they agree to, "
    "and end the call politely once the request is handled."
)


class VoiceAISettings(BaseSettings):
    """General configuration for Voice AI integrations."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="VOICE_AI_"
    )

    provider: VoiceAIProvider = Field(
        default=VoiceAIProvider.VAPI, description="Voice AI provider to use"
    )
    request_timeout: int = Field(
        default=30, description="HTTP request timeout in seconds"
    )

    # Bounded wait on call status reads
    poll_interval_seconds: float = Field(
        default=0.8, gt=0, description="Interval between store re-checks while waiting"
    )
    max_wait_seconds: float = Field(
        default=60.0, ge=0, description="Upper bound on any client-requested wait"
    )
    default_wait_seconds: float = Field(
        default=30.0,
        ge=0,
        description="Wait used when a client asks to wait without a timeout",
    )


class VapiSettings(BaseSettings):
    """Vapi-specific configuration."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="VAPI_"
    )

    api_key: str = Field(
        default="", description="Vapi API key; calls cannot be placed without it"
    )
    base_url: str = Field(
        default="https://api.vapi.ai", description="Vapi API base URL"
    )
    phone_number_id: str = Field(
        default="", description="Vapi phone number ID for outbound calls"
    )
    assistant_id: str = Field(
        default="",
        description="Vapi assistant ID; an inline assistant is sent when blank",
    )

    # The business being called is fixed per deployment
    destination_number: str = Field(
        default="+17176156058", description="Business phone number to call"
    )
    business_name: str = Field(
        default="Hooli", description="Business name passed to the assistant"
    )
    inline_model: str = Field(
        default="gpt-4o-mini",
        description="Model for the inline assistant used when no assistant ID is set",
    )
    system_prompt: str = Field(
        default=DEFAULT_SYSTEM_PROMPT,
        description="Initial system prompt for the inline assistant",
    )


_voice_ai_settings: VoiceAISettings | None = None
_vapi_settings: VapiSettings | None = None


def get_voice_ai_settings() -> VoiceAISettings:
    """
    Get the global Voice AI settings instance.

    Returns:
        VoiceAISettings: The global settings instance
    """
    global _voice_ai_settings
    if _voice_ai_settings is None:
        _voice_ai_settings = VoiceAISettings()
        logger.info("VoiceAISettings loaded", provider=_voice_ai_settings.provider)
    return _voice_ai_settings


def get_vapi_settings() -> VapiSettings:
    """
    Get the global Vapi settings instance.

    Returns:
        VapiSettings: The global Vapi settings instance
    """
    global _vapi_settings
    if _vapi_settings is None:
        _vapi_settings = VapiSettings()
        logger.info("VapiSettings loaded", phone_number_id=_vapi_settings.phone_number_id)
        if _vapi_settings.assistant_id:
            logger.info("Vapi Assistant ID", assistant_id=_vapi_settings.assistant_id)
    return _vapi_settings


def set_voice_ai_settings(settings: VoiceAISettings) -> None:
    """
    Set the global Voice AI settings instance.

    Args:
        settings: The settings to set
    """
    global _voice_ai_settings
    _voice_ai_settings = settings


def set_vapi_settings(settings: VapiSettings) -> None:
    """
    Set the global Vapi settings instance.

    Args:
        settings: The settings to set
    """
    global _vapi_settings
    _vapi_settings = settings
