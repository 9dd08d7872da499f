"""
FastAPI dependencies for Voice AI integration.

This module provides dependency injection functions for Voice AI-related
FastAPI endpoints.
"""

from fastapi import Depends

from voice_bridge.ai.voice_ai.base import VoiceAIProvider
from voice_bridge.ai.voice_ai.call_config import CallConfigService, get_call_config_service
from voice_bridge.ai.voice_ai.config import VoiceAISettings, get_voice_ai_settings
from voice_bridge.ai.voice_ai.providers.factory import get_voice_ai_provider
from voice_bridge.ai.voice_ai.service import VoiceAIService
from voice_bridge.ai.voice_ai.webhook_service import WebhookIngestService
from voice_bridge.config import get_app_settings
from voice_bridge.db.calls.store import CallStore
from voice_bridge.db.dependencies import get_call_store
from voice_bridge.utils.logger import logger


def get_voice_ai_provider_dependency() -> VoiceAIProvider | None:
    """
    FastAPI dependency for getting the Voice AI provider instance.

    Built on first use. Returns None when the provider cannot be built
    (e.g. missing credentials) so the request still validates normally and
    call creation reports the provider as not configured.

    Returns:
        VoiceAIProvider | None: The configured Voice AI provider
    """
    try:
        return get_voice_ai_provider()
    except Exception as e:
        logger.error("Voice AI provider unavailable", error=str(e))
        return None


def get_call_config_dependency() -> CallConfigService:
    return get_call_config_service()


def get_voice_ai_settings_dependency() -> VoiceAISettings:
    return get_voice_ai_settings()


def get_voice_ai_service(
    voice_ai_provider: VoiceAIProvider | None = Depends(
        get_voice_ai_provider_dependency
    ),
    call_store: CallStore = Depends(get_call_store),
) -> VoiceAIService:
    """
    FastAPI dependency for getting the Voice AI service used to create calls.

    Args:
        voice_ai_provider: The Voice AI provider from dependency injection
        call_store: The call store from dependency injection

    Returns:
        VoiceAIService: The Voice AI service instance
    """
    return VoiceAIService(
        voice_ai_provider,
        call_store,
        status_url_prefix=f"{get_app_settings().api_prefix}/calls",
    )


def get_call_status_service(
    call_store: CallStore = Depends(get_call_store),
) -> VoiceAIService:
    """
    FastAPI dependency for read-only call operations.

    Does not build the provider, so status reads work without Vapi credentials.
    """
    return VoiceAIService(
        None, call_store, status_url_prefix=f"{get_app_settings().api_prefix}/calls"
    )


def get_webhook_ingest_service(
    call_store: CallStore = Depends(get_call_store),
) -> WebhookIngestService:
    return WebhookIngestService(call_store)
