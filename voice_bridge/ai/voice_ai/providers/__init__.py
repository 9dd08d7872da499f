"""
Voice AI provider implementations.

This package contains specific implementations for different Voice AI systems.
"""

from voice_bridge.ai.voice_ai.providers.factory import (
    create_voice_ai_provider,
    get_voice_ai_provider,
    set_voice_ai_provider,
)
from voice_bridge.ai.voice_ai.providers.vapi import VapiProvider

__all__ = [
    "VapiProvider",
    "create_voice_ai_provider",
    "get_voice_ai_provider",
    "set_voice_ai_provider",
]
