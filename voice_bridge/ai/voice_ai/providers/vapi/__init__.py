"""
Vapi Voice AI provider implementation.
"""

from voice_bridge.ai.voice_ai.providers.vapi.events import WebhookPatch, parse_webhook
from voice_bridge.ai.voice_ai.providers.vapi.provider import VapiProvider

__all__ = ["VapiProvider", "WebhookPatch", "parse_webhook"]
