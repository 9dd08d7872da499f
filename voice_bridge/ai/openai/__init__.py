"""OpenAI module for AI operations."""

from voice_bridge.ai.openai.config import OpenAISettings, get_openai_settings
from voice_bridge.ai.openai.exceptions import (
    OpenAIAuthenticationError,
    OpenAIContentGenerationError,
    OpenAIError,
)
from voice_bridge.ai.openai.summarizer import OpenAISummarizer

__all__ = [
    "OpenAISettings",
    "get_openai_settings",
    "OpenAIError",
    "OpenAIAuthenticationError",
    "OpenAIContentGenerationError",
    "OpenAISummarizer",
]
