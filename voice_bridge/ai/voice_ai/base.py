"""
Abstract base classes for Voice AI providers.

This module defines the abstract interface that all Voice AI providers
must implement, ensuring consistent behavior across different voice AI systems.
"""

from abc import ABC, abstractmethod

from voice_bridge.ai.voice_ai.schemas import CallRequest, CallResponse


class VoiceAIProvider(ABC):
    """Abstract interface for Voice AI providers."""

    @abstractmethod
    async def create_outbound_call(self, request: CallRequest) -> CallResponse:
        """
        Create an outbound call to the configured destination.

        Args:
            request: The call request with message and caller context

        Returns:
            CallResponse: The call response with the provider-assigned call_id

        Raises:
            VoiceAIError: If the call creation fails
        """
        pass

    async def aclose(self) -> None:
        """Release any network resources held by the provider."""
        return None


class VoiceAIError(Exception):
    """Base exception for Voice AI-related errors."""

    def __init__(self, message: str, error_code: str | None = None):
        """
        Initialize Voice AI error.

        Args:
            message: Error message
            error_code: Optional provider-specific error code
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
