"""
Voice AI service layer for business logic.

This module sits between the FastAPI routes and the Voice AI provider and
call store: it creates calls, seeds their records, and serves status reads,
including a bounded wait for a call to end.
"""

import asyncio
import math
import time
from collections.abc import Awaitable, Callable
from urllib.parse import quote

from voice_bridge.ai.voice_ai.base import VoiceAIError, VoiceAIProvider
from voice_bridge.ai.voice_ai.constants import CallStatus, VoiceAIErrorCode
from voice_bridge.ai.voice_ai.schemas import (
    CallCreatedResponse,
    CallRequest,
    CallStatusResult,
    VoiceAIErrorResponse,
)
from voice_bridge.db.calls.model import CallLookup, CallRecord
from voice_bridge.db.calls.store import CallStore
from voice_bridge.utils.logger import logger

DisconnectCheck = Callable[[], Awaitable[bool]]


class VoiceAIService:
    """Service class for Voice AI operations."""

    def __init__(
        self,
        voice_ai_provider: VoiceAIProvider | None,
        call_store: CallStore,
        status_url_prefix: str = "/api/calls",
    ):
        """
        Initialize the Voice AI service.

        Args:
            voice_ai_provider: The Voice AI provider; only needed to create calls
            call_store: Store holding call records
            status_url_prefix: Path prefix of the status endpoint
        """
        self.voice_ai_provider = voice_ai_provider
        self.call_store = call_store
        self.status_url_prefix = status_url_prefix.rstrip("/")

    def status_url(self, call_id: str) -> str:
        return f"{self.status_url_prefix}/{quote(call_id, safe='')}"

    async def create_call(
        self, request: CallRequest
    ) -> CallCreatedResponse | VoiceAIErrorResponse:
        """
        Place an outbound call and seed its record.

        The record is only written once the provider has assigned an id.
        No retry is attempted on failure.

        Args:
            request: The validated call request

        Returns:
            CallCreatedResponse or VoiceAIErrorResponse: The result of the operation
        """
        provider_name = getattr(self.voice_ai_provider, "provider_name", None)
        try:
            if self.voice_ai_provider is None:
                raise VoiceAIError(
                    "Voice AI provider is not configured",
                    error_code=VoiceAIErrorCode.NOT_CONFIGURED,
                )
            result = await self.voice_ai_provider.create_outbound_call(request)
        except VoiceAIError as e:
            logger.error("Voice AI error creating call", error_message=e.message)
            return VoiceAIErrorResponse(
                error=e.message, error_code=e.error_code, provider=provider_name
            )
        except Exception as e:
            logger.error("Unexpected error creating call", error=str(e))
            return VoiceAIErrorResponse(
                error=f"Failed to create call: {str(e)}",
                error_code=VoiceAIErrorCode.UNKNOWN_ERROR,
                provider=provider_name,
            )

        lookup = None
        if request.user is not None:
            lookup = CallLookup(
                name=request.user.name, phone_number=request.user.phone_number
            )
        self.call_store.upsert(
            CallRecord(
                call_id=result.call_id,
                status=CallStatus.QUEUED.value,
                lookup=lookup,
            )
        )
        logger.info("Successfully created call", call_id=result.call_id)

        return CallCreatedResponse(
            call_id=result.call_id, status_url=self.status_url(result.call_id)
        )

    def get_call(self, call_id: str) -> CallRecord | None:
        return self.call_store.get(call_id)

    async def get_call_status(
        self,
        call_id: str,
        wait_for_end: bool = False,
        timeout: float = 0.0,
        poll_interval: float = 0.8,
        max_wait: float = 60.0,
        is_disconnected: DisconnectCheck | None = None,
    ) -> CallStatusResult | None:
        """
        Read a call record, optionally waiting for the call to end.

        The wait re-reads the store every ``poll_interval`` seconds until the
        status is ``ended``, the record disappears, the client disconnects,
        or ``timeout`` (clamped to ``[0, max_wait]``, with NaN and infinity
        read as no wait) elapses. No lock is
        held while sleeping.

        Args:
            call_id: The call to read
            wait_for_end: Whether the client asked to wait for the call to end
            timeout: Requested wait in seconds
            poll_interval: Seconds between re-checks
            max_wait: Upper bound on ``timeout``
            is_disconnected: Async check for a gone client

        Returns:
            CallStatusResult, or None if the call is unknown
        """
        record = self.call_store.get(call_id)
        if record is None:
            return None

        if not math.isfinite(timeout):
            timeout = 0.0
        timeout = min(max(timeout, 0.0), max_wait)
        if not wait_for_end or timeout <= 0:
            return CallStatusResult(record=record)

        deadline = time.monotonic() + timeout
        while True:
            if CallStatus.is_call_ended(record.status):
                logger.info("Call ended while waiting", call_id=call_id)
                return CallStatusResult(record=record, waited=True)

            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.info("Wait for call end timed out", call_id=call_id, timeout=timeout)
                return CallStatusResult(record=record, waited=True, timed_out=True)

            if is_disconnected is not None and await is_disconnected():
                logger.info("Client disconnected during wait", call_id=call_id)
                return CallStatusResult(record=record, waited=True)

            await asyncio.sleep(min(poll_interval, remaining))

            latest = self.call_store.get(call_id)
            if latest is None:
                return None
            record = latest
