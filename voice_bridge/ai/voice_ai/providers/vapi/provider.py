"""
Vapi provider implementation for Voice AI operations.

This module implements the VoiceAIProvider interface for Vapi.
"""

import json
from typing import Any

import httpx
import phonenumbers
from vapi import AsyncVapi
from vapi.core.api_error import ApiError
from vapi.types import (
    AssistantOverrides,
    CreateAssistantDto,
    CreateAssistantDtoModel_Openai,
    CreateCustomerDto,
    OpenAiMessage,
)
from vapi.types import (
    Call as VapiCall,
)

from voice_bridge.ai.voice_ai.base import VoiceAIError, VoiceAIProvider
from voice_bridge.ai.voice_ai.call_config import (
    CallConfigService,
    get_call_config_service,
)
from voice_bridge.ai.voice_ai.config import get_vapi_settings, get_voice_ai_settings
from voice_bridge.ai.voice_ai.constants import CallStatus, VoiceAIErrorCode
from voice_bridge.ai.voice_ai.constants import VoiceAIProvider as VoiceAIProviderEnum
from voice_bridge.ai.voice_ai.schemas import CallConfig, CallRequest, CallResponse
from voice_bridge.utils.logger import logger


class VapiProvider(VoiceAIProvider):
    """Vapi-specific implementation of Voice AI provider."""

    def __init__(
        self,
        http_client: httpx.AsyncClient | None = None,
        call_config: CallConfigService | None = None,
    ):
        """
        Initialize the Vapi provider with configuration.

        Args:
            http_client: Optional HTTP client for the SDK to send requests with
            call_config: Runtime call configuration; the global one when omitted
        """
        self._voice_ai_settings = get_voice_ai_settings()
        self._vapi_settings = get_vapi_settings()
        self.provider_name = VoiceAIProviderEnum.VAPI

        if not self._vapi_settings.api_key:
            raise ValueError("VAPI_API_KEY environment variable is required")

        self._call_config = call_config or get_call_config_service()

        # Owned here so shutdown can close it
        self._http_client = http_client or httpx.AsyncClient(
            timeout=self._voice_ai_settings.request_timeout
        )
        self._client = AsyncVapi(
            token=self._vapi_settings.api_key,
            base_url=self._vapi_settings.base_url,
            timeout=self._voice_ai_settings.request_timeout,
            httpx_client=self._http_client,
        )

    async def create_outbound_call(self, request: CallRequest) -> CallResponse:
        """
        Create an outbound call to the configured business via Vapi SDK.

        Args:
            request: The call request with message and caller context

        Returns:
            CallResponse: The call response with call_id and status

        Raises:
            VoiceAIError: If the call creation fails
        """
        config = self._call_config.get()
        destination = self._format_phone_number(self._vapi_settings.destination_number)
        logger.info(
            "[Vapi Provider] Creating outbound call",
            destination=destination,
            uses_assistant_id=bool(config.assistant_id.strip()),
        )

        try:
            call = await self._client.calls.create(
                phone_number_id=config.phone_number_id,
                customer=CreateCustomerDto(number=destination),
                **self._build_assistant_args(request, config, destination),
            )
        except ApiError as e:
            logger.error(
                "[Vapi Provider] Failed to create call",
                status_code=e.status_code,
                response_body=str(e.body),
            )
            # The SDK reports an undecodable success body as an ApiError too
            if e.status_code is not None and 200 <= e.status_code < 300:
                raise VoiceAIError(
                    f"Failed to create call: invalid JSON from Vapi: {e.body}",
                    error_code=VoiceAIErrorCode.INVALID_JSON,
                )
            raise VoiceAIError(
                f"Failed to create call: {e.status_code} - {e.body}",
                error_code=VoiceAIErrorCode.HTTP_ERROR,
            )
        except httpx.HTTPError as e:
            logger.error("[Vapi Provider] HTTP error creating call", error=str(e))
            raise VoiceAIError(
                f"Failed to create call: {str(e)}",
                error_code=VoiceAIErrorCode.HTTP_ERROR,
            )

        return self._parse_call_response(call)

    async def aclose(self) -> None:
        await self._http_client.aclose()

    def _format_phone_number(self, phone_number: str) -> str:
        """
        Format phone number to E.164 format.

        Defaults to US region if no country code is provided.

        Args:
            phone_number: Phone number string in any format

        Returns:
            str: E.164 formatted phone number (e.g., +15551234567)
        """
        try:
            parsed = phonenumbers.parse(phone_number, "US")
            if phonenumbers.is_valid_number(parsed):
                return phonenumbers.format_number(
                    parsed, phonenumbers.PhoneNumberFormat.E164
                )

            # Might carry its own country code
            parsed = phonenumbers.parse(phone_number, None)
            if phonenumbers.is_valid_number(parsed):
                return phonenumbers.format_number(
                    parsed, phonenumbers.PhoneNumberFormat.E164
                )

        except phonenumbers.NumberParseException:
            logger.warning(
                "[Vapi Provider] Could not parse phone number",
                phone_number=phone_number,
            )

        return phone_number

    def _first_message(self, request: CallRequest) -> str:
        user_name = request.user.name if request.user and request.user.name else None
        return (
            "Hello, this is an automated assistant calling on behalf of "
            f"{user_name or 'the user'}."
        )

    def _build_assistant_args(
        self, request: CallRequest, config: CallConfig, destination: str
    ) -> dict[str, Any]:
        """Pick a saved assistant with overrides, or an inline assistant."""
        if config.assistant_id.strip():
            return {
                "assistant_id": config.assistant_id,
                "assistant_overrides": self._build_assistant_overrides(
                    request, destination
                ),
            }
        return {"assistant": self._build_inline_assistant(request, config)}

    def _build_assistant_overrides(
        self, request: CallRequest, destination: str
    ) -> AssistantOverrides:
        """Build assistant overrides with the caller's template variables."""
        variable_values = self._extract_variable_values(request, destination)
        logger.info(
            "[Vapi Provider] Passing caller context to Vapi assistant",
            variable_values=variable_values,
        )
        return AssistantOverrides(
            variable_values=variable_values,
            first_message=self._first_message(request),
        )

    def _build_inline_assistant(
        self, request: CallRequest, config: CallConfig
    ) -> CreateAssistantDto:
        assistant = config.assistant
        return CreateAssistantDto(
            name=assistant.name,
            first_message=assistant.first_message or self._first_message(request),
            model=CreateAssistantDtoModel_Openai(
                model=assistant.model,
                messages=[
                    OpenAiMessage(
                        role="system",
                        content=(
                            f"{assistant.system_prompt}\n\n"
                            f"Context from user: {request.message}"
                        ),
                    )
                ],
            ),
        )

    def _extract_variable_values(
        self, request: CallRequest, destination: str
    ) -> dict[str, Any]:
        """Template variables the assistant prompt can reference."""
        user = request.user
        user_phone = user.phone_number if user and user.phone_number else ""
        return {
            "userName": (user.name if user and user.name else "Unknown"),
            "userPhoneE164": self._format_phone_number(user_phone) if user_phone else "",
            "businessName": self._vapi_settings.business_name,
            "businessPhone": destination,
            "omiText": request.message,
            "contextJson": json.dumps(request.context, default=str),
        }

    def _parse_call_response(self, call: VapiCall) -> CallResponse:
        """Parse Vapi SDK Call object into standard CallResponse format."""
        call_id = getattr(call, "id", None)
        if not call_id:
            raise VoiceAIError(
                "Failed to create call: Vapi response did not include a call id",
                error_code=VoiceAIErrorCode.INVALID_JSON,
            )

        return CallResponse(
            call_id=str(call_id),
            status=getattr(call, "status", None) or CallStatus.QUEUED.value,
            provider=VoiceAIProviderEnum.VAPI,
            created_at=getattr(call, "created_at", None),
            provider_data=call,
        )
