"""Tests for the Vapi provider against a mocked Vapi API."""

import json

import httpx
import pytest

from voice_bridge.ai.voice_ai.base import VoiceAIError
from voice_bridge.ai.voice_ai.call_config import CallConfigService, default_call_config
from voice_bridge.ai.voice_ai.config import (
    VapiSettings,
    VoiceAISettings,
    get_vapi_settings,
    set_vapi_settings,
    set_voice_ai_settings,
)
from voice_bridge.ai.voice_ai.constants import VoiceAIErrorCode, VoiceAIProvider
from voice_bridge.ai.voice_ai.providers.vapi.provider import VapiProvider
from voice_bridge.ai.voice_ai.schemas import CallConfigUpdate, CallRequest

CALL_BODY = {
    "id": "call-1",
    "orgId": "org-1",
    "status": "queued",
    "createdAt": "2024-05-01T12:00:00.000Z",
    "updatedAt": "2024-05-01T12:00:00.000Z",
}


def _settings(**overrides):
    values = {
        "api_key": "test-key",
        "phone_number_id": "pn-1",
        "assistant_id": "asst-1",
        "destination_number": "6502530000",
        "business_name": "Hooli",
        "system_prompt": "Be brief.",
    }
    values.update(overrides)
    return VapiSettings(**values)


@pytest.fixture(autouse=True)
def settings():
    set_voice_ai_settings(VoiceAISettings())
    set_vapi_settings(_settings())
    yield
    set_vapi_settings(None)
    set_voice_ai_settings(None)


@pytest.fixture
def requests_seen():
    return []


def _provider(requests_seen, status_code=201, body=None, content=None, call_config=None):
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        if content is not None:
            return httpx.Response(status_code, content=content)
        return httpx.Response(status_code, json=body if body is not None else CALL_BODY)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return VapiProvider(
        http_client=client,
        call_config=call_config or CallConfigService(default_call_config(get_vapi_settings())),
    )


def _sent_payload(requests_seen):
    return json.loads(requests_seen[0].content)


@pytest.fixture
def call_request():
    return CallRequest(
        message="Ask if they are open on Sunday",
        user={"name": "Ada", "phoneNumber": "(650) 253-0001"},
        context={"source": "omi"},
    )


class TestCreateOutboundCall:
    @pytest.mark.asyncio
    async def test_assistant_overrides_payload(self, requests_seen, call_request):
        provider = _provider(requests_seen)

        result = await provider.create_outbound_call(call_request)

        assert result.call_id == "call-1"
        assert result.status == "queued"
        assert result.provider == VoiceAIProvider.VAPI

        request = requests_seen[0]
        assert request.method == "POST"
        assert request.url == "https://api.vapi.ai/call"
        assert request.headers["authorization"] == "Bearer test-key"

        payload = _sent_payload(requests_seen)
        assert payload["phoneNumberId"] == "pn-1"
        assert payload["customer"]["number"] == "+16502530000"
        assert payload["assistantId"] == "asst-1"
        assert "assistant" not in payload

        overrides = payload["assistantOverrides"]
        assert overrides["firstMessage"] == (
            "Hello, this is an automated assistant calling on behalf of Ada."
        )
        variables = overrides["variableValues"]
        assert variables["userName"] == "Ada"
        assert variables["userPhoneE164"] == "+16502530001"
        assert variables["businessName"] == "Hooli"
        assert variables["businessPhone"] == "+16502530000"
        assert variables["omiText"] == "Ask if they are open on Sunday"
        assert json.loads(variables["contextJson"]) == {"source": "omi"}

    @pytest.mark.asyncio
    async def test_inline_assistant_without_assistant_id(self, requests_seen):
        set_vapi_settings(_settings(assistant_id=""))
        provider = _provider(requests_seen, body={**CALL_BODY, "status": None})

        result = await provider.create_outbound_call(CallRequest(message="Check hours"))

        assert result.status == "queued"
        payload = _sent_payload(requests_seen)
        assert "assistantId" not in payload
        assistant = payload["assistant"]
        assert assistant["name"] == "Hooli Support Caller"
        assert assistant["firstMessage"].endswith("on behalf of the user.")
        assert assistant["model"]["provider"] == "openai"
        assert assistant["model"]["model"] == "gpt-4o-mini"
        assert assistant["model"]["messages"] == [
            {"role": "system", "content": "Be brief.\n\nContext from user: Check hours"}
        ]

    @pytest.mark.asyncio
    async def test_runtime_config_changes_next_call(self, requests_seen):
        call_config = CallConfigService(default_call_config(get_vapi_settings()))
        provider = _provider(requests_seen, call_config=call_config)

        call_config.update(
            CallConfigUpdate(
                phone_number_id="pn-2",
                assistant_id="",
                assistant={"firstMessage": "Hi from Hooli."},
            )
        )
        call_config.set_system_prompt("Only ask about opening hours.")
        await provider.create_outbound_call(CallRequest(message="Sunday?"))

        payload = _sent_payload(requests_seen)
        assert payload["phoneNumberId"] == "pn-2"
        assert "assistantId" not in payload
        assert payload["assistant"]["firstMessage"] == "Hi from Hooli."
        assert payload["assistant"]["model"]["messages"][0]["content"] == (
            "Only ask about opening hours.\n\nContext from user: Sunday?"
        )

    @pytest.mark.asyncio
    async def test_missing_user_uses_placeholders(self, requests_seen):
        provider = _provider(requests_seen)

        await provider.create_outbound_call(CallRequest(message="Hi"))

        variables = _sent_payload(requests_seen)["assistantOverrides"]["variableValues"]
        assert variables["userName"] == "Unknown"
        assert variables["userPhoneE164"] == ""
        assert variables["contextJson"] == "{}"

    @pytest.mark.asyncio
    async def test_rejected_call_raises_http_error(self, requests_seen, call_request):
        provider = _provider(requests_seen, status_code=400, body={"message": "bad number"})

        with pytest.raises(VoiceAIError) as exc_info:
            await provider.create_outbound_call(call_request)

        assert exc_info.value.error_code == VoiceAIErrorCode.HTTP_ERROR
        assert exc_info.value.message.startswith("Failed to create call: 400")

    @pytest.mark.asyncio
    async def test_response_without_id_is_invalid(self, requests_seen, call_request):
        provider = _provider(requests_seen, body={"status": "queued"})

        with pytest.raises(VoiceAIError) as exc_info:
            await provider.create_outbound_call(call_request)

        assert exc_info.value.error_code == VoiceAIErrorCode.INVALID_JSON

    @pytest.mark.asyncio
    async def test_non_json_response_is_invalid(self, requests_seen, call_request):
        provider = _provider(requests_seen, content=b"<html>oops</html>")

        with pytest.raises(VoiceAIError) as exc_info:
            await provider.create_outbound_call(call_request)

        assert exc_info.value.error_code == VoiceAIErrorCode.INVALID_JSON

    @pytest.mark.asyncio
    async def test_transport_failure_raises_http_error(self, call_request):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        provider = VapiProvider(
            http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
            call_config=CallConfigService(default_call_config(get_vapi_settings())),
        )

        with pytest.raises(VoiceAIError) as exc_info:
            await provider.create_outbound_call(call_request)

        assert exc_info.value.error_code == VoiceAIErrorCode.HTTP_ERROR


@pytest.mark.asyncio
async def test_aclose_closes_http_client(requests_seen):
    provider = _provider(requests_seen)

    await provider.aclose()

    assert provider._http_client.is_closed


def test_requires_api_key():
    set_vapi_settings(_settings(api_key=""))

    with pytest.raises(ValueError):
        VapiProvider()


def test_format_phone_number_keeps_unparseable_input(requests_seen):
    provider = _provider(requests_seen)

    assert provider._format_phone_number("+44 20 7031 3000") == "+442070313000"
    assert provider._format_phone_number("not a number") == "not a number"
