"""
Voice AI-specific Pydantic schemas for request and response models.

Wire format is camelCase to match the web and mobile clients; Python code
uses snake_case field names throughout.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from voice_bridge.ai.voice_ai.constants import VoiceAIErrorCode
from voice_bridge.ai.voice_ai.constants import VoiceAIProvider as VoiceAIProviderEnum
from voice_bridge.db.calls.model import CallRecord


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CallerInfo(CamelModel):
    """The user on whose behalf the call is placed."""

    name: str | None = Field(None, description="Caller display name")
    phone_number: str | None = Field(None, description="Callback number")


class CallRequest(CamelModel):
    """Request model for creating an outbound call."""

    message: str = Field(..., description="What the assistant should ask or say")
    user: CallerInfo | None = Field(None, description="Requesting user")
    context: dict[str, Any] = Field(
        default_factory=dict, description="Free-form context for the assistant"
    )

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("message must not be empty")
        return value

    @field_validator("context", mode="before")
    @classmethod
    def context_null_is_empty(cls, value: Any) -> Any:
        return {} if value is None else value


class CallResponse(BaseModel):
    """Provider's answer to a call creation."""

    model_config = {"arbitrary_types_allowed": True}

    call_id: str = Field(..., description="Unique call identifier")
    status: str = Field(..., description="Provider status at creation")
    provider: VoiceAIProviderEnum = Field(..., description="Voice AI provider")
    created_at: datetime | None = Field(None, description="Call creation timestamp")
    provider_data: Any = Field(None, description="Provider-specific call object")


class VoiceAIErrorResponse(BaseModel):
    """Error response from Voice AI operations."""

    success: bool = Field(default=False, description="Operation success status")
    error: str = Field(..., description="Error message")
    error_code: VoiceAIErrorCode | None = Field(None, description="Error code")
    provider: VoiceAIProviderEnum | None = Field(None, description="Voice AI provider")


class CallCreatedResponse(CamelModel):
    """Returned to the client once the provider has accepted the call."""

    call_id: str = Field(..., description="Provider-assigned call identifier")
    status_url: str = Field(..., description="Relative URL to poll for call status")


class CallStatusResult(BaseModel):
    """Outcome of a status read, with or without a bounded wait."""

    record: CallRecord
    waited: bool = False
    timed_out: bool = False


class CallStatusResponse(CallRecord):
    """Call record snapshot plus how the read was served."""

    waited: bool = Field(False, description="Whether the server waited for the call to end")
    timed_out: bool = Field(False, description="Whether the wait gave up before the call ended")

    @classmethod
    def from_result(cls, result: CallStatusResult) -> "CallStatusResponse":
        return cls(
            **result.record.model_dump(),
            waited=result.waited,
            timed_out=result.timed_out,
        )


class CallSummaryResponse(CamelModel):
    summary: str | None = Field(None, description="End-of-call summary, if reported")


class WebhookAck(BaseModel):
    ok: bool = True


class AssistantConfig(CamelModel):
    """Inline assistant used when no Vapi assistant ID is configured."""

    name: str = Field(..., description="Assistant display name")
    first_message: str | None = Field(
        None, description="Greeting; a per-call greeting is used when blank"
    )
    model: str = Field(..., description="OpenAI model behind the assistant")
    system_prompt: str = Field(..., description="System prompt for every call")


class AssistantConfigUpdate(CamelModel):
    name: str | None = None
    first_message: str | None = None
    model: str | None = None
    system_prompt: str | None = None


class CallConfig(CamelModel):
    """Runtime call settings, editable from the web client."""

    phone_number_id: str = Field(..., description="Vapi phone number ID calls go out from")
    assistant_id: str = Field(
        ..., description="Vapi assistant ID; the inline assistant is used when blank"
    )
    assistant: AssistantConfig


class CallConfigUpdate(CamelModel):
    """Partial update; omitted fields keep their current value."""

    phone_number_id: str | None = None
    assistant_id: str | None = None
    assistant: AssistantConfigUpdate | None = None


class CallConfigUpdateResponse(CamelModel):
    success: bool = True
    message: str = "Configuration updated successfully"
    config: CallConfig


class SystemPromptUpdate(CamelModel):
    prompt: str = Field(..., description="New system prompt for the inline assistant")

    @field_validator("prompt")
    @classmethod
    def prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt must not be empty")
        return value


class SystemPromptResponse(CamelModel):
    success: bool = True
    message: str = "System prompt updated successfully"
    prompt: str
