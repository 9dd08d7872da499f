"""
Voice AI router with call management endpoints.

This module contains the API endpoints for placing calls, reading call
state, and receiving provider webhooks.
"""

from http import HTTPStatus

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response

from voice_bridge.ai.voice_ai.call_config import CallConfigService
from voice_bridge.ai.voice_ai.config import VoiceAISettings
from voice_bridge.ai.voice_ai.constants import VoiceAIErrorCode
from voice_bridge.ai.voice_ai.dependencies import (
    get_call_config_dependency,
    get_call_status_service,
    get_voice_ai_service,
    get_voice_ai_settings_dependency,
    get_webhook_ingest_service,
)
from voice_bridge.ai.voice_ai.schemas import (
    CallConfig,
    CallConfigUpdate,
    CallConfigUpdateResponse,
    CallCreatedResponse,
    CallRequest,
    CallStatusResponse,
    CallSummaryResponse,
    SystemPromptResponse,
    SystemPromptUpdate,
    VoiceAIErrorResponse,
    WebhookAck,
)
from voice_bridge.ai.voice_ai.service import VoiceAIService
from voice_bridge.ai.voice_ai.webhook_service import WebhookIngestService
from voice_bridge.utils.logger import logger

router = APIRouter(prefix="/calls", tags=["Calls"])
webhook_router = APIRouter(prefix="/webhooks", tags=["Webhooks"])
config_router = APIRouter(prefix="/config", tags=["Config"])

WAIT_FOR_END_VALUES = {"ended", "true", "1", "yes"}


@router.post("", response_model=CallCreatedResponse, status_code=HTTPStatus.CREATED)
async def create_call(
    payload: CallRequest,
    response: Response,
    voice_ai_service: VoiceAIService = Depends(get_voice_ai_service),
) -> CallCreatedResponse:
    """
    Place an outbound call to the configured business.

    Args:
        payload: The call request; ``message`` is required
        response: Outgoing response, used to set the Location header
        voice_ai_service: The Voice AI service instance from dependency injection

    Returns:
        CallCreatedResponse: The call id and its status URL

    Raises:
        HTTPException: If the provider is not configured or rejects the call
    """
    result = await voice_ai_service.create_call(payload)

    if isinstance(result, VoiceAIErrorResponse):
        if result.error_code == VoiceAIErrorCode.NOT_CONFIGURED:
            raise HTTPException(
                status_code=HTTPStatus.SERVICE_UNAVAILABLE, detail=result.error
            )
        raise HTTPException(
            status_code=HTTPStatus.BAD_GATEWAY,
            detail=result.error,
        )

    response.headers["Location"] = result.status_url
    return result


@router.get("/{call_id}", response_model=CallStatusResponse)
async def get_call_status(
    call_id: str,
    request: Request,
    wait: str | None = Query(None, description="'ended' to wait for the call to end"),
    timeout: float | None = Query(
        None, allow_inf_nan=False, description="Seconds to wait, at most 60"
    ),
    voice_ai_service: VoiceAIService = Depends(get_call_status_service),
    settings: VoiceAISettings = Depends(get_voice_ai_settings_dependency),
) -> CallStatusResponse:
    """
    Get the current state of a call, optionally waiting for it to end.

    Args:
        call_id: The unique identifier for the call
        request: Incoming request, watched for client disconnects
        wait: Opt into the bounded wait with ``ended``
        timeout: Requested wait in seconds
        voice_ai_service: The Voice AI service instance from dependency injection
        settings: Wait tuning

    Returns:
        CallStatusResponse: The call record and whether/how the read waited

    Raises:
        HTTPException: If the call is not known
    """
    wait_for_end = (wait or "").strip().lower() in WAIT_FOR_END_VALUES
    if timeout is None:
        timeout = settings.default_wait_seconds if wait_for_end else 0.0

    result = await voice_ai_service.get_call_status(
        call_id,
        wait_for_end=wait_for_end,
        timeout=timeout,
        poll_interval=settings.poll_interval_seconds,
        max_wait=settings.max_wait_seconds,
        is_disconnected=request.is_disconnected,
    )
    if result is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Not found")

    return CallStatusResponse.from_result(result)


@router.get("/{call_id}/summary", response_model=CallSummaryResponse)
async def get_call_summary(
    call_id: str,
    voice_ai_service: VoiceAIService = Depends(get_call_status_service),
) -> CallSummaryResponse:
    """Get only the end-of-call summary for a call."""
    record = voice_ai_service.get_call(call_id)
    if record is None:
        raise HTTPException(status_code=HTTPStatus.NOT_FOUND, detail="Not found")
    return CallSummaryResponse(summary=record.summary)


@webhook_router.post("/vapi", response_model=WebhookAck)
async def vapi_webhook(
    request: Request,
    webhook_service: WebhookIngestService = Depends(get_webhook_ingest_service),
) -> WebhookAck:
    """
    Receive a Vapi server message.

    Always acknowledges with 200, whatever the body holds.
    """
    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning("[Webhook] Body is not JSON", error=str(e))
        payload = None

    webhook_service.ingest(payload)
    return WebhookAck()


@config_router.get("", response_model=CallConfig)
async def get_call_config(
    call_config: CallConfigService = Depends(get_call_config_dependency),
) -> CallConfig:
    """Get the phone number, assistant and prompt used for new calls."""
    return call_config.get()


@config_router.post("", response_model=CallConfigUpdateResponse)
async def update_call_config(
    payload: CallConfigUpdate,
    call_config: CallConfigService = Depends(get_call_config_dependency),
) -> CallConfigUpdateResponse:
    """
    Update the configuration used for new calls.

    Omitted fields keep their value; assistant fields are merged one by one.
    Calls already placed are not affected.
    """
    return CallConfigUpdateResponse(config=call_config.update(payload))


@config_router.post("/prompt", response_model=SystemPromptResponse)
async def update_system_prompt(
    payload: SystemPromptUpdate,
    call_config: CallConfigService = Depends(get_call_config_dependency),
) -> SystemPromptResponse:
    return SystemPromptResponse(prompt=call_config.set_system_prompt(payload.prompt))
