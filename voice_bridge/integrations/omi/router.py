"""
OMI webhook endpoint.

OMI posts the wearable's text here with the user id in the query string.
"""

from fastapi import APIRouter, Depends, Query, Request

from voice_bridge.integrations.omi.dependencies import get_omi_webhook_service
from voice_bridge.integrations.omi.schemas import OmiWebhookAck
from voice_bridge.integrations.omi.service import OmiWebhookService
from voice_bridge.utils.logger import logger

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/omi", response_model=OmiWebhookAck)
async def omi_webhook(
    request: Request,
    uid: str | None = Query(None, description="OMI user id"),
    omi_service: OmiWebhookService = Depends(get_omi_webhook_service),
) -> OmiWebhookAck:
    """Receive OMI text and push a notification back. Always answers 200."""
    try:
        payload = await request.json()
    except ValueError as e:
        logger.warning("[OMI] Body is not JSON", error=str(e))
        payload = None

    notified = await omi_service.handle(uid, payload)
    return OmiWebhookAck(notified=notified)
