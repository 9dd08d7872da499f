"""FastAPI dependencies for the OMI integration."""

from voice_bridge.integrations.omi.client import OmiNotificationClient
from voice_bridge.integrations.omi.config import get_omi_settings
from voice_bridge.integrations.omi.service import OmiWebhookService

_omi_client: OmiNotificationClient | None = None


def get_omi_client() -> OmiNotificationClient:
    global _omi_client
    if _omi_client is None:
        _omi_client = OmiNotificationClient(get_omi_settings())
    return _omi_client


def get_omi_webhook_service() -> OmiWebhookService:
    return OmiWebhookService(get_omi_client(), get_omi_settings().reply_message)


async def close_omi_client() -> None:
    global _omi_client
    if _omi_client is not None:
        await _omi_client.close()
        _omi_client = None
