"""Handles inbound OMI webhook text."""

from typing import Any

from voice_bridge.integrations.omi.client import OmiNotificationClient
from voice_bridge.integrations.omi.exceptions import OmiError
from voice_bridge.utils.logger import logger

SEGMENT_KEYS = ("segments", "transcript_segments")


def extract_text(payload: Any) -> str:
    """
    Pull the user's text out of an OMI webhook body.

    Plain ``text``/``message`` fields win; otherwise transcript segments
    are joined with spaces in order.
    """
    if not isinstance(payload, dict):
        return ""
    for key in ("text", "message"):
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    for key in SEGMENT_KEYS:
        segments = payload.get(key)
        if isinstance(segments, list):
            parts = [
                segment["text"].strip()
                for segment in segments
                if isinstance(segment, dict)
                and isinstance(segment.get("text"), str)
                and segment["text"].strip()
            ]
            if parts:
                return " ".join(parts)
    return ""


class OmiWebhookService:
    """Acknowledges OMI messages with a canned notification."""

    def __init__(self, client: OmiNotificationClient, reply_message: str):
        self.client = client
        self.reply_message = reply_message

    async def handle(self, uid: str | None, payload: Any) -> bool:
        """
        Notify the user that their message was received.

        Returns:
            bool: Whether a notification was delivered
        """
        text = extract_text(payload)
        if not uid or not text:
            logger.info("[OMI] Webhook without uid or text", has_uid=bool(uid))
            return False

        logger.info("[OMI] Received text", uid=uid, length=len(text))
        try:
            await self.client.send_notification(uid, self.reply_message)
        except OmiError as e:
            logger.error("[OMI] Failed to send notification", uid=uid, error=str(e))
            return False
        except Exception as e:
            logger.exception("[OMI] Unexpected notification failure", uid=uid, error=str(e))
            return False
        return True
