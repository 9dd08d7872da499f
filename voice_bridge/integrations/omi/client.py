"""OMI notification client.

Sends a single direct notification to an OMI user. No retries.
"""

from typing import Any

import httpx

from voice_bridge.integrations.omi.config import OmiSettings
from voice_bridge.integrations.omi.constants import NOTIFICATION_PATH
from voice_bridge.integrations.omi.exceptions import OmiConfigurationError, OmiError
from voice_bridge.utils.logger import logger


class OmiNotificationClient:
    """Async client for OMI's integration notification endpoint."""

    def __init__(
        self, settings: OmiSettings, http_client: httpx.AsyncClient | None = None
    ) -> None:
        """Initialize OMI client.

        Args:
            settings: OMI settings with app credentials
            http_client: Optional preconfigured client
        """
        self.settings = settings
        self._client = http_client

    async def _ensure_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.settings.base_url, timeout=self.settings.timeout
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def send_notification(self, uid: str, message: str) -> dict[str, Any]:
        """Push a notification to an OMI user.

        Args:
            uid: The OMI user's id
            message: Notification text

        Returns:
            Decoded response body, or ``{"raw": text}`` when it is not JSON

        Raises:
            OmiConfigurationError: If app id or secret is missing
            OmiError: On transport errors or non-2xx responses
        """
        if not self.settings.app_id:
            raise OmiConfigurationError("OMI_APP_ID not set")
        if not self.settings.app_secret:
            raise OmiConfigurationError("OMI_APP_SECRET not set")

        client = await self._ensure_client()
        path = NOTIFICATION_PATH.format(app_id=self.settings.app_id)

        try:
            response = await client.post(
                path,
                params={"uid": uid, "message": message},
                headers={
                    "Authorization": f"Bearer {self.settings.app_secret}",
                    "Content-Type": "application/json",
                },
            )
        except httpx.RequestError as e:
            raise OmiError(f"Request error: {e}") from e

        if not response.is_success:
            raise OmiError(response.text, status_code=response.status_code)

        logger.info("[OMI] Notification sent", uid=uid)
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return {"raw": response.text}
