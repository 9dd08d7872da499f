"""OMI wearable integration."""

from voice_bridge.integrations.omi.client import OmiNotificationClient
from voice_bridge.integrations.omi.config import OmiSettings, get_omi_settings
from voice_bridge.integrations.omi.exceptions import OmiConfigurationError, OmiError

__all__ = [
    "OmiNotificationClient",
    "OmiSettings",
    "get_omi_settings",
    "OmiError",
    "OmiConfigurationError",
]
