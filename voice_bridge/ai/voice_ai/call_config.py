"""
Runtime call configuration.

Seeded from VapiSettings at first use and editable over the API while the
process runs. Changes are not persisted; a restart goes back to the
environment values.
"""

import threading

from voice_bridge.ai.voice_ai.config import VapiSettings, get_vapi_settings
from voice_bridge.ai.voice_ai.schemas import (
    AssistantConfig,
    CallConfig,
    CallConfigUpdate,
)
from voice_bridge.utils.logger import logger


def default_call_config(settings: VapiSettings) -> CallConfig:
    return CallConfig(
        phone_number_id=settings.phone_number_id,
        assistant_id=settings.assistant_id,
        assistant=AssistantConfig(
            name=f"{settings.business_name} Support Caller",
            model=settings.inline_model,
            system_prompt=settings.system_prompt,
        ),
    )


class CallConfigService:
    """Holds the effective call configuration."""

    def __init__(self, config: CallConfig):
        self._config = config.model_copy(deep=True)
        self._lock = threading.Lock()

    def get(self) -> CallConfig:
        with self._lock:
            return self._config.model_copy(deep=True)

    def update(self, update: CallConfigUpdate) -> CallConfig:
        """
        Merge a partial update into the configuration.

        Top-level fields replace their current value when given. Assistant
        fields are merged one by one, so sending only a new name keeps the
        current prompt.

        Args:
            update: Fields to change

        Returns:
            CallConfig: The configuration after the update
        """
        changes = update.model_dump(exclude_unset=True, exclude_none=True)
        assistant_changes = changes.pop("assistant", None)

        with self._lock:
            config = self._config.model_copy(update=changes)
            if assistant_changes:
                config.assistant = config.assistant.model_copy(update=assistant_changes)
            self._config = config
            logger.info(
                "[Call Config] Updated",
                fields=sorted(changes),
                assistant_fields=sorted(assistant_changes or {}),
            )
            return config.model_copy(deep=True)

    def set_system_prompt(self, prompt: str) -> str:
        with self._lock:
            self._config.assistant = self._config.assistant.model_copy(
                update={"system_prompt": prompt}
            )
            logger.info("[Call Config] System prompt updated", length=len(prompt))
            return prompt


_call_config_service: CallConfigService | None = None


def get_call_config_service() -> CallConfigService:
    """
    Get the global call configuration, seeding it from the environment.

    Returns:
        CallConfigService: The process-wide configuration holder
    """
    global _call_config_service
    if _call_config_service is None:
        _call_config_service = CallConfigService(default_call_config(get_vapi_settings()))
    return _call_config_service


def set_call_config_service(service: CallConfigService | None) -> None:
    """
    Replace the global call configuration.

    Args:
        service: The configuration to use, or None to reseed from settings
    """
    global _call_config_service
    _call_config_service = service
