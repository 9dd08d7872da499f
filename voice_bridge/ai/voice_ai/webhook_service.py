"""
Provider webhook ingestion.

Applies the patch implied by each provider event to the call store. Faults
are logged and swallowed: the provider must always see success so it does
not retry into a struggling endpoint.
"""

from typing import Any

from pydantic import BaseModel

from voice_bridge.ai.voice_ai.constants import WebhookEventKind
from voice_bridge.ai.voice_ai.providers.vapi.events import parse_webhook
from voice_bridge.db.calls.store import CallStore
from voice_bridge.utils.logger import logger


class WebhookOutcome(BaseModel):
    """What happened to one webhook delivery; for logs and tests only."""

    kind: WebhookEventKind = WebhookEventKind.UNKNOWN
    call_id: str | None = None
    applied: bool = False
    error: str | None = None


class WebhookIngestService:
    """Turns provider events into call store patches."""

    def __init__(self, call_store: CallStore):
        self.call_store = call_store

    def ingest(self, payload: Any) -> WebhookOutcome:
        """
        Apply one provider event. Never raises.

        Args:
            payload: Decoded webhook body, any JSON shape

        Returns:
            WebhookOutcome: Event kind, call id and whether a patch was applied
        """
        try:
            patch = parse_webhook(payload)
            outcome = WebhookOutcome(kind=patch.kind, call_id=patch.call_id)

            if patch.kind == WebhookEventKind.UNKNOWN:
                logger.debug("[Webhook] Ignoring unhandled event", call_id=patch.call_id)
                return outcome
            if patch.call_id is None:
                logger.warning("[Webhook] Event without a call id", kind=patch.kind.value)
                return outcome

            if patch.transcript_chunk is not None:
                self.call_store.append_transcript(
                    patch.call_id, patch.transcript_chunk, patch.updates
                )
            else:
                self.call_store.patch(patch.call_id, patch.updates)

            logger.info(
                "[Webhook] Applied event",
                kind=patch.kind.value,
                call_id=patch.call_id,
                fields=sorted(patch.updates),
            )
            outcome.applied = True
            return outcome

        except Exception as e:
            logger.exception("[Webhook] Failed to process event", error=str(e))
            return WebhookOutcome(error=str(e))
