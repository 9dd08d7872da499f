"""
Voice AI integration constants and enums.

This module contains all constants, enums, and static values used
across the Voice AI integration system.
"""

from enum import Enum


class CallStatus(str, Enum):
    """
    Call status values with meaning to this service.

    Providers may report other status strings; those are stored verbatim.
    Only ENDED is terminal.
    """

    QUEUED = "queued"
    RINGING = "ringing"
    IN_PROGRESS = "in-progress"
    FORWARDING = "forwarding"
    ENDED = "ended"
    UNKNOWN = "unknown"

    @classmethod
    def is_call_ended(cls, status: "CallStatus | str | None") -> bool:
        """Check if a status string indicates the call has ended."""
        return status == cls.ENDED.value


class VoiceAIProvider(str, Enum):
    """Available Voice AI providers."""

    VAPI = "vapi"


class VoiceAIErrorCode(str, Enum):
    """Standard error codes across Voice AI providers."""

    HTTP_ERROR = "HTTP_ERROR"
    INVALID_JSON = "INVALID_JSON"
    NOT_CONFIGURED = "NOT_CONFIGURED"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class WebhookEventKind(str, Enum):
    """Provider webhook event kinds that produce a call record patch."""

    STATUS_UPDATE = "status-update"
    TRANSCRIPT = "transcript"
    END_OF_CALL_REPORT = "end-of-call-report"
    UNKNOWN = "unknown"


# Discriminator strings seen on the wire, across provider payload versions.
WEBHOOK_EVENT_TYPES: dict[str, WebhookEventKind] = {
    "status": WebhookEventKind.STATUS_UPDATE,
    "status-update": WebhookEventKind.STATUS_UPDATE,
    "session.updated": WebhookEventKind.STATUS_UPDATE,
    "transcript": WebhookEventKind.TRANSCRIPT,
    "transcript.part": WebhookEventKind.TRANSCRIPT,
    "end-of-call-report": WebhookEventKind.END_OF_CALL_REPORT,
}

NO_SUMMARY = "No summary."
