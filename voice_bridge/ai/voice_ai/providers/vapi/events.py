"""
Vapi webhook payload parsing.

Vapi's server messages have changed shape across API versions and differ by
event type, so every field is read by probing an ordered list of paths into
the raw JSON tree; the first non-empty value wins. Parsing is pure: it turns
a payload into a WebhookPatch and never touches the call store.
"""

from dataclasses import dataclass, field
from typing import Any

from voice_bridge.ai.voice_ai.constants import (
    NO_SUMMARY,
    WEBHOOK_EVENT_TYPES,
    CallStatus,
    WebhookEventKind,
)

Path = tuple[str, ...]

EVENT_TYPE_PATHS: tuple[Path, ...] = (("message", "type"), ("type",))

CALL_ID_PATHS: tuple[Path, ...] = (
    ("message", "call", "id"),
    ("call", "id"),
    ("message", "session", "id"),
    ("session", "id"),
)

STATUS_PATHS: tuple[Path, ...] = (
    ("message", "status"),
    ("status",),
    ("message", "call", "status"),
    ("call", "status"),
    ("message", "session", "status"),
)

RECORDING_URL_PATHS: tuple[Path, ...] = (
    ("message", "recordingUrl"),
    ("message", "artifact", "recordingUrl"),
    ("message", "call", "recordingUrl"),
    ("recordingUrl",),
    ("artifact", "recordingUrl"),
    ("call", "recordingUrl"),
)

TRANSCRIPT_CHUNK_PATHS: tuple[Path, ...] = (
    ("message", "transcript"),
    ("transcript",),
    ("message", "text"),
    ("text",),
)

FINAL_TRANSCRIPT_PATHS: tuple[Path, ...] = (
    ("message", "transcript"),
    ("message", "artifact", "transcript"),
    ("transcript",),
    ("artifact", "transcript"),
)

SUMMARY_PATHS: tuple[Path, ...] = (
    ("message", "summary"),
    ("message", "analysis", "summary"),
    ("summary",),
    ("analysis", "summary"),
    ("message", "notes"),
    ("notes",),
)


@dataclass
class WebhookPatch:
    """The store mutation implied by one webhook event."""

    kind: WebhookEventKind
    call_id: str | None
    updates: dict[str, Any] = field(default_factory=dict)
    transcript_chunk: str | None = None

    @property
    def applicable(self) -> bool:
        return self.call_id is not None and self.kind != WebhookEventKind.UNKNOWN


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, dict)):
        return not value
    return False


def dig(payload: Any, path: Path) -> Any:
    """Follow ``path`` through nested dicts, returning None when it breaks."""
    node = payload
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def first_present(payload: Any, paths: tuple[Path, ...]) -> Any:
    """Return the value at the first path holding a non-empty value."""
    for path in paths:
        value = dig(payload, path)
        if not _is_empty(value):
            return value
    return None


def _first_string(payload: Any, paths: tuple[Path, ...]) -> str | None:
    for path in paths:
        value = dig(payload, path)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            value = str(value)
        if isinstance(value, str) and value.strip():
            return value
    return None


def transcript_text(value: Any) -> str:
    """
    Flatten a transcript value to text.

    Accepts a plain string or an ordered list of message objects, each
    contributing its ``text`` on its own line. Anything else yields "".
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, list):
        parts = []
        for item in value:
            text = item.get("text") if isinstance(item, dict) else item
            if isinstance(text, str) and text.strip():
                parts.append(text.strip())
        return "\n".join(parts)
    return ""


def classify(payload: Any) -> WebhookEventKind:
    """Map the payload's event-type discriminator to an event kind."""
    event_type = _first_string(payload, EVENT_TYPE_PATHS)
    if event_type is None:
        return WebhookEventKind.UNKNOWN
    return WEBHOOK_EVENT_TYPES.get(event_type.strip(), WebhookEventKind.UNKNOWN)


def extract_call_id(payload: Any) -> str | None:
    return _first_string(payload, CALL_ID_PATHS)


def parse_status_update(payload: Any) -> dict[str, Any]:
    updates: dict[str, Any] = {}
    status = _first_string(payload, STATUS_PATHS)
    if status is not None:
        updates["status"] = status
    recording_url = _first_string(payload, RECORDING_URL_PATHS)
    if recording_url is not None:
        updates["recording_url"] = recording_url
    return updates


def parse_transcript_chunk(payload: Any) -> str:
    return transcript_text(first_present(payload, TRANSCRIPT_CHUNK_PATHS))


def parse_end_of_call_report(payload: Any) -> dict[str, Any]:
    updates: dict[str, Any] = {
        "status": CallStatus.ENDED.value,
        "summary": _first_string(payload, SUMMARY_PATHS) or NO_SUMMARY,
    }
    final_transcript = transcript_text(first_present(payload, FINAL_TRANSCRIPT_PATHS))
    if final_transcript:
        updates["transcript"] = final_transcript
    recording_url = _first_string(payload, RECORDING_URL_PATHS)
    if recording_url is not None:
        updates["recording_url"] = recording_url
    return updates


def parse_webhook(payload: Any) -> WebhookPatch:
    """
    Turn a raw Vapi webhook payload into the patch it implies.

    Unknown event kinds and payloads without a resolvable call id produce a
    patch that is not applicable; callers acknowledge those and move on.

    Args:
        payload: Decoded JSON body of the webhook

    Returns:
        WebhookPatch: Event kind, call id and the fields to merge
    """
    kind = classify(payload)
    patch = WebhookPatch(kind=kind, call_id=extract_call_id(payload))

    if kind == WebhookEventKind.STATUS_UPDATE:
        patch.updates = parse_status_update(payload)
    elif kind == WebhookEventKind.TRANSCRIPT:
        patch.transcript_chunk = parse_transcript_chunk(payload)
    elif kind == WebhookEventKind.END_OF_CALL_REPORT:
        patch.updates = parse_end_of_call_report(payload)

    return patch
