"""Tests for applying provider webhook events to the call store."""

from unittest.mock import MagicMock

import pytest

from voice_bridge.ai.voice_ai.constants import WebhookEventKind
from voice_bridge.ai.voice_ai.webhook_service import WebhookIngestService
from voice_bridge.db.calls.model import CallRecord
from voice_bridge.db.calls.store import CallStore


@pytest.fixture
def store():
    return CallStore()


@pytest.fixture
def service(store):
    return WebhookIngestService(store)


def _event(event_type, call_id="c1", **fields):
    return {"message": {"type": event_type, "call": {"id": call_id}, **fields}}


class TestWebhookIngestService:
    def test_full_call_lifecycle(self, service, store):
        store.upsert(CallRecord(call_id="c1", status="queued"))

        service.ingest(_event("status-update", status="ringing"))
        service.ingest(_event("status-update", status="in-progress"))
        service.ingest(_event("transcript", transcript="AI: Hello"))
        service.ingest(_event("transcript", transcript="User: Hi there"))
        service.ingest(
            _event(
                "end-of-call-report",
                summary="Booked a table for two.",
                recordingUrl="https://rec/c1.mp3",
            )
        )

        record = store.get("c1")
        assert record.status == "ended"
        assert record.transcript == "AI: Hello\nUser: Hi there"
        assert record.summary == "Booked a table for two."
        assert record.recording_url == "https://rec/c1.mp3"

    def test_final_transcript_replaces_streamed_chunks(self, service, store):
        service.ingest(_event("transcript", transcript="partial"))
        service.ingest(_event("end-of-call-report", transcript="AI: Hello\nUser: Bye"))

        assert store.get("c1").transcript == "AI: Hello\nUser: Bye"

    def test_outcome_reports_applied_patch(self, service):
        outcome = service.ingest(_event("status-update", status="ringing"))

        assert outcome.applied
        assert outcome.kind == WebhookEventKind.STATUS_UPDATE
        assert outcome.call_id == "c1"
        assert outcome.error is None

    def test_unknown_kind_is_acknowledged_without_mutation(self, service, store):
        outcome = service.ingest(_event("speech-update", status="ended"))

        assert not outcome.applied
        assert outcome.kind == WebhookEventKind.UNKNOWN
        assert len(store) == 0

    def test_event_without_call_id_is_ignored(self, service, store):
        outcome = service.ingest({"type": "status-update", "status": "ended"})

        assert not outcome.applied
        assert len(store) == 0

    def test_event_for_unknown_call_creates_record(self, service, store):
        service.ingest(_event("status-update", call_id="late", status="ringing"))

        record = store.get("late")
        assert record is not None
        assert record.status == "ringing"

    def test_repeated_end_of_call_report_is_idempotent(self, service, store):
        report = _event("end-of-call-report", summary="Done.", transcript="AI: Bye")

        service.ingest(report)
        first = store.get("c1")
        service.ingest(report)
        second = store.get("c1")

        assert first.model_dump(exclude={"last_update"}) == second.model_dump(
            exclude={"last_update"}
        )

    @pytest.mark.parametrize("payload", [None, "not json", [1, 2], {}])
    def test_malformed_payloads_never_raise(self, service, store, payload):
        outcome = service.ingest(payload)

        assert not outcome.applied
        assert len(store) == 0

    def test_store_failure_is_absorbed(self):
        store = MagicMock(spec=CallStore)
        store.patch.side_effect = RuntimeError("store down")
        service = WebhookIngestService(store)

        outcome = service.ingest(_event("status-update", status="ringing"))

        assert not outcome.applied
        assert outcome.error == "store down"
