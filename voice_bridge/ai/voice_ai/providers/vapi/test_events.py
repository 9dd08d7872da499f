"""Tests for Vapi webhook payload parsing."""

import pytest

from voice_bridge.ai.voice_ai.constants import WebhookEventKind
from voice_bridge.ai.voice_ai.providers.vapi.events import (
    classify,
    extract_call_id,
    first_present,
    parse_webhook,
    transcript_text,
)


class TestClassify:
    @pytest.mark.parametrize(
        "event_type, kind",
        [
            ("status", WebhookEventKind.STATUS_UPDATE),
            ("session.updated", WebhookEventKind.STATUS_UPDATE),
            ("transcript", WebhookEventKind.TRANSCRIPT),
            ("transcript.part", WebhookEventKind.TRANSCRIPT),
            ("end-of-call-report", WebhookEventKind.END_OF_CALL_REPORT),
            ("speech-update", WebhookEventKind.UNKNOWN),
        ],
    )
    def test_top_level_type(self, event_type, kind):
        assert classify({"type": event_type}) == kind

    def test_nested_type_wins_over_top_level(self):
        payload = {"type": "status", "message": {"type": "end-of-call-report"}}

        assert classify(payload) == WebhookEventKind.END_OF_CALL_REPORT

    def test_falls_back_to_top_level_when_nested_missing(self):
        payload = {"type": "transcript", "message": {"call": {"id": "c1"}}}

        assert classify(payload) == WebhookEventKind.TRANSCRIPT

    @pytest.mark.parametrize("payload", [None, [], "status", 42, {}, {"type": 7}])
    def test_malformed_payloads_are_unknown(self, payload):
        assert classify(payload) == WebhookEventKind.UNKNOWN


class TestExtractCallId:
    def test_nested_call_id_first(self):
        payload = {
            "message": {"call": {"id": "nested"}, "session": {"id": "session"}},
            "call": {"id": "top"},
        }

        assert extract_call_id(payload) == "nested"

    def test_top_level_call_id(self):
        payload = {"call": {"id": "top"}, "message": {"session": {"id": "session"}}}

        assert extract_call_id(payload) == "top"

    def test_session_id_last(self):
        assert extract_call_id({"message": {"session": {"id": "session"}}}) == "session"

    def test_empty_values_are_skipped(self):
        payload = {"message": {"call": {"id": ""}}, "call": {"id": "top"}}

        assert extract_call_id(payload) == "top"

    def test_missing_id(self):
        assert extract_call_id({"message": {"type": "status"}}) is None


def test_first_present_skips_empty_containers():
    payload = {"a": {"b": []}, "c": {"d": "value"}}

    assert first_present(payload, (("a", "b"), ("c", "d"))) == "value"
    assert first_present(payload, (("x",),)) is None


class TestTranscriptText:
    def test_plain_string(self):
        assert transcript_text("  Hello  ") == "Hello"

    def test_message_objects_join_text_in_order(self):
        messages = [{"role": "user", "text": "Hi"}, {"role": "bot"}, {"text": "Bye"}]

        assert transcript_text(messages) == "Hi\nBye"

    @pytest.mark.parametrize("value", [None, "", [], {"text": "x"}, 3])
    def test_nothing_usable(self, value):
        assert transcript_text(value) == ""


class TestParseWebhook:
    def test_status_update(self):
        payload = {
            "message": {
                "type": "status-update",
                "status": "in-progress",
                "call": {"id": "c1", "status": "ringing"},
                "recordingUrl": "https://rec/1",
            }
        }

        patch = parse_webhook(payload)

        assert patch.kind == WebhookEventKind.STATUS_UPDATE
        assert patch.call_id == "c1"
        assert patch.updates == {"status": "in-progress", "recording_url": "https://rec/1"}
        assert patch.transcript_chunk is None

    def test_status_update_passes_unknown_status_through(self):
        patch = parse_webhook({"type": "status", "status": "forwarding-to-pluto", "call": {"id": "c1"}})

        assert patch.updates == {"status": "forwarding-to-pluto"}

    def test_status_update_without_fields_is_empty_patch(self):
        patch = parse_webhook({"type": "session.updated", "message": {"session": {"id": "s1"}}})

        assert patch.applicable
        assert patch.call_id == "s1"
        assert patch.updates == {}

    def test_transcript_string_chunk(self):
        patch = parse_webhook({"message": {"type": "transcript", "transcript": "Hello", "call": {"id": "c1"}}})

        assert patch.kind == WebhookEventKind.TRANSCRIPT
        assert patch.transcript_chunk == "Hello"
        assert patch.updates == {}

    def test_transcript_message_list_chunk(self):
        payload = {
            "type": "transcript.part",
            "call": {"id": "c1"},
            "transcript": [{"text": "one"}, {"text": "two"}],
        }

        assert parse_webhook(payload).transcript_chunk == "one\ntwo"

    def test_transcript_missing_chunk_contributes_nothing(self):
        patch = parse_webhook({"type": "transcript", "call": {"id": "c1"}})

        assert patch.transcript_chunk == ""

    def test_end_of_call_report(self):
        payload = {
            "message": {
                "type": "end-of-call-report",
                "call": {"id": "c1"},
                "summary": "Short call.",
                "transcript": "AI: Hello\nUser: Hi",
                "artifact": {"recordingUrl": "https://rec/final"},
            }
        }

        patch = parse_webhook(payload)

        assert patch.kind == WebhookEventKind.END_OF_CALL_REPORT
        assert patch.updates == {
            "status": "ended",
            "summary": "Short call.",
            "transcript": "AI: Hello\nUser: Hi",
            "recording_url": "https://rec/final",
        }

    def test_end_of_call_report_summary_from_analysis(self):
        payload = {
            "message": {
                "type": "end-of-call-report",
                "call": {"id": "c1"},
                "analysis": {"summary": "From analysis."},
            }
        }

        assert parse_webhook(payload).updates["summary"] == "From analysis."

    def test_end_of_call_report_falls_back_to_notes(self):
        payload = {"type": "end-of-call-report", "call": {"id": "c1"}, "notes": "Noted."}

        assert parse_webhook(payload).updates["summary"] == "Noted."

    def test_end_of_call_report_without_summary_or_transcript(self):
        patch = parse_webhook({"type": "end-of-call-report", "call": {"id": "c1"}})

        assert patch.updates == {"status": "ended", "summary": "No summary."}

    def test_unknown_kind_is_not_applicable(self):
        patch = parse_webhook({"type": "hang", "call": {"id": "c1"}})

        assert patch.kind == WebhookEventKind.UNKNOWN
        assert not patch.applicable

    def test_missing_call_id_is_not_applicable(self):
        patch = parse_webhook({"type": "status", "status": "ended"})

        assert patch.call_id is None
        assert not patch.applicable
