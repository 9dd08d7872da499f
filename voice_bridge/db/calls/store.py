"""
In-memory call record store.

Volatile: records live for the life of the process and are never evicted.
Every operation takes the store lock for its whole read-merge-write, and
never awaits while holding it, so it is safe to call from the event loop and
from threadpool workers alike.
"""

import threading
from collections.abc import Callable
from datetime import datetime
from typing import Any

from voice_bridge.ai.voice_ai.constants import CallStatus
from voice_bridge.db.calls.model import PATCHABLE_FIELDS, CallRecord, utc_now
from voice_bridge.utils.logger import logger


def append_chunk(transcript: str, chunk: str) -> str:
    """Append a transcript chunk on its own line."""
    if not chunk:
        return transcript
    if not transcript:
        return chunk
    return f"{transcript}\n{chunk}"


class CallStore:
    """Keyed store of CallRecord with merge-patch semantics."""

    def __init__(self, clock: Callable[[], datetime] = utc_now):
        """
        Initialize an empty store.

        Args:
            clock: Source of ``last_update`` timestamps
        """
        self._records: dict[str, CallRecord] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def upsert(self, record: CallRecord) -> None:
        """
        Insert or fully replace the record for ``record.call_id``.

        Args:
            record: The record to store
        """
        with self._lock:
            self._records[record.call_id] = record.model_copy(deep=True)

    def patch(self, call_id: str, updates: dict[str, Any]) -> None:
        """
        Shallow-merge ``updates`` into the record and refresh ``last_update``.

        Each named field replaces the prior value. A record is created lazily
        when ``call_id`` has not been seen before.

        Args:
            call_id: The call to update
            updates: Field name to new value
        """
        with self._lock:
            current = self._get_or_create(call_id)
            self._records[call_id] = self._merge(current, updates)

    def append_transcript(
        self,
        call_id: str,
        chunk: str,
        updates: dict[str, Any] | None = None,
    ) -> None:
        """
        Append a transcript chunk and merge any other fields in one step.

        Args:
            call_id: The call to update
            chunk: New transcript text; empty text appends nothing
            updates: Other fields to merge alongside the transcript
        """
        with self._lock:
            current = self._get_or_create(call_id)
            merged = dict(updates or {})
            merged["transcript"] = append_chunk(current.transcript, chunk)
            self._records[call_id] = self._merge(current, merged)

    def get(self, call_id: str) -> CallRecord | None:
        """
        Return a snapshot of the record, or None if it was never created.

        Args:
            call_id: The call to look up
        """
        with self._lock:
            record = self._records.get(call_id)
            return record.model_copy(deep=True) if record is not None else None

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _get_or_create(self, call_id: str) -> CallRecord:
        current = self._records.get(call_id)
        if current is None:
            logger.info("[CallStore] Lazily creating record for unknown call", call_id=call_id)
            current = CallRecord(
                call_id=call_id, status=CallStatus.UNKNOWN.value, last_update=self._clock()
            )
        return current

    def _merge(self, current: CallRecord, updates: dict[str, Any]) -> CallRecord:
        ignored = set(updates) - PATCHABLE_FIELDS
        if ignored:
            logger.warning(
                "[CallStore] Ignoring non-patchable fields",
                call_id=current.call_id,
                fields=sorted(ignored),
            )
        fields = {k: v for k, v in updates.items() if k in PATCHABLE_FIELDS}
        fields["last_update"] = self._clock()
        return current.model_copy(update=fields)
