"""In-memory call record storage."""

from voice_bridge.db.calls.model import CallLookup, CallRecord
from voice_bridge.db.calls.store import CallStore

__all__ = ["CallLookup", "CallRecord", "CallStore"]
