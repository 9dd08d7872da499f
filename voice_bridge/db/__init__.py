"""Storage layer for call state."""

from voice_bridge.db.calls import CallLookup, CallRecord, CallStore
from voice_bridge.db.dependencies import get_call_store, set_call_store

__all__ = [
    "CallLookup",
    "CallRecord",
    "CallStore",
    "get_call_store",
    "set_call_store",
]
