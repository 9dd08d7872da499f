"""
FastAPI dependencies for storage services.

Provides the process-wide call store for dependency injection.
"""

from voice_bridge.db.calls.store import CallStore

_call_store: CallStore | None = None


def get_call_store() -> CallStore:
    """
    FastAPI dependency for getting the call store.

    Returns:
        CallStore: The process-wide store instance
    """
    global _call_store
    if _call_store is None:
        _call_store = CallStore()
    return _call_store


def set_call_store(store: CallStore) -> None:
    """
    Replace the process-wide call store.

    Args:
        store: The store to use from now on
    """
    global _call_store
    _call_store = store
