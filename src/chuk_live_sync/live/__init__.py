"""
Access to the live session.

- SessionAdapter: Capability negotiation across both method conventions
- MemorySession: In-memory live set for dry runs and tests
- session_factory: Resolves the "module:attribute" binding for the song handle
- Exceptions: LiveSyncError and its subclasses
"""

from chuk_live_sync.live.adapter import SessionAdapter
from chuk_live_sync.live.binding import load_binding, session_factory
from chuk_live_sync.live.errors import (
    CapabilityMissingError,
    LiveSyncError,
    RemoteOperationError,
    SongValidationError,
)
from chuk_live_sync.live.memory import MemorySession, RemoteError

__all__ = [
    "CapabilityMissingError",
    "LiveSyncError",
    "MemorySession",
    "RemoteError",
    "RemoteOperationError",
    "SessionAdapter",
    "SongValidationError",
    "load_binding",
    "session_factory",
]
