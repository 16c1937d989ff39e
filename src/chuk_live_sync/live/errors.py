"""
Exception hierarchy for the sync engine.

Two remote outcomes are kept apart: a capability that does not exist on a
handle (CapabilityMissingError, only raised when the caller needs a result)
and a capability that exists but failed when invoked (RemoteOperationError).
"""

from __future__ import annotations

from chuk_live_sync.constants import ErrorMessages


class LiveSyncError(Exception):
    """Base class for sync engine errors."""


class CapabilityMissingError(LiveSyncError):
    """A required method or property is not offered by the remote handle."""

    def __init__(self, capability: str, target: str):
        self.capability = capability
        self.target = target
        super().__init__(ErrorMessages.CAPABILITY_MISSING.format(name=capability, target=target))


class RemoteOperationError(LiveSyncError):
    """A remote call was made and the session rejected it."""

    def __init__(self, operation: str, cause: BaseException):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Remote operation '{operation}' failed: {cause}")


class SongValidationError(LiveSyncError):
    """The song description could not be loaded or failed validation."""
