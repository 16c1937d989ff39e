"""
Remote binding resolution.

A binding is named as "module:attribute", where the attribute is a factory
returning the remote song handle (directly or as an awaitable). Without a
binding, a fresh in-memory session is used and the run is a dry run.
"""

from __future__ import annotations

import importlib
import logging
import os
from collections.abc import Callable
from typing import Any

from chuk_live_sync.constants import BINDING_ENV_VAR, ErrorMessages
from chuk_live_sync.live.errors import LiveSyncError
from chuk_live_sync.live.memory import MemorySession

logger = logging.getLogger(__name__)


def load_binding(spec: str) -> Callable[[], Any]:
    """
    Import the factory named by "module:attribute".

    Raises:
        LiveSyncError: If the spec is malformed or cannot be imported
    """
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise LiveSyncError(ErrorMessages.BAD_BINDING.format(spec=spec))

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise LiveSyncError(f"Could not import binding module '{module_name}': {e}") from e

    factory = getattr(module, attr, None)
    if not callable(factory):
        raise LiveSyncError(f"Binding '{spec}' does not name a callable")
    return factory


def session_factory(spec: str | None = None) -> Callable[[], Any]:
    """
    Factory for the remote song handle.

    Uses spec, else the CHUK_LIVE_SYNC_BINDING environment variable, else
    the in-memory session.
    """
    spec = spec or os.environ.get(BINDING_ENV_VAR)
    if spec:
        logger.info(f"Using live binding {spec}")
        return load_binding(spec)

    logger.info("No live binding configured; using in-memory session (dry run)")
    return MemorySession
