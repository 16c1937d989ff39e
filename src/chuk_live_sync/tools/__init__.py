"""
MCP tool implementations.

- sync - Validate, preview, sync and inspect
"""

from chuk_live_sync.tools.sync import register_sync_tools

__all__ = [
    "register_sync_tools",
]
