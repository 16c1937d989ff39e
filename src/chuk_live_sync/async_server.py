#!/usr/bin/env python3
"""
Async Live Sync MCP Server using chuk-mcp-server

This server provides MCP tools for applying declarative song descriptions
to a running Ableton Live session.

The server provides tools for:
- Validating song descriptions (JSON or YAML)
- Previewing the generated harmony as MIDI
- Syncing a song into the session (tracks, cues, instruments, chord clips)
- Inspecting the device chain of a session track

The live binding is taken from CHUK_LIVE_SYNC_BINDING ("module:attribute")
and previews are written to CHUK_LIVE_SYNC_OUTPUT_DIR. Without a binding
the tools run against an in-memory session.
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_live_sync.constants import OUTPUT_DIR_ENV_VAR
from chuk_live_sync.live import session_factory
from chuk_live_sync.tools import register_sync_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-live-sync")

# MIDI previews go to $CHUK_LIVE_SYNC_OUTPUT_DIR, else ./output
OUTPUT_DIR = Path(os.environ.get(OUTPUT_DIR_ENV_VAR) or Path.cwd() / "output")

# Register all tools
sync_tools = register_sync_tools(mcp, session_factory(), OUTPUT_DIR)

# Export tool functions for direct access
live_validate_song = sync_tools["live_validate_song"]
live_sync_song = sync_tools["live_sync_song"]
live_preview_harmony = sync_tools["live_preview_harmony"]
live_inspect_instrument = sync_tools["live_inspect_instrument"]

logger.info("CHUK Live Sync MCP Server initialized")
logger.info(f"  Output dir: {OUTPUT_DIR}")
