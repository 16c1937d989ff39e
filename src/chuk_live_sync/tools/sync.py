"""
Sync tools - MCP tools for applying songs to a live session.

Tools for validating a song description, previewing its generated
harmony as MIDI, syncing it into the session and inspecting the devices
on a session track.
"""

from __future__ import annotations

import inspect
import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from chuk_live_sync.compiler import save_harmony_preview
from chuk_live_sync.config import SyncConfig
from chuk_live_sync.live import LiveSyncError, MemorySession, SessionAdapter
from chuk_live_sync.models.song import Song
from chuk_live_sync.sync import InstrumentManager, SongSynchronizer, TrackProvisioner
from chuk_live_sync.sync.loader import load_song, parse_song_text

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _read_song(song_path: str | None, song_text: str | None) -> Song:
    if song_text:
        return parse_song_text(song_text)
    if song_path:
        return load_song(song_path)
    raise LiveSyncError("Provide either song_path or song_text")


def register_sync_tools(
    mcp: ChukMCPServer,
    session_factory: Callable[[], Any],
    output_dir: Path,
) -> dict[str, Any]:
    """
    Register sync tools with the MCP server.

    Args:
        mcp: The MCP server instance
        session_factory: Returns the remote song handle (may be async);
            called once, on first use
        output_dir: Directory for MIDI previews

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    state: dict[str, Any] = {}

    async def get_session() -> Any:
        if "session" not in state:
            session = session_factory()
            if inspect.isawaitable(session):
                session = await session
            state["session"] = session
        return state["session"]

    @mcp.tool  # type: ignore[arg-type]
    async def live_validate_song(
        song_path: str | None = None,
        song_text: str | None = None,
    ) -> str:
        """
        Validate a song description without touching the session.

        Args:
            song_path: Path to a JSON or YAML song file
            song_text: The song description itself (JSON or YAML)

        Returns:
            JSON string with validation result and a short outline

        Example:
            live_validate_song(song_path="songs/demo.yaml")
        """
        try:
            song = _read_song(song_path, song_text)
            return json.dumps(
                {
                    "status": "success",
                    "valid": True,
                    "tempo": song.song_structure.tempo,
                    "signature": (
                        f"{song.song_structure.signature_numerator}/"
                        f"{song.song_structure.signature_denominator}"
                    ),
                    "sections": [s.name for s in song.sections],
                    "tracks": [t.name for t in song.tracks],
                    "chord_tracks": [t.name for t in song.chord_tracks()],
                }
            )
        except LiveSyncError as e:
            return json.dumps({"status": "error", "valid": False, "message": str(e)})
        except Exception as e:
            logger.exception("Failed to validate song")
            return json.dumps({"status": "error", "message": str(e)})

    tools["live_validate_song"] = live_validate_song

    @mcp.tool  # type: ignore[arg-type]
    async def live_sync_song(
        song_path: str | None = None,
        song_text: str | None = None,
        seed: int | None = None,
    ) -> str:
        """
        Apply a song to the live session.

        Sets tempo and meter, creates the declared tracks, places a named
        cue per section plus an end cue, loads instruments and writes a
        generated chord clip per section onto every chords track.

        Args:
            song_path: Path to a JSON or YAML song file
            song_text: The song description itself (JSON or YAML)
            seed: Optional seed for velocity humanization

        Returns:
            JSON string with a summary of the run

        Example:
            live_sync_song(song_path="songs/demo.yaml", seed=42)
        """
        try:
            song = _read_song(song_path, song_text)
            session = await get_session()
            synchronizer = SongSynchronizer(SessionAdapter(session), SyncConfig(seed=seed))
            report = await synchronizer.sync(song)

            result: dict[str, Any] = {"status": "success", "report": report.to_dict()}
            if isinstance(session, MemorySession):
                result["dry_run"] = True
                result["session"] = session.summary()
            result["message"] = (
                f"Synced {len(report.tracks)} tracks, {len(report.cues)} cues, "
                f"{report.chord_clips} chord clips"
            )
            return json.dumps(result)
        except Exception as e:
            logger.exception("Failed to sync song")
            return json.dumps({"status": "error", "message": str(e)})

    tools["live_sync_song"] = live_sync_song

    @mcp.tool  # type: ignore[arg-type]
    async def live_preview_harmony(
        song_path: str | None = None,
        song_text: str | None = None,
        output_name: str = "harmony_preview",
        seed: int | None = None,
    ) -> str:
        """
        Render the generated chord clips to a MIDI file.

        Uses the song's own tempo and meter; sections become markers.

        Args:
            song_path: Path to a JSON or YAML song file
            song_text: The song description itself (JSON or YAML)
            output_name: Output filename (without .mid extension)
            seed: Optional seed for velocity humanization

        Returns:
            JSON string with the file path

        Example:
            live_preview_harmony(song_path="songs/demo.yaml", seed=1)
        """
        try:
            song = _read_song(song_path, song_text)
            generator = SyncConfig(seed=seed).make_generator()
            path = save_harmony_preview(song, generator, output_dir / f"{output_name}.mid")
            return json.dumps(
                {
                    "status": "success",
                    "path": str(path),
                    "sections": len(song.sections),
                }
            )
        except Exception as e:
            logger.exception("Failed to render harmony preview")
            return json.dumps({"status": "error", "message": str(e)})

    tools["live_preview_harmony"] = live_preview_harmony

    @mcp.tool  # type: ignore[arg-type]
    async def live_inspect_instrument(track_name: str) -> str:
        """
        List the devices on a session track.

        The track is matched by exact, case-sensitive name.

        Args:
            track_name: Name of the track in the session

        Returns:
            JSON string with the device names in chain order

        Example:
            live_inspect_instrument(track_name="Keys")
        """
        try:
            adapter = SessionAdapter(await get_session())
            manager = InstrumentManager(adapter, TrackProvisioner(adapter))
            devices = await manager.inspect(track_name)
            return json.dumps({"status": "success", "track": track_name, "devices": devices})
        except LiveSyncError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to inspect track")
            return json.dumps({"status": "error", "message": str(e)})

    tools["live_inspect_instrument"] = live_inspect_instrument

    return tools
