#!/usr/bin/env python3
"""
Command line entry point: apply a song description to a live session.

    chuk-live-sync song.yaml --binding my_binding:connect --seed 7
    chuk-live-sync song.json --preview-midi out/harmony.mid
    chuk-live-sync song.json --inspect Keys

Without a binding the song is applied to an in-memory session and the
resulting session is printed as JSON (dry run).
"""

from __future__ import annotations

import argparse
import asyncio
import inspect
import json
import logging
import sys
from typing import Any

from chuk_live_sync.compiler import save_harmony_preview
from chuk_live_sync.config import SyncConfig
from chuk_live_sync.constants import BINDING_ENV_VAR
from chuk_live_sync.live import LiveSyncError, MemorySession, SessionAdapter, session_factory
from chuk_live_sync.sync import InstrumentManager, SongSynchronizer, load_song

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chuk-live-sync",
        description="Apply a song description (JSON or YAML) to an Ableton Live session",
    )
    parser.add_argument("song", help="Path to the song description")
    parser.add_argument(
        "--inspect",
        metavar="TRACK",
        help="After syncing, list the devices on the track with this exact name",
    )
    parser.add_argument(
        "--binding",
        metavar="MODULE:FACTORY",
        help=f"Factory returning the remote song handle (default: ${BINDING_ENV_VAR})",
    )
    parser.add_argument("--seed", type=int, help="Seed for velocity humanization")
    parser.add_argument(
        "--preview-midi",
        metavar="PATH",
        help="Also render the generated harmony to a MIDI file",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


async def _close(session: Any) -> None:
    close = getattr(session, "close", None)
    if callable(close):
        result = close()
        if inspect.isawaitable(result):
            await result


async def run(args: argparse.Namespace) -> dict[str, Any]:
    """
    Load, optionally preview, and sync one song.

    Returns:
        JSON-friendly result of the run
    """
    song = load_song(args.song)
    config = SyncConfig(seed=args.seed)
    result: dict[str, Any] = {}

    if args.preview_midi:
        path = save_harmony_preview(song, config.make_generator(), args.preview_midi)
        logger.info(f"Harmony preview written to {path}")
        result["preview_midi"] = str(path)

    session = session_factory(args.binding)()
    if inspect.isawaitable(session):
        session = await session

    try:
        adapter = SessionAdapter(session)
        synchronizer = SongSynchronizer(adapter, config)
        report = await synchronizer.sync(song)
        result["report"] = report.to_dict()

        if args.inspect:
            manager = InstrumentManager(adapter, synchronizer.provisioner)
            result["inspect"] = {
                "track": args.inspect,
                "devices": await manager.inspect(args.inspect),
            }

        if isinstance(session, MemorySession):
            result["dry_run"] = True
            result["session"] = session.summary()
    finally:
        await _close(session)

    return result


def main(argv: list[str] | None = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        result = asyncio.run(run(args))
    except LiveSyncError as e:
        logger.error(str(e))
        return 1
    except Exception:
        logger.exception("Sync failed")
        return 1

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
