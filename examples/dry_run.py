#!/usr/bin/env python3
"""
Example: Sync a song into an in-memory session.

This runs the whole pipeline (tempo, tracks, cues, instruments, chord
clips) without a running Live set, then prints what the session would
contain and writes a MIDI preview of the generated harmony.

Usage:
    python examples/dry_run.py
    # Creates: examples/output/demo_harmony.mid
"""

import asyncio
import json
import logging
from pathlib import Path

from chuk_live_sync.compiler import save_harmony_preview
from chuk_live_sync.config import SyncConfig
from chuk_live_sync.live import MemorySession, SessionAdapter
from chuk_live_sync.sync import SongSynchronizer, load_song


async def main() -> None:
    """Run the demo song against an in-memory session."""
    here = Path(__file__).parent
    song = load_song(here / "songs" / "demo.yaml")
    config = SyncConfig(seed=42)

    session = MemorySession(device_parameters={"Operator": ["Device On", "Filter Freq"]})
    report = await SongSynchronizer(SessionAdapter(session), config).sync(song)

    print("Report:")
    print(json.dumps(report.to_dict(), indent=2))
    print("\nSession:")
    print(json.dumps(session.summary(), indent=2))

    path = save_harmony_preview(song, config.make_generator(), here / "output" / "demo_harmony.mid")
    print(f"\nHarmony preview: {path}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
