"""
Song to session synchronization.

The pipeline:
    Song description (JSON/YAML) → Song (validated, immutable)
    → tempo/signature → tracks → section cues → instruments
    → generated chord clips

- SongSynchronizer: Runs the pipeline against a SessionAdapter
- TrackProvisioner / CueReconciler / InstrumentManager: One stage each
- MeterModel: Bar to beat conversion against the live meter
- load_song / parse_song: Input layer
"""

from chuk_live_sync.sync.cues import CueReconciler
from chuk_live_sync.sync.instruments import InstrumentManager
from chuk_live_sync.sync.loader import load_song, parse_song, parse_song_text
from chuk_live_sync.sync.meter import MeterModel
from chuk_live_sync.sync.orchestrator import SongSynchronizer
from chuk_live_sync.sync.tracks import TrackProvisioner, resolve_track_color

__all__ = [
    "CueReconciler",
    "InstrumentManager",
    "MeterModel",
    "SongSynchronizer",
    "TrackProvisioner",
    "load_song",
    "parse_song",
    "parse_song_text",
    "resolve_track_color",
]
