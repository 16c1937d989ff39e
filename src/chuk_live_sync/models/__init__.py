"""
Models for the sync engine.

This module provides:
- Song: Declarative song description (pydantic, immutable)
- SongStructure / Section: Timing and the ordered section list
- TrackSpec / ClipSpec / InstrumentSpec: What to provision per track
- Note / ClipWithNotes: Session-side clip content in beats
- TrackHandle: Positional reference to a provisioned track
- CueState: Presence of a cue at a position
- SyncReport: Summary of one run
"""

from chuk_live_sync.models.session import (
    ClipWithNotes,
    CueState,
    Note,
    SyncReport,
    TrackHandle,
)
from chuk_live_sync.models.song import (
    ClipSpec,
    DeviceSpec,
    ExternalInstrument,
    InstrumentSpec,
    NoteSpec,
    Section,
    Song,
    SongStructure,
    TrackSpec,
)

__all__ = [
    "ClipSpec",
    "ClipWithNotes",
    "CueState",
    "DeviceSpec",
    "ExternalInstrument",
    "InstrumentSpec",
    "Note",
    "NoteSpec",
    "Section",
    "Song",
    "SongStructure",
    "SyncReport",
    "TrackHandle",
    "TrackSpec",
]
