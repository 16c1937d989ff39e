"""
Offline rendering of generated harmony.

    Song → HarmonyGenerator → ClipWithNotes → MidiEvent → MIDI File
"""

from chuk_live_sync.compiler.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    clip_events,
    events_to_midi,
    render_harmony,
    save_harmony_preview,
)

__all__ = [
    "TICKS_PER_BEAT",
    "MidiEvent",
    "beats_to_ticks",
    "clip_events",
    "events_to_midi",
    "render_harmony",
    "save_harmony_preview",
]
