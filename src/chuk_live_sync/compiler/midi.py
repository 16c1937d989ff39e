"""
MIDI preview - generated harmony to a standard MIDI file.

Renders the chord clips a sync run would write, so the harmony can be
auditioned without a live session. Uses the song's own tempo and meter.
All operations are deterministic given a seeded generator.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_live_sync.core.meter import Meter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from chuk_live_sync.harmony import HarmonyGenerator
    from chuk_live_sync.models.session import ClipWithNotes
    from chuk_live_sync.models.song import Song


# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event.

    All times are in ticks (absolute from start of track).
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int  # 0-127
    channel: int = 0

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def beats_to_ticks(beats: float, ticks_per_beat: int = TICKS_PER_BEAT) -> int:
    """Convert a beat position to ticks."""
    return int(round(beats * ticks_per_beat))


def clip_events(clip: ClipWithNotes, ticks_per_beat: int = TICKS_PER_BEAT) -> list[MidiEvent]:
    """Notes of a clip as absolute-time events (clip start + note start)."""
    return [
        MidiEvent(
            pitch=note.pitch,
            start_ticks=beats_to_ticks(clip.start + note.start, ticks_per_beat),
            duration_ticks=beats_to_ticks(note.duration, ticks_per_beat),
            velocity=note.velocity,
        )
        for note in clip.notes
        if not note.muted
    ]


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: float = 120,
    meter: Meter = Meter.COMMON_TIME,
    ticks_per_beat: int = TICKS_PER_BEAT,
    markers: Sequence[tuple[str, float]] = (),
) -> MidiFile:
    """
    Convert a sequence of MidiEvents to a MidiFile.

    Args:
        events: Note events
        tempo_bpm: Tempo in beats per minute
        meter: Time signature written to the file
        ticks_per_beat: Resolution (default 480)
        markers: (name, beat) pairs written as marker meta events

    Returns:
        A mido MidiFile ready to be saved
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)

    tempo_us = int(60_000_000 / tempo_bpm)
    track.append(MetaMessage("set_tempo", tempo=tempo_us, time=0))
    track.append(
        MetaMessage(
            "time_signature",
            numerator=int(meter.numerator),
            denominator=int(meter.denominator),
            time=0,
        )
    )

    messages: list[tuple[int, Message | MetaMessage]] = []
    for name, beat in markers:
        messages.append((beats_to_ticks(beat, ticks_per_beat), MetaMessage("marker", text=name)))

    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    # note_off before note_on at the same tick so held chords re-strike cleanly
    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def render_harmony(song: Song, generator: HarmonyGenerator) -> MidiFile:
    """
    Render the generated chord clips for every section of a song.

    Sections become marker events; the meter is the song's declared one.

    Args:
        song: Song description
        generator: Harmony generator (seed it for reproducible output)

    Returns:
        A single-track MidiFile
    """
    structure = song.song_structure
    meter = Meter.coerce(structure.signature_numerator, structure.signature_denominator)

    events: list[MidiEvent] = []
    markers: list[tuple[str, float]] = []
    for section in song.sections:
        clip = generator.section_clip(section, meter)
        markers.append((section.name, clip.start))
        events.extend(clip_events(clip))

    return events_to_midi(events, tempo_bpm=structure.tempo, meter=meter, markers=markers)


def save_harmony_preview(song: Song, generator: HarmonyGenerator, path: Path | str) -> Path:
    """Render the harmony preview and write it to path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    render_harmony(song, generator).save(str(path))
    return path
