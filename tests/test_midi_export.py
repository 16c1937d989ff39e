"""
Tests for the harmony MIDI preview.
"""

import random
from pathlib import Path

import mido
import pytest

from chuk_live_sync.compiler import (
    TICKS_PER_BEAT,
    MidiEvent,
    beats_to_ticks,
    clip_events,
    events_to_midi,
    render_harmony,
    save_harmony_preview,
)
from chuk_live_sync.core import Meter
from chuk_live_sync.harmony import HarmonyGenerator, Humanizer
from chuk_live_sync.models import ClipWithNotes, Note, Song


def seeded_generator(seed: int = 0) -> HarmonyGenerator:
    return HarmonyGenerator(Humanizer(random.Random(seed)))


class TestMidiEvent:
    """Tests for MidiEvent validation."""

    def test_valid(self) -> None:
        """In-range events are accepted."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100)
        assert event.channel == 0

    def test_out_of_range(self) -> None:
        """Out-of-range values raise ValueError."""
        with pytest.raises(ValueError):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=1, velocity=1)
        with pytest.raises(ValueError):
            MidiEvent(pitch=60, start_ticks=-1, duration_ticks=1, velocity=1)


class TestConversion:
    """Tests for clip and event conversion."""

    def test_beats_to_ticks(self) -> None:
        """Beats scale by the resolution."""
        assert beats_to_ticks(1.5) == 720
        assert beats_to_ticks(2, ticks_per_beat=96) == 192

    def test_clip_events_absolute(self) -> None:
        """Clip start is added to each note's start."""
        clip = ClipWithNotes(
            start=16,
            length=4,
            notes=[Note(60, 1.0, 0.5, 90), Note(64, 0.0, 1.0, 80, muted=True)],
        )
        events = clip_events(clip)
        assert len(events) == 1
        assert events[0].start_ticks == 17 * TICKS_PER_BEAT
        assert events[0].duration_ticks == TICKS_PER_BEAT // 2

    def test_events_to_midi(self) -> None:
        """Events become note_on/note_off pairs after the meta header."""
        events = [MidiEvent(60, 0, 480, 100), MidiEvent(64, 480, 480, 90)]
        mid = events_to_midi(events, tempo_bpm=96, meter=Meter(3, 4))

        track = mid.tracks[0]
        tempo = next(m for m in track if m.type == "set_tempo")
        signature = next(m for m in track if m.type == "time_signature")
        assert tempo.tempo == 625000
        assert (signature.numerator, signature.denominator) == (3, 4)
        assert sum(1 for m in track if m.type == "note_on") == 2
        assert sum(1 for m in track if m.type == "note_off") == 2


class TestRenderHarmony:
    """Tests for rendering a whole song."""

    def test_render(self, song: Song) -> None:
        """Every generated note is rendered; sections become markers."""
        mid = render_harmony(song, seeded_generator())

        track = mid.tracks[0]
        assert sum(1 for m in track if m.type == "note_on") == 48
        markers = [m.text for m in track if m.type == "marker"]
        assert markers == ["Intro", "Verse"]

    def test_deterministic(self, song: Song) -> None:
        """Same seed, same file."""
        a = render_harmony(song, seeded_generator(4))
        b = render_harmony(song, seeded_generator(4))
        assert [str(m) for m in a.tracks[0]] == [str(m) for m in b.tracks[0]]

    def test_save(self, song: Song, temp_midi_path: Path) -> None:
        """The preview is written and can be read back."""
        path = save_harmony_preview(song, seeded_generator(), temp_midi_path)
        assert path.exists()

        loaded = mido.MidiFile(str(path))
        assert loaded.ticks_per_beat == TICKS_PER_BEAT
        assert sum(1 for m in loaded.tracks[0] if m.type == "note_on") == 48
