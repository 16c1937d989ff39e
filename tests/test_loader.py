"""
Tests for song models and the song loader.
"""

import copy
import json
from pathlib import Path
from typing import Any

import pytest
import yaml
from pydantic import ValidationError

from chuk_live_sync.constants import TrackKind
from chuk_live_sync.live import SongValidationError
from chuk_live_sync.models import Section, SongStructure, TrackSpec
from chuk_live_sync.sync import load_song, parse_song, parse_song_text


class TestSongModels:
    """Tests for the pydantic song models."""

    def test_section_defaults(self) -> None:
        """Energy defaults to 0.5; end bar follows from the length."""
        section = Section(name="Intro", start_bar=1, length_bars=4)
        assert section.intensity == 0.5
        assert section.end_bar == 5

    def test_section_energy_range(self) -> None:
        """Energy must be within 0..1."""
        with pytest.raises(ValidationError):
            Section(name="Intro", start_bar=1, length_bars=4, energy=1.5)

    def test_section_bars_positive(self) -> None:
        """Bars are 1-based and lengths positive."""
        with pytest.raises(ValidationError):
            Section(name="Intro", start_bar=0, length_bars=4)
        with pytest.raises(ValidationError):
            Section(name="Intro", start_bar=1, length_bars=0)

    def test_sections_must_not_overlap(self) -> None:
        """Overlapping sections are rejected."""
        with pytest.raises(ValidationError, match="Verse"):
            SongStructure(
                total_length_bars=8,
                tempo=120,
                signature_numerator=4,
                signature_denominator=4,
                sections=[
                    Section(name="Intro", start_bar=1, length_bars=4),
                    Section(name="Verse", start_bar=3, length_bars=4),
                ],
            )

    def test_adjacent_sections_allowed(self) -> None:
        """A section may start on the bar the previous one ends."""
        structure = SongStructure(
            total_length_bars=8,
            tempo=120.5,
            signature_numerator=4,
            signature_denominator=4,
            sections=[
                Section(name="Intro", start_bar=1, length_bars=4),
                Section(name="Verse", start_bar=5, length_bars=4),
            ],
        )
        assert len(structure.sections) == 2

    def test_track_type_case_insensitive(self) -> None:
        """Track types are normalised to lower case."""
        track = TrackSpec(name="Keys", role="Chords", type="MIDI")
        assert track.kind == TrackKind.MIDI
        assert track.is_chords

    def test_unknown_track_type(self) -> None:
        """Unknown types are rejected."""
        with pytest.raises(ValidationError):
            TrackSpec(name="Keys", role="chords", type="video")

    def test_clip_start_alias(self) -> None:
        """Static clips accept startTime."""
        track = TrackSpec(
            name="Keys", role="chords", type="midi", clips=[{"startTime": 8, "length": 4}]
        )
        assert track.clips[0].start_time == 8

    def test_external_instrument_channel(self) -> None:
        """MIDI channels are 1..16."""
        with pytest.raises(ValidationError):
            TrackSpec(
                name="Synth",
                role="lead",
                type="midi",
                external_instrument={
                    "midi_port": "USB",
                    "midi_channel": 17,
                    "audio_from": "In 1",
                    "latency_ms": 5,
                },
            )


class TestLoader:
    """Tests for loading songs from JSON and YAML."""

    def test_parse_song(self, song_data: dict[str, Any]) -> None:
        """Valid data produces a Song."""
        song = parse_song(song_data)
        assert [s.name for s in song.sections] == ["Intro", "Verse"]
        assert [t.name for t in song.chord_tracks()] == ["Keys"]

    def test_requires_chords_track(self, song_data: dict[str, Any]) -> None:
        """A song without a chords track is rejected by default."""
        data = copy.deepcopy(song_data)
        data["tracks"][0]["role"] = "pads"
        with pytest.raises(SongValidationError, match="chords"):
            parse_song(data)
        assert parse_song(data, require_chords=False).chord_tracks() == []

    def test_validation_error_wrapped(self, song_data: dict[str, Any]) -> None:
        """Pydantic errors surface as SongValidationError."""
        data = copy.deepcopy(song_data)
        data["song_structure"]["tempo"] = -1
        with pytest.raises(SongValidationError):
            parse_song(data)

    def test_not_a_mapping(self) -> None:
        """Documents that are not mappings are rejected."""
        with pytest.raises(SongValidationError):
            parse_song_text("- just\n- a list\n")

    def test_bad_syntax(self) -> None:
        """Unparseable text is rejected."""
        with pytest.raises(SongValidationError):
            parse_song_text("song_structure: [unclosed")

    def test_load_json(self, song_file: Path) -> None:
        """JSON files load."""
        assert load_song(song_file).song_structure.tempo == 96

    def test_load_yaml(self, temp_dir: Path, song_data: dict[str, Any]) -> None:
        """YAML files load."""
        path = temp_dir / "song.yaml"
        path.write_text(yaml.safe_dump(song_data))
        assert len(load_song(path).tracks) == 2

    def test_missing_file(self, temp_dir: Path) -> None:
        """A missing file is a SongValidationError."""
        with pytest.raises(SongValidationError):
            load_song(temp_dir / "nope.json")

    def test_json_text(self, song_data: dict[str, Any]) -> None:
        """JSON text parses through the same path."""
        song = parse_song_text(json.dumps(song_data))
        assert song.song_structure.signature_numerator == 4
