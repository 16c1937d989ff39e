"""
Pytest configuration and shared fixtures.
"""

import json
import tempfile
from pathlib import Path
from typing import Any

import pytest

from chuk_live_sync.live import MemorySession, SessionAdapter
from chuk_live_sync.models import Song


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def session() -> MemorySession:
    """Empty in-memory live set."""
    return MemorySession(device_parameters={"Operator": ["Device On", "Filter Freq", "Volume"]})


@pytest.fixture
def adapter(session: MemorySession) -> SessionAdapter:
    """Adapter over the in-memory live set."""
    return SessionAdapter(session)


@pytest.fixture
def song_data() -> dict[str, Any]:
    """Intro (bars 1-4) and Verse (bars 5-12) with a chords track and a drums track."""
    return {
        "song_structure": {
            "total_length_bars": 12,
            "tempo": 96,
            "signature_numerator": 4,
            "signature_denominator": 4,
            "sections": [
                {"name": "Intro", "start_bar": 1, "length_bars": 4, "chords": ["C", "Am"]},
                {
                    "name": "Verse",
                    "start_bar": 5,
                    "length_bars": 8,
                    "chords": ["F", "G", "Em", "Am"],
                    "energy": 0.8,
                },
            ],
        },
        "tracks": [
            {
                "name": "Keys",
                "role": "chords",
                "type": "midi",
                "color": "blue",
                "volume": 0.7,
                "instruments": [
                    {"name": "Operator", "parameters": {"Filter Freq": 0.5, "Resonance": 0.2}}
                ],
            },
            {"name": "Drums", "role": "drums", "type": "audio", "muted": True},
        ],
    }


@pytest.fixture
def song(song_data: dict[str, Any]) -> Song:
    """Validated song from song_data."""
    return Song.model_validate(song_data)


@pytest.fixture
def song_file(temp_dir: Path, song_data: dict[str, Any]) -> Path:
    """song_data written as JSON."""
    path = temp_dir / "song.json"
    path.write_text(json.dumps(song_data))
    return path
