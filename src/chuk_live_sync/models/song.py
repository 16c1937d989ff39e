"""
Song description model - the declarative input to a sync run.

A Song contains:
- Song structure (tempo, time signature, ordered sections with chords)
- Tracks (kind, role, mixer settings, static clips, instruments)

Models are frozen: a Song is immutable input for the whole run.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from chuk_live_sync.constants import (
    CHORDS_ROLE,
    DEFAULT_ENERGY,
    ErrorMessages,
    TrackKind,
)


class Section(BaseModel):
    """
    A structural segment of the song.

    Sections become named cues in the session and, on chords tracks,
    one generated clip each.
    """

    name: str = Field(..., min_length=1, description="Section name (e.g., 'Intro', 'Verse')")
    start_bar: int = Field(..., gt=0, description="1-based bar where the section starts")
    length_bars: int = Field(..., gt=0, description="Length in bars")
    mood: str | None = Field(None, description="Free-form mood tag")
    chords: list[str] | None = Field(
        None, description="One chord symbol per bar, reused cyclically"
    )
    energy: float | None = Field(None, ge=0.0, le=1.0, description="Intensity 0-1")

    model_config = {"frozen": True}

    @property
    def end_bar(self) -> int:
        """First bar after this section (1-based)."""
        return self.start_bar + self.length_bars

    @property
    def intensity(self) -> float:
        """Energy with the default applied."""
        return DEFAULT_ENERGY if self.energy is None else self.energy


class SongStructure(BaseModel):
    """Global timing and the ordered section list."""

    total_length_bars: int = Field(..., gt=0, description="Nominal song length in bars")
    tempo: float = Field(..., gt=0, description="Tempo in BPM (fractional allowed)")
    signature_numerator: int = Field(..., gt=0, description="Time signature numerator")
    signature_denominator: int = Field(..., gt=0, description="Time signature denominator")
    sections: list[Section] = Field(default_factory=list, description="Ordered sections")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_sections_ordered(self) -> SongStructure:
        """Sections must be in start order and must not overlap."""
        for previous, section in zip(self.sections, self.sections[1:], strict=False):
            if section.start_bar < previous.end_bar:
                raise ValueError(
                    ErrorMessages.SECTIONS_OVERLAP.format(
                        name=section.name, start=section.start_bar, previous=previous.name
                    )
                )
        return self


class DeviceSpec(BaseModel):
    """A device in a track's declared device chain."""

    device: str = Field(..., description="Device name")
    preset: str | None = Field(None, description="Preset to load")

    model_config = {"frozen": True}


class ExternalInstrument(BaseModel):
    """Hardware instrument routing for a track."""

    midi_port: str
    midi_channel: int = Field(..., ge=1, le=16)
    audio_from: str
    latency_ms: int

    model_config = {"frozen": True}


class InstrumentSpec(BaseModel):
    """An instrument to load onto a track, with optional parameter values."""

    name: str = Field(..., description="Instrument/device name")
    preset: str | None = Field(None, description="Preset to load")
    parameters: dict[str, Any] = Field(
        default_factory=dict, description="Parameter name to value"
    )

    model_config = {"frozen": True}


class NoteSpec(BaseModel):
    """A note inside a static clip (beats relative to clip start)."""

    pitch: int
    start: float = Field(0.0, ge=0.0)
    duration: float = Field(..., gt=0.0)
    velocity: int = 100

    model_config = {"frozen": True}


class ClipSpec(BaseModel):
    """
    A static clip declared on a track.

    Times are already in session beats.
    """

    start_time: float = Field(0.0, alias="startTime", ge=0.0, description="Start beat")
    length: float = Field(..., gt=0.0, description="Length in beats")
    name: str | None = None
    color: str | None = None
    notes: list[NoteSpec] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True}


class TrackSpec(BaseModel):
    """
    A track to provision in the session.

    The session index is not part of the description; it is assigned
    when the track is created and held by the provisioner.
    """

    name: str = Field(..., description="Track name")
    role: str = Field(..., description="Free-form role; 'chords' receives generated harmony")
    type: TrackKind = Field(..., description="audio, midi, return or master")
    device_chain: list[DeviceSpec] = Field(default_factory=list)
    external_instrument: ExternalInstrument | None = None
    instruments: list[InstrumentSpec] = Field(default_factory=list)
    color: str | None = None
    group: str | None = None
    comments: str | None = None
    volume: float | None = None
    pan: float | None = None
    muted: bool | None = None
    solo: bool | None = None
    armed: bool | None = None
    clips: list[ClipSpec] = Field(default_factory=list)

    model_config = {"frozen": True}

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Accept track types in any case."""
        return v.strip().lower() if isinstance(v, str) else v

    @property
    def kind(self) -> TrackKind:
        return self.type

    @property
    def is_chords(self) -> bool:
        """True for tracks that receive generated chord clips."""
        return self.role.strip().lower() == CHORDS_ROLE


class Song(BaseModel):
    """
    A complete song description.

    This is the immutable input to one synchronization run.
    """

    song_structure: SongStructure
    tracks: list[TrackSpec] = Field(default_factory=list)

    model_config = {"frozen": True}

    @property
    def sections(self) -> list[Section]:
        return self.song_structure.sections

    def chord_tracks(self) -> list[TrackSpec]:
        """Tracks whose role is 'chords' (case-insensitive)."""
        return [track for track in self.tracks if track.is_chords]
