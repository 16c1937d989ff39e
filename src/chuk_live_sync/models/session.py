"""
Session-side models - what the engine writes into the live set.

Notes and clips are expressed in session beats. Tracks are addressed by
position only: the remote object model has no stable key, so a TrackHandle
is just the index the track had when it was provisioned. Reordering or
deleting tracks outside the engine invalidates every handle taken before.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from chuk_live_sync.constants import TrackKind


@dataclass(frozen=True)
class Note:
    """A single note, positioned relative to its clip's start."""

    pitch: int
    start: float  # beats from clip start
    duration: float  # beats
    velocity: int
    muted: bool = False

    def to_remote(self) -> tuple[int, float, float, int, bool]:
        """Wire form: (pitch, start, duration, velocity, muted)."""
        return (self.pitch, self.start, self.duration, self.velocity, self.muted)


@dataclass
class ClipWithNotes:
    """A clip ready to be written into the arrangement."""

    start: float  # beats on the arrangement timeline
    length: float  # beats
    name: str | None = None
    color: int | None = None
    notes: list[Note] = field(default_factory=list)


@dataclass(frozen=True)
class TrackHandle:
    """
    Positional reference to a provisioned track.

    Only valid while the session's track order is unchanged.
    """

    index: int
    name: str
    kind: TrackKind

    def __str__(self) -> str:
        return f"{self.name!r} (#{self.index}, {self.kind.value})"


class CueState(str, Enum):
    """
    Presence of a cue at a beat position.

    The session only offers a toggle, so creation is a transition
    ABSENT -> PRESENT, and toggling a PRESENT position deletes the cue.
    """

    ABSENT = "absent"
    PRESENT = "present"

    def toggled(self) -> CueState:
        return CueState.PRESENT if self is CueState.ABSENT else CueState.ABSENT


@dataclass
class SyncReport:
    """Summary of one synchronization run."""

    tracks: list[TrackHandle] = field(default_factory=list)
    cues: list[tuple[str, float]] = field(default_factory=list)
    instruments_added: int = 0
    chord_clips: int = 0
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        """JSON-friendly summary."""
        return {
            "tracks": [
                {"index": t.index, "name": t.name, "kind": t.kind.value} for t in self.tracks
            ],
            "cues": [{"name": name, "beat": beat} for name, beat in self.cues],
            "instruments_added": self.instruments_added,
            "chord_clips": self.chord_clips,
            "warnings": list(self.warnings),
        }
