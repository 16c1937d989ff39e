"""
Constants and enums for the sync engine.

No magic strings - use enums and named constants for constrained values.
"""

from enum import Enum


class TrackKind(str, Enum):
    """Kinds of track a song description may declare."""

    AUDIO = "audio"
    MIDI = "midi"
    RETURN = "return"
    MASTER = "master"


# Track kinds that can be record-armed
ARMABLE_KINDS: frozenset[TrackKind] = frozenset({TrackKind.AUDIO, TrackKind.MIDI})

# Track kinds with clip slots; return and master tracks have none
CLIP_KINDS: frozenset[TrackKind] = frozenset({TrackKind.AUDIO, TrackKind.MIDI})

# Roles with engine-level meaning (compared case-insensitively)
CHORDS_ROLE = "chords"
DUMMY_ROLE = "dummy"

# Placeholder track hosting the arrangement-length regions
DUMMY_TRACK_NAME = "Arrangement Length"

# Final cue placed after the last section
END_CUE_NAME = "End"

# Cues are matched by time only; this is how close counts as "the same cue"
CUE_TIME_TOLERANCE = 1e-3

# Octave used for generated chord roots (pitch = pitch_class + 12 * octave)
DEFAULT_CHORD_OCTAVE = 3

# Energy used when a section does not declare one
DEFAULT_ENERGY = 0.5

# Velocity bounds applied after humanization
MIN_VELOCITY = 1
MAX_VELOCITY = 127

# Fallback meter when the session cannot report one
DEFAULT_NUMERATOR = 4
DEFAULT_DENOMINATOR = 4

# Environment variable naming the remote binding factory ("module:attr")
BINDING_ENV_VAR = "CHUK_LIVE_SYNC_BINDING"
OUTPUT_DIR_ENV_VAR = "CHUK_LIVE_SYNC_OUTPUT_DIR"


class ErrorMessages:
    """Standardized error messages."""

    UNKNOWN_TRACK_KIND = "Unknown track type: '{kind}'."
    NO_CLIP_SLOT = "No clip slot available on track {index}."
    CLIP_NOT_CREATED = "Failed to create MIDI clip on track {index}."
    TRACK_NOT_FOUND = "Track '{name}' not found in session."
    TRACK_INDEX_MISSING = "Track index {index} is not present in the session."
    CAPABILITY_MISSING = "Capability '{name}' is not available on {target}."
    NO_CHORDS_TRACK = 'Song must include at least one track with role "chords".'
    CHORDS_TRACK_WITHOUT_CLIPS = (
        "Chords track '{name}' is a {kind} track and cannot hold clips; skipping."
    )
    SECTIONS_OVERLAP = "Section '{name}' starts at bar {start} before '{previous}' ends."
    BAD_BINDING = "Invalid binding '{spec}'. Expected format 'module:attribute'."


class SuccessMessages:
    """Standardized success messages."""

    TRACK_CREATED = "Track '{name}' created at index {index}."
    CUE_PLACED = "Cue '{name}' placed at beat {beat}."
    INSTRUMENT_ADDED = "Instrument '{name}' added to track {index}."
    SONG_SYNCED = "Song synchronized: {tracks} tracks, {cues} cues, {clips} chord clips."
