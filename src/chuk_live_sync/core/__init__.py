"""
Core music primitives.

- PitchClass: The 12 chromatic pitch classes (0-11), enharmonic aware
- Interval: Distance between pitches in semitones
- ChordSymbol: Parsed chord symbol (root + major/minor) and its voicing
- Voice: The four voices of a generated chord
- Meter: Time signature and bar to beat conversion
- parse_color: Track color names and hex strings to 0xRRGGBB
"""

from chuk_live_sync.core.chord import ChordSymbol, Voice
from chuk_live_sync.core.color import GRAY_VALUE, NAMED_COLORS, parse_color
from chuk_live_sync.core.meter import Meter
from chuk_live_sync.core.pitch import Interval, PitchClass

__all__ = [
    # Pitch
    "PitchClass",
    "Interval",
    # Chord
    "ChordSymbol",
    "Voice",
    # Time
    "Meter",
    # Color
    "GRAY_VALUE",
    "NAMED_COLORS",
    "parse_color",
]
