"""
Pitch primitives - PitchClass and Interval.

PitchClass covers the 12 chromatic pitches (octave-independent) and knows
how to read the note names found in chord symbols, including the enharmonic
spellings songwriters actually use (E#, B#, Cb, Fb).
Interval is the distance between pitches in semitones.
"""

from __future__ import annotations

from enum import IntEnum
from typing import ClassVar

_SHARP_NAMES: list[str] = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Every spelling a chord root may use, keyed upper-case
_NAME_TO_VALUE: dict[str, int] = {
    "C": 0,
    "B#": 0,
    "C#": 1,
    "DB": 1,
    "D": 2,
    "D#": 3,
    "EB": 3,
    "E": 4,
    "FB": 4,
    "F": 5,
    "E#": 5,
    "F#": 6,
    "GB": 6,
    "G": 7,
    "G#": 8,
    "AB": 8,
    "A": 9,
    "A#": 10,
    "BB": 10,
    "B": 11,
    "CB": 11,
}


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Enharmonic equivalents share the same value (C# == Db == 1, E# == F == 5).
    """

    C = 0
    Cs = 1  # C# / Db
    D = 2
    Ds = 3  # D# / Eb
    E = 4
    F = 5
    Fs = 6  # F# / Gb
    G = 7
    Gs = 8  # G# / Ab
    A = 9
    As = 10  # A# / Bb
    B = 11

    def at_octave(self, octave: int) -> int:
        """
        Absolute pitch for this class in the given octave.

        Octave 0 starts at pitch 0, so C at octave 3 is 36.
        """
        return self.value + 12 * octave

    def spell(self) -> str:
        """Get human-readable (sharp) name."""
        return _SHARP_NAMES[self.value]

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'c#', 'Db', 'E#'."""
        key = name.strip().upper()
        if key not in _NAME_TO_VALUE:
            raise ValueError(f"Unknown pitch class: {name}")
        return cls(_NAME_TO_VALUE[key])


class Interval:
    """
    Distance between pitches in semitones.

    Immutable and hashable.
    """

    __slots__ = ("_semitones",)
    _semitones: int

    MINOR_THIRD: ClassVar[Interval]
    MAJOR_THIRD: ClassVar[Interval]
    PERFECT_FIFTH: ClassVar[Interval]
    OCTAVE: ClassVar[Interval]

    def __init__(self, semitones: int) -> None:
        object.__setattr__(self, "_semitones", semitones)

    @property
    def semitones(self) -> int:
        """Number of semitones in this interval."""
        return self._semitones

    def above(self, pitch: int) -> int:
        """Pitch this interval above the given absolute pitch."""
        return pitch + self._semitones

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interval):
            return NotImplemented
        return bool(self._semitones == other._semitones)

    def __hash__(self) -> int:
        return hash(self._semitones)

    def __repr__(self) -> str:
        for name in ["MINOR_THIRD", "MAJOR_THIRD", "PERFECT_FIFTH", "OCTAVE"]:
            named = getattr(Interval, name, None)
            if isinstance(named, Interval) and named._semitones == self._semitones:
                return f"Interval.{name}"
        return f"Interval({self._semitones})"


Interval.MINOR_THIRD = Interval(3)
Interval.MAJOR_THIRD = Interval(4)
Interval.PERFECT_FIFTH = Interval(7)
Interval.OCTAVE = Interval(12)
