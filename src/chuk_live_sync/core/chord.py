"""
Chord primitives - ChordSymbol and its four-voice voicing.

Chord symbols arrive as compact strings ("G", "Gm", "Bbmaj7", "E#/G").
Only the root and the major/minor quality matter for voicing; slash bass
notes and extensions are read past.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from .pitch import Interval, PitchClass

_ROOT_PATTERN = re.compile(r"^([A-Ga-g][#b]?)")

# A standalone "m" in the quality suffix: "Gm", "Gm7" are minor, "Gmaj7", "Gdim" are not
_MINOR_PATTERN = re.compile(r"(?<![a-zA-Z])m(?![a-zA-Z])")


class Voice(str, Enum):
    """The four voices of a generated chord."""

    ROOT = "root"
    THIRD = "third"
    FIFTH = "fifth"
    OCTAVE = "octave"


@dataclass(frozen=True)
class ChordSymbol:
    """
    A parsed chord symbol.

    Immutable and hashable.
    """

    root: PitchClass
    minor: bool = False
    symbol: str = ""

    @property
    def third(self) -> Interval:
        """Minor or major third, depending on quality."""
        return Interval.MINOR_THIRD if self.minor else Interval.MAJOR_THIRD

    def voicing(self, octave: int) -> list[tuple[Voice, int]]:
        """
        Root-position voicing with the root doubled at the octave.

        Args:
            octave: Octave for the root

        Returns:
            (voice, pitch) pairs in ascending pitch order
        """
        root_pitch = self.root.at_octave(octave)
        return [
            (Voice.ROOT, root_pitch),
            (Voice.THIRD, self.third.above(root_pitch)),
            (Voice.FIFTH, Interval.PERFECT_FIFTH.above(root_pitch)),
            (Voice.OCTAVE, Interval.OCTAVE.above(root_pitch)),
        ]

    def __str__(self) -> str:
        return f"{self.root.spell()}{'m' if self.minor else ''}"

    @classmethod
    def parse(cls, symbol: str) -> ChordSymbol:
        """
        Parse a chord symbol.

        Everything after the first "/" is ignored. Input without a
        recognisable note letter degenerates to C.
        """
        head = symbol.split("/", 1)[0].strip()

        match = _ROOT_PATTERN.match(head)
        if match:
            root = PitchClass.parse(match.group(1))
            quality = head[match.end() :]
        else:
            root = PitchClass.C
            quality = head

        return cls(root=root, minor=bool(_MINOR_PATTERN.search(quality)), symbol=symbol)
