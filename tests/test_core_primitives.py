"""
Tests for core primitives.

Tests cover:
- PitchClass and Interval (pitch.py)
- ChordSymbol and Voice (chord.py)
- Meter (meter.py)
- Track colors (color.py)
"""

import pytest

from chuk_live_sync.core import (
    GRAY_VALUE,
    ChordSymbol,
    Interval,
    Meter,
    PitchClass,
    Voice,
    parse_color,
)


class TestPitchClass:
    """Tests for PitchClass enum."""

    def test_pitch_values(self) -> None:
        """Pitch classes have correct values."""
        assert PitchClass.C == 0
        assert PitchClass.F == 5
        assert PitchClass.G == 7
        assert PitchClass.B == 11

    def test_parse(self) -> None:
        """Parse pitch class from string."""
        assert PitchClass.parse("C") == PitchClass.C
        assert PitchClass.parse("c#") == PitchClass.Cs
        assert PitchClass.parse("Db") == PitchClass.Cs

    def test_parse_unusual_enharmonics(self) -> None:
        """E#, B#, Cb and Fb resolve to their sounding pitch."""
        assert PitchClass.parse("E#") == PitchClass.F
        assert PitchClass.parse("B#") == PitchClass.C
        assert PitchClass.parse("Cb") == PitchClass.B
        assert PitchClass.parse("Fb") == PitchClass.E

    def test_parse_invalid(self) -> None:
        """Unknown names raise ValueError."""
        with pytest.raises(ValueError):
            PitchClass.parse("H")

    def test_at_octave(self) -> None:
        """Octave 3 puts C at 36."""
        assert PitchClass.C.at_octave(3) == 36
        assert PitchClass.A.at_octave(3) == 45

    def test_spell(self) -> None:
        """Spelling uses sharps."""
        assert PitchClass.Fs.spell() == "F#"


class TestInterval:
    """Tests for Interval."""

    def test_named_intervals(self) -> None:
        """Named intervals have the right size."""
        assert Interval.MINOR_THIRD.semitones == 3
        assert Interval.MAJOR_THIRD.semitones == 4
        assert Interval.PERFECT_FIFTH.semitones == 7
        assert Interval.OCTAVE.semitones == 12

    def test_above(self) -> None:
        """An interval above a pitch adds its semitones."""
        assert Interval.PERFECT_FIFTH.above(36) == 43

    def test_equality(self) -> None:
        """Intervals compare by size."""
        assert Interval(7) == Interval.PERFECT_FIFTH
        assert len({Interval(3), Interval.MINOR_THIRD}) == 1
        assert repr(Interval(7)) == "Interval.PERFECT_FIFTH"


class TestChordSymbol:
    """Tests for chord symbol parsing and voicing."""

    def test_major(self) -> None:
        """A bare root is major."""
        chord = ChordSymbol.parse("G")
        assert chord.root == PitchClass.G
        assert chord.minor is False

    def test_minor(self) -> None:
        """A standalone m marks minor."""
        chord = ChordSymbol.parse("Gm")
        assert chord.root == 7
        assert chord.minor is True

    def test_minor_with_extension(self) -> None:
        """Extensions after the m keep it minor."""
        assert ChordSymbol.parse("Am7").minor is True
        assert ChordSymbol.parse("Bbm").root == PitchClass.As
        assert ChordSymbol.parse("Bbm").minor is True

    def test_maj_and_dim_are_not_minor(self) -> None:
        """Letters that merely contain an m do not make the chord minor."""
        assert ChordSymbol.parse("Gmaj7").minor is False
        assert ChordSymbol.parse("Gdim").minor is False

    def test_slash_bass_ignored(self) -> None:
        """Everything after the slash is read past."""
        chord = ChordSymbol.parse("E#/G")
        assert chord.root == 5
        assert chord.minor is False

    def test_unrecognised_root_defaults_to_c(self) -> None:
        """Input without a note letter degenerates to C."""
        assert ChordSymbol.parse("??").root == PitchClass.C

    def test_major_voicing(self) -> None:
        """Major voicing: root, major third, fifth, octave."""
        voicing = ChordSymbol.parse("C").voicing(3)
        assert voicing == [
            (Voice.ROOT, 36),
            (Voice.THIRD, 40),
            (Voice.FIFTH, 43),
            (Voice.OCTAVE, 48),
        ]

    def test_minor_voicing(self) -> None:
        """Minor voicing lowers the third."""
        pitches = [pitch for _, pitch in ChordSymbol.parse("Am").voicing(3)]
        assert pitches == [45, 48, 52, 57]

    def test_str(self) -> None:
        """String form is root plus quality."""
        assert str(ChordSymbol.parse("Dbm7")) == "C#m"


class TestMeter:
    """Tests for bar to beat conversion."""

    def test_common_time(self) -> None:
        """4/4: bar 2 is 8 beats."""
        assert Meter(4, 4).bar_to_beats(2) == 8

    def test_three_four(self) -> None:
        """3/4: bar 2 is 6 beats."""
        assert Meter(3, 4).bar_to_beats(2) == 6

    def test_six_eight(self) -> None:
        """6/8: one bar is 3 quarter-note beats."""
        assert Meter(6, 8).bar_to_beats(1) == 3

    def test_fractional_bars(self) -> None:
        """Fractional bars convert proportionally."""
        assert Meter(4, 4).bar_to_beats(0.5) == 2

    def test_zero_denominator_rejected(self) -> None:
        """A meter cannot have a zero denominator."""
        with pytest.raises(ValueError):
            Meter(4, 0)

    def test_coerce_falls_back(self) -> None:
        """Missing, zero or non-numeric parts fall back to 4."""
        assert Meter.coerce(None, 0) == Meter.COMMON_TIME
        assert Meter.coerce("x", 8).beats_per_bar == 2
        assert Meter.coerce(True, 4) == Meter.COMMON_TIME

    def test_coerce_numeric_strings(self) -> None:
        """Numeric strings are accepted."""
        assert Meter.coerce("3", "4").beats_per_bar == 3

    def test_str(self) -> None:
        """String form is n/d."""
        assert str(Meter(6, 8)) == "6/8"


class TestColors:
    """Tests for track colors."""

    def test_named(self) -> None:
        """Names are case-insensitive."""
        assert parse_color("Red") == 0xFF0000
        assert parse_color("gray") == GRAY_VALUE

    def test_hex(self) -> None:
        """Hex strings with or without prefix."""
        assert parse_color("#00ff00") == 0x00FF00
        assert parse_color("0x123456") == 0x123456
        assert parse_color("ABCDEF") == 0xABCDEF

    def test_unknown(self) -> None:
        """Unknown names and empty values give None."""
        assert parse_color("unicorn") is None
        assert parse_color("#12345") is None
        assert parse_color(None) is None
