"""
Harmony generator - chord symbols to humanized note lists.

Each bar of a section holds one chord from the section's chord list
(reused cyclically), voiced as root, third, fifth and octave and held for
the whole bar.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from chuk_live_sync.constants import DEFAULT_CHORD_OCTAVE
from chuk_live_sync.core.chord import ChordSymbol
from chuk_live_sync.core.meter import Meter
from chuk_live_sync.harmony.humanize import Humanizer, velocity_for_intensity
from chuk_live_sync.models.session import ClipWithNotes, Note
from chuk_live_sync.models.song import Section

logger = logging.getLogger(__name__)


class HarmonyGenerator:
    """
    Builds chord clips for song sections.

    Deterministic given a seeded Humanizer.
    """

    def __init__(self, humanizer: Humanizer | None = None, octave: int = DEFAULT_CHORD_OCTAVE):
        """
        Initialize the generator.

        Args:
            humanizer: Velocity jitter source (unseeded by default)
            octave: Octave for chord roots
        """
        self.humanizer = humanizer or Humanizer()
        self.octave = octave

    def chord_notes(self, chord: ChordSymbol, base_velocity: int, duration: float) -> list[Note]:
        """
        Voice one chord as four notes starting at beat 0.

        Args:
            chord: Parsed chord symbol
            base_velocity: Velocity before humanization
            duration: Length of every note in beats

        Returns:
            Root, third, fifth and octave notes
        """
        return [
            Note(
                pitch=pitch,
                start=0.0,
                duration=duration,
                velocity=self.humanizer.velocity(voice, base_velocity),
            )
            for voice, pitch in chord.voicing(self.octave)
        ]

    def section_notes(self, section: Section, meter: Meter) -> list[Note]:
        """
        Generate the notes for a whole section.

        Bar i uses chords[i % len(chords)]; a section without chords
        yields no notes.
        """
        if not section.chords:
            logger.info(f"No chords found in section '{section.name}'")
            return []

        bar_beats = meter.beats_per_bar
        base_velocity = velocity_for_intensity(section.intensity)
        chords = [ChordSymbol.parse(symbol) for symbol in section.chords]

        notes: list[Note] = []
        for bar in range(section.length_bars):
            chord = chords[bar % len(chords)]
            offset = bar * bar_beats
            notes.extend(
                replace(note, start=note.start + offset)
                for note in self.chord_notes(chord, base_velocity, bar_beats)
            )
        return notes

    def section_clip(
        self,
        section: Section,
        meter: Meter,
        color: int | None = None,
    ) -> ClipWithNotes:
        """
        Generated clip for a section, placed at the section's start.

        Args:
            section: The section to realize
            meter: Meter used for bar to beat conversion
            color: Optional clip color

        Returns:
            A clip named after the section
        """
        return ClipWithNotes(
            start=meter.bar_to_beats(section.start_bar - 1),
            length=meter.bar_to_beats(section.length_bars),
            name=section.name,
            color=color,
            notes=self.section_notes(section, meter),
        )
