"""
Song synchronizer - the top of the engine.

One run applies a song to the session in a fixed order:

    0. tempo and time signature
    1. tracks (with their properties and static clips)
    2. sections as cues (needs the placeholder track from the provisioner)
    3. instruments and device chains
    4. one generated chord clip per section on every chords track

Every remote call is awaited before the next. There is no rollback: a
failure part way through leaves the session as far as it got.
"""

from __future__ import annotations

import logging

from chuk_live_sync.config import SyncConfig
from chuk_live_sync.constants import CLIP_KINDS, ErrorMessages, SuccessMessages
from chuk_live_sync.harmony import HarmonyGenerator
from chuk_live_sync.live.adapter import SessionAdapter
from chuk_live_sync.models.session import SyncReport
from chuk_live_sync.models.song import Song, SongStructure, TrackSpec
from chuk_live_sync.sync.cues import CueReconciler
from chuk_live_sync.sync.instruments import InstrumentManager
from chuk_live_sync.sync.meter import MeterModel
from chuk_live_sync.sync.tracks import TrackProvisioner, resolve_track_color

logger = logging.getLogger(__name__)


class SongSynchronizer:
    """
    Applies a Song to a live session.

    Example:
        sync = SongSynchronizer(SessionAdapter(song_handle), SyncConfig(seed=7))
        report = await sync.sync(song)
    """

    def __init__(
        self,
        adapter: SessionAdapter,
        config: SyncConfig | None = None,
        generator: HarmonyGenerator | None = None,
    ):
        self.adapter = adapter
        self.config = config or SyncConfig()
        self.generator = generator or self.config.make_generator()
        self.meter = MeterModel(adapter)
        self.provisioner = TrackProvisioner(adapter)
        self.cues = CueReconciler(
            adapter,
            self.meter,
            self.provisioner,
            tolerance=self.config.cue_tolerance,
            placeholder_name=self.config.placeholder_track_name,
            end_name=self.config.end_cue_name,
        )
        self.instruments = InstrumentManager(adapter, self.provisioner)

    async def sync(self, song: Song) -> SyncReport:
        """
        Run the whole pipeline for one song.

        Args:
            song: Validated, immutable song description

        Returns:
            Summary of what was written
        """
        report = SyncReport()

        await self.apply_song_properties(song.song_structure)

        report.tracks = await self.provisioner.provision_all(song.tracks)
        report.cues = await self.cues.reconcile(song.sections)
        report.instruments_added = len(await self.instruments.attach_all(song.tracks))
        report.chord_clips = await self.write_chord_clips(song)

        report.warnings = list(self.adapter.warnings)
        logger.info(
            SuccessMessages.SONG_SYNCED.format(
                tracks=len(report.tracks), cues=len(report.cues), clips=report.chord_clips
            )
        )
        if report.warnings:
            logger.info(f"{len(report.warnings)} warnings during sync")
        return report

    async def apply_song_properties(self, structure: SongStructure) -> None:
        """Set tempo and time signature before anything reads the meter."""
        logger.info(
            f"Setting tempo {structure.tempo} BPM, "
            f"signature {structure.signature_numerator}/{structure.signature_denominator}"
        )
        await self.adapter.set_tempo(structure.tempo)
        await self.adapter.set_time_signature(
            structure.signature_numerator, structure.signature_denominator
        )

    async def write_chord_clips(self, song: Song) -> int:
        """
        Write one generated clip per section onto each chords track.

        Returns:
            Number of clips written
        """
        chord_tracks = song.chord_tracks()
        if not chord_tracks:
            logger.info("No chord tracks found")
            return 0

        written = 0
        for spec in chord_tracks:
            written += await self._write_track_chords(spec, song)
        return written

    async def _write_track_chords(self, spec: TrackSpec, song: Song) -> int:
        if spec.kind not in CLIP_KINDS:
            message = ErrorMessages.CHORDS_TRACK_WITHOUT_CLIPS.format(
                name=spec.name, kind=spec.kind.value
            )
            logger.warning(message)
            self.adapter.warnings.append(message)
            return 0

        handle = self.provisioner.handle_for(spec)
        if handle is None:
            logger.warning(f"Chords track '{spec.name}' was not provisioned; skipping")
            return 0

        color = resolve_track_color(spec.color) if spec.color else None
        written = 0
        for section in song.sections:
            try:
                meter = await self.meter.current()
                clip = self.generator.section_clip(section, meter, color=color)
                await self.provisioner.create_arrangement_clip(handle, clip)
            except Exception:
                logger.error(
                    f"Error creating chord clip for section '{section.name}' on '{spec.name}'"
                )
                raise
            logger.info(
                f"Chord clip '{section.name}' on '{spec.name}': {len(clip.notes)} notes"
            )
            written += 1
        return written
