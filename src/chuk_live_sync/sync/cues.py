"""
Cue reconciliation - song sections as named cues in the session.

Cues have no stable key in the session; a cue is "the one at this time",
matched within a small tolerance. The session only offers a toggle for
creating them (toggling an occupied position deletes the cue there), so
every placement first checks whether a cue is already present and only
toggles from the absent state.

Cues alone do not reliably extend the session's arrangement length, so an
empty region per section is written onto a placeholder track first.
"""

from __future__ import annotations

import logging
from typing import Any

from chuk_live_sync.constants import (
    CUE_TIME_TOLERANCE,
    DUMMY_ROLE,
    DUMMY_TRACK_NAME,
    END_CUE_NAME,
    SuccessMessages,
    TrackKind,
)
from chuk_live_sync.live.adapter import SessionAdapter
from chuk_live_sync.live.errors import LiveSyncError, RemoteOperationError
from chuk_live_sync.models.session import ClipWithNotes, CueState, TrackHandle
from chuk_live_sync.models.song import Section, TrackSpec
from chuk_live_sync.sync.meter import MeterModel
from chuk_live_sync.sync.tracks import TrackProvisioner

logger = logging.getLogger(__name__)


class CueReconciler:
    """Places, finds and names cues at beat positions."""

    def __init__(
        self,
        adapter: SessionAdapter,
        meter: MeterModel,
        provisioner: TrackProvisioner,
        tolerance: float = CUE_TIME_TOLERANCE,
        placeholder_name: str = DUMMY_TRACK_NAME,
        end_name: str = END_CUE_NAME,
    ):
        self.adapter = adapter
        self.meter = meter
        self.provisioner = provisioner
        self.tolerance = tolerance
        self.placeholder_name = placeholder_name
        self.end_name = end_name

    async def reconcile(self, sections: list[Section]) -> list[tuple[str, float]]:
        """
        Realize every section as a cue, plus a final end cue.

        Args:
            sections: Ordered, non-overlapping sections

        Returns:
            (name, beat) for each cue placed, in order
        """
        if not sections:
            return []

        logger.info(f"Creating {len(sections)} section cues...")
        placeholder = await self.provisioner.provision(
            TrackSpec(name=self.placeholder_name, role=DUMMY_ROLE, type=TrackKind.MIDI)
        )

        placed: list[tuple[str, float]] = []
        for section in sections:
            try:
                beat = await self._realize_section(placeholder, section)
            except Exception:
                logger.error(f"Error creating cue for section '{section.name}'")
                raise
            placed.append((section.name, beat))

        last = sections[-1]
        end_beat = await self.meter.bar_to_beats(last.start_bar + last.length_bars - 1)
        await self.place(self.end_name, end_beat)
        placed.append((self.end_name, end_beat))
        return placed

    async def _realize_section(self, placeholder: TrackHandle, section: Section) -> float:
        start = await self.meter.bar_to_beats(section.start_bar - 1)
        length = await self.meter.bar_to_beats(section.length_bars)

        await self.provisioner.create_arrangement_clip(
            placeholder, ClipWithNotes(start=start, length=length, name=section.name)
        )
        await self.place(section.name, start)
        return start

    async def nearest_cue(self, beat: float) -> Any | None:
        """
        The cue closest to beat, if one lies within tolerance.

        Cues that cannot be read are logged and skipped.
        """
        best = None
        best_distance = self.tolerance
        for cue in await self.adapter.cues():
            try:
                distance = abs(await self.adapter.cue_time(cue) - beat)
            except (LiveSyncError, TypeError, ValueError) as e:
                logger.warning(f"Skipping unreadable cue: {e}")
                continue
            if distance <= best_distance:
                best, best_distance = cue, distance
        return best

    async def state_at(self, beat: float) -> CueState:
        return CueState.PRESENT if await self.nearest_cue(beat) is not None else CueState.ABSENT

    async def place(self, name: str | None, beat: float) -> CueState:
        """
        Make sure a cue exists at beat and carries name.

        A cue already present within tolerance is reused, never toggled.

        Returns:
            The cue state at beat afterwards
        """
        state = await self.state_at(beat)
        if state is CueState.ABSENT:
            await self.adapter.move_playhead(beat)
            try:
                if await self.adapter.toggle_cue(beat):
                    state = state.toggled()
            except RemoteOperationError as e:
                logger.warning(f"Cue creation at beat {beat} failed, looking for an existing cue: {e}")

        if name:
            if await self.name_cue(beat, name):
                state = CueState.PRESENT
                logger.info(SuccessMessages.CUE_PLACED.format(name=name, beat=beat))
        return state

    async def name_cue(self, beat: float, name: str) -> bool:
        """
        Rename the cue nearest to beat.

        Returns:
            False if no cue lies within tolerance
        """
        cue = await self.nearest_cue(beat)
        if cue is None:
            logger.warning(f"No cue found near beat {beat} to name '{name}'")
            return False
        await self.adapter.set_cue_name(cue, name)
        return True
