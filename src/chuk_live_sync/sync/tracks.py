"""
Track and clip provisioning.

Creates tracks, applies their properties and writes clips into them. The
provisioner owns the mapping from declared tracks to session indices; those
indices are positional (see TrackHandle) and nothing else in the engine
derives them.
"""

from __future__ import annotations

import logging

from chuk_live_sync.constants import ARMABLE_KINDS, ErrorMessages, SuccessMessages, TrackKind
from chuk_live_sync.core.color import GRAY_VALUE, parse_color
from chuk_live_sync.live.adapter import SessionAdapter
from chuk_live_sync.live.errors import LiveSyncError
from chuk_live_sync.models.session import ClipWithNotes, Note, TrackHandle
from chuk_live_sync.models.song import ClipSpec, TrackSpec

logger = logging.getLogger(__name__)


def resolve_track_color(color: str) -> int:
    """Color value for a declared track color; unknown names become gray."""
    value = parse_color(color)
    if value is None:
        logger.warning(f"Track color '{color}' is not a known color; using gray")
        return GRAY_VALUE
    return value


class TrackProvisioner:
    """Creates tracks and clips in the session."""

    def __init__(self, adapter: SessionAdapter):
        self.adapter = adapter
        self._handles: list[tuple[TrackSpec, TrackHandle]] = []

    @property
    def handles(self) -> list[TrackHandle]:
        """Handles of every track provisioned so far, in creation order."""
        return [handle for _, handle in self._handles]

    def handle_for(self, spec: TrackSpec) -> TrackHandle | None:
        """The handle assigned to a declared track, if it was provisioned."""
        for declared, handle in self._handles:
            if declared is spec:
                return handle
        return None

    async def provision_all(self, specs: list[TrackSpec]) -> list[TrackHandle]:
        logger.info(f"Creating {len(specs)} tracks...")
        return [await self.provision(spec) for spec in specs]

    async def provision(self, spec: TrackSpec) -> TrackHandle:
        """
        Create one declared track with its properties and static clips.

        Failures are logged with the track's name and re-raised.
        """
        try:
            handle = await self.create_track(spec.kind, spec.name)
            self._handles.append((spec, handle))

            await self.set_track_properties(handle, spec)

            for clip in spec.clips:
                await self.create_clip(handle, self._clip_from_spec(clip))

            if spec.group or spec.comments:
                logger.debug(f"Track '{spec.name}': group={spec.group!r} comments={spec.comments!r}")

            logger.info(SuccessMessages.TRACK_CREATED.format(name=spec.name, index=handle.index))
            return handle
        except Exception:
            logger.error(f"Error creating track '{spec.name}'")
            raise

    async def create_track(self, kind: TrackKind, name: str) -> TrackHandle:
        """Create a track of the given kind and take its (positional) handle."""
        index = await self.adapter.create_track(kind)
        if index < 0:
            raise LiveSyncError(ErrorMessages.TRACK_INDEX_MISSING.format(index=index))
        return TrackHandle(index=index, name=name, kind=kind)

    async def set_track_properties(self, handle: TrackHandle, spec: TrackSpec) -> None:
        """
        Apply name, color, mixer and state settings.

        Each property is written on its own; a failing one is reported by
        the adapter and does not stop the rest.
        """
        if spec.name:
            await self.adapter.set_track_property(handle, "name", spec.name)

        if spec.color:
            await self.adapter.set_track_property(
                handle, "color", resolve_track_color(spec.color)
            )

        if spec.volume is not None:
            await self.adapter.set_mixer_value(handle, "volume", spec.volume)

        if spec.pan is not None:
            await self.adapter.set_mixer_value(handle, "panning", spec.pan)

        if spec.muted is not None:
            await self.adapter.set_track_property(handle, "mute", int(spec.muted))

        if spec.solo is not None:
            await self.adapter.set_track_property(handle, "solo", int(spec.solo))

        # Only audio and MIDI tracks can be armed
        if spec.armed is not None and spec.kind in ARMABLE_KINDS:
            await self.adapter.set_track_property(handle, "arm", int(spec.armed))

    def _clip_from_spec(self, clip: ClipSpec) -> ClipWithNotes:
        color = parse_color(clip.color) if clip.color else None
        if clip.color and color is None:
            logger.warning(f"Clip color '{clip.color}' is not a known color; leaving default")
        return ClipWithNotes(
            start=clip.start_time,
            length=clip.length,
            name=clip.name,
            color=color,
            notes=[Note(n.pitch, n.start, n.duration, n.velocity) for n in clip.notes],
        )

    async def create_clip(self, handle: TrackHandle, clip: ClipWithNotes) -> None:
        """
        Write a clip to a track.

        Clips with notes go to the arrangement timeline; clips without
        notes go into the first empty clip slot.
        """
        if clip.notes:
            await self.create_arrangement_clip(handle, clip)
        else:
            await self.create_slot_clip(handle, clip)

    async def create_slot_clip(self, handle: TrackHandle, clip: ClipWithNotes) -> bool:
        """
        Create a clip in the first empty slot.

        Returns:
            False (and does nothing) when every slot is taken
        """
        track = await self.adapter.track(handle)
        for slot in await self.adapter.clip_slots(track):
            if await self.adapter.slot_has_clip(slot):
                continue
            created = await self.adapter.create_slot_clip(slot, clip.length)
            await self._name_and_color(created, clip)
            return True

        logger.debug(f"No free clip slot on track {handle}; clip '{clip.name}' skipped")
        return False

    async def create_arrangement_clip(self, handle: TrackHandle, clip: ClipWithNotes) -> None:
        """
        Place a clip on the arrangement timeline at clip.start.

        The last clip slot is used as scratch space: any clip in it is
        replaced by an empty clip of the right length, which is then
        duplicated into the arrangement. The duplicate receives the notes.
        """
        track = await self.adapter.track(handle)
        slots = await self.adapter.clip_slots(track)
        if not slots:
            raise LiveSyncError(ErrorMessages.NO_CLIP_SLOT.format(index=handle.index))
        scratch = slots[-1]

        if await self.adapter.slot_has_clip(scratch):
            await self.adapter.delete_slot_clip(scratch)

        created = await self.adapter.create_slot_clip(scratch, clip.length)
        if created is None:
            raise LiveSyncError(ErrorMessages.CLIP_NOT_CREATED.format(index=handle.index))
        await self._name_and_color(created, clip)

        placed = await self.adapter.duplicate_to_arrangement(track, created, clip.start)
        if placed is None:
            raise LiveSyncError(ErrorMessages.CLIP_NOT_CREATED.format(index=handle.index))

        if clip.notes:
            await self.adapter.set_notes(placed, clip.notes)

    async def _name_and_color(self, created: object, clip: ClipWithNotes) -> None:
        if created is None:
            return
        await self.adapter.write(created, "name", clip.name or "")
        if clip.color is not None:
            await self.adapter.write(created, "color", clip.color)

    async def find_track(self, name: str) -> TrackHandle | None:
        """
        Find a session track by exact (case-sensitive) name.

        Scans the session rather than this provisioner's handles, so it also
        finds tracks created by earlier runs.
        """
        for index, track in enumerate(await self.adapter.tracks()):
            if await self.adapter.track_name(track) == name:
                midi = await self.adapter.read(track, "has_midi_input")
                kind = TrackKind.MIDI if midi else TrackKind.AUDIO
                return TrackHandle(index=index, name=name, kind=kind)
        return None
