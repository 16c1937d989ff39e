"""
Session adapter - the single choke point for every remote effect.

Remote bindings for the live set have offered two method conventions over
time and neither is complete everywhere:

- creator-style methods on the handle (``song.create_midi_track()``, or the
  camelCase ``song.createMidiTrack()``), with properties read as attributes
- a generic convention: ``handle.get(prop)``, ``handle.set(prop, value)``
  and ``handle.call(function, *args)``

The adapter negotiates between them in one place. A capability the handle
does not offer is soft: it is logged as a warning and yields None, unless the
caller asks for it with ``required=True``. A capability that exists but
fails is logged and re-raised as RemoteOperationError.

Results may be plain values or awaitables; both are accepted.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import Any

from chuk_live_sync.constants import ErrorMessages, TrackKind
from chuk_live_sync.live.errors import (
    CapabilityMissingError,
    LiveSyncError,
    RemoteOperationError,
)
from chuk_live_sync.models.session import Note, TrackHandle

logger = logging.getLogger(__name__)


def camel_case(name: str) -> str:
    """create_midi_track -> createMidiTrack"""
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def aliases(name: str) -> list[str]:
    """Spellings to try for a property or method, snake_case first."""
    camel = camel_case(name)
    return [name] if camel == name else [name, camel]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def _describe(handle: Any) -> str:
    return type(handle).__name__


class SessionAdapter:
    """
    Resilient access to a remote live set.

    Callers may rely on this layer never raising for a capability that is
    simply absent (unless they pass required=True). Anything it actively
    invoked that then failed is raised as RemoteOperationError.
    """

    def __init__(self, song: Any):
        """
        Initialize the adapter.

        Args:
            song: Remote handle for the song (the live set root)
        """
        self.song = song
        self.warnings: list[str] = []

    # Capability negotiation

    def _method(self, handle: Any, name: str) -> Any | None:
        """Creator-style method for name, in either spelling."""
        for alias in aliases(name):
            method = getattr(handle, alias, None)
            if callable(method):
                return method
        return None

    def supports(self, handle: Any, name: str) -> bool:
        """True if the handle offers the function under either convention."""
        if handle is None:
            return False
        return self._method(handle, name) is not None or callable(getattr(handle, "call", None))

    def _absent(self, name: str, handle: Any, required: bool) -> None:
        if required:
            raise CapabilityMissingError(name, _describe(handle))
        message = ErrorMessages.CAPABILITY_MISSING.format(name=name, target=_describe(handle))
        logger.warning(message)
        self.warnings.append(message)

    async def _run(self, operation: str, func: Any, *args: Any) -> Any:
        try:
            return await _resolve(func(*args))
        except Exception as e:
            logger.error(f"Remote operation '{operation}' failed: {e}")
            raise RemoteOperationError(operation, e) from e

    async def invoke(self, handle: Any, name: str, *args: Any, required: bool = False) -> Any:
        """
        Call a remote function, creator-style first, then generic call().

        Args:
            handle: Remote handle
            name: Function name in snake_case
            *args: Arguments for the function
            required: Raise CapabilityMissingError instead of returning None

        Returns:
            The function's result, or None when the capability is absent
        """
        if handle is not None:
            method = self._method(handle, name)
            if method is not None:
                return await self._run(name, method, *args)

            call = getattr(handle, "call", None)
            if callable(call):
                return await self._run(name, call, name, *args)

        self._absent(name, handle, required)
        return None

    async def read(self, handle: Any, prop: str, required: bool = False) -> Any:
        """
        Read a property via get(), else as an attribute.

        Both snake_case and camelCase spellings are tried.
        """
        if handle is not None:
            getter = getattr(handle, "get", None)
            if callable(getter):
                first, *others = aliases(prop)
                value = await self._run(f"get {first}", getter, first)
                for alias in others:
                    if value is not None:
                        break
                    try:
                        value = await _resolve(getter(alias))
                    except Exception:
                        # the alternate spelling is only a guess
                        value = None
                return value

            for alias in aliases(prop):
                if hasattr(handle, alias):
                    return getattr(handle, alias)

        self._absent(prop, handle, required)
        return None

    async def write(self, handle: Any, prop: str, value: Any, required: bool = False) -> bool:
        """
        Write a property via set(), else as an attribute.

        Returns:
            True if a write was issued, False if the property is absent
        """
        if handle is not None:
            setter = getattr(handle, "set", None)
            if callable(setter):
                await self._run(f"set {prop}", setter, prop, value)
                return True

            for alias in aliases(prop):
                if hasattr(handle, alias):
                    try:
                        setattr(handle, alias, value)
                    except Exception as e:
                        logger.error(f"Remote operation 'set {alias}' failed: {e}")
                        raise RemoteOperationError(f"set {alias}", e) from e
                    return True

        self._absent(prop, handle, required)
        return False

    def _write_failed(self, prop: str, label: str, error: RemoteOperationError) -> bool:
        """
        Report a failed best-effort write as a warning.

        Track properties are independent, so one failing never blocks the
        others.
        """
        message = f"Could not set {prop} on {label}: {error.cause}"
        logger.warning(message)
        self.warnings.append(message)
        return False

    async def children(self, value: Any) -> list[Any]:
        """Normalise a remote collection to a list."""
        if value is None:
            return []
        if isinstance(value, Sequence) and not isinstance(value, str):
            return list(value)
        items = await self.read(value, "children")
        return list(items) if items is not None else []

    # Song

    async def set_tempo(self, bpm: float) -> None:
        await self.write(self.song, "tempo", bpm)

    async def set_time_signature(self, numerator: int, denominator: int) -> None:
        await self.write(self.song, "signature_numerator", numerator)
        await self.write(self.song, "signature_denominator", denominator)

    async def get_time_signature(self) -> tuple[Any, Any]:
        """Raw numerator and denominator as the session reports them."""
        numerator = await self.read(self.song, "signature_numerator")
        denominator = await self.read(self.song, "signature_denominator")
        return numerator, denominator

    async def move_playhead(self, beat: float) -> None:
        await self.write(self.song, "current_song_time", beat, required=True)

    # Cues

    async def cues(self) -> list[Any]:
        return await self.children(await self.read(self.song, "cue_points"))

    async def cue_time(self, cue: Any) -> float:
        return float(await self.read(cue, "time", required=True))

    async def set_cue_name(self, cue: Any, name: str) -> None:
        await self.write(cue, "name", name, required=True)

    async def toggle_cue(self, beat: float) -> bool:
        """
        Toggle a cue at the playhead.

        Falls back to cue_points.create_cue_point(beat) on bindings without
        the toggle. Returns False if neither is available.
        """
        if self.supports(self.song, "set_or_delete_cue"):
            await self.invoke(self.song, "set_or_delete_cue", required=True)
            return True

        cue_points = await self.read(self.song, "cue_points")
        if self.supports(cue_points, "create_cue_point"):
            await self.invoke(cue_points, "create_cue_point", beat, required=True)
            return True

        self._absent("set_or_delete_cue", self.song, required=False)
        return False

    # Tracks

    async def _collection(self, kind: TrackKind) -> list[Any]:
        if kind is TrackKind.RETURN:
            return await self.children(await self.read(self.song, "return_tracks"))
        if kind is TrackKind.MASTER:
            master = await self.read(self.song, "master_track", required=True)
            return [master]
        return await self.children(await self.read(self.song, "tracks"))

    async def tracks(self) -> list[Any]:
        """Regular (audio and MIDI) tracks in session order."""
        return await self._collection(TrackKind.MIDI)

    async def track(self, handle: TrackHandle) -> Any:
        tracks = await self._collection(handle.kind)
        if not 0 <= handle.index < len(tracks):
            raise LiveSyncError(ErrorMessages.TRACK_INDEX_MISSING.format(index=handle.index))
        return tracks[handle.index]

    async def create_track(self, kind: TrackKind) -> int:
        """
        Create a track (or resolve the master) and return its index.

        The index is the last position of the re-read track list for that
        kind; it is positional and not a stable identifier.
        """
        if kind is TrackKind.AUDIO:
            await self.invoke(self.song, "create_audio_track", -1, required=True)
        elif kind is TrackKind.MIDI:
            await self.invoke(self.song, "create_midi_track", -1, required=True)
        elif kind is TrackKind.RETURN:
            await self.invoke(self.song, "create_return_track", required=True)
        elif kind is TrackKind.MASTER:
            pass  # already exists; resolved below
        else:
            raise LiveSyncError(ErrorMessages.UNKNOWN_TRACK_KIND.format(kind=kind))

        return len(await self._collection(kind)) - 1

    async def track_name(self, track: Any) -> str | None:
        return await self.read(track, "name")

    async def set_track_property(
        self, handle: TrackHandle, prop: str, value: Any
    ) -> bool:
        """
        Best-effort write of a plain track property (name, color, mute, ...).

        Remote failures, including the track lookup, become warnings.
        """
        try:
            track = await self.track(handle)
            return await self.write(track, prop, value)
        except RemoteOperationError as e:
            return self._write_failed(prop, str(handle), e)

    async def set_mixer_value(self, handle: TrackHandle, parameter: str, value: float) -> bool:
        """
        Best-effort write of a mixer parameter ('volume' or 'panning').

        Reading the mixer or the parameter may fail remotely too; that is
        reported like a failed write.
        """
        try:
            track = await self.track(handle)
            mixer = await self.read(track, "mixer_device")
            param = await self.read(mixer, parameter) if mixer is not None else None
            if param is None:
                self._absent(f"mixer_device.{parameter}", track, required=False)
                return False
            return await self.write(param, "value", value)
        except RemoteOperationError as e:
            return self._write_failed(parameter, str(handle), e)

    # Clips

    async def clip_slots(self, track: Any) -> list[Any]:
        return await self.children(await self.read(track, "clip_slots"))

    async def slot_has_clip(self, slot: Any) -> bool:
        return bool(await self.read(slot, "has_clip"))

    async def create_slot_clip(self, slot: Any, length: float) -> Any:
        """Create an empty clip in a slot and return the slot's clip handle."""
        await self.invoke(slot, "create_clip", length, required=True)
        return await self.read(slot, "clip")

    async def delete_slot_clip(self, slot: Any) -> None:
        await self.invoke(slot, "delete_clip", required=True)

    async def duplicate_to_arrangement(self, track: Any, clip: Any, start: float) -> Any:
        """Copy a slot clip onto the arrangement timeline at start (beats)."""
        return await self.invoke(
            track, "duplicate_clip_to_arrangement", clip, start, required=True
        )

    async def set_notes(self, clip: Any, notes: Sequence[Note]) -> None:
        """Write all notes in one batch."""
        payload = tuple(note.to_remote() for note in notes)
        await self.invoke(clip, "set_notes", payload, required=True)

    # Devices

    async def devices(self, track: Any) -> list[Any]:
        return await self.children(await self.read(track, "devices"))

    async def create_device(self, track: Any, name: str) -> int:
        """
        Load a device by name onto a track.

        Returns:
            Index of the new device (last in the chain)
        """
        devices = await self.read(track, "devices")
        if self.supports(devices, "create_device"):
            await self.invoke(devices, "create_device", name, required=True)
        else:
            await self.invoke(track, "insert_device", name, required=True)
        return len(await self.devices(track)) - 1

    async def device_name(self, device: Any) -> str | None:
        return await self.read(device, "name")

    async def set_device_parameter(self, device: Any, name: str, value: Any) -> bool:
        """
        Set a device parameter by its display name.

        Returns:
            False if the device has no parameter with that name
        """
        for param in await self.children(await self.read(device, "parameters")):
            if await self.read(param, "name") == name:
                await self.write(param, "value", value, required=True)
                return True
        return False
