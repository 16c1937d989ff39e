"""
In-memory live set.

A small stand-in for a running session that speaks the generic
get/set/call convention. The CLI uses it for dry runs when no binding is
configured, and the tests drive the engine against it.

Names listed in a handle's ``fail`` set raise when read, written or
called, which lets callers rehearse remote failures.
"""

from __future__ import annotations

from typing import Any

from chuk_live_sync.constants import CUE_TIME_TOLERANCE

DEFAULT_SCENES = 8
DEFAULT_DEVICE_PARAMETERS = ["Device On"]


class RemoteError(RuntimeError):
    """Raised by the in-memory session where a live set would reject a call."""


class MemoryHandle:
    """Base handle: properties in a dict, functions as ``fn_<name>`` methods."""

    def __init__(self, **props: Any):
        self.props: dict[str, Any] = dict(props)
        self.fail: set[str] = set()

    def _check(self, name: str) -> None:
        if name in self.fail:
            raise RemoteError(f"{type(self).__name__}: '{name}' failed")

    def _read(self, prop: str) -> Any:
        if prop not in self.props:
            raise RemoteError(f"{type(self).__name__} has no property '{prop}'")
        return self.props[prop]

    async def get(self, prop: str) -> Any:
        self._check(prop)
        return self._read(prop)

    async def set(self, prop: str, value: Any) -> None:
        self._check(prop)
        self._read(prop)
        self.props[prop] = value

    async def call(self, name: str, *args: Any) -> Any:
        self._check(name)
        func = getattr(self, f"fn_{name}", None)
        if func is None:
            raise RemoteError(f"{type(self).__name__} has no function '{name}'")
        return func(*args)


class MemoryParameter(MemoryHandle):
    def __init__(self, name: str, value: float = 0.0):
        super().__init__(name=name, value=value)


class MemoryDevice(MemoryHandle):
    def __init__(self, name: str, parameters: list[str]):
        super().__init__(name=name)
        self.props["parameters"] = [MemoryParameter(p) for p in parameters]


class MemoryMixer(MemoryHandle):
    def __init__(self) -> None:
        super().__init__(
            volume=MemoryParameter("Track Volume", 0.85),
            panning=MemoryParameter("Track Panning", 0.0),
        )


class MemoryClip(MemoryHandle):
    def __init__(self, length: float, start_time: float = 0.0, name: str = ""):
        super().__init__(name=name, color=0, length=length, start_time=start_time)
        self.notes: tuple[tuple[Any, ...], ...] = ()

    def fn_set_notes(self, notes: Any) -> None:
        self.notes = tuple(tuple(note) for note in notes)


class MemoryClipSlot(MemoryHandle):
    def __init__(self) -> None:
        super().__init__(clip=None)

    async def get(self, prop: str) -> Any:
        if prop == "has_clip":
            self._check(prop)
            return self.props["clip"] is not None
        return await super().get(prop)

    def fn_create_clip(self, length: float) -> None:
        if self.props["clip"] is not None:
            raise RemoteError("Clip slot already has a clip")
        self.props["clip"] = MemoryClip(length)

    def fn_delete_clip(self) -> None:
        self.props["clip"] = None


class MemoryTrack(MemoryHandle):
    def __init__(
        self,
        name: str,
        session: MemorySession,
        midi: bool = True,
        scenes: int = DEFAULT_SCENES,
    ):
        super().__init__(
            name=name,
            color=0,
            mute=0,
            solo=0,
            arm=0,
            has_midi_input=midi,
            mixer_device=MemoryMixer(),
            clip_slots=[MemoryClipSlot() for _ in range(scenes)],
            devices=[],
            arrangement_clips=[],
        )
        self.session = session

    def fn_duplicate_clip_to_arrangement(self, clip: MemoryClip, time: float) -> MemoryClip:
        copy = MemoryClip(clip.props["length"], time, clip.props["name"])
        copy.props["color"] = clip.props["color"]
        copy.notes = clip.notes
        self.props["arrangement_clips"].append(copy)
        return copy

    def fn_insert_device(self, name: str) -> None:
        params = self.session.device_parameters.get(name, DEFAULT_DEVICE_PARAMETERS)
        self.props["devices"].append(MemoryDevice(name, list(params)))


class MemoryCue(MemoryHandle):
    def __init__(self, time: float, name: str = ""):
        super().__init__(time=time, name=name)


class MemorySession(MemoryHandle):
    """
    The song handle of an in-memory live set.

    Args:
        device_parameters: Parameter names per device name, for devices
            loaded with insert_device
        scenes: Clip slots per track
    """

    def __init__(
        self,
        device_parameters: dict[str, list[str]] | None = None,
        scenes: int = DEFAULT_SCENES,
    ):
        super().__init__(
            tempo=120.0,
            signature_numerator=4,
            signature_denominator=4,
            current_song_time=0.0,
            tracks=[],
            return_tracks=[],
            cue_points=[],
        )
        self.props["master_track"] = MemoryTrack("Master", self, midi=False, scenes=0)
        self.device_parameters = device_parameters or {}
        self.scenes = scenes

    async def get(self, prop: str) -> Any:
        value = await super().get(prop)
        # collections are returned as snapshots
        return list(value) if isinstance(value, list) else value

    def _insert(self, collection: str, track: MemoryTrack, index: int) -> None:
        tracks = self.props[collection]
        if index < 0 or index > len(tracks):
            tracks.append(track)
        else:
            tracks.insert(index, track)

    def fn_create_midi_track(self, index: int = -1) -> None:
        self._insert("tracks", MemoryTrack("MIDI", self, True, self.scenes), index)

    def fn_create_audio_track(self, index: int = -1) -> None:
        self._insert("tracks", MemoryTrack("Audio", self, False, self.scenes), index)

    def fn_create_return_track(self) -> None:
        self._insert("return_tracks", MemoryTrack("Return", self, False, 0), -1)

    def fn_set_or_delete_cue(self) -> None:
        now = self.props["current_song_time"]
        cues: list[MemoryCue] = self.props["cue_points"]
        for cue in cues:
            if abs(cue.props["time"] - now) <= CUE_TIME_TOLERANCE:
                cues.remove(cue)
                return
        cues.append(MemoryCue(now))
        cues.sort(key=lambda c: c.props["time"])

    # Inspection helpers (not part of the remote surface)

    def cue_list(self) -> list[tuple[float, str]]:
        return [(c.props["time"], c.props["name"]) for c in self.props["cue_points"]]

    def summary(self) -> dict[str, Any]:
        """Plain-data snapshot of the set."""
        return {
            "tempo": self.props["tempo"],
            "signature": (
                f"{self.props['signature_numerator']}/{self.props['signature_denominator']}"
            ),
            "tracks": [
                {
                    "name": t.props["name"],
                    "color": t.props["color"],
                    "devices": [d.props["name"] for d in t.props["devices"]],
                    "arrangement_clips": [
                        {
                            "name": c.props["name"],
                            "start": c.props["start_time"],
                            "length": c.props["length"],
                            "notes": len(c.notes),
                        }
                        for c in t.props["arrangement_clips"]
                    ],
                }
                for t in self.props["tracks"]
            ],
            "return_tracks": [t.props["name"] for t in self.props["return_tracks"]],
            "cues": [{"time": time, "name": name} for time, name in self.cue_list()],
        }
