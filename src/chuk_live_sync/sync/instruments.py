"""
Instrument manager - devices on provisioned tracks.

Loads each track's declared instruments and device chain, then applies
instrument parameter values by display name. Parameters are the one place
where failures are tolerated: a parameter that is missing or rejected is
reported and skipped.
"""

from __future__ import annotations

import logging
from typing import Any

from chuk_live_sync.constants import ErrorMessages, SuccessMessages
from chuk_live_sync.live.adapter import SessionAdapter
from chuk_live_sync.live.errors import LiveSyncError
from chuk_live_sync.models.session import TrackHandle
from chuk_live_sync.models.song import InstrumentSpec, TrackSpec
from chuk_live_sync.sync.tracks import TrackProvisioner

logger = logging.getLogger(__name__)


class InstrumentManager:
    """Attaches and inspects devices on session tracks."""

    def __init__(self, adapter: SessionAdapter, provisioner: TrackProvisioner):
        self.adapter = adapter
        self.provisioner = provisioner

    async def attach_all(self, specs: list[TrackSpec]) -> list[tuple[str, str]]:
        """
        Attach instruments and device chains to every provisioned track.

        Returns:
            (track name, device name) for each device loaded
        """
        added: list[tuple[str, str]] = []
        for spec in specs:
            handle = self.provisioner.handle_for(spec)
            if handle is None:
                logger.debug(f"Track '{spec.name}' was not provisioned; skipping devices")
                continue

            if spec.external_instrument is not None:
                ext = spec.external_instrument
                logger.info(
                    f"Track '{spec.name}' routes to external instrument "
                    f"{ext.midi_port} ch {ext.midi_channel} (audio from {ext.audio_from}, "
                    f"{ext.latency_ms} ms latency)"
                )

            for instrument in spec.instruments:
                await self.add_instrument(handle, instrument)
                added.append((spec.name, instrument.name))

            for entry in spec.device_chain:
                await self.add_instrument(
                    handle, InstrumentSpec(name=entry.device, preset=entry.preset)
                )
                added.append((spec.name, entry.device))
        return added

    async def add_instrument(self, handle: TrackHandle, instrument: InstrumentSpec) -> Any:
        """
        Load one instrument onto a track and apply its parameters.

        Failures loading the device are logged with its name and re-raised.

        Returns:
            The loaded device handle
        """
        try:
            track = await self.adapter.track(handle)
            index = await self.adapter.create_device(track, instrument.name)
            devices = await self.adapter.devices(track)
            if not 0 <= index < len(devices):
                raise LiveSyncError(
                    f"Device '{instrument.name}' did not appear on track {handle.index}"
                )
            device = devices[index]
        except Exception:
            logger.error(f"Error adding instrument '{instrument.name}' to track {handle}")
            raise

        # Presets need browser navigation the remote surface does not offer
        if instrument.preset:
            logger.info(f"Loading preset {instrument.preset} for {instrument.name}")

        await self.configure_parameters(device, instrument)
        logger.info(SuccessMessages.INSTRUMENT_ADDED.format(name=instrument.name, index=handle.index))
        return device

    async def configure_parameters(self, device: Any, instrument: InstrumentSpec) -> int:
        """
        Set parameter values by name; failures are warned and skipped.

        Returns:
            Number of parameters set
        """
        applied = 0
        for name, value in instrument.parameters.items():
            try:
                found = await self.adapter.set_device_parameter(device, name, value)
            except LiveSyncError as e:
                self._warn(f"Could not set parameter {name} to {value} on {instrument.name}: {e}")
                continue
            if not found:
                self._warn(f"Parameter '{name}' not found on {instrument.name}")
                continue
            applied += 1
        return applied

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.adapter.warnings.append(message)

    async def inspect(self, track_name: str) -> list[str]:
        """
        Names of the devices on the track with this exact name.

        Raises:
            LiveSyncError: If no session track has that name
        """
        handle = await self.provisioner.find_track(track_name)
        if handle is None:
            raise LiveSyncError(ErrorMessages.TRACK_NOT_FOUND.format(name=track_name))

        track = await self.adapter.track(handle)
        names = []
        for device in await self.adapter.devices(track):
            names.append(await self.adapter.device_name(device) or "")
        logger.info(f"Track '{track_name}' devices: {names}")
        return names
