"""
Meter model - bar to beat conversion against the live session.

The session's time signature can change while a run is in progress, so it
is re-read for every conversion instead of being cached.
"""

from __future__ import annotations

import logging

from chuk_live_sync.core.meter import Meter
from chuk_live_sync.live.adapter import SessionAdapter
from chuk_live_sync.live.errors import LiveSyncError

logger = logging.getLogger(__name__)


class MeterModel:
    """Reads the session meter and converts bars to beats."""

    def __init__(self, adapter: SessionAdapter):
        self.adapter = adapter

    async def current(self) -> Meter:
        """
        The session's meter right now.

        Falls back to 4/4 if the session cannot report a usable meter.
        """
        try:
            numerator, denominator = await self.adapter.get_time_signature()
        except LiveSyncError as e:
            logger.warning(f"Could not read time signature, assuming 4/4: {e}")
            return Meter.COMMON_TIME

        meter = Meter.coerce(numerator, denominator)
        if (meter.numerator, meter.denominator) != (numerator, denominator):
            logger.debug(f"Session reported {numerator}/{denominator}, using {meter}")
        return meter

    async def beats_per_bar(self) -> float:
        return (await self.current()).beats_per_bar

    async def bar_to_beats(self, bar: float) -> float:
        """Convert a 0-based bar offset to beats under the current meter."""
        return (await self.current()).bar_to_beats(bar)
