"""
Harmony generation.

- HarmonyGenerator: Section chord symbols to note lists and clips
- Humanizer: Per-voice velocity jitter from an injectable random source
"""

from chuk_live_sync.harmony.generator import HarmonyGenerator
from chuk_live_sync.harmony.humanize import (
    VOICE_JITTER,
    Humanizer,
    Jitter,
    clamp_velocity,
    velocity_for_intensity,
)

__all__ = [
    "HarmonyGenerator",
    "Humanizer",
    "Jitter",
    "VOICE_JITTER",
    "clamp_velocity",
    "velocity_for_intensity",
]
