"""
Run configuration for the sync engine.

Defaults come from constants; the CLI and the MCP tools override the few
values a user is expected to change (mainly the seed).
"""

from __future__ import annotations

import random

from pydantic import BaseModel, Field, model_validator

from chuk_live_sync.constants import (
    CUE_TIME_TOLERANCE,
    DEFAULT_CHORD_OCTAVE,
    DUMMY_TRACK_NAME,
    END_CUE_NAME,
    MAX_VELOCITY,
    MIN_VELOCITY,
)
from chuk_live_sync.harmony import HarmonyGenerator, Humanizer


class SyncConfig(BaseModel):
    """Tunable settings for one synchronization run."""

    chord_octave: int = Field(DEFAULT_CHORD_OCTAVE, ge=0, le=9, description="Octave of chord roots")
    cue_tolerance: float = Field(
        CUE_TIME_TOLERANCE, gt=0.0, description="Beats within which two cues are the same"
    )
    min_velocity: int = Field(MIN_VELOCITY, ge=1, le=127)
    max_velocity: int = Field(MAX_VELOCITY, ge=1, le=127)
    placeholder_track_name: str = Field(
        DUMMY_TRACK_NAME, min_length=1, description="Track holding arrangement-length regions"
    )
    end_cue_name: str = Field(END_CUE_NAME, min_length=1, description="Cue after the last section")
    seed: int | None = Field(None, description="Seed for velocity humanization")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_velocity_range(self) -> SyncConfig:
        if self.min_velocity > self.max_velocity:
            raise ValueError(
                f"min_velocity ({self.min_velocity}) exceeds max_velocity ({self.max_velocity})"
            )
        return self

    def make_generator(self) -> HarmonyGenerator:
        """Harmony generator configured from these settings."""
        humanizer = Humanizer(
            rng=random.Random(self.seed),
            min_velocity=self.min_velocity,
            max_velocity=self.max_velocity,
        )
        return HarmonyGenerator(humanizer=humanizer, octave=self.chord_octave)
