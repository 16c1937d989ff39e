"""
Song loader - reads song descriptions from JSON or YAML.

JSON is a subset of YAML, so both go through yaml.safe_load. Validation is
done by the pydantic models; the loader adds the rule that a song must have
at least one chords track.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from chuk_live_sync.constants import ErrorMessages
from chuk_live_sync.live.errors import SongValidationError
from chuk_live_sync.models.song import Song

logger = logging.getLogger(__name__)


def parse_song(data: Any, require_chords: bool = True) -> Song:
    """
    Validate raw song data.

    Args:
        data: Parsed document (a mapping)
        require_chords: Reject songs without a "chords" track

    Returns:
        The validated Song

    Raises:
        SongValidationError: If the data does not describe a valid song
    """
    if not isinstance(data, dict):
        raise SongValidationError("Song description must be a mapping")

    try:
        song = Song.model_validate(data)
    except ValidationError as e:
        raise SongValidationError(f"Invalid song description: {e}") from e

    if require_chords and not song.chord_tracks():
        raise SongValidationError(ErrorMessages.NO_CHORDS_TRACK)
    return song


def parse_song_text(text: str, require_chords: bool = True) -> Song:
    """Parse a JSON or YAML document into a Song."""
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise SongValidationError(f"Could not parse song description: {e}") from e
    return parse_song(data, require_chords=require_chords)


def load_song(path: Path | str, require_chords: bool = True) -> Song:
    """
    Load a song description file.

    Args:
        path: Path to a .json, .yaml or .yml file
        require_chords: Reject songs without a "chords" track

    Raises:
        SongValidationError: If the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise SongValidationError(f"Could not read song file {path}: {e}") from e

    song = parse_song_text(text, require_chords=require_chords)
    logger.info(
        f"Loaded song from {path}: {len(song.sections)} sections, {len(song.tracks)} tracks"
    )
    return song
