"""Extraction settings — heuristic thresholds with total defaults."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class ExtractionSettings(BaseModel):
    """Length and size limits used by the heuristic tiers.

    extra="ignore" lets a settings file written for a newer release load on
    an older one.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    min_chunk_length: int = Field(default=30, ge=1)
    character_max_length: int = Field(default=40, ge=2)
    character_max_words: int = Field(default=4, ge=1)
    header_max_length: int = Field(default=60, ge=1)
    location_heading_max_length: int = Field(default=50, ge=1)
    location_name_max_length: int = Field(default=100, ge=1)
    max_scene_range: int = Field(default=500, ge=1)


DEFAULT_SETTINGS = ExtractionSettings()


def load_settings(source: Union[str, bytes, dict, Path]) -> ExtractionSettings:
    """Load ExtractionSettings from a file Path, JSON string/bytes, or dict.

    Raises:
        ValueError: "ERROR: invalid settings input"  (exact string, always)
    """
    try:
        if isinstance(source, Path):
            data = json.loads(source.read_text(encoding="utf-8"))
        elif isinstance(source, (str, bytes)):
            data = json.loads(source)
        else:
            data = source
        return ExtractionSettings.model_validate(data)
    except Exception:
        raise ValueError("ERROR: invalid settings input")
