"""Lift settings (level limits, animation and narrative delays).

load_settings() returns defaults merged with an optional JSON file, then
environment overrides:

  LIFT_CONFIG      path to a JSON settings file
  LIFT_TIME_SCALE  multiplier for every delay (0 = instant)

Unknown keys in the JSON file are ignored so old files keep loading.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, model_validator

from .missions import SCRIPT_LEVELS

logger = logging.getLogger(__name__)

# Largest distance from the ground floor a building may have.
LEVEL_LIMIT = 9999


class LiftSettings(BaseModel):
    min_level: int = Field(-5, ge=-LEVEL_LIMIT)
    max_level: int = Field(6, le=LEVEL_LIMIT)
    step_delay_ms: int = Field(800, ge=0)
    leg_hold_ms: int = Field(500, ge=0)
    arrival_hold_ms: int = Field(1000, ge=0)
    error_flash_ms: int = Field(1500, ge=0)
    bootstrap_delay_ms: int = Field(1000, ge=0)
    label_success_ms: int = Field(2000, ge=0)
    label_retry_ms: int = Field(1000, ge=0)
    time_scale: float = Field(1.0, ge=0)

    @model_validator(mode="after")
    def _script_levels_in_range(self) -> "LiftSettings":
        low, high = min(SCRIPT_LEVELS), max(SCRIPT_LEVELS)
        if self.min_level > low or self.max_level < high:
            raise ValueError(
                f"min_level..max_level must cover levels {low}..{high} used by the guide missions"
            )
        return self

    @property
    def floor_count(self) -> int:
        return self.max_level - self.min_level + 1


def load_settings(path: Path | None = None) -> LiftSettings:
    """Read settings, returning defaults merged with stored values."""
    fields: dict[str, Any] = {}
    if path is None and os.getenv("LIFT_CONFIG"):
        path = Path(os.environ["LIFT_CONFIG"])
    if path is not None:
        if path.is_file():
            stored = json.loads(path.read_text())
            fields.update({k: v for k, v in stored.items() if k in LiftSettings.model_fields})
        else:
            logger.warning("Settings file %s not found, using defaults", path)
    scale = os.getenv("LIFT_TIME_SCALE", "")
    if scale:
        fields["time_scale"] = float(scale)
    return LiftSettings(**fields)
