"""Core domain models.

All session components operate on these types.
Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

UP_SYMBOLS = "+↑"
DOWN_SYMBOLS = "-↓"

StatusStyle = Literal["normal", "moving", "holding", "arrived", "error", "success"]


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"

    @property
    def sign(self) -> int:
        return 1 if self is Direction.UP else -1

    @classmethod
    def from_symbol(cls, char: str) -> Direction | None:
        """Map a direction symbol to a Direction, or None for anything else."""
        if char in UP_SYMBOLS:
            return cls.UP
        if char in DOWN_SYMBOLS:
            return cls.DOWN
        return None


class InputMode(str, Enum):
    CLASSIC = "classic"  # one symbol = one floor
    NUMERIC = "numeric"  # symbol + digits = that many floors


class MissionState(str, Enum):
    """Mission script states, in play order."""

    INTRO = "INTRO"
    MOVING_TO_ART = "MOVING_TO_ART"
    MOVING_TO_DINOSAURS = "MOVING_TO_DINOSAURS"
    NUMBERS_INTRO = "NUMBERS_INTRO"
    MOVING_TO_SPACE = "MOVING_TO_SPACE"
    LABELING_INTRO = "LABELING_INTRO"
    LABELING_TASK = "LABELING_TASK"
    COMPLETED = "COMPLETED"


class Leg(BaseModel):
    """One contiguous run of same-direction motion."""

    model_config = ConfigDict(frozen=True)

    direction: Direction
    magnitude: int = Field(gt=0)

    @property
    def delta(self) -> int:
        return self.magnitude * self.direction.sign


class RenderEvent(BaseModel):
    """A single renderer call, recorded for API clients to replay."""

    seq: int
    kind: str
    data: dict[str, Any] = Field(default_factory=dict)


class SessionSnapshot(BaseModel):
    """Observable state of one lift session."""

    level: int
    min_level: int
    max_level: int
    input_mode: InputMode
    command: str
    mission_state: MissionState | None
    target: int | None
    controls_enabled: bool
    awaiting_guess: bool
    labeled: list[int]
    floors: dict[int, str]
