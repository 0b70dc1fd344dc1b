"""Playback data types (pure data, no business logic)."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from . import constants


class PlaybackState(str, Enum):
    """Lifecycle of a StepSequencer."""

    IDLE = "idle"
    READY = "ready"
    PLAYING = "playing"
    FINISHED = "finished"


class PlaybackConfig(BaseModel):
    """Validated playback settings."""

    model_config = ConfigDict(frozen=True)

    speed_ms: int = Field(
        default=constants.DEFAULT_SPEED_MS,
        ge=constants.MIN_SPEED_MS,
        le=constants.MAX_SPEED_MS,
    )

    @field_validator("speed_ms")
    @classmethod
    def _on_speed_grid(cls, value: int) -> int:
        if value % constants.SPEED_STEP_MS != 0:
            raise ValueError(
                f"speed_ms must be a multiple of {constants.SPEED_STEP_MS}, got {value}"
            )
        return value

    @property
    def interval_seconds(self) -> float:
        return self.speed_ms / 1000.0
