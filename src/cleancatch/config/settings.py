"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. CLEANCATCH_GAME__ROUND_SECONDS=45.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Difficulty(str, Enum):
    """Named presets controlling spawn cadence and fall speed."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


class DifficultyPreset(BaseModel):
    """Timing for one difficulty level."""

    spawn_interval_ms: float = Field(gt=0)
    fall_duration_ms: float = Field(gt=0)


def _default_difficulties() -> dict[Difficulty, DifficultyPreset]:
    return {
        Difficulty.EASY: DifficultyPreset(spawn_interval_ms=1200, fall_duration_ms=4000),
        Difficulty.NORMAL: DifficultyPreset(spawn_interval_ms=1000, fall_duration_ms=3000),
        Difficulty.HARD: DifficultyPreset(spawn_interval_ms=700, fall_duration_ms=2000),
    }


class GameSettings(BaseModel):
    """Round rules and drop generation."""

    round_seconds: int = Field(default=30, ge=1)
    starting_lives: int = Field(default=3, ge=1)

    # Drop mix: the rest is split evenly between the four bad kinds
    good_drop_chance: float = Field(default=0.7, ge=0.0, le=1.0)

    # Spawn placement
    min_drop_distance: float = Field(default=80.0, ge=0.0)
    recent_drop_ttl_ms: float = Field(default=1000.0, ge=0.0)
    max_placement_attempts: int = Field(default=10, ge=1)

    # Viewports at or below this width get the small drop sizes
    narrow_viewport_max: int = 576

    # Catcher movement in pixels per frame
    catcher_step: float = Field(default=8.0, gt=0.0)

    default_difficulty: Difficulty = Difficulty.NORMAL
    difficulties: dict[Difficulty, DifficultyPreset] = Field(default_factory=_default_difficulties)

    def preset(self, difficulty: Difficulty) -> DifficultyPreset:
        """Get timing for a difficulty, falling back to the built-in preset."""
        preset = self.difficulties.get(difficulty)
        if preset is None:
            preset = _default_difficulties()[difficulty]
        return preset


class DisplaySettings(BaseModel):
    """Container and catcher geometry."""

    container_width: int = Field(default=800, ge=64)
    container_height: int = Field(default=600, ge=64)

    catcher_width: int = Field(default=120, ge=1)
    catcher_height: int = Field(default=80, ge=1)
    catcher_bottom_margin: int = Field(default=20, ge=0)

    fps: int = Field(default=60, ge=1)
    resizable: bool = True


class AudioSettings(BaseModel):
    """Sound cue mapping.

    Win and loss cues are separate so a lost round does not have to
    celebrate.
    """

    enabled: bool = True
    master_volume: float = Field(default=0.8, ge=0.0, le=1.0)

    catch_cue: str = "score_up"
    miss_cue: str = "miss"
    win_cue: str = "success"
    loss_cue: str = "game_over"


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="CLEANCATCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    # Environment
    env: Literal["simulator", "headless"] = "simulator"
    debug: bool = False
    log_file: Path | None = None

    # Nested settings
    game: GameSettings = Field(default_factory=GameSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)

    @property
    def is_simulator(self) -> bool:
        """Check if running with the pygame window."""
        return self.env == "simulator"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
