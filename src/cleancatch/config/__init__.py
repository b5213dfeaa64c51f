"""Configuration for Clean Catch."""

from .settings import (
    AudioSettings,
    Difficulty,
    DifficultyPreset,
    DisplaySettings,
    GameSettings,
    Settings,
    get_settings,
)

__all__ = [
    "AudioSettings",
    "Difficulty",
    "DifficultyPreset",
    "DisplaySettings",
    "GameSettings",
    "Settings",
    "get_settings",
]
