"""Configuration for SKYFLAP."""

from .settings import (
    GameSettings,
    PhysicsSettings,
    WorldSettings,
    SpawnSettings,
    DisplaySettings,
    get_settings,
)

__all__ = [
    "GameSettings",
    "PhysicsSettings",
    "WorldSettings",
    "SpawnSettings",
    "DisplaySettings",
    "get_settings",
]
