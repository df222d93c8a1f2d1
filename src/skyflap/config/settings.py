"""
Game settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Defaults reproduce the classic 400x600 board.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PhysicsSettings(BaseSettings):
    """Bird physics and hitbox tuning."""

    model_config = SettingsConfigDict(env_prefix="SKYFLAP_PHYSICS_")

    gravity: float = 0.5  # px/tick^2
    jump_strength: float = -8.0  # px/tick, negative is up
    bird_size: float = 50.0
    bird_x: float = 50.0
    start_y: float = 250.0

    # Forgiveness margin applied to bounds and hitboxes
    hitbox_margin: float = Field(default=5.0, ge=0.0)

    # Collision box scale while SIZE_REDUCTION is active
    size_reduction_scale: float = Field(default=0.6, gt=0.0, le=1.0)


class WorldSettings(BaseSettings):
    """Board geometry and scrolling."""

    model_config = SettingsConfigDict(env_prefix="SKYFLAP_WORLD_")

    width: int = 400
    height: int = 600
    ground_height: int = 50

    pipe_width: float = 60.0
    pipe_gap: float = 150.0
    pipe_speed: float = Field(default=3.0, gt=0.0)  # px/tick
    min_gap_top: float = 50.0

    coin_size: float = 30.0

    tick_rate: int = Field(default=60, gt=0)

    @property
    def floor_y(self) -> float:
        """Top of the ground strip."""
        return float(self.height - self.ground_height)


class SpawnSettings(BaseSettings):
    """Spawner timing and power-up rates (seconds)."""

    model_config = SettingsConfigDict(env_prefix="SKYFLAP_SPAWN_")

    pipe_interval: float = Field(default=2.0, gt=0.0)
    slow_pipe_interval: float = Field(default=3.0, gt=0.0)

    bonus_delay_min: float = Field(default=8.0, gt=0.0)
    bonus_delay_max: float = 15.0

    score_delay_min: float = Field(default=3.0, gt=0.0)
    score_delay_max: float = 6.0

    power_up_min: float = Field(default=3.0, gt=0.0)
    power_up_max: float = 10.0

    # Power-up countdown: remaining -= step every period
    countdown_step: float = Field(default=0.1, gt=0.0)
    countdown_period: float = Field(default=0.1, gt=0.0)

    celebration_score: int = 69
    celebration_seconds: float = 1.0

    @model_validator(mode="after")
    def _check_ranges(self) -> "SpawnSettings":
        for name in ("bonus_delay", "score_delay", "power_up"):
            low = getattr(self, f"{name}_min")
            high = getattr(self, f"{name}_max")
            if high <= low:
                raise ValueError(f"{name}_max ({high}) must exceed {name}_min ({low})")
        return self


class DisplaySettings(BaseSettings):
    """Simulator window settings."""

    model_config = SettingsConfigDict(env_prefix="SKYFLAP_DISPLAY_")

    scale: int = Field(default=1, ge=1)
    title: str = "SKYFLAP"


class GameSettings(BaseSettings):
    """Main game settings."""

    model_config = SettingsConfigDict(
        env_prefix="SKYFLAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = False

    # Best score persistence
    best_score_path: Path = Field(
        default_factory=lambda: Path.home() / ".skyflap" / "best_score.json"
    )

    # Fixed seed for reproducible runs; None draws from the OS
    seed: int | None = None

    # Nested settings
    physics: PhysicsSettings = Field(default_factory=PhysicsSettings)
    world: WorldSettings = Field(default_factory=WorldSettings)
    spawn: SpawnSettings = Field(default_factory=SpawnSettings)
    display: DisplaySettings = Field(default_factory=DisplaySettings)

    @property
    def tick_seconds(self) -> float:
        """Length of one logical tick in seconds."""
        return 1.0 / self.world.tick_rate


@lru_cache
def get_settings() -> GameSettings:
    """Get cached settings instance."""
    return GameSettings()
