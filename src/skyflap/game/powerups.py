"""Power-up activation, modifiers and the fixed-period countdown."""

import logging
import random
from typing import Optional

from skyflap.config.settings import SpawnSettings
from skyflap.game.entities import ActivePowerUp, PowerUpKind
from skyflap.game.world import World

logger = logging.getLogger(__name__)

# Tolerance for comparing accumulated float timestamps
TIME_EPSILON = 1e-9


def roll_power_up(rng: random.Random, spawn: SpawnSettings) -> ActivePowerUp:
    """Pick a uniformly random kind and a duration in [min, max)."""
    kind = rng.choice(list(PowerUpKind))
    duration = spawn.power_up_min + rng.random() * (spawn.power_up_max - spawn.power_up_min)
    return ActivePowerUp(kind=kind, remaining=duration)


def speed_factor(power_up: Optional[ActivePowerUp]) -> float:
    return power_up.kind.info.speed_factor if power_up else 1.0


def points_multiplier(power_up: Optional[ActivePowerUp]) -> int:
    return power_up.kind.info.points_multiplier if power_up else 1


def is_invincible(power_up: Optional[ActivePowerUp]) -> bool:
    return bool(power_up and power_up.kind.info.invincible)


def is_shrunk(power_up: Optional[ActivePowerUp]) -> bool:
    return bool(power_up and power_up.kind.info.shrinks)


def is_active(power_up: Optional[ActivePowerUp], kind: PowerUpKind) -> bool:
    return power_up is not None and power_up.kind is kind


class PowerUpTimer:
    """Counts the active power-up down by ``step`` every ``period`` seconds.

    The countdown is driven by simulated time passed to ``update``; it
    never runs on its own.
    """

    def __init__(self, step: float = 0.1, period: float = 0.1) -> None:
        self.step = step
        self.period = period
        self._next_at: Optional[float] = None

    @property
    def armed(self) -> bool:
        return self._next_at is not None

    def start(self, world: World, power_up: ActivePowerUp, now: float) -> None:
        """Activate ``power_up``, replacing any prior one."""
        if world.power_up is not None:
            logger.debug(f"Power-up {world.power_up.kind.name} replaced")
        world.power_up = power_up
        self._next_at = now + self.period
        logger.info(
            f"Power-up {power_up.kind.name} active for {power_up.remaining:.1f}s"
        )

    def update(self, world: World, now: float) -> Optional[ActivePowerUp]:
        """Apply due countdown steps. Returns the power-up if it just expired."""
        if world.power_up is None or self._next_at is None:
            return None

        while self._next_at is not None and now + TIME_EPSILON >= self._next_at:
            world.power_up.remaining = round(world.power_up.remaining - self.step, 6)
            self._next_at += self.period

            if world.power_up.remaining <= 0:
                expired = world.power_up
                world.power_up = None
                self._next_at = None
                logger.info(f"Power-up {expired.kind.name} expired")
                return expired

        return None

    def cancel(self) -> None:
        self._next_at = None
