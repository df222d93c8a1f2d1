"""Spawn timing and entity generation.

``SpawnScheduler`` keeps one next-fire timestamp per spawner and is
checked once per tick; nothing fires between ticks. ``EntityFactory``
turns random draws into new obstacles and coins.
"""

import logging
import random
from enum import Enum, auto
from typing import Dict, List, Optional

from skyflap.config.settings import GameSettings
from skyflap.game.entities import (
    ActivePowerUp,
    BonusCoin,
    CoinTier,
    Obstacle,
    PowerUpKind,
    ScoreCoin,
)
from skyflap.game.powerups import TIME_EPSILON, is_active

logger = logging.getLogger(__name__)


class SpawnerKind(Enum):
    """Spawners, in the order they are checked within a tick."""
    OBSTACLE = auto()
    BONUS_COIN = auto()
    SCORE_COIN = auto()


class SpawnScheduler:
    """Next-fire timestamps (seconds of run time) per spawner."""

    def __init__(self) -> None:
        self._next_fire: Dict[SpawnerKind, Optional[float]] = {
            kind: None for kind in SpawnerKind
        }

    def arm(self, kind: SpawnerKind, at: float) -> None:
        self._next_fire[kind] = at
        logger.debug(f"{kind.name} spawner armed for t={at:.2f}s")

    def disarm(self, kind: SpawnerKind) -> None:
        self._next_fire[kind] = None

    def clear(self) -> None:
        """Unarm every spawner."""
        for kind in SpawnerKind:
            self._next_fire[kind] = None

    def is_armed(self, kind: SpawnerKind) -> bool:
        return self._next_fire[kind] is not None

    def next_fire(self, kind: SpawnerKind) -> Optional[float]:
        return self._next_fire[kind]

    def pop_due(self, now: float) -> List[SpawnerKind]:
        """Disarm and return every spawner due at ``now``, in check order."""
        due = []
        for kind in SpawnerKind:
            at = self._next_fire[kind]
            if at is not None and now + TIME_EPSILON >= at:
                self._next_fire[kind] = None
                due.append(kind)
        return due


class EntityFactory:
    """Random draws for spawned entities and spawn delays."""

    def __init__(self, settings: GameSettings, rng: random.Random) -> None:
        self.settings = settings
        self.rng = rng

    def _uniform(self, low: float, high: float) -> float:
        # [low, high): random() never returns 1.0
        return low + self.rng.random() * (high - low)

    def obstacle(self) -> Obstacle:
        world = self.settings.world
        max_gap_top = world.floor_y - world.pipe_gap
        gap_top = self._uniform(world.min_gap_top, max_gap_top)
        return Obstacle(x=float(world.width), gap_top=gap_top)

    def _coin_y(self) -> float:
        world = self.settings.world
        return self._uniform(
            world.min_gap_top, world.floor_y - world.coin_size - world.min_gap_top
        )

    def bonus_coin(self) -> BonusCoin:
        return BonusCoin(x=float(self.settings.world.width), y=self._coin_y())

    def score_coin(self) -> ScoreCoin:
        return ScoreCoin(
            x=float(self.settings.world.width),
            y=self._coin_y(),
            tier=self.tier(),
        )

    def tier(self) -> CoinTier:
        """Weighted tier draw (60/30/10 by default table)."""
        total = sum(tier.info.weight for tier in CoinTier)
        roll = self.rng.random() * total
        for tier in CoinTier:
            roll -= tier.info.weight
            if roll < 0:
                return tier
        return CoinTier.GOLD

    def obstacle_interval(self, power_up: Optional[ActivePowerUp]) -> float:
        spawn = self.settings.spawn
        if is_active(power_up, PowerUpKind.SLOW_MOTION):
            return spawn.slow_pipe_interval
        return spawn.pipe_interval

    def bonus_delay(self) -> float:
        spawn = self.settings.spawn
        return self._uniform(spawn.bonus_delay_min, spawn.bonus_delay_max)

    def score_delay(self) -> float:
        spawn = self.settings.spawn
        return self._uniform(spawn.score_delay_min, spawn.score_delay_max)
