"""Simulation core for SKYFLAP."""

from skyflap.game.engine import SimulationEngine
from skyflap.game.entities import (
    ActivePowerUp,
    BonusCoin,
    CoinTier,
    Obstacle,
    PowerUpKind,
    ScoreCoin,
)
from skyflap.game.snapshot import Snapshot
from skyflap.game.world import World

__all__ = [
    "SimulationEngine",
    "ActivePowerUp",
    "BonusCoin",
    "CoinTier",
    "Obstacle",
    "PowerUpKind",
    "ScoreCoin",
    "Snapshot",
    "World",
]
