"""Read-only views of the world handed to renderers."""

from dataclasses import dataclass
from typing import Optional, Tuple

from skyflap.core.state import Phase
from skyflap.game.entities import CoinTier, PowerUpKind


@dataclass(frozen=True)
class BirdView:
    x: float
    y: float
    size: float
    velocity: float


@dataclass(frozen=True)
class ObstacleView:
    x: float
    gap_top: float
    passed: bool


@dataclass(frozen=True)
class CoinView:
    x: float
    y: float
    tier: Optional[CoinTier] = None  # None for bonus coins


@dataclass(frozen=True)
class PowerUpView:
    kind: PowerUpKind
    remaining: float


@dataclass(frozen=True)
class Snapshot:
    """Everything needed to draw one frame."""

    phase: Phase
    bird: BirdView
    obstacles: Tuple[ObstacleView, ...]
    bonus_coins: Tuple[CoinView, ...]
    score_coins: Tuple[CoinView, ...]
    score: int
    best_score: int
    power_up: Optional[PowerUpView]
    celebrating: bool
    tick: int

    # Board geometry
    width: int
    height: int
    floor_y: float
    pipe_width: float
    pipe_gap: float
    coin_size: float
