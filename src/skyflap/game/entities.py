"""Entities scrolling through the board, plus the power-up and coin tables."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

Color = Tuple[int, int, int]


class CoinTier(Enum):
    BRONZE = auto()
    SILVER = auto()
    GOLD = auto()

    @property
    def info(self) -> "TierInfo":
        return TIER_TABLE[self]

    @property
    def points(self) -> int:
        return TIER_TABLE[self].points


@dataclass(frozen=True)
class TierInfo:
    label: str
    color: Color
    points: int
    weight: int  # relative spawn weight


TIER_TABLE: dict[CoinTier, TierInfo] = {
    CoinTier.BRONZE: TierInfo("Bronze", (205, 127, 50), points=1, weight=60),
    CoinTier.SILVER: TierInfo("Silver", (192, 192, 192), points=2, weight=30),
    CoinTier.GOLD: TierInfo("Gold", (255, 215, 0), points=3, weight=10),
}


class PowerUpKind(Enum):
    INVINCIBILITY = auto()
    SLOW_MOTION = auto()
    SIZE_REDUCTION = auto()
    DOUBLE_POINTS = auto()

    @property
    def info(self) -> "PowerUpInfo":
        return POWER_UP_TABLE[self]


@dataclass(frozen=True)
class PowerUpInfo:
    """Display data and modifiers for one power-up kind."""

    label: str
    color: Color
    invincible: bool = False
    speed_factor: float = 1.0
    shrinks: bool = False
    points_multiplier: int = 1


POWER_UP_TABLE: dict[PowerUpKind, PowerUpInfo] = {
    PowerUpKind.INVINCIBILITY: PowerUpInfo("Invincible", (255, 215, 0), invincible=True),
    PowerUpKind.SLOW_MOTION: PowerUpInfo("Slow Motion", (0, 191, 255), speed_factor=0.5),
    PowerUpKind.SIZE_REDUCTION: PowerUpInfo("Tiny Bird", (50, 205, 50), shrinks=True),
    PowerUpKind.DOUBLE_POINTS: PowerUpInfo("Double Points", (255, 105, 180), points_multiplier=2),
}


@dataclass
class Obstacle:
    """A pipe pair; the gap spans gap_top .. gap_top + pipe_gap."""

    x: float
    gap_top: float
    passed: bool = False


@dataclass
class BonusCoin:
    x: float
    y: float


@dataclass
class ScoreCoin:
    x: float
    y: float
    tier: CoinTier = CoinTier.BRONZE


@dataclass
class ActivePowerUp:
    kind: PowerUpKind
    remaining: float  # seconds
