"""Mutable live state of one game session."""

from dataclasses import dataclass, field
from typing import List, Optional

from skyflap.game.entities import ActivePowerUp, BonusCoin, Obstacle, ScoreCoin


@dataclass
class World:
    """Everything the simulation mutates.

    Only ``SimulationEngine`` writes to a World; renderers read a
    ``Snapshot`` instead.
    """

    bird_y: float = 250.0
    bird_velocity: float = 0.0
    score: int = 0
    best_score: int = 0

    obstacles: List[Obstacle] = field(default_factory=list)
    bonus_coins: List[BonusCoin] = field(default_factory=list)
    score_coins: List[ScoreCoin] = field(default_factory=list)

    power_up: Optional[ActivePowerUp] = None

    # One-shot celebration, guarded per run
    celebrated: bool = False
    celebration_remaining: float = 0.0

    # Ticks since the run started
    tick: int = 0

    @property
    def celebrating(self) -> bool:
        return self.celebration_remaining > 0

    def reset_run(self, start_y: float) -> None:
        """Clear transient state for a fresh run, keeping the best score."""
        self.bird_y = start_y
        self.bird_velocity = 0.0
        self.score = 0
        self.obstacles = []
        self.bonus_coins = []
        self.score_coins = []
        self.power_up = None
        self.celebrated = False
        self.celebration_remaining = 0.0
        self.tick = 0
