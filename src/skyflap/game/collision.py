"""Axis-aligned hitbox tests for the bird, pipes and coins.

Screen coordinates: y grows downward, so ``top < bottom``.
"""

from dataclasses import dataclass

from skyflap.game.entities import Obstacle, BonusCoin, ScoreCoin


@dataclass(frozen=True)
class Box:
    left: float
    top: float
    right: float
    bottom: float

    @classmethod
    def from_size(cls, x: float, y: float, width: float, height: float) -> "Box":
        return cls(x, y, x + width, y + height)

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def inset(self, margin: float) -> "Box":
        """Shrink by ``margin`` on every side."""
        return Box(
            self.left + margin,
            self.top + margin,
            self.right - margin,
            self.bottom - margin,
        )

    def intersects(self, other: "Box") -> bool:
        return (
            self.right > other.left
            and self.left < other.right
            and self.bottom > other.top
            and self.top < other.bottom
        )


def bird_box(bird_x: float, bird_y: float, full_size: float, size: float) -> Box:
    """Bird bounding box for an effective ``size``, centred on the full sprite."""
    offset = (full_size - size) / 2
    return Box.from_size(bird_x + offset, bird_y + offset, size, size)


def hits_obstacle(
    bird: Box,
    obstacle: Obstacle,
    pipe_width: float,
    pipe_gap: float,
    margin: float,
) -> bool:
    """True when the bird touches either pipe of the pair.

    Both the bird box and the pipe rectangles are shrunk by ``margin``,
    which widens the gap by ``margin`` at each end.
    """
    hitbox = bird.inset(margin)
    pipe_left = obstacle.x + margin
    pipe_right = obstacle.x + pipe_width - margin

    if not (hitbox.right > pipe_left and hitbox.left < pipe_right):
        return False

    gap_top = obstacle.gap_top - margin
    gap_bottom = obstacle.gap_top + pipe_gap + margin
    return hitbox.top < gap_top or hitbox.bottom > gap_bottom


def has_cleared(bird_left: float, obstacle: Obstacle, pipe_width: float) -> bool:
    """Pipe's right edge is left of the bird sprite's left edge.

    Uses the sprite position, not the hitbox, so a shrunk bird scores
    at the same moment as a full-size one.
    """
    return obstacle.x + pipe_width < bird_left


def touches_coin(bird: Box, coin: BonusCoin | ScoreCoin, coin_size: float) -> bool:
    return bird.intersects(Box.from_size(coin.x, coin.y, coin_size, coin_size))
