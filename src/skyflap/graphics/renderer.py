"""Draws a Snapshot into a numpy RGB buffer.

Text (score, messages) is left to the window, which has fonts.
"""

import numpy as np
from numpy.typing import NDArray

from skyflap.core.state import Phase
from skyflap.game.snapshot import Snapshot
from skyflap.graphics.primitives import Color, draw_circle, draw_rect, fill, new_buffer, tint

SKY: Color = (112, 197, 206)
GROUND: Color = (222, 216, 149)
GRASS: Color = (94, 168, 52)
PIPE: Color = (83, 160, 62)
PIPE_EDGE: Color = (46, 94, 34)
BIRD: Color = (250, 200, 60)
BIRD_EYE: Color = (20, 20, 20)
BONUS_COIN: Color = (186, 85, 211)
CELEBRATION: Color = (255, 0, 255)


class SnapshotRenderer:
    """Renders frames at board resolution."""

    def __init__(self, width: int = 400, height: int = 600):
        self.width = width
        self.height = height
        self._buffer = new_buffer(width, height)

    def render(self, snapshot: Snapshot) -> NDArray[np.uint8]:
        buffer = self._buffer
        fill(buffer, SKY)

        self._render_obstacles(buffer, snapshot)
        self._render_coins(buffer, snapshot)
        self._render_ground(buffer, snapshot)
        self._render_bird(buffer, snapshot)

        if snapshot.celebrating:
            tint(buffer, CELEBRATION, 0.25)
        elif snapshot.phase == Phase.GAME_OVER:
            tint(buffer, (0, 0, 0), 0.4)

        return buffer

    def _render_ground(self, buffer: NDArray[np.uint8], snapshot: Snapshot) -> None:
        floor = int(snapshot.floor_y)
        draw_rect(buffer, 0, floor, self.width, self.height - floor, GROUND)
        draw_rect(buffer, 0, floor, self.width, 6, GRASS)

    def _render_obstacles(self, buffer: NDArray[np.uint8], snapshot: Snapshot) -> None:
        w = int(snapshot.pipe_width)
        floor = int(snapshot.floor_y)
        for obstacle in snapshot.obstacles:
            x = int(obstacle.x)
            gap_top = int(obstacle.gap_top)
            gap_bottom = int(obstacle.gap_top + snapshot.pipe_gap)

            # Top pipe
            draw_rect(buffer, x, 0, w, gap_top, PIPE)
            draw_rect(buffer, x, 0, w, gap_top, PIPE_EDGE, filled=False, thickness=2)
            # Bottom pipe
            draw_rect(buffer, x, gap_bottom, w, floor - gap_bottom, PIPE)
            draw_rect(buffer, x, gap_bottom, w, floor - gap_bottom, PIPE_EDGE, filled=False, thickness=2)

    def _render_coins(self, buffer: NDArray[np.uint8], snapshot: Snapshot) -> None:
        r = int(snapshot.coin_size // 2)
        for coin in snapshot.bonus_coins:
            draw_circle(buffer, int(coin.x) + r, int(coin.y) + r, r, BONUS_COIN)
        for coin in snapshot.score_coins:
            color = coin.tier.info.color if coin.tier else BIRD
            draw_circle(buffer, int(coin.x) + r, int(coin.y) + r, r, color)

    def _render_bird(self, buffer: NDArray[np.uint8], snapshot: Snapshot) -> None:
        bird = snapshot.bird
        size = int(bird.size)
        r = size // 2
        cx = int(bird.x) + r
        cy = int(bird.y) + r

        color = snapshot.power_up.kind.info.color if snapshot.power_up else BIRD
        draw_circle(buffer, cx, cy, r, color)
        eye = max(2, size // 8)
        draw_rect(buffer, cx + r // 3, cy - r // 3, eye, eye, BIRD_EYE)
