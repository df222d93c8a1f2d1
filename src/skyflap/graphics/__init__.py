"""Graphics module for SKYFLAP frames."""

from skyflap.graphics.renderer import SnapshotRenderer
from skyflap.graphics.primitives import (
    draw_rect,
    draw_circle,
    fill,
    new_buffer,
    tint,
)

__all__ = [
    "SnapshotRenderer",
    "draw_rect",
    "draw_circle",
    "fill",
    "new_buffer",
    "tint",
]
