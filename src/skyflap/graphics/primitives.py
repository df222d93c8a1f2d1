"""Basic drawing primitives on numpy RGB buffers."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int) -> Buffer:
    """Allocate a black (height, width, 3) buffer."""
    return np.zeros((height, width, 3), dtype=np.uint8)


def fill(buffer: Buffer, color: Color) -> None:
    """Fill entire buffer with color."""
    buffer[:, :] = color


def draw_rect(
    buffer: Buffer,
    x: int,
    y: int,
    width: int,
    height: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a rectangle on the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x: Left edge x coordinate
        y: Top edge y coordinate
        width: Rectangle width
        height: Rectangle height
        color: RGB color tuple
        filled: If True, fill rectangle; if False, draw outline only
        thickness: Line thickness for outline (when filled=False)
    """
    h, w = buffer.shape[:2]

    # Clamp to buffer bounds
    x1 = max(0, min(x, w))
    y1 = max(0, min(y, h))
    x2 = max(0, min(x + width, w))
    y2 = max(0, min(y + height, h))

    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    for t in range(thickness):
        buffer[min(y1 + t, y2 - 1), x1:x2] = color
        buffer[max(y2 - 1 - t, y1), x1:x2] = color
        buffer[y1:y2, min(x1 + t, x2 - 1)] = color
        buffer[y1:y2, max(x2 - 1 - t, x1)] = color


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
) -> None:
    """Draw a filled circle (distance mask)."""
    h, w = buffer.shape[:2]
    y_indices, x_indices = np.ogrid[:h, :w]
    dist_sq = (x_indices - cx) ** 2 + (y_indices - cy) ** 2
    buffer[dist_sq <= radius ** 2] = color


def tint(buffer: Buffer, color: Color, strength: float) -> None:
    """Blend the whole buffer toward ``color``."""
    strength = max(0.0, min(1.0, strength))
    overlay = np.array(color, dtype=np.float32)
    blended = buffer.astype(np.float32) * (1.0 - strength) + overlay * strength
    buffer[:] = blended.astype(np.uint8)
