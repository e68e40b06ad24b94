"""Drawing primitives on numpy RGB buffers (height, width, 3)."""

from typing import Tuple
import numpy as np
from numpy.typing import NDArray

# Type aliases
Color = Tuple[int, int, int]
Buffer = NDArray[np.uint8]


def new_buffer(width: int, height: int, color: Color = (0, 0, 0)) -> Buffer:
    buffer = np.zeros((height, width, 3), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


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
    """Draw a rectangle, clipped to the buffer.

    Args:
        buffer: Target numpy array (height, width, 3)
        x, y: Top-left corner
        width, height: Size in pixels
        color: RGB color tuple
        filled: Fill the rectangle instead of outlining it
        thickness: Outline thickness when not filled
    """
    h, w = buffer.shape[:2]
    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(w, x + width), min(h, y + height)
    if x1 >= x2 or y1 >= y2:
        return

    if filled:
        buffer[y1:y2, x1:x2] = color
        return

    t = max(1, thickness)
    buffer[y1:min(y2, y1 + t), x1:x2] = color
    buffer[max(y1, y2 - t):y2, x1:x2] = color
    buffer[y1:y2, x1:min(x2, x1 + t)] = color
    buffer[y1:y2, max(x1, x2 - t):x2] = color


def draw_circle(
    buffer: Buffer,
    cx: int,
    cy: int,
    radius: int,
    color: Color,
    filled: bool = True,
    thickness: int = 1,
) -> None:
    """Draw a disc, or a ring of ``thickness`` pixels when not filled."""
    if radius <= 0:
        return
    h, w = buffer.shape[:2]
    ys, xs = np.ogrid[:h, :w]
    dist_sq = (xs - cx) ** 2 + (ys - cy) ** 2
    mask = dist_sq <= radius ** 2
    if not filled:
        inner = max(0, radius - thickness)
        mask &= dist_sq > inner ** 2
    buffer[mask] = color


def draw_diamond(buffer: Buffer, cx: int, cy: int, radius: int, color: Color) -> None:
    """Filled diamond (L1 ball), used for obstacle markers."""
    if radius <= 0:
        return
    h, w = buffer.shape[:2]
    ys, xs = np.ogrid[:h, :w]
    mask = (np.abs(xs - cx) + np.abs(ys - cy)) <= radius
    buffer[mask] = color


def blend(buffer: Buffer, color: Color, alpha: float) -> None:
    """Tint the whole buffer toward ``color`` by ``alpha`` in [0, 1]."""
    alpha = max(0.0, min(1.0, alpha))
    if alpha == 0.0:
        return
    tint = np.array(color, dtype=np.float32)
    mixed = buffer.astype(np.float32) * (1.0 - alpha) + tint * alpha
    buffer[:, :] = np.clip(mixed, 0, 255).astype(np.uint8)


def shift(buffer: Buffer, dx: int, dy: int, background: Color = (0, 0, 0)) -> Buffer:
    """Return a copy translated by (dx, dy), uncovered pixels set to background."""
    h, w = buffer.shape[:2]
    out = new_buffer(w, h, background)
    src_x1, src_x2 = max(0, -dx), min(w, w - dx)
    src_y1, src_y2 = max(0, -dy), min(h, h - dy)
    if src_x1 >= src_x2 or src_y1 >= src_y2:
        return out
    out[src_y1 + dy:src_y2 + dy, src_x1 + dx:src_x2 + dx] = buffer[src_y1:src_y2, src_x1:src_x2]
    return out
