"""Geometry and color utility functions used across the game."""

from __future__ import annotations

import numpy as np
import pygame


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp a numeric value into the inclusive range [lo, hi]."""
    return max(lo, min(hi, value))


def spans_overlap(a_lo: float, a_hi: float, b_lo: float, b_hi: float) -> bool:
    """True if the open intervals (a_lo, a_hi) and (b_lo, b_hi) intersect."""
    return a_hi > b_lo and a_lo < b_hi


def scale_color(color: tuple[int, int, int], factor: float) -> tuple[int, int, int]:
    """Scale an RGB color by factor, clamped to [0,255]."""
    r, g, b = color
    return (
        int(clamp(r * factor, 0, 255)),
        int(clamp(g * factor, 0, 255)),
        int(clamp(b * factor, 0, 255)),
    )


def gradient_array(
    w: int,
    h: int,
    top: tuple[int, int, int],
    bottom: tuple[int, int, int],
) -> np.ndarray:
    """Build a vertical gradient as a (w, h, 3) uint8 array for surfarray.

    Args:
        w, h: Dimensions.
        top, bottom: RGB colors at the first and last row.
    """
    t = np.linspace(0.0, 1.0, h, dtype=np.float32)[:, None]
    rows = np.asarray(top, dtype=np.float32) * (1.0 - t) + np.asarray(bottom, dtype=np.float32) * t
    column = np.clip(rows, 0, 255).astype(np.uint8)
    # surfarray is indexed [x, y]
    return np.broadcast_to(column[None, :, :], (w, h, 3)).copy()


def gradient_surface(
    w: int,
    h: int,
    top: tuple[int, int, int],
    bottom: tuple[int, int, int],
) -> pygame.Surface:
    """Precompute a vertical gradient surface for fast blitting."""
    return pygame.surfarray.make_surface(gradient_array(w, h, top, bottom))
