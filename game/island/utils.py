"""
Utility functions for game mechanics
"""

from __future__ import annotations
from typing import Tuple

Rect = Tuple[float, float, float, float]


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Loose AABB test on (x, y, w, h) rects; touching edges count as overlap"""
    ax, ay, aw, ah = a
    bx, by, bw, bh = b
    return ax + aw >= bx and ax <= bx + bw and ay + ah >= by and ay <= by + bh
