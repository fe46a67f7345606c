"""
Pure landmark geometry. No state, no error conditions.
"""
from __future__ import annotations

import math
from typing import Tuple

from pinchview.core.types import HandFrame, Landmark, Viewport, WRIST, INDEX_MCP

# floor for degenerate hand scale (keeps normalized distances finite)
MIN_HAND_SCALE = 1e-4


def distance(a: Landmark, b: Landmark) -> float:
    # image-plane distance; z is too noisy on webcams to be useful here
    return math.hypot(a.x - b.x, a.y - b.y)


def hand_scale_norm(frame: HandFrame) -> float:
    """Wrist ↔ index MCP: the reference unit for every normalized distance."""
    d = distance(frame[WRIST], frame[INDEX_MCP])
    return max(d, MIN_HAND_SCALE)


def norm_distance(frame: HandFrame, i: int, j: int) -> float:
    return distance(frame[i], frame[j]) / hand_scale_norm(frame)


def hand_scale_px(frame: HandFrame, viewport: Viewport) -> float:
    return hand_scale_norm(frame) * min(viewport.width, viewport.height)


def project_to_screen(lm: Landmark, viewport: Viewport) -> Tuple[float, float]:
    # mirror x so on-screen motion matches the user's left/right
    return (1.0 - lm.x) * viewport.width, lm.y * viewport.height
