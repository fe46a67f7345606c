"""
Synthetic 21-point hands for the fake runtime source and the tests.

Poses are written in "hand units" (wrist at origin, wrist ↔ index MCP = 1,
y grows downward) and then scaled/translated into normalized image space, so
normalized distances in a generated frame are exact by construction.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from pinchview.core.types import (
    HandFrame, Landmark, NUM_LANDMARKS,
    THUMB_TIP, INDEX_TIP,
)

Pt = Tuple[float, float]

# MCP joints of index, middle, ring, pinky
_MCPS: Tuple[Pt, ...] = ((0.0, -1.0), (0.25, -0.97), (0.48, -0.88), (0.68, -0.75))


def _extended_finger(mcp: Pt) -> List[Pt]:
    mx, my = mcp
    return [mcp, (mx, my - 0.5), (mx, my - 0.85), (mx, my - 1.2)]


def _folded_finger(mcp: Pt) -> List[Pt]:
    mx, my = mcp
    # PIP pokes up, DIP/tip curl back below it
    return [mcp, (mx + 0.15, my - 0.3), (mx + 0.25, my - 0.1), (mx + 0.2, my + 0.1)]


def open_hand_units() -> List[Pt]:
    pts: List[Pt] = [
        (0.0, 0.0),                                        # wrist
        (-0.35, -0.25), (-0.6, -0.5), (-0.8, -0.75), (-0.95, -1.0),  # thumb CMC..tip
    ]
    for mcp in _MCPS:
        pts.extend(_extended_finger(mcp))
    return pts


def thumbs_up_units() -> List[Pt]:
    pts: List[Pt] = [
        (0.0, 0.0),
        (-0.3, -0.2), (-0.5, -0.5), (-0.55, -0.9), (-0.6, -1.3),
    ]
    for mcp in _MCPS:
        pts.extend(_folded_finger(mcp))
    return pts


def pinch_units(norm_dist: float) -> List[Pt]:
    """Open hand with the thumb tip placed `norm_dist` hand units left of the index tip."""
    pts = open_hand_units()
    ix, iy = pts[INDEX_TIP]
    pts[THUMB_TIP] = (ix - norm_dist, iy)
    return pts


def to_frame(units: List[Pt], wrist: Pt = (0.5, 0.75), scale: float = 0.12) -> HandFrame:
    assert len(units) == NUM_LANDMARKS
    wx, wy = wrist
    return HandFrame(landmarks=tuple(Landmark(x=wx + ux * scale, y=wy + uy * scale, z=0.0) for ux, uy in units))


def hand(pose: str = "open", *, norm_dist: Optional[float] = None,
         wrist: Pt = (0.5, 0.75), scale: float = 0.12) -> HandFrame:
    """
    pose: "open" | "pinch" | "thumbs_up"
    norm_dist: thumb↔index distance for "pinch" (hand units)
    """
    if pose == "open":
        units = open_hand_units()
    elif pose == "pinch":
        units = pinch_units(0.1 if norm_dist is None else norm_dist)
    elif pose == "thumbs_up":
        units = thumbs_up_units()
    else:
        raise ValueError(f"unknown pose {pose!r}")
    return to_frame(units, wrist=wrist, scale=scale)


def index_tip_wrist(target_norm: Pt) -> Pt:
    """Wrist position that puts the open-hand index tip at `target_norm` for the default scale."""
    ix, iy = open_hand_units()[INDEX_TIP]
    return target_norm[0] - ix * 0.12, target_norm[1] - iy * 0.12
