"""
Debounced gesture detectors.

Both gestures share one two-state gate: RELEASED -> ENGAGED after `on_frames`
consecutive engage samples, ENGAGED -> RELEASED after `off_frames` consecutive
release samples. Detectors expose the level only; edges belong to the caller.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from pinchview.core.config import PinchTuning, ThumbsUpTuning
from pinchview.core.geometry import distance, hand_scale_norm
from pinchview.core.types import (
    HandFrame,
    FINGERS, WRIST, THUMB_MCP, THUMB_IP, THUMB_TIP, INDEX_TIP,
)

log = logging.getLogger(__name__)


class GateState(str, Enum):
    RELEASED = "RELEASED"
    ENGAGED = "ENGAGED"


@dataclass
class StreakGate:
    on_frames: int
    off_frames: int

    state: GateState = GateState.RELEASED
    on_streak: int = 0
    off_streak: int = 0

    @property
    def engaged(self) -> bool:
        return self.state == GateState.ENGAGED

    @property
    def pending(self) -> bool:
        # a transition is being confirmed but has not happened yet
        return self.on_streak > 0 or self.off_streak > 0

    def update(self, engage: bool, release: bool) -> bool:
        """
        engage: this sample argues for ENGAGED (only read while RELEASED)
        release: this sample argues for RELEASED (only read while ENGAGED)
        """
        if self.state == GateState.RELEASED:
            self.on_streak = self.on_streak + 1 if engage else 0
            if self._should_engage():
                self._enter(GateState.ENGAGED)
        else:
            self.off_streak = self.off_streak + 1 if release else 0
            if self._should_release():
                self._enter(GateState.RELEASED)
        return self.engaged

    def hold(self) -> None:
        """Force ENGAGED and restart confirmation; a new edge needs a full release first."""
        self._enter(GateState.ENGAGED)

    def reset(self) -> None:
        self._enter(GateState.RELEASED)

    # ---------------------- guards ----------------------

    def _should_engage(self) -> bool:
        return self.on_streak >= self.on_frames

    def _should_release(self) -> bool:
        return self.off_streak >= self.off_frames

    def _enter(self, state: GateState) -> None:
        self.state = state
        self.on_streak = 0
        self.off_streak = 0


class PinchDetector:
    """Thumb tip ↔ index tip, normalized by hand scale, with a hysteresis gap."""

    def __init__(self, tuning: PinchTuning) -> None:
        self.tuning = tuning
        self.gate = StreakGate(on_frames=tuning.on_frames, off_frames=tuning.off_frames)
        self.last_norm_dist: float | None = None

    @property
    def closed(self) -> bool:
        return self.gate.engaged

    @staticmethod
    def norm_distance(frame: HandFrame) -> float:
        return distance(frame[THUMB_TIP], frame[INDEX_TIP]) / hand_scale_norm(frame)

    def update(self, frame: HandFrame) -> bool:
        return self.update_distance(self.norm_distance(frame))

    def update_distance(self, norm_dist: float) -> bool:
        was = self.gate.engaged
        self.last_norm_dist = norm_dist
        closed = self.gate.update(
            engage=norm_dist < self.tuning.on_threshold,
            release=norm_dist > self.tuning.off_threshold,
        )
        if closed != was:
            log.debug("pinch %s (normDist=%.2f)", "ON" if closed else "OFF", norm_dist)
        return closed

    def reset(self) -> None:
        self.gate.reset()
        self.last_norm_dist = None


def is_thumbs_up(frame: HandFrame, curl_threshold: float = 1.10) -> bool:
    """
    Thumbs-up heuristic (image y grows downward):
    - thumb chain points up: tip above IP above MCP, tip above wrist
    - every other finger is folded: tip below its PIP, or tip close to its MCP
    """
    tip, ip, mcp = frame[THUMB_TIP], frame[THUMB_IP], frame[THUMB_MCP]
    if not (tip.y < ip.y and ip.y < mcp.y and tip.y < frame[WRIST].y):
        return False

    hs = hand_scale_norm(frame)
    for f_tip, f_pip, f_mcp in FINGERS:
        below_pip = frame[f_tip].y > frame[f_pip].y
        curled = distance(frame[f_tip], frame[f_mcp]) / hs < curl_threshold
        if not (below_pip or curled):
            return False
    return True


class ThumbsUpDetector:

    def __init__(self, tuning: ThumbsUpTuning) -> None:
        self.tuning = tuning
        self.gate = StreakGate(on_frames=tuning.on_frames, off_frames=tuning.off_frames)

    @property
    def active(self) -> bool:
        return self.gate.engaged

    def update(self, frame: HandFrame) -> bool:
        return self.update_raw(is_thumbs_up(frame, self.tuning.curl_threshold))

    def update_raw(self, raw: bool) -> bool:
        was = self.gate.engaged
        active = self.gate.update(engage=raw, release=not raw)
        if active != was:
            log.debug("thumbs-up %s", "ON" if active else "OFF")
        return active

    def hold(self) -> None:
        self.gate.hold()

    def reset(self) -> None:
        self.gate.reset()
