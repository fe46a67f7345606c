from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pinchview.core.geometry import hand_scale_px
from pinchview.core.types import HandFrame, Viewport


@dataclass
class CalibResult:
    far_px: float
    near_px: float


def _profile_path() -> Path:
    p = Path.home() / ".config" / "pinchview"
    p.mkdir(parents=True, exist_ok=True)
    return p / "profile.json"


def save_profile(r: CalibResult, path: Optional[Path] = None) -> Path:
    p = path or _profile_path()
    p.write_text(json.dumps(r.__dict__, indent=2))
    return p


def load_profile(path: Optional[Path] = None) -> Optional[dict]:
    p = path or _profile_path()
    if not p.exists():
        return None
    return json.loads(p.read_text())


def percentile(xs, q):
    if not xs:
        return None
    xs = sorted(xs)
    k = int(round((q / 100.0) * (len(xs) - 1)))
    return xs[max(0, min(len(xs) - 1, k))]


class ScaleCalibrator:
    """
    Two-step wizard for the closeness intensity:
    - shows text instruction
    - collects raw hand scale (px) for a fixed duration per step
    - far/near are robust percentiles of each step
    """
    STEP_MS = 3000
    MIN_GAP_PX = 20.0

    def __init__(self, step_ms: int = STEP_MS):
        self.step_ms = step_ms
        self.step = 0
        self.step_start: float | None = None
        self.samples = {"far": [], "near": []}
        self.done = False

    def start(self):
        self.step = 0
        self.step_start = None
        self.done = False
        for k in self.samples:
            self.samples[k].clear()

    def instruction(self) -> str:
        steps = [
            "Calibration 1/2: Hold your open hand as FAR from the camera as you'd use it.",
            "Calibration 2/2: Hold your open hand as NEAR to the camera as you'd use it.",
        ]
        return steps[self.step] if self.step < len(steps) else "Calibration complete."

    def update(self, hand: HandFrame | None, viewport: Viewport, t_ms: float) -> None:
        if self.done:
            return

        if self.step_start is None:
            self.step_start = t_ms

        if (t_ms - self.step_start) > self.step_ms:
            self.step += 1
            self.step_start = t_ms
            if self.step >= 2:
                self.done = True
            return

        if hand is None:
            return

        px = hand_scale_px(hand, viewport)
        self.samples["far" if self.step == 0 else "near"].append(px)

    def finalize(self, default_far: float = 40.0, default_near: float = 300.0) -> CalibResult:
        # far end: upper-ish percentile so "far" still reads as t≈0
        far = percentile(self.samples["far"], 60) or default_far
        # near end: lower-ish percentile so "near" reliably reaches t≈1
        near = percentile(self.samples["near"], 40) or default_near
        near = max(near, far + self.MIN_GAP_PX)
        return CalibResult(far_px=float(far), near_px=float(near))
