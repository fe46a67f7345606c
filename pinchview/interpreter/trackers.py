from __future__ import annotations

from typing import Tuple

from pinchview.core.config import OneEuroParams, ScaleCalibration
from pinchview.core.geometry import hand_scale_px, project_to_screen
from pinchview.core.one_euro import OneEuro
from pinchview.core.types import HandFrame, Viewport, INDEX_TIP, clamp01, ease_out_cubic


class ScaleTracker:
    """
    Smoothed hand size in px -> closeness intensity t in [0, 1].
    t drives visual feedback only (cursor diameter, dot radius).
    """

    def __init__(self, params: OneEuroParams, calibration: ScaleCalibration) -> None:
        self.calibration = calibration
        self._filter = OneEuro.from_params(params)
        self.raw_px = 0.0
        self.smooth_px = 0.0
        self.t = 0.0

    @property
    def filter(self) -> OneEuro:
        return self._filter

    def to_t(self, px: float) -> float:
        far, near = self.calibration.far_px, self.calibration.near_px
        return ease_out_cubic(clamp01((px - far) / (near - far)))

    def update(self, frame: HandFrame, viewport: Viewport, t_ms: float) -> float:
        self.raw_px = hand_scale_px(frame, viewport)
        self.smooth_px = self._filter.apply(self.raw_px, t_ms)
        self.t = self.to_t(self.smooth_px)
        return self.t

    def reset(self) -> None:
        self._filter.reset()


class CursorTracker:
    """
    Index fingertip -> smoothed screen point.

    The last smoothed point survives reset(); the interpreter keeps showing it
    through short dropouts and only resets filters once the grace window is over.
    """

    def __init__(self, params: OneEuroParams) -> None:
        self.x_filter = OneEuro.from_params(params)
        self.y_filter = OneEuro.from_params(params)
        self._last: Tuple[float, float] = (0.0, 0.0)

    def update(self, frame: HandFrame, viewport: Viewport, t_ms: float) -> Tuple[float, float]:
        x_raw, y_raw = project_to_screen(frame[INDEX_TIP], viewport)
        x = self.x_filter.apply(x_raw, t_ms)
        y = self.y_filter.apply(y_raw, t_ms)
        self._last = (x, y)
        return self._last

    def last_known(self) -> Tuple[float, float]:
        return self._last

    def reset(self) -> None:
        self.x_filter.reset()
        self.y_filter.reset()
