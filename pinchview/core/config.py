"""
PinchView — v1 Defaults (Presets)

Reference tuning for a 30–60 Hz webcam feed at typical desk distance.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class PresetName(str, Enum):
    DEFAULT = "Default"
    STEADY = "Steady"
    RESPONSIVE = "Responsive"


@dataclass(frozen=True)
class OneEuroParams:
    min_cutoff_hz: float = 1.0
    beta: float = 0.02
    d_cutoff_hz: float = 1.0

    def __post_init__(self) -> None:
        if self.min_cutoff_hz <= 0 or self.d_cutoff_hz <= 0:
            raise ValueError("cutoff frequencies must be positive")
        if self.beta < 0:
            raise ValueError("beta must be >= 0")


@dataclass(frozen=True)
class PinchTuning:
    # normalized thumb↔index distance (units of hand scale)
    on_threshold: float = 0.30
    off_threshold: float = 0.60
    on_frames: int = 2
    off_frames: int = 3

    def __post_init__(self) -> None:
        if self.on_threshold >= self.off_threshold:
            raise ValueError("pinch on_threshold must be below off_threshold")
        if self.on_frames < 1 or self.off_frames < 1:
            raise ValueError("pinch frame counts must be >= 1")


@dataclass(frozen=True)
class ThumbsUpTuning:
    # stricter than pinch: a false positive closes the viewer
    on_frames: int = 4
    off_frames: int = 4
    curl_threshold: float = 1.10

    def __post_init__(self) -> None:
        if self.on_frames < 1 or self.off_frames < 1:
            raise ValueError("thumbs-up frame counts must be >= 1")


@dataclass(frozen=True)
class HoverTuning:
    dwell_ms: float = 70.0


@dataclass(frozen=True)
class TrackingSafety:
    grace_ms: float = 350.0


@dataclass(frozen=True)
class ScaleCalibration:
    # hand scale in px at the far / near ends of the usable range
    far_px: float = 40.0
    near_px: float = 300.0

    def __post_init__(self) -> None:
        if self.near_px <= self.far_px:
            raise ValueError("near_px must be greater than far_px")


@dataclass(frozen=True)
class DiagnosticsTuning:
    scale_log_interval_ms: float = 1200.0


@dataclass(frozen=True)
class GesturePolicy:
    # allow pinch on the close affordance to close the viewer (thumbs-up always works)
    close_on_pinch: bool = False


@dataclass(frozen=True)
class Preset:
    name: PresetName
    pos_filter: OneEuroParams
    scale_filter: OneEuroParams
    pinch: PinchTuning = PinchTuning()
    thumbs_up: ThumbsUpTuning = ThumbsUpTuning()
    hover: HoverTuning = HoverTuning()
    tracking: TrackingSafety = TrackingSafety()
    scale: ScaleCalibration = ScaleCalibration()
    diagnostics: DiagnosticsTuning = DiagnosticsTuning()
    policy: GesturePolicy = GesturePolicy()


DEFAULT_PRESET = Preset(
    name=PresetName.DEFAULT,
    pos_filter=OneEuroParams(min_cutoff_hz=1.0, beta=0.02, d_cutoff_hz=1.0),
    # scale moves slowly relative to position; keep beta very low to kill size jitter
    scale_filter=OneEuroParams(min_cutoff_hz=0.9, beta=0.01, d_cutoff_hz=1.0),
)

STEADY_PRESET = Preset(
    name=PresetName.STEADY,
    pos_filter=OneEuroParams(min_cutoff_hz=0.7, beta=0.01, d_cutoff_hz=1.0),
    scale_filter=OneEuroParams(min_cutoff_hz=0.7, beta=0.005, d_cutoff_hz=1.0),
    hover=HoverTuning(dwell_ms=90.0),
    tracking=TrackingSafety(grace_ms=450.0),
)

RESPONSIVE_PRESET = Preset(
    name=PresetName.RESPONSIVE,
    pos_filter=OneEuroParams(min_cutoff_hz=1.6, beta=0.05, d_cutoff_hz=1.0),
    scale_filter=OneEuroParams(min_cutoff_hz=1.2, beta=0.02, d_cutoff_hz=1.0),
    hover=HoverTuning(dwell_ms=50.0),
    tracking=TrackingSafety(grace_ms=250.0),
)

PRESETS = {
    PresetName.DEFAULT: DEFAULT_PRESET,
    PresetName.STEADY: STEADY_PRESET,
    PresetName.RESPONSIVE: RESPONSIVE_PRESET,
}


def apply_profile(preset: Preset, profile: Optional[dict]) -> Preset:
    """Overlay a saved calibration profile (see runtime.calibration) onto a preset."""
    if not profile:
        return preset
    scale = ScaleCalibration(
        far_px=float(profile.get("far_px", preset.scale.far_px)),
        near_px=float(profile.get("near_px", preset.scale.near_px)),
    )
    return replace(preset, scale=scale)
