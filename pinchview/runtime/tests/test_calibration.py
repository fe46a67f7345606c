import pytest

from pinchview.core.config import DEFAULT_PRESET, apply_profile
from pinchview.core.types import Viewport
from pinchview.runtime.calibration import (
    CalibResult, ScaleCalibrator, load_profile, percentile, save_profile,
)
from pinchview.tools.synthetic import hand

VP = Viewport(1280, 720)


def run_wizard(cal, far_scale, near_scale):
    t = 0
    cal.start()
    while not cal.done and t < 10000:
        scale = far_scale if cal.step == 0 else near_scale
        cal.update(hand("open", scale=scale), VP, t)
        t += 10
    return cal


def test_wizard_collects_far_then_near():
    cal = run_wizard(ScaleCalibrator(step_ms=100), far_scale=0.05, near_scale=0.3)
    assert cal.done
    assert cal.instruction() == "Calibration complete."
    r = cal.finalize()
    assert r.far_px == pytest.approx(0.05 * 720)
    assert r.near_px == pytest.approx(0.3 * 720)


def test_wizard_keeps_a_minimum_gap():
    cal = run_wizard(ScaleCalibrator(step_ms=100), far_scale=0.1, near_scale=0.1)
    r = cal.finalize()
    assert r.near_px == pytest.approx(r.far_px + ScaleCalibrator.MIN_GAP_PX)


def test_wizard_without_samples_falls_back():
    cal = ScaleCalibrator(step_ms=100)
    cal.start()
    for t in range(0, 400, 10):
        cal.update(None, VP, t)
    assert cal.done
    assert cal.finalize(40.0, 300.0) == CalibResult(far_px=40.0, near_px=300.0)


def test_percentile():
    assert percentile([], 50) is None
    assert percentile([3, 1, 2], 50) == 2
    assert percentile([1, 2, 3, 4, 5], 100) == 5


def test_profile_round_trip(tmp_path):
    path = tmp_path / "profile.json"
    assert load_profile(path) is None
    save_profile(CalibResult(far_px=45.0, near_px=260.0), path)
    prof = load_profile(path)
    assert prof == {"far_px": 45.0, "near_px": 260.0}
    p = apply_profile(DEFAULT_PRESET, prof)
    assert (p.scale.far_px, p.scale.near_px) == (45.0, 260.0)
