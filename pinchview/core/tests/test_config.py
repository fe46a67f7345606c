import pytest

from pinchview.core.config import (
    DEFAULT_PRESET, PRESETS, PresetName,
    OneEuroParams, PinchTuning, ScaleCalibration, ThumbsUpTuning,
    apply_profile,
)


def test_reference_defaults():
    p = DEFAULT_PRESET
    assert (p.pinch.on_threshold, p.pinch.off_threshold) == (0.30, 0.60)
    assert (p.pinch.on_frames, p.pinch.off_frames) == (2, 3)
    assert (p.thumbs_up.on_frames, p.thumbs_up.off_frames) == (4, 4)
    assert p.hover.dwell_ms == 70.0
    assert p.tracking.grace_ms == 350.0
    assert p.policy.close_on_pinch is False


def test_every_preset_is_registered():
    assert set(PRESETS) == set(PresetName)
    for name, preset in PRESETS.items():
        assert preset.name == name


@pytest.mark.parametrize("make", [
    lambda: PinchTuning(on_threshold=0.6, off_threshold=0.3),
    lambda: PinchTuning(on_frames=0),
    lambda: ThumbsUpTuning(off_frames=0),
    lambda: ScaleCalibration(far_px=200.0, near_px=100.0),
    lambda: OneEuroParams(min_cutoff_hz=0.0),
])
def test_invalid_tuning_rejected(make):
    with pytest.raises(ValueError):
        make()


def test_apply_profile_overrides_scale_only():
    p = apply_profile(DEFAULT_PRESET, {"far_px": 50.0, "near_px": 250.0})
    assert (p.scale.far_px, p.scale.near_px) == (50.0, 250.0)
    assert p.pinch == DEFAULT_PRESET.pinch
    assert apply_profile(DEFAULT_PRESET, None) is DEFAULT_PRESET
