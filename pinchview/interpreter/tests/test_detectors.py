from dataclasses import replace

from pinchview.core.config import DEFAULT_PRESET
from pinchview.core.types import HandFrame, Landmark
from pinchview.interpreter.detectors import (
    GateState, PinchDetector, StreakGate, ThumbsUpDetector, is_thumbs_up,
)
from pinchview.tools.synthetic import hand


def pinch():
    return PinchDetector(DEFAULT_PRESET.pinch)


def test_pinch_closes_on_second_frame():
    d = pinch()
    assert d.update_distance(0.10) is False
    assert d.update_distance(0.10) is True
    assert d.gate.state == GateState.ENGAGED
    assert (d.gate.on_streak, d.gate.off_streak) == (0, 0)


def test_pinch_interrupted_streak_starts_over():
    d = pinch()
    d.update_distance(0.10)
    d.update_distance(0.45)
    assert d.update_distance(0.10) is False
    assert d.update_distance(0.10) is True


def test_pinch_opens_on_third_release_frame():
    d = pinch()
    d.update_distance(0.1)
    d.update_distance(0.1)
    assert d.update_distance(0.7) is True
    assert d.update_distance(0.7) is True
    assert d.update_distance(0.7) is False


def test_pinch_gap_oscillation_never_toggles_from_open():
    d = pinch()
    for i in range(200):
        assert d.update_distance(0.31 if i % 2 == 0 else 0.59) is False


def test_pinch_gap_oscillation_never_toggles_from_closed():
    d = pinch()
    d.update_distance(0.1)
    d.update_distance(0.1)
    for i in range(200):
        assert d.update_distance(0.59 if i % 2 == 0 else 0.31) is True


def test_at_most_one_streak_nonzero():
    d = pinch()
    for v in (0.1, 0.5, 0.1, 0.1, 0.7, 0.2, 0.7, 0.7, 0.65, 0.1, 0.05, 0.9, 0.9, 0.9):
        d.update_distance(v)
        assert d.gate.on_streak == 0 or d.gate.off_streak == 0


def test_pinch_from_landmarks():
    d = pinch()
    assert PinchDetector.norm_distance(hand("pinch", norm_dist=0.1)) < 0.30
    d.update(hand("pinch", norm_dist=0.1))
    assert d.update(hand("pinch", norm_dist=0.1)) is True
    for _ in range(3):
        d.update(hand("open"))
    assert d.closed is False


def test_pinch_reset():
    d = pinch()
    d.update_distance(0.1)
    d.update_distance(0.1)
    d.reset()
    assert d.closed is False
    assert (d.gate.on_streak, d.gate.off_streak) == (0, 0)


def test_thumbs_up_classifier():
    assert is_thumbs_up(hand("thumbs_up")) is True
    assert is_thumbs_up(hand("open")) is False
    assert is_thumbs_up(hand("pinch", norm_dist=0.1)) is False


def test_thumbs_down_is_rejected():
    up = hand("thumbs_up")
    # mirror vertically around the wrist
    wy = up[0].y
    down = HandFrame(landmarks=tuple(Landmark(lm.x, 2 * wy - lm.y, lm.z) for lm in up.landmarks))
    assert is_thumbs_up(down) is False


def test_curl_threshold_controls_extended_fingers():
    # extended fingers reach 1.2 hand units from their MCP
    assert is_thumbs_up(hand("open"), curl_threshold=1.25) is True
    assert is_thumbs_up(hand("open"), curl_threshold=1.10) is False


def test_thumbs_up_debounce_and_hold():
    d = ThumbsUpDetector(DEFAULT_PRESET.thumbs_up)
    assert [d.update_raw(True) for _ in range(4)] == [False, False, False, True]

    d.hold()
    assert d.active is True
    assert (d.gate.on_streak, d.gate.off_streak) == (0, 0)

    assert [d.update_raw(False) for _ in range(4)] == [True, True, True, False]


def test_thumbs_up_from_landmarks():
    d = ThumbsUpDetector(replace(DEFAULT_PRESET.thumbs_up, on_frames=2))
    d.update(hand("thumbs_up"))
    assert d.update(hand("thumbs_up")) is True


def test_gate_pending():
    g = StreakGate(on_frames=3, off_frames=3)
    assert g.pending is False
    g.update(engage=True, release=False)
    assert g.pending is True and g.engaged is False
