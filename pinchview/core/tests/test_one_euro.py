import math

import pytest

from pinchview.core.one_euro import OneEuro


def test_first_sample_passes_through():
    f = OneEuro(min_cutoff=1.0, beta=0.02, d_cutoff=1.0)
    assert f.apply(3.7, 0.0) == 3.7

    f.apply(9.0, 16.0)
    f.reset()
    assert not f.initialized
    assert f.apply(-2.0, 500.0) == -2.0


def test_constant_input_stays_exact():
    f = OneEuro()
    t = 0.0
    out = f.apply(5.0, t)
    for _ in range(100):
        t += 1000.0 / 60.0
        out = f.apply(5.0, t)
        assert out == 5.0


def test_step_converges():
    f = OneEuro(min_cutoff=1.0, beta=0.02, d_cutoff=1.0)
    t = 0.0
    f.apply(0.0, t)
    out = 0.0
    for _ in range(300):
        t += 16.0
        out = f.apply(1.0, t)
    assert abs(out - 1.0) < 1e-6


def test_alpha_matches_cutoff_formula():
    # beta=0 -> cutoff is min_cutoff; dt = 1 s
    f = OneEuro(min_cutoff=1.0, beta=0.0, d_cutoff=1.0)
    f.apply(0.0, 0.0)
    out = f.apply(1.0, 1000.0)
    expected = 1.0 / (1.0 + (1.0 / (2.0 * math.pi)) / 1.0)
    assert out == pytest.approx(expected)


def test_fast_motion_raises_cutoff():
    slow = OneEuro(min_cutoff=1.0, beta=0.0)
    fast = OneEuro(min_cutoff=1.0, beta=1.0)
    t = 0.0
    x = 0.0
    slow.apply(x, t)
    fast.apply(x, t)
    for _ in range(30):
        t += 16.0
        x += 10.0
        s = slow.apply(x, t)
        q = fast.apply(x, t)
    assert abs(x - q) < abs(x - s)


def test_duplicate_timestamp_stays_finite():
    f = OneEuro()
    f.apply(0.0, 100.0)
    out = f.apply(10.0, 100.0)
    assert math.isfinite(out)
    assert 0.0 <= out <= 10.0
