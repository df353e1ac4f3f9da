# tests/unit/test_window.py
import importlib

import numpy as np
import pytest

sat = importlib.import_module("ssimgrey.core.sat")
win = importlib.import_module("ssimgrey.core.window")


def test_stability_constants_defaults():
    c1, c2 = win.stability_constants(0.01, 0.03, 8)
    assert c1 == pytest.approx((0.01 * 255) ** 2)
    assert c2 == pytest.approx((0.03 * 255) ** 2)


def test_stability_constants_16bit():
    c1, c2 = win.stability_constants(0.01, 0.03, 16)
    assert c1 == pytest.approx((0.01 * 65535) ** 2)
    assert c2 == pytest.approx((0.03 * 65535) ** 2)


@pytest.mark.parametrize("w,h,ws,expected", [
    (48, 48, 11, (38, 38)),
    (64, 32, 11, (54, 22)),
    (11, 11, 11, (1, 1)),
    (5, 5, 11, (-5, -5)),
    (20, 5, 11, (10, -5)),
])
def test_window_extent(w, h, ws, expected):
    assert win.window_extent(w, h, ws) == expected


def test_window_stats_match_direct(rng, reference):
    w, h, ws = 17, 13, 5
    a = rng.integers(0, 256, size=(h, w))
    b = rng.integers(0, 256, size=(h, w))
    st = win.window_stats(sat.build_sats(a, b, w, h), ws)
    assert st.shape == (h - ws + 1, w - ws + 1)

    x = a.astype(np.float64)
    y = b.astype(np.float64)
    for wy in range(h - ws + 1):
        for wx in range(w - ws + 1):
            mx, my, vx, vy, cxy = reference.window_stats_direct(x, y, wx, wy, ws)
            assert st.mean_x[wy, wx] == pytest.approx(mx, abs=1e-9)
            assert st.mean_y[wy, wx] == pytest.approx(my, abs=1e-9)
            assert st.var_x[wy, wx] == pytest.approx(vx, abs=1e-7)
            assert st.var_y[wy, wx] == pytest.approx(vy, abs=1e-7)
            assert st.cov_xy[wy, wx] == pytest.approx(cxy, abs=1e-7)


def test_ssim_map_shape_and_range(rng):
    w, h, ws = 30, 20, 7
    a = rng.integers(0, 256, size=w * h)
    b = rng.integers(0, 256, size=w * h)
    c1, c2 = win.stability_constants(0.01, 0.03, 8)
    m = win.ssim_map(sat.build_sats(a, b, w, h), ws, c1, c2)
    assert m.shape == (h - ws + 1, w - ws + 1)
    assert np.isfinite(m).all()
    assert (m <= 1.0 + 1e-12).all()
    assert (m >= -1.0 - 1e-12).all()


def test_ssim_map_empty_when_window_does_not_fit():
    a = np.zeros(25, dtype=np.uint8)
    m = win.ssim_map(sat.build_sats(a, a, 5, 5), 11, 1.0, 1.0)
    assert m.shape == (0, 0)


def test_online_mean_update_rule():
    acc = win.OnlineMean()
    values = [0.25, 1.0, -0.5, 0.75]
    expected = 0.0
    for i, v in enumerate(values, start=1):
        acc.push(v)
        expected = expected + (v - expected) / i
        assert acc.count == i
        assert acc.mean == expected
    assert acc.mean == pytest.approx(sum(values) / len(values))


def test_fold_mean_row_major_order():
    vals = np.array([[0.1, 0.7, 0.3], [0.9, 0.2, 0.6]])
    expected = 0.0
    for n, v in enumerate([0.1, 0.7, 0.3, 0.9, 0.2, 0.6], start=1):
        expected = expected + (v - expected) / n
    assert win.fold_mean(vals) == expected


def test_fold_mean_empty():
    assert win.fold_mean(np.empty((0, 0))) == 0.0


def test_evaluate_windows_degenerate_returns_one():
    a = np.arange(25, dtype=np.uint8)
    b = a[::-1].copy()
    c1, c2 = win.stability_constants(0.01, 0.03, 8)
    assert win.evaluate_windows(sat.build_sats(a, b, 5, 5), 11, c1, c2) == 1.0


def test_evaluate_windows_single_window_is_global_ssim(rng):
    # window == image: one window covering every pixel
    w = h = 8
    a = rng.integers(0, 256, size=w * h)
    b = rng.integers(0, 256, size=w * h)
    c1, c2 = win.stability_constants(0.01, 0.03, 8)
    x = a.astype(np.float64)
    y = b.astype(np.float64)
    mx, my = x.mean(), y.mean()
    vx, vy = x.var(), y.var()
    cxy = ((x - mx) * (y - my)).mean()
    expected = ((2 * mx * my + c1) * (2 * cxy + c2)) / ((mx ** 2 + my ** 2 + c1) * (vx + vy + c2))
    got = win.evaluate_windows(sat.build_sats(a, b, w, h), 8, c1, c2)
    assert got == pytest.approx(expected, abs=1e-9)


def test_constant_windows_have_zero_variance():
    a = np.full(16 * 16, 255, dtype=np.uint8)
    st = win.window_stats(sat.build_sats(a, a, 16, 16), 4)
    assert (st.var_x == 0.0).all()
    assert (st.cov_xy == 0.0).all()


@pytest.mark.parametrize("bits,expected", [(1, 1), (8, 255), (16, 65535), (53, 2 ** 53 - 1)])
def test_dynamic_range(bits, expected):
    assert win.dynamic_range(bits) == expected
    c1, _ = win.stability_constants(1.0, 1.0, bits)
    assert c1 == float(expected) * float(expected)
