import numpy as np
import pytest

from pytune_srh.core.preprocess import (
    LOG_EPS,
    half_range_bins,
    log_spectrum,
    prefix_sum,
    residual_spectrum,
    smoothing_bounds,
)

SR = 44100
NYQ = SR / 2.0
N = 1024


def residual_reference(mag: np.ndarray, smoothing_width: float, nyquist: float) -> np.ndarray:
    """Version boucle scalaire, bin par bin (référence)."""
    n = len(mag)
    raw = [float(np.log(m + LOG_EPS)) for m in mag]
    cum = [0.0] * n
    for i in range(1, n):
        cum[i] = cum[i - 1] + raw[i]
    half = int(round((smoothing_width / 2) / nyquist * n))
    res = []
    for i in range(n):
        up = min(i + half, n - 1)
        lo = max(i - half + 1, 0)
        smoothed = (cum[up] - cum[lo]) / (up - lo)
        res.append(raw[i] - smoothed)
    return np.array(res)


def test_log_spectrum_floor_on_zero_bins():
    out = log_spectrum(np.zeros(8))
    assert np.all(np.isfinite(out))
    assert np.allclose(out, np.log(LOG_EPS))


def test_prefix_sum_skips_bin_zero():
    L = np.array([5.0, 1.0, 2.0, 3.0])
    P = prefix_sum(L)
    assert P[0] == 0.0
    assert np.allclose(P, [0.0, 1.0, 3.0, 6.0]), f"prefix inattendu: {P}"


def test_half_range_bins_default_geometry():
    # 250 Hz / 22050 Hz * 1024 = 11.6 → 12
    assert half_range_bins(500, NYQ, N) == 12


def test_smoothing_bounds_shrink_at_edges():
    upper, lower = smoothing_bounds(N, 12)
    assert (upper[0], lower[0]) == (12, 0)
    assert (upper[-1], lower[-1]) == (N - 1, N - 12)
    assert np.all(upper - lower >= 1)


def test_smoothing_bounds_too_narrow():
    with pytest.raises(ValueError):
        smoothing_bounds(N, 1)


def test_residual_matches_scalar_reference():
    rng = np.random.default_rng(42)
    mag = rng.random(N) ** 3
    mag[::37] = 0.0
    res = residual_spectrum(mag, 500, NYQ)
    ref = residual_reference(mag, 500, NYQ)
    assert np.allclose(res, ref, atol=1e-9), f"écart max {np.max(np.abs(res - ref)):.3e}"


def test_residual_of_flat_spectrum_is_zero():
    res = residual_spectrum(np.full(N, 1e-6), 500, NYQ)
    assert np.max(np.abs(res)) < 1e-9


def test_residual_emphasises_peaks():
    mag = np.full(N, 1e-6)
    mag[[10, 20, 31]] = 1.0
    res = residual_spectrum(mag, 500, NYQ)
    # pic ≈ 0 en log, moyenne locale ≈ -12.6 → résiduel ≈ +12.6
    assert 12.0 < res[10] < 13.0, f"résiduel bin 10 = {res[10]:.3f}"
    assert res[15] < 0.0


def test_residual_reuses_buffers():
    mag = np.ones(N)
    out, log_out, cum_out = np.empty(N), np.empty(N), np.empty(N)
    res = residual_spectrum(mag, 500, NYQ, out=out, log_out=log_out, cum_out=cum_out)
    assert res is out
    assert np.allclose(log_out, np.log(1.0 + LOG_EPS))
