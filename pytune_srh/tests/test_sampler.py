import numpy as np
import pytest

from pytune_srh.core.sampler import max_readable_frequency, spectrum_amplitude
from pytune_srh.types.enums import BoundaryPolicy

NYQ = 22050.0
N = 1024
BIN_HZ = NYQ / N


def test_on_bin_returns_bin_value():
    spec = np.arange(N, dtype=float)
    assert spectrum_amplitude(spec, 10 * BIN_HZ, NYQ) == pytest.approx(10.0)


def test_linear_interpolation_between_bins():
    spec = np.zeros(N)
    spec[20] = 4.0
    spec[21] = 8.0
    val = spectrum_amplitude(spec, 20.25 * BIN_HZ, NYQ)
    assert val == pytest.approx(5.0), f"interpolation: {val}"


def test_vector_input():
    spec = np.arange(N, dtype=float)
    vals = spectrum_amplitude(spec, np.array([1.5, 2.5, 100.0]) * BIN_HZ, NYQ)
    assert isinstance(vals, np.ndarray)
    assert np.allclose(vals, [1.5, 2.5, 100.0])


def test_clamp_past_last_bin():
    spec = np.arange(N, dtype=float)
    # dernier intervalle [N-1, N) et au-delà de Nyquist → dernier bin
    assert spectrum_amplitude(spec, (N - 0.5) * BIN_HZ, NYQ) == pytest.approx(N - 1)
    assert spectrum_amplitude(spec, 2 * NYQ, NYQ) == pytest.approx(N - 1)


def test_reject_past_last_bin():
    spec = np.arange(N, dtype=float)
    with pytest.raises(ValueError):
        spectrum_amplitude(spec, (N - 0.5) * BIN_HZ, NYQ, BoundaryPolicy.REJECT)
    # encore lisible juste sous la limite
    f = max_readable_frequency(NYQ, N) - 1e-3
    assert spectrum_amplitude(spec, f, NYQ, BoundaryPolicy.REJECT) < N - 1


def test_reject_exactly_at_limit():
    # Nyquist 1024 Hz, N=1024 → limite exacte 1023 Hz (bin N-1 pile, i1 = N)
    spec = np.arange(N, dtype=float)
    limit = max_readable_frequency(1024.0, N)
    assert limit == 1023.0
    with pytest.raises(ValueError):
        spectrum_amplitude(spec, limit, 1024.0, BoundaryPolicy.REJECT)
    assert spectrum_amplitude(spec, limit - 0.5, 1024.0, BoundaryPolicy.REJECT) == pytest.approx(N - 1.5)
