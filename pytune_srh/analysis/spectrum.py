import numpy as np
from scipy.signal import get_window

from pytune_srh.types.enums import FFTWindow

DEFAULT_SPECTRUM_SIZE = 1024


def magnitude_spectrum(
    frame: np.ndarray,
    spectrum_size: int = DEFAULT_SPECTRUM_SIZE,
    window: FFTWindow = FFTWindow.HANN,
    channel: int = 0,
) -> np.ndarray:
    """
    Spectre d'amplitude fenêtré d'une trame, sur `spectrum_size` bins de 0 à Nyquist.

    - On garde les 2·N échantillons les plus récents (zero-padding si plus court).
    - Signal 2D = (canaux x échantillons) : `channel` choisit le canal.
    - Normalisation 2/Σw : une sinusoïde pleine échelle culmine vers 1.

    Returns
    -------
    spectrum : np.ndarray
        N amplitudes, bin i ↔ i / N * (sr / 2).
    """
    y = np.asarray(frame, dtype=np.float64)
    if y.ndim == 2:
        if not (0 <= channel < y.shape[0]):
            raise ValueError(f"Canal {channel} inexistant ({y.shape[0]} canaux)")
        y = y[channel]
    elif y.ndim != 1:
        raise ValueError(f"Trame 1D ou 2D attendue, reçu {y.ndim}D")

    n_fft = 2 * spectrum_size
    y = y[-n_fft:]
    if y.size == 0:
        return np.zeros(spectrum_size, dtype=np.float64)

    w = get_window(FFTWindow(window).value, y.size, fftbins=True)
    wsum = float(np.sum(w))
    if wsum <= 0:
        return np.zeros(spectrum_size, dtype=np.float64)

    mag = np.abs(np.fft.rfft(y * w, n_fft))[:spectrum_size]
    return mag * (2.0 / wsum)
