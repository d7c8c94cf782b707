import numpy as np
from typing import Optional, Tuple

LOG_EPS = 1e-9


def log_spectrum(magnitude: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Spectre en amplitude logarithmique : ln(|S| + ε).

    ε évite -∞ sur les bins d'amplitude nulle ; il est appliqué à tous les bins.
    """
    magnitude = np.asarray(magnitude, dtype=np.float64)
    if out is None:
        out = np.empty_like(magnitude)
    np.add(magnitude, LOG_EPS, out=out)
    return np.log(out, out=out)


def prefix_sum(log_spec: np.ndarray, out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Somme cumulée : P[0] = 0, P[i] = P[i-1] + L[i].

    L'indice 0 représente un préfixe vide (L[0] n'entre jamais dans une moyenne).
    """
    if out is None:
        out = np.empty_like(log_spec)
    out[0] = 0.0
    if log_spec.size > 1:
        np.cumsum(log_spec[1:], out=out[1:])
    return out


def half_range_bins(smoothing_width: float, nyquist: float, spectrum_size: int) -> int:
    """Demi-largeur (en bins) de la moyenne glissante."""
    return int(round((smoothing_width / 2.0) / nyquist * spectrum_size))


def smoothing_bounds(spectrum_size: int, half_range: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Bornes (upper, lower) de la fenêtre de moyenne pour chaque bin.
    La fenêtre rétrécit aux extrémités : pas de repliement ni de zero-padding.
    """
    if half_range < 2:
        raise ValueError(
            f"Lissage trop étroit: {half_range} bin(s) de demi-largeur (minimum 2)"
        )
    idx = np.arange(spectrum_size)
    upper = np.minimum(idx + half_range, spectrum_size - 1)
    lower = np.maximum(idx - half_range + 1, 0)
    return upper, lower


def residual_spectrum(
    magnitude: np.ndarray,
    smoothing_width: float,
    nyquist: float,
    out: Optional[np.ndarray] = None,
    log_out: Optional[np.ndarray] = None,
    cum_out: Optional[np.ndarray] = None,
    bounds: Optional[Tuple[np.ndarray, np.ndarray]] = None,
) -> np.ndarray:
    """
    Spectre résiduel : log-spectre moins sa moyenne glissante locale.

    Parameters
    ----------
    magnitude : np.ndarray
        Spectre d'amplitude (N bins, de 0 à Nyquist).
    smoothing_width : float
        Largeur du lissage (Hz).
    nyquist : float
        Fréquence de Nyquist (Hz).
    out, log_out, cum_out : np.ndarray, optional
        Tampons préalloués (résiduel, log-spectre, somme cumulée).
    bounds : (upper, lower), optional
        Bornes précalculées par `smoothing_bounds`.

    Returns
    -------
    residual : np.ndarray
        Même longueur que `magnitude`. Les pics harmoniques ressortent
        au-dessus de l'enveloppe spectrale.
    """
    n = len(magnitude)
    log_spec = log_spectrum(magnitude, out=log_out)
    cum = prefix_sum(log_spec, out=cum_out)

    if bounds is None:
        bounds = smoothing_bounds(n, half_range_bins(smoothing_width, nyquist, n))
    upper, lower = bounds

    if out is None:
        out = np.empty(n, dtype=np.float64)
    # moyenne glissante via la somme cumulée (O(1) par bin)
    np.subtract(cum[upper], cum[lower], out=out)
    out /= (upper - lower)
    np.subtract(log_spec, out, out=out)
    return out
