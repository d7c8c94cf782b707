import numpy as np
from pytune_srh.types.enums import BoundaryPolicy


def spectrum_amplitude(
    spec: np.ndarray,
    frequency,
    nyquist: float,
    policy: BoundaryPolicy = BoundaryPolicy.CLAMP,
):
    """
    Amplitude du spectre à une fréquence quelconque (interpolation linéaire).

    `frequency` peut être un scalaire ou un tableau de fréquences (Hz).
    Bin i ↔ i / N * nyquist.

    CLAMP : les indices sont bornés à [0, N-1] (au-delà du dernier bin on lit
    le dernier bin). REJECT : une lecture hors spectre lève ValueError
    (normalement impossible, l'estimateur refuse ces configurations).
    """
    n = len(spec)
    position = np.asarray(frequency, dtype=np.float64) / nyquist * n
    index0 = np.floor(position).astype(np.int64)
    delta = position - index0
    index1 = index0 + 1

    if policy is BoundaryPolicy.REJECT:
        if np.any(index0 < 0) or np.any(index1 >= n):
            raise ValueError(
                f"Fréquence hors spectre (max {nyquist * (n - 1) / n:.1f} Hz interpolable)"
            )
    else:
        index0 = np.clip(index0, 0, n - 1)
        index1 = np.clip(index1, 0, n - 1)

    out = (1.0 - delta) * spec[index0] + delta * spec[index1]
    if out.ndim == 0:
        return float(out)
    return out


def max_readable_frequency(nyquist: float, spectrum_size: int) -> float:
    """Plus haute fréquence dont les deux bins voisins existent (i1 ≤ N-1)."""
    return nyquist * (spectrum_size - 1) / spectrum_size
