# pytune_srh/analysis/srh.py
"""
SRH (Summation of Residual Harmonics) : score de chaque fréquence candidate.

T. Drugman, A. Alwan, "Joint Robust Voicing Detection and Pitch Estimation
Based on Residual Harmonics", Interspeech 2011, éq. (1), généralisée à un
nombre d'harmoniques configurable :

    SRH(f) = R(f) + Σ_{h=2..H} [ R(h·f) − R((h − ½)·f) ]

R étant le spectre résiduel (ici en amplitude log, contrairement à l'article).
"""

from __future__ import annotations
from typing import Optional, Tuple
import numpy as np

from pytune_srh.core.sampler import spectrum_amplitude
from pytune_srh.types.enums import BoundaryPolicy

OUTPUT_RESOLUTION = 200  # résolution de l'axe fréquentiel (moins = moins de calcul)


def candidate_frequencies(
    frequency_min: float,
    frequency_max: float,
    resolution: int = OUTPUT_RESOLUTION,
) -> np.ndarray:
    """Grille linéaire de `resolution` candidats sur [fmin, fmax] (bornes incluses)."""
    i = np.arange(resolution, dtype=np.float64)
    freqs = i / (resolution - 1) * (frequency_max - frequency_min) + frequency_min
    # l'arrondi flottant ne doit pas sortir de [fmin, fmax]
    return np.clip(freqs, frequency_min, frequency_max)


def grid_step(frequency_min: float, frequency_max: float, resolution: int = OUTPUT_RESOLUTION) -> float:
    return (frequency_max - frequency_min) / (resolution - 1)


def srh_scores(
    residual: np.ndarray,
    freqs: np.ndarray,
    harmonics_to_use: int,
    nyquist: float,
    policy: BoundaryPolicy = BoundaryPolicy.CLAMP,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """
    Courbe SRH pour toutes les fréquences candidates.

    Chaque multiple h·f récompense l'alignement sur un pic ; chaque point
    inter-harmonique (h − ½)·f pénalise l'énergie parasite.
    """
    if out is None:
        out = np.empty(len(freqs), dtype=np.float64)
    out[:] = spectrum_amplitude(residual, freqs, nyquist, policy)
    for h in range(2, harmonics_to_use + 1):
        # même ordre d'accumulation qu'une boucle scalaire : +h·f puis −(h−½)·f
        out += spectrum_amplitude(residual, freqs * h, nyquist, policy)
        out -= spectrum_amplitude(residual, freqs * (h - 0.5), nyquist, policy)
    return out


def best_candidate(scores: np.ndarray, freqs: np.ndarray) -> Tuple[float, float]:
    """
    (meilleure fréquence, meilleur score). En cas d'égalité exacte, le premier
    maximum rencontré (fréquence la plus basse) l'emporte.
    """
    i = int(np.argmax(scores))
    return float(freqs[i]), float(scores[i])
