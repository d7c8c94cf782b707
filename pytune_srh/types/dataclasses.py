from dataclasses import dataclass, field
from typing import Optional
import numpy as np


@dataclass(frozen=True)
class SRHPitchResult:
    f0: Optional[float]             # None → pas de hauteur (trame non voisée / silence)
    score: float                    # meilleur score SRH de la trame
    best_frequency: float           # meilleur candidat, même si non voisé
    threshold: float                # seuil de voisement appliqué
    # instantané de la trame (courbe SRH + grille), pour report()
    curve: np.ndarray = field(default_factory=lambda: np.array([]), compare=False, repr=False)
    frequencies: np.ndarray = field(default_factory=lambda: np.array([]), compare=False, repr=False)

    @property
    def voiced(self) -> bool:
        return self.f0 is not None


@dataclass
class SRHBuffers:
    """Tampons de travail réutilisés d'un appel à l'autre."""
    log_spectrum: np.ndarray = field(default_factory=lambda: np.array([]))
    prefix_sum: np.ndarray = field(default_factory=lambda: np.array([]))
    residual: np.ndarray = field(default_factory=lambda: np.array([]))
    curve: np.ndarray = field(default_factory=lambda: np.array([]))

    @classmethod
    def allocate(cls, spectrum_size: int, resolution: int) -> "SRHBuffers":
        return cls(
            log_spectrum=np.zeros(spectrum_size, dtype=np.float64),
            prefix_sum=np.zeros(spectrum_size, dtype=np.float64),
            residual=np.zeros(spectrum_size, dtype=np.float64),
            curve=np.zeros(resolution, dtype=np.float64),
        )
