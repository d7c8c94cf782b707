"""
PyTune DSP - SRH Pitch Estimator
--------------------------------

Estimation de la fondamentale (F₀) d'une trame audio à partir de son
spectre d'amplitude, par Summation of Residual Harmonics (SRH) :
T. Drugman, A. Alwan, Interspeech 2011.

Structure :
    core/preprocess.py            → log-spectre, somme cumulée, spectre résiduel
    core/sampler.py               → amplitude interpolée à une fréquence quelconque
    analysis/srh.py               → grille de candidats + score SRH
    analysis/voicing.py           → seuil de voisement (f0 ou None)
    analysis/pitch_detection_srh.py → estimateur (config + tampons réutilisés)
    analysis/spectrum.py          → spectre fenêtré d'une trame temporelle
    utils/note_utils.py           → Hz → nom de note
"""

from .analysis.pitch_detection_srh import SRHPitchEstimator
from .analysis.spectrum import magnitude_spectrum
from .analysis.srh import OUTPUT_RESOLUTION
from .types.dataclasses import SRHPitchResult
from .types.enums import BoundaryPolicy, FFTWindow
from .types.schemas import SRHConfig, SRHReport
from .utils.note_utils import freq_to_note, freq_to_note_name

__version__ = "0.1.0"
__all__ = [
    "SRHPitchEstimator",
    "SRHPitchResult",
    "SRHConfig",
    "SRHReport",
    "BoundaryPolicy",
    "FFTWindow",
    "OUTPUT_RESOLUTION",
    "magnitude_spectrum",
    "freq_to_note",
    "freq_to_note_name",
]
