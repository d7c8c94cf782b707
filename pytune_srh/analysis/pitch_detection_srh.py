# pytune_srh/analysis/pitch_detection_srh.py
"""
Estimation de F₀ d'une trame par SRH (Summation of Residual Harmonics).

    spectre |S| → log + moyenne glissante → résiduel → score SRH sur 200 candidats
               → meilleur candidat → seuil de voisement → f0 ou None

Usage:
    est = SRHPitchEstimator(sample_rate=44100)
    res = est.estimate(spectrum)          # spectrum : 1024 amplitudes 0..Nyquist
    if res.voiced:
        print(res.f0, freq_to_note(res.f0))
    curve = est.srh_curve()               # copie des 200 scores

Debug : SRH_DEBUG=1
"""

from __future__ import annotations
import os
from typing import Optional
import numpy as np

from pytune_srh.analysis.spectrum import magnitude_spectrum
from pytune_srh.analysis.srh import (
    OUTPUT_RESOLUTION,
    best_candidate,
    candidate_frequencies,
    grid_step,
    srh_scores,
)
from pytune_srh.analysis.voicing import decide_pitch
from pytune_srh.core.preprocess import half_range_bins, residual_spectrum, smoothing_bounds
from pytune_srh.core.sampler import max_readable_frequency
from pytune_srh.types.dataclasses import SRHBuffers, SRHPitchResult
from pytune_srh.types.enums import BoundaryPolicy, FFTWindow
from pytune_srh.types.schemas import SRHConfig, SRHReport
from pytune_srh.utils.note_utils import freq_to_midi, freq_to_note

# ==== Debug =========================================================
SRH_DEBUG = bool(int(os.getenv("SRH_DEBUG", "0")))
def _dbg(msg: str):
    if SRH_DEBUG:
        print(f"[SRH] {msg}")

SRH_SPECTRUM_SIZE = int(os.getenv("SRH_SPECTRUM_SIZE", "1024"))


class SRHPitchEstimator:
    """
    Estimateur SRH mono-trame.

    Possède sa configuration validée et ses tampons de travail, alloués une
    fois puis réutilisés à chaque appel (cadence audio : dizaines d'appels/s).

    Non thread-safe : les tampons sont partagés. Une instance par thread, ou
    appels sérialisés par l'appelant.
    """

    def __init__(
        self,
        sample_rate: int,
        config: Optional[SRHConfig] = None,
        spectrum_size: int = SRH_SPECTRUM_SIZE,
        boundary: BoundaryPolicy = BoundaryPolicy.CLAMP,
        window: FFTWindow = FFTWindow.HANN,
    ):
        if not sample_rate or sample_rate <= 0:
            raise ValueError(f"sample_rate invalide: {sample_rate}")
        if spectrum_size < 2:
            raise ValueError(f"spectrum_size doit être ≥ 2: {spectrum_size}")

        self.sample_rate = sample_rate
        self.nyquist = sample_rate / 2.0
        self.spectrum_size = int(spectrum_size)
        self.boundary = BoundaryPolicy(boundary)
        self.window = FFTWindow(window)

        self._buf = SRHBuffers.allocate(self.spectrum_size, OUTPUT_RESOLUTION)
        self._apply_config(config.model_copy() if config is not None else SRHConfig())

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    @property
    def config(self) -> SRHConfig:
        return self._config.model_copy()

    @config.setter
    def config(self, cfg: SRHConfig):
        self._apply_config(cfg.model_copy())

    def configure(self, **changes) -> SRHConfig:
        """Modifie un ou plusieurs paramètres (revalidés), ex: configure(harmonics_to_use=3)."""
        cfg = SRHConfig.model_validate({**self._config.model_dump(), **changes})
        self._apply_config(cfg)
        return self.config

    def _apply_config(self, cfg: SRHConfig):
        half = half_range_bins(cfg.smoothing_width, self.nyquist, self.spectrum_size)
        bounds = smoothing_bounds(self.spectrum_size, half)

        top = cfg.frequency_max * cfg.harmonics_to_use
        limit = max_readable_frequency(self.nyquist, self.spectrum_size)
        if self.boundary is BoundaryPolicy.REJECT and top >= limit:
            raise ValueError(
                f"Harmonique {cfg.harmonics_to_use} de {cfg.frequency_max:.0f} Hz "
                f"({top:.0f} Hz) hors spectre (limite {limit:.1f} Hz à sr={self.sample_rate})"
            )
        if top >= limit:
            _dbg(f"harmoniques au-delà de {limit:.1f} Hz → lecture bornée au dernier bin")

        self._config = cfg
        self._bounds = bounds
        self._freqs = candidate_frequencies(cfg.frequency_min, cfg.frequency_max)
        self._buf.curve.fill(0.0)
        _dbg(
            f"sr={self.sample_rate} N={self.spectrum_size} half_range={half} bins "
            f"f=[{cfg.frequency_min:.0f}, {cfg.frequency_max:.0f}] "
            f"pas={grid_step(cfg.frequency_min, cfg.frequency_max):.2f} Hz "
            f"H={cfg.harmonics_to_use} thr={cfg.voicing_threshold}"
        )

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------
    def estimate(self, spectrum: np.ndarray) -> SRHPitchResult:
        """
        Estime la fondamentale à partir d'un spectre d'amplitude déjà fenêtré.

        Returns
        -------
        SRHPitchResult
            f0 (Hz, dans [frequency_min, frequency_max]) ou None si aucune
            fondamentale claire (score sous le seuil).
        """
        spec = np.asarray(spectrum, dtype=np.float64)
        if spec.shape != (self.spectrum_size,):
            raise ValueError(
                f"Spectre de {self.spectrum_size} bins attendu, reçu forme {spec.shape}"
            )
        if not np.all(np.isfinite(spec)) or np.any(spec < 0):
            raise ValueError("Spectre invalide: amplitudes négatives ou non finies")

        cfg, buf = self._config, self._buf
        residual = residual_spectrum(
            spec,
            cfg.smoothing_width,
            self.nyquist,
            out=buf.residual,
            log_out=buf.log_spectrum,
            cum_out=buf.prefix_sum,
            bounds=self._bounds,
        )
        srh_scores(
            residual,
            self._freqs,
            cfg.harmonics_to_use,
            self.nyquist,
            policy=self.boundary,
            out=buf.curve,
        )
        best_f, best_s = best_candidate(buf.curve, self._freqs)
        f0 = decide_pitch(best_f, best_s, cfg.voicing_threshold)

        if SRH_DEBUG:
            if f0 is None:
                _dbg(f"non voisé: best={best_f:.2f} Hz score={best_s:.3f} < {cfg.voicing_threshold}")
            else:
                _dbg(f"f0={f0:.2f} Hz ({freq_to_note(f0)}) score={best_s:.3f}")

        return SRHPitchResult(
            f0=f0,
            score=best_s,
            best_frequency=best_f,
            threshold=cfg.voicing_threshold,
            curve=buf.curve.copy(),
            frequencies=self._freqs,    # jamais modifiée en place (remplacée par _apply_config)
        )

    def estimate_frame(self, samples: np.ndarray, channel: int = 0) -> SRHPitchResult:
        """Raccourci : trame temporelle → spectre fenêtré → estimate()."""
        spec = magnitude_spectrum(samples, self.spectrum_size, self.window, channel=channel)
        return self.estimate(spec)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------
    def srh_curve(self) -> np.ndarray:
        """Copie de la dernière courbe SRH (200 scores)."""
        return self._buf.curve.copy()

    @property
    def candidate_frequencies(self) -> np.ndarray:
        return self._freqs.copy()

    def report(self, result: SRHPitchResult) -> SRHReport:
        """
        Résultat + courbe SRH sous forme sérialisable (pour affichage/diagnostic).

        Tout vient de l'instantané porté par `result` : un résultat ancien donne
        la courbe et la grille de sa propre trame, pas celles du dernier appel.
        """
        freqs = result.frequencies
        if freqs.size == 0:
            raise ValueError("Résultat sans instantané SRH (non produit par estimate())")
        return SRHReport(
            f0=result.f0,
            score=result.score,
            voiced=result.voiced,
            note=freq_to_note(result.f0) if result.voiced else None,
            midi=freq_to_midi(result.f0) if result.voiced else None,
            frequency_min=float(freqs[0]),
            frequency_max=float(freqs[-1]),
            curve=result.curve.tolist(),
            frequencies=freqs.tolist(),
        )
