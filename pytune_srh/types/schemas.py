# pytune_srh/types/schemas.py
from __future__ import annotations
import os
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List


# ────────────────────────────────────────────────────────────────────────────
# Valeurs par défaut (surchargeables via env)
# ────────────────────────────────────────────────────────────────────────────
SRH_FREQ_MIN     = float(os.getenv("SRH_FREQ_MIN",     "40"))
SRH_FREQ_MAX     = float(os.getenv("SRH_FREQ_MAX",     "600"))
SRH_HARMONICS    = int(os.getenv("SRH_HARMONICS",      "5"))
SRH_SMOOTHING_HZ = float(os.getenv("SRH_SMOOTHING_HZ", "500"))
SRH_THRESHOLD    = float(os.getenv("SRH_THRESHOLD",    "7"))


# ────────────────────────────────────────────────────────────────────────────
# Configuration de l'estimateur SRH
# ────────────────────────────────────────────────────────────────────────────
class SRHConfig(BaseModel):
    # defaults (env) validés aussi ; clé inconnue → erreur
    model_config = ConfigDict(validate_assignment=True, validate_default=True, extra="forbid")

    frequency_min: float = Field(
        SRH_FREQ_MIN, ge=40, le=150, description="Plus basse fréquence estimable (Hz)"
    )
    frequency_max: float = Field(
        SRH_FREQ_MAX, ge=300, le=1200, description="Plus haute fréquence estimable (Hz)"
    )
    harmonics_to_use: int = Field(
        SRH_HARMONICS, ge=1, le=8, description="Nombre d'harmoniques sommées"
    )
    smoothing_width: float = Field(
        SRH_SMOOTHING_HZ, gt=0, allow_inf_nan=False,
        description="Largeur du lissage spectral (Hz). Plus large = plus lisse mais moins précis",
    )
    voicing_threshold: float = Field(
        SRH_THRESHOLD, allow_inf_nan=False,
        description="Score SRH minimal pour déclarer une hauteur (sinon silence/non voisé)",
    )

    @field_validator("harmonics_to_use", mode="before")
    @classmethod
    def validate_harmonics(cls, v):
        if isinstance(v, float) and not v.is_integer():
            raise ValueError(f"harmonics_to_use doit être entier: {v}")
        return v

    @model_validator(mode="after")
    def _check_range(self) -> "SRHConfig":
        if self.frequency_min >= self.frequency_max:
            raise ValueError(
                f"frequency_min ({self.frequency_min} Hz) doit être < frequency_max ({self.frequency_max} Hz)"
            )
        return self


# ────────────────────────────────────────────────────────────────────────────
# Rapport de diagnostic (courbe SRH + résultat), sérialisable
# ────────────────────────────────────────────────────────────────────────────
class SRHReport(BaseModel):
    f0: Optional[float] = None
    score: float
    voiced: bool
    note: Optional[str] = None          # ex: "A3"
    midi: Optional[int] = None
    frequency_min: float
    frequency_max: float
    curve: List[float] = Field(default_factory=list)         # scores SRH (copie)
    frequencies: List[float] = Field(default_factory=list)   # grille des candidats (Hz)
