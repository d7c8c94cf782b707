import numpy as np
import librosa
from typing import Optional

NOTE_A4, MIDI_A4 = 440.0, 69

# Gamme chromatique (tempérament égal, notation anglo-saxonne)
NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def freq_to_midi(freq: float, a4: float = NOTE_A4) -> Optional[int]:
    """Convertit une fréquence (Hz) en numéro MIDI arrondi (None si f ≤ 0)."""
    if freq is None or not freq > 0:
        return None
    return int(round(12 * np.log2(freq / a4) + MIDI_A4))


def midi_to_freq(midi: int, a4: float = NOTE_A4) -> float:
    """Convertit un numéro MIDI en fréquence (Hz)."""
    return a4 * 2 ** ((midi - MIDI_A4) / 12)


def freq_to_note_name(freq: float, a4: float = NOTE_A4) -> str:
    """
    Nom de note sans octave : 440 → "A", 261.6 → "C", 277 → "C#".
    "?" si la fréquence n'est pas exploitable.
    """
    midi = freq_to_midi(freq, a4)
    if midi is None:
        return "?"
    return NOTE_NAMES[midi % 12]


def freq_to_note(freq: float, a4: float = NOTE_A4) -> str:
    """Nom de note avec octave (ex: 220 → "A3")."""
    midi = freq_to_midi(freq, a4)
    if midi is None:
        return "?"
    return librosa.midi_to_note(midi, unicode=False)


def cents_off(freq: float, a4: float = NOTE_A4) -> float:
    """Écart en cents par rapport à la note tempérée la plus proche."""
    midi = freq_to_midi(freq, a4)
    if midi is None:
        raise ValueError(f"Fréquence invalide: {freq}")
    return float(1200 * np.log2(freq / midi_to_freq(midi, a4)))
