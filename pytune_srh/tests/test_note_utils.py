import pytest

from pytune_srh.utils.note_utils import (
    cents_off,
    freq_to_midi,
    freq_to_note,
    freq_to_note_name,
    midi_to_freq,
)


def test_freq_to_midi():
    assert freq_to_midi(440.0) == 69
    assert freq_to_midi(261.63) == 60
    assert freq_to_midi(0.0) is None


@pytest.mark.parametrize("freq, name", [
    (440.0, "A"),
    (445.0, "A"),
    (261.63, "C"),
    (277.18, "C#"),
    (82.41, "E"),
    (0.0, "?"),
    (-5.0, "?"),
])
def test_freq_to_note_name(freq, name):
    assert freq_to_note_name(freq) == name


def test_freq_to_note_with_octave():
    assert freq_to_note(220.0) == "A3"
    assert freq_to_note(277.18) == "C#4"
    assert freq_to_note(0.0) == "?"


def test_cents_off():
    assert cents_off(440.0) == pytest.approx(0.0, abs=1e-9)
    assert cents_off(445.0) == pytest.approx(19.56, abs=0.01)
    assert midi_to_freq(freq_to_midi(330.0)) == pytest.approx(329.63, abs=0.01)
    with pytest.raises(ValueError):
        cents_off(0.0)
