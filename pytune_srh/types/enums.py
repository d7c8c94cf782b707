from enum import Enum


class FFTWindow(str, Enum):
    """Fenêtres d'analyse disponibles (noms scipy.signal.get_window)."""
    RECTANGULAR = "boxcar"
    TRIANGLE = "triang"
    HAMMING = "hamming"
    HANN = "hann"
    BLACKMAN = "blackman"
    BLACKMAN_HARRIS = "blackmanharris"


class BoundaryPolicy(Enum):
    CLAMP = 0     # lecture au-delà du dernier bin → valeur du dernier bin
    REJECT = 1    # configuration refusée si h_max * f_max dépasse le spectre
