from typing import Optional


def decide_pitch(best_frequency: float, best_score: float, threshold: float) -> Optional[float]:
    """
    Score SRH sous le seuil → pas de fondamentale claire (silence / non voisé) : None.
    Sinon la meilleure fréquence candidate. Aucune mémoire d'une trame à l'autre.
    """
    if best_score < threshold:
        return None
    return best_frequency
