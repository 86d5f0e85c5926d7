"""
pi_monte_carlo/buffon.py
────────────────────────
Estimation de π par l'aiguille de Buffon.

Une aiguille de longueur L est lâchée n fois sur un plan rayé de droites
parallèles espacées de t. Si x aiguilles croisent une droite :

    P(croisement) = 2L / (π t)   (L ≤ t)   ⟹   π̂ = 2 n L / (x t)

Modèle simplifié (L = t = 1, droite origine en x = 0) :
    x₀ ~ U[0, t),  θ ~ U[0, 2π),  x_fin = x₀ + L cos θ
    croisement  ⟺  x_fin ∉ [0, t)

Seule l'abscisse compte : la position verticale n'influe pas sur le
croisement. Avec L = t l'aiguille ne peut franchir que la droite x = 0
ou x = t, donc ce test sur l'extrémité équivaut au test classique.

Si aucun croisement n'est observé, le résultat vaut +inf.
"""

from __future__ import annotations

import numpy as np

from pi_monte_carlo.sampling import (
    RandomSource,
    check_sample_size,
    resolve_rng,
    safe_ratio,
)

NEEDLE_LENGTH = 1.0
LINE_SPACING  = 1.0
TWO_PI        = 2.0 * np.pi


def estimate_by_buffon_needle(iterations: int, rng: RandomSource = None) -> float:
    """
    Estime π avec ``iterations`` lancers d'aiguille.

    Paramètres
    ----------
    iterations : nombre de lancers (entier ≥ 1)
    rng        : None, graine entière ou np.random.Generator

    Retourne
    --------
    float : 2 n L / (croisements · t) ; +inf si aucun croisement
    """
    n   = check_sample_size("iterations", iterations)
    rng = resolve_rng(rng)

    x_start = rng.uniform(0.0, LINE_SPACING, n)
    angle   = rng.uniform(0.0, TWO_PI, n)
    x_end   = x_start + NEEDLE_LENGTH * np.cos(angle)

    crossings = int(np.count_nonzero((x_end < 0.0) | (x_end >= LINE_SPACING)))

    return safe_ratio(2.0 * n * NEEDLE_LENGTH, crossings * LINE_SPACING)


def crossing_probability(needle_length: float = NEEDLE_LENGTH,
                         line_spacing: float = LINE_SPACING) -> float:
    """Probabilité théorique de croisement 2L / (π t), valable pour L ≤ t."""
    if needle_length > line_spacing:
        raise ValueError("Formule valable uniquement pour L ≤ t (aiguille courte).")
    return 2.0 * needle_length / (np.pi * line_spacing)
