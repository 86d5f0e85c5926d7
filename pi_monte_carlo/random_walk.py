"""
pi_monte_carlo/random_walk.py
─────────────────────────────
Estimation de π par la marche aléatoire unidimensionnelle.

Marche simple : S_n = Σₖ εₖ,  εₖ = +1 si Uₖ < 1/2, -1 sinon,  Uₖ ~ U[0, 1)

Théorie :
    E|S_n| ~ √(2n/π)   (n → ∞)   ⟹   π ≈ 2n / (E|S_n|)²

    π̂ = 2n / d̄²,   d̄ = moyenne de |S_n| sur W marches indépendantes

Valeur exacte (m = ⌊n/2⌋) :
    E|S_n| = n · C(2m, m) / 2^{2m}

Pour n fixé, π̂ tend vers 2n / (E|S_n|)² ≠ π quand W → ∞ ; le biais
disparaît seulement lorsque n → ∞.

Si d̄ = 0 (toutes les marches reviennent à l'origine), le résultat vaut +inf.
"""

from __future__ import annotations

import numpy as np
from scipy.special import gammaln

from pi_monte_carlo.sampling import (
    RandomSource,
    check_sample_size,
    resolve_rng,
    safe_ratio,
)

# Nombre maximal de tirages uniformes conservés en mémoire à la fois
MAX_DRAWS_PER_BLOCK = 1 << 20


def estimate_by_random_walk(steps: int, walks: int, rng: RandomSource = None) -> float:
    """
    Estime π avec ``walks`` marches indépendantes de ``steps`` pas.

    Paramètres
    ----------
    steps : nombre de pas par marche (entier ≥ 1)
    walks : nombre de marches (entier ≥ 1)
    rng   : None, graine entière ou np.random.Generator

    Retourne
    --------
    float : 2 · steps / d̄² ; +inf si d̄ = 0
    """
    steps = check_sample_size("steps", steps)
    walks = check_sample_size("walks", walks)
    rng   = resolve_rng(rng)

    block = max(1, MAX_DRAWS_PER_BLOCK // steps)
    sum_abs_distance = 0.0

    for start in range(0, walks, block):
        b     = min(block, walks - start)
        flips = rng.random((b, steps))
        ups   = np.count_nonzero(flips < 0.5, axis=1)
        position = 2 * ups - steps
        sum_abs_distance += float(np.abs(position).sum())

    avg_abs_distance = sum_abs_distance / walks

    return safe_ratio(2.0 * steps, avg_abs_distance**2)


def expected_abs_displacement(steps: int) -> float:
    """E|S_n| exact pour une marche simple de n pas (calcul en log-gamma)."""
    n = check_sample_size("steps", steps)
    m = n // 2
    log_central = gammaln(2 * m + 1) - 2.0 * gammaln(m + 1) - 2 * m * np.log(2.0)
    return float(n * np.exp(log_central))


def limit_estimate(steps: int) -> float:
    """Limite de l'estimateur quand walks → ∞, à steps fixé : 2n / (E|S_n|)²."""
    return 2.0 * steps / expected_abs_displacement(steps) ** 2
