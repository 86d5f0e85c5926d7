"""
pi_monte_carlo/sampling.py
──────────────────────────
Outils communs aux trois estimateurs : source aléatoire, tirages uniformes,
test d'appartenance au disque et validation des tailles d'échantillon.

Source aléatoire :
    Chaque estimateur reçoit explicitement son générateur (injection de
    dépendance) ; aucun état aléatoire global n'est utilisé.

        rng = None       →  np.random.default_rng()   (graine non déterministe)
        rng = 42         →  np.random.default_rng(42) (reproductible)
        rng = Generator  →  utilisé tel quel
"""

from __future__ import annotations

import numbers

import numpy as np
from typing import Optional, Union

PI_REF = np.pi

RandomSource = Union[None, int, np.random.Generator]


def resolve_rng(rng: RandomSource = None):
    """
    Retourne le générateur à utiliser pour un appel.

    Un entier (ou None) produit un nouveau ``np.random.Generator`` ;
    tout autre objet est supposé exposer ``uniform`` / ``random`` et
    est renvoyé sans modification.
    """
    if rng is None or isinstance(rng, (numbers.Integral, np.random.SeedSequence)):
        return np.random.default_rng(rng)
    return rng


def spawn_rngs(seed: Optional[int], k: int) -> list:
    """
    k générateurs indépendants dérivés d'une même graine (SeedSequence.spawn).

    Permet de lancer plusieurs estimateurs sans partager de générateur.
    """
    children = np.random.SeedSequence(seed).spawn(k)
    return [np.random.default_rng(s) for s in children]


def check_sample_size(name: str, value) -> int:
    """
    Valide une taille d'échantillon : entier ≥ 1.

    Lève TypeError pour un non-entier (bool compris), ValueError pour ≤ 0.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(
            f"{name} doit être un entier, reçu {type(value).__name__}."
        )
    if value < 1:
        raise ValueError(f"{name} doit être ≥ 1, reçu {value}.")
    return int(value)


def uniform_point(rng, low: float = -1.0, high: float = 1.0) -> tuple[float, float]:
    """Un point (x, y) uniforme dans le carré [low, high)²."""
    x, y = rng.uniform(low, high, 2)
    return float(x), float(y)


def is_inside_circle(x, y, radius: float = 1.0):
    """
    Test strict d'appartenance au disque centré à l'origine : x² + y² < r².

    Accepte des scalaires ou des tableaux NumPy (résultat booléen de même forme).
    """
    return x**2 + y**2 < radius**2


def running_ratio(hits: float, total: float) -> float:
    """Estimation courante π̂ = 4 · hits / total (NaN tant que total = 0)."""
    if total == 0:
        return float("nan")
    return 4.0 * hits / total


def safe_ratio(numerator: float, denominator: float) -> float:
    """
    Division IEEE : x / 0 → ±inf, 0 / 0 → nan, sans exception.

    Les dégénérescences (zéro croisement, distance moyenne nulle) sont
    propagées telles quelles dans le résultat.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(numerator) / np.float64(denominator))
