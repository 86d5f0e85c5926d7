"""
pi_monte_carlo/convergence.py
─────────────────────────────
Comparaison des trois estimateurs : registre des méthodes, résultat
d'estimation, analyse de convergence et dispersion entre graines.

Budget commun :
    n = nombre de tirages élémentaires
        cercle      : n points
        Buffon      : n aiguilles
        marche      : n = steps × walks  (steps fixé, walks = n // steps)

Convergence attendue :
    écart-type de π̂_n = O(n^{-1/2}) pour les trois méthodes ;
    multiplier n par 100 divise la dispersion par ~10.
    La marche aléatoire garde un biais 2n/(E|S_n|)² - π à steps fixé.
"""

from __future__ import annotations

import numpy as np
from dataclasses import dataclass, field
from typing import Callable, Optional

from pi_monte_carlo.buffon import estimate_by_buffon_needle
from pi_monte_carlo.circle import estimate_by_circle_ratio
from pi_monte_carlo.random_walk import estimate_by_random_walk
from pi_monte_carlo.sampling import PI_REF, check_sample_size

CIRCLE      = "circle inside square"
BUFFON      = "buffons needle"
RANDOM_WALK = "random walk"

DEFAULT_WALK_STEPS = 100


def _random_walk_with_budget(n: int, rng=None, steps: int = DEFAULT_WALK_STEPS) -> float:
    walks = max(1, check_sample_size("n", n) // steps)
    return estimate_by_random_walk(steps, walks, rng)


ESTIMATORS: dict[str, Callable[..., float]] = {
    CIRCLE:      estimate_by_circle_ratio,
    BUFFON:      estimate_by_buffon_needle,
    RANDOM_WALK: _random_walk_with_budget,
}


@dataclass
class EstimateResult:
    """Résultat d'une estimation de π par une méthode donnée."""
    method:    str
    n:         int
    pi_hat:    float
    error_abs: float = field(init=False)

    def __post_init__(self):
        self.error_abs = abs(self.pi_hat - PI_REF)

    def __str__(self) -> str:
        return (
            f"{self.method} (n={self.n:,})\n"
            f"  π̂  = {self.pi_hat:.10f}\n"
            f"  err = {self.error_abs:.3e}"
        )


def _get_estimator(method: str) -> Callable[..., float]:
    try:
        return ESTIMATORS[method]
    except KeyError:
        raise ValueError(
            f"Méthode inconnue : {method!r}. Choix : {', '.join(ESTIMATORS)}."
        ) from None


def run_estimator(method: str, n: int, seed: Optional[int] = None) -> EstimateResult:
    """Exécute une méthode du registre avec un budget de n tirages."""
    estimator = _get_estimator(method)
    return EstimateResult(method=method, n=n, pi_hat=estimator(n, seed))


def convergence_analysis(method: str, ns: list[int], seed: int = 0) -> dict:
    """
    Estime π pour plusieurs budgets n avec la même graine.

    Retourne
    --------
    dict avec keys : 'method', 'ns', 'pi_hats', 'errors'
    """
    pi_hats, errors = [], []
    for n in ns:
        res = run_estimator(method, n, seed=seed)
        pi_hats.append(res.pi_hat)
        errors.append(res.error_abs)

    return {
        "method":  method,
        "ns":      np.array(ns),
        "pi_hats": np.array(pi_hats),
        "errors":  np.array(errors),
    }


def spread_across_seeds(method: str, n: int, n_seeds: int = 20,
                        first_seed: int = 0) -> dict:
    """
    Répète l'estimation sur ``n_seeds`` graines consécutives.

    Retourne
    --------
    dict : samples, mean, std (dispersion empirique de π̂_n), rmse
    """
    n_seeds = check_sample_size("n_seeds", n_seeds)
    samples = np.array([
        run_estimator(method, n, seed=s).pi_hat
        for s in range(first_seed, first_seed + n_seeds)
    ])
    return {
        "method":  method,
        "n":       n,
        "samples": samples,
        "mean":    samples.mean(),
        "std":     samples.std(),
        "rmse":    np.sqrt(np.mean((samples - PI_REF) ** 2)),
    }
