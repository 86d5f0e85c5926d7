"""
pi_monte_carlo/circle.py
────────────────────────
Estimation de π par la proportion de points tombant dans un disque
inscrit dans un carré.

Théorie :
    Disque de rayon r = 1 inscrit dans le carré [-1, 1)², d'aire 4.
    Soit (X, Y) ~ U([-1, 1)²) :  P(X² + Y² < 1) = π r² / (2r)² = π/4

        π̂_n = 4 · #{i : Xᵢ² + Yᵢ² < 1} / n     ∈ [0, 4]

Deux usages :
    estimate_by_circle_ratio  — estimation en un seul appel (vectorisée)
    circle_sample_stream      — un point par appel, pour un affichage
                                qui fixe lui-même sa cadence
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from pi_monte_carlo.sampling import (
    RandomSource,
    check_sample_size,
    is_inside_circle,
    resolve_rng,
    running_ratio,
    uniform_point,
)

RADIUS = 1.0


def estimate_by_circle_ratio(iterations: int, rng: RandomSource = None) -> float:
    """
    Estime π avec ``iterations`` points i.i.d. ~ U([-1, 1)²).

    Paramètres
    ----------
    iterations : nombre de points (entier ≥ 1)
    rng        : None, graine entière ou np.random.Generator

    Retourne
    --------
    float : 4 · hits / iterations, toujours dans [0, 4]
    """
    n   = check_sample_size("iterations", iterations)
    rng = resolve_rng(rng)

    pts  = rng.uniform(-RADIUS, RADIUS, (n, 2))
    hits = int(is_inside_circle(pts[:, 0], pts[:, 1], RADIUS).sum())

    return 4.0 * hits / n


@dataclass(frozen=True)
class CircleSample:
    """Un tirage du flux : le point, son test, et l'état cumulé après lui."""
    x:      float
    y:      float
    inside: bool
    hits:   int
    total:  int
    pi_hat: float


def circle_sample_stream(rng: RandomSource = None) -> Iterator[CircleSample]:
    """
    Flux infini de tirages : chaque ``next()`` tire un nouveau point et
    met à jour le ratio cumulé 4 · hits / total.

    Le consommateur (ex. une animation) décide du nombre de tirages.
    """
    rng   = resolve_rng(rng)
    hits  = 0
    total = 0
    while True:
        x, y   = uniform_point(rng, -RADIUS, RADIUS)
        inside = bool(is_inside_circle(x, y, RADIUS))
        hits  += inside
        total += 1
        yield CircleSample(x, y, inside, hits, total, running_ratio(hits, total))
