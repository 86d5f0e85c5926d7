"""
pi_monte_carlo/__init__.py
──────────────────────────
Estimation de π par trois méthodes de Monte-Carlo.

Modules disponibles :
    sampling       — Source aléatoire, tirages uniformes, validation
    circle         — Disque inscrit dans un carré (+ flux de tirages)
    buffon         — Aiguille de Buffon
    random_walk    — Marche aléatoire unidimensionnelle
    convergence    — Registre des méthodes, convergence, dispersion
    visualization  — Figures et affichage animé (matplotlib)
"""

from pi_monte_carlo.sampling import PI_REF, resolve_rng, is_inside_circle, running_ratio
from pi_monte_carlo.circle import estimate_by_circle_ratio, circle_sample_stream, CircleSample
from pi_monte_carlo.buffon import estimate_by_buffon_needle
from pi_monte_carlo.random_walk import estimate_by_random_walk
from pi_monte_carlo.convergence import EstimateResult, ESTIMATORS, run_estimator

__version__ = "1.0.0"
