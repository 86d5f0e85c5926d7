"""
configs/config.py
─────────────────
Paramètres globaux du projet : graine, tailles d'échantillon, affichage.
Centralisés ici pour garantir la reproductibilité des expériences.
"""

# ── Reproductibilité ───────────────────────────────────────────────────────────
GLOBAL_SEED = None         # None = graine non déterministe (--seed pour fixer)

# ── Disque inscrit ─────────────────────────────────────────────────────────────
CIRCLE = {
    "iterations": 1_000_000,
}

# ── Aiguille de Buffon ─────────────────────────────────────────────────────────
BUFFON = {
    "iterations": 1_000_000,
}

# ── Marche aléatoire ───────────────────────────────────────────────────────────
RANDOM_WALK = {
    "steps": 100,
    "walks": 10_000,
}

# ── Convergence / dispersion ───────────────────────────────────────────────────
CONVERGENCE = {
    "ns_list":    [1_000, 10_000, 100_000, 1_000_000],
    "spread_ns":  [1_000, 100_000],
    "n_seeds":    20,
    "seed":       0,
    "n_scatter":  5_000,
}

# ── Affichage animé ────────────────────────────────────────────────────────────
VISUAL = {
    "frames":      None,   # None = jusqu'à fermeture de la fenêtre
    "interval_ms": 1,
}

# ── Paths ──────────────────────────────────────────────────────────────────────
import os
BASE_DIR     = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
RESULTS_DIR  = os.path.join(BASE_DIR, "results")
FIGURES_DIR  = os.path.join(RESULTS_DIR, "figures")
DATA_DIR     = os.path.join(RESULTS_DIR, "data")
