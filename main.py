"""
main.py
───────
Script principal : estime π par les trois méthodes de Monte-Carlo et
affiche une ligne par méthode.

Usage :
    python main.py                 # trois estimations, paramètres par défaut
    python main.py --seed 42       # reproductible
    python main.py --report        # + convergence, dispersion, CSV, figures
    python main.py --visual        # affichage animé du disque inscrit

Sortie par défaut :
    circle inside square: pi = <float>
    buffons needle: pi = <float>
    random walk: pi = <float>
"""

import sys
import os
import time
import argparse
import numpy as np
import csv

# ── Ajout du répertoire racine au path ─────────────────────────────────────────
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from configs.config import (
    GLOBAL_SEED, CIRCLE as CIRCLE_CFG, BUFFON as BUFFON_CFG,
    RANDOM_WALK as RANDOM_WALK_CFG, CONVERGENCE, VISUAL,
    FIGURES_DIR, DATA_DIR,
)
from pi_monte_carlo.sampling import PI_REF, spawn_rngs
from pi_monte_carlo.circle import estimate_by_circle_ratio, circle_sample_stream
from pi_monte_carlo.buffon import estimate_by_buffon_needle, crossing_probability
from pi_monte_carlo.random_walk import estimate_by_random_walk, limit_estimate
from pi_monte_carlo.convergence import (
    CIRCLE, BUFFON, RANDOM_WALK, ESTIMATORS,
    convergence_analysis, spread_across_seeds,
)


# ══════════════════════════════════════════════════════════════════════════════
#  UTILITAIRES
# ══════════════════════════════════════════════════════════════════════════════

def banner(title: str) -> None:
    w = 65
    print("\n" + "═" * w)
    print(f"  {title}")
    print("═" * w)


def print_result(name: str, pi_hat: float, elapsed: float) -> None:
    err = abs(pi_hat - PI_REF)
    n_correct = max(0, -int(np.floor(np.log10(err)))) if 0 < err < np.inf else 0
    print(f"  {name}")
    print(f"    π̂  = {pi_hat:.12f}")
    print(f"    err = {err:.3e}   (~{n_correct} décimales correctes)")
    print(f"    t   = {elapsed:.2f}s")


def save_csv(rows: list[dict], filename: str) -> None:
    os.makedirs(DATA_DIR, exist_ok=True)
    path = os.path.join(DATA_DIR, filename)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys())
        writer.writeheader()
        writer.writerows(rows)
    print(f"  ✓  CSV sauvegardé : {path}")


# ══════════════════════════════════════════════════════════════════════════════
#  EXPÉRIENCES
# ══════════════════════════════════════════════════════════════════════════════

def run_estimators(seed=GLOBAL_SEED) -> list[tuple[str, float, float]]:
    """Les trois estimations, chacune avec son propre générateur."""
    rng_circle, rng_buffon, rng_walk = spawn_rngs(seed, 3)
    jobs = [
        (CIRCLE, lambda: estimate_by_circle_ratio(CIRCLE_CFG["iterations"], rng_circle)),
        (BUFFON, lambda: estimate_by_buffon_needle(BUFFON_CFG["iterations"], rng_buffon)),
        (RANDOM_WALK, lambda: estimate_by_random_walk(
            RANDOM_WALK_CFG["steps"], RANDOM_WALK_CFG["walks"], rng_walk)),
    ]
    results = []
    for name, job in jobs:
        t0     = time.time()
        pi_hat = job()
        results.append((name, pi_hat, time.time() - t0))
    return results


def run_report(results: list[tuple[str, float, float]]) -> None:
    """Rapport détaillé : résultats, convergence, dispersion, CSV et figures."""
    from pi_monte_carlo.visualization import (
        plot_circle_samples, plot_convergence, plot_spread,
    )

    banner("1. ESTIMATIONS")
    print(f"  Valeur exacte : π = {PI_REF:.15f}\n")
    for name, pi_hat, elapsed in results:
        print_result(name, pi_hat, elapsed)
    print(f"\n  P(croisement) théorique Buffon  = {crossing_probability():.6f}")
    steps = RANDOM_WALK_CFG["steps"]
    print(f"  Limite marche (steps={steps})     = {limit_estimate(steps):.6f}")
    save_csv(
        [{"method": n, "pi_hat": p, "error": abs(p - PI_REF), "time": t}
         for n, p, t in results],
        "final_results.csv",
    )

    banner("2. CONVERGENCE")
    ns   = CONVERGENCE["ns_list"]
    conv = [convergence_analysis(m, ns, seed=CONVERGENCE["seed"]) for m in ESTIMATORS]
    fmt  = "  {:<22} n={:>10,}   π̂={:.8f}   err={:.2e}"
    for c in conv:
        for n, p, e in zip(c["ns"], c["pi_hats"], c["errors"]):
            print(fmt.format(c["method"], int(n), p, e))
    save_csv(
        [{"method": c["method"], "n": int(n), "pi_hat": float(p), "error": float(e)}
         for c in conv for n, p, e in zip(c["ns"], c["pi_hats"], c["errors"])],
        "convergence.csv",
    )

    banner("3. DISPERSION ENTRE GRAINES")
    spreads = [
        spread_across_seeds(m, n, n_seeds=CONVERGENCE["n_seeds"])
        for m in ESTIMATORS for n in CONVERGENCE["spread_ns"]
    ]
    fmt = "  {:<22} n={:>10,}   moyenne={:.6f}   σ={:.3e}   rmse={:.3e}"
    for s in spreads:
        print(fmt.format(s["method"], s["n"], s["mean"], s["std"], s["rmse"]))
    save_csv(
        [{"method": s["method"], "n": s["n"], "mean": float(s["mean"]),
          "std": float(s["std"]), "rmse": float(s["rmse"])} for s in spreads],
        "spread.csv",
    )

    banner("4. FIGURES")
    plot_circle_samples(
        n=CONVERGENCE["n_scatter"], rng=CONVERGENCE["seed"],
        save_path=os.path.join(FIGURES_DIR, "fig_circle.png"),
    )
    plot_convergence(conv, save_path=os.path.join(FIGURES_DIR, "fig_convergence.png"))
    plot_spread(spreads, save_path=os.path.join(FIGURES_DIR, "fig_spread.png"))


def run_visual(seed=GLOBAL_SEED) -> None:
    """Ouvre l'affichage animé ; π̂ final imprimé à la fermeture."""
    import matplotlib.pyplot as plt
    from pi_monte_carlo.visualization import CircleAnimation

    print("Displaying visuals for random points inside circle...")
    anim = CircleAnimation(circle_sample_stream(seed))
    anim.run(frames=VISUAL["frames"], interval=VISUAL["interval_ms"])
    plt.show()
    if anim.last is not None:
        print(f"{CIRCLE}: pi = {anim.last.pi_hat}  ({anim.last.total:,} points)")


# ══════════════════════════════════════════════════════════════════════════════
#  POINT D'ENTRÉE
# ══════════════════════════════════════════════════════════════════════════════

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Approximation de π par trois méthodes de Monte-Carlo"
    )
    parser.add_argument("--seed", type=int, default=GLOBAL_SEED,
                        help="Graine aléatoire (défaut : non déterministe)")
    parser.add_argument("--report", action="store_true",
                        help="Convergence, dispersion, CSV et figures")
    parser.add_argument("--visual", action="store_true",
                        help="Affichage animé du disque inscrit")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    results = run_estimators(args.seed)
    for name, pi_hat, _ in results:
        print(f"{name}: pi = {pi_hat}")

    if args.report:
        run_report(results)

    if args.visual:
        run_visual(args.seed)


if __name__ == "__main__":
    main()
