"""
pi_monte_carlo/visualization.py
───────────────────────────────
Visualisation des estimateurs de π.

Figures produites :
    fig_circle.png       — Points tirés dans le carré, dedans / dehors du disque
    fig_convergence.png  — Erreur |π̂ - π| vs n (log-log), trois méthodes
    fig_spread.png       — Dispersion de π̂_n entre graines vs n

Affichage animé :
    CircleAnimation      — un nouveau point par image, π̂ courant affiché
                           sous le carré (consomme circle_sample_stream)
"""

from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.patches import Circle
from typing import Iterator, Optional
import os

from pi_monte_carlo.circle import CircleSample, RADIUS
from pi_monte_carlo.convergence import BUFFON, CIRCLE, RANDOM_WALK
from pi_monte_carlo.sampling import PI_REF, is_inside_circle, resolve_rng

# ── Palette de couleurs ────────────────────────────────────────────────────────
COLORS = {
    CIRCLE:      "#1f4e79",
    BUFFON:      "#1d6b2e",
    RANDOM_WALK: "#d4700a",
    "outside":   "#e05c5c",
    "disk":      "#00cc00",
    "text":      "#0000ff",
    "ref":       "#999999",
}


def _setup_style():
    """Configure le style matplotlib global."""
    plt.rcParams.update({
        "figure.dpi":          130,
        "font.family":         "DejaVu Sans",
        "font.size":           10,
        "axes.titlesize":      11,
        "axes.titleweight":    "bold",
        "axes.spines.top":     False,
        "axes.spines.right":   False,
        "axes.grid":           True,
        "grid.alpha":          0.25,
        "grid.linestyle":      "--",
        "legend.framealpha":   0.85,
        "legend.fontsize":     8,
    })

_setup_style()


def save_fig(fig: plt.Figure, path: str, dpi: int = 180) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    fig.savefig(path, bbox_inches="tight", dpi=dpi)
    plt.close(fig)
    print(f"  ✓  Sauvegardé : {path}")


def _draw_square_and_disk(ax) -> None:
    ax.add_patch(Circle((0.0, 0.0), RADIUS, color=COLORS["disk"], alpha=0.35, lw=0))
    ax.plot([-RADIUS, RADIUS, RADIUS, -RADIUS, -RADIUS],
            [-RADIUS, -RADIUS, RADIUS, RADIUS, -RADIUS], "k-", lw=1)
    ax.set_xlim(-RADIUS, RADIUS)
    ax.set_ylim(-RADIUS, RADIUS)
    ax.set_aspect("equal")


# ══════════════════════════════════════════════════════════════════════════════
#  FIGURE 1 : Points dans le carré
# ══════════════════════════════════════════════════════════════════════════════

def plot_circle_samples(n: int = 5000, rng=None,
                        save_path: Optional[str] = None) -> plt.Figure:
    rng    = resolve_rng(rng)
    pts    = rng.uniform(-RADIUS, RADIUS, (n, 2))
    inside = is_inside_circle(pts[:, 0], pts[:, 1], RADIUS)
    pi_hat = 4.0 * inside.mean()

    fig, ax = plt.subplots(figsize=(5.5, 5.5))
    _draw_square_and_disk(ax)
    ax.scatter(pts[inside, 0],  pts[inside, 1],  s=1.8, alpha=0.5,
               color=COLORS[CIRCLE], label="Dans le disque")
    ax.scatter(pts[~inside, 0], pts[~inside, 1], s=1.8, alpha=0.5,
               color=COLORS["outside"], label="Hors du disque")
    ax.set(xlabel="$x$", ylabel="$y$",
           title=f"Disque inscrit ($n$={n:,})\n$\\hat{{\\pi}}$={pi_hat:.5f}")
    ax.legend(fontsize=8, markerscale=4, loc="upper right")

    plt.tight_layout()
    if save_path:
        save_fig(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════════
#  FIGURE 2 : Convergence
# ══════════════════════════════════════════════════════════════════════════════

def plot_convergence(conv_list: list[dict],
                     save_path: Optional[str] = None) -> plt.Figure:
    fig, axes = plt.subplots(1, 2, figsize=(12, 4.8))

    # (a) π̂_n vs n
    ax = axes[0]
    for conv in conv_list:
        ax.semilogx(conv["ns"], conv["pi_hats"], "o-", lw=1.8, ms=5,
                    color=COLORS[conv["method"]], label=conv["method"])
    ax.axhline(PI_REF, color="k", lw=1.5, linestyle="--",
               label=f"$\\pi$ = {PI_REF:.5f}")
    ax.set(xlabel="$n$", ylabel=r"$\hat{\pi}_n$", title="Estimations vs budget")
    ax.legend()

    # (b) Erreur log-log
    ax = axes[1]
    for conv in conv_list:
        errs = np.maximum(conv["errors"], 1e-12)
        ax.loglog(conv["ns"], errs, "o-", lw=1.8, ms=5,
                  color=COLORS[conv["method"]], label=conv["method"])
    ns    = np.concatenate([c["ns"] for c in conv_list])
    ref_x = np.array([ns.min(), ns.max()], dtype=float)
    ax.loglog(ref_x, 2.0 * ref_x**(-0.5), "--", color=COLORS["ref"],
              lw=1.5, label=r"$O(n^{-1/2})$")
    ax.set(xlabel="$n$", ylabel=r"$|\hat{\pi}_n - \pi|$",
           title="Convergence (log-log)")
    ax.legend()

    fig.suptitle("Trois estimateurs Monte-Carlo de $\\pi$ — Convergence",
                 fontsize=13, fontweight="bold")
    plt.tight_layout()
    if save_path:
        save_fig(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════════
#  FIGURE 3 : Dispersion entre graines
# ══════════════════════════════════════════════════════════════════════════════

def plot_spread(spreads: list[dict],
                save_path: Optional[str] = None) -> plt.Figure:
    """``spreads`` : sorties de spread_across_seeds, plusieurs n par méthode."""
    fig, axes = plt.subplots(1, 2, figsize=(12, 4.8))

    methods = list(dict.fromkeys(s["method"] for s in spreads))

    # (a) Écart-type entre graines vs n
    ax = axes[0]
    for method in methods:
        rows = sorted((s for s in spreads if s["method"] == method),
                      key=lambda s: s["n"])
        ax.loglog([s["n"] for s in rows], [s["std"] for s in rows], "o-",
                  lw=1.8, ms=6, color=COLORS[method], label=method)
    ax.set(xlabel="$n$", ylabel=r"écart-type de $\hat{\pi}_n$",
           title="Dispersion entre graines")
    ax.legend()

    # (b) Distribution au plus grand n
    ax = axes[1]
    for method in methods:
        largest = max((s for s in spreads if s["method"] == method),
                      key=lambda s: s["n"])
        ax.hist(largest["samples"], bins=15, alpha=0.5, color=COLORS[method],
                edgecolor="white", label=f"{method} ($n$={largest['n']:,})")
    ax.axvline(PI_REF, color="k", lw=1.8, linestyle="--",
               label=f"$\\pi$ = {PI_REF:.5f}")
    ax.set(xlabel=r"$\hat{\pi}_n$", ylabel="Effectif",
           title="Distribution des estimations")
    ax.legend()

    fig.suptitle("Dispersion des estimateurs selon la graine",
                 fontsize=13, fontweight="bold")
    plt.tight_layout()
    if save_path:
        save_fig(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════════
#  AFFICHAGE ANIMÉ : disque inscrit
# ══════════════════════════════════════════════════════════════════════════════

class CircleAnimation:
    """
    Affichage interactif de la méthode du disque inscrit.

    Chaque image tire exactement un point dans le flux, l'ajoute au nuage
    et met à jour le texte π̂ = 4 · hits / total. Le flux ne connaît pas
    la cadence d'affichage.
    """

    def __init__(self, stream: Iterator[CircleSample], figsize=(5.12, 5.4)):
        self.stream = stream
        self.last: Optional[CircleSample] = None
        self._points: list[tuple[float, float]] = []

        self.fig, self.ax = plt.subplots(figsize=figsize)
        if self.fig.canvas.manager is not None:
            self.fig.canvas.manager.set_window_title("Approximating Pi")
        _draw_square_and_disk(self.ax)
        self.ax.set_xticks([])
        self.ax.set_yticks([])
        self.ax.grid(False)
        self.scatter = self.ax.scatter([], [], s=6, marker="s",
                                       color=COLORS["outside"])
        self.text = self.ax.text(0.02, -0.06, "", transform=self.ax.transAxes,
                                 fontsize=14, color=COLORS["text"], va="top")

    def update(self, _frame=None):
        """Tire un point et redessine ; retourne les artistes modifiés."""
        sample = next(self.stream)
        self.last = sample
        self._points.append((sample.x, sample.y))
        self.scatter.set_offsets(np.asarray(self._points))
        self.text.set_text(f"{sample.pi_hat}")
        return self.scatter, self.text

    def run(self, frames: Optional[int] = None, interval: int = 1) -> FuncAnimation:
        """Crée l'animation (frames=None : jusqu'à fermeture de la fenêtre)."""
        self.animation = FuncAnimation(
            self.fig, self.update, frames=frames, interval=interval,
            blit=False, repeat=False, cache_frame_data=False,
        )
        return self.animation
