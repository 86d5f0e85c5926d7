"""
tests/test_all.py
─────────────────
Tests unitaires pour tous les modules du projet.

Exécution :
    python -m pytest tests/ -v
    python tests/test_all.py  (mode direct)

Tests couverts :
    - Outils d'échantillonnage (source aléatoire, validation, ratios)
    - Disque inscrit (bornes, précision, flux de tirages)
    - Aiguille de Buffon (précision, croisements nuls ou systématiques)
    - Marche aléatoire (précision, distance moyenne nulle, valeur exacte E|S_n|)
    - Convergence et dispersion entre graines
    - Visualisation et ligne de commande
"""

import sys
import os
import io
import math
import contextlib
import numpy as np
import unittest

import matplotlib
matplotlib.use("Agg")

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from pi_monte_carlo.sampling import (
    PI_REF, resolve_rng, spawn_rngs, check_sample_size, uniform_point,
    is_inside_circle, running_ratio, safe_ratio,
)
from pi_monte_carlo.circle import estimate_by_circle_ratio, circle_sample_stream
from pi_monte_carlo.buffon import estimate_by_buffon_needle, crossing_probability
from pi_monte_carlo.random_walk import (
    estimate_by_random_walk, expected_abs_displacement, limit_estimate,
)
from pi_monte_carlo.convergence import (
    CIRCLE, BUFFON, RANDOM_WALK, ESTIMATORS, EstimateResult,
    run_estimator, convergence_analysis, spread_across_seeds,
)


# ── Tolérance globale ─────────────────────────────────────────────────────────
TOL_LOOSE = 0.05     # tests rapides
TOL_STRICT = 0.01    # 10⁶ tirages


class _ConstantSource:
    """Source factice : chaque tirage vaut low + fraction · (high - low)."""

    def __init__(self, fraction):
        self.fraction = fraction

    def uniform(self, low=0.0, high=1.0, size=None):
        return np.full(size, low + self.fraction * (high - low))

    def random(self, size=None):
        return np.full(size, self.fraction)


class _AlternatingSource:
    """Source factice pour la marche : pas +1, -1, +1, -1, ..."""

    def random(self, size=None):
        return np.resize(np.array([0.25, 0.75]), size)


class TestSampling(unittest.TestCase):
    """Tests des outils communs."""

    def test_resolve_rng_keeps_generator(self):
        rng = np.random.default_rng(0)
        self.assertIs(resolve_rng(rng), rng)

    def test_resolve_rng_seed_reproducible(self):
        a = resolve_rng(123).random(5)
        b = resolve_rng(123).random(5)
        np.testing.assert_array_equal(a, b)

    def test_resolve_rng_none_gives_generator(self):
        self.assertIsInstance(resolve_rng(None), np.random.Generator)

    def test_spawn_rngs_independent(self):
        rngs = spawn_rngs(42, 3)
        self.assertEqual(len(rngs), 3)
        firsts = {float(r.random()) for r in rngs}
        self.assertEqual(len(firsts), 3)

    def test_spawn_rngs_reproducible(self):
        a = [r.random() for r in spawn_rngs(7, 3)]
        b = [r.random() for r in spawn_rngs(7, 3)]
        self.assertEqual(a, b)

    def test_check_sample_size_accepts_integers(self):
        self.assertEqual(check_sample_size("n", 10), 10)
        self.assertEqual(check_sample_size("n", np.int64(10)), 10)

    def test_check_sample_size_rejects_non_positive(self):
        for bad in (0, -1, -1000):
            with self.subTest(value=bad):
                with self.assertRaises(ValueError):
                    check_sample_size("n", bad)

    def test_check_sample_size_rejects_non_integers(self):
        for bad in (1.5, 10.0, "10", True, None):
            with self.subTest(value=bad):
                with self.assertRaises(TypeError):
                    check_sample_size("n", bad)

    def test_uniform_point_in_square(self):
        rng = np.random.default_rng(1)
        for _ in range(200):
            x, y = uniform_point(rng, -1.0, 1.0)
            self.assertTrue(-1.0 <= x < 1.0)
            self.assertTrue(-1.0 <= y < 1.0)

    def test_is_inside_circle_strict(self):
        self.assertTrue(is_inside_circle(0.0, 0.0))
        self.assertTrue(is_inside_circle(0.6, 0.6))
        # x² + y² = r² : sur le cercle, donc dehors
        self.assertFalse(is_inside_circle(1.0, 0.0))
        self.assertFalse(is_inside_circle(0.8, 0.8))

    def test_is_inside_circle_arrays(self):
        res = is_inside_circle(np.array([0.0, 1.0]), np.array([0.5, 0.5]))
        np.testing.assert_array_equal(res, [True, False])

    def test_running_ratio(self):
        self.assertEqual(running_ratio(3, 4), 3.0)
        self.assertEqual(running_ratio(0, 10), 0.0)
        self.assertTrue(math.isnan(running_ratio(0, 0)))

    def test_safe_ratio_ieee(self):
        self.assertEqual(safe_ratio(6.0, 2.0), 3.0)
        self.assertEqual(safe_ratio(1.0, 0.0), math.inf)
        self.assertTrue(math.isnan(safe_ratio(0.0, 0.0)))


class TestCircle(unittest.TestCase):
    """Tests de l'estimateur du disque inscrit."""

    def test_large_n_close_to_pi(self):
        pi_hat = estimate_by_circle_ratio(1_000_000, rng=42)
        self.assertAlmostEqual(pi_hat, PI_REF, delta=TOL_STRICT)

    def test_reproducible_with_seed(self):
        self.assertEqual(estimate_by_circle_ratio(10_000, rng=5),
                         estimate_by_circle_ratio(10_000, rng=5))

    def test_bounded(self):
        for seed in range(30):
            for n in (1, 2, 7, 100):
                pi_hat = estimate_by_circle_ratio(n, rng=seed)
                self.assertGreaterEqual(pi_hat, 0.0)
                self.assertLessEqual(pi_hat, 4.0)

    def test_single_point_is_zero_or_four(self):
        for seed in range(20):
            self.assertIn(estimate_by_circle_ratio(1, rng=seed), (0.0, 4.0))

    def test_all_points_at_center(self):
        # fraction 0.5 → (0, 0) à chaque tirage : tous dedans
        self.assertEqual(estimate_by_circle_ratio(50, rng=_ConstantSource(0.5)), 4.0)

    def test_all_points_at_corner(self):
        # fraction 0 → (-1, -1) : tous dehors
        self.assertEqual(estimate_by_circle_ratio(50, rng=_ConstantSource(0.0)), 0.0)

    def test_invalid_iterations(self):
        with self.assertRaises(ValueError):
            estimate_by_circle_ratio(0)
        with self.assertRaises(TypeError):
            estimate_by_circle_ratio(10.0)

    def test_stream_running_ratio(self):
        stream = circle_sample_stream(rng=3)
        hits = 0
        for k in range(1, 201):
            s = next(stream)
            hits += s.inside
            self.assertEqual(s.total, k)
            self.assertEqual(s.hits, hits)
            self.assertEqual(s.inside, s.x**2 + s.y**2 < 1.0)
            self.assertAlmostEqual(s.pi_hat, 4.0 * hits / k)
            self.assertTrue(0.0 <= s.pi_hat <= 4.0)

    def test_stream_reproducible(self):
        a, b = circle_sample_stream(rng=11), circle_sample_stream(rng=11)
        for _ in range(20):
            self.assertEqual(next(a), next(b))


class TestBuffon(unittest.TestCase):
    """Tests de l'aiguille de Buffon."""

    def test_large_n_close_to_pi(self):
        pi_hat = estimate_by_buffon_needle(1_000_000, rng=42)
        self.assertAlmostEqual(pi_hat, PI_REF, delta=2 * TOL_STRICT)

    def test_reproducible_with_seed(self):
        self.assertEqual(estimate_by_buffon_needle(10_000, rng=9),
                         estimate_by_buffon_needle(10_000, rng=9))

    def test_zero_crossings_gives_inf(self):
        # x₀ = 0.25, θ = π/2 → x_fin = 0.25 : aucun croisement
        pi_hat = estimate_by_buffon_needle(100, rng=_ConstantSource(0.25))
        self.assertEqual(pi_hat, math.inf)

    def test_every_needle_crosses(self):
        # x₀ = 0.5, θ = π → x_fin = -0.5 : croisement systématique, π̂ = 2n/n
        pi_hat = estimate_by_buffon_needle(100, rng=_ConstantSource(0.5))
        self.assertEqual(pi_hat, 2.0)

    def test_small_n_never_raises(self):
        for seed in range(50):
            pi_hat = estimate_by_buffon_needle(1, rng=seed)
            self.assertIn(pi_hat, (2.0, math.inf))

    def test_crossing_probability(self):
        self.assertAlmostEqual(crossing_probability(), 2.0 / PI_REF, places=12)
        with self.assertRaises(ValueError):
            crossing_probability(needle_length=2.0, line_spacing=1.0)

    def test_invalid_iterations(self):
        with self.assertRaises(ValueError):
            estimate_by_buffon_needle(-3)


class TestRandomWalk(unittest.TestCase):
    """Tests de la marche aléatoire."""

    def test_reference_scenario(self):
        pi_hat = estimate_by_random_walk(1000, 10_000, rng=7)
        self.assertAlmostEqual(pi_hat, PI_REF, delta=0.3)

    def test_default_parameters_close_to_limit(self):
        pi_hat = estimate_by_random_walk(100, 10_000, rng=0)
        self.assertAlmostEqual(pi_hat, limit_estimate(100), delta=0.2)

    def test_reproducible_with_seed(self):
        self.assertEqual(estimate_by_random_walk(50, 200, rng=4),
                         estimate_by_random_walk(50, 200, rng=4))

    def test_single_walk_formula(self):
        # steps impair : |S_n| ∈ {1, 3, 5, 7, 9}, π̂ = 2n / |S_n|²
        allowed = [18.0 / k**2 for k in (1, 3, 5, 7, 9)]
        for seed in range(20):
            pi_hat = estimate_by_random_walk(9, 1, rng=seed)
            self.assertTrue(any(math.isclose(pi_hat, a) for a in allowed))

    def test_zero_average_distance_gives_inf(self):
        pi_hat = estimate_by_random_walk(2, 1, rng=_AlternatingSource())
        self.assertEqual(pi_hat, math.inf)

    def test_always_forward(self):
        # u = 0.25 < 0.5 à chaque pas : |S_4| = 4, π̂ = 8 / 16
        pi_hat = estimate_by_random_walk(4, 3, rng=_ConstantSource(0.25))
        self.assertEqual(pi_hat, 0.5)

    def test_block_boundaries(self):
        # plus de marches qu'un bloc : même résultat qu'un découpage quelconque
        pi_hat = estimate_by_random_walk(1 << 19, 5, rng=_ConstantSource(0.75))
        self.assertAlmostEqual(pi_hat, 2.0 / (1 << 19))

    def test_expected_abs_displacement_small_n(self):
        # Valeurs exactes obtenues par énumération
        for n, expected in [(1, 1.0), (2, 1.0), (3, 1.5), (4, 1.5), (5, 1.875)]:
            self.assertAlmostEqual(expected_abs_displacement(n), expected, places=12)

    def test_limit_estimate_converges(self):
        self.assertGreater(limit_estimate(100), PI_REF)
        self.assertLess(abs(limit_estimate(10_000) - PI_REF),
                        abs(limit_estimate(100) - PI_REF))
        self.assertAlmostEqual(limit_estimate(10_000), PI_REF, delta=1e-3)

    def test_invalid_parameters(self):
        with self.assertRaises(ValueError):
            estimate_by_random_walk(0, 10)
        with self.assertRaises(ValueError):
            estimate_by_random_walk(10, 0)
        with self.assertRaises(TypeError):
            estimate_by_random_walk(10, 2.5)


class TestConvergence(unittest.TestCase):
    """Tests du registre et des études de convergence."""

    def test_registry(self):
        self.assertEqual(list(ESTIMATORS), [CIRCLE, BUFFON, RANDOM_WALK])

    def test_estimate_result(self):
        res = EstimateResult(method=CIRCLE, n=10, pi_hat=3.0)
        self.assertAlmostEqual(res.error_abs, PI_REF - 3.0)
        self.assertIn(CIRCLE, str(res))

    def test_run_estimator_matches_direct_call(self):
        res = run_estimator(CIRCLE, 5_000, seed=1)
        self.assertEqual(res.pi_hat, estimate_by_circle_ratio(5_000, rng=1))
        res = run_estimator(RANDOM_WALK, 5_000, seed=1)
        self.assertEqual(res.pi_hat, estimate_by_random_walk(100, 50, rng=1))

    def test_unknown_method(self):
        with self.assertRaises(ValueError):
            run_estimator("leibniz", 100)

    def test_convergence_analysis_shapes(self):
        ns   = [1_000, 10_000, 100_000]
        conv = convergence_analysis(BUFFON, ns, seed=0)
        self.assertEqual(len(conv["pi_hats"]), 3)
        np.testing.assert_array_equal(conv["ns"], ns)
        np.testing.assert_allclose(conv["errors"], np.abs(conv["pi_hats"] - PI_REF))

    def test_spread_narrows_with_n(self):
        # n × 100 ⟹ dispersion ÷ ~10
        for method in ESTIMATORS:
            with self.subTest(method=method):
                small = spread_across_seeds(method, 1_000, n_seeds=20)
                large = spread_across_seeds(method, 100_000, n_seeds=20)
                self.assertLess(large["std"], small["std"] / 3)
                self.assertEqual(len(large["samples"]), 20)

    def test_spread_mean_close_to_pi(self):
        spread = spread_across_seeds(CIRCLE, 100_000, n_seeds=20)
        self.assertAlmostEqual(spread["mean"], PI_REF, delta=TOL_LOOSE / 5)


class TestVisualization(unittest.TestCase):
    """Tests des figures et de l'affichage animé (backend Agg)."""

    def setUp(self):
        import matplotlib.pyplot as plt
        self.plt = plt

    def tearDown(self):
        self.plt.close("all")

    def test_plot_circle_samples(self):
        from pi_monte_carlo.visualization import plot_circle_samples
        fig = plot_circle_samples(n=500, rng=0)
        self.assertEqual(len(fig.axes), 1)

    def test_plot_convergence_and_spread(self):
        from pi_monte_carlo.visualization import plot_convergence, plot_spread
        conv = [convergence_analysis(m, [1_000, 10_000], seed=0) for m in ESTIMATORS]
        self.assertEqual(len(plot_convergence(conv).axes), 2)
        spreads = [spread_across_seeds(m, n, n_seeds=5)
                   for m in ESTIMATORS for n in (1_000, 10_000)]
        self.assertEqual(len(plot_spread(spreads).axes), 2)

    def test_plot_saved(self):
        import tempfile
        from pi_monte_carlo.visualization import plot_circle_samples
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "fig_circle.png")
            with contextlib.redirect_stdout(io.StringIO()):
                plot_circle_samples(n=200, rng=0, save_path=path)
            self.assertTrue(os.path.exists(path))

    def test_circle_animation_one_point_per_frame(self):
        from pi_monte_carlo.visualization import CircleAnimation
        anim = CircleAnimation(circle_sample_stream(rng=2))
        for frame in range(25):
            anim.update(frame)
        self.assertEqual(anim.last.total, 25)
        self.assertEqual(len(anim.scatter.get_offsets()), 25)
        self.assertEqual(anim.text.get_text(), f"{anim.last.pi_hat}")
        self.assertIsNotNone(anim.run(frames=5))


class TestCommandLine(unittest.TestCase):
    """Tests du point d'entrée main.py."""

    def _run(self, argv):
        import main
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            main.main(argv)
        return buf.getvalue().splitlines()

    def test_three_lines(self):
        lines = self._run(["--seed", "3"])
        self.assertEqual(len(lines), 3)
        for line, name in zip(lines, [CIRCLE, BUFFON, RANDOM_WALK]):
            prefix = f"{name}: pi = "
            self.assertTrue(line.startswith(prefix))
            value = float(line[len(prefix):])
            self.assertAlmostEqual(value, PI_REF, delta=0.3)

    def test_seed_reproducible(self):
        self.assertEqual(self._run(["--seed", "5"]), self._run(["--seed", "5"]))


# ══════════════════════════════════════════════════════════════════════════════
#  POINT D'ENTRÉE
# ══════════════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    print("=" * 65)
    print("  TESTS UNITAIRES — Estimation de π par Monte-Carlo")
    print("=" * 65)
    loader  = unittest.TestLoader()
    suite   = loader.discover(start_dir=os.path.dirname(__file__), pattern="test_*.py")
    runner  = unittest.TextTestRunner(verbosity=2)
    result  = runner.run(suite)
    sys.exit(0 if result.wasSuccessful() else 1)
