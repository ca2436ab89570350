"""Tests for the translucent scheme."""
import numpy as np
import pytest

from laserflash import solve
from laserflash.problem import BeerLambertAbsorption, LinearisedProblem, SpectralRange, TranslucentProblem


class TestTranslucentScheme:

    def test_solution_is_rescaled(self, translucent_problem, config):
        curve = solve(translucent_problem, config)
        assert len(curve) == translucent_problem.num_points
        assert curve.max_value == pytest.approx(1.0)
        assert np.all(curve.values >= 0.0)

    def test_opaque_limit_matches_linearised(self, config):
        """Surface absorption and surface emission reduce to the linearised problem."""
        opaque = BeerLambertAbsorption(laser_absorptivity=1e4, thermal_absorptivity=1e4)
        translucent = solve(TranslucentProblem(front_biot=0.1, rear_biot=0.2, absorption=opaque), config)
        linearised = solve(LinearisedProblem(front_biot=0.1, rear_biot=0.2), config)
        np.testing.assert_allclose(translucent.values, linearised.values, rtol=1e-6, atol=1e-9)

    def test_any_callable_absorption(self, coarse_config):
        calls = []

        def uniform(band, depth):
            calls.append((band, depth))
            return 1.0

        curve = solve(TranslucentProblem(absorption=uniform, num_points=20), coarse_config)
        assert curve.max_value == pytest.approx(1.0)
        # profiles are tabulated once per run, not per step
        n = coarse_config.grid_density
        assert len(calls) == 2 * (n + 1)
        assert sum(1 for band, _ in calls if band == SpectralRange.LASER) == n + 1
        assert (SpectralRange.LASER, 0.0) in calls

    def test_volumetric_heating_reaches_rear_sooner(self, config):
        weak = solve(TranslucentProblem(absorption=BeerLambertAbsorption(2.0, 1e4)), config)
        strong = solve(TranslucentProblem(absorption=BeerLambertAbsorption(1e4, 1e4)), config)
        assert weak.half_rise_time() < strong.half_rise_time()
