"""
Tests for the linearised scheme and the shared solver driver.

For zero Biot numbers the scheme is checked against the adiabatic
(Parker) solution.
"""
from concurrent.futures import ThreadPoolExecutor
import threading

import numpy as np
import pytest

from laserflash import solve, scheme_for
from laserflash.config import SchemeConfig
from laserflash.errors import ConfigurationError, DegenerateRescaleError, SolverCancelledError
from laserflash.problem import DiathermicProblem, LinearisedProblem, NonlinearProblem, Pulse, TranslucentProblem
from laserflash.problem.adiabatic import parker_diffusivity, solution_at
from laserflash.schemes.diathermic import DiathermicScheme
from laserflash.schemes.grid import Grid
from laserflash.schemes.implicit import LinearisedScheme
from laserflash.schemes.nonlinear import NonlinearScheme
from laserflash.schemes.translucent import TranslucentScheme


class TestLinearisedSolution:

    def test_curve_shape(self, linearised_problem, config):
        curve = solve(linearised_problem, config)
        assert len(curve) == linearised_problem.num_points
        assert curve.times[0] == 0.0
        assert curve.values[0] == 0.0
        assert curve.max_value == pytest.approx(linearised_problem.maximum_temperature)
        assert np.all(curve.values >= 0.0)
        # adiabatic plateau
        assert curve.values[-1] == pytest.approx(1.0, rel=1e-3)

    def test_single_step_pulse_rises_monotonically(self, config):
        """Unit-energy rectangular pulse lasting one fine step, N = 30, time factor 0.25."""
        tau = Grid.from_config(config).tau
        problem = LinearisedProblem(pulse=Pulse(width=tau))
        shaped = solve(problem, config.with_changes(resolve_pulse=False))
        sourced = solve(problem, config, pulse=lambda t: 1.0 / tau if t < tau else 0.0)

        for curve in (shaped, sourced):
            values = curve.values
            assert np.all(np.diff(values) >= 0.0)
            assert values.max() <= 1.0 + 1e-12
            assert values[-1] == pytest.approx(1.0, rel=1e-3)
        np.testing.assert_allclose(shaped.values, sourced.values, rtol=1e-9, atol=1e-12)

    def test_sample_times(self, linearised_problem, config):
        curve = solve(linearised_problem, config)
        grid = Grid.from_config(config)
        time_interval = grid.time_interval(config.time_limit, linearised_problem.num_points, 1.0)
        expected = np.arange(linearised_problem.num_points) * time_interval * grid.tau
        np.testing.assert_allclose(curve.times, expected)

    def test_rescale_to_maximum_temperature(self, config):
        curve = solve(LinearisedProblem(maximum_temperature=3.5, num_points=40), config)
        assert curve.max_value == pytest.approx(3.5)

    def test_agrees_with_adiabatic_solution(self, linearised_problem, config):
        curve = solve(linearised_problem, config)
        classic = np.array([solution_at(linearised_problem, t) for t in curve.times])
        assert np.max(np.abs(curve.values - classic)) < 0.03

    def test_parker_diffusivity_recovered(self, linearised_problem, config):
        curve = solve(linearised_problem, config)
        estimate = parker_diffusivity(linearised_problem.thickness, curve.half_rise_time())
        assert estimate == pytest.approx(linearised_problem.diffusivity, rel=0.05)

    def test_dimensional_problem_scales_time(self, config):
        problem = LinearisedProblem(thickness=2e-3, diffusivity=1e-5, pulse=Pulse(width=2e-3))
        curve = solve(problem, config.with_changes(time_limit=0.5))
        estimate = parker_diffusivity(problem.thickness, curve.half_rise_time())
        assert estimate == pytest.approx(problem.diffusivity, rel=0.05)

    def test_heat_losses_lower_the_tail(self, config):
        curve = solve(LinearisedProblem(front_biot=0.5, rear_biot=0.5), config)
        assert curve.max_value == pytest.approx(1.0)
        assert curve.values[-1] < 0.99

    def test_custom_source_matches_pulse(self, config):
        problem = LinearisedProblem(pulse=Pulse(width=0.01))
        reference = solve(problem, config)
        custom = solve(problem, config, pulse=lambda t: 1.0 if t < 0.01 else 0.0)
        np.testing.assert_allclose(custom.values, reference.values, rtol=1e-9, atol=1e-12)


class TestZeroPulse:

    def test_zero_pulse_gives_zero_field(self, linearised_problem, config):
        curve = LinearisedScheme(config).integrate(linearised_problem, pulse=lambda t: 0.0)
        assert np.all(curve.values == 0.0)

    def test_zero_pulse_cannot_be_rescaled(self, linearised_problem, config):
        with pytest.raises(DegenerateRescaleError):
            solve(linearised_problem, config, pulse=lambda t: 0.0)


class TestDriver:

    @pytest.mark.parametrize("problem, scheme_class", [
        (LinearisedProblem(), LinearisedScheme),
        (DiathermicProblem(), DiathermicScheme),
        (TranslucentProblem(), TranslucentScheme),
        (NonlinearProblem(), NonlinearScheme),
    ])
    def test_scheme_for(self, problem, scheme_class, config):
        scheme = scheme_for(problem, config)
        assert type(scheme) is scheme_class
        assert scheme.config is config

    def test_mismatched_problem(self, config):
        with pytest.raises(ConfigurationError):
            LinearisedScheme(config).solve(DiathermicProblem())

    def test_invalid_grid_detected_before_stepping(self, linearised_problem):
        calls = []
        with pytest.raises(ConfigurationError):
            solve(linearised_problem, SchemeConfig(grid_density=1), callback=calls.append)
        assert calls == []

    def test_progress_callback(self, coarse_config):
        problem = LinearisedProblem(num_points=20)
        progress = []
        solve(problem, coarse_config, callback=progress.append)
        assert [p.sample for p in progress] == list(range(1, 20))
        assert all(p.num_points == 20 for p in progress)
        assert all(b.time > a.time for a, b in zip(progress, progress[1:]))

    def test_cancel_before_start(self, coarse_config):
        stop_event = threading.Event()
        stop_event.set()
        with pytest.raises(SolverCancelledError):
            solve(LinearisedProblem(num_points=20), coarse_config, stop_event=stop_event)

    def test_cancel_from_callback(self, coarse_config):
        stop_event = threading.Event()
        progress = []

        def on_progress(p):
            progress.append(p)
            if p.sample == 5:
                stop_event.set()

        with pytest.raises(SolverCancelledError):
            solve(LinearisedProblem(num_points=20), coarse_config, callback=on_progress, stop_event=stop_event)
        assert len(progress) == 5

    def test_concurrent_runs_are_independent(self, coarse_config):
        scheme = LinearisedScheme(coarse_config)
        problems = [LinearisedProblem(rear_biot=b, num_points=30) for b in (0.0, 0.3, 0.0, 0.3)]
        with ThreadPoolExecutor(max_workers=4) as pool:
            curves = list(pool.map(scheme.solve, problems))
        np.testing.assert_array_equal(curves[0].values, curves[2].values)
        np.testing.assert_array_equal(curves[1].values, curves[3].values)
        assert not np.array_equal(curves[0].values, curves[1].values)
