"""
Adiabatic Solution
==================
Closed-form rear-face response of an adiabatic sample heated by an
instantaneous pulse (Parker et al., J. Appl. Phys. 32 (1961) 1679).

    T(l, t) = T_max * (1 + 2 * sum_{k>=1} (-1)**k * exp(-k² pi² Fo)),   Fo = t / (l²/a)

Used as a reference curve and for the half-time estimate of the diffusivity.
"""
from __future__ import annotations

import math

import numpy as np

from laserflash.curve import HeatingCurve
from laserflash.errors import ConfigurationError
from laserflash.problem.statements import LinearisedProblem

PARKER_COEFFICIENT = 0.1388
DEFAULT_CLASSIC_PRECISION = 200
DEFAULT_POINTS = 100

# below this time the series is not evaluated and the response is zero
_TIME_EPS = 1e-8


def solution_at(problem: LinearisedProblem, time: float, precision: int = DEFAULT_CLASSIC_PRECISION) -> float:
    """Rear-face temperature at ``time`` using the first ``precision`` series terms."""
    if time < _TIME_EPS:
        return 0.0
    fourier = time / problem.characteristic_time
    k = np.arange(1, precision + 1, dtype=np.float64)
    signs = np.where(k % 2 == 0, 1.0, -1.0)
    series = np.sum(signs * np.exp(-((k * math.pi) ** 2) * fourier))
    return float((1.0 + 2.0 * series) * problem.maximum_temperature)


def classic_solution(
    problem: LinearisedProblem,
    time_limit: float,
    num_points: int = DEFAULT_POINTS,
    precision: int = DEFAULT_CLASSIC_PRECISION,
) -> HeatingCurve:
    """
    Sample the adiabatic solution uniformly on ``[0, time_limit]``.

    Args:
        problem: Provides the characteristic time and the maximum temperature.
        time_limit: Upper time limit in seconds.
        num_points: Number of samples, the origin included.
        precision: Number of series terms.
    """
    if num_points < 2:
        raise ConfigurationError(f"A heating curve needs at least 2 points, got {num_points}.")
    if precision < 1:
        raise ConfigurationError(f"At least one series term is required, got {precision}.")

    curve = HeatingCurve(num_points=num_points, name="Adiabatic Solution")
    step = time_limit / (num_points - 1.0)
    curve.add_point(0.0, 0.0)
    for i in range(1, num_points):
        curve.add_point(i * step, solution_at(problem, i * step, precision))
    return curve


def parker_diffusivity(thickness: float, half_time: float) -> float:
    """Diffusivity estimate ``0.1388 * l² / t_half``."""
    if not half_time > 0:
        raise ConfigurationError(f"Half-rise time must be positive, got {half_time}.")
    return PARKER_COEFFICIENT * thickness ** 2 / half_time
