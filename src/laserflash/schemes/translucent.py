"""
Translucent Scheme
==================
Implicit scheme for a semi-transparent sample.

The laser pulse is absorbed in the volume, so the source term enters every
interior equation weighted by the laser absorption profile. The detector
sees thermal radiation from the whole depth, and the recorded signal is the
trapezoidal integral of the temperature weighted by the thermal absorption
profile, measured from the rear face.

Both profiles depend only on the grid and the absorption model, so they are
tabulated once per run.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING

import numpy as np
from scipy.integrate import trapezoid

from laserflash.problem.absorption import SpectralRange
from laserflash.problem.statements import ProblemType, TranslucentProblem
from laserflash.schemes.grid import Grid
from laserflash.schemes.implicit import ImplicitScheme, SweepState
from laserflash.schemes.sweep import sweep_alpha

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class TranslucentState(SweepState):
    front_biot: float = 0.0
    rear_biot: float = 0.0
    laser: npt.NDArray[np.float64] = field(init=False)
    thermal: npt.NDArray[np.float64] = field(init=False)


class TranslucentScheme(ImplicitScheme):
    PROBLEM_TYPE = ProblemType.TRANSLUCENT

    def allocate(self, grid: Grid, problem: TranslucentProblem) -> TranslucentState:
        hx, tau = grid.hx, grid.tau
        hh = hx ** 2
        n = grid.grid_density
        eps = self.config.time_offset

        state = TranslucentState(
            grid=grid, a=1.0 / hh, b=1.0 / tau + 2.0 / hh, c=1.0 / hh,
            front_biot=problem.front_biot, rear_biot=problem.rear_biot,
        )

        # laser nodes are evaluated just in front of x_i; the face itself at exactly 0
        absorption = problem.absorption
        laser = [absorption(SpectralRange.LASER, 0.0)]
        laser.extend(absorption(SpectralRange.LASER, (i - eps) * hx) for i in range(1, n + 1))
        state.laser = np.asarray(laser, dtype=np.float64)
        state.thermal = np.asarray(
            [absorption(SpectralRange.THERMAL, i * hx) for i in range(n + 1)], dtype=np.float64
        )

        state.alpha[1] = 1.0 / (1.0 + hh / (2.0 * tau) + problem.front_biot * hx)
        sweep_alpha(state.alpha, state.a, state.b, state.c)
        return state

    def seed_front(self, state: TranslucentState, pulse: float) -> float:
        hx, tau = state.grid.hx, state.grid.tau
        return (state.U[0] + tau * pulse * state.laser[0]) / (
            1.0 + 2.0 * tau / hx ** 2 * (1.0 + state.front_biot * hx)
        )

    def source_term(self, state: TranslucentState, pulse: float) -> None:
        np.multiply(state.U, -1.0 / state.grid.tau, out=state.F)
        state.F -= pulse * state.laser

    def close_rear(self, state: TranslucentState, pulse: float) -> float:
        n = state.N
        hx, tau = state.grid.hx, state.grid.tau
        hh = hx ** 2
        return (hh * (state.U[n] + tau * pulse * state.laser[n]) + 2.0 * tau * state.beta[n]) / (
            2.0 * state.rear_biot * hx * tau + hh + 2.0 * tau * (1.0 - state.alpha[n])
        )

    def observe(self, state: TranslucentState) -> float:
        """Thermal-absorption-weighted temperature integrated from the rear face."""
        return float(trapezoid(state.V[::-1] * state.thermal, dx=state.grid.hx))
