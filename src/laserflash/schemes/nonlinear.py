"""
Nonlinear Scheme
================
Implicit scheme with radiative heat losses on both faces.

The boundary conditions contain the quartic term

    ((theta * dT / T + 1)**4 - 1)

where theta is the dimensionless temperature, T the test temperature and
dT the maximum heating. Within each time step the boundary terms are
evaluated with the latest iterate of V and the sweep is repeated until the
mid value 0.5 * (V[0] + V[N]) stops changing. The iterate persists across
time steps, so the first iteration of a step starts from the previous
step's field.
"""
from __future__ import annotations

from dataclasses import dataclass
import logging

from laserflash.errors import NonConvergenceError
from laserflash.problem.statements import NonlinearProblem, ProblemType
from laserflash.schemes.grid import Grid
from laserflash.schemes.implicit import ImplicitScheme, SweepState
from laserflash.schemes.sweep import back_substitute, implicit_rhs, sweep_alpha, sweep_beta

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class RadiativeState(SweepState):
    """Step-independent constants of the radiative boundary conditions."""
    relative_heating: float = 0.0   # dT / T
    precision: float = 1e-3
    b1: float = 0.0
    b2: float = 0.0
    b3: float = 0.0
    c1: float = 0.0
    c2: float = 0.0


def radiative_excess(theta: float, relative_heating: float) -> float:
    """Quartic loss term ``(theta * dT/T + 1)**4 - 1``."""
    return (theta * relative_heating + 1.0) ** 4 - 1.0


class NonlinearScheme(ImplicitScheme):
    PROBLEM_TYPE = ProblemType.NONLINEAR

    def allocate(self, grid: Grid, problem: NonlinearProblem) -> RadiativeState:
        hx, tau = grid.hx, grid.tau
        hh = hx ** 2
        dT, T = problem.maximum_heating, problem.test_temperature

        state = RadiativeState(grid=grid, a=1.0 / hh, b=1.0 / tau + 2.0 / hh, c=1.0 / hh)
        state.relative_heating = dT / T
        state.precision = problem.nonlinear_precision

        a1 = 2.0 * tau / (hh + 2.0 * tau)
        state.alpha[1] = a1
        sweep_alpha(state.alpha, state.a, state.b, state.c)

        state.b1 = hh / (2.0 * tau + hh)
        state.b2 = a1 * hx
        state.b3 = problem.front_biot * T / (4.0 * dT)
        state.c1 = -0.5 * hx * tau * problem.rear_biot * T / dT
        state.c2 = 1.0 / (hh + 2.0 * tau - 2.0 * state.alpha[state.N] * tau)
        return state

    def seed_front(self, state: RadiativeState, pulse: float) -> float:
        loss = state.b3 * radiative_excess(state.V[0], state.relative_heating)
        return state.b1 * state.U[0] + state.b2 * (pulse - loss)

    def close_rear(self, state: RadiativeState, pulse: float) -> float:
        n = state.N
        tau, hh = state.grid.tau, state.grid.hx ** 2
        loss = state.c1 * radiative_excess(state.V[n], state.relative_heating)
        return state.c2 * (2.0 * state.beta[n] * tau + hh * state.U[n] + loss)

    def advance(self, state: RadiativeState, step: int, pulse: float) -> None:
        """
        Fixed-point iteration of one time step.

        Raises:
            NonConvergenceError: If the mid value has not settled within
                ``nonlinear_max_iterations`` iterations.
        """
        n = state.N
        implicit_rhs(state.U, state.grid.tau, state.F)
        tolerance = state.precision ** 2

        previous = 0.5 * (state.V[0] + state.V[n])
        residual = float("inf")
        for _ in range(self.config.nonlinear_max_iterations):
            state.beta[1] = self.seed_front(state, pulse)
            sweep_beta(state.alpha, state.beta, state.F, state.a, state.b)
            state.V[n] = self.close_rear(state, pulse)
            back_substitute(state.alpha, state.beta, state.V)

            current = 0.5 * (state.V[0] + state.V[n])
            residual = (current - previous) ** 2
            if residual <= tolerance:
                return
            previous = current

        logger.error(f"Nonlinear step {step} did not converge (squared residual {residual:.3e})")
        raise NonConvergenceError(self.config.nonlinear_max_iterations, step, residual)
