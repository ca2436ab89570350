"""
Diathermic Scheme
=================
Implicit scheme for a sample whose faces exchange heat directly.

The front-face condition contains the rear-face temperature V[N] with the
weight eta * Bi, so the system is no longer tridiagonal. Each node is
split into a particular and a homogeneous component,

    V[i] = p[i] + V[N] * q[i],

and V[N] follows from a 2x2 closure. The system is normalised (a = c = 1,
b = 2 + hx²/tau). alpha, gamma and q depend only on the grid and the
coupling, so the closure denominator is fixed for the whole run and is
checked once before stepping.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import TYPE_CHECKING

import numpy as np

from laserflash.errors import IllPosedCouplingError
from laserflash.problem.statements import DiathermicProblem, ProblemType
from laserflash.schemes.grid import Grid
from laserflash.schemes.implicit import ImplicitScheme, SweepState
from laserflash.schemes.sweep import coupled_alpha_gamma, coupled_homogeneous, coupled_step

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


@dataclass(kw_only=True)
class CoupledState(SweepState):
    """Extra arrays of the coupled sweep (p and q have length N)."""
    z0: float = 0.0
    z_n1: float = 0.0
    f_n1: float = 0.0
    hx2_tau: float = 0.0
    denominator: float = 0.0
    gamma: npt.NDArray[np.float64] = field(init=False)
    p: npt.NDArray[np.float64] = field(init=False)
    q: npt.NDArray[np.float64] = field(init=False)

    def __post_init__(self) -> None:
        super().__post_init__()
        n = self.grid.grid_density
        self.gamma = np.zeros(n + 1, dtype=np.float64)
        self.p = np.zeros(n, dtype=np.float64)
        self.q = np.zeros(n, dtype=np.float64)


class DiathermicScheme(ImplicitScheme):
    PROBLEM_TYPE = ProblemType.DIATHERMIC

    def allocate(self, grid: Grid, problem: DiathermicProblem) -> CoupledState:
        """
        Fill alpha, gamma and q, and validate the closure denominator.

        Raises:
            IllPosedCouplingError: If ``|denominator| <= singularity_tolerance * |z0|``.
        """
        hx, tau = grid.hx, grid.tau
        hx2_tau = hx ** 2 / tau
        biot = problem.front_biot
        eta = problem.diathermic_coefficient

        state = CoupledState(grid=grid, a=1.0, b=2.0 + hx2_tau, c=1.0)
        state.hx2_tau = hx2_tau
        state.f_n1 = 0.5 * hx2_tau
        state.z0 = 1.0 + 0.5 * hx2_tau + hx * biot * (1.0 + eta)
        state.z_n1 = -hx * eta * biot

        state.alpha[1] = 1.0 / state.z0
        state.gamma[1] = -state.z_n1 / state.z0
        coupled_alpha_gamma(state.alpha, state.gamma, state.b)
        coupled_homogeneous(state.alpha, state.gamma, state.q)

        n = state.N
        state.denominator = state.z0 + state.z_n1 * state.q[0] - state.q[n - 1]
        if abs(state.denominator) <= self.config.singularity_tolerance * abs(state.z0):
            raise IllPosedCouplingError(state.denominator, eta, biot)

        logger.debug(f"Diathermic closure denominator {state.denominator:.6e} (eta={eta}, Bi={biot})")
        return state

    def seed_front(self, state: CoupledState, pulse: float) -> float:
        hx = state.grid.hx
        return (state.f_n1 * state.U[0] + hx * pulse) / state.z0

    def close_rear(self, state: CoupledState, pulse: float) -> float:
        n = state.N
        return (state.f_n1 * state.U[n] - state.z_n1 * state.p[0] + state.p[n - 1]) / state.denominator

    def advance(self, state: CoupledState, step: int, pulse: float) -> None:
        state.beta[1] = self.seed_front(state, pulse)
        coupled_step(
            state.U, state.V, state.alpha, state.beta, state.p, state.q,
            state.b, state.hx2_tau, state.f_n1, state.z_n1, state.denominator,
        )
