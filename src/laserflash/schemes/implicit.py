"""
Fully Implicit Scheme
=====================
Shared control flow of the finite-difference schemes and the linearised
(Robin-Robin) variant.

The fully implicit scheme uses the 4-point template
Theta(x_i, t_m), Theta(x_i-1, t_m+1), Theta(x_i, t_m+1), Theta(x_i+1, t_m+1).
The new time level has no explicit formula, so each fine step is solved
with the tridiagonal sweep. Boundary conditions come from a Taylor
expansion up to the third term, which keeps the order of approximation at
O(tau + hx²). The scheme is unconditionally stable.

Control flow of a run
---------------------
1. prepare: build the grid (refined if the pulse needs it), the source
   evaluator and the number of fine steps per output sample.
2. allocate: fresh field and coefficient arrays for this run only.
3. For every output sample, advance the field through ``time_interval``
   fine steps, then record the observed value.
4. Rescale the curve to the requested maximum.

Subclasses provide the boundary algebra through three hooks:
``seed_front`` (beta[1]), ``source_term`` (right-hand side F) and
``close_rear`` (V[N]).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import threading
from typing import TYPE_CHECKING, Callable, Optional

import numpy as np

from laserflash.config import DEFAULT_SCHEME_CONFIG, SchemeConfig
from laserflash.curve import HeatingCurve
from laserflash.errors import ConfigurationError, SolverCancelledError
from laserflash.problem.pulse import DiscretePulse, resolve_pulse_grid
from laserflash.problem.statements import LinearisedProblem, ProblemType
from laserflash.schemes.grid import Grid
from laserflash.schemes.sweep import back_substitute, implicit_rhs, sweep_alpha, sweep_beta

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

SourceFunction = Callable[[float], float]


@dataclass
class SolverProgress:
    """Snapshot passed to the progress callback after each output sample."""
    sample: int
    num_points: int
    time: float
    value: float


@dataclass(kw_only=True)
class SweepState:
    """
    Arrays and constants owned by a single run.

    Attributes:
        grid: Grid of the run.
        U: Field at the previous time level.
        V: Field at the time level being computed.
        alpha, beta: Sweep coefficients.
        F: Right-hand side of the interior equations.
        a, b, c: Interior coefficients of the tridiagonal system.
    """
    grid: Grid
    a: float
    b: float
    c: float
    U: npt.NDArray[np.float64] = field(init=False)
    V: npt.NDArray[np.float64] = field(init=False)
    alpha: npt.NDArray[np.float64] = field(init=False)
    beta: npt.NDArray[np.float64] = field(init=False)
    F: npt.NDArray[np.float64] = field(init=False)

    def __post_init__(self) -> None:
        n = self.grid.grid_density
        self.U = np.zeros(n + 1, dtype=np.float64)
        self.V = np.zeros(n + 1, dtype=np.float64)
        self.alpha = np.zeros(n + 1, dtype=np.float64)
        self.beta = np.zeros(n + 1, dtype=np.float64)
        self.F = np.zeros(n + 1, dtype=np.float64)

    @property
    def N(self) -> int:
        return self.grid.grid_density


class ImplicitScheme(ABC):
    """
    Abstract base class for the fully implicit schemes.

    A scheme object holds only its (frozen) configuration; every call to
    :meth:`solve` allocates its own state, so one object can serve
    concurrent runs.
    """
    PROBLEM_TYPE: ProblemType

    def __init__(self, config: SchemeConfig = DEFAULT_SCHEME_CONFIG) -> None:
        self.config = config

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(N={self.config.grid_density}, time_factor={self.config.time_factor})"

    # ---- hooks ----

    @abstractmethod
    def allocate(self, grid: Grid, problem: LinearisedProblem) -> SweepState:
        """Create the run state and fill the time-independent coefficients (alpha)."""
        pass

    @abstractmethod
    def seed_front(self, state: SweepState, pulse: float) -> float:
        """Return beta[1] for the current step."""
        pass

    @abstractmethod
    def close_rear(self, state: SweepState, pulse: float) -> float:
        """Return V[N] from the accumulated alpha[N], beta[N]."""
        pass

    def source_term(self, state: SweepState, pulse: float) -> None:
        """Fill the right-hand side F of the interior equations."""
        implicit_rhs(state.U, state.grid.tau, state.F)

    def observe(self, state: SweepState) -> float:
        """Value recorded in the heating curve: the rear-face temperature."""
        return float(state.V[state.N])

    def advance(self, state: SweepState, step: int, pulse: float) -> None:
        """Compute V at the next time level from U."""
        state.beta[1] = self.seed_front(state, pulse)
        self.source_term(state, pulse)
        sweep_beta(state.alpha, state.beta, state.F, state.a, state.b)
        state.V[state.N] = self.close_rear(state, pulse)
        back_substitute(state.alpha, state.beta, state.V)

    def target_maximum(self, problem: LinearisedProblem) -> float:
        return problem.maximum_temperature

    # ---- driver ----

    def prepare(
        self,
        problem: LinearisedProblem,
        pulse: Optional[SourceFunction] = None,
    ) -> tuple[Grid, SourceFunction, int]:
        """
        Build the grid, the source evaluator and the number of fine steps per sample.

        Args:
            problem: Problem statement.
            pulse: Optional source callable ``time -> intensity`` replacing
                the discretised ``problem.pulse``.

        Raises:
            ConfigurationError: If the problem does not match the scheme or the
                grid settings are invalid.
        """
        if problem.type != self.PROBLEM_TYPE:
            raise ConfigurationError(
                f"{self.__class__.__name__} cannot solve a {problem.type} problem."
            )

        grid = Grid.from_config(self.config)
        characteristic_time = problem.characteristic_time

        if pulse is None:
            if self.config.resolve_pulse:
                grid = resolve_pulse_grid(
                    problem.pulse, grid, characteristic_time, self.config.max_pulse_refinements
                )
            pulse = DiscretePulse(problem.pulse, grid, characteristic_time)

        time_interval = grid.time_interval(self.config.time_limit, problem.num_points, characteristic_time)
        logger.debug(f"{self!r}: {grid}, {time_interval} steps per sample")
        return grid, pulse, time_interval

    def integrate(
        self,
        problem: LinearisedProblem,
        pulse: Optional[SourceFunction] = None,
        callback: Optional[Callable[[SolverProgress], None]] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> HeatingCurve:
        """
        Run the time loop and return the un-normalised heating curve.

        The curve starts at the origin and holds ``problem.num_points`` samples.
        """
        grid, source, time_interval = self.prepare(problem, pulse)
        state = self.allocate(grid, problem)

        tau = grid.tau
        eps = self.config.time_offset
        num_points = problem.num_points
        sample_duration = time_interval * tau * problem.characteristic_time

        curve = HeatingCurve(num_points=num_points)
        curve.add_point(0.0, 0.0)

        step = 0
        for sample in range(1, num_points):
            if stop_event is not None and stop_event.is_set():
                raise SolverCancelledError(f"Run cancelled at sample {sample}/{num_points}.")

            for _ in range(time_interval):
                step += 1
                # evaluation point kept just inside the step
                self.advance(state, step, source((step - eps) * tau))
                np.copyto(state.U, state.V)

            value = self.observe(state)
            time = sample * sample_duration
            curve.add_point(time, value)

            if callback is not None:
                callback(SolverProgress(sample=sample, num_points=num_points, time=time, value=value))

        return curve

    def solve(
        self,
        problem: LinearisedProblem,
        pulse: Optional[SourceFunction] = None,
        callback: Optional[Callable[[SolverProgress], None]] = None,
        stop_event: Optional[threading.Event] = None,
    ) -> HeatingCurve:
        """
        Solve ``problem`` and return the heating curve rescaled to its target maximum.

        Args:
            problem: Problem statement matching this scheme.
            pulse: Optional source callable replacing ``problem.pulse``.
            callback: Called after every output sample.
            stop_event: When set, the run stops before the next output sample.

        Raises:
            ConfigurationError: Invalid settings (before stepping).
            DegenerateRescaleError: The observed maximum is zero.
            SolverCancelledError: ``stop_event`` was set.
        """
        logger.info(f"Solving {problem.type} problem with {self!r}")
        curve = self.integrate(problem, pulse=pulse, callback=callback, stop_event=stop_event)
        curve.rescale_to(self.target_maximum(problem))
        logger.info(f"Finished {problem.type} problem: {len(curve)} points")
        return curve


@dataclass(kw_only=True)
class RobinState(SweepState):
    """Constants of the Robin boundary conditions."""
    front_denominator: float = 0.0
    rear_loss: float = 0.0


class LinearisedScheme(ImplicitScheme):
    """
    Linear heat losses on both faces.

    Front face (Bi1, pulse) and rear face (Bi2) conditions:

        alpha[1] = 2 tau / (2 Bi1 hx tau + 2 tau + hx²)
        beta[1]  = (hx² U[0] + 2 hx tau pulse) / (2 Bi1 hx tau + 2 tau + hx²)
        V[N]     = (hx² U[N] + 2 tau beta[N]) / (2 Bi2 hx tau + hx² - 2 tau (alpha[N] - 1))
    """
    PROBLEM_TYPE = ProblemType.LINEARISED

    def allocate(self, grid: Grid, problem: LinearisedProblem) -> RobinState:
        hx, tau = grid.hx, grid.tau
        hh = hx ** 2

        state = RobinState(grid=grid, a=1.0 / hh, b=1.0 / tau + 2.0 / hh, c=1.0 / hh)
        state.front_denominator = 2.0 * problem.front_biot * hx * tau + 2.0 * tau + hh
        state.rear_loss = 2.0 * problem.rear_biot * hx * tau

        state.alpha[1] = 2.0 * tau / state.front_denominator
        sweep_alpha(state.alpha, state.a, state.b, state.c)
        return state

    def seed_front(self, state: RobinState, pulse: float) -> float:
        hx, tau = state.grid.hx, state.grid.tau
        return (hx ** 2 * state.U[0] + 2.0 * hx * tau * pulse) / state.front_denominator

    def close_rear(self, state: RobinState, pulse: float) -> float:
        n = state.N
        hh, tau = state.grid.hx ** 2, state.grid.tau
        return (hh * state.U[n] + 2.0 * tau * state.beta[n]) / (
            state.rear_loss + hh - 2.0 * tau * (state.alpha[n] - 1.0)
        )
