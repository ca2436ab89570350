"""
Solver Errors
=============
Exception taxonomy raised by the finite-difference core.

All errors propagate synchronously to the caller. The core never recovers
from them on its own.
"""
from __future__ import annotations


class SolverError(Exception):
    """Base class for all errors raised by the solver core."""


class ConfigurationError(SolverError, ValueError):
    """Invalid grid, scheme or problem settings, detected before stepping."""


class IllPosedCouplingError(SolverError, ArithmeticError):
    """The diathermic closure denominator is (numerically) zero."""

    def __init__(self, denominator: float, eta: float, biot: float) -> None:
        self.denominator = denominator
        self.eta = eta
        self.biot = biot
        super().__init__(
            f"Diathermic closure is singular (denominator {denominator:.3e}) "
            f"for eta = {eta:g}, Bi = {biot:g}."
        )


class DegenerateRescaleError(SolverError, ArithmeticError):
    """The observed maximum of the curve is zero, so it cannot be rescaled."""

    def __init__(self, observed_maximum: float) -> None:
        self.observed_maximum = observed_maximum
        super().__init__(
            f"Cannot rescale heating curve: observed maximum is {observed_maximum!r}."
        )


class NonConvergenceError(SolverError, RuntimeError):
    """The fixed-point loop of the nonlinear scheme hit its iteration cap."""

    def __init__(self, iterations: int, step: int, residual: float) -> None:
        self.iterations = iterations
        self.step = step
        self.residual = residual
        super().__init__(
            f"Fixed-point iteration did not converge after {iterations} iterations "
            f"at time step {step} (squared residual {residual:.3e})."
        )


class SolverCancelledError(SolverError):
    """The caller requested the run to stop between two output samples."""
