"""
Solver Entry Point
==================
Selects the scheme matching a problem statement and runs it.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable, Dict, Optional

from laserflash.config import DEFAULT_SCHEME_CONFIG, SchemeConfig
from laserflash.curve import HeatingCurve
from laserflash.errors import ConfigurationError
from laserflash.problem.statements import LinearisedProblem, ProblemType
from laserflash.schemes.diathermic import DiathermicScheme
from laserflash.schemes.implicit import ImplicitScheme, LinearisedScheme, SolverProgress, SourceFunction
from laserflash.schemes.nonlinear import NonlinearScheme
from laserflash.schemes.translucent import TranslucentScheme

logger = logging.getLogger(__name__)

SCHEMES: Dict[ProblemType, type[ImplicitScheme]] = {
    ProblemType.LINEARISED: LinearisedScheme,
    ProblemType.DIATHERMIC: DiathermicScheme,
    ProblemType.TRANSLUCENT: TranslucentScheme,
    ProblemType.NONLINEAR: NonlinearScheme,
}


def scheme_for(problem: LinearisedProblem, config: SchemeConfig = DEFAULT_SCHEME_CONFIG) -> ImplicitScheme:
    """Instantiate the scheme that solves ``problem``."""
    try:
        scheme_class = SCHEMES[problem.type]
    except KeyError:
        raise ConfigurationError(f"No scheme registered for {problem.type} problems.") from None
    return scheme_class(config)


def solve(
    problem: LinearisedProblem,
    config: SchemeConfig = DEFAULT_SCHEME_CONFIG,
    pulse: Optional[SourceFunction] = None,
    callback: Optional[Callable[[SolverProgress], None]] = None,
    stop_event: Optional[threading.Event] = None,
) -> HeatingCurve:
    """
    Solve ``problem`` with the matching fully implicit scheme.

    Args:
        problem: Problem statement; its type selects the scheme.
        config: Numerical settings.
        pulse: Optional source callable ``time -> intensity`` (dimensionless
            time) used instead of ``problem.pulse``.
        callback: Receives a :class:`SolverProgress` after every output sample.
        stop_event: Cancels the run between output samples when set.

    Returns:
        The heating curve rescaled so that its maximum equals the problem's
        maximum temperature.
    """
    return scheme_for(problem, config).solve(problem, pulse=pulse, callback=callback, stop_event=stop_event)
