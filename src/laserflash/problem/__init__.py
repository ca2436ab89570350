"""
Problem statements, pulse and absorption models of the laser-flash experiment.
"""
from laserflash.problem.absorption import (
    AbsorptionModel,
    BeerLambertAbsorption,
    InsulatorAbsorption,
    SpectralRange,
)
from laserflash.problem.pulse import (
    DiscretePulse,
    GaussianPulse,
    Pulse,
    PulseShape,
    RectangularPulse,
    TrapezoidalPulse,
    TriangularPulse,
)
from laserflash.problem.statements import (
    DiathermicProblem,
    LinearisedProblem,
    NonlinearProblem,
    Problem,
    ProblemType,
    TranslucentProblem,
)

__all__ = [
    "AbsorptionModel",
    "BeerLambertAbsorption",
    "DiathermicProblem",
    "DiscretePulse",
    "GaussianPulse",
    "InsulatorAbsorption",
    "LinearisedProblem",
    "NonlinearProblem",
    "Problem",
    "ProblemType",
    "Pulse",
    "PulseShape",
    "RectangularPulse",
    "SpectralRange",
    "TranslucentProblem",
    "TrapezoidalPulse",
    "TriangularPulse",
]
