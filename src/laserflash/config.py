"""
Scheme Configuration
====================
Holds the numerical settings shared by all finite-difference schemes.

Why is this file needed?
------------------------
1. Independence: Every solver invocation receives its settings explicitly.
   There are no process-wide mutable defaults, so concurrent runs cannot
   observe each other's changes.
2. Persistence: The configuration round-trips through plain dictionaries,
   which is what the surrounding application stores with a task.

Exports:
    SchemeConfig: Frozen dataclass with the grid and solver settings.
    DEFAULT_SCHEME_CONFIG: The default instance.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict, fields, replace
from typing import Any, Dict

from laserflash.errors import ConfigurationError


@dataclass(frozen=True)
class SchemeConfig:
    """
    Numerical settings of a finite-difference run.

    Attributes:
        grid_density: Number of spatial intervals N (hx = 1/N).
        time_factor: Ratio tau / hx**2.
        time_limit: Simulated duration in seconds. It is divided by the
            characteristic time of the problem, so for a dimensionless
            problem it is the dimensionless duration.
        time_offset: Fraction of a time step subtracted before evaluating
            the pulse, keeping evaluation points off the step boundaries.
        nonlinear_max_iterations: Cap on the fixed-point iterations per
            time step of the nonlinear scheme.
        resolve_pulse: Refine the time step until the pulse spans more
            than one step.
        max_pulse_refinements: Cap on the refinements above.
        singularity_tolerance: Relative threshold for near-zero closure
            denominators.
    """
    grid_density: int = 30
    time_factor: float = 0.25
    time_limit: float = 1.0
    time_offset: float = 1e-7
    nonlinear_max_iterations: int = 100
    resolve_pulse: bool = True
    max_pulse_refinements: int = 20
    singularity_tolerance: float = 1e-10

    def __post_init__(self) -> None:
        if self.time_limit <= 0:
            raise ConfigurationError(f"Time limit must be positive, got {self.time_limit}.")
        if not 0.0 <= self.time_offset < 1.0:
            raise ConfigurationError(f"Time offset must lie in [0, 1), got {self.time_offset}.")
        if self.nonlinear_max_iterations < 1:
            raise ConfigurationError("At least one fixed-point iteration is required.")
        if self.max_pulse_refinements < 0:
            raise ConfigurationError("Number of pulse refinements cannot be negative.")

    def with_changes(self, **changes: Any) -> SchemeConfig:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> SchemeConfig:
        known = {f.name for f in fields(SchemeConfig)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown scheme settings: {', '.join(sorted(unknown))}")
        return SchemeConfig(**data)


DEFAULT_SCHEME_CONFIG = SchemeConfig()
