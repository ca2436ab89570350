"""
Laser Pulse
===========
Temporal shapes of the heating pulse and their discrete, grid-aware form.

Why is this file needed?
------------------------
1. Shapes: The physical pulse is described by a shape on reduced time
   (0 at the start, 1 at the end of the pulse) and a width in seconds.
2. Discretisation: The schemes need the heat-flux intensity at arbitrary
   dimensionless times. DiscretePulse snaps the width onto the time grid
   and normalises the shape to unit energy.

Classes:
    PulseTemporalShape: Abstract base of the shapes.
    Pulse: Shape + width.
    DiscretePulse: Source evaluator consumed by the schemes.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import StrEnum
import logging
import math
from typing import Any, Dict

from scipy.integrate import quad

from laserflash.errors import ConfigurationError
from laserflash.schemes.grid import Grid

logger = logging.getLogger(__name__)

# tau must stay below this fraction of the discrete pulse width
PULSE_RESOLUTION_FACTOR = 1.05
REFINEMENT_DIVISOR = 1.5


class PulseShape(StrEnum):
    RECTANGULAR = "Rectangular"
    TRAPEZOIDAL = "Trapezoidal"
    TRIANGULAR = "Triangular"
    GAUSSIAN = "Gaussian"


# ==========================================
# ABSTRACT CLASS FOR PULSE SHAPES
# ==========================================
class PulseTemporalShape(ABC):
    """
    Abstract base class for pulse temporal shapes.

    Shapes are evaluated on reduced time ``r = t / width`` and vanish
    outside [0, 1). They need not be normalised.
    """
    NAME: PulseShape

    @abstractmethod
    def evaluate(self, reduced_time: float) -> float:
        """
        Get the relative pulse intensity.

        Args:
            reduced_time: Time divided by the pulse width.

        Returns:
            Non-negative relative intensity.
        """
        pass

    def breakpoints(self) -> tuple[float, ...]:
        """Reduced times where the shape has a kink or a jump."""
        return ()

    def to_dict(self) -> Dict[str, Any]:
        return {"shape": self.NAME.value}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> PulseTemporalShape:
        shape = PulseShape(data.get("shape", PulseShape.RECTANGULAR))
        if shape == PulseShape.TRAPEZOIDAL:
            return TrapezoidalPulse(rise=data.get("rise", 0.3), fall=data.get("fall", 0.3))
        return SHAPES[shape]()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class RectangularPulse(PulseTemporalShape):
    """Constant intensity over the whole pulse width."""
    NAME = PulseShape.RECTANGULAR

    def evaluate(self, reduced_time: float) -> float:
        return 1.0 if 0.0 <= reduced_time < 1.0 else 0.0


class TrapezoidalPulse(PulseTemporalShape):
    """
    Linear rise, plateau and linear fall.

    Attributes:
        rise: Fraction of the width taken by the rising edge.
        fall: Fraction of the width taken by the falling edge.
    """
    NAME = PulseShape.TRAPEZOIDAL

    def __init__(self, rise: float = 0.3, fall: float = 0.3) -> None:
        if rise < 0 or fall < 0 or rise + fall > 1.0:
            raise ConfigurationError(f"Invalid trapezoid edges: rise={rise}, fall={fall}.")
        self.rise = rise
        self.fall = fall

    def evaluate(self, reduced_time: float) -> float:
        if reduced_time < 0.0 or reduced_time >= 1.0:
            return 0.0
        if reduced_time < self.rise:
            return reduced_time / self.rise
        if reduced_time < 1.0 - self.fall:
            return 1.0
        return (1.0 - reduced_time) / self.fall

    def breakpoints(self) -> tuple[float, ...]:
        return (self.rise, 1.0 - self.fall)

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["rise"] = self.rise
        d["fall"] = self.fall
        return d

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rise={self.rise}, fall={self.fall})"


class TriangularPulse(PulseTemporalShape):
    """Symmetric triangle peaking in the middle of the pulse."""
    NAME = PulseShape.TRIANGULAR

    def evaluate(self, reduced_time: float) -> float:
        if reduced_time < 0.0 or reduced_time >= 1.0:
            return 0.0
        return 1.0 - abs(2.0 * reduced_time - 1.0)

    def breakpoints(self) -> tuple[float, ...]:
        return (0.5,)


class GaussianPulse(PulseTemporalShape):
    """Gaussian centred on the middle of the pulse, truncated to [0, 1)."""
    NAME = PulseShape.GAUSSIAN

    def evaluate(self, reduced_time: float) -> float:
        if reduced_time < 0.0 or reduced_time >= 1.0:
            return 0.0
        return math.exp(-25.0 * (reduced_time - 0.5) ** 2)


SHAPES: Dict[PulseShape, type[PulseTemporalShape]] = {
    PulseShape.RECTANGULAR: RectangularPulse,
    PulseShape.TRAPEZOIDAL: TrapezoidalPulse,
    PulseShape.TRIANGULAR: TriangularPulse,
    PulseShape.GAUSSIAN: GaussianPulse,
}


@dataclass
class Pulse:
    """
    Physical laser pulse.

    Attributes:
        width: Pulse duration in seconds (dimensionless if the problem is).
        shape: Temporal shape.
    """
    width: float = 0.005
    shape: PulseTemporalShape = field(default_factory=RectangularPulse)

    def __post_init__(self) -> None:
        if not self.width > 0:
            raise ConfigurationError(f"Pulse width must be positive, got {self.width}.")

    def to_dict(self) -> Dict[str, Any]:
        return {"width": self.width, "shape": self.shape.to_dict()}

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Pulse:
        return Pulse(
            width=data.get("width", 0.005),
            shape=PulseTemporalShape.from_dict(data.get("shape", {})),
        )


class DiscretePulse:
    """
    Source evaluator: heat-flux intensity injected at the front face.

    The pulse width is snapped onto the time grid and the shape is scaled
    so that the intensity integrates to one over the discrete width.
    """

    def __init__(self, pulse: Pulse, grid: Grid, characteristic_time: float = 1.0) -> None:
        self.pulse = pulse
        self.grid = grid
        self.width = grid.grid_time(pulse.width, characteristic_time)
        if self.width <= 0.0:
            raise ConfigurationError(
                f"Pulse width {pulse.width} collapses to zero on {grid}; "
                f"refine the time step or enable pulse resolution."
            )
        self._inv_energy = 1.0 / self.total_energy()

    def total_energy(self) -> float:
        """Integral of the un-normalised shape over the discrete width."""
        shape = self.pulse.shape
        points = [p * self.width for p in shape.breakpoints() if 0.0 < p < 1.0]
        energy, _ = quad(
            lambda t: shape.evaluate(t / self.width),
            0.0,
            self.width,
            points=points or None,
            limit=200,
        )
        if not energy > 0.0:
            raise ConfigurationError(f"Pulse shape {shape!r} carries no energy.")
        return energy

    def evaluate_at(self, time: float) -> float:
        """Normalised intensity at dimensionless ``time``."""
        return self._inv_energy * self.pulse.shape.evaluate(time / self.width)

    def __call__(self, time: float) -> float:
        return self.evaluate_at(time)


def resolve_pulse_grid(
    pulse: Pulse,
    grid: Grid,
    characteristic_time: float,
    max_refinements: int,
) -> Grid:
    """
    Refine the time step until the pulse spans more than one step.

    The time factor is divided by 1.5 while ``1.05 * tau`` exceeds the
    discrete pulse width.

    Returns:
        The original grid if it already resolves the pulse, else a refined copy.

    Raises:
        ConfigurationError: If ``max_refinements`` refinements are not enough.
    """
    resolved = grid
    for _ in range(max_refinements + 1):
        width = resolved.grid_time(pulse.width, characteristic_time)
        if PULSE_RESOLUTION_FACTOR * resolved.tau <= width:
            if resolved is not grid:
                logger.warning(
                    f"Time factor reduced from {grid.time_factor:.4g} to {resolved.time_factor:.4g} "
                    f"to resolve a pulse of width {pulse.width:g}"
                )
            return resolved
        resolved = resolved.refined(REFINEMENT_DIVISOR)
    raise ConfigurationError(
        f"Pulse of width {pulse.width:g} cannot be resolved within {max_refinements} refinements of {grid}."
    )
