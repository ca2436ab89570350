"""
Problem Statements
==================
Parameter bundles describing the physical model of a laser-flash run.

Why is this file needed?
------------------------
1. Dispatch: The problem type decides which finite-difference scheme runs.
2. Validation: Physically meaningless parameters are rejected before any
   array is allocated.
3. Persistence: Bundles round-trip through plain dictionaries.

Classes:
    LinearisedProblem: Robin heat losses on both faces.
    DiathermicProblem: Front and rear faces coupled through eta.
    TranslucentProblem: Volumetric absorption of the pulse.
    NonlinearProblem: Radiative (quartic) heat losses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Callable, Dict, Optional

from laserflash.errors import ConfigurationError
from laserflash.problem.absorption import AbsorptionModel, BeerLambertAbsorption, SpectralRange
from laserflash.problem.pulse import Pulse

AbsorptionFunction = Callable[[SpectralRange, float], float]


class ProblemType(StrEnum):
    LINEARISED = "Linearised"
    DIATHERMIC = "Diathermic"
    TRANSLUCENT = "Translucent"
    NONLINEAR = "Nonlinear"


@dataclass(kw_only=True)
class LinearisedProblem:
    """
    One-dimensional heat problem with linear (Robin) losses on both faces.

    Attributes:
        front_biot: Biot number of the irradiated face.
        rear_biot: Biot number of the rear face.
        maximum_temperature: Target maximum of the output curve (K).
        thickness: Sample thickness (m).
        diffusivity: Thermal diffusivity (m²/s).
        pulse: Laser pulse.
        num_points: Number of samples of the output curve.
    """
    front_biot: float = 0.0
    rear_biot: float = 0.0
    maximum_temperature: float = 1.0
    thickness: float = 1.0
    diffusivity: float = 1.0
    pulse: Pulse = field(default_factory=Pulse)
    num_points: int = 100

    def __post_init__(self) -> None:
        if self.front_biot < 0 or self.rear_biot < 0:
            raise ConfigurationError(
                f"Biot numbers cannot be negative (front={self.front_biot}, rear={self.rear_biot})."
            )
        if not self.maximum_temperature > 0:
            raise ConfigurationError(
                f"Maximum temperature must be positive, got {self.maximum_temperature}."
            )
        if self.thickness <= 0:
            raise ConfigurationError(f"Thickness must be positive, got {self.thickness}.")
        if self.diffusivity <= 0:
            raise ConfigurationError(f"Diffusivity must be positive, got {self.diffusivity}.")
        if self.num_points < 2:
            raise ConfigurationError(f"At least 2 curve points are required, got {self.num_points}.")

    @property
    def type(self) -> ProblemType:
        return ProblemType.LINEARISED

    @property
    def characteristic_time(self) -> float:
        """Time scale l²/a (s) used to make time dimensionless."""
        return self.thickness ** 2 / self.diffusivity

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type.value,
            "front_biot": self.front_biot,
            "rear_biot": self.rear_biot,
            "maximum_temperature": self.maximum_temperature,
            "thickness": self.thickness,
            "diffusivity": self.diffusivity,
            "pulse": self.pulse.to_dict(),
            "num_points": self.num_points,
        }

    @staticmethod
    def _common_kwargs(data: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "front_biot": data.get("front_biot", 0.0),
            "rear_biot": data.get("rear_biot", 0.0),
            "maximum_temperature": data.get("maximum_temperature", 1.0),
            "thickness": data.get("thickness", 1.0),
            "diffusivity": data.get("diffusivity", 1.0),
            "pulse": Pulse.from_dict(data.get("pulse", {})),
            "num_points": data.get("num_points", 100),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> Problem:
        """Factory method to deserialize into the correct problem class."""
        problem_type = ProblemType(data.get("type", ProblemType.LINEARISED))
        kwargs = LinearisedProblem._common_kwargs(data)
        if problem_type == ProblemType.LINEARISED:
            return LinearisedProblem(**kwargs)
        elif problem_type == ProblemType.DIATHERMIC:
            kwargs["rear_biot"] = data.get("rear_biot")
            return DiathermicProblem(diathermic_coefficient=data.get("diathermic_coefficient", 0.1), **kwargs)
        elif problem_type == ProblemType.TRANSLUCENT:
            return TranslucentProblem(absorption=AbsorptionModel.from_dict(data.get("absorption", {})), **kwargs)
        elif problem_type == ProblemType.NONLINEAR:
            return NonlinearProblem(
                test_temperature=data.get("test_temperature", 300.0),
                maximum_heating=data.get("maximum_heating", 1.0),
                nonlinear_precision=data.get("nonlinear_precision", 1e-3),
                **kwargs,
            )
        else:
            raise ConfigurationError(f"Unknown problem type: {problem_type}")


@dataclass(kw_only=True)
class DiathermicProblem(LinearisedProblem):
    """
    Sample whose faces exchange heat directly (diathermic medium).

    Heat losses are symmetric, so both faces share one Biot number.

    Attributes:
        rear_biot: Defaults to ``front_biot``; any other value is rejected.
        diathermic_coefficient: Coupling coefficient eta, 0 <= eta <= 1.
    """
    rear_biot: Optional[float] = None
    diathermic_coefficient: float = 0.1

    def __post_init__(self) -> None:
        if self.rear_biot is None:
            self.rear_biot = self.front_biot
        elif self.rear_biot != self.front_biot:
            raise ConfigurationError(
                f"Diathermic problem needs equal Biot numbers on both faces "
                f"(front={self.front_biot}, rear={self.rear_biot})."
            )
        super().__post_init__()
        if not 0.0 <= self.diathermic_coefficient <= 1.0:
            raise ConfigurationError(
                f"Diathermic coefficient must lie in [0, 1], got {self.diathermic_coefficient}."
            )

    @property
    def type(self) -> ProblemType:
        return ProblemType.DIATHERMIC

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["diathermic_coefficient"] = self.diathermic_coefficient
        return d


@dataclass(kw_only=True)
class TranslucentProblem(LinearisedProblem):
    """
    Semi-transparent sample: the pulse is absorbed in the volume and the
    detector sees a depth-weighted average of the temperature.

    Attributes:
        absorption: Callable ``(band, depth) -> coefficient``.
    """
    absorption: AbsorptionFunction = field(default_factory=BeerLambertAbsorption)

    @property
    def type(self) -> ProblemType:
        return ProblemType.TRANSLUCENT

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        if isinstance(self.absorption, AbsorptionModel):
            d["absorption"] = self.absorption.to_dict()
        return d


@dataclass(kw_only=True)
class NonlinearProblem(LinearisedProblem):
    """
    Heat losses include the radiative term ``(theta*dT/T + 1)**4 - 1``.

    Attributes:
        test_temperature: Sample temperature T before the pulse (K).
        maximum_heating: Adiabatic temperature rise dT (K).
        nonlinear_precision: Tolerance of the fixed-point loop.
    """
    test_temperature: float = 300.0
    maximum_heating: float = 1.0
    nonlinear_precision: float = 1e-3

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.test_temperature <= 0:
            raise ConfigurationError(f"Test temperature must be positive (K), got {self.test_temperature}.")
        if self.maximum_heating <= 0:
            raise ConfigurationError(f"Maximum heating must be positive, got {self.maximum_heating}.")
        if self.nonlinear_precision <= 0:
            raise ConfigurationError(f"Nonlinear precision must be positive, got {self.nonlinear_precision}.")

    @property
    def type(self) -> ProblemType:
        return ProblemType.NONLINEAR

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d.update({
            "test_temperature": self.test_temperature,
            "maximum_heating": self.maximum_heating,
            "nonlinear_precision": self.nonlinear_precision,
        })
        return d


Problem = LinearisedProblem
