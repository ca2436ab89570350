"""
Absorption Models
=================
Volumetric absorption coefficients of a semi-transparent sample.

The translucent scheme only needs a callable ``(band, depth) -> coefficient``;
these classes are the stock implementations. Depth is dimensionless
(0 at the irradiated face, 1 at the rear face) and absorptivities are
dimensionless too (physical coefficient times sample thickness).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from enum import StrEnum
import math
from typing import Any, Dict

from laserflash.errors import ConfigurationError


class SpectralRange(StrEnum):
    LASER = "Laser Absorption"
    THERMAL = "Thermal Radiation Absorption"


class AbsorptionModel(ABC):
    """
    Abstract base class for absorption models.

    Attributes:
        laser_absorptivity: Dimensionless absorptivity in the laser band.
        thermal_absorptivity: Dimensionless absorptivity in the band seen by the detector.
    """
    NAME: str = "Absorption Model"

    def __init__(self, laser_absorptivity: float = 1000.0, thermal_absorptivity: float = 10.0) -> None:
        self._absorptivity: Dict[SpectralRange, float] = {}
        self.set_absorptivity(SpectralRange.LASER, laser_absorptivity)
        self.set_absorptivity(SpectralRange.THERMAL, thermal_absorptivity)

    def absorptivity(self, band: SpectralRange) -> float:
        return self._absorptivity[band]

    def set_absorptivity(self, band: SpectralRange, value: float) -> None:
        if not value > 0:
            raise ConfigurationError(f"{band} absorptivity must be positive, got {value}.")
        self._absorptivity[band] = float(value)

    @property
    def laser_absorptivity(self) -> float:
        return self._absorptivity[SpectralRange.LASER]

    @property
    def thermal_absorptivity(self) -> float:
        return self._absorptivity[SpectralRange.THERMAL]

    @abstractmethod
    def absorption(self, band: SpectralRange, depth: float) -> float:
        """
        Get the volumetric absorption coefficient.

        Args:
            band: Spectral band.
            depth: Dimensionless depth measured from the irradiated face.

        Returns:
            Absorbed fraction per unit dimensionless depth.
        """
        pass

    def __call__(self, band: SpectralRange, depth: float) -> float:
        return self.absorption(band, depth)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "model": self.NAME,
            "laser_absorptivity": self.laser_absorptivity,
            "thermal_absorptivity": self.thermal_absorptivity,
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> AbsorptionModel:
        model = data.get("model", BeerLambertAbsorption.NAME)
        laser = data.get("laser_absorptivity", 1000.0)
        thermal = data.get("thermal_absorptivity", 10.0)
        if model == InsulatorAbsorption.NAME:
            return InsulatorAbsorption(laser, thermal, reflectance=data.get("reflectance", 0.5))
        if model == BeerLambertAbsorption.NAME:
            return BeerLambertAbsorption(laser, thermal)
        raise ConfigurationError(f"Unknown absorption model: {model}")

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(laser={self.laser_absorptivity:g}, "
                f"thermal={self.thermal_absorptivity:g})")


class BeerLambertAbsorption(AbsorptionModel):
    """Exponential attenuation, ``a * exp(-a * x)``."""
    NAME = "Beer-Lambert"

    def absorption(self, band: SpectralRange, depth: float) -> float:
        a = self._absorptivity[band]
        return a * math.exp(-a * depth)


class InsulatorAbsorption(AbsorptionModel):
    """
    Beer-Lambert attenuation with a partially reflecting rear face.

    Attributes:
        reflectance: Reflectance R of the rear face, 0 <= R < 1.
    """
    NAME = "Insulator"

    def __init__(
        self,
        laser_absorptivity: float = 1000.0,
        thermal_absorptivity: float = 10.0,
        reflectance: float = 0.5,
    ) -> None:
        super().__init__(laser_absorptivity, thermal_absorptivity)
        if not 0.0 <= reflectance < 1.0:
            raise ConfigurationError(f"Reflectance must lie in [0, 1), got {reflectance}.")
        self.reflectance = reflectance

    def absorption(self, band: SpectralRange, depth: float) -> float:
        a = self._absorptivity[band]
        r = self.reflectance
        return a * (math.exp(-a * depth) - r * math.exp(-a * (2.0 - depth))) / (1.0 - r * r * math.exp(-2.0 * a))

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["reflectance"] = self.reflectance
        return d
