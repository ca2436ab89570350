from __future__ import annotations

import logging
from dataclasses import dataclass

from laserflash.config import SchemeConfig
from laserflash.errors import ConfigurationError

logger = logging.getLogger(__name__)

MINIMUM_GRID_DENSITY = 2


@dataclass(frozen=True)
class Grid:
    """
    Uniform one-dimensional grid in dimensionless coordinates.

    The sample thickness maps onto [0, 1], so the spatial step is 1/N and
    the time step is ``time_factor * hx**2``.

    Attributes:
        grid_density: Number of spatial intervals N.
        time_factor: Ratio tau / hx**2.
    """
    grid_density: int
    time_factor: float

    def __post_init__(self) -> None:
        if isinstance(self.grid_density, bool) or int(self.grid_density) != self.grid_density:
            raise ConfigurationError(f"Grid density must be an integer, got {self.grid_density!r}.")
        if self.grid_density < MINIMUM_GRID_DENSITY:
            raise ConfigurationError(
                f"Grid density must be at least {MINIMUM_GRID_DENSITY}, got {self.grid_density}."
            )
        if not self.time_factor > 0:
            raise ConfigurationError(f"Time factor must be positive, got {self.time_factor}.")
        object.__setattr__(self, "grid_density", int(self.grid_density))

    @classmethod
    def from_config(cls, config: SchemeConfig) -> Grid:
        return cls(grid_density=config.grid_density, time_factor=config.time_factor)

    @property
    def hx(self) -> float:
        """Spatial step."""
        return 1.0 / self.grid_density

    @property
    def tau(self) -> float:
        """Time step."""
        return self.time_factor * self.hx ** 2

    def grid_time(self, time: float, dimension_factor: float) -> float:
        """
        Snap a physical time onto the time grid.

        Args:
            time: Time in seconds.
            dimension_factor: Characteristic time of the problem in seconds.

        Returns:
            The nearest multiple of tau, in dimensionless units.
        """
        return round((time / dimension_factor) / self.tau) * self.tau

    def refined(self, divisor: float) -> Grid:
        """Return a grid with the same density and a time factor divided by ``divisor``."""
        return Grid(grid_density=self.grid_density, time_factor=self.time_factor / divisor)

    def time_interval(self, time_limit: float, num_points: int, characteristic_time: float) -> int:
        """
        Number of fine time steps between two samples of the output curve.

        Args:
            time_limit: Simulated duration in seconds.
            num_points: Number of samples requested for the output curve.
            characteristic_time: Dimensionless time scale of the problem in seconds.
        """
        if num_points < 2:
            raise ConfigurationError(f"A heating curve needs at least 2 points, got {num_points}.")
        interval = int(round((time_limit / num_points) / (self.tau * characteristic_time))) + 1
        if interval < 1:
            raise ConfigurationError(f"Time interval must be at least one step, got {interval}.")
        return interval

    def __str__(self) -> str:
        return f"Grid(N={self.grid_density}, hx={self.hx:3.2e}, tau={self.tau:3.2e})"
