"""
Heating Curve
=============
The output curve of a solver run: time samples and the observed signal.

Why is this file needed?
------------------------
1. Sampling: Schemes step on a fine time grid but report only one value per
   macro-time sample. The curve collects those samples in order.
2. Normalisation: After the run the whole curve is rescaled so that its
   maximum equals the requested temperature rise.
3. Post-processing: Interpolation and the half-rise time are what the
   fitting code and the adiabatic estimate consume.
"""
from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Dict, Optional

import numpy as np
from scipy.interpolate import CubicSpline

from laserflash.errors import DegenerateRescaleError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


class HeatingCurve:
    """
    Ordered sequence of (time, value) pairs.

    Times are stored as computed; ``time_shift`` is added when they are
    reported, so shifting the origin never touches the stored samples.
    """

    def __init__(self, num_points: int, name: str = "Solution", time_shift: float = 0.0) -> None:
        """
        Args:
            num_points: Number of samples the curve is expected to hold.
            name: Label used for plots and exports.
            time_shift: Offset added to every reported time.
        """
        self.num_points = num_points
        self.name = name
        self.time_shift = time_shift
        self._times: list[float] = []
        self._values: list[float] = []
        self._max_value: float = 0.0

    def __len__(self) -> int:
        return len(self._times)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r}, points={len(self)}/{self.num_points})"

    @property
    def times(self) -> npt.NDArray[np.float64]:
        """Reported times (with the time shift applied)."""
        return np.asarray(self._times, dtype=np.float64) + self.time_shift

    @property
    def values(self) -> npt.NDArray[np.float64]:
        return np.asarray(self._values, dtype=np.float64)

    @property
    def max_value(self) -> float:
        """Running maximum of the stored values (never below zero)."""
        return self._max_value

    def add_point(self, time: float, value: float) -> None:
        if self._times and time < self._times[-1]:
            raise ValueError(f"Time {time} precedes the last sample {self._times[-1]}.")
        self._times.append(float(time))
        self._values.append(float(value))
        self._max_value = max(self._max_value, float(value))

    def scale(self, factor: float) -> None:
        """Multiply every stored value by ``factor``."""
        self._values = [v * factor for v in self._values]
        self._max_value = max(0.0, max(self._values, default=0.0))

    def rescale_to(self, target: float) -> float:
        """
        Rescale the curve so that its maximum equals ``target``.

        Returns:
            The applied factor.

        Raises:
            DegenerateRescaleError: If the observed maximum is zero or not finite.
        """
        observed = self._max_value
        if observed == 0.0 or not math.isfinite(observed):
            raise DegenerateRescaleError(observed)
        factor = target / observed
        self.scale(factor)
        logger.debug(f"Heating curve '{self.name}' rescaled by {factor:.6e}")
        return factor

    def interpolation(self) -> CubicSpline:
        """Cubic spline through the reported samples."""
        if len(self) < 2:
            raise ValueError("At least two points are required for interpolation.")
        return CubicSpline(self.times, self.values)

    def half_rise_time(self) -> float:
        """
        First reported time at which the curve reaches half of its maximum.

        Linear interpolation is used between the two bracketing samples.
        """
        values = self.values
        if values.size == 0 or self._max_value <= 0.0:
            raise DegenerateRescaleError(self._max_value)
        half = 0.5 * self._max_value
        index = int(np.argmax(values >= half))
        times = self.times
        if index == 0:
            return float(times[0])
        t0, t1 = times[index - 1], times[index]
        v0, v1 = values[index - 1], values[index]
        return float(t0 + (half - v0) * (t1 - t0) / (v1 - v0))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "num_points": self.num_points,
            "time_shift": self.time_shift,
            "times": list(self._times),
            "values": list(self._values),
        }

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> HeatingCurve:
        curve = HeatingCurve(
            num_points=data.get("num_points", len(data.get("times", []))),
            name=data.get("name", "Solution"),
            time_shift=data.get("time_shift", 0.0),
        )
        for t, v in zip(data.get("times", []), data.get("values", [])):
            curve.add_point(t, v)
        return curve

    def plot(self, reference: Optional[HeatingCurve] = None) -> None:
        """Plot the curve (and optionally a reference curve)."""
        import matplotlib.pyplot as plt

        if len(self) == 0:
            print("No samples available to plot.")
            return

        plt.rcParams["figure.constrained_layout.use"] = True
        plt.figure(figsize=(7, 5))
        plt.plot(self.times, self.values, 'r', lw=2, label=self.name)
        if reference is not None:
            plt.plot(reference.times, reference.values, 'k--', lw=1, label=reference.name)

        plt.grid(visible=True, which='major', axis='both', linestyle='-', color='gray', lw=0.5)
        plt.minorticks_on()
        plt.grid(visible=True, which='minor', axis='both', linestyle=':', color='gray', lw=0.5)

        plt.title(f"Heating curve: {self.name}")
        plt.xlabel("Time (s)")
        plt.ylabel("Temperature rise (K)")
        plt.legend()
        plt.show()
