"""
laserflash
==========
Finite-difference solver for the one-dimensional heat problem of the
laser-flash method.

The package contains no GUI and performs no file I/O. A caller builds a
problem statement (see :mod:`laserflash.problem`), picks a
:class:`~laserflash.config.SchemeConfig` and calls :func:`solve`.
"""
from laserflash.config import DEFAULT_SCHEME_CONFIG, SchemeConfig
from laserflash.curve import HeatingCurve
from laserflash.schemes.solver import scheme_for, solve

__all__ = [
    "DEFAULT_SCHEME_CONFIG",
    "HeatingCurve",
    "SchemeConfig",
    "scheme_for",
    "solve",
]
