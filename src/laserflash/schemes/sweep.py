# sweep.py
"""
Tridiagonal sweep kernels.

Implicit discretisation of the 1-D diffusion operator gives, for the
interior nodes,

    a*V[i-1] - b*V[i] + c*V[i+1] = F[i],   i = 1..N-1

which is solved by the forward elimination (alpha, beta) and the backward
substitution below. Boundary-specific seeds (alpha[1], beta[1]) and the
closure for V[N] are supplied by the schemes.
"""
from __future__ import annotations

import numpy as np
import numpy.typing as npt
import numba as nb


# ---- JIT'd sweep kernels (shared by all schemes) ----

@nb.njit(cache=True)
def sweep_alpha(alpha: npt.NDArray[np.float64], a: float, b: float, c: float) -> None:
    """Fill alpha[2..N] from the seed alpha[1]. ``alpha`` has length N + 1."""
    n = alpha.shape[0] - 1
    for i in range(1, n):
        alpha[i + 1] = c / (b - a * alpha[i])


@nb.njit(cache=True)
def sweep_beta(
    alpha: npt.NDArray[np.float64],
    beta: npt.NDArray[np.float64],
    F: npt.NDArray[np.float64],
    a: float,
    b: float,
) -> None:
    """Fill beta[2..N] from the seed beta[1] and the right-hand side F[1..N-1]."""
    n = beta.shape[0] - 1
    for i in range(1, n):
        beta[i + 1] = (F[i] - a * beta[i]) / (a * alpha[i] - b)


@nb.njit(cache=True)
def back_substitute(
    alpha: npt.NDArray[np.float64],
    beta: npt.NDArray[np.float64],
    V: npt.NDArray[np.float64],
) -> None:
    """Compute V[N-1..0] from V[N]."""
    n = V.shape[0] - 1
    for j in range(n - 1, -1, -1):
        V[j] = alpha[j + 1] * V[j + 1] + beta[j + 1]


@nb.njit(cache=True)
def implicit_rhs(U: npt.NDArray[np.float64], tau: float, F: npt.NDArray[np.float64]) -> None:
    """Right-hand side of the plain diffusion step, F[i] = -U[i]/tau."""
    for i in range(U.shape[0]):
        F[i] = -U[i] / tau


# ---- Coupled (two-sided) sweep for the diathermic closure ----

@nb.njit(cache=True)
def coupled_alpha_gamma(
    alpha: npt.NDArray[np.float64],
    gamma: npt.NDArray[np.float64],
    b: float,
) -> None:
    """
    Fill alpha[2..N] and gamma[2..N] of the normalised (a = c = 1) system.

    gamma carries the dependence of each node on the rear-face unknown V[N].
    """
    n = alpha.shape[0] - 1
    for i in range(1, n):
        denominator = b - alpha[i]
        alpha[i + 1] = 1.0 / denominator
        gamma[i + 1] = gamma[i] / denominator


@nb.njit(cache=True)
def coupled_homogeneous(
    alpha: npt.NDArray[np.float64],
    gamma: npt.NDArray[np.float64],
    q: npt.NDArray[np.float64],
) -> None:
    """Homogeneous component q (coefficient of V[N]); ``q`` has length N."""
    n = alpha.shape[0] - 1
    q[n - 1] = alpha[n] + gamma[n]
    for i in range(n - 2, -1, -1):
        q[i] = alpha[i + 1] * q[i + 1] + gamma[i + 1]


@nb.njit(cache=True)
def coupled_step(
    U: npt.NDArray[np.float64],
    V: npt.NDArray[np.float64],
    alpha: npt.NDArray[np.float64],
    beta: npt.NDArray[np.float64],
    p: npt.NDArray[np.float64],
    q: npt.NDArray[np.float64],
    b: float,
    hx2_tau: float,
    f_n1: float,
    z_n1: float,
    denominator: float,
) -> None:
    """
    One time step of the coupled sweep.

    The seed beta[1] must be set by the caller. Computes the particular
    component p, closes the 2x2 system for V[N] and assembles
    V[i] = p[i] + V[N]*q[i].
    """
    n = U.shape[0] - 1
    for i in range(1, n):
        beta[i + 1] = (beta[i] + U[i] * hx2_tau) / (b - alpha[i])

    p[n - 1] = beta[n]
    for i in range(n - 2, -1, -1):
        p[i] = alpha[i + 1] * p[i + 1] + beta[i + 1]

    V[n] = (f_n1 * U[n] - z_n1 * p[0] + p[n - 1]) / denominator

    for i in range(n - 1, -1, -1):
        V[i] = p[i] + V[n] * q[i]
