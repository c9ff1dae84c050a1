"""Rational Bézier curve evaluation.

A rational Bézier curve of degree ``n`` with control points ``P_j`` and
positive weights ``w_j`` is

    R(t) = Σ w_j B_j(t) P_j / Σ w_j B_j(t),   t ∈ [0, 1]

with Bernstein basis ``B_j(t) = C(n, j) t^j (1 − t)^(n−j)``.  Derivatives
use the hodograph ``n (P_{j+1} − P_j)`` of the homogeneous control points
``(w_j P_j, w_j)``, which reduces to the ordinary Bézier hodograph when all
weights are one.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.special import comb


def bernstein_basis(n: int, t: NDArray[np.floating]) -> NDArray[np.floating]:
    """Bernstein basis of degree *n* at parameters *t*, shape ``(len(t), n+1)``."""
    t = np.atleast_1d(np.asarray(t, dtype=np.float64))[:, None]
    j = np.arange(n + 1)
    return comb(n, j) * t ** j * (1.0 - t) ** (n - j)


def hodograph(points: NDArray[np.floating]) -> NDArray[np.floating]:
    """Control points of the derivative curve: ``n · (P_{i+1} − P_i)``."""
    points = np.asarray(points, dtype=np.float64)
    n = points.shape[0] - 1
    return n * np.diff(points, axis=0)


def rational_bezier(
    control_points: NDArray[np.floating],
    weights: NDArray[np.floating],
    t: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Evaluate the rational Bézier curve at *t*; returns shape ``(len(t), 2)``."""
    control_points = np.asarray(control_points, dtype=np.float64)
    weights = np.asarray(weights, dtype=np.float64)
    n = control_points.shape[0] - 1

    wb = bernstein_basis(n, t) * weights
    return (wb @ control_points) / wb.sum(axis=1)[:, None]


def rational_bezier_derivative(
    control_points: NDArray[np.floating],
    weights: NDArray[np.floating],
    t: NDArray[np.floating],
) -> NDArray[np.floating]:
    """Tangent vector ``R'(t)`` of the rational Bézier curve, shape ``(len(t), 2)``.

    With homogeneous numerator ``A(t) = Σ w_j B_j P_j`` and denominator
    ``W(t) = Σ w_j B_j``, ``R' = (A' − R W') / W``.
    """
    control_points = np.asarray(control_points, dtype=np.float64)
    weights = np.asarray(weights, dtype=np.float64)
    t = np.atleast_1d(np.asarray(t, dtype=np.float64))
    n = control_points.shape[0] - 1

    if n == 0:
        return np.zeros((t.shape[0], 2))

    homogeneous = control_points * weights[:, None]
    basis = bernstein_basis(n, t)
    basis_d = bernstein_basis(n - 1, t)

    a = basis @ homogeneous
    w = basis @ weights
    a_d = basis_d @ hodograph(homogeneous)
    w_d = basis_d @ hodograph(weights[:, None])

    r = a / w[:, None]
    return (a_d - r * w_d) / w[:, None]
