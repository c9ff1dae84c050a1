"""Shared result types for rational Bézier ROC fitting."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pyapar.bezier._curve import rational_bezier, rational_bezier_derivative


@dataclass(frozen=True)
class WeightOptimization:
    """Outcome of the bounded gradient-descent weight search.

    ``error_history`` holds the best error seen after each iteration and
    is therefore non-increasing.
    """

    weights: NDArray[np.floating]
    fit_error: float
    n_iter: int
    error_history: NDArray[np.floating]
    stop_reason: str  # 'patience', 'time_budget', 'max_iter', 'trivial'


@dataclass(frozen=True)
class BezierFit:
    """A rational Bézier curve fitted to an empirical ROC curve.

    Attributes
    ----------
    control_indices : array of int
        Indices into the empirical curve of the surviving control points.
    control_points : array, shape (n+1, 2)
        Control points as (fpr, tpr) pairs.
    weights : array, shape (n+1,)
        Optimised rational weights, each in ``[0.1, 20.0]``.
    points : array, shape (K, 2)
        Curve sampled at K uniform parameter steps over [0, 1], where K
        is the number of empirical points.
    fit_error : float
        Mean distance from the empirical points to the curve.
    n_iter : int
        Optimiser iterations performed.
    error_history : array
        Best error after each iteration (non-increasing).
    stop_reason : str
        Why the optimiser stopped.
    """

    control_indices: NDArray[np.intp]
    control_points: NDArray[np.floating]
    weights: NDArray[np.floating]
    points: NDArray[np.floating]
    fit_error: float
    n_iter: int
    error_history: NDArray[np.floating]
    stop_reason: str

    @property
    def degree(self) -> int:
        return int(self.control_points.shape[0]) - 1

    def evaluate(self, t: NDArray[np.floating]) -> NDArray[np.floating]:
        """Curve points at parameters *t*, shape ``(len(t), 2)``."""
        return rational_bezier(self.control_points, self.weights, t)

    def derivative(self, t: NDArray[np.floating]) -> NDArray[np.floating]:
        """Tangent vectors at parameters *t*, shape ``(len(t), 2)``."""
        return rational_bezier_derivative(self.control_points, self.weights, t)

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            "Rational Bezier ROC Fit",
            "=" * 40,
            f"Control points: {self.control_points.shape[0]}",
            f"Fit error     : {self.fit_error:.6f}",
            f"Iterations    : {self.n_iter}",
            f"Stop reason   : {self.stop_reason}",
            f"Curve points  : {self.points.shape[0]}",
        ]
        return "\n".join(lines)
