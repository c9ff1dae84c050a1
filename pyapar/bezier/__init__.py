"""
Rational Bézier smoothing of empirical ROC curves.

Envelope control-point selection, duplicate removal, bounded
gradient-descent weight optimisation with early termination, and curve /
tangent evaluation.
"""

from pyapar.bezier._common import BezierFit, WeightOptimization
from pyapar.bezier._curve import (
    bernstein_basis,
    hodograph,
    rational_bezier,
    rational_bezier_derivative,
)
from pyapar.bezier._fit import (
    WEIGHT_BOUNDS,
    deduplicate_points,
    fit_bezier,
    fit_error,
    optimize_weights,
    select_control_points,
)

__all__ = [
    "BezierFit",
    "WeightOptimization",
    "WEIGHT_BOUNDS",
    "bernstein_basis",
    "hodograph",
    "rational_bezier",
    "rational_bezier_derivative",
    "select_control_points",
    "deduplicate_points",
    "fit_error",
    "optimize_weights",
    "fit_bezier",
]
