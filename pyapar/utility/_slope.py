"""Utility-optimal operating point on a fitted ROC curve.

Expected utility is maximised where the ROC tangent slope equals
``(H / B) · (1 − p) / p``.  The parameter ``t`` with that slope is found by
minimising ``(dy/dx − slope)^2`` with bounded Brent, and the resulting
curve point is snapped to the nearest empirical point, since thresholds
exist only there.
"""

from __future__ import annotations

import math

from scipy.optimize import minimize_scalar

from pyapar._exceptions import OptimizationNonConvergedError
from pyapar.bezier._common import BezierFit
from pyapar.roc._common import ROCResult
from pyapar.roc._roc import closest_point
from pyapar.utility._common import OptimalPoint, UtilityConfig


def slope_error(fit: BezierFit, t: float, target_slope: float) -> float:
    """Squared difference between the curve slope at *t* and *target_slope*.

    A vertical tangent counts as slope ``+inf``.
    """
    dx, dy = fit.derivative(t)[0]
    if dx == 0.0:
        return math.inf
    return float((dy / dx - target_slope) ** 2)


def locate_optimal_point(
    fit: BezierFit,
    roc_result: ROCResult,
    utilities: UtilityConfig,
    prevalence: float | None = None,
    *,
    xtol: float = 1e-6,
    maxiter: int = 100,
) -> OptimalPoint:
    """Find the utility-optimal operating point.

    Parameters
    ----------
    fit : BezierFit
        Rational Bézier fit of the ROC curve.
    roc_result : ROCResult
        The empirical curve the fit was built from.
    utilities : UtilityConfig
        Outcome utilities.
    prevalence : float or None
        Disease prevalence in (0, 1); 0.5 if ``None``.
    xtol, maxiter : float, int
        Tolerance and iteration cap of the scalar minimiser.

    Returns
    -------
    OptimalPoint

    Raises
    ------
    OptimizationNonConvergedError
        If the minimiser does not report success.  Recoverable: fall back
        to a default cutoff.
    """
    target = utilities.slope_of_interest(prevalence)

    res = minimize_scalar(
        lambda t: slope_error(fit, t, target),
        bounds=(0.0, 1.0),
        method="bounded",
        options={"xatol": xtol, "maxiter": maxiter},
    )
    if not res.success:
        raise OptimizationNonConvergedError(
            f"slope search did not converge after {res.nfev} evaluations: "
            f"{res.message}"
        )

    t_opt = float(res.x)
    curve_fpr, curve_tpr = fit.evaluate(t_opt)[0]
    snap = closest_point(roc_result, curve_fpr, curve_tpr)

    return OptimalPoint(
        fpr=snap.fpr,
        tpr=snap.tpr,
        threshold=snap.threshold,
        index=snap.index,
        curve_fpr=float(curve_fpr),
        curve_tpr=float(curve_tpr),
        t=t_opt,
        slope_of_interest=target,
        h_over_b=utilities.h_over_b,
    )
