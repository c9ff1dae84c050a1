"""Rational Bézier approximation of an empirical ROC curve.

Three stages:

1.  Control points are picked by walking the upper envelope of the ROC
    staircase: from each point, jump to the later point reached with the
    steepest slope (farthest point on ties).
2.  Duplicate (fpr, tpr) control points are dropped.
3.  Rational weights are optimised by bounded gradient descent with
    finite-difference gradients and a fixed step length.  The error is the
    mean distance from every empirical point to a sampled version of the
    curve.  The search stops on a wall-clock budget, after a run of
    non-improving iterations, or after ``max_iter``; the best weights seen
    are always returned.
"""

from __future__ import annotations

import time

import numpy as np
import structlog
from numpy.typing import NDArray
from scipy.optimize import approx_fprime
from scipy.spatial.distance import cdist

from pyapar.bezier._common import BezierFit, WeightOptimization
from pyapar.bezier._curve import rational_bezier

logger = structlog.get_logger(__name__)

EPS = 1e-9
WEIGHT_BOUNDS = (0.1, 20.0)
DEFAULT_TIME_BUDGET = 10.0  # seconds


# ---------------------------------------------------------------------------
# Control-point selection
# ---------------------------------------------------------------------------

def _steepest_successors(fpr: NDArray, tpr: NDArray) -> NDArray[np.intp]:
    """For each point, the later point reached with the maximum slope.

    Only later points that move right or up qualify.  Ties go to the last
    qualifying index.  A point with no qualifying successor maps to itself.
    """
    m = fpr.shape[0]
    best = np.arange(m)
    for i in range(m - 1):
        later = np.arange(i + 1, m)
        ok = (fpr[later] > fpr[i]) | (tpr[later] > tpr[i])
        if not np.any(ok):
            continue
        cand = later[ok]
        slope = (tpr[cand] - tpr[i]) / (fpr[cand] - fpr[i] + EPS)
        # argmax on the reversed array picks the last maximum
        best[i] = cand[cand.shape[0] - 1 - int(np.argmax(slope[::-1]))]
    return best


def select_control_points(
    fpr: NDArray[np.floating], tpr: NDArray[np.floating],
) -> NDArray[np.intp]:
    """Indices of the envelope control points, strictly increasing.

    Always starts at 0 and ends at ``len(fpr) - 1``.
    """
    fpr = np.asarray(fpr, dtype=np.float64)
    tpr = np.asarray(tpr, dtype=np.float64)
    m = fpr.shape[0]
    if m == 0:
        raise ValueError("need at least one ROC point")

    successors = _steepest_successors(fpr, tpr)

    walk = [0]
    current = 0
    for _ in range(m):
        nxt = int(successors[current])
        if nxt > current:
            current = nxt
        walk.append(current)
    if walk[-1] != m - 1:
        walk.append(m - 1)

    # The walk repeats its running maximum once it stalls
    return np.array(list(dict.fromkeys(walk)), dtype=np.intp)


def deduplicate_points(
    points: NDArray[np.floating], indices: NDArray[np.intp],
) -> tuple[NDArray[np.floating], NDArray[np.intp]]:
    """Drop exact-duplicate points, keeping the first occurrence."""
    seen: set[tuple[float, float]] = set()
    keep = []
    for k, (x, y) in enumerate(points):
        key = (float(x), float(y))
        if key not in seen:
            seen.add(key)
            keep.append(k)
    return points[keep], indices[keep]


# ---------------------------------------------------------------------------
# Weight optimisation
# ---------------------------------------------------------------------------

def fit_error(
    weights: NDArray[np.floating],
    control_points: NDArray[np.floating],
    empirical: NDArray[np.floating],
    n_samples: int = 100,
) -> float:
    """Mean distance from each empirical point to the nearest sampled curve point."""
    curve = rational_bezier(control_points, weights, np.linspace(0.0, 1.0, n_samples))
    return float(cdist(empirical, curve).min(axis=1).mean())


def optimize_weights(
    control_points: NDArray[np.floating],
    empirical: NDArray[np.floating],
    *,
    time_budget: float = DEFAULT_TIME_BUDGET,
    patience: int = 5,
    n_samples: int = 100,
    step: float = 0.1,
    max_iter: int = 500,
    fd_epsilon: float = 1e-4,
) -> WeightOptimization:
    """Minimise the fit error over the weights, starting from all ones.

    Never raises on non-convergence: the best weights seen are returned
    together with the reason the search stopped.
    """
    lo, hi = WEIGHT_BOUNDS
    n_ctrl = control_points.shape[0]

    def objective(w: NDArray) -> float:
        return fit_error(w, control_points, empirical, n_samples)

    w = np.ones(n_ctrl)
    best_w = w.copy()
    best_err = objective(w)
    history = [best_err]

    # Two points span a segment whatever the weights
    if n_ctrl <= 2:
        return WeightOptimization(
            weights=best_w,
            fit_error=best_err,
            n_iter=0,
            error_history=np.array(history),
            stop_reason="trivial",
        )

    start = time.perf_counter()
    n_iter = 0
    stall = 0
    stop_reason = "max_iter"

    while n_iter < max_iter:
        if time.perf_counter() - start >= time_budget:
            stop_reason = "time_budget"
            break

        grad = approx_fprime(w, objective, fd_epsilon)
        norm = float(np.linalg.norm(grad))
        if norm == 0.0 or not np.isfinite(norm):
            stop_reason = "stationary"
            break

        w = np.clip(w - step * grad / norm, lo, hi)
        err = objective(w)
        n_iter += 1

        if err < best_err:
            best_err = err
            best_w = w.copy()
            stall = 0
        else:
            stall += 1
        history.append(best_err)

        if stall >= patience:
            stop_reason = "patience"
            break

    logger.debug(
        "bezier_weights_optimized",
        n_control=n_ctrl,
        n_iter=n_iter,
        fit_error=best_err,
        stop_reason=stop_reason,
        elapsed=time.perf_counter() - start,
    )

    return WeightOptimization(
        weights=best_w,
        fit_error=best_err,
        n_iter=n_iter,
        error_history=np.array(history),
        stop_reason=stop_reason,
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def fit_bezier(
    fpr: NDArray[np.floating],
    tpr: NDArray[np.floating],
    *,
    time_budget: float = DEFAULT_TIME_BUDGET,
    patience: int = 5,
    n_samples: int = 100,
    step: float = 0.1,
    max_iter: int = 500,
    fd_epsilon: float = 1e-4,
) -> BezierFit:
    """Fit a rational Bézier curve to an empirical ROC curve.

    Parameters
    ----------
    fpr, tpr : array of float
        Empirical ROC curve, ordered from (0,0) to (1,1).
    time_budget : float
        Wall-clock budget for the weight search, in seconds.  Checked once
        per iteration.
    patience : int
        Stop after this many consecutive non-improving iterations.
    n_samples : int
        Curve samples used when measuring the fit error.
    step : float
        Fixed step length along the normalised negative gradient.
    max_iter : int
        Hard cap on optimiser iterations.
    fd_epsilon : float
        Finite-difference step for the gradient.

    Returns
    -------
    BezierFit
        The fitted curve sampled at ``len(fpr)`` uniform parameter values.
    """
    fpr = np.asarray(fpr, dtype=np.float64)
    tpr = np.asarray(tpr, dtype=np.float64)

    if fpr.ndim != 1 or tpr.ndim != 1:
        raise ValueError("fpr and tpr must be 1-D arrays")
    if fpr.shape[0] != tpr.shape[0]:
        raise ValueError(
            f"fpr and tpr must have the same length, "
            f"got {fpr.shape[0]} and {tpr.shape[0]}"
        )
    if not (np.all(np.isfinite(fpr)) and np.all(np.isfinite(tpr))):
        raise ValueError("fpr and tpr must be finite")
    if time_budget < 0:
        raise ValueError(f"time_budget must be >= 0, got {time_budget}")
    if patience < 1:
        raise ValueError(f"patience must be >= 1, got {patience}")
    if n_samples < 2:
        raise ValueError(f"n_samples must be >= 2, got {n_samples}")
    if step <= 0:
        raise ValueError(f"step must be positive, got {step}")

    indices = select_control_points(fpr, tpr)
    control_points = np.column_stack([fpr[indices], tpr[indices]])
    control_points, indices = deduplicate_points(control_points, indices)

    empirical = np.column_stack([fpr, tpr])
    opt = optimize_weights(
        control_points,
        empirical,
        time_budget=time_budget,
        patience=patience,
        n_samples=n_samples,
        step=step,
        max_iter=max_iter,
        fd_epsilon=fd_epsilon,
    )

    points = rational_bezier(
        control_points, opt.weights, np.linspace(0.0, 1.0, fpr.shape[0]),
    )

    return BezierFit(
        control_indices=indices,
        control_points=control_points,
        weights=opt.weights,
        points=points,
        fit_error=opt.fit_error,
        n_iter=opt.n_iter,
        error_history=opt.error_history,
        stop_reason=opt.stop_reason,
    )
