"""Expected utility of treat-all, treat-none and test strategies.

For a prior (pre-test) probability of disease ``p``:

    treat_all(p)  = p·uTP + (1 − p)·uFP
    treat_none(p) = p·uFN + (1 − p)·uTN
    test(p)       = p·Se·uTP + p·(1 − Se)·uFN
                    + (1 − p)·(1 − Sp)·uFP + (1 − p)·Sp·uTN − cost

Testing is preferred between the break-even priors pL (test vs. treat
none) and pU (test vs. treat all).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.optimize import brentq

from pyapar.utility._common import UtilityConfig


def _check_rate(name: str, value: float) -> None:
    if not (0.0 <= value <= 1.0):
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def treat_all(p: ArrayLike, utilities: UtilityConfig) -> NDArray[np.floating]:
    """Expected utility of treating everybody."""
    p = np.asarray(p, dtype=np.float64)
    return p * utilities.u_tp + (1.0 - p) * utilities.u_fp


def treat_none(p: ArrayLike, utilities: UtilityConfig) -> NDArray[np.floating]:
    """Expected utility of treating nobody."""
    p = np.asarray(p, dtype=np.float64)
    return p * utilities.u_fn + (1.0 - p) * utilities.u_tn


def utility_of_testing(
    p: ArrayLike,
    sensitivity: float,
    specificity: float,
    utilities: UtilityConfig,
    *,
    test_cost: float = 0.0,
) -> NDArray[np.floating]:
    """Expected utility of testing and treating the test positives."""
    p = np.asarray(p, dtype=np.float64)
    u = utilities
    return (
        p * sensitivity * u.u_tp
        + p * (1.0 - sensitivity) * u.u_fn
        + (1.0 - p) * (1.0 - specificity) * u.u_fp
        + (1.0 - p) * specificity * u.u_tn
        - test_cost
    )


def posterior_probability(
    prior: float, sensitivity: float, specificity: float,
) -> tuple[float, float]:
    """Post-test probability of disease after a positive and a negative result.

    Bayes' theorem.  Either value is ``nan`` when its denominator is zero.

    Returns
    -------
    (positive, negative) : tuple of float
    """
    _check_rate("prior", prior)
    _check_rate("sensitivity", sensitivity)
    _check_rate("specificity", specificity)

    pos_den = sensitivity * prior + (1.0 - specificity) * (1.0 - prior)
    neg_den = (1.0 - sensitivity) * prior + specificity * (1.0 - prior)
    positive = sensitivity * prior / pos_den if pos_den > 0 else float("nan")
    negative = (1.0 - sensitivity) * prior / neg_den if neg_den > 0 else float("nan")
    return positive, negative


def _break_even(func, lo: float, hi: float, grid_step: float) -> float:
    """Root of *func* on ``[lo, hi]``.

    Brent's method when the bracket straddles zero, else the grid point
    where ``|func|`` is smallest.
    """
    if hi <= lo:
        return lo
    f_lo = float(func(lo))
    f_hi = float(func(hi))
    if f_lo == 0.0:
        return lo
    if f_hi == 0.0:
        return hi
    if f_lo * f_hi < 0:
        return float(brentq(func, lo, hi, xtol=1e-12))

    n_grid = max(2, int(round((hi - lo) / grid_step)) + 1)
    grid = np.linspace(lo, hi, n_grid)
    return float(grid[int(np.argmin(np.abs(func(grid))))])


def break_even_priors(
    sensitivity: float,
    specificity: float,
    utilities: UtilityConfig,
    *,
    test_cost: float = 0.0,
    grid_step: float = 0.01,
) -> tuple[float, float]:
    """Numeric pL and pU for a single operating point.

    pL is searched on ``[0, p*]`` and pU on ``[p*, 1]`` where p* is the
    treatment threshold (clipped to [0, 1]; 0.5 when undefined).

    Returns
    -------
    (p_lower, p_upper) : tuple of float
    """
    _check_rate("sensitivity", sensitivity)
    _check_rate("specificity", specificity)

    p_star = utilities.treatment_threshold
    p_star = 0.5 if np.isnan(p_star) else float(np.clip(p_star, 0.0, 1.0))

    def vs_none(p):
        return treat_none(p, utilities) - utility_of_testing(
            p, sensitivity, specificity, utilities, test_cost=test_cost,
        )

    def vs_all(p):
        return treat_all(p, utilities) - utility_of_testing(
            p, sensitivity, specificity, utilities, test_cost=test_cost,
        )

    p_lower = _break_even(vs_none, 0.0, p_star, grid_step)
    p_upper = _break_even(vs_all, p_star, 1.0, grid_step)
    return p_lower, p_upper
