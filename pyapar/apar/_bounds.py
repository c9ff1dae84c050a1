"""Per-threshold prior-probability bounds pL and pU.

At each ROC point (sensitivity Se = tpr, specificity Sp = 1 − fpr):

    pL = (c + Sp·(uTN − uFP)) / (Se·(uTP − uFN) + (1 − Sp)·(uFP − uTN))
    pU = (c + Sp·(uTN − uFP)) / ((1 − Se)·(uFN − uTP) + Sp·(uTN − uFP))

where ``c`` is the test cost.  A zero denominator means the bound has no
solution at that point; it is recorded as NaN and later saturated to the
extreme consistent with its side of the curve.
"""

from __future__ import annotations

import numpy as np
import structlog
from numpy.typing import NDArray

from pyapar._exceptions import UnsolvableBoundError
from pyapar.utility._common import UtilityConfig

logger = structlog.get_logger(__name__)

_ZERO_TOL = 1e-12
ZERO_THRESHOLD_OFFSET = 1e-4


# ---------------------------------------------------------------------------
# Bound computation
# ---------------------------------------------------------------------------

def _solve_bound(numerator: float, denominator: float) -> float:
    """Solve ``denominator · p = numerator`` for the prior ``p``."""
    if abs(denominator) <= _ZERO_TOL:
        raise UnsolvableBoundError(
            f"no prior solves the break-even equation "
            f"(numerator={numerator}, denominator={denominator})"
        )
    return numerator / denominator


def prior_bounds(
    fpr: NDArray[np.floating],
    tpr: NDArray[np.floating],
    utilities: UtilityConfig,
    *,
    bounded: bool = False,
    test_cost: float = 0.0,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Raw pL and pU at every ROC point.

    Parameters
    ----------
    fpr, tpr : array of float
        Empirical ROC curve.
    utilities : UtilityConfig
        Outcome utilities.
    bounded : bool
        Clip solved values to [0, 1] (imported-data mode).  Simulated-data
        mode leaves them unclamped.
    test_cost : float
        Cost of performing the test.

    Returns
    -------
    (pl, pu) : tuple of arrays
        NaN marks points where the bound has no solution.
    """
    fpr = np.asarray(fpr, dtype=np.float64)
    tpr = np.asarray(tpr, dtype=np.float64)
    u = utilities

    pl = np.empty(fpr.shape[0])
    pu = np.empty(fpr.shape[0])

    for i in range(fpr.shape[0]):
        sens = tpr[i]
        spec = 1.0 - fpr[i]
        numerator = test_cost + spec * (u.u_tn - u.u_fp)

        # fpr stands in for 1 - spec so exact zeros stay exact
        try:
            pl[i] = _solve_bound(
                numerator, sens * (u.u_tp - u.u_fn) + fpr[i] * (u.u_fp - u.u_tn),
            )
        except UnsolvableBoundError:
            pl[i] = np.nan

        try:
            pu[i] = _solve_bound(
                numerator, (1.0 - sens) * (u.u_fn - u.u_tp) + spec * (u.u_tn - u.u_fp),
            )
        except UnsolvableBoundError:
            pu[i] = np.nan

    if bounded:
        pl = np.clip(pl, 0.0, 1.0)
        pu = np.clip(pu, 0.0, 1.0)

    return pl, pu


# ---------------------------------------------------------------------------
# Sanitisation
# ---------------------------------------------------------------------------

def order_by_threshold(
    thresholds: NDArray[np.floating],
    pl: NDArray[np.floating],
    pu: NDArray[np.floating],
) -> tuple[NDArray, NDArray, NDArray]:
    """Stable sort of the three aligned arrays by descending threshold."""
    thresholds = np.asarray(thresholds, dtype=np.float64)
    order = np.argsort(-thresholds, kind="stable")
    return thresholds[order], np.asarray(pl)[order], np.asarray(pu)[order]


def fill_missing_bounds(
    pl: NDArray[np.floating], pu: NDArray[np.floating],
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """Replace missing (NaN) bounds.

    A missing pL becomes 1 in the first half of the threshold-ordered
    sequence and 0 in the second half.  A missing pU becomes 0.
    """
    pl = np.asarray(pl, dtype=np.float64)
    pu = np.asarray(pu, dtype=np.float64)
    n = pl.shape[0]

    first_half = np.arange(n) < n // 2
    missing_pl = np.isnan(pl)
    missing_pu = np.isnan(pu)

    logger.debug(
        "prior_bounds_filled",
        n_points=n,
        missing_pl=int(missing_pl.sum()),
        missing_pu=int(missing_pu.sum()),
    )

    pl = np.where(missing_pl, np.where(first_half, 1.0, 0.0), pl)
    pu = np.where(missing_pu, 0.0, pu)
    return pl, pu


def smooth_lower_bounds(pl: NDArray[np.floating]) -> NDArray[np.floating]:
    """Remove fill artefacts from the threshold-ordered pL curve.

    In the first half only:

    *   a maximal run of 1s followed by a 0 is set to 0;
    *   then a 1 whose second and third successors strictly decrease is
        set to 0.

    Finally, a trailing 0 after a non-zero value copies that value.
    """
    pl = np.array(pl, dtype=np.float64)
    n = pl.shape[0]
    half = n // 2

    i = 0
    while i < half:
        if pl[i] != 1.0:
            i += 1
            continue
        end = i
        while end < half and pl[end] == 1.0:
            end += 1
        if end < n and pl[end] == 0.0:
            pl[i:end] = 0.0
        i = end

    # TODO: second half has no mirrored rules; confirm with the ApAr
    # authors whether it should.
    snapshot = pl.copy()
    for i in range(min(half, n - 3)):
        if snapshot[i] == 1.0 and snapshot[i + 2] > snapshot[i + 3]:
            pl[i] = 0.0

    if n >= 2 and pl[-1] == 0.0 and pl[-2] != 0.0:
        pl[-1] = pl[-2]

    return pl


def finite_threshold_axis(
    thresholds: NDArray[np.floating],
    pl: NDArray[np.floating],
    pu: NDArray[np.floating],
) -> tuple[NDArray, NDArray, NDArray]:
    """Make a descending threshold axis integrable.

    Leading ``+inf`` and trailing ``-inf`` sentinels take the value of the
    nearest finite threshold (0 if there is none).  If the axis then ends
    at exactly 0, the trailing zeros move to ``1e-4`` and a new point at
    threshold 0 with ``pL = pU = 0`` closes the axis.
    """
    thresholds = np.array(thresholds, dtype=np.float64)
    pl = np.asarray(pl, dtype=np.float64)
    pu = np.asarray(pu, dtype=np.float64)

    if thresholds.shape[0] == 0:
        return thresholds, pl, pu

    finite = np.flatnonzero(np.isfinite(thresholds))
    if finite.shape[0] == 0:
        thresholds[:] = 0.0
    else:
        first, last = finite[0], finite[-1]
        thresholds[:first] = thresholds[first]
        thresholds[last + 1:] = thresholds[last]

    if thresholds[-1] == 0.0:
        k = thresholds.shape[0]
        while k > 0 and thresholds[k - 1] == 0.0:
            k -= 1
        thresholds[k:] = ZERO_THRESHOLD_OFFSET
        thresholds = np.append(thresholds, 0.0)
        pl = np.append(pl, 0.0)
        pu = np.append(pu, 0.0)

    return thresholds, pl, pu
