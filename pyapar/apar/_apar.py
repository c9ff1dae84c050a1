"""Applicability Area (ApAr).

For every classification threshold, testing beats both treat-all and
treat-none for priors between pL and pU.  ApAr accumulates the width of
that interval over the threshold axis.
"""

from __future__ import annotations

from pyapar.apar._area import apar_area
from pyapar.apar._bounds import (
    fill_missing_bounds,
    finite_threshold_axis,
    order_by_threshold,
    prior_bounds,
    smooth_lower_bounds,
)
from pyapar.apar._common import AparResult
from pyapar.roc._common import ROCResult
from pyapar.utility._common import UtilityConfig


def compute_apar(
    roc_result: ROCResult,
    utilities: UtilityConfig,
    prevalence: float = 0.0,
    *,
    bounded: bool = False,
    test_cost: float = 0.0,
) -> AparResult:
    """Compute the Applicability Area of a diagnostic test.

    Parameters
    ----------
    roc_result : ROCResult
        Empirical ROC curve.
    utilities : UtilityConfig
        Outcome utilities.
    prevalence : float
        Unused; the bounds span every prior and do not depend on it.
    bounded : bool
        Clip solved bounds to [0, 1] before sanitising (use for imported
        data with probability scores).
    test_cost : float
        Cost of performing the test.

    Returns
    -------
    AparResult

    Notes
    -----
    Degenerate utilities that leave every bound unsolvable are not an
    error: the missing bounds are saturated and the area is typically 0.
    """
    pl, pu = prior_bounds(
        roc_result.fpr, roc_result.tpr, utilities,
        bounded=bounded, test_cost=test_cost,
    )
    thresholds, pl, pu = order_by_threshold(roc_result.thresholds, pl, pu)
    pl, pu = fill_missing_bounds(pl, pu)
    pl = smooth_lower_bounds(pl)
    thresholds, pl, pu = finite_threshold_axis(thresholds, pl, pu)

    area, largest_range, largest_index = apar_area(thresholds, pl, pu)

    return AparResult(
        area=area,
        thresholds=thresholds,
        pl=pl,
        pu=pu,
        largest_range=largest_range,
        largest_range_index=largest_index,
    )
