"""End-to-end analysis: ROC → Bézier fit → optimal point, and ApAr.

The optimal-point search is recoverable: if the slope minimiser fails,
the empirical point whose threshold is closest to ``default_cutoff`` is
reported instead and flagged with ``converged=False``.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray

from pyapar._exceptions import OptimizationNonConvergedError
from pyapar.apar import AparResult, compute_apar
from pyapar.bezier import BezierFit, fit_bezier
from pyapar.bezier._fit import DEFAULT_TIME_BUDGET
from pyapar.roc import ROCResult, operating_point, roc
from pyapar.utility import OptimalPoint, UtilityConfig, locate_optimal_point

logger = structlog.get_logger(__name__)

DEFAULT_CUTOFF = 0.0


@dataclass(frozen=True)
class AnalysisResult:
    """Everything the dashboard needs for one set of inputs."""

    roc: ROCResult
    fit: BezierFit
    optimal: OptimalPoint
    apar: AparResult
    utilities: UtilityConfig
    prevalence: float | None

    def summary(self) -> str:
        """Human-readable summary."""
        return "\n\n".join([
            self.roc.summary(),
            self.fit.summary(),
            self.optimal.summary(),
            self.apar.summary(),
        ])


def _fallback_point(
    roc_result: ROCResult,
    utilities: UtilityConfig,
    prevalence: float | None,
    cutoff: float,
) -> OptimalPoint:
    point = operating_point(roc_result, cutoff)
    return OptimalPoint(
        fpr=point.fpr,
        tpr=point.tpr,
        threshold=point.threshold,
        index=point.index,
        curve_fpr=point.fpr,
        curve_tpr=point.tpr,
        t=float("nan"),
        slope_of_interest=utilities.slope_of_interest(prevalence),
        h_over_b=utilities.h_over_b,
        converged=False,
    )


def analyze(
    scores: NDArray[np.floating],
    labels: NDArray[np.integer],
    utilities: UtilityConfig | None = None,
    prevalence: float | None = None,
    *,
    bounded: bool = False,
    test_cost: float = 0.0,
    time_budget: float = DEFAULT_TIME_BUDGET,
    default_cutoff: float = DEFAULT_CUTOFF,
) -> AnalysisResult:
    """Run the full diagnostic decision analysis.

    Parameters
    ----------
    scores : array of float
        Predicted scores.
    labels : array of int
        Binary ground truth (0/1).
    utilities : UtilityConfig or None
        Outcome utilities; defaults to ``UtilityConfig()``.
    prevalence : float or None
        Disease prevalence in (0, 1); 0.5 if ``None``.
    bounded : bool
        Clip ApAr bounds to [0, 1] (imported probability scores).
    test_cost : float
        Cost of performing the test, used by the ApAr bounds.
    time_budget : float
        Wall-clock budget of the Bézier weight search, in seconds.
    default_cutoff : float
        Cutoff reported when the optimal-point search fails.

    Returns
    -------
    AnalysisResult

    Raises
    ------
    DegenerateInputError
        If there are no positive or no negative samples.
    """
    if utilities is None:
        utilities = UtilityConfig()

    roc_result = roc(scores, labels)
    fit = fit_bezier(roc_result.fpr, roc_result.tpr, time_budget=time_budget)

    try:
        optimal = locate_optimal_point(fit, roc_result, utilities, prevalence)
    except OptimizationNonConvergedError as exc:
        logger.warning(
            "optimal_point_fallback",
            reason=str(exc),
            default_cutoff=default_cutoff,
        )
        optimal = _fallback_point(roc_result, utilities, prevalence, default_cutoff)

    apar = compute_apar(
        roc_result, utilities, bounded=bounded, test_cost=test_cost,
    )

    return AnalysisResult(
        roc=roc_result,
        fit=fit,
        optimal=optimal,
        apar=apar,
        utilities=utilities,
        prevalence=prevalence,
    )
