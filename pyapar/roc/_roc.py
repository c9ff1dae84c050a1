"""Empirical ROC curve, trapezoidal AUC and point lookup.

The curve is built by a single pass over the samples sorted by descending
score: tie groups collapse into one point whose counts include the whole
group, and sentinel thresholds ``+inf`` / ``-inf`` pin the endpoints
(0,0) and (1,1).

Partial AUC follows the standardised region definition used for manual
region selection on an ROC plot: area above a TPR floor within an FPR
window, divided by the area of the enclosing rectangle.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pyapar._exceptions import DegenerateInputError
from pyapar.roc._common import OperatingPoint, ROCResult


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _validate_roc_inputs(
    scores: NDArray, labels: NDArray,
) -> tuple[NDArray, NDArray]:
    """Validate and coerce inputs for ROC analysis."""
    scores = np.asarray(scores, dtype=np.float64)
    labels = np.asarray(labels)

    if scores.ndim != 1 or labels.ndim != 1:
        raise ValueError("scores and labels must be 1-D arrays")
    if scores.shape[0] != labels.shape[0]:
        raise ValueError(
            f"scores and labels must have the same length, "
            f"got {scores.shape[0]} and {labels.shape[0]}"
        )
    if not np.all(np.isfinite(scores)):
        raise ValueError("scores must be finite")
    if not np.all(np.isin(labels, (0, 1))):
        raise ValueError(
            f"labels must be binary (0/1), got unique values {np.unique(labels)}"
        )

    labels = labels.astype(np.intp)
    n_pos = int(labels.sum())
    n_neg = labels.shape[0] - n_pos
    if n_pos < 1 or n_neg < 1:
        raise DegenerateInputError(
            f"Need at least one positive and one negative sample, "
            f"got {n_pos} positive and {n_neg} negative"
        )

    return scores, labels


def _trapezoid_auc(fpr: NDArray, tpr: NDArray) -> float:
    """Trapezoidal area under a monotone (fpr, tpr) sequence."""
    if fpr.shape[0] < 2:
        return 0.0
    return float(np.sum(np.diff(fpr) * (tpr[1:] + tpr[:-1]) / 2.0))


def _empirical_roc_curve(
    scores: NDArray, labels: NDArray,
) -> tuple[NDArray, NDArray, NDArray]:
    """Compute empirical ROC curve points.

    Returns (thresholds, tpr, fpr) ordered from (0,0) to (1,1).
    """
    n_pos = int(labels.sum())
    n_neg = labels.shape[0] - n_pos

    # Stable sort so equal scores keep their insertion order
    order = np.argsort(-scores, kind="stable")
    sorted_scores = scores[order]
    sorted_labels = labels[order]

    tp = np.cumsum(sorted_labels)
    fp = np.arange(1, sorted_labels.shape[0] + 1) - tp

    # Last index of every tie group: counts include the whole group
    group_end = np.flatnonzero(np.diff(sorted_scores) != 0)
    group_end = np.append(group_end, sorted_scores.shape[0] - 1)

    thresholds = np.concatenate([
        [np.inf], sorted_scores[group_end], [-np.inf],
    ])
    tpr = np.concatenate([[0.0], tp[group_end] / n_pos, [1.0]])
    fpr = np.concatenate([[0.0], fp[group_end] / n_neg, [1.0]])

    return thresholds, tpr, fpr


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def roc(
    scores: NDArray[np.floating],
    labels: NDArray[np.integer],
) -> ROCResult:
    """Compute the empirical ROC curve and its trapezoidal AUC.

    Parameters
    ----------
    scores : array of float
        Predicted scores; higher means more likely positive.
    labels : array of int
        Binary ground truth (0/1), aligned with *scores*.

    Returns
    -------
    ROCResult

    Raises
    ------
    DegenerateInputError
        If there are no positive or no negative samples.
    ValueError
        On malformed input.

    Examples
    --------
    >>> r = roc([3, 2, -1, -2], [1, 1, 0, 0])
    >>> r.auc
    1.0
    """
    scores, labels = _validate_roc_inputs(scores, labels)
    n_pos = int(labels.sum())
    n_neg = labels.shape[0] - n_pos

    thresholds, tpr, fpr = _empirical_roc_curve(scores, labels)

    return ROCResult(
        thresholds=thresholds,
        tpr=tpr,
        fpr=fpr,
        auc=_trapezoid_auc(fpr, tpr),
        n_positive=n_pos,
        n_negative=n_neg,
    )


# ---------------------------------------------------------------------------
# Point lookup
# ---------------------------------------------------------------------------

def _point_at(roc_result: ROCResult, idx: int) -> OperatingPoint:
    return OperatingPoint(
        index=idx,
        threshold=float(roc_result.thresholds[idx]),
        fpr=float(roc_result.fpr[idx]),
        tpr=float(roc_result.tpr[idx]),
    )


def closest_point(
    roc_result: ROCResult, fpr: float, tpr: float,
) -> OperatingPoint:
    """Empirical point nearest (Euclidean) to ``(fpr, tpr)``.

    The first of several equidistant points wins.
    """
    dist = np.hypot(roc_result.fpr - fpr, roc_result.tpr - tpr)
    return _point_at(roc_result, int(np.argmin(dist)))


def operating_point(roc_result: ROCResult, cutoff: float) -> OperatingPoint:
    """Empirical point whose threshold is closest to a raw *cutoff*."""
    if not np.isfinite(cutoff):
        raise ValueError(f"cutoff must be finite, got {cutoff}")
    diff = np.abs(roc_result.thresholds - cutoff)
    return _point_at(roc_result, int(np.argmin(diff)))


# ---------------------------------------------------------------------------
# Partial AUC
# ---------------------------------------------------------------------------

def partial_auc(
    roc_result: ROCResult,
    *,
    min_fpr: float = 0.0,
    max_fpr: float = 1.0,
    min_tpr: float = 0.0,
) -> float:
    """Standardised partial AUC above a TPR floor within an FPR window.

    Area between the empirical curve and the horizontal line
    ``tpr = min_tpr`` over the points with ``min_fpr <= fpr <= max_fpr``,
    divided by the area of the rectangle spanned by those points and the
    line ``tpr = 1``.  Returns 0 when the region holds no points or has
    zero area.

    Parameters
    ----------
    roc_result : ROCResult
        A computed ROC curve.
    min_fpr, max_fpr : float
        FPR window, ``0 <= min_fpr <= max_fpr <= 1``.
    min_tpr : float
        TPR floor in ``[0, 1)``.
    """
    if not 0.0 <= min_fpr <= max_fpr <= 1.0:
        raise ValueError(
            f"need 0 <= min_fpr <= max_fpr <= 1, got {min_fpr} and {max_fpr}"
        )
    if not 0.0 <= min_tpr < 1.0:
        raise ValueError(f"min_tpr must be in [0, 1), got {min_tpr}")

    fpr = roc_result.fpr
    tpr = roc_result.tpr

    in_window = (fpr >= min_fpr) & (fpr <= max_fpr)
    if not np.any(in_window):
        return 0.0
    window_fpr = fpr[in_window]
    window_tpr = tpr[in_window]

    above = window_tpr >= min_tpr
    if not np.any(above):
        return 0.0
    region_fpr = window_fpr[above]
    region_tpr = window_tpr[above]

    width = float(window_fpr.max() - window_fpr.min())
    rect_area = width * (1.0 - min_tpr)
    if rect_area <= 0.0:
        return 0.0

    area = _trapezoid_auc(region_fpr, region_tpr) - min_tpr * width
    return float(area / rect_area)
