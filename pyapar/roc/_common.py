"""Shared result types for empirical ROC analysis."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class ROCResult:
    """Result of empirical ROC analysis.

    Attributes
    ----------
    thresholds : array
        Score thresholds, descending.  Starts with ``+inf`` and ends with
        ``-inf`` so the curve always passes through (0,0) and (1,1).  A
        sample is called positive at threshold ``c`` when ``score >= c``.
    tpr : array
        True positive rate (sensitivity) at each threshold.
    fpr : array
        False positive rate (1 − specificity) at each threshold.
    auc : float
        Area under the ROC curve (trapezoidal rule).
    n_positive, n_negative : int
        Number of positive (case) and negative (control) observations.
    """

    thresholds: NDArray[np.floating]
    tpr: NDArray[np.floating]  # sensitivity / true positive rate
    fpr: NDArray[np.floating]  # 1 - specificity / false positive rate
    auc: float
    n_positive: int
    n_negative: int

    @property
    def n_points(self) -> int:
        return int(self.thresholds.shape[0])

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            "ROC Analysis",
            "=" * 40,
            f"AUC         : {self.auc:.4f}",
            f"n positive  : {self.n_positive}",
            f"n negative  : {self.n_negative}",
            f"n thresholds: {self.n_points}",
        ]
        return "\n".join(lines)


@dataclass(frozen=True)
class OperatingPoint:
    """A single empirical point on the ROC curve."""

    index: int
    threshold: float
    fpr: float
    tpr: float

    @property
    def sensitivity(self) -> float:
        return self.tpr

    @property
    def specificity(self) -> float:
        return 1.0 - self.fpr
