"""Shared result type for Applicability Area analysis."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class AparResult:
    """Result of Applicability Area (ApAr) analysis.

    Attributes
    ----------
    area : float
        Area between the pU and pL curves where ``pL < pU``, over the
        threshold axis.  Rounded to 3 decimals and capped at 1.
    thresholds : array
        Finite threshold axis, descending.  May hold one more point than
        the ROC curve (zero-threshold boundary).
    pl, pu : array
        Cleaned lower/upper prior-probability bounds aligned with
        *thresholds*.  No missing values remain.
    largest_range : float
        Widest ``pU − pL`` seen on a fully valid segment.
    largest_range_index : int
        Index into *thresholds* where *largest_range* occurs.
    """

    area: float
    thresholds: NDArray[np.floating]
    pl: NDArray[np.floating]
    pu: NDArray[np.floating]
    largest_range: float
    largest_range_index: int

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            "Applicability Area (ApAr)",
            "=" * 40,
            f"ApAr          : {self.area:.3f}",
            f"Largest range : {self.largest_range:.4f}",
        ]
        if self.thresholds.shape[0] > 0:
            lines.append(
                f"  at threshold: {self.thresholds[self.largest_range_index]:.4g}"
            )
        lines.append(f"n points      : {self.thresholds.shape[0]}")
        return "\n".join(lines)
