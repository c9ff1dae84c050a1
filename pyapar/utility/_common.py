"""Utility configuration and optimal operating point result."""

from __future__ import annotations

import math
from dataclasses import dataclass

EPS = 1e-9  # keeps H/B finite when uTP == uFN


def _check_prevalence(prevalence: float) -> None:
    if not (0.0 < prevalence < 1.0):
        raise ValueError(f"prevalence must be in (0, 1), got {prevalence}")


@dataclass(frozen=True)
class UtilityConfig:
    """Outcome utilities of a diagnostic decision, each in [0, 1].

    Defaults match the dashboard's initial slider positions.

    Attributes
    ----------
    u_tp, u_fp, u_tn, u_fn : float
        Utility of a true positive, false positive, true negative and
        false negative.
    """

    u_tp: float = 0.8
    u_fp: float = 0.85
    u_tn: float = 1.0
    u_fn: float = 0.0

    def __post_init__(self) -> None:
        for name in ("u_tp", "u_fp", "u_tn", "u_fn"):
            value = getattr(self, name)
            if not (math.isfinite(value) and 0.0 <= value <= 1.0):
                raise ValueError(f"{name} must be in [0, 1], got {value}")

    @property
    def harm(self) -> float:
        """H = uTN − uFP: utility lost by treating a healthy patient."""
        return self.u_tn - self.u_fp

    @property
    def benefit(self) -> float:
        """B = uTP − uFN (+ a tiny epsilon): utility gained by treating a diseased patient."""
        return self.u_tp - self.u_fn + EPS

    @property
    def h_over_b(self) -> float:
        return self.harm / self.benefit

    @property
    def treatment_threshold(self) -> float:
        """p* where treat-all and treat-none have equal expected utility.

        ``nan`` when H + B is zero.
        """
        denom = (self.u_tp - self.u_fn) + (self.u_tn - self.u_fp)
        if denom == 0:
            return float("nan")
        return (self.u_tn - self.u_fp) / denom

    def slope_of_interest(self, prevalence: float | None = None) -> float:
        """ROC slope at which expected utility is maximised.

        ``(H / B) · (1 − p) / p``, with ``p = 0.5`` when *prevalence* is
        ``None``.
        """
        p = 0.5 if prevalence is None else prevalence
        _check_prevalence(p)
        return self.h_over_b * (1.0 - p) / p


@dataclass(frozen=True)
class OptimalPoint:
    """Utility-optimal operating point.

    ``fpr``, ``tpr``, ``threshold`` and ``index`` refer to the empirical
    ROC point nearest the continuous optimum ``(curve_fpr, curve_tpr)``
    found at parameter ``t`` on the fitted curve.  ``converged`` is False
    when the point comes from the default-cutoff fallback instead.
    """

    fpr: float
    tpr: float
    threshold: float
    index: int
    curve_fpr: float
    curve_tpr: float
    t: float
    slope_of_interest: float
    h_over_b: float
    converged: bool = True

    def summary(self) -> str:
        """One-line description of the optimal cutoff."""
        return (
            f"H/B of {self.h_over_b:.2f} gives a slope of "
            f"{self.slope_of_interest:.2f} at the optimal cutoff "
            f"{self.threshold:.2f}"
        )
