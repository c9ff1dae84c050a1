"""
Applicability Area (ApAr) of a diagnostic test.

Per-threshold break-even priors pL/pU, sanitisation of unsolvable and
artefactual bounds, and piecewise-linear integration of the region where
testing is preferred.
"""

from pyapar.apar._common import AparResult
from pyapar.apar._apar import compute_apar
from pyapar.apar._area import apar_area, eq_line
from pyapar.apar._bounds import (
    prior_bounds,
    order_by_threshold,
    fill_missing_bounds,
    smooth_lower_bounds,
    finite_threshold_axis,
)

__all__ = [
    "AparResult",
    "compute_apar",
    "prior_bounds",
    "order_by_threshold",
    "fill_missing_bounds",
    "smooth_lower_bounds",
    "finite_threshold_axis",
    "apar_area",
    "eq_line",
]
