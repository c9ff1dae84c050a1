"""
pyapar: decision-analytic metrics for diagnostic tests.

Empirical ROC analysis, rational Bézier smoothing of the ROC curve,
utility-optimal operating points, and the Applicability Area (ApAr): the
range of disease prevalence over which testing beats treat-all and
treat-none, accumulated across classification thresholds.

Usage:
    from pyapar import roc, bezier, utility, apar, analyze
"""

__version__ = "0.1.0"

from pyapar import roc
from pyapar import bezier
from pyapar import utility
from pyapar import apar
from pyapar._exceptions import (
    PyAparError,
    DegenerateInputError,
    OptimizationNonConvergedError,
    UnsolvableBoundError,
)
from pyapar._pipeline import AnalysisResult, analyze

__all__ = [
    "__version__",
    "roc",
    "bezier",
    "utility",
    "apar",
    "analyze",
    "AnalysisResult",
    "PyAparError",
    "DegenerateInputError",
    "OptimizationNonConvergedError",
    "UnsolvableBoundError",
]
