"""
Empirical ROC analysis.

ROC curve construction with tie-group collapsing, trapezoidal AUC,
standardised partial AUC, point lookup by coordinate or cutoff, and
binormal score simulation.
"""

from pyapar.roc._common import ROCResult, OperatingPoint
from pyapar.roc._roc import roc, partial_auc, closest_point, operating_point
from pyapar.roc._simulate import simulate_binormal

__all__ = [
    "ROCResult",
    "OperatingPoint",
    "roc",
    "partial_auc",
    "closest_point",
    "operating_point",
    "simulate_binormal",
]
