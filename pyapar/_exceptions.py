"""Exception hierarchy for pyapar.

``DegenerateInputError`` is fatal and propagates to the caller.
``OptimizationNonConvergedError`` is recoverable: callers fall back to a
default cutoff.  ``UnsolvableBoundError`` never leaves the ApAr engine.
"""

from __future__ import annotations


class PyAparError(Exception):
    """Base class for all pyapar errors."""


class DegenerateInputError(PyAparError, ValueError):
    """Samples contain no positives or no negatives, so ROC/AUC are undefined."""


class OptimizationNonConvergedError(PyAparError, RuntimeError):
    """The slope-matching minimiser did not report success within budget."""


class UnsolvableBoundError(PyAparError, ArithmeticError):
    """A prior-probability bound has a zero denominator at an ROC point."""
