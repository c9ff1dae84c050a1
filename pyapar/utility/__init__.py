"""
Decision-analytic utility for diagnostic tests.

Outcome-utility configuration, expected utility of treat-all / treat-none /
test strategies, break-even priors, post-test probabilities, and the
utility-optimal operating point on a fitted ROC curve.
"""

from pyapar.utility._common import UtilityConfig, OptimalPoint
from pyapar.utility._expected import (
    treat_all,
    treat_none,
    utility_of_testing,
    posterior_probability,
    break_even_priors,
)
from pyapar.utility._slope import locate_optimal_point, slope_error

__all__ = [
    "UtilityConfig",
    "OptimalPoint",
    "treat_all",
    "treat_none",
    "utility_of_testing",
    "posterior_probability",
    "break_even_priors",
    "locate_optimal_point",
    "slope_error",
]
