"""Tests for partial AUC and operating-point lookup."""

import numpy as np
import pytest

from pyapar.roc import (
    OperatingPoint,
    closest_point,
    operating_point,
    partial_auc,
    roc,
)


@pytest.fixture
def small_roc():
    return roc(
        np.array([0.9, 0.8, 0.4, 0.3, 0.2, 0.1]),
        np.array([1, 1, 0, 1, 0, 0]),
    )


@pytest.fixture
def perfect_roc():
    return roc(np.array([3.0, 2.0, -1.0, -2.0]), np.array([1, 1, 0, 0]))


# ---------------------------------------------------------------------------
# partial_auc
# ---------------------------------------------------------------------------

class TestPartialAUC:

    def test_full_window_equals_auc(self, small_roc):
        assert partial_auc(small_roc) == pytest.approx(small_roc.auc)

    def test_perfect_with_tpr_floor(self, perfect_roc):
        assert partial_auc(perfect_roc, min_tpr=0.5) == pytest.approx(1.0)

    def test_bounded(self, small_roc):
        pauc = partial_auc(small_roc, min_fpr=0.2, max_fpr=0.8, min_tpr=0.3)
        assert 0.0 <= pauc <= 1.0

    def test_empty_window(self, small_roc):
        """No ROC point has an FPR of exactly 0.5."""
        assert partial_auc(small_roc, min_fpr=0.5, max_fpr=0.5) == 0.0

    def test_invalid_window(self, small_roc):
        with pytest.raises(ValueError, match="min_fpr"):
            partial_auc(small_roc, min_fpr=0.8, max_fpr=0.2)

    def test_invalid_tpr_floor(self, small_roc):
        with pytest.raises(ValueError, match="min_tpr"):
            partial_auc(small_roc, min_tpr=1.0)


# ---------------------------------------------------------------------------
# Point lookup
# ---------------------------------------------------------------------------

class TestPointLookup:

    def test_closest_point(self, small_roc):
        point = closest_point(small_roc, 0.3, 0.7)
        assert isinstance(point, OperatingPoint)
        assert point.index == 3
        assert point.threshold == pytest.approx(0.4)
        assert point.fpr == pytest.approx(1 / 3)
        assert point.tpr == pytest.approx(2 / 3)

    def test_closest_point_origin(self, small_roc):
        point = closest_point(small_roc, 0.0, 0.0)
        assert point.index == 0

    def test_sensitivity_specificity(self, small_roc):
        point = closest_point(small_roc, 0.3, 0.7)
        assert point.sensitivity == pytest.approx(2 / 3)
        assert point.specificity == pytest.approx(2 / 3)

    def test_operating_point(self, small_roc):
        point = operating_point(small_roc, 0.38)
        assert point.index == 3
        assert point.threshold == pytest.approx(0.4)

    def test_operating_point_far_below(self, small_roc):
        """Only finite thresholds can be nearest to a finite cutoff."""
        point = operating_point(small_roc, -5.0)
        assert point.threshold == pytest.approx(0.1)

    def test_operating_point_non_finite(self, small_roc):
        with pytest.raises(ValueError, match="finite"):
            operating_point(small_roc, np.inf)
