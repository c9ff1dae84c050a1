"""Tests for empirical ROC curve construction."""

import numpy as np
import pytest

from pyapar import DegenerateInputError
from pyapar.roc import roc, ROCResult


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def well_separated():
    """Well-separated cases and controls → high AUC."""
    np.random.seed(42)
    scores = np.concatenate([
        np.random.normal(3, 1, 100),
        np.random.normal(6, 1, 100),
    ])
    labels = np.array([0] * 100 + [1] * 100)
    return scores, labels


@pytest.fixture
def small_example():
    """Six samples with one misordered pair."""
    scores = np.array([0.9, 0.8, 0.4, 0.3, 0.2, 0.1])
    labels = np.array([1, 1, 0, 1, 0, 0])
    return scores, labels


# ---------------------------------------------------------------------------
# Basic ROC
# ---------------------------------------------------------------------------

class TestROCBasic:
    """Basic ROC curve properties."""

    def test_returns_roc_result(self, well_separated):
        r = roc(*well_separated)
        assert isinstance(r, ROCResult)

    def test_auc_high_for_separation(self, well_separated):
        r = roc(*well_separated)
        assert r.auc > 0.95

    def test_auc_bounded(self, well_separated):
        r = roc(*well_separated)
        assert 0.0 <= r.auc <= 1.0

    def test_counts(self, well_separated):
        r = roc(*well_separated)
        assert r.n_positive == 100
        assert r.n_negative == 100

    def test_roc_curve_endpoints(self, well_separated):
        """ROC curve should start at (0,0) and end at (1,1)."""
        r = roc(*well_separated)
        assert r.fpr[0] == 0.0 and r.tpr[0] == 0.0
        assert r.fpr[-1] == 1.0 and r.tpr[-1] == 1.0

    def test_sentinel_thresholds(self, well_separated):
        r = roc(*well_separated)
        assert r.thresholds[0] == np.inf
        assert r.thresholds[-1] == -np.inf

    def test_fpr_tpr_monotonic(self, well_separated):
        """TPR and FPR should be non-decreasing along the curve."""
        r = roc(*well_separated)
        assert np.all(np.diff(r.fpr) >= 0)
        assert np.all(np.diff(r.tpr) >= 0)

    def test_at_most_n_plus_two_points(self, well_separated):
        scores, _ = well_separated
        r = roc(*well_separated)
        assert r.n_points <= len(scores) + 2

    def test_idempotent(self, well_separated):
        """No hidden randomness: identical inputs give identical arrays."""
        r1 = roc(*well_separated)
        r2 = roc(*well_separated)
        assert np.array_equal(r1.thresholds, r2.thresholds)
        assert np.array_equal(r1.fpr, r2.fpr)
        assert np.array_equal(r1.tpr, r2.tpr)
        assert r1.auc == r2.auc

    def test_inputs_not_mutated(self, small_example):
        scores, labels = small_example
        before = scores.copy()
        roc(scores, labels)
        assert np.array_equal(scores, before)


# ---------------------------------------------------------------------------
# Known values
# ---------------------------------------------------------------------------

class TestROCKnownValues:
    """Hand-computed curves."""

    def test_perfect_separation(self):
        r = roc([3, 2, -1, -2], [1, 1, 0, 0])
        assert r.auc == pytest.approx(1.0)

    def test_small_example_points(self, small_example):
        r = roc(*small_example)
        np.testing.assert_allclose(
            r.thresholds[1:-1], [0.9, 0.8, 0.4, 0.3, 0.2, 0.1],
        )
        np.testing.assert_allclose(
            r.tpr, [0, 1 / 3, 2 / 3, 2 / 3, 1, 1, 1, 1],
        )
        np.testing.assert_allclose(
            r.fpr, [0, 0, 0, 1 / 3, 1 / 3, 2 / 3, 1, 1],
        )

    def test_small_example_distinct_points(self, small_example):
        """Five distinct points besides the (0,0) and (1,1) endpoints."""
        r = roc(*small_example)
        pairs = set(zip(r.fpr.round(12), r.tpr.round(12)))
        pairs -= {(0.0, 0.0), (1.0, 1.0)}
        assert len(pairs) == 5

    def test_small_example_auc(self, small_example):
        """Every positive/negative pair is ordered except (0.3, 0.4)."""
        r = roc(*small_example)
        assert r.auc == pytest.approx(8 / 9)

    def test_ties_collapse(self):
        """Equal scores form one point that includes the whole tie group."""
        r = roc([1.0, 1.0, 0.0, 0.0], [1, 0, 1, 0])
        np.testing.assert_allclose(r.thresholds[1:-1], [1.0, 0.0])
        np.testing.assert_allclose(r.tpr, [0, 0.5, 1, 1])
        np.testing.assert_allclose(r.fpr, [0, 0.5, 1, 1])
        assert r.auc == pytest.approx(0.5)

    def test_all_equal_scores(self):
        r = roc([0.5, 0.5, 0.5], [1, 0, 1])
        assert r.n_points == 3
        assert r.auc == pytest.approx(0.5)

    def test_inverted_scores(self):
        r = roc([3, 2, -1, -2], [0, 0, 1, 1])
        assert r.auc == pytest.approx(0.0)


# ---------------------------------------------------------------------------
# Random predictor (AUC ≈ 0.5)
# ---------------------------------------------------------------------------

class TestROCRandom:
    """Uninformative scores should give AUC near 0.5."""

    def test_random_auc_near_half(self):
        np.random.seed(99)
        n = 500
        labels = np.array([0] * n + [1] * n)
        scores = np.random.randn(2 * n)
        r = roc(scores, labels)
        assert 0.45 < r.auc < 0.55


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------

class TestROCSummary:

    def test_summary_has_auc(self, well_separated):
        s = roc(*well_separated).summary()
        assert "AUC" in s
        assert "n positive" in s


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------

class TestROCValidation:
    """Input validation."""

    def test_non_binary_labels(self):
        with pytest.raises(ValueError, match="binary"):
            roc(np.array([1.0, 2.0, 3.0]), np.array([0, 1, 2]))

    def test_mismatched_length(self):
        with pytest.raises(ValueError, match="same length"):
            roc(np.array([1.0, 2.0, 3.0]), np.array([0, 1]))

    def test_non_finite_scores(self):
        with pytest.raises(ValueError, match="finite"):
            roc(np.array([1.0, np.nan]), np.array([0, 1]))

    def test_two_dimensional(self):
        with pytest.raises(ValueError, match="1-D"):
            roc(np.ones((2, 2)), np.array([0, 1]))

    def test_no_positives(self):
        with pytest.raises(DegenerateInputError):
            roc(np.array([1.0, 2.0, 3.0]), np.array([0, 0, 0]))

    def test_no_negatives(self):
        with pytest.raises(DegenerateInputError):
            roc(np.array([1.0, 2.0]), np.array([1, 1]))

    def test_empty_input(self):
        with pytest.raises(DegenerateInputError):
            roc(np.array([]), np.array([]))

    def test_degenerate_is_value_error(self):
        with pytest.raises(ValueError, match="at least one positive"):
            roc(np.array([1.0]), np.array([1]))
