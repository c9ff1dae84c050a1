"""Tests for the end-to-end analysis pipeline."""

import numpy as np
import pytest

import pyapar
from pyapar import (
    AnalysisResult,
    DegenerateInputError,
    OptimizationNonConvergedError,
    analyze,
)
from pyapar.roc import simulate_binormal
from pyapar.utility import UtilityConfig


@pytest.fixture
def data():
    return simulate_binormal(disease_mean=1.5, size=300, rng=11)


class TestAnalyze:

    def test_returns_result(self, data):
        res = analyze(*data, time_budget=1.0)
        assert isinstance(res, AnalysisResult)
        assert res.optimal.converged
        assert res.utilities == UtilityConfig()
        assert res.prevalence is None

    def test_components_consistent(self, data):
        res = analyze(*data, prevalence=0.3, time_budget=1.0)
        assert res.fit.points.shape[0] == res.roc.n_points
        assert 0 <= res.optimal.index < res.roc.n_points
        assert 0.0 <= res.apar.area <= 1.0
        assert res.optimal.slope_of_interest == pytest.approx(
            UtilityConfig().slope_of_interest(0.3)
        )

    def test_custom_utilities(self, data):
        u = UtilityConfig(u_tp=0.9, u_fp=0.2, u_tn=0.9, u_fn=0.2)
        res = analyze(*data, utilities=u, time_budget=1.0)
        assert res.utilities is u
        assert res.apar.area == 0.0

    def test_summary(self, data):
        s = analyze(*data, time_budget=1.0).summary()
        assert "AUC" in s
        assert "H/B of" in s
        assert "ApAr" in s

    def test_degenerate_labels(self):
        with pytest.raises(DegenerateInputError):
            analyze(np.array([0.1, 0.2, 0.3]), np.array([1, 1, 1]))


class TestFallback:
    """A failed slope search falls back to the default cutoff."""

    @pytest.fixture
    def failing_search(self, monkeypatch):
        def fail(*args, **kwargs):
            raise OptimizationNonConvergedError("slope search did not converge")

        monkeypatch.setattr(pyapar._pipeline, "locate_optimal_point", fail)

    def test_default_cutoff(self, data, failing_search):
        res = analyze(*data, time_budget=0.5)
        assert not res.optimal.converged
        finite = np.isfinite(res.roc.thresholds)
        nearest = np.abs(res.roc.thresholds[finite]).min()
        assert abs(res.optimal.threshold) == pytest.approx(nearest)
        assert np.isnan(res.optimal.t)

    def test_custom_cutoff(self, data, failing_search):
        res = analyze(*data, time_budget=0.5, default_cutoff=1.0)
        idx = int(np.argmin(np.abs(res.roc.thresholds - 1.0)))
        assert res.optimal.index == idx

    def test_apar_still_computed(self, data, failing_search):
        res = analyze(*data, time_budget=0.5)
        assert 0.0 <= res.apar.area <= 1.0
