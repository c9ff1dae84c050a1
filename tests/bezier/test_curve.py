"""Tests for rational Bézier evaluation and derivatives."""

import numpy as np
import pytest

from pyapar.bezier import (
    bernstein_basis,
    hodograph,
    rational_bezier,
    rational_bezier_derivative,
)


@pytest.fixture
def quadratic():
    return np.array([[0.0, 0.0], [0.0, 1.0], [1.0, 1.0]])


class TestBernstein:

    def test_partition_of_unity(self):
        t = np.linspace(0, 1, 11)
        for n in (1, 3, 7):
            np.testing.assert_allclose(bernstein_basis(n, t).sum(axis=1), 1.0)

    def test_shape(self):
        assert bernstein_basis(4, np.linspace(0, 1, 5)).shape == (5, 5)

    def test_endpoints(self):
        b = bernstein_basis(3, np.array([0.0, 1.0]))
        np.testing.assert_allclose(b[0], [1, 0, 0, 0])
        np.testing.assert_allclose(b[1], [0, 0, 0, 1])


class TestHodograph:

    def test_quadratic(self):
        pts = np.array([[0.0, 0.0], [1.0, 2.0], [3.0, 3.0]])
        np.testing.assert_allclose(hodograph(pts), [[2, 4], [4, 2]])


class TestRationalBezier:

    def test_endpoints_interpolated(self, quadratic):
        w = np.array([0.5, 7.0, 2.0])
        out = rational_bezier(quadratic, w, np.array([0.0, 1.0]))
        np.testing.assert_allclose(out[0], [0, 0], atol=1e-12)
        np.testing.assert_allclose(out[1], [1, 1], atol=1e-12)

    def test_unit_weights_polynomial(self, quadratic):
        out = rational_bezier(quadratic, np.ones(3), np.array([0.5]))
        np.testing.assert_allclose(out[0], [0.25, 0.75])

    def test_weight_pulls_curve(self, quadratic):
        """Raising the middle weight moves the curve toward that point."""
        t = np.array([0.5])
        low = rational_bezier(quadratic, np.array([1.0, 1.0, 1.0]), t)[0]
        high = rational_bezier(quadratic, np.array([1.0, 10.0, 1.0]), t)[0]
        target = quadratic[1]
        assert np.linalg.norm(high - target) < np.linalg.norm(low - target)

    def test_scale_invariant_weights(self, quadratic):
        t = np.linspace(0, 1, 7)
        w = np.array([0.3, 2.0, 1.5])
        np.testing.assert_allclose(
            rational_bezier(quadratic, w, t),
            rational_bezier(quadratic, 4.0 * w, t),
        )

    def test_single_control_point(self):
        out = rational_bezier(np.array([[0.5, 0.5]]), np.ones(1), np.linspace(0, 1, 3))
        np.testing.assert_allclose(out, 0.5)


class TestRationalDerivative:

    def test_unit_weights_match_hodograph(self, quadratic):
        d = rational_bezier_derivative(quadratic, np.ones(3), np.array([0.5]))
        np.testing.assert_allclose(d[0], [1.0, 1.0])

    def test_matches_finite_difference(self, quadratic):
        w = np.array([1.0, 3.0, 0.5])
        t = np.array([0.2, 0.5, 0.8])
        h = 1e-6
        fd = (
            rational_bezier(quadratic, w, t + h)
            - rational_bezier(quadratic, w, t - h)
        ) / (2 * h)
        d = rational_bezier_derivative(quadratic, w, t)
        np.testing.assert_allclose(d, fd, rtol=1e-5, atol=1e-7)

    def test_start_tangent_direction(self, quadratic):
        """At t=0 the tangent points from P0 toward P1."""
        d = rational_bezier_derivative(quadratic, np.array([1.0, 2.0, 1.0]), np.array([0.0]))
        assert d[0, 0] == pytest.approx(0.0)
        assert d[0, 1] > 0

    def test_constant_curve(self):
        d = rational_bezier_derivative(np.array([[0.3, 0.4]]), np.ones(1), np.array([0.1, 0.9]))
        np.testing.assert_array_equal(d, 0.0)
