"""Tests for finite-difference Jacobian utilities."""

import logging

import numpy as np
import pytest

from vigeom.core.math.jacobians import (
    JacobianTester,
    check_jacobian,
    compare_jacobians,
    finite_difference_jacobian,
)


class TestFiniteDifferences:
    """Test finite-difference Jacobian estimation."""

    def test_finite_difference_linear(self):
        """Test finite difference for linear function."""
        A = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])

        J = finite_difference_jacobian(lambda x: A @ x, np.array([1.0, 2.0]))

        np.testing.assert_allclose(J, A, atol=1e-8)

    def test_finite_difference_methods(self):
        """Test central differences beat one-sided ones."""
        def func(x):
            return np.array([np.sin(x[0]) + x[1] ** 3])

        x = np.array([0.7, 1.3])
        J_exact = np.array([[np.cos(0.7), 3 * 1.3 ** 2]])

        errors = {
            method: np.max(np.abs(finite_difference_jacobian(func, x, h=1e-4, method=method) - J_exact))
            for method in ("forward", "backward", "central")
        }

        assert errors["central"] < errors["forward"]
        assert errors["central"] < errors["backward"]

    def test_zero_width_input(self):
        """Test functions of an empty parameter vector give an empty Jacobian."""
        J = finite_difference_jacobian(lambda x: np.ones(2), np.zeros(0))

        assert J.shape == (2, 0)

    def test_invalid_finite_difference_method(self):
        """Test error handling for invalid finite difference method."""
        with pytest.raises(ValueError):
            finite_difference_jacobian(lambda x: x ** 2, np.array([1.0]), method="invalid")


class TestJacobianChecks:
    """Test analytic vs numeric comparisons."""

    def test_check_jacobian_correct(self):
        """Test Jacobian checker with correct implementation."""
        def func(x):
            return np.array([x[0] ** 2, x[0] * x[1]])

        def jacobian(x):
            return np.array([[2 * x[0], 0], [x[1], x[0]]])

        is_correct, max_error, _ = check_jacobian(func, jacobian, np.array([1.5, 2.5]))

        assert is_correct
        assert max_error < 1e-6

    def test_check_jacobian_incorrect(self):
        """Test Jacobian checker with incorrect implementation."""
        is_correct, max_error, _ = check_jacobian(
            lambda x: np.array([x[0] ** 2]),
            lambda x: np.array([[x[0]]]),
            np.array([2.0])
        )

        assert not is_correct
        assert max_error > 1e-3

    def test_compare_shape_mismatch(self):
        """Test differently shaped Jacobians are rejected."""
        with pytest.raises(ValueError):
            compare_jacobians(np.zeros((2, 3)), np.zeros((2, 4)))

    def test_compare_empty(self):
        """Test empty Jacobians compare equal."""
        is_close, max_error, _ = compare_jacobians(np.zeros((2, 0)), np.zeros((2, 0)))

        assert is_close
        assert max_error == 0.0

    def test_jacobian_tester_class(self, caplog):
        """Test JacobianTester over several points and its failure log."""
        def func(x):
            return np.array([x[0] ** 2, x[0] * x[1], x[1] ** 3])

        def jacobian(x):
            return np.array([[2 * x[0], 0], [x[1], x[0]], [0, 3 * x[1] ** 2]])

        tester = JacobianTester(atol=1e-6, rtol=1e-6)
        points = [np.array([1.0, 2.0]), np.array([3.0, 4.0]), np.array([-1.0, 0.5])]

        assert tester.test_jacobian(func, jacobian, points)

        with caplog.at_level(logging.WARNING, logger="vigeom.core.math.jacobians"):
            assert not tester.test_jacobian(func, lambda x: 2 * jacobian(x), points, name="doubled")

        assert "doubled point 0: FAIL" in caplog.text
