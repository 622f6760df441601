"""Finite-difference checks for analytic Jacobians."""

import logging
import numpy as np
from typing import Callable, Sequence, Tuple

logger = logging.getLogger(__name__)


def finite_difference_jacobian(
    func: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    h: float = 1e-6,
    method: str = "central"
) -> np.ndarray:
    """Compute Jacobian using finite differences.

    Args:
        func: Function that takes x and returns a vector
        x: Input point
        h: Step size for finite differences
        method: Finite difference method ("forward", "backward", "central")

    Returns:
        Jacobian matrix J where J[i,j] = df_i/dx_j
    """
    x = np.atleast_1d(np.asarray(x, dtype=np.float64))
    f0 = np.atleast_1d(func(x))

    m, n = len(f0), len(x)
    J = np.zeros((m, n))

    if method not in ("forward", "backward", "central"):
        raise ValueError(f"Unknown finite difference method: {method}")

    for j in range(n):
        x_plus = x.copy()
        x_minus = x.copy()
        x_plus[j] += h
        x_minus[j] -= h

        if method == "forward":
            J[:, j] = (np.atleast_1d(func(x_plus)) - f0) / h
        elif method == "backward":
            J[:, j] = (f0 - np.atleast_1d(func(x_minus))) / h
        else:
            J[:, j] = (np.atleast_1d(func(x_plus)) - np.atleast_1d(func(x_minus))) / (2 * h)

    return J


def check_jacobian(
    func: Callable[[np.ndarray], np.ndarray],
    jacobian_func: Callable[[np.ndarray], np.ndarray],
    x: np.ndarray,
    h: float = 1e-6,
    atol: float = 1e-6,
    rtol: float = 1e-6
) -> Tuple[bool, float, np.ndarray]:
    """Check analytic Jacobian against central finite differences.

    Args:
        func: Function to differentiate
        jacobian_func: Function that computes the analytic Jacobian
        x: Input point
        h: Step size for finite differences
        atol: Absolute tolerance
        rtol: Relative tolerance

    Returns:
        Tuple of (is_correct, max_error, error_matrix)
    """
    J_analytic = np.atleast_2d(jacobian_func(x))
    J_numeric = finite_difference_jacobian(func, x, h)

    return compare_jacobians(J_analytic, J_numeric, atol=atol, rtol=rtol)


def compare_jacobians(
    J_analytic: np.ndarray,
    J_numeric: np.ndarray,
    atol: float = 1e-6,
    rtol: float = 1e-6
) -> Tuple[bool, float, np.ndarray]:
    """Compare two Jacobians entrywise.

    Returns:
        Tuple of (is_close, max_error, error_matrix). max_error is relative for
        entries larger than one in magnitude and absolute otherwise.
    """
    if J_analytic.shape != J_numeric.shape:
        raise ValueError(
            f"Jacobian shapes differ: analytic {J_analytic.shape}, numeric {J_numeric.shape}"
        )

    error = np.abs(J_analytic - J_numeric)
    if error.size == 0:
        return True, 0.0, error

    max_error = float(np.max(error / np.maximum(1.0, np.abs(J_numeric))))

    is_close = bool(np.allclose(J_analytic, J_numeric, atol=atol, rtol=rtol))
    return is_close, max_error, error


class JacobianTester:
    """Helper class for testing Jacobian implementations at many points."""

    def __init__(self, atol: float = 1e-6, rtol: float = 1e-6, h: float = 1e-6):
        """Initialize tester with tolerances and finite-difference step."""
        self.atol = atol
        self.rtol = rtol
        self.h = h

    def test_jacobian(
        self,
        func: Callable[[np.ndarray], np.ndarray],
        jacobian_func: Callable[[np.ndarray], np.ndarray],
        test_points: Sequence[np.ndarray],
        name: str = "jacobian"
    ) -> bool:
        """Test Jacobian at multiple points.

        Args:
            func: Function to differentiate
            jacobian_func: Function that computes the analytic Jacobian
            test_points: Input points to check
            name: Label used in log messages

        Returns:
            True if all points pass
        """
        all_passed = True

        for i, x in enumerate(test_points):
            is_correct, max_error, _ = check_jacobian(
                func, jacobian_func, x, h=self.h, atol=self.atol, rtol=self.rtol
            )

            if is_correct:
                logger.debug(f"{name} point {i}: PASS, max error: {max_error:.2e}")
            else:
                logger.warning(f"{name} point {i}: FAIL, max error: {max_error:.2e}")

            all_passed = all_passed and is_correct

        return all_passed
