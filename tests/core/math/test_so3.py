"""Tests for SO(3) primitives."""

import numpy as np
import pytest
from scipy.spatial.transform import Rotation

from vigeom.core.math.so3 import hat, so3_exp, so3_log, vee


ROTATION_VECTORS = [
    np.array([0.0, 0.0, 0.0]),
    np.array([1e-12, -3e-12, 2e-12]),
    np.array([1e-6, 2e-6, -1e-6]),
    np.array([0.1, 0.2, 0.3]),
    np.array([-1.2, 0.4, 0.9]),
    np.array([0.0, 3.0, 0.0]),
    np.array([2.0, -1.5, 0.5]),
]


class TestSO3:
    """Test SO(3) operations."""

    def test_hat(self):
        """Test skew-symmetric matrix construction."""
        v = np.array([1.0, 2.0, 3.0])
        S = hat(v)

        expected = np.array([[0, -3, 2], [3, 0, -1], [-2, 1, 0]])
        np.testing.assert_allclose(S, expected)
        np.testing.assert_allclose(S, -S.T)

    def test_hat_is_cross_product(self):
        """Test hat(a) @ b == a x b."""
        a = np.array([0.3, -1.2, 2.0])
        b = np.array([1.5, 0.7, -0.4])

        np.testing.assert_allclose(hat(a) @ b, np.cross(a, b), atol=1e-15)

    def test_vee_inverts_hat(self):
        """Test vee(hat(v)) == v."""
        v = np.array([-0.5, 4.0, 1.25])
        np.testing.assert_array_equal(vee(hat(v)), v)

    @pytest.mark.parametrize("phi", ROTATION_VECTORS)
    def test_exp_matches_scipy(self, phi):
        """Test exponential map against scipy's rotation vector conversion."""
        R = so3_exp(phi)
        R_expected = Rotation.from_rotvec(phi).as_matrix()

        np.testing.assert_allclose(R, R_expected, atol=1e-12)
        np.testing.assert_allclose(R @ R.T, np.eye(3), atol=1e-12)
        assert abs(np.linalg.det(R) - 1.0) < 1e-12

    @pytest.mark.parametrize("phi", ROTATION_VECTORS)
    def test_log_matches_scipy(self, phi):
        """Test logarithm against scipy for rotations below pi."""
        R = Rotation.from_rotvec(phi).as_matrix()

        np.testing.assert_allclose(so3_log(R), Rotation.from_matrix(R).as_rotvec(), atol=1e-10)

    @pytest.mark.parametrize("phi", ROTATION_VECTORS)
    def test_exp_log_round_trip(self, phi):
        """Test log(exp(phi)) == phi."""
        np.testing.assert_allclose(so3_log(so3_exp(phi)), phi, atol=1e-10)

    def test_log_norm_at_most_pi(self):
        """Test rotations past a half turn are wrapped to the shorter vector."""
        phi = np.array([0.0, 0.0, 1.5 * np.pi])
        phi_log = so3_log(so3_exp(phi))

        np.testing.assert_allclose(phi_log, [0.0, 0.0, -0.5 * np.pi], atol=1e-12)

    def test_exp_single_precision(self):
        """Test computation stays in single precision for float32 input."""
        phi = np.array([0.1, -0.2, 0.3], dtype=np.float32)
        R = so3_exp(phi)

        assert R.dtype == np.float32
        np.testing.assert_allclose(R, Rotation.from_rotvec(phi.astype(np.float64)).as_matrix(), atol=1e-6)

    def test_invalid_input_shapes(self):
        """Test error handling for invalid input shapes."""
        with pytest.raises(ValueError):
            hat(np.array([1.0, 2.0]))

        with pytest.raises(ValueError):
            vee(np.eye(2))

        with pytest.raises(ValueError):
            so3_exp(np.zeros(4))
