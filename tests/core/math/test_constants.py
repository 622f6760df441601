"""Tests for the shared small-angle threshold."""

import numpy as np

from vigeom.core.math.constants import EPSILON_F32, EPSILON_F64, epsilon, epsilon_sqrt, is_small_angle
from vigeom.core.math.lie_jacobians import right_jacobian_so3
from vigeom.core.math.quaternions import quat_exp


class TestSmallAngleThreshold:
    """Test the threshold shared by the exp map and the SO(3) Jacobians."""

    def test_epsilon_per_dtype(self):
        """Test thresholds for double and single precision."""
        assert epsilon(np.float64) == EPSILON_F64
        assert epsilon(np.float32) == EPSILON_F32
        assert abs(epsilon_sqrt(np.float64) - 1e-5) < 1e-20

    def test_boundary_is_inclusive(self):
        """Test an angle equal to epsilon counts as small."""
        assert is_small_angle(EPSILON_F64)
        assert not is_small_angle(1.01 * EPSILON_F64)
        assert is_small_angle(EPSILON_F32, np.float32)
        assert not is_small_angle(1.01 * EPSILON_F32, np.float32)

    def test_exp_and_jacobian_switch_together(self):
        """Test both take their limit branch at exactly epsilon."""
        phi = np.array([EPSILON_F64, 0.0, 0.0])

        np.testing.assert_array_equal(right_jacobian_so3(phi), np.eye(3))
        q = quat_exp(phi)
        assert q[0] == 1 - EPSILON_F64 ** 2 / 8 + EPSILON_F64 ** 4 / 384
        assert q[1] == (0.5 - EPSILON_F64 ** 2 / 48 + EPSILON_F64 ** 4 / 3840) * EPSILON_F64
