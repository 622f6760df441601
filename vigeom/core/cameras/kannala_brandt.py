"""Kannala-Brandt (equidistant) fisheye camera model with four coefficients."""

import logging
import numpy as np
from typing import List, Optional, Tuple

from ..math.constants import epsilon, epsilon_sqrt
from .base import FocalCameraModel, normalize_with_gradient

logger = logging.getLogger(__name__)


class KannalaBrandtCamera4(FocalCameraModel):
    """Polynomial angle model.

    Parameters: [fx, fy, cx, cy, k1, k2, k3, k4].

    The angle theta between the ray and the optical axis is distorted to
    d(theta) = theta + k1 theta^3 + k2 theta^5 + k3 theta^7 + k4 theta^9 and
    m = d(theta) * (x, y) / r. Near the optical axis (r < sqrt(eps)) the
    perspective limit m = (x, y) / z is used, which requires z >= sqrt(eps).

    Unprojection inverts d with Newton's method. It is invalid when the
    iteration does not converge or lands outside [0, pi] or on a
    non-increasing part of the polynomial.
    """

    name = "kb4"
    param_names = ("fx", "fy", "cx", "cy", "k1", "k2", "k3", "k4")

    max_newton_iterations = 20

    @classmethod
    def test_fixtures(cls) -> List["KannalaBrandtCamera4"]:
        return [
            cls([379.045, 379.008, 505.512, 509.969,
                 0.00693023, -0.0013828, -0.000272596, -0.000452646]),
            cls([500.0, 500.0, 320.0, 240.0, 0.0, 0.0, 0.0, 0.0]),
            cls([420.0, 415.0, 330.0, 250.0, -0.01, 0.02, -0.005, 0.001]),
        ]

    def _distortion(self, theta: float) -> Tuple[float, float]:
        """Return d(theta) and d'(theta)."""
        k1, k2, k3, k4 = self._params[4:]
        theta2 = theta * theta
        d = theta * (1 + theta2 * (k1 + theta2 * (k2 + theta2 * (k3 + theta2 * k4))))
        d_prime = 1 + theta2 * (3 * k1 + theta2 * (5 * k2 + theta2 * (7 * k3 + theta2 * 9 * k4)))
        return d, d_prime

    def _solve_theta(self, r_theta: float) -> Optional[float]:
        """Solve d(theta) = r_theta, starting from the undistorted guess."""
        tolerance = epsilon(self.dtype)
        theta = r_theta
        for _ in range(self.max_newton_iterations):
            d, d_prime = self._distortion(theta)
            if d_prime <= 0:
                break
            step = (d - r_theta) / d_prime
            theta = theta - step
            if abs(step) < tolerance:
                return theta

        logger.debug(f"{self!r}: angle polynomial did not converge for r_theta={r_theta:g}")
        return None

    def _project_normalized(self, x, y, z, grads):
        dx, dy, dz, dk1, dk2, dk3, dk4 = grads
        r = np.sqrt(x * x + y * y)

        if r < epsilon_sqrt(self.dtype):
            if z < epsilon_sqrt(self.dtype):
                return False, None, None
            mx = x / z
            my = y / z
            dmx = (dx - mx * dz) / z
            dmy = (dy - my * dz) / z
            return True, np.array([mx, my]), np.stack([dmx, dmy])

        theta = np.arctan2(r, z)
        d, d_prime = self._distortion(theta)

        theta3 = theta ** 3
        theta5 = theta3 * theta * theta
        theta7 = theta5 * theta * theta
        theta9 = theta7 * theta * theta

        dr = (x * dx + y * dy) / r
        dtheta = (z * dr - r * dz) / (r * r + z * z)
        dd = d_prime * dtheta + theta3 * dk1 + theta5 * dk2 + theta7 * dk3 + theta9 * dk4

        scale = d / r
        dscale = (dd - scale * dr) / r

        mx = x * scale
        my = y * scale
        dmx = dx * scale + x * dscale
        dmy = dy * scale + y * dscale

        return True, np.array([mx, my]), np.stack([dmx, dmy])

    def _unproject_normalized(self, mx, my, grads):
        dmx, dmy, dk1, dk2, dk3, dk4 = grads
        r_theta = np.sqrt(mx * mx + my * my)

        if r_theta < epsilon_sqrt(self.dtype):
            v = np.array([mx, my, 1], dtype=self.dtype)
            dv = np.stack([dmx, dmy, np.zeros_like(dmx)])
            ray, dray = normalize_with_gradient(v, dv)
            return True, ray, dray

        theta = self._solve_theta(r_theta)
        if theta is None or not 0 <= theta <= np.pi:
            return False, None, None

        _, d_prime = self._distortion(theta)
        if d_prime <= 0:
            return False, None, None

        theta3 = theta ** 3
        theta5 = theta3 * theta * theta
        theta7 = theta5 * theta * theta
        theta9 = theta7 * theta * theta

        # Implicit differentiation of d(theta; k) = r_theta
        dr_theta = (mx * dmx + my * dmy) / r_theta
        dtheta = (dr_theta - (theta3 * dk1 + theta5 * dk2 + theta7 * dk3 + theta9 * dk4)) / d_prime

        sin_theta = np.sin(theta)
        cos_theta = np.cos(theta)
        scale = sin_theta / r_theta
        dscale = (cos_theta * dtheta - scale * dr_theta) / r_theta

        ray = np.array([mx * scale, my * scale, cos_theta])
        dray = np.stack([
            dmx * scale + mx * dscale,
            dmy * scale + my * dscale,
            -sin_theta * dtheta,
        ])
        return True, ray, dray
