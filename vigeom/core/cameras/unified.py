"""Unified camera model (UCM) and the spherical kernels it shares with EUCM."""

import numpy as np
from typing import List

from ..math.constants import epsilon_sqrt
from .base import FocalCameraModel, normalize_with_gradient


def fov_weight(alpha: float) -> float:
    """Bound w of the valid domain z > -w * d for the alpha-parametrized models."""
    if alpha > 0.5:
        return (1 - alpha) / alpha
    return alpha / (1 - alpha)


def spherical_project(x, y, z, alpha, beta, dx, dy, dz, dalpha, dbeta, min_denominator):
    """m = (x, y) / (alpha * d + (1 - alpha) * z) with d = sqrt(beta * (x^2 + y^2) + z^2).

    The d* arguments are gradient rows of the corresponding inputs.

    Returns:
        Tuple of (valid, m, dm)
    """
    r2 = x * x + y * y
    rho = np.sqrt(beta * r2 + z * z)
    den = alpha * rho + (1 - alpha) * z

    if not z > -fov_weight(alpha) * rho or den < min_denominator:
        return False, None, None

    drho = (dbeta * r2 + 2 * beta * (x * dx + y * dy) + 2 * z * dz) / (2 * rho)
    dden = dalpha * (rho - z) + alpha * drho + (1 - alpha) * dz

    mx = x / den
    my = y / den
    dmx = (dx - mx * dden) / den
    dmy = (dy - my * dden) / den

    return True, np.array([mx, my]), np.stack([dmx, dmy])


def spherical_unproject(mx, my, alpha, beta, dmx, dmy, dalpha, dbeta):
    """Lift normalized coordinates back onto the unit sphere.

    mz = (1 - beta * alpha^2 * r2) / (alpha * sqrt(1 - (2 * alpha - 1) * beta * r2) + 1 - alpha)
    and the ray is (mx, my, mz) normalized. Invalid when the square root
    argument is not positive, i.e. r2 >= 1 / (beta * (2 * alpha - 1)) for alpha > 0.5.

    Returns:
        Tuple of (valid, ray, dray)
    """
    r2 = mx * mx + my * my
    t = 1 - (2 * alpha - 1) * beta * r2
    if t <= 0:
        return False, None, None

    st = np.sqrt(t)
    den = alpha * st + 1 - alpha
    if den <= 0:
        return False, None, None

    dr2 = 2 * (mx * dmx + my * dmy)
    dt = -2 * dalpha * beta * r2 - (2 * alpha - 1) * (dbeta * r2 + beta * dr2)
    dst = dt / (2 * st)
    dden = dalpha * (st - 1) + alpha * dst

    num = 1 - beta * alpha * alpha * r2
    dnum = -(dbeta * alpha * alpha * r2 + 2 * beta * alpha * dalpha * r2 + beta * alpha * alpha * dr2)

    mz = num / den
    dmz = (dnum - mz * dden) / den

    v = np.array([mx, my, mz])
    dv = np.stack([dmx, dmy, dmz])
    ray, dray = normalize_with_gradient(v, dv)
    return True, ray, dray


class UnifiedCamera(FocalCameraModel):
    """Unified camera model in the alpha parametrization.

    Parameters: [fx, fy, cx, cy, alpha].

    A ray projects through m = (x, y) / (alpha * d + (1 - alpha) * z) with
    d = |(x, y, z)|. Projection is valid when z > -w * d (w from
    :func:`fov_weight`) and the denominator is strictly positive.
    Unprojection is invalid beyond r2 = 1 / (2 * alpha - 1) when alpha > 0.5.
    """

    name = "ucm"
    param_names = ("fx", "fy", "cx", "cy", "alpha")

    @classmethod
    def test_fixtures(cls) -> List["UnifiedCamera"]:
        return [
            cls([0.5 * 500, 0.5 * 500, 319.5, 239.5, 0.51231234]),
            cls([460.0, 465.0, 365.0, 249.0, 0.65]),
            cls([400.0, 410.0, 320.0, 240.0, 0.3]),
        ]

    def _project_normalized(self, x, y, z, grads):
        dx, dy, dz, dalpha = grads
        alpha = self._params[4]
        return spherical_project(
            x, y, z, alpha, 1, dx, dy, dz, dalpha, np.zeros_like(dalpha), epsilon_sqrt(self.dtype)
        )

    def _unproject_normalized(self, mx, my, grads):
        dmx, dmy, dalpha = grads
        alpha = self._params[4]
        return spherical_unproject(mx, my, alpha, 1, dmx, dmy, dalpha, np.zeros_like(dalpha))
