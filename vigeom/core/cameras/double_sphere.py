"""Double sphere camera model."""

import numpy as np
from typing import List

from ..math.constants import epsilon_sqrt
from .base import FocalCameraModel
from .unified import fov_weight


class DoubleSphereCamera(FocalCameraModel):
    """Projection through two unit spheres offset by xi, for very wide fisheye lenses.

    Parameters: [fx, fy, cx, cy, xi, alpha].

    With d1 = |(x, y, z)|, k = xi * d1 + z and d2 = |(x, y, k)|:
    m = (x, y) / (alpha * d2 + (1 - alpha) * k).

    Projection is valid when z > -w2 * d1 with
    w2 = (w1 + xi) / sqrt(2 * w1 * xi + xi^2 + 1) and w1 from
    :func:`fov_weight`, and the denominator is strictly positive.
    Unprojection is invalid beyond r2 = 1 / (2 * alpha - 1) for alpha > 0.5
    and where the second sphere cannot be reached.
    """

    name = "ds"
    param_names = ("fx", "fy", "cx", "cy", "xi", "alpha")

    @classmethod
    def test_fixtures(cls) -> List["DoubleSphereCamera"]:
        return [
            cls([0.5 * 805, 0.5 * 800, 505.0, 509.0, 0.5 * 0.693120, 0.5]),
            cls([500.0, 500.0, 320.0, 240.0, -0.2, 0.6]),
            cls([380.0, 385.0, 330.0, 250.0, 0.6, 0.55]),
        ]

    def _project_normalized(self, x, y, z, grads):
        dx, dy, dz, dxi, dalpha = grads
        xi, alpha = self._params[4:]

        r2 = x * x + y * y
        d1 = np.sqrt(r2 + z * z)
        k = xi * d1 + z
        d2 = np.sqrt(r2 + k * k)
        den = alpha * d2 + (1 - alpha) * k

        w1 = fov_weight(alpha)
        w2 = (w1 + xi) / np.sqrt(2 * w1 * xi + xi * xi + 1)
        if not z > -w2 * d1 or den < epsilon_sqrt(self.dtype):
            return False, None, None

        dd1 = (x * dx + y * dy + z * dz) / d1
        dk = dxi * d1 + xi * dd1 + dz
        dd2 = (x * dx + y * dy + k * dk) / d2
        dden = dalpha * (d2 - k) + alpha * dd2 + (1 - alpha) * dk

        mx = x / den
        my = y / den
        dmx = (dx - mx * dden) / den
        dmy = (dy - my * dden) / den

        return True, np.array([mx, my]), np.stack([dmx, dmy])

    def _unproject_normalized(self, mx, my, grads):
        dmx, dmy, dxi, dalpha = grads
        xi, alpha = self._params[4:]

        r2 = mx * mx + my * my
        t = 1 - (2 * alpha - 1) * r2
        if t <= 0:
            return False, None, None

        st = np.sqrt(t)
        den = alpha * st + 1 - alpha
        if den <= 0:
            return False, None, None

        num = 1 - alpha * alpha * r2
        mz = num / den
        mz2 = mz * mz

        s2 = mz2 + (1 - xi * xi) * r2
        if s2 <= 0:
            return False, None, None
        s = np.sqrt(s2)
        q = mz2 + r2

        dr2 = 2 * (mx * dmx + my * dmy)
        dt = -2 * dalpha * r2 - (2 * alpha - 1) * dr2
        dst = dt / (2 * st)
        dden = dalpha * (st - 1) + alpha * dst
        dnum = -(2 * alpha * dalpha * r2 + alpha * alpha * dr2)
        dmz = (dnum - mz * dden) / den

        ds2 = 2 * mz * dmz - 2 * xi * dxi * r2 + (1 - xi * xi) * dr2
        ds = ds2 / (2 * s)
        dq = 2 * mz * dmz + dr2

        # Scale that puts (mx, my, mz) back on the unit sphere shifted by xi
        scale = (mz * xi + s) / q
        dscale = (dmz * xi + mz * dxi + ds - scale * dq) / q

        ray = np.array([scale * mx, scale * my, scale * mz - xi])
        dray = np.stack([
            dscale * mx + scale * dmx,
            dscale * my + scale * dmy,
            dscale * mz + scale * dmz - dxi,
        ])
        return True, ray, dray
