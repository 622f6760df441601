"""Field-of-view (FOV) camera model."""

import numpy as np
from typing import List

from ..math.constants import epsilon_sqrt
from .base import FocalCameraModel, normalize_with_gradient


class FovCamera(FocalCameraModel):
    """Radial model with an explicit field-of-view parameter w.

    Parameters: [fx, fy, cx, cy, w].

    m = (x, y) * atan2(2 * tan(w / 2) * r, z) / (w * r) with r = |(x, y)|.
    Near the optical axis the limit 2 * tan(w / 2) / (w * z) is used, which
    requires z >= sqrt(eps). The model is singular at w = 0 and w = pi, so
    both projection and unprojection are invalid unless 0 < w < pi.
    Unprojection is additionally invalid once the distorted angle |m| * w
    reaches pi.
    """

    name = "fov"
    param_names = ("fx", "fy", "cx", "cy", "w")

    @classmethod
    def test_fixtures(cls) -> List["FovCamera"]:
        return [
            cls([408.12, 408.12, 318.5, 238.5, 0.925]),
            cls([500.0, 500.0, 320.0, 240.0, 0.5]),
            cls([380.0, 385.0, 330.0, 250.0, 1.3]),
        ]

    def _valid_w(self, w: float) -> bool:
        eps = epsilon_sqrt(self.dtype)
        return eps < w < np.pi - eps

    def _project_normalized(self, x, y, z, grads):
        dx, dy, dz, dw = grads
        w = self._params[4]
        if not self._valid_w(w):
            return False, None, None

        tan_w_2 = np.tan(w / 2)
        dtan_w_2 = dw * (1 + tan_w_2 * tan_w_2) / 2

        r = np.sqrt(x * x + y * y)
        if r < epsilon_sqrt(self.dtype):
            if z < epsilon_sqrt(self.dtype):
                return False, None, None
            factor = 2 * tan_w_2 / (w * z)
            dfactor = 2 * dtan_w_2 / (w * z) - factor * (dw / w + dz / z)
        else:
            dr = (x * dx + y * dy) / r
            a = 2 * tan_w_2 * r
            da = 2 * (dtan_w_2 * r + tan_w_2 * dr)
            angle = np.arctan2(a, z)
            dangle = (z * da - a * dz) / (a * a + z * z)

            factor = angle / (w * r)
            dfactor = (dangle - factor * (dw * r + w * dr)) / (w * r)

        mx = x * factor
        my = y * factor
        dmx = dx * factor + x * dfactor
        dmy = dy * factor + y * dfactor

        return True, np.array([mx, my]), np.stack([dmx, dmy])

    def _unproject_normalized(self, mx, my, grads):
        dmx, dmy, dw = grads
        w = self._params[4]
        if not self._valid_w(w):
            return False, None, None

        tan_w_2 = np.tan(w / 2)
        dtan_w_2 = dw * (1 + tan_w_2 * tan_w_2) / 2

        r = np.sqrt(mx * mx + my * my)
        if r < epsilon_sqrt(self.dtype):
            # sin(r * w) / r -> w
            v = np.array([w * mx, w * my, 2 * tan_w_2], dtype=self.dtype)
            dv = np.stack([dw * mx + w * dmx, dw * my + w * dmy, 2 * dtan_w_2])
            ray, dray = normalize_with_gradient(v, dv)
            return True, ray, dray

        angle = r * w
        if angle >= np.pi:
            return False, None, None

        dr = (mx * dmx + my * dmy) / r
        dangle = dr * w + r * dw

        sin_angle = np.sin(angle)
        cos_angle = np.cos(angle)
        scale = sin_angle / r
        dscale = (cos_angle * dangle - scale * dr) / r

        v = np.array([scale * mx, scale * my, 2 * tan_w_2 * cos_angle])
        dv = np.stack([
            dscale * mx + scale * dmx,
            dscale * my + scale * dmy,
            2 * (dtan_w_2 * cos_angle - tan_w_2 * sin_angle * dangle),
        ])
        ray, dray = normalize_with_gradient(v, dv)
        return True, ray, dray
