"""Pinhole camera model."""

import numpy as np
from typing import List

from ..math.constants import epsilon_sqrt
from .base import FocalCameraModel, normalize_with_gradient


class PinholeCamera(FocalCameraModel):
    """Perspective projection u = fx * x / z + cx, v = fy * y / z + cy.

    Parameters: [fx, fy, cx, cy].

    Projection is valid only for rays in front of the camera with
    z >= sqrt(eps); the field of view approaches 180 degrees and the model
    is singular on the image plane z = 0. Every pixel unprojects to a valid ray.
    """

    name = "pinhole"
    param_names = ("fx", "fy", "cx", "cy")

    @classmethod
    def test_fixtures(cls) -> List["PinholeCamera"]:
        return [
            cls([500.0, 500.0, 320.0, 240.0]),
            cls([0.5 * 805, 0.5 * 800, 505.0, 509.0]),
            cls([380.5, 391.25, 330.0, 245.5]),
        ]

    def _project_normalized(self, x, y, z, grads):
        if z < epsilon_sqrt(self.dtype):
            return False, None, None

        dx, dy, dz = grads
        mx = x / z
        my = y / z
        dmx = (dx - mx * dz) / z
        dmy = (dy - my * dz) / z

        return True, np.array([mx, my]), np.stack([dmx, dmy])

    def _unproject_normalized(self, mx, my, grads):
        dmx, dmy = grads
        v = np.array([mx, my, 1], dtype=self.dtype)
        dv = np.stack([dmx, dmy, np.zeros_like(dmx)])

        ray, dray = normalize_with_gradient(v, dv)
        return True, ray, dray
