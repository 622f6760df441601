"""Stereographic projection of the unit sphere onto the plane z = 1."""

import numpy as np
from typing import List, Sequence

from ..math.constants import epsilon_sqrt
from .base import CameraModel, Projection, Unprojection, as_pixel, as_ray, tangent_seeds


class StereographicCamera(CameraModel):
    """Parameter-free stereographic model.

    m = (x, y) / (z + |p|) and the closed-form inverse
    ray = (2 * mx, 2 * my, 1 - r2) / (1 + r2). Projection is invalid for rays
    pointing (almost) straight backwards, where z + |p| <= sqrt(eps) * |p|;
    unprojection is defined for every point of the plane.
    """

    name = "stereographic"
    param_names = ()

    def __init__(self, params: Sequence[float] = ()):
        super().__init__(params)

    @classmethod
    def test_fixtures(cls) -> List["StereographicCamera"]:
        return [cls()]

    def project(self, p: np.ndarray, compute_jacobians: bool = False) -> Projection:
        p = as_ray(p, self.dtype)
        x, y, z = p[:3]

        rho = np.sqrt(x * x + y * y + z * z)
        den = z + rho
        if not den > epsilon_sqrt(self.dtype) * rho:
            return self._invalid_projection(compute_jacobians)

        mx = x / den
        my = y / den
        point = np.array([mx, my], dtype=self.dtype)
        if not compute_jacobians:
            return Projection(point, True)

        dx, dy, dz = tangent_seeds(3, True, self.dtype)
        drho = (x * dx + y * dy + z * dz) / rho
        dden = dz + drho

        d_point_d_ray = np.zeros((2, 4), dtype=self.dtype)
        d_point_d_ray[0, :3] = (dx - mx * dden) / den
        d_point_d_ray[1, :3] = (dy - my * dden) / den

        return Projection(point, True, d_point_d_ray, np.zeros((2, 0), dtype=self.dtype))

    def unproject(self, point: np.ndarray, compute_jacobians: bool = False) -> Unprojection:
        point = as_pixel(point, self.dtype)
        x, y = point

        r2 = x * x + y * y
        q = 1 + r2
        ray = np.array([2 * x / q, 2 * y / q, (1 - r2) / q, 0], dtype=self.dtype)
        if not compute_jacobians:
            return Unprojection(ray, True)

        dx, dy = tangent_seeds(2, True, self.dtype)
        dr2 = 2 * (x * dx + y * dy)

        d_ray_d_point = np.zeros((4, 2), dtype=self.dtype)
        d_ray_d_point[0] = (2 * dx - ray[0] * dr2) / q
        d_ray_d_point[1] = (2 * dy - ray[1] * dr2) / q
        d_ray_d_point[2] = (-dr2 - ray[2] * dr2) / q

        return Unprojection(ray, True, d_ray_d_point, np.zeros((4, 0), dtype=self.dtype))
