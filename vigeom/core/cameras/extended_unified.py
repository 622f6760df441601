"""Extended unified camera model (EUCM)."""

from typing import List

from ..math.constants import epsilon_sqrt
from .base import FocalCameraModel
from .unified import spherical_project, spherical_unproject


class ExtendedUnifiedCamera(FocalCameraModel):
    """Unified model projecting onto an ellipsoid instead of a sphere.

    Parameters: [fx, fy, cx, cy, alpha, beta].

    m = (x, y) / (alpha * d + (1 - alpha) * z) with
    d = sqrt(beta * (x^2 + y^2) + z^2). With beta = 1 this is the unified
    model. Projection is valid when z > -w * d and the denominator is
    strictly positive; unprojection is invalid beyond
    r2 = 1 / (beta * (2 * alpha - 1)) when alpha > 0.5.
    """

    name = "eucm"
    param_names = ("fx", "fy", "cx", "cy", "alpha", "beta")

    @classmethod
    def test_fixtures(cls) -> List["ExtendedUnifiedCamera"]:
        return [
            cls([0.5 * 500, 0.5 * 500, 319.5, 239.5, 0.51231234, 0.9]),
            cls([460.0, 465.0, 365.0, 249.0, 0.6, 1.1]),
            cls([400.0, 410.0, 320.0, 240.0, 0.4, 0.8]),
        ]

    def _project_normalized(self, x, y, z, grads):
        dx, dy, dz, dalpha, dbeta = grads
        alpha, beta = self._params[4:]
        return spherical_project(
            x, y, z, alpha, beta, dx, dy, dz, dalpha, dbeta, epsilon_sqrt(self.dtype)
        )

    def _unproject_normalized(self, mx, my, grads):
        dmx, dmy, dalpha, dbeta = grads
        alpha, beta = self._params[4:]
        return spherical_unproject(mx, my, alpha, beta, dmx, dmy, dalpha, dbeta)
