"""Capability contract shared by all camera models.

A camera model is an immutable parameter vector plus two pure functions:
``project`` maps a ray (x, y, z[, w]) to a pixel and ``unproject`` maps a
pixel back to a unit ray (x, y, z, 0). Both optionally return Jacobians
w.r.t. their input and w.r.t. the parameter vector.

Outside a model's valid domain the result has ``valid=False`` and the point
or ray (and any requested Jacobian) is filled with NaN. Callers are expected
to check ``valid``; the NaN only guards against silently using the value.
"""

import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Sequence, Tuple, Type, TypeVar

from ..math.constants import float_dtype

CameraT = TypeVar("CameraT", bound="CameraModel")


@dataclass(frozen=True)
class Projection:
    """Result of projecting a ray."""

    point: np.ndarray
    valid: bool
    d_point_d_ray: Optional[np.ndarray] = None
    d_point_d_params: Optional[np.ndarray] = None


@dataclass(frozen=True)
class Unprojection:
    """Result of unprojecting a pixel."""

    ray: np.ndarray
    valid: bool
    d_ray_d_point: Optional[np.ndarray] = None
    d_ray_d_params: Optional[np.ndarray] = None


def tangent_seeds(n: int, compute_jacobians: bool, dtype) -> np.ndarray:
    """Unit gradient rows for ``n`` independent inputs.

    Kernels propagate these rows through every intermediate quantity, so the
    gradient of any intermediate is an array over all inputs. When no
    Jacobians are wanted the rows have zero width and the propagation is free.
    """
    if compute_jacobians:
        return np.eye(n, dtype=dtype)
    return np.zeros((n, 0), dtype=dtype)


def normalize_with_gradient(v: np.ndarray, dv: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Normalize a 3-vector and carry its gradient rows through the division."""
    norm = np.sqrt(v @ v)
    u = v / norm
    du = (dv - np.outer(u, u @ dv)) / norm
    return u, du


def as_ray(p, dtype) -> np.ndarray:
    """Return ``p`` as a homogeneous 4-vector; a 3-vector gets w = 0."""
    p = np.asarray(p, dtype=dtype)
    if p.shape == (3,):
        return np.append(p, p.dtype.type(0))
    if p.shape != (4,):
        raise ValueError(f"Ray must be 3- or 4-element vector, got shape {p.shape}")
    return p


def as_pixel(point, dtype) -> np.ndarray:
    point = np.asarray(point, dtype=dtype)
    if point.shape != (2,):
        raise ValueError(f"Pixel must be 2-element vector, got shape {point.shape}")
    return point


class CameraModel(ABC):
    """Base class for camera models.

    Subclasses define ``name`` (the registry key), ``param_names`` and the
    project/unproject kernels. Parameters are stored read-only; ``increment``
    returns a new instance.
    """

    name: ClassVar[str]
    param_names: ClassVar[Tuple[str, ...]]

    def __init__(self, params: Sequence[float]):
        """Initialize from the ordered parameter vector.

        Args:
            params: Parameter values in the order given by ``param_names``
        """
        params = np.array(params, dtype=float_dtype(params))
        if params.shape != (self.N,):
            raise ValueError(
                f"{type(self).__name__} expects {self.N} parameters "
                f"{list(self.param_names)}, got shape {params.shape}"
            )
        params.setflags(write=False)
        self._params = params

    @property
    def N(self) -> int:
        """Number of parameters."""
        return len(self.param_names)

    @property
    def params(self) -> np.ndarray:
        """Read-only parameter vector."""
        return self._params

    @property
    def dtype(self) -> np.dtype:
        """Floating dtype all computations of this instance run in."""
        return self._params.dtype

    @abstractmethod
    def project(self, p: np.ndarray, compute_jacobians: bool = False) -> Projection:
        """Project a ray (x, y, z[, w]) to pixel coordinates.

        Args:
            p: 3- or 4-element ray; the homogeneous w is ignored
            compute_jacobians: Also return 2x4 d_point_d_ray and 2xN d_point_d_params

        Returns:
            Projection with the pixel, validity flag and optional Jacobians
        """
        pass

    @abstractmethod
    def unproject(self, point: np.ndarray, compute_jacobians: bool = False) -> Unprojection:
        """Lift a pixel to a unit ray (x, y, z, 0).

        Args:
            point: Pixel coordinates (u, v)
            compute_jacobians: Also return 4x2 d_ray_d_point and 4xN d_ray_d_params

        Returns:
            Unprojection with the ray, validity flag and optional Jacobians
        """
        pass

    @classmethod
    @abstractmethod
    def test_fixtures(cls: Type[CameraT]) -> List[CameraT]:
        """Deterministic instances spanning representative parameter ranges."""
        pass

    def increment(self: CameraT, delta: Sequence[float]) -> CameraT:
        """Return a new camera with parameters offset by ``delta``."""
        delta = np.asarray(delta, dtype=self.dtype)
        if delta.shape != (self.N,):
            raise ValueError(f"delta must have shape ({self.N},), got {delta.shape}")
        return type(self)(self._params + delta)

    def __add__(self: CameraT, delta: Sequence[float]) -> CameraT:
        return self.increment(delta)

    def project_many(self, rays: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        """Project a batch of rays.

        Args:
            rays: Mx3 or Mx4 array of rays

        Returns:
            Tuple of (Mx2 pixels, M-element validity mask); invalid rows are NaN
        """
        rays = np.atleast_2d(rays)
        if rays.ndim != 2 or rays.shape[1] not in (3, 4):
            raise ValueError(f"rays must be Mx3 or Mx4 array, got shape {rays.shape}")

        pixels = np.empty((len(rays), 2), dtype=self.dtype)
        valid = np.zeros(len(rays), dtype=bool)
        for i, ray in enumerate(rays):
            result = self.project(ray)
            pixels[i] = result.point
            valid[i] = result.valid
        return pixels, valid

    def _invalid_projection(self, compute_jacobians: bool) -> Projection:
        nan = np.nan
        if not compute_jacobians:
            return Projection(np.full(2, nan, dtype=self.dtype), False)
        return Projection(
            np.full(2, nan, dtype=self.dtype),
            False,
            np.full((2, 4), nan, dtype=self.dtype),
            np.full((2, self.N), nan, dtype=self.dtype),
        )

    def _invalid_unprojection(self, compute_jacobians: bool) -> Unprojection:
        nan = np.nan
        if not compute_jacobians:
            return Unprojection(np.full(4, nan, dtype=self.dtype), False)
        return Unprojection(
            np.full(4, nan, dtype=self.dtype),
            False,
            np.full((4, 2), nan, dtype=self.dtype),
            np.full((4, self.N), nan, dtype=self.dtype),
        )

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return bool(np.array_equal(self._params, other._params))

    def __hash__(self) -> int:
        return hash((type(self), tuple(self._params.tolist())))

    def __repr__(self) -> str:
        values = ", ".join(f"{n}={v:g}" for n, v in zip(self.param_names, self._params))
        return f"{type(self).__name__}({values})"


class FocalCameraModel(CameraModel):
    """Camera model whose first four parameters are fx, fy, cx, cy.

    Subclasses implement the model on normalized coordinates m = (mx, my);
    this class applies u = fx * mx + cx, v = fy * my + cy and chains the
    Jacobians. Shape parameters follow the four intrinsics.
    """

    @property
    def num_shape_params(self) -> int:
        return self.N - 4

    @abstractmethod
    def _project_normalized(
        self, x: float, y: float, z: float, grads: np.ndarray
    ) -> Tuple[bool, Optional[np.ndarray], Optional[np.ndarray]]:
        """Normalized projection.

        Args:
            x, y, z: Ray coordinates
            grads: Gradient rows of (x, y, z, *shape_params)

        Returns:
            Tuple of (valid, m, dm) where dm is 2 x (3 + num_shape_params)
        """
        pass

    @abstractmethod
    def _unproject_normalized(
        self, mx: float, my: float, grads: np.ndarray
    ) -> Tuple[bool, Optional[np.ndarray], Optional[np.ndarray]]:
        """Normalized unprojection.

        Args:
            mx, my: Normalized coordinates
            grads: Gradient rows of (mx, my, *shape_params)

        Returns:
            Tuple of (valid, unit 3D ray, dray) where dray is 3 x (2 + num_shape_params)
        """
        pass

    def project(self, p: np.ndarray, compute_jacobians: bool = False) -> Projection:
        p = as_ray(p, self.dtype)
        fx, fy, cx, cy = self._params[:4]

        grads = tangent_seeds(3 + self.num_shape_params, compute_jacobians, self.dtype)
        valid, m, dm = self._project_normalized(p[0], p[1], p[2], grads)
        if not valid:
            return self._invalid_projection(compute_jacobians)

        focal = np.array([fx, fy])
        point = focal * m + np.array([cx, cy])
        if not compute_jacobians:
            return Projection(point, True)

        d_point_d_ray = np.zeros((2, 4), dtype=self.dtype)
        d_point_d_ray[:, :3] = focal[:, None] * dm[:, :3]

        d_point_d_params = np.zeros((2, self.N), dtype=self.dtype)
        d_point_d_params[0, 0] = m[0]
        d_point_d_params[1, 1] = m[1]
        d_point_d_params[0, 2] = 1
        d_point_d_params[1, 3] = 1
        d_point_d_params[:, 4:] = focal[:, None] * dm[:, 3:]

        return Projection(point, True, d_point_d_ray, d_point_d_params)

    def unproject(self, point: np.ndarray, compute_jacobians: bool = False) -> Unprojection:
        point = as_pixel(point, self.dtype)
        fx, fy, cx, cy = self._params[:4]

        mx = (point[0] - cx) / fx
        my = (point[1] - cy) / fy

        grads = tangent_seeds(2 + self.num_shape_params, compute_jacobians, self.dtype)
        valid, ray3, dray = self._unproject_normalized(mx, my, grads)
        if not valid:
            return self._invalid_unprojection(compute_jacobians)

        ray = np.zeros(4, dtype=self.dtype)
        ray[:3] = ray3
        if not compute_jacobians:
            return Unprojection(ray, True)

        d_ray_d_point = np.zeros((4, 2), dtype=self.dtype)
        d_ray_d_point[:3, 0] = dray[:, 0] / fx
        d_ray_d_point[:3, 1] = dray[:, 1] / fy

        # dmx/dfx = -mx/fx, dmx/dcx = -1/fx and likewise for y
        d_ray_d_params = np.zeros((4, self.N), dtype=self.dtype)
        d_ray_d_params[:3, 0] = -mx * d_ray_d_point[:3, 0]
        d_ray_d_params[:3, 1] = -my * d_ray_d_point[:3, 1]
        d_ray_d_params[:3, 2] = -d_ray_d_point[:3, 0]
        d_ray_d_params[:3, 3] = -d_ray_d_point[:3, 1]
        d_ray_d_params[:3, 4:] = dray[:, 2:]

        return Unprojection(ray, True, d_ray_d_point, d_ray_d_params)
