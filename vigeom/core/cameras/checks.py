"""Finite-difference validation of camera model Jacobians."""

import numpy as np
from typing import Tuple

from ..math.jacobians import compare_jacobians, finite_difference_jacobian
from .base import CameraModel, as_pixel, as_ray


def numeric_project_jacobians(
    camera: CameraModel, p: np.ndarray, h: float = 1e-6
) -> Tuple[np.ndarray, np.ndarray]:
    """Central-difference estimates of d_point_d_ray (2x4) and d_point_d_params (2xN)."""
    p = as_ray(p, camera.dtype)

    d_point_d_ray = finite_difference_jacobian(
        lambda dp: camera.project(p + dp).point, np.zeros(4), h
    )
    d_point_d_params = finite_difference_jacobian(
        lambda delta: camera.increment(delta).project(p).point, np.zeros(camera.N), h
    )
    return d_point_d_ray, d_point_d_params


def numeric_unproject_jacobians(
    camera: CameraModel, point: np.ndarray, h: float = 1e-6
) -> Tuple[np.ndarray, np.ndarray]:
    """Central-difference estimates of d_ray_d_point (4x2) and d_ray_d_params (4xN)."""
    point = as_pixel(point, camera.dtype)

    d_ray_d_point = finite_difference_jacobian(
        lambda dpoint: camera.unproject(point + dpoint).ray, np.zeros(2), h
    )
    d_ray_d_params = finite_difference_jacobian(
        lambda delta: camera.increment(delta).unproject(point).ray, np.zeros(camera.N), h
    )
    return d_ray_d_point, d_ray_d_params


def check_project_jacobians(
    camera: CameraModel,
    p: np.ndarray,
    h: float = 1e-6,
    atol: float = 1e-6,
    rtol: float = 1e-6
) -> Tuple[bool, float]:
    """Compare analytic projection Jacobians with finite differences.

    Returns:
        Tuple of (is_correct, max_error) over both Jacobians
    """
    result = camera.project(p, compute_jacobians=True)
    if not result.valid:
        raise ValueError(f"Ray {p} is outside the valid domain of {camera!r}")

    numeric_ray, numeric_params = numeric_project_jacobians(camera, p, h)
    ok_ray, err_ray, _ = compare_jacobians(result.d_point_d_ray, numeric_ray, atol, rtol)
    ok_params, err_params, _ = compare_jacobians(result.d_point_d_params, numeric_params, atol, rtol)
    return ok_ray and ok_params, max(err_ray, err_params)


def check_unproject_jacobians(
    camera: CameraModel,
    point: np.ndarray,
    h: float = 1e-6,
    atol: float = 1e-6,
    rtol: float = 1e-6
) -> Tuple[bool, float]:
    """Compare analytic unprojection Jacobians with finite differences.

    Returns:
        Tuple of (is_correct, max_error) over both Jacobians
    """
    result = camera.unproject(point, compute_jacobians=True)
    if not result.valid:
        raise ValueError(f"Point {point} is outside the valid domain of {camera!r}")

    numeric_point, numeric_params = numeric_unproject_jacobians(camera, point, h)
    ok_point, err_point, _ = compare_jacobians(result.d_ray_d_point, numeric_point, atol, rtol)
    ok_params, err_params, _ = compare_jacobians(result.d_ray_d_params, numeric_params, atol, rtol)
    return ok_point and ok_params, max(err_point, err_params)
