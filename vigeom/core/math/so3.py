"""SO(3) rotation group primitives."""

import numpy as np

from .constants import float_dtype
from .quaternions import quat_exp, quat_from_matrix, quat_log, quat_to_matrix


def hat(v: np.ndarray) -> np.ndarray:
    """Create skew-symmetric matrix from 3D vector, so that hat(a) @ b == cross(a, b)."""
    if v.shape != (3,):
        raise ValueError(f"v must be 3-element vector, got shape {v.shape}")

    return np.array([
        [0, -v[2], v[1]],
        [v[2], 0, -v[0]],
        [-v[1], v[0], 0]
    ], dtype=float_dtype(v))


def vee(S: np.ndarray) -> np.ndarray:
    """Inverse of :func:`hat`."""
    if S.shape != (3, 3):
        raise ValueError(f"S must be 3x3 matrix, got shape {S.shape}")

    return np.array([S[2, 1], S[0, 2], S[1, 0]], dtype=float_dtype(S))


def so3_exp(phi: np.ndarray) -> np.ndarray:
    """Rotation matrix of the rotation vector ``phi``."""
    phi = np.asarray(phi, dtype=float_dtype(phi))
    return quat_to_matrix(quat_exp(phi))


def so3_log(R: np.ndarray) -> np.ndarray:
    """Rotation vector of the rotation matrix ``R``, with norm in [0, pi]."""
    R = np.asarray(R, dtype=float_dtype(R))
    return quat_log(quat_from_matrix(R))
