"""SE(3) rigid transform operations and the decoupled exp/log maps.

A transform is carried as a tuple (R, t) where R is a 3x3 rotation matrix
and t a 3-element translation. The decoupled tangent xi = [upsilon, omega]
keeps translation and rotation independent: unlike the canonical SE(3)
exponential, the translation is not mixed with the rotation.
"""

import numpy as np
from typing import Tuple

from .constants import float_dtype
from .so3 import so3_exp, so3_log


def se3_expd(xi: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Decoupled exponential: R = exp(xi[3:]), t = xi[:3].

    Args:
        xi: 6-element vector [upsilon, omega]

    Returns:
        Tuple of (R, t) where R is 3x3 rotation matrix, t is 3-element translation
    """
    xi = np.asarray(xi, dtype=float_dtype(xi))
    if xi.shape != (6,):
        raise ValueError(f"xi must be 6-element vector, got shape {xi.shape}")

    return so3_exp(xi[3:]), xi[:3].copy()


def se3_logd(R: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Decoupled logarithm, the exact inverse of :func:`se3_expd`.

    Args:
        R: 3x3 rotation matrix
        t: 3-element translation vector

    Returns:
        6-element vector [t, log(R)]
    """
    if R.shape != (3, 3):
        raise ValueError(f"R must be 3x3 matrix, got shape {R.shape}")
    if t.shape != (3,):
        raise ValueError(f"t must be 3-element vector, got shape {t.shape}")

    return np.concatenate([t, so3_log(R)])


def compose(R1: np.ndarray, t1: np.ndarray, R2: np.ndarray, t2: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Compose two SE(3) transformations: T1 * T2."""
    R = R1 @ R2
    t = R1 @ t2 + t1
    return R, t


def invert(R: np.ndarray, t: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """Invert SE(3) transformation."""
    R_inv = R.T
    t_inv = -R_inv @ t
    return R_inv, t_inv


def transform_point(R: np.ndarray, t: np.ndarray, p: np.ndarray) -> np.ndarray:
    """Apply (R, t) to a 3D point, or to the xyz part of a homogeneous 4-vector.

    The homogeneous weight scales the translation, so w = 0 maps a direction.
    """
    p = np.asarray(p)
    if p.shape == (3,):
        return R @ p + t
    if p.shape == (4,):
        return np.concatenate([R @ p[:3] + p[3] * t, p[3:]])
    raise ValueError(f"p must be 3- or 4-element vector, got shape {p.shape}")
