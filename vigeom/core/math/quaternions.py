"""Quaternion operations backing the SO(3) exponential and logarithm."""

import numpy as np

from .constants import epsilon, float_dtype, is_small_angle


def quat_normalize(q: np.ndarray) -> np.ndarray:
    """Normalize quaternion to unit length."""
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    norm = np.linalg.norm(q)
    if norm < 1e-12:
        raise ValueError("Cannot normalize zero quaternion")

    return q / norm


def quat_exp(phi: np.ndarray) -> np.ndarray:
    """Map a rotation vector to a unit quaternion [w, x, y, z].

    Below the shared epsilon the Taylor expansion of cos(theta/2) and
    sin(theta/2)/theta is used.
    """
    if phi.shape != (3,):
        raise ValueError(f"phi must be 3-element vector, got shape {phi.shape}")

    dtype = float_dtype(phi)
    theta_sq = phi @ phi
    theta = np.sqrt(theta_sq)

    if is_small_angle(theta, dtype):
        theta_po4 = theta_sq * theta_sq
        real_factor = 1 - theta_sq / 8 + theta_po4 / 384
        imag_factor = 0.5 - theta_sq / 48 + theta_po4 / 3840
    else:
        half_theta = 0.5 * theta
        real_factor = np.cos(half_theta)
        imag_factor = np.sin(half_theta) / theta

    return np.concatenate([[real_factor], imag_factor * phi]).astype(dtype)


def quat_log(q: np.ndarray) -> np.ndarray:
    """Map a unit quaternion [w, x, y, z] to its rotation vector.

    The result has norm in [0, pi].
    """
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    dtype = float_dtype(q)
    eps = epsilon(dtype)
    w = q[0]
    vec = q[1:]
    squared_n = vec @ vec
    n = np.sqrt(squared_n)

    if n < eps:
        # Taylor expansion of 2 * atan(n / w) / n
        squared_w = w * w
        two_atan_nbyw_by_n = 2 / w - (2 / 3) * squared_n / (w * squared_w)
    elif abs(w) < eps:
        two_atan_nbyw_by_n = np.pi / n if w >= 0 else -np.pi / n
    else:
        two_atan_nbyw_by_n = 2 * np.arctan(n / w) / n

    return (two_atan_nbyw_by_n * vec).astype(dtype)


def quat_to_matrix(q: np.ndarray) -> np.ndarray:
    """Convert quaternion to rotation matrix.

    Args:
        q: Unit quaternion [w, x, y, z]

    Returns:
        3x3 rotation matrix
    """
    if q.shape != (4,):
        raise ValueError(f"Quaternion must be 4-element vector, got shape {q.shape}")

    q = quat_normalize(q)
    w, x, y, z = q

    return np.array([
        [1 - 2*(y**2 + z**2), 2*(x*y - w*z), 2*(x*z + w*y)],
        [2*(x*y + w*z), 1 - 2*(x**2 + z**2), 2*(y*z - w*x)],
        [2*(x*z - w*y), 2*(y*z + w*x), 1 - 2*(x**2 + y**2)]
    ], dtype=float_dtype(q))


def quat_from_matrix(R: np.ndarray) -> np.ndarray:
    """Convert rotation matrix to unit quaternion [w, x, y, z] with w >= 0.

    Uses the largest diagonal pivot so the division is always well conditioned.
    """
    if R.shape != (3, 3):
        raise ValueError(f"R must be 3x3 matrix, got shape {R.shape}")

    trace = np.trace(R)
    if trace > 0:
        s = 2 * np.sqrt(1 + trace)
        q = np.array([
            0.25 * s,
            (R[2, 1] - R[1, 2]) / s,
            (R[0, 2] - R[2, 0]) / s,
            (R[1, 0] - R[0, 1]) / s,
        ])
    else:
        i = int(np.argmax(np.diag(R)))
        j = (i + 1) % 3
        k = (j + 1) % 3
        s = 2 * np.sqrt(1 + R[i, i] - R[j, j] - R[k, k])
        q = np.zeros(4, dtype=float_dtype(R))
        q[0] = (R[k, j] - R[j, k]) / s
        q[1 + i] = 0.25 * s
        q[1 + j] = (R[j, i] + R[i, j]) / s
        q[1 + k] = (R[k, i] + R[i, k]) / s

    if q[0] < 0:
        q = -q

    return quat_normalize(q.astype(float_dtype(R)))
