"""Right and left Jacobians of SO(3) and of the decoupled SE(3).

For a rotation vector phi and a small perturbation eps,

    exp(phi + eps) ~= exp(phi) * exp(Jr(phi) @ eps)
    exp(phi + eps) ~= exp(Jl(phi) @ eps) * exp(phi)

The inverse Jacobians map in the opposite direction. Every function switches
to the identity below the same epsilon the exponential map uses, which is
the first-order limit of the closed forms.
"""

import numpy as np

from .constants import float_dtype, is_small_angle
from .so3 import hat, so3_exp


def _rotation_vector(phi: np.ndarray) -> np.ndarray:
    phi = np.asarray(phi, dtype=float_dtype(phi))
    if phi.shape != (3,):
        raise ValueError(f"phi must be 3-element vector, got shape {phi.shape}")
    return phi


def _jacobian_so3(phi: np.ndarray, sign: float) -> np.ndarray:
    phi = _rotation_vector(phi)
    J = np.eye(3, dtype=phi.dtype)

    phi_norm2 = phi @ phi
    phi_norm = np.sqrt(phi_norm2)
    if is_small_angle(phi_norm, phi.dtype):
        return J

    phi_norm3 = phi_norm2 * phi_norm
    phi_hat = hat(phi)
    phi_hat2 = phi_hat @ phi_hat

    J += sign * phi_hat * (1 - np.cos(phi_norm)) / phi_norm2
    J += phi_hat2 * (phi_norm - np.sin(phi_norm)) / phi_norm3
    return J


def _jacobian_inv_so3(phi: np.ndarray, sign: float) -> np.ndarray:
    phi = _rotation_vector(phi)
    J = np.eye(3, dtype=phi.dtype)

    phi_norm2 = phi @ phi
    phi_norm = np.sqrt(phi_norm2)
    if is_small_angle(phi_norm, phi.dtype):
        return J

    phi_hat = hat(phi)
    phi_hat2 = phi_hat @ phi_hat

    J += sign * phi_hat / 2
    J += phi_hat2 * (1 / phi_norm2 - (1 + np.cos(phi_norm)) / (2 * phi_norm * np.sin(phi_norm)))
    return J


def right_jacobian_so3(phi: np.ndarray) -> np.ndarray:
    """Right Jacobian of SO(3).

    Args:
        phi: Rotation vector

    Returns:
        3x3 matrix I - hat(phi) (1 - cos|phi|) / |phi|^2 + hat(phi)^2 (|phi| - sin|phi|) / |phi|^3
    """
    return _jacobian_so3(phi, -1.0)


def right_jacobian_inv_so3(phi: np.ndarray) -> np.ndarray:
    """Inverse of :func:`right_jacobian_so3`.

    Singular where sin|phi| = 0 with |phi| > 0, i.e. at full turns.
    """
    return _jacobian_inv_so3(phi, 1.0)


def left_jacobian_so3(phi: np.ndarray) -> np.ndarray:
    """Left Jacobian of SO(3), equal to right_jacobian_so3(-phi)."""
    return _jacobian_so3(phi, 1.0)


def left_jacobian_inv_so3(phi: np.ndarray) -> np.ndarray:
    """Inverse of :func:`left_jacobian_so3`."""
    return _jacobian_inv_so3(phi, -1.0)


def _se3_tangent(xi: np.ndarray) -> np.ndarray:
    xi = np.asarray(xi, dtype=float_dtype(xi))
    if xi.shape != (6,):
        raise ValueError(f"xi must be 6-element vector, got shape {xi.shape}")
    return xi


def right_jacobian_se3_decoupled(xi: np.ndarray) -> np.ndarray:
    """Right Jacobian of the decoupled SE(3) exponential.

    Block diagonal: exp(omega)^T on the translation block and
    right_jacobian_so3(omega) on the rotation block, with omega = xi[3:].
    """
    xi = _se3_tangent(xi)
    omega = xi[3:]

    J = np.zeros((6, 6), dtype=xi.dtype)
    J[:3, :3] = so3_exp(omega).T
    J[3:, 3:] = right_jacobian_so3(omega)
    return J


def right_jacobian_inv_se3_decoupled(xi: np.ndarray) -> np.ndarray:
    """Inverse of :func:`right_jacobian_se3_decoupled`."""
    xi = _se3_tangent(xi)
    omega = xi[3:]

    J = np.zeros((6, 6), dtype=xi.dtype)
    J[:3, :3] = so3_exp(omega)
    J[3:, 3:] = right_jacobian_inv_so3(omega)
    return J
