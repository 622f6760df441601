"""Numeric thresholds shared by the Lie-group and camera kernels."""

import numpy as np
from numpy.typing import ArrayLike

# Small-angle threshold of the SO(3) exponential/logarithm. The four SO(3)
# Jacobians switch to their identity limit at exactly the same value.
EPSILON_F64 = 1e-10
EPSILON_F32 = 1e-5


def float_dtype(x: ArrayLike) -> np.dtype:
    """Return the floating dtype used to compute with ``x``.

    Floating inputs keep their precision, everything else is promoted to float64.
    """
    dtype = np.asarray(x).dtype
    if np.issubdtype(dtype, np.floating):
        return dtype
    return np.dtype(np.float64)


def epsilon(dtype=np.float64) -> float:
    """Small-value threshold for the given floating dtype."""
    if np.dtype(dtype) == np.float32:
        return EPSILON_F32
    return EPSILON_F64


def epsilon_sqrt(dtype=np.float64) -> float:
    """Square root of :func:`epsilon`, used for denominator guards."""
    return float(np.sqrt(epsilon(dtype)))


def is_small_angle(angle: float, dtype=np.float64) -> bool:
    """True where the exp map and the SO(3) Jacobians use their small-angle limit."""
    return bool(angle <= epsilon(dtype))
