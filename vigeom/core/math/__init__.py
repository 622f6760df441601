"""Math primitives for vigeom."""

from .constants import epsilon, epsilon_sqrt, is_small_angle
from .so3 import hat, vee, so3_exp, so3_log
from .se3 import se3_expd, se3_logd, compose, invert, transform_point
from .lie_jacobians import (
    right_jacobian_so3,
    right_jacobian_inv_so3,
    left_jacobian_so3,
    left_jacobian_inv_so3,
    right_jacobian_se3_decoupled,
    right_jacobian_inv_se3_decoupled,
)
from .jacobians import finite_difference_jacobian, check_jacobian, compare_jacobians, JacobianTester

__all__ = [
    "epsilon",
    "epsilon_sqrt",
    "is_small_angle",
    "hat",
    "vee",
    "so3_exp",
    "so3_log",
    "se3_expd",
    "se3_logd",
    "compose",
    "invert",
    "transform_point",
    "right_jacobian_so3",
    "right_jacobian_inv_so3",
    "left_jacobian_so3",
    "left_jacobian_inv_so3",
    "right_jacobian_se3_decoupled",
    "right_jacobian_inv_se3_decoupled",
    "finite_difference_jacobian",
    "check_jacobian",
    "compare_jacobians",
    "JacobianTester",
]
