"""vigeom - geometry kernels for visual-inertial tracking

Camera models with analytic Jacobians and Lie-group calculus for SO(3) and
decoupled SE(3).
"""

__version__ = "0.1.0"

# Lie groups
from .core.math.so3 import hat, so3_exp, so3_log
from .core.math.se3 import se3_expd, se3_logd
from .core.math.lie_jacobians import (
    right_jacobian_so3,
    right_jacobian_inv_so3,
    left_jacobian_so3,
    left_jacobian_inv_so3,
    right_jacobian_se3_decoupled,
    right_jacobian_inv_se3_decoupled,
)

# Cameras
from .core.cameras import (
    CameraModel,
    Projection,
    Unprojection,
    PinholeCamera,
    UnifiedCamera,
    ExtendedUnifiedCamera,
    KannalaBrandtCamera4,
    DoubleSphereCamera,
    FovCamera,
    StereographicCamera,
    create_camera,
)

# Calibration
from .core.models.calibration import CameraCalibration

__all__ = [
    # Version
    "__version__",
    # Lie groups
    "hat",
    "so3_exp",
    "so3_log",
    "se3_expd",
    "se3_logd",
    "right_jacobian_so3",
    "right_jacobian_inv_so3",
    "left_jacobian_so3",
    "left_jacobian_inv_so3",
    "right_jacobian_se3_decoupled",
    "right_jacobian_inv_se3_decoupled",
    # Cameras
    "CameraModel",
    "Projection",
    "Unprojection",
    "PinholeCamera",
    "UnifiedCamera",
    "ExtendedUnifiedCamera",
    "KannalaBrandtCamera4",
    "DoubleSphereCamera",
    "FovCamera",
    "StereographicCamera",
    "create_camera",
    # Calibration
    "CameraCalibration",
]
