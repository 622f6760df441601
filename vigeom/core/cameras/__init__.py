"""Camera models with analytic projection Jacobians."""

from .base import CameraModel, FocalCameraModel, Projection, Unprojection
from .pinhole import PinholeCamera
from .unified import UnifiedCamera
from .extended_unified import ExtendedUnifiedCamera
from .kannala_brandt import KannalaBrandtCamera4
from .double_sphere import DoubleSphereCamera
from .fov import FovCamera
from .stereographic import StereographicCamera
from .registry import CAMERA_MODELS, create_camera, get_camera_class
from .checks import (
    numeric_project_jacobians,
    numeric_unproject_jacobians,
    check_project_jacobians,
    check_unproject_jacobians,
)

__all__ = [
    "CameraModel",
    "FocalCameraModel",
    "Projection",
    "Unprojection",
    "PinholeCamera",
    "UnifiedCamera",
    "ExtendedUnifiedCamera",
    "KannalaBrandtCamera4",
    "DoubleSphereCamera",
    "FovCamera",
    "StereographicCamera",
    "CAMERA_MODELS",
    "create_camera",
    "get_camera_class",
    "numeric_project_jacobians",
    "numeric_unproject_jacobians",
    "check_project_jacobians",
    "check_unproject_jacobians",
]
