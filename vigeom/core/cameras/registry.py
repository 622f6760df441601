"""Name-based construction of camera models."""

import logging
from typing import Dict, Sequence, Type

from .base import CameraModel
from .double_sphere import DoubleSphereCamera
from .extended_unified import ExtendedUnifiedCamera
from .fov import FovCamera
from .kannala_brandt import KannalaBrandtCamera4
from .pinhole import PinholeCamera
from .stereographic import StereographicCamera
from .unified import UnifiedCamera

logger = logging.getLogger(__name__)

CAMERA_MODELS: Dict[str, Type[CameraModel]] = {
    cls.name: cls
    for cls in (
        PinholeCamera,
        UnifiedCamera,
        ExtendedUnifiedCamera,
        KannalaBrandtCamera4,
        DoubleSphereCamera,
        FovCamera,
        StereographicCamera,
    )
}


def num_params(camera_type: str) -> int:
    """Parameter count of a registered camera model."""
    return len(get_camera_class(camera_type).param_names)


def get_camera_class(camera_type: str) -> Type[CameraModel]:
    """Look up a camera model class by its name."""
    if camera_type not in CAMERA_MODELS:
        raise ValueError(
            f"Unknown camera type: {camera_type}. Available: {sorted(CAMERA_MODELS)}"
        )
    return CAMERA_MODELS[camera_type]


def create_camera(camera_type: str, params: Sequence[float] = ()) -> CameraModel:
    """Create a camera model instance from its name and parameter vector."""
    camera_class = get_camera_class(camera_type)
    camera = camera_class(params)
    logger.debug(f"Created {camera!r}")
    return camera
