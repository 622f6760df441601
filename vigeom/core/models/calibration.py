"""Camera calibration records: model type plus intrinsics."""

import json
import logging
from pathlib import Path
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

from ..cameras.base import CameraModel
from ..cameras.registry import create_camera, num_params

logger = logging.getLogger(__name__)

CameraType = Literal["pinhole", "ucm", "eucm", "kb4", "ds", "fov", "stereographic"]


class CameraCalibration(BaseModel):
    """Serializable description of one camera's intrinsics."""

    camera_type: CameraType = Field(description="Camera model name")
    intrinsics: List[float] = Field(
        default_factory=list,
        description="Parameter vector in the model's order, e.g. [fx, fy, cx, cy, xi, alpha] for ds"
    )
    resolution: Optional[List[int]] = Field(
        default=None,
        description="Image size [width, height] in pixels",
        min_length=2,
        max_length=2
    )

    @model_validator(mode="after")
    def validate_intrinsics_length(self) -> "CameraCalibration":
        expected = num_params(self.camera_type)
        if len(self.intrinsics) != expected:
            raise ValueError(
                f"{self.camera_type} camera needs {expected} intrinsics, got {len(self.intrinsics)}"
            )
        if self.resolution is not None and min(self.resolution) <= 0:
            raise ValueError("resolution must be positive")
        return self

    def to_camera(self) -> CameraModel:
        """Build the camera model instance."""
        return create_camera(self.camera_type, self.intrinsics)

    @classmethod
    def from_camera(cls, camera: CameraModel, resolution: Optional[List[int]] = None) -> "CameraCalibration":
        """Describe an existing camera model instance."""
        return cls(
            camera_type=camera.name,
            intrinsics=camera.params.tolist(),
            resolution=resolution,
        )


def load_calibration(path: Union[str, Path]) -> CameraCalibration:
    """Load a calibration from a JSON file."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    calibration = CameraCalibration.model_validate(data)
    logger.info(f"Loaded {calibration.camera_type} calibration from {path}")
    return calibration


def save_calibration(calibration: CameraCalibration, path: Union[str, Path]) -> None:
    """Write a calibration to a JSON file."""
    path = Path(path)
    with open(path, "w") as f:
        json.dump(calibration.model_dump(), f, indent=2)

    logger.info(f"Saved {calibration.camera_type} calibration to {path}")
