"""Data models for vigeom."""

from .calibration import CameraCalibration, load_calibration, save_calibration

__all__ = [
    "CameraCalibration",
    "load_calibration",
    "save_calibration",
]
