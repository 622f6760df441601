"""Tests for camera calibration records."""

import json
import logging
from typing import get_args

import numpy as np
import pytest
from pydantic import ValidationError

from vigeom.core.cameras import CAMERA_MODELS, KannalaBrandtCamera4, PinholeCamera, StereographicCamera
from vigeom.core.models import CameraCalibration, load_calibration, save_calibration
from vigeom.core.models.calibration import CameraType


class TestCameraCalibration:
    """Test calibration validation and camera conversion."""

    def test_valid_calibration(self):
        """Test creating a valid calibration."""
        calibration = CameraCalibration(
            camera_type="pinhole",
            intrinsics=[500.0, 500.0, 320.0, 240.0],
            resolution=[640, 480]
        )

        assert calibration.camera_type == "pinhole"
        assert calibration.resolution == [640, 480]

    def test_wrong_intrinsics_count(self):
        """Test the intrinsics length must match the model."""
        with pytest.raises(ValidationError):
            CameraCalibration(camera_type="kb4", intrinsics=[500.0, 500.0, 320.0, 240.0])

    def test_camera_types_match_registry(self):
        """Test every registered model is accepted and nothing else."""
        assert set(get_args(CameraType)) == set(CAMERA_MODELS)

    def test_unknown_camera_type(self):
        """Test camera_type is restricted to registered models."""
        with pytest.raises(ValidationError):
            CameraCalibration(camera_type="orthographic", intrinsics=[1.0])

    def test_invalid_resolution(self):
        """Test resolution validation."""
        with pytest.raises(ValidationError):
            CameraCalibration(camera_type="stereographic", resolution=[640])

        with pytest.raises(ValidationError):
            CameraCalibration(camera_type="stereographic", resolution=[640, 0])

    def test_to_camera(self):
        """Test building the camera model."""
        params = [379.045, 379.008, 505.512, 509.969, 0.00693023, -0.0013828, -0.000272596, -0.000452646]
        camera = CameraCalibration(camera_type="kb4", intrinsics=params).to_camera()

        assert isinstance(camera, KannalaBrandtCamera4)
        np.testing.assert_array_equal(camera.params, params)

    def test_from_camera(self):
        """Test describing an existing camera."""
        camera = PinholeCamera([500.0, 500.0, 320.0, 240.0])
        calibration = CameraCalibration.from_camera(camera, resolution=[640, 480])

        assert calibration.camera_type == "pinhole"
        assert calibration.intrinsics == [500.0, 500.0, 320.0, 240.0]
        assert calibration.to_camera() == camera

    def test_parameter_free_model(self):
        """Test models without parameters need no intrinsics."""
        calibration = CameraCalibration.from_camera(StereographicCamera())

        assert calibration.intrinsics == []
        assert calibration.to_camera() == StereographicCamera()


class TestCalibrationFiles:
    """Test JSON persistence."""

    def test_save_and_load(self, tmp_path):
        """Test a calibration survives a trip through a file."""
        calibration = CameraCalibration(
            camera_type="ds",
            intrinsics=[402.5, 400.0, 505.0, 509.0, 0.34656, 0.5],
            resolution=[1024, 1024]
        )
        path = tmp_path / "camera.json"

        save_calibration(calibration, path)
        loaded = load_calibration(path)

        assert loaded == calibration
        assert json.loads(path.read_text())["camera_type"] == "ds"

    def test_load_logs_source(self, tmp_path, caplog):
        """Test loading reports the file at info level."""
        path = tmp_path / "camera.json"
        path.write_text(json.dumps({"camera_type": "fov", "intrinsics": [408.12, 408.12, 318.5, 238.5, 0.925]}))

        with caplog.at_level(logging.INFO, logger="vigeom.core.models.calibration"):
            calibration = load_calibration(str(path))

        assert calibration.resolution is None
        assert "Loaded fov calibration" in caplog.text

    def test_load_invalid_file(self, tmp_path):
        """Test invalid content is rejected on load."""
        path = tmp_path / "camera.json"
        path.write_text(json.dumps({"camera_type": "ucm", "intrinsics": [1.0, 2.0]}))

        with pytest.raises(ValidationError):
            load_calibration(path)
