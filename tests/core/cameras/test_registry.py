"""Tests for name-based camera construction."""

import numpy as np
import pytest

from vigeom.core.cameras import (
    CAMERA_MODELS,
    DoubleSphereCamera,
    StereographicCamera,
    create_camera,
    get_camera_class,
)
from vigeom.core.cameras.registry import num_params


class TestCameraRegistry:
    """Test the camera model registry."""

    def test_registered_names(self):
        """Test every model is registered under its name."""
        assert set(CAMERA_MODELS) == {"pinhole", "ucm", "eucm", "kb4", "ds", "fov", "stereographic"}
        for name, camera_class in CAMERA_MODELS.items():
            assert camera_class.name == name

    def test_num_params(self):
        """Test parameter counts per model."""
        assert num_params("pinhole") == 4
        assert num_params("ucm") == 5
        assert num_params("eucm") == 6
        assert num_params("kb4") == 8
        assert num_params("ds") == 6
        assert num_params("fov") == 5
        assert num_params("stereographic") == 0

    def test_create_camera(self):
        """Test creating a camera from name and parameters."""
        camera = create_camera("ds", [402.5, 400.0, 505.0, 509.0, 0.34656, 0.5])

        assert isinstance(camera, DoubleSphereCamera)
        np.testing.assert_array_equal(camera.params, [402.5, 400.0, 505.0, 509.0, 0.34656, 0.5])

    def test_create_parameter_free_camera(self):
        """Test the parameter list defaults to empty."""
        assert isinstance(create_camera("stereographic"), StereographicCamera)

    def test_create_with_wrong_parameter_count(self):
        """Test the model constructor validates the parameter count."""
        with pytest.raises(ValueError):
            create_camera("pinhole", [500.0, 500.0, 320.0])

    def test_unknown_camera_type(self):
        """Test error handling for unknown camera type."""
        with pytest.raises(ValueError, match="Unknown camera type"):
            get_camera_class("orthographic")

        with pytest.raises(ValueError, match="Unknown camera type"):
            create_camera("orthographic", [1.0])
