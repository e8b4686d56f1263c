import numpy as np
import pytest

from chromadepth.engine.scene.camera import PerspectiveCamera


def test_defaults_and_distance():
    cam = PerspectiveCamera()
    assert (cam.fov, cam.aspect, cam.near, cam.far) == (75.0, 1.0, 0.1, 10000.0)
    assert cam.distance_to_target() == pytest.approx(10.0)
    cam.position = (3.0, 4.0, 0.0)
    assert cam.distance_to_target() == pytest.approx(5.0)


def test_view_matrix_centers_target():
    cam = PerspectiveCamera()
    cam.position = (8.0, 7.0, 10.0)
    cam.look_at(0.0, 0.0, 0.0)
    v = cam.view_matrix() @ np.array([0.0, 0.0, 0.0, 1.0], dtype=np.float32)
    np.testing.assert_allclose(v[:2], (0.0, 0.0), atol=1e-5)
    assert v[2] < 0


def test_invalid_clip_planes_raise():
    cam = PerspectiveCamera(near=5.0, far=1.0)
    with pytest.raises(ValueError):
        cam.projection_matrix()
