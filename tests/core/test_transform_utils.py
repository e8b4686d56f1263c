from __future__ import annotations

import math

import numpy as np
import pytest

from chromadepth.engine.core import transform_utils as tu


def _apply(m: np.ndarray, p) -> np.ndarray:  # noqa: ANN001
    v = m @ np.array([p[0], p[1], p[2], 1.0], dtype=np.float32)
    return v[:3] / v[3]


def test_perspective_maps_near_and_far_to_ndc_bounds() -> None:
    proj = tu.perspective(90.0, 1.0, 1.0, 10.0)
    assert _apply(proj, (0.0, 0.0, -1.0))[2] == pytest.approx(-1.0, abs=1e-5)
    assert _apply(proj, (0.0, 0.0, -10.0))[2] == pytest.approx(1.0, abs=1e-5)
    with pytest.raises(ValueError):
        tu.perspective(60.0, 1.0, 5.0, 1.0)


def test_look_at_puts_eye_at_origin_facing_minus_z() -> None:
    view = tu.look_at((3.0, 4.0, 5.0), (0.0, 0.0, 0.0))
    np.testing.assert_allclose(_apply(view, (3.0, 4.0, 5.0)), (0.0, 0.0, 0.0), atol=1e-5)
    target = _apply(view, (0.0, 0.0, 0.0))
    np.testing.assert_allclose(target[:2], (0.0, 0.0), atol=1e-5)
    assert target[2] == pytest.approx(-math.sqrt(50.0), rel=1e-5)


def test_rotation_is_orthonormal_and_compose_order() -> None:
    r = tu.rotation_xyz(0.3, -1.1, 2.0)[:3, :3]
    np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-5)
    m = tu.compose((1.0, 2.0, 3.0), (0.0, 0.0, math.pi / 2), 2.0)
    # S → R → T: (1,0,0) → (2,0,0) → (0,2,0) → (1,4,3)
    np.testing.assert_allclose(_apply(m, (1.0, 0.0, 0.0)), (1.0, 4.0, 3.0), atol=1e-5)


def test_to_gl_bytes_is_column_major() -> None:
    m = tu.translation(1.0, 2.0, 3.0)
    values = np.frombuffer(tu.to_gl_bytes(m), dtype=np.float32)
    np.testing.assert_allclose(values[12:15], (1.0, 2.0, 3.0))
