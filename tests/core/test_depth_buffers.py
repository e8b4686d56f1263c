from __future__ import annotations

import numpy as np
import pytest

from chromadepth.engine.core.buffers import ChromadepthImage, DepthBuffer


def test_length_invariant_is_enforced() -> None:
    with pytest.raises(ValueError):
        DepthBuffer(2, 2, np.zeros(15, dtype=np.uint8))
    with pytest.raises(ValueError):
        DepthBuffer(0, 2, np.zeros(0, dtype=np.uint8))
    with pytest.raises(ValueError):
        DepthBuffer(1, 1, np.zeros(4, dtype=np.float32))


def test_buffer_is_immutable_copy() -> None:
    src = np.arange(2 * 3 * 4, dtype=np.uint8)
    buf = DepthBuffer(3, 2, src)
    src[0] = 99
    assert buf.data[0] == 0
    assert not buf.data.flags.writeable
    with pytest.raises(ValueError):
        buf.data[0] = 1


def test_depth_view_is_red_channel_row_major() -> None:
    px = np.zeros((2, 3, 4), dtype=np.uint8)
    px[..., 0] = [[1, 2, 3], [4, 5, 6]]
    px[..., 1] = 77
    buf = DepthBuffer(3, 2, px)
    assert buf.depth.shape == (2, 3)
    np.testing.assert_array_equal(buf.depth, [[1, 2, 3], [4, 5, 6]])
    # 深度以外のチャンネルもバイト配置のまま保持される
    assert buf.pixels[1, 2, 1] == 77
    assert len(buf.tobytes()) == 3 * 2 * 4


def test_uniform_and_equality() -> None:
    a = DepthBuffer.uniform(4, 3, depth=10)
    b = DepthBuffer.from_bytes(a.tobytes(), 4, 3)
    assert a == b
    assert np.all(a.depth == 10)
    assert a != DepthBuffer.uniform(4, 3, depth=11)
    assert DepthBuffer.uniform(2, 2).to_grayscale().tolist() == [[255, 255], [255, 255]]


def test_image_shape_validation_and_pixel_lookup() -> None:
    rgba = np.zeros((2, 3, 4), dtype=np.uint8)
    rgba[1, 2] = (10, 20, 30, 255)
    img = ChromadepthImage(3, 2, rgba)
    assert img.pixel(2, 1) == (10, 20, 30)
    assert img.rgb.shape == (2, 3, 3)
    with pytest.raises(ValueError):
        ChromadepthImage(2, 3, rgba)
    with pytest.raises(ValueError):
        ChromadepthImage(3, 2, rgba[..., :3])
