import numpy as np
import pytest
from PIL import Image

from chromadepth.engine.compose.compositor import ChromadepthCompositor
from chromadepth.engine.core.buffers import DepthBuffer
from chromadepth.engine.export.image import (
    CHROMADEPTH_FILENAME,
    DEPTH_MAP_FILENAME,
    save_chromadepth_png,
    save_depth_map_png,
)
from chromadepth.util.paths import unique_path


def _buffer():
    px = np.full((4, 6, 4), 255, dtype=np.uint8)
    px[..., 0] = np.arange(24, dtype=np.uint8).reshape(4, 6) * 10
    return DepthBuffer(6, 4, px)


def test_chromadepth_png_uses_default_name_in_directory(tmp_path):
    img = ChromadepthCompositor(parallel=False).composite(_buffer())
    out = save_chromadepth_png(img, tmp_path)
    assert out == tmp_path / CHROMADEPTH_FILENAME
    with Image.open(out) as loaded:
        assert loaded.mode == "RGBA"
        assert loaded.size == (6, 4)
        np.testing.assert_array_equal(np.asarray(loaded), img.rgba)


def test_depth_map_png_is_grayscale_depth_channel(tmp_path):
    buf = _buffer()
    out = save_depth_map_png(buf, tmp_path)
    assert out.name == DEPTH_MAP_FILENAME
    with Image.open(out) as loaded:
        assert loaded.mode == "L"
        np.testing.assert_array_equal(np.asarray(loaded), buf.depth)


def test_existing_file_gets_suffix_unless_overwrite(tmp_path):
    buf = _buffer()
    first = save_depth_map_png(buf, tmp_path)
    second = save_depth_map_png(buf, tmp_path)
    assert second.name == "depth-map-1.png"
    third = save_depth_map_png(buf, tmp_path, overwrite=True)
    assert third == first


def test_explicit_file_path_creates_parent(tmp_path):
    target = tmp_path / "nested" / "out.png"
    out = save_depth_map_png(_buffer(), target)
    assert out == target and target.exists()


def test_same_input_gives_same_bytes(tmp_path):
    img = ChromadepthCompositor(parallel=False).composite(_buffer())
    a = save_chromadepth_png(img, tmp_path / "a.png")
    b = save_chromadepth_png(img, tmp_path / "b.png")
    assert a.read_bytes() == b.read_bytes()


def test_unique_path_counts_up(tmp_path):
    p = tmp_path / "x.png"
    assert unique_path(p) == p
    p.write_bytes(b"")
    (tmp_path / "x-1.png").write_bytes(b"")
    assert unique_path(p) == tmp_path / "x-2.png"


def test_write_failure_is_reported(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises((RuntimeError, OSError)):
        save_depth_map_png(_buffer(), blocker / "out.png")
