import numpy as np
import pytest

from chromadepth.engine.render.target import FramebufferTarget, framebuffer_target_factory


class _Screen:
    def __init__(self, ctx):
        self.ctx = ctx

    def use(self):
        self.ctx.bound = "screen"


class _Fbo:
    def __init__(self, ctx, size):
        self.ctx = ctx
        self.size = size
        self.released = False
        w, h = size
        # GL 順（左下原点）で行番号を R に入れる
        px = np.zeros((h, w, 4), dtype=np.uint8)
        px[..., 0] = np.arange(h, dtype=np.uint8)[:, None]
        self.raw = px.tobytes()

    def use(self):
        self.ctx.bound = self

    def read(self, components=4, alignment=1):
        assert (components, alignment) == (4, 1)
        return self.raw

    def release(self):
        self.released = True


class _Ctx:
    def __init__(self):
        self.viewport = (0, 0, 640, 480)
        self.bound = "screen"
        self.screen = _Screen(self)
        self.fbos = []

    def simple_framebuffer(self, size, components=4):
        fbo = _Fbo(self, size)
        self.fbos.append(fbo)
        return fbo


def test_lifecycle_restores_viewport_and_screen():
    ctx = _Ctx()
    target = framebuffer_target_factory(ctx)(4, 3)
    target.allocate()
    target.use()
    assert ctx.viewport == (0, 0, 4, 3)
    assert ctx.bound is ctx.fbos[0]
    target.read()
    target.release()
    assert ctx.viewport == (0, 0, 640, 480)
    assert ctx.bound == "screen"
    assert ctx.fbos[0].released


def test_read_flips_rows_to_top_left_origin():
    ctx = _Ctx()
    target = FramebufferTarget(ctx, 2, 3)
    target.allocate()
    target.use()
    px = np.frombuffer(target.read(), dtype=np.uint8).reshape(3, 2, 4)
    assert px[:, 0, 0].tolist() == [2, 1, 0]
    target.release()


def test_use_before_allocate_and_invalid_size():
    ctx = _Ctx()
    with pytest.raises(RuntimeError):
        FramebufferTarget(ctx, 2, 2).use()
    with pytest.raises(ValueError):
        FramebufferTarget(ctx, 0, 2)


def test_release_without_allocate_is_harmless():
    ctx = _Ctx()
    FramebufferTarget(ctx, 2, 2).release()
    assert ctx.bound == "screen"
