"""Shared fakes for the explorer tests."""

import numpy as np
import pytest

from mandelzoom.ports import InputSource, RenderSurface


class FakeRenderer:
    """Records requested bounds instead of computing anything."""

    def __init__(self, width, height, max_iter=10):
        self.width = width
        self.height = height
        self.max_iter = max_iter
        self.rendered = []

    def render(self, bounds):
        self.rendered.append(bounds)
        return np.full((self.height, self.width, 4), len(self.rendered), dtype=np.uint8)


class FakeSurface(RenderSurface):
    def __init__(self):
        self.calls = []

    def present(self, buffer):
        self.calls.append(('present', buffer))

    def draw_overlay_rect(self, rect):
        self.calls.append(('overlay', rect))

    def kinds(self):
        return [kind for kind, _ in self.calls]


class FakeInput(InputSource):
    def __init__(self):
        self.handlers = {}

    def subscribe(self, kind, handler):
        self.handlers[kind] = handler

    def emit(self, kind, *args):
        self.handlers[kind](*args)


@pytest.fixture
def renderer():
    # Aspect ratio 2
    return FakeRenderer(100, 50)


@pytest.fixture
def surface():
    return FakeSurface()
