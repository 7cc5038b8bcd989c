"""
Synchronous Mandelbrot renderer.

The MandelbrotRenderer turns a region of the complex plane into an RGBA
image in three full passes over a fixed-size pixel grid:
- Escape counts for every pixel
- Histogram equalization of all counts at once
- Hue colormap for every pixel

Buffers are allocated once per renderer and reused across renders.
"""

import logging
import threading
import time

import numpy as np

from .colormaps import apply_hue_colormap
from .compute import compute_escape_counts, normalize_counts
from .errors import RenderInProgressError

logger = logging.getLogger(__name__)


class MandelbrotRenderer:
    """
    Renders Mandelbrot images of a fixed size.

    Usage:
        renderer = MandelbrotRenderer(800, 600, max_iter=256)
        rgba = renderer.render(bounds)
        display(rgba)

    Attributes:
        width, height: Image dimensions in pixels
        max_iter: Maximum iteration count
        counts: Escape counts of the last render, (height, width) int64
        normalized: Equalized counts of the last render, (height, width) int64
        rgba: Last rendered image, (height, width, 4) uint8
        render_bounds: Bounds of the last render
    """

    def __init__(self, width, height, max_iter):
        """
        Initialize the renderer.

        Args:
            width, height: Image dimensions in pixels
            max_iter: Maximum iteration count for Mandelbrot computation
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"image size must be positive, got {width}x{height}")
        if max_iter <= 0:
            raise ValueError(f"max_iter must be positive, got {max_iter}")

        self.width = width
        self.height = height
        self.max_iter = max_iter

        self.counts = np.zeros((height, width), dtype=np.int64)
        self.normalized = np.zeros((height, width), dtype=np.int64)
        self.rgba = np.zeros((height, width, 4), dtype=np.uint8)
        self.render_bounds = None

        # Held for the duration of a render; renders never overlap
        self.lock = threading.Lock()

    def render(self, bounds):
        """
        Render the given region.

        Args:
            bounds: PlaneBounds (anything with x_min, x_max, y_min, y_max)

        Returns:
            The renderer's RGBA buffer, (height, width, 4) uint8. It is
            overwritten by the next render.

        Raises:
            RenderInProgressError if called while another render is running
        """
        if not self.lock.acquire(blocking=False):
            raise RenderInProgressError("a render is already in progress")
        try:
            started = time.perf_counter()
            compute_escape_counts(
                bounds.x_min, bounds.x_max, bounds.y_min, bounds.y_max,
                self.width, self.height, self.max_iter, out=self.counts
            )
            normalize_counts(self.counts, self.max_iter, out=self.normalized)
            apply_hue_colormap(self.normalized, self.max_iter, self.rgba)
            self.render_bounds = bounds
            logger.debug(
                "Rendered %dx%d in %.3fs", self.width, self.height,
                time.perf_counter() - started
            )
        finally:
            self.lock.release()
        return self.rgba


def create_mandel_image(bounds, width, height, max_iter):
    """Render bounds once into a new (height, width, 4) RGBA array."""
    return MandelbrotRenderer(width, height, max_iter).render(bounds).copy()
