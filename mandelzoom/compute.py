"""
Mandelbrot computation functions using Numba JIT compilation.

This module contains the performance-critical parts of the render
pipeline:
- Affine range mapping between pixel space and the complex plane
- Escape-time evaluation for single points and for a whole pixel grid
- Histogram equalization of escape counts (spreads colors evenly)

The JIT kernels are wrapped by small Python functions that validate
their arguments and raise the explorer's exceptions; the kernels
themselves assume valid input.
"""

import math

import numpy as np
from numba import jit

from .colormaps import apply_hue_colormap
from .errors import DegenerateRangeError


@jit(nopython=True, cache=True)
def lerp(s1, s2, t1, t2, s):
    """Map s from [s1, s2] into [t1, t2] without any checks."""
    return t1 + (s - s1) / (s2 - s1) * (t2 - t1)


def map_range(s1, s2, t1, t2, s):
    """
    Map value s from the range [s1, s2] into the range [t1, t2].

    The mapping is affine and is not clamped: values outside [s1, s2]
    extrapolate. It reverses order when the two ranges point in
    opposite directions.

    Raises:
        DegenerateRangeError if s1 == s2
    """
    if s1 == s2:
        raise DegenerateRangeError(f"cannot map from empty range [{s1}, {s2}]")
    return t1 + (s - s1) / (s2 - s1) * (t2 - t1)


@jit(nopython=True, cache=True)
def mandel(x, y, max_iter):
    """
    Escape-time count for the point c = x + iy.

    The iterate starts at z = c (one step of z² + c from zero already
    applied), so the returned count is one lower than the textbook
    formulation for escaping points.

    Returns:
        Number of iterations before |z| exceeds 2, or max_iter if it
        never does.
    """
    n = 0
    a = x
    b = y
    while n < max_iter:
        a2 = a * a
        b2 = b * b
        if a2 + b2 > 4.0:
            return n
        b = 2.0 * a * b + y
        a = a2 - b2 + x
        n += 1
    return n


@jit(nopython=True, cache=True)
def _escape_counts_kernel(x_min, x_max, y_min, y_max, width, height, max_iter, out):
    for r in range(height):
        y = lerp(0.0, height, y_min, y_max, r)
        for c in range(width):
            x = lerp(0.0, width, x_min, x_max, c)
            out[r, c] = mandel(x, y, max_iter)


def _check_max_iter(max_iter):
    if int(max_iter) != max_iter or max_iter <= 0:
        raise ValueError(f"max_iter must be a positive integer, got {max_iter!r}")
    return int(max_iter)


def compute_escape_counts(x_min, x_max, y_min, y_max, width, height, max_iter, out=None):
    """
    Compute escape counts for every pixel of a width x height grid.

    Row r samples the plane at y = map(0, height, y_min, y_max, r) and
    column c at x = map(0, width, x_min, x_max, c), so pixel (0, 0) sits
    on (x_min, y_min).

    Args:
        x_min, x_max: Real axis bounds in the complex plane
        y_min, y_max: Imaginary axis bounds in the complex plane
        width, height: Grid dimensions in pixels
        max_iter: Maximum iteration count before assuming point is in set
        out: Optional (height, width) int64 array to write into

    Returns:
        2D numpy array of int64 escape counts in [0, max_iter].
    """
    max_iter = _check_max_iter(max_iter)
    if width <= 0 or height <= 0:
        raise DegenerateRangeError(f"pixel grid must be non-empty, got {width}x{height}")
    if out is None:
        out = np.empty((height, width), dtype=np.int64)
    elif out.shape != (height, width):
        raise ValueError(f"output shape {out.shape} does not match grid {(height, width)}")

    _escape_counts_kernel(
        float(x_min), float(x_max), float(y_min), float(y_max),
        width, height, max_iter, out
    )
    return out


@jit(nopython=True, cache=True)
def _normalize_kernel(counts, max_iter, out):
    hist = np.zeros(max_iter, dtype=np.int64)
    for i in range(counts.shape[0]):
        n = counts[i]
        if n < max_iter:
            hist[n] += 1

    cumul = np.empty(max_iter, dtype=np.int64)
    running = 0
    for i in range(max_iter):
        running += hist[i]
        cumul[i] = running

    # div is zero only when nothing escaped; then every n equals max_iter
    div = cumul[max_iter - 1] / max_iter
    for i in range(counts.shape[0]):
        n = counts[i]
        if n == max_iter:
            out[i] = max_iter
        else:
            # cumul[n] / div can land a rounding error above max_iter
            out[i] = min(math.ceil(cumul[n] / div), max_iter)


def normalize_counts(counts, max_iter, out=None):
    """
    Histogram-equalize escape counts onto [0, max_iter].

    Builds a histogram of the escaped counts (the max_iter bucket is left
    out, it is the set interior), accumulates it, and replaces each count
    n by ceil(cumul[n] / (cumul[-1] / max_iter)). Interior counts stay at
    max_iter. The result is monotonic in the input count and never
    exceeds max_iter, so the highest escaped band may share the interior's
    value.

    When no count escaped at all, every output is max_iter (an all-black
    image) rather than an error.

    Args:
        counts: Array-like of escape counts, any shape
        max_iter: Maximum iteration value used to produce the counts
        out: Optional int64 array of the same shape to write into

    Returns:
        int64 numpy array of normalized values, same shape as counts.
    """
    max_iter = _check_max_iter(max_iter)
    counts = np.asarray(counts, dtype=np.int64)
    if counts.size and (counts.min() < 0 or counts.max() > max_iter):
        raise ValueError(f"escape counts must lie in [0, {max_iter}]")

    flat = np.empty(counts.size, dtype=np.int64)
    _normalize_kernel(counts.ravel(), max_iter, flat)

    if out is None:
        return flat.reshape(counts.shape)
    if out.shape != counts.shape:
        raise ValueError(f"output shape {out.shape} does not match counts {counts.shape}")
    out[...] = flat.reshape(counts.shape)
    return out


def warmup_jit():
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first real render.
    """
    counts = compute_escape_counts(-2.0, 2.0, -2.0, 2.0, 8, 8, 10)
    normalized = normalize_counts(counts, 10)
    apply_hue_colormap(normalized, 10, np.zeros((8, 8, 4), dtype=np.uint8))
