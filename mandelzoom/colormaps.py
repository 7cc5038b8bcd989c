"""
Hue colormap for Mandelbrot visualization.

Normalized escape values are turned into a hue and converted to RGB
with a fixed-saturation, fixed-lightness HSL formula. Points inside the
set (normalized value == max_iter) are drawn black.
"""

from numba import jit


@jit(nopython=True, cache=True)
def _channel(n, h):
    k = (n + h / 60.0) % 6.0
    return 1.0 - max(min(k, 4.0 - k, 1.0), 0.0)


@jit(nopython=True, cache=True)
def hue_to_rgb(h):
    """
    Convert a hue in degrees to an (r, g, b) triple in [0, 1].

    The hue is not wrapped by the caller; the formula is periodic with
    period 360 for non-negative hues. 0 is red, 120 green, 240 blue.
    """
    return _channel(5.0, h), _channel(3.0, h), _channel(1.0, h)


@jit(nopython=True, cache=True)
def apply_hue_colormap(normalized, max_iter, out):
    """
    Colorize a grid of normalized escape values into an RGBA image.

    Args:
        normalized: 2D array of values in [0, max_iter]
        max_iter: Maximum iteration value (points with this value are black)
        out: Output RGBA image array of shape (height, width, 4), uint8,
             modified in place

    Returns:
        The out array.
    """
    height, width = normalized.shape
    for py in range(height):
        for px in range(width):
            n = normalized[py, px]
            if n == max_iter:
                out[py, px, 0] = 0
                out[py, px, 1] = 0
                out[py, px, 2] = 0
            else:
                r, g, b = hue_to_rgb(n / max_iter * 255.0)
                out[py, px, 0] = round(r * 255.0)
                out[py, px, 1] = round(g * 255.0)
                out[py, px, 2] = round(b * 255.0)
            out[py, px, 3] = 255
    return out

