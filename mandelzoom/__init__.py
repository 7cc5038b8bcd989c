"""
Mandelbrot Set Explorer Package

An interactive Mandelbrot set explorer using Pygame for display and
Numba for JIT-compiled computation. Colors are spread evenly over the
visible escape counts by histogram equalization.

Quick Start:
    from mandelzoom import run
    run()

Or from command line:
    python -m mandelzoom --width 1200 --height 800 --max-iter 500

Package Structure:
    - compute.py: JIT-compiled range mapping, escape counts, equalization
    - colormaps.py: Hue colormap
    - renderer.py: Full-grid synchronous renderer
    - viewport.py: Plane bounds and selection state machine
    - ports.py: Render surface / input source interfaces
    - config.py: Session settings
    - app.py: Pygame window, event loop and command line

Controls:
    - Drag: Select a region to zoom into
    - Z: Zoom out 2x
    - R: Reset to default view
    - S: Save the current image as PNG
    - ESC: Quit
"""

from .app import run, main, MandelbrotApp
from .config import SessionConfig, load_config
from .errors import ConfigError, DegenerateRangeError, MandelzoomError, RenderInProgressError
from .renderer import MandelbrotRenderer, create_mandel_image
from .viewport import PlaneBounds, SelectionRect, ViewportController, ViewportState

__version__ = "1.0.0"
__all__ = [
    "run",
    "main",
    "MandelbrotApp",
    "SessionConfig",
    "load_config",
    "ConfigError",
    "DegenerateRangeError",
    "MandelzoomError",
    "RenderInProgressError",
    "MandelbrotRenderer",
    "create_mandel_image",
    "PlaneBounds",
    "SelectionRect",
    "ViewportController",
    "ViewportState",
]
