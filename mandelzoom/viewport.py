"""
Viewport state for the Mandelbrot explorer.

The ViewportController owns the visible region of the complex plane and
the in-progress selection gesture. It reacts to pointer and key events,
updates the region and asks the renderer for a new image:

- Drag with the pointer to select a sub-region (its aspect ratio is
  locked to the window's) and release to zoom into it
- 'z' zooms out 2x around the current center
- 'r' resets to the default view
"""

import enum
import logging
from dataclasses import dataclass

from .compute import map_range
from .errors import DegenerateRangeError
from .ports import KEY_PRESS, POINTER_DOWN, POINTER_MOVE, POINTER_UP

logger = logging.getLogger(__name__)

# Selections this narrow (in pixels) are treated as plain clicks
MIN_SELECTION_WIDTH = 2


def zoom_out_range(lo, hi):
    """Double the width of [lo, hi] around its midpoint."""
    d = hi - lo
    mid = (lo + hi) / 2
    return mid - d, mid + d


@dataclass(frozen=True)
class PlaneBounds:
    """Visible region of the complex plane."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    def __post_init__(self):
        if self.x_min == self.x_max:
            raise DegenerateRangeError(f"x range [{self.x_min}, {self.x_max}] has zero width")
        if self.y_min == self.y_max:
            raise DegenerateRangeError(f"y range [{self.y_min}, {self.y_max}] has zero height")

    @classmethod
    def centered(cls, aspect_ratio, half_width=2.0):
        """Region around the origin spanning [-half_width, half_width] on x."""
        half_height = half_width / aspect_ratio
        return cls(-half_width, half_width, -half_height, half_height)

    @property
    def width(self):
        return self.x_max - self.x_min

    @property
    def height(self):
        return self.y_max - self.y_min

    def zoomed_out(self):
        x_min, x_max = zoom_out_range(self.x_min, self.x_max)
        y_min, y_max = zoom_out_range(self.y_min, self.y_max)
        return PlaneBounds(x_min, x_max, y_min, y_max)

    def to_plane(self, px, py, width, height):
        """Convert pixel coordinates on a width x height grid to plane coordinates."""
        return (map_range(0, width, self.x_min, self.x_max, px),
                map_range(0, height, self.y_min, self.y_max, py))


@dataclass(frozen=True)
class SelectionRect:
    """Selection gesture in pixel space, from start corner to end corner."""

    start: tuple
    end: tuple

    @property
    def width(self):
        return self.end[0] - self.start[0]

    @property
    def height(self):
        return self.end[1] - self.start[1]


class ViewportState(enum.Enum):
    IDLE = 'idle'
    SELECTING = 'selecting'


class ViewportController:
    """
    Owns the plane bounds and selection state and drives re-renders.

    Usage:
        controller = ViewportController(renderer, surface)
        controller.bind(input_source)
        controller.start()

    Attributes:
        bounds: Current PlaneBounds
        state: ViewportState.IDLE or ViewportState.SELECTING
        selection: SelectionRect of the gesture in progress, or None
        image: The last rendered RGBA buffer
    """

    def __init__(self, renderer, surface, default_bounds=None):
        """
        Args:
            renderer: MandelbrotRenderer producing images for a bounds
            surface: RenderSurface the images are shown on
            default_bounds: Initial PlaneBounds (default: x in [-2, 2],
                            y aspect-corrected)
        """
        self.renderer = renderer
        self.surface = surface
        self.aspect_ratio = renderer.width / renderer.height
        self.default_bounds = default_bounds or PlaneBounds.centered(self.aspect_ratio)

        self.bounds = self.default_bounds
        self.state = ViewportState.IDLE
        self.selection = None
        self.image = None

        self._selection_start = None
        self._gesture_bounds = None

    def bind(self, input_source):
        """Subscribe this controller's handlers to an InputSource."""
        input_source.subscribe(POINTER_DOWN, self.pointer_down)
        input_source.subscribe(POINTER_MOVE, self.pointer_move)
        input_source.subscribe(POINTER_UP, self.pointer_up)
        input_source.subscribe(KEY_PRESS, self.key_press)

    def start(self):
        """Render the initial view."""
        self.render()

    def render(self):
        """Render the current bounds and present the result."""
        self.image = self.renderer.render(self.bounds)
        self.surface.present(self.image)

    def _selection_end(self, x):
        # Only the horizontal position is user controlled
        sx, sy = self._selection_start
        return x, sy + (x - sx) / self.aspect_ratio

    def pointer_down(self, x, y):
        if self.state is not ViewportState.IDLE:
            return
        self._selection_start = (x, y)
        self._gesture_bounds = self.bounds
        self.state = ViewportState.SELECTING

    def pointer_move(self, x, y):
        if self.state is not ViewportState.SELECTING:
            return
        self.selection = SelectionRect(self._selection_start, self._selection_end(x))
        if self.selection.width > MIN_SELECTION_WIDTH:
            if self.image is not None:
                self.surface.present(self.image)
            self.surface.draw_overlay_rect(self.selection)

    def pointer_up(self, x, y):
        if self.state is not ViewportState.SELECTING:
            return
        selection = SelectionRect(self._selection_start, self._selection_end(x))
        if selection.width > MIN_SELECTION_WIDTH:
            self._zoom_to(selection)

        self.state = ViewportState.IDLE
        self.selection = None
        self._selection_start = None
        self._gesture_bounds = None
        self.render()

    def _zoom_to(self, selection):
        w, h = self.renderer.width, self.renderer.height
        start_x, start_y = self._gesture_bounds.to_plane(*selection.start, w, h)
        end_x, end_y = self._gesture_bounds.to_plane(*selection.end, w, h)
        try:
            self.bounds = PlaneBounds(start_x, end_x, start_y, end_y)
        except DegenerateRangeError as e:
            logger.warning("Ignoring selection, zoom limit reached: %s", e)
            return
        logger.info("Zoomed into %s", self.bounds)

    def key_press(self, key):
        if key == 'z':
            self.bounds = self.bounds.zoomed_out()
            logger.info("Zoomed out to %s", self.bounds)
        elif key == 'r':
            self.bounds = self.default_bounds
            logger.info("Reset view to %s", self.bounds)
        else:
            return
        self.render()
