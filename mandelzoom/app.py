"""
Main application module for the Mandelbrot explorer.

Contains the pygame side of the program:
- PygameSurface: shows rendered RGBA buffers and the selection overlay
- PygameInput: translates pygame events into explorer input events
- MandelbrotApp: window setup and main loop
- main: command line entry point
"""

import logging
import os
from argparse import ArgumentParser
from collections import defaultdict
from datetime import datetime

import pygame

from .compute import warmup_jit
from .config import load_config
from .ports import EVENT_KINDS, KEY_PRESS, POINTER_DOWN, POINTER_MOVE, POINTER_UP
from .ports import InputSource, RenderSurface
from .renderer import MandelbrotRenderer
from .viewport import ViewportController

logger = logging.getLogger(__name__)

SELECTION_COLOR = (255, 255, 136)
LEFT_BUTTON = 1


class PygameSurface(RenderSurface):
    """Render surface backed by a pygame display surface."""

    def __init__(self, screen):
        self.screen = screen

    def present(self, buffer):
        height, width = buffer.shape[:2]
        image = pygame.image.frombuffer(buffer.tobytes(), (width, height), 'RGBA')
        self.screen.blit(image, (0, 0))
        pygame.display.flip()

    def draw_overlay_rect(self, rect):
        x, y = rect.start
        outline = pygame.Rect(round(x), round(y), round(rect.width), round(rect.height))
        pygame.draw.rect(self.screen, SELECTION_COLOR, outline, 1)
        pygame.display.flip()


class PygameInput(InputSource):
    """Input source fed with pygame events through dispatch()."""

    def __init__(self):
        self.handlers = defaultdict(list)

    def subscribe(self, kind, handler):
        if kind not in EVENT_KINDS:
            raise ValueError(f"Unknown event kind: {kind}")
        self.handlers[kind].append(handler)

    def _emit(self, kind, *args):
        for handler in self.handlers[kind]:
            handler(*args)

    def dispatch(self, event):
        """
        Forward one pygame event to the subscribed handlers.

        Returns:
            True if the event was translated into an explorer event
        """
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == LEFT_BUTTON:
            self._emit(POINTER_DOWN, *event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == LEFT_BUTTON:
            self._emit(POINTER_UP, *event.pos)
        elif event.type == pygame.MOUSEMOTION:
            self._emit(POINTER_MOVE, *event.pos)
        elif event.type == pygame.KEYDOWN:
            key = event.unicode or pygame.key.name(event.key)
            self._emit(KEY_PRESS, key)
        else:
            return False
        return True


class MandelbrotApp:
    """
    Main application class for the Mandelbrot explorer.

    Handles the pygame window and event loop, and wires the pygame
    surface and input into a ViewportController.
    """

    CAPTION = "Mandelbrot Set - Drag to zoom in, Z to zoom out, R to reset"

    def __init__(self, config=None):
        """
        Initialize the application.

        Args:
            config: SessionConfig (default: built-in defaults)
        """
        self.config = config or load_config()

        self.screen = None
        self.clock = None
        self.surface = None
        self.input = None
        self.renderer = None
        self.controller = None

        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._init_components()
        self._warmup_and_initial_render()

        self.running = True
        while self.running:
            self._handle_events()
            self.clock.tick(60)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create window."""
        pygame.init()
        self.screen = pygame.display.set_mode((self.config.width, self.config.height))
        pygame.display.set_caption(self.CAPTION)
        self.clock = pygame.time.Clock()

    def _init_components(self):
        """Create the renderer and controller and hook up input."""
        self.surface = PygameSurface(self.screen)
        self.input = PygameInput()
        self.renderer = MandelbrotRenderer(
            self.config.width, self.config.height, self.config.max_iter
        )
        self.controller = ViewportController(
            self.renderer, self.surface, self.config.default_bounds()
        )
        self.controller.bind(self.input)

    def _warmup_and_initial_render(self):
        """Warm up JIT and do initial render."""
        pygame.display.set_caption("Compiling (first run only)...")
        warmup_jit()
        self._with_busy_caption(self.controller.start)

    def _with_busy_caption(self, action, *args):
        pygame.display.set_caption("Computing...")
        action(*args)
        bounds = self.controller.bounds
        pygame.display.set_caption(
            f"{self.CAPTION}  [x: {bounds.x_min:.6g} .. {bounds.x_max:.6g},"
            f" y: {bounds.y_min:.6g} .. {bounds.y_max:.6g}]"
        )

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                continue

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                    continue
                if event.key == pygame.K_s:
                    self._save_image()
                    continue

            # Pointer release and keys trigger a full render
            if event.type in (pygame.MOUSEBUTTONUP, pygame.KEYDOWN):
                self._with_busy_caption(self.input.dispatch, event)
            else:
                self.input.dispatch(event)

    def _save_image(self):
        """Save the current image as a PNG in the working directory."""
        if self.controller.image is None:
            return
        height, width = self.controller.image.shape[:2]
        image = pygame.image.frombuffer(
            self.controller.image.tobytes(), (width, height), 'RGBA'
        )
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = os.path.abspath(f"mandelbrot_{timestamp}.png")
        pygame.image.save(image, filename)
        logger.info("Image saved to: %s", filename)


def run(config=None):
    """
    Run the Mandelbrot explorer.

    Args:
        config: SessionConfig (default: built-in defaults)
    """
    app = MandelbrotApp(config)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()


def build_parser():
    parser = ArgumentParser(prog='mandelzoom', description="Interactive Mandelbrot set explorer.")
    parser.add_argument('--width', type=int, help='Window width in pixels (default 1900)')
    parser.add_argument('--height', type=int, help='Window height in pixels (default 870)')
    parser.add_argument('--max-iter', dest='max_iter', type=int,
                        help='Maximum iteration count (default 500)')
    parser.add_argument('--settings', help='JSON file with width, height and max_iter')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def main(argv=None):
    opt = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if opt.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    config = load_config(opt.settings, width=opt.width, height=opt.height, max_iter=opt.max_iter)
    run(config)
