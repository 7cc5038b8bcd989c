"""
Interfaces between the explorer core and its host environment.

The viewport controller only talks to these two ports; the pygame
window in app.py implements both of them.
"""

from abc import ABC, abstractmethod


POINTER_DOWN = 'pointer_down'
POINTER_MOVE = 'pointer_move'
POINTER_UP = 'pointer_up'
KEY_PRESS = 'key_press'

EVENT_KINDS = (POINTER_DOWN, POINTER_MOVE, POINTER_UP, KEY_PRESS)


class RenderSurface(ABC):
    """Something that can display an RGBA buffer."""

    @abstractmethod
    def present(self, buffer):
        """Show a (height, width, 4) uint8 RGBA buffer, replacing any overlay."""

    @abstractmethod
    def draw_overlay_rect(self, rect):
        """Stroke a transient selection rectangle (a SelectionRect) on top of the image."""


class InputSource(ABC):
    """Delivers pointer and keyboard events to subscribed handlers."""

    @abstractmethod
    def subscribe(self, kind, handler):
        """
        Register handler for an event kind.

        Pointer handlers are called as handler(x, y) with pixel
        coordinates relative to the surface origin; key handlers as
        handler(key) with a key name such as 'z'.
        """
