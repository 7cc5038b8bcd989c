"""
Exceptions raised by the Mandelbrot explorer.

Everything derives from MandelzoomError so callers can catch the whole
family at once; each error also subclasses the builtin it refines.
"""


class MandelzoomError(Exception):
    """Base class for all explorer errors."""


class DegenerateRangeError(MandelzoomError, ValueError):
    """An interval has equal endpoints, so it cannot be mapped from."""


class ConfigError(MandelzoomError, ValueError):
    """Session settings are missing, malformed or out of range."""


class RenderInProgressError(MandelzoomError, RuntimeError):
    """A render was requested while another one is still running."""
