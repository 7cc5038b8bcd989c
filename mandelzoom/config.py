"""
Session configuration for the Mandelbrot explorer.

Settings are fixed for the lifetime of a session. They come from the
built-in defaults, optionally overridden by a JSON settings file and
then by explicit keyword overrides (the command line).
"""

import json
import logging
import os
from dataclasses import dataclass, fields

from .errors import ConfigError
from .viewport import PlaneBounds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionConfig:
    """Pixel grid size and iteration limit for one session."""

    width: int = 1900
    height: int = 870
    max_iter: int = 500

    def __post_init__(self):
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{field.name} must be a positive integer, got {value!r}")

    @property
    def aspect_ratio(self):
        return self.width / self.height

    def default_bounds(self):
        """Region centered on the origin, x in [-2, 2], y aspect-corrected."""
        return PlaneBounds.centered(self.aspect_ratio)


def load_settings(path):
    """
    Load settings from a JSON file.

    Returns:
        dict of settings, or None if the file does not exist

    Raises:
        ConfigError if the file exists but is not a JSON object
    """
    try:
        with open(path, 'r') as f:
            settings = json.load(f)
    except FileNotFoundError:
        logger.warning("Settings file %s not found, using defaults", path)
        return None
    except json.JSONDecodeError as e:
        raise ConfigError(f"Could not parse settings file {path}: {e}") from e

    if not isinstance(settings, dict):
        raise ConfigError(f"Settings file {path} must contain a JSON object")
    return settings


def load_config(path=None, **overrides):
    """
    Build a SessionConfig from defaults, a settings file and overrides.

    Args:
        path: Optional path to a JSON settings file with any of the keys
              width, height, max_iter
        **overrides: Explicit values; None means "not given"

    Returns:
        Validated SessionConfig
    """
    known = {field.name for field in fields(SessionConfig)}
    values = {}

    if path is not None:
        settings = load_settings(os.path.expanduser(path)) or {}
        unknown = set(settings) - known
        if unknown:
            raise ConfigError(f"Unknown settings: {', '.join(sorted(unknown))}")
        values.update(settings)

    for key, value in overrides.items():
        if key not in known:
            raise ConfigError(f"Unknown setting: {key}")
        if value is not None:
            values[key] = value

    config = SessionConfig(**values)
    logger.debug("Session config: %s", config)
    return config
