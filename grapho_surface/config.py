"""
Configuration for surface graph construction and the viewer.

This module defines the default settings used throughout the package:
1. Graph settings (domain rectangle and sampling resolution)
2. Wire texture settings
3. Viewer settings (window, camera, light, floor and controls)
"""

import os
import json
import math
import copy
import numbers
from typing import Dict, Optional, Any

# Default settings for create_graph
GRAPH_DEFAULTS = {
    'xMin': -100.0,
    'xMax': 100.0,
    'yMin': -100.0,
    'yMax': 100.0,
    'segments': 40
}

# Accepted spellings for each graph setting
SETTING_ALIASES = {
    'xMin': 'xMin', 'x_min': 'xMin',
    'xMax': 'xMax', 'x_max': 'xMax',
    'yMin': 'yMin', 'y_min': 'yMin',
    'yMax': 'yMax', 'y_max': 'yMax',
    'segments': 'segments'
}

# Wire texture settings
TEXTURE_CONFIG = {
    'path': None,         # None uses the procedural square tile
    'tile_size': 64,      # pixels
    'line_width': 2,      # pixels
    'line_color': (0.0, 0.0, 0.0, 1.0),
    'fill_color': (1.0, 1.0, 1.0, 1.0)
}

# Viewer settings
VIEWER_CONFIG = {
    'width': 1280,
    'height': 720,
    'dpi': 100,
    'clear_color': '#dddddd',
    'camera': {
        'fov': 45.0,
        'near': 0.1,
        'far': 20000.0,
        'position': (0.0, 150.0, 400.0),
        'target': (0.0, 0.0, 0.0)
    },
    'light': {
        'color': '#ffffff',
        'position': (0.0, 250.0, 0.0)
    },
    'floor': {
        'size': 1000.0,
        'divisions': 20,
        'color': '#2050ff',
        'offset': -0.01
    },
    'axes_size': 1.0,
    'controls': {
        'enable_damping': True,
        'damping_factor': 0.25,
        'enable_zoom': True,
        'rotate_speed': 0.5,  # degrees per pixel
        'zoom_speed': 0.1
    },
    'frame_interval_ms': 16
}

# Logging
LOGGING_CONFIG = {
    'level': 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
}


class GraphConfigError(Exception):
    """Erro na configuração de um gráfico."""
    pass


class InvalidConfigurationError(GraphConfigError, ValueError):
    """Settings that cannot produce a surface (bad bounds or resolution)."""
    pass


def _as_bound(name, value):
    if isinstance(value, (bool, str)):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidConfigurationError(f"{name} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidConfigurationError(f"{name} must be finite, got {value!r}")
    return value


def validate_segments(segments):
    """
    Check the sampling resolution.

    Parameters
    ----------
    segments : int
        Number of grid cells along each axis

    Returns
    -------
    int
        The validated resolution

    Raises
    ------
    InvalidConfigurationError
        If segments is not a positive integer
    """
    # numpy integers are accepted, floats are not
    if isinstance(segments, bool) or not isinstance(segments, numbers.Integral):
        raise InvalidConfigurationError(f"segments must be an integer, got {segments!r}")
    segments = int(segments)
    if segments <= 0:
        raise InvalidConfigurationError(f"segments must be positive, got {segments}")
    return segments


class GraphSettings:
    """Resolved settings for a single create_graph call."""

    def __init__(self, x_min=None, x_max=None, y_min=None, y_max=None, segments=None):
        """
        Initialize the settings; every missing value takes its own default.

        Args:
            x_min: Domain left bound
            x_max: Domain right bound
            y_min: Domain bottom bound
            y_max: Domain top bound
            segments: Grid resolution along each axis
        """
        self.x_min = _as_bound('xMin', GRAPH_DEFAULTS['xMin'] if x_min is None else x_min)
        self.x_max = _as_bound('xMax', GRAPH_DEFAULTS['xMax'] if x_max is None else x_max)
        self.y_min = _as_bound('yMin', GRAPH_DEFAULTS['yMin'] if y_min is None else y_min)
        self.y_max = _as_bound('yMax', GRAPH_DEFAULTS['yMax'] if y_max is None else y_max)
        self.segments = validate_segments(
            GRAPH_DEFAULTS['segments'] if segments is None else segments)

        if self.x_max <= self.x_min:
            raise InvalidConfigurationError(
                f"xMax ({self.x_max}) must be greater than xMin ({self.x_min})")
        if self.y_max <= self.y_min:
            raise InvalidConfigurationError(
                f"yMax ({self.y_max}) must be greater than yMin ({self.y_min})")

    @classmethod
    def from_dict(cls, settings: Optional[Dict[str, Any]] = None) -> 'GraphSettings':
        """
        Build settings from a create_graph options dictionary.

        Args:
            settings: Mapping with any of xMin, xMax, yMin, yMax, segments
                (snake_case spellings are accepted too)

        Returns:
            Resolved GraphSettings
        """
        if settings is None:
            return cls()
        if isinstance(settings, GraphSettings):
            return settings

        values = {}
        for key, value in settings.items():
            if key not in SETTING_ALIASES:
                raise InvalidConfigurationError(f"Unknown graph setting: {key!r}")
            values[SETTING_ALIASES[key]] = value

        return cls(x_min=values.get('xMin'), x_max=values.get('xMax'),
                   y_min=values.get('yMin'), y_max=values.get('yMax'),
                   segments=values.get('segments'))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'xMin': self.x_min,
            'xMax': self.x_max,
            'yMin': self.y_min,
            'yMax': self.y_max,
            'segments': self.segments
        }

    def __repr__(self):
        return (f"GraphSettings(xMin={self.x_min}, xMax={self.x_max}, "
                f"yMin={self.y_min}, yMax={self.y_max}, segments={self.segments})")


def _merge(base, overrides):
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


class ViewerConfig:
    """Configuração do visualizador."""

    def __init__(self, config_dict: Dict = None, config_file: str = None):
        """
        Initialize the viewer configuration from defaults, a JSON file and a dict.

        Args:
            config_dict: Dictionary overriding the defaults
            config_file: Path to a JSON file overriding the defaults
        """
        self.config = copy.deepcopy(VIEWER_CONFIG)

        if config_file:
            if not os.path.exists(config_file):
                raise GraphConfigError(f"Viewer config file not found: {config_file}")
            with open(config_file, 'r') as f:
                _merge(self.config, json.load(f))

        if config_dict:
            _merge(self.config, config_dict)

        self._validate()

    @classmethod
    def from_dict(cls, config_dict: Dict) -> 'ViewerConfig':
        return cls(config_dict=config_dict)

    @classmethod
    def from_file(cls, config_file: str) -> 'ViewerConfig':
        return cls(config_file=config_file)

    def _validate(self):
        if self.width <= 0 or self.height <= 0:
            raise InvalidConfigurationError(
                f"Viewport size must be positive, got {self.width}x{self.height}")
        camera = self.config['camera']
        if not 0 < camera['fov'] < 180:
            raise InvalidConfigurationError(f"Camera fov must be in (0, 180), got {camera['fov']}")
        if not 0 < camera['near'] < camera['far']:
            raise InvalidConfigurationError("Camera near plane must be in (0, far)")
        if tuple(camera['position']) == tuple(camera['target']):
            raise InvalidConfigurationError("Camera position must differ from its target")

    def __getitem__(self, key):
        return self.config[key]

    def get(self, key, default=None):
        return self.config.get(key, default)

    @property
    def width(self) -> int:
        return self.config['width']

    @property
    def height(self) -> int:
        return self.config['height']

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def resize(self, width: int, height: int):
        """Update the viewport size."""
        self.config['width'] = width
        self.config['height'] = height
        self._validate()
