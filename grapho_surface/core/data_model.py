"""
Core data models for surface graphs.

This module defines the data structures shared by the sampler, the
mesh builder, the color mapper and the renderers.
"""

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..config import InvalidConfigurationError

# Hue, saturation, lightness of vertices without a usable height
NEUTRAL_COLOR = (0.0, 0.0, 1.0)


@dataclass(frozen=True)
class DomainRectangle:
    """
    Rectangle of the (x, y) plane over which a function is sampled.
    """
    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def x_range(self) -> float:
        return self.x_max - self.x_min

    @property
    def y_range(self) -> float:
        return self.y_max - self.y_min

    @classmethod
    def from_settings(cls, settings) -> 'DomainRectangle':
        return cls(settings.x_min, settings.x_max, settings.y_min, settings.y_max)

    def validate(self):
        """
        Raise InvalidConfigurationError if the rectangle is empty or unbounded.
        """
        for name, value in (('xMin', self.x_min), ('xMax', self.x_max),
                            ('yMin', self.y_min), ('yMax', self.y_max)):
            if not math.isfinite(value):
                raise InvalidConfigurationError(f"{name} must be finite, got {value!r}")
        if self.x_max <= self.x_min:
            raise InvalidConfigurationError(
                f"xMax ({self.x_max}) must be greater than xMin ({self.x_min})")
        if self.y_max <= self.y_min:
            raise InvalidConfigurationError(
                f"yMax ({self.y_max}) must be greater than yMin ({self.y_min})")
        return self


@dataclass(frozen=True)
class HeightRange:
    """Minimum and maximum of the finite heights of a surface."""
    z_min: float
    z_max: float

    @property
    def z_range(self) -> float:
        return self.z_max - self.z_min

    @property
    def is_degenerate(self) -> bool:
        """True when the range is zero or not finite."""
        z_range = self.z_range
        return not math.isfinite(z_range) or z_range == 0


class SurfaceMesh:
    """
    Triangulated parametric surface.

    Vertices live in flat arrays ordered row by row along v; faces refer
    to them by index only.
    """

    def __init__(self, positions, uvs, faces, defined, domain, segments):
        """
        Initialize a SurfaceMesh.

        Parameters
        ----------
        positions : numpy.ndarray
            (V, 3) vertex positions; z is NaN where the sample is undefined
        uvs : numpy.ndarray
            (V, 2) parameter coordinates of each vertex
        faces : numpy.ndarray
            (F, 3) vertex indices of each triangle in winding order
        defined : numpy.ndarray
            (V,) boolean mask of vertices with a sampled height
        domain : DomainRectangle
            Sampled rectangle
        segments : int
            Grid resolution along each axis
        """
        self.positions = positions
        self.uvs = uvs
        self.faces = faces
        self.defined = defined
        self.domain = domain
        self.segments = segments
        self.vertex_colors = None  # (V, 3) HSL
        self.face_vertex_colors = None  # (F, 3, 3) HSL per corner
        self.height_range: Optional[HeightRange] = None
        self.material = None
        self.name = None

    @property
    def vertex_count(self) -> int:
        return len(self.positions)

    @property
    def face_count(self) -> int:
        return len(self.faces)

    @property
    def drawable(self):
        """(V,) mask of vertices with a finite height."""
        return self.defined & np.isfinite(self.positions[:, 2])

    @property
    def undefined_count(self) -> int:
        return int(np.count_nonzero(~self.defined))

    @property
    def grid_shape(self) -> Tuple[int, int]:
        return (self.segments + 1, self.segments + 1)

    def vertex_index(self, i: int, j: int) -> int:
        """Index of the vertex at grid column i (along u) and row j (along v)."""
        return j * (self.segments + 1) + i

    def to_dataframe(self) -> pd.DataFrame:
        """
        Tabulate the vertices.

        Returns
        -------
        pandas.DataFrame
            One row per vertex with position, parameters, the defined
            flag and, once colored, the HSL components
        """
        data = {
            'x': self.positions[:, 0],
            'y': self.positions[:, 1],
            'z': self.positions[:, 2],
            'u': self.uvs[:, 0],
            'v': self.uvs[:, 1],
            'defined': self.defined
        }
        if self.vertex_colors is not None:
            data['h'] = self.vertex_colors[:, 0]
            data['s'] = self.vertex_colors[:, 1]
            data['l'] = self.vertex_colors[:, 2]
        return pd.DataFrame(data)

    def __repr__(self):
        return (f"SurfaceMesh(vertices={self.vertex_count}, faces={self.face_count}, "
                f"segments={self.segments}, undefined={self.undefined_count})")
