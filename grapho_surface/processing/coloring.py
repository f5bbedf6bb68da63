"""
Functions for coloring surfaces by height.

This module computes the height range of a surface, assigns every
vertex a hue on a red (highest) to blue (lowest) ramp and copies the
vertex colors onto the corners of each face.
"""

import logging

import numpy as np

from ..core.data_model import HeightRange, NEUTRAL_COLOR

logger = logging.getLogger(__name__)

# Fraction of the hue wheel covered by the ramp
HUE_SPAN = 0.7
SATURATION = 1.0
LIGHTNESS = 0.5


def compute_height_range(positions):
    """
    Compute the range of the finite heights.

    Parameters
    ----------
    positions : numpy.ndarray
        (V, 3) vertex positions

    Returns
    -------
    HeightRange
        (nan, nan) when no vertex has a finite height
    """
    z = positions[:, 2]
    finite = np.isfinite(z)
    if not finite.any():
        return HeightRange(float('nan'), float('nan'))
    return HeightRange(float(z[finite].min()), float(z[finite].max()))


def color_vertices(positions, height_range, hue_span=HUE_SPAN):
    """
    Assign an HSL color to every vertex from its height.

    Parameters
    ----------
    positions : numpy.ndarray
        (V, 3) vertex positions
    height_range : HeightRange
        Range of the finite heights
    hue_span : float, optional
        Hue given to the lowest vertex; the highest gets hue 0

    Returns
    -------
    numpy.ndarray
        (V, 3) HSL colors; vertices without a finite height, and all
        vertices of a degenerate range, get NEUTRAL_COLOR
    """
    colors = np.empty((len(positions), 3), dtype=np.float64)
    colors[:] = NEUTRAL_COLOR

    if height_range.is_degenerate:
        return colors

    z = positions[:, 2]
    finite = np.isfinite(z)
    colors[finite, 0] = hue_span * (height_range.z_max - z[finite]) / height_range.z_range
    colors[finite, 1] = SATURATION
    colors[finite, 2] = LIGHTNESS
    return colors


def color_faces(faces, vertex_colors):
    """
    Copy vertex colors onto face corners, in winding order.

    Returns
    -------
    numpy.ndarray
        (F, corners, 3) colors, one per face corner
    """
    return vertex_colors[faces]


def apply_height_colors(mesh):
    """
    Color a mesh in place by height.

    Parameters
    ----------
    mesh : SurfaceMesh
        Mesh to color

    Returns
    -------
    SurfaceMesh
        The same mesh with height_range, vertex_colors and
        face_vertex_colors set
    """
    mesh.height_range = compute_height_range(mesh.positions)
    mesh.vertex_colors = color_vertices(mesh.positions, mesh.height_range)
    mesh.face_vertex_colors = color_faces(mesh.faces, mesh.vertex_colors)

    if mesh.height_range.is_degenerate:
        logger.info(f"Degenerate height range {mesh.height_range}, using neutral color")
    else:
        neutral = int(np.count_nonzero(~np.isfinite(mesh.positions[:, 2])))
        logger.debug(f"Height range [{mesh.height_range.z_min}, {mesh.height_range.z_max}], "
                     f"{neutral} neutral vertices")
    return mesh


def hsl_to_rgb(hsl):
    """
    Convert HSL colors to RGB.

    Parameters
    ----------
    hsl : array_like
        (..., 3) colors with components in [0, 1]; hue wraps around

    Returns
    -------
    numpy.ndarray
        (..., 3) RGB colors in [0, 1]
    """
    hsl = np.asarray(hsl, dtype=np.float64)
    h = np.mod(hsl[..., 0], 1.0)
    s = hsl[..., 1]
    l = hsl[..., 2]

    q = np.where(l <= 0.5, l * (1 + s), l + s - l * s)
    p = 2 * l - q

    def channel(t):
        t = np.mod(t, 1.0)
        return np.select(
            [t < 1 / 6, t < 1 / 2, t < 2 / 3],
            [p + (q - p) * 6 * t, q, p + (q - p) * (2 / 3 - t) * 6],
            default=p)

    return np.stack([channel(h + 1 / 3), channel(h), channel(h - 1 / 3)], axis=-1)
