"""
Functions for building parametric surface meshes.

This module turns a sampled function into a triangulated grid: one
vertex per grid point and two triangles per grid cell.
"""

import logging

import numpy as np

from ..config import validate_segments
from .data_model import SurfaceMesh
from .sampler import DomainSampler

logger = logging.getLogger(__name__)


def grid_faces(segments):
    """
    Triangulate a (segments + 1) x (segments + 1) vertex grid.

    Each cell with corners a = (i, j), b = (i, j + 1), c = (i + 1, j + 1)
    and d = (i + 1, j) is split into the triangles (a, b, d) and (b, c, d).

    Parameters
    ----------
    segments : int
        Number of cells along each axis

    Returns
    -------
    numpy.ndarray
        (2 * segments^2, 3) array of vertex indices
    """
    stride = segments + 1
    j, i = np.mgrid[0:segments, 0:segments]

    a = (j * stride + i).ravel()
    b = ((j + 1) * stride + i).ravel()
    c = ((j + 1) * stride + i + 1).ravel()
    d = (j * stride + i + 1).ravel()

    # Interleave so both triangles of a cell are adjacent
    faces = np.empty((2 * segments * segments, 3), dtype=np.int64)
    faces[0::2] = np.stack([a, b, d], axis=1)
    faces[1::2] = np.stack([b, c, d], axis=1)
    return faces


def build_surface_mesh(func, domain, segments=40):
    """
    Sample func over the domain and build the surface mesh.

    Parameters
    ----------
    func : callable
        Function f(x, y) returning the height
    domain : DomainRectangle
        Rectangle to sample
    segments : int, optional
        Number of cells along each axis

    Returns
    -------
    SurfaceMesh
        Uncolored mesh with (segments + 1)^2 vertices and
        2 * segments^2 triangles

    Raises
    ------
    InvalidConfigurationError
        If segments is not a positive integer or the domain is empty
    """
    segments = validate_segments(segments)
    domain.validate()

    sampler = DomainSampler(func, domain)
    stride = segments + 1

    positions = np.empty((stride * stride, 3), dtype=np.float64)
    uvs = np.empty((stride * stride, 2), dtype=np.float64)

    for j in range(stride):
        v = j / segments
        for i in range(stride):
            u = i / segments
            index = j * stride + i
            positions[index] = sampler.sample(u, v)
            uvs[index] = (u, v)

    defined = ~np.isnan(positions[:, 2])
    faces = grid_faces(segments)

    if sampler.undefined_count:
        logger.warning(f"{sampler.undefined_count} of {len(positions)} samples are undefined")

    return SurfaceMesh(positions, uvs, faces, defined, domain, segments)
