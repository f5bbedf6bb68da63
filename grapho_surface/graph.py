"""
Construction of surface graphs of functions z = f(x, y).
"""

import time
import logging

from .config import GraphSettings
from .core.data_model import DomainRectangle
from .core.mesh import build_surface_mesh
from .processing.coloring import apply_height_colors
from .visualization.material import create_wire_material

logger = logging.getLogger(__name__)


def create_graph(func, settings=None, scene=None, texture_path=None, name=None):
    """
    Build a colored, wire-textured surface mesh of func.

    Parameters
    ----------
    func : callable
        Function f(x, y) returning the height. Samples where it returns
        NaN or raises are left undefined and drawn in the neutral color.
    settings : dict or GraphSettings, optional
        Any of xMin, xMax, yMin, yMax (domain bounds, default -100, 100,
        -100, 100) and segments (grid resolution, default 40). Each
        missing value takes its own default.
    scene : Scene, optional
        If given, the finished mesh is added to it
    texture_path : str, optional
        Tile image for the wire overlay
    name : str, optional
        Name of the mesh

    Returns
    -------
    SurfaceMesh
        The finished mesh

    Raises
    ------
    InvalidConfigurationError
        If the settings cannot produce a surface; nothing is sampled
    """
    settings = GraphSettings.from_dict(settings)
    domain = DomainRectangle.from_settings(settings).validate()

    logger.info(f"Building surface graph: {settings}")
    start_time = time.time()

    mesh = build_surface_mesh(func, domain, settings.segments)
    apply_height_colors(mesh)
    mesh.material = create_wire_material(settings.segments, texture_path=texture_path)
    mesh.name = name or getattr(func, '__name__', None)

    logger.info(f"Surface graph built in {time.time() - start_time:.2f}s: {mesh}")

    if scene is not None:
        scene.add(mesh)

    return mesh
