"""
Interactive browser rendering of surface graphs with plotly.

plotly is an optional dependency; install it with
``pip install grapho_surface[interactive]``.
"""

import numpy as np

from ..core.data_model import SurfaceMesh
from ..processing.coloring import hsl_to_rgb

# Tenta importar bibliotecas opcionais
try:
    import plotly.graph_objects as go
    HAS_PLOTLY = True
except ImportError:
    HAS_PLOTLY = False


def _require_plotly():
    if not HAS_PLOTLY:
        raise ImportError("plotly is not installed. Run 'pip install plotly'.")


def _rgb_strings(rgb):
    return [f"rgb({int(round(r * 255))},{int(round(g * 255))},{int(round(b * 255))})"
            for r, g, b in rgb]


def mesh_to_plotly(mesh: SurfaceMesh, name=None):
    """
    Convert a colored surface mesh to a plotly Mesh3d trace.

    Only vertices with a finite height are kept; faces touching any
    other vertex are dropped.

    Parameters
    ----------
    mesh : SurfaceMesh
        Colored mesh
    name : str, optional
        Trace name

    Returns
    -------
    plotly.graph_objects.Mesh3d
        Unlit trace with per-vertex colors
    """
    _require_plotly()

    keep = mesh.drawable
    remap = np.full(mesh.vertex_count, -1, dtype=np.int64)
    remap[keep] = np.arange(np.count_nonzero(keep))
    faces = remap[mesh.faces[keep[mesh.faces].all(axis=1)]]
    positions = mesh.positions[keep]

    trace = dict(
        x=positions[:, 0], y=positions[:, 1], z=positions[:, 2],
        i=faces[:, 0], j=faces[:, 1], k=faces[:, 2],
        name=name or mesh.name,
        flatshading=False,
        lighting=dict(ambient=1.0, diffuse=0.0, specular=0.0)
    )
    if mesh.vertex_colors is not None:
        trace['vertexcolor'] = _rgb_strings(hsl_to_rgb(mesh.vertex_colors[keep]))
    return go.Mesh3d(**trace)


def _lines_trace(segments, color, name):
    xs, ys, zs = [], [], []
    for start, end in segments:
        xs += [start[0], end[0], None]
        ys += [start[1], end[1], None]
        zs += [start[2], end[2], None]
    return go.Scatter3d(x=xs, y=ys, z=zs, mode='lines', name=name,
                        line=dict(color=color, width=1), hoverinfo='skip',
                        showlegend=False)


def scene_to_figure(scene, config=None):
    """
    Build a plotly figure of every mesh, floor and camera in a scene.

    Parameters
    ----------
    scene : Scene
        Scene to render
    config : ViewerConfig, optional
        Supplies the background color

    Returns
    -------
    plotly.graph_objects.Figure
    """
    _require_plotly()
    from .viewer import Camera, FloorGrid, wire_segments

    fig = go.Figure()
    camera = None

    for obj in scene:
        if isinstance(obj, SurfaceMesh):
            fig.add_trace(mesh_to_plotly(obj))
            if obj.material is not None:
                r, g, b, _ = obj.material.line_color
                fig.add_trace(_lines_trace(wire_segments(obj), _rgb_strings([(r, g, b)])[0],
                                           f"{obj.name or 'surface'} wire"))
        elif isinstance(obj, FloorGrid):
            fig.add_trace(_lines_trace(obj.segments(), obj.color, 'floor'))
        elif isinstance(obj, Camera) and camera is None:
            camera = obj

    layout = dict(scene=dict(aspectmode='data',
                             xaxis=dict(visible=False),
                             yaxis=dict(visible=False),
                             zaxis=dict(visible=False)))
    if camera is not None:
        direction = (camera.position - camera.target) / camera.distance
        eye = direction * 1.5
        layout['scene_camera'] = dict(eye=dict(x=eye[0], y=eye[1], z=eye[2]),
                                      up=dict(x=0, y=0, z=1))
    if config is not None:
        layout['paper_bgcolor'] = config['clear_color']

    fig.update_layout(**layout)
    return fig


def show_interactive(scene, config=None):
    """Open the scene in a browser."""
    fig = scene_to_figure(scene, config)
    fig.show()
    return fig
