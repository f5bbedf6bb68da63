"""
Interactive 3D viewer for surface graphs.

This module provides the scene, camera, light and orbit controls used to
display surface meshes in a matplotlib 3D axes, together with the
GraphViewer that ties them into a redraw loop.
"""

import math
import time
import logging
import threading
from typing import Dict, List, Optional, Union

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from mpl_toolkits.mplot3d import Axes3D  # noqa: F401
from mpl_toolkits.mplot3d.art3d import Poly3DCollection, Line3DCollection

from ..config import ViewerConfig, LOGGING_CONFIG
from ..core.data_model import SurfaceMesh
from .. import graph as surface_graph
from ..processing.coloring import hsl_to_rgb


class Scene:
    """
    Collection of renderable objects.

    Objects are only ever appended; builders on other threads may add
    meshes while the render loop iterates over a snapshot.
    """

    def __init__(self):
        self._objects = []
        self._lock = threading.Lock()

    def add(self, obj):
        with self._lock:
            self._objects.append(obj)
        return obj

    def snapshot(self) -> List:
        with self._lock:
            return list(self._objects)

    def meshes(self) -> List[SurfaceMesh]:
        return [obj for obj in self.snapshot() if isinstance(obj, SurfaceMesh)]

    def __iter__(self):
        return iter(self.snapshot())

    def __len__(self):
        with self._lock:
            return len(self._objects)

    def __contains__(self, obj):
        with self._lock:
            return any(o is obj for o in self._objects)


class Camera:
    """Perspective camera orbiting a target, with z up."""

    def __init__(self, fov=45.0, near=0.1, far=20000.0,
                 position=(0.0, 150.0, 400.0), target=(0.0, 0.0, 0.0)):
        self.fov = fov
        self.near = near
        self.far = far
        self.up = np.array([0.0, 0.0, 1.0])
        self.target = np.asarray(target, dtype=np.float64)
        self.position = np.asarray(position, dtype=np.float64)

    @property
    def distance(self) -> float:
        return float(np.linalg.norm(self.position - self.target))

    @property
    def elevation(self) -> float:
        """Angle above the xy plane, in degrees."""
        offset = self.position - self.target
        return math.degrees(math.asin(max(-1.0, min(1.0, offset[2] / self.distance))))

    @property
    def azimuth(self) -> float:
        """Angle around the z axis from +x, in degrees."""
        offset = self.position - self.target
        return math.degrees(math.atan2(offset[1], offset[0]))

    @property
    def focal_length(self) -> float:
        return 1.0 / math.tan(math.radians(self.fov) / 2)

    def set_spherical(self, elevation, azimuth, distance):
        """Place the camera on a sphere around the target."""
        elev, azim = math.radians(elevation), math.radians(azimuth)
        self.position = self.target + distance * np.array([
            math.cos(elev) * math.cos(azim),
            math.cos(elev) * math.sin(azim),
            math.sin(elev)
        ])

    def apply(self, ax):
        """
        Apply the camera to a 3D axes.

        The visible half-extent follows the distance so that moving the
        camera in or out zooms the view.
        """
        ax.view_init(elev=self.elevation, azim=self.azimuth)
        ax.set_proj_type('persp', focal_length=self.focal_length)
        half = self.distance * math.tan(math.radians(self.fov) / 2)
        x, y, z = self.target
        ax.set_xlim(x - half, x + half)
        ax.set_ylim(y - half, y + half)
        ax.set_zlim(z - half, z + half)


class PointLight:
    def __init__(self, color='#ffffff', position=(0.0, 250.0, 0.0)):
        self.color = color
        self.position = np.asarray(position, dtype=np.float64)


class AxesHelper:
    """Red, green and blue segments along x, y and z."""

    def __init__(self, size=1.0):
        self.size = size


class FloorGrid:
    """Square wireframe plane just below z = 0."""

    def __init__(self, size=1000.0, divisions=20, color='#2050ff', offset=-0.01):
        self.size = size
        self.divisions = divisions
        self.color = color
        self.offset = offset

    def segments(self):
        half = self.size / 2
        ticks = np.linspace(-half, half, self.divisions + 1)
        lines = []
        for t in ticks:
            lines.append([(t, -half, self.offset), (t, half, self.offset)])
            lines.append([(-half, t, self.offset), (half, t, self.offset)])
        return lines


class OrbitControls:
    """
    Mouse orbit and scroll zoom around the camera target.

    Input moves the goal angles and distance; update() moves the camera
    toward them, a fraction of the way per frame when damping is enabled.
    """

    def __init__(self, camera, enable_damping=True, damping_factor=0.25,
                 enable_zoom=True, rotate_speed=0.5, zoom_speed=0.1):
        self.camera = camera
        self.enable_damping = enable_damping
        self.damping_factor = damping_factor
        self.enable_zoom = enable_zoom
        self.rotate_speed = rotate_speed
        self.zoom_speed = zoom_speed

        self.elevation = camera.elevation
        self.azimuth = camera.azimuth
        self.distance = camera.distance
        self._goal = [self.elevation, self.azimuth, self.distance]

        self._drag_origin = None
        self._connections = []

    def connect(self, figure):
        """Listen to mouse events on a figure canvas."""
        canvas = figure.canvas
        self._connections = [
            canvas.mpl_connect('button_press_event', self.on_press),
            canvas.mpl_connect('button_release_event', self.on_release),
            canvas.mpl_connect('motion_notify_event', self.on_motion),
            canvas.mpl_connect('scroll_event', self.on_scroll)
        ]

    def disconnect(self, figure):
        for cid in self._connections:
            figure.canvas.mpl_disconnect(cid)
        self._connections = []

    def on_press(self, event):
        if event.inaxes is not None:
            self._drag_origin = (event.x, event.y)

    def on_release(self, event):
        self._drag_origin = None

    def on_motion(self, event):
        if self._drag_origin is None or event.x is None:
            return
        dx = event.x - self._drag_origin[0]
        dy = event.y - self._drag_origin[1]
        self._drag_origin = (event.x, event.y)
        self.rotate(-dx * self.rotate_speed, -dy * self.rotate_speed)

    def on_scroll(self, event):
        if event.step:
            self.zoom(event.step)

    def rotate(self, d_azimuth, d_elevation):
        self._goal[1] += d_azimuth
        self._goal[0] = min(90.0, max(-90.0, self._goal[0] + d_elevation))

    def zoom(self, steps):
        """Positive steps move the camera in."""
        if not self.enable_zoom:
            return
        distance = self._goal[2] * (1 - self.zoom_speed) ** steps
        self._goal[2] = min(self.camera.far, max(self.camera.near, distance))

    def update(self):
        """Advance the camera one frame; returns True while still moving."""
        if self.enable_damping:
            factor = self.damping_factor
        else:
            factor = 1.0

        current = [self.elevation, self.azimuth, self.distance]
        moved = [c + (g - c) * factor for c, g in zip(current, self._goal)]
        self.elevation, self.azimuth, self.distance = moved
        self.camera.set_spherical(self.elevation, self.azimuth, self.distance)

        return any(not math.isclose(m, g, abs_tol=1e-6) for m, g in zip(moved, self._goal))


def draw_surface_mesh(ax, mesh: SurfaceMesh):
    """
    Draw a colored mesh and its wire overlay on a 3D axes.

    Faces touching a vertex without a finite height are left out,
    leaving a gap.
    matplotlib fills each triangle with a single color, so the corner
    colors of a face are averaged.

    Parameters
    ----------
    ax : mpl_toolkits.mplot3d.Axes3D
        Axes to draw on
    mesh : SurfaceMesh
        Colored mesh with a material

    Returns
    -------
    list
        The artists added to the axes
    """
    valid = mesh.drawable[mesh.faces].all(axis=1)
    polygons = mesh.positions[mesh.faces[valid]]

    if mesh.face_vertex_colors is not None:
        facecolors = hsl_to_rgb(mesh.face_vertex_colors[valid]).mean(axis=1)
    else:
        facecolors = np.ones((len(polygons), 3))

    surface = Poly3DCollection(polygons, facecolors=facecolors,
                               edgecolors='none', linewidths=0)
    ax.add_collection3d(surface)
    artists = [surface]

    if mesh.material is not None:
        wire = Line3DCollection(wire_segments(mesh), colors=[mesh.material.line_color],
                                linewidths=0.5)
        ax.add_collection3d(wire)
        artists.append(wire)

    return artists


def wire_segments(mesh: SurfaceMesh):
    """
    Grid line segments of a mesh where its texture tiles meet.

    Returns
    -------
    list
        Pairs of 3D points; segments touching vertices without a finite
        height are skipped
    """
    columns, rows = mesh.material.texture.tile_boundaries(mesh.segments)
    stride = mesh.segments + 1
    grid = mesh.positions.reshape(stride, stride, 3)
    drawable = mesh.drawable.reshape(stride, stride)

    segments = []
    for i in columns:
        for j in range(mesh.segments):
            if drawable[j, i] and drawable[j + 1, i]:
                segments.append([grid[j, i], grid[j + 1, i]])
    for j in rows:
        for i in range(mesh.segments):
            if drawable[j, i] and drawable[j, i + 1]:
                segments.append([grid[j, i], grid[j, i + 1]])
    return segments


def draw_floor(ax, floor: FloorGrid):
    lines = Line3DCollection(floor.segments(), colors=floor.color, linewidths=0.5)
    ax.add_collection3d(lines)
    return [lines]


def draw_axes_helper(ax, helper: AxesHelper):
    s = helper.size
    lines = Line3DCollection(
        [[(0, 0, 0), (s, 0, 0)], [(0, 0, 0), (0, s, 0)], [(0, 0, 0), (0, 0, s)]],
        colors=['#ff0000', '#00ff00', '#0000ff'], linewidths=1.0)
    ax.add_collection3d(lines)
    return [lines]


class GraphViewer:
    """
    Viewer window showing surface graphs.

    The viewer owns the scene, the camera, the light, the floor and the
    orbit controls. Meshes handed to add_renderable are drawn on the
    next rendered frame.
    """

    def __init__(self, config: Optional[Union[ViewerConfig, Dict]] = None):
        """
        Initialize the viewer.

        Args:
            config: ViewerConfig or dictionary overriding the viewer defaults
        """
        if isinstance(config, ViewerConfig):
            self.config = config
        else:
            self.config = ViewerConfig(config_dict=config)

        self.logger = self._setup_logger()

        self.scene = Scene()
        self.figure, self.ax = self.setup_renderer()
        self.camera = self.setup_camera(self.scene)
        self.setup_light(self.scene)
        self.setup_floor(self.scene)
        self.controls = self.setup_controls(self.camera)

        self._drawn = {}
        self._animation = None
        self.frame_count = 0

    def _setup_logger(self) -> logging.Logger:
        """
        Configure the viewer logger.

        Returns:
            Configured logger
        """
        logger = logging.getLogger('grapho_surface.viewer')
        logger.setLevel(LOGGING_CONFIG['level'])

        if not logger.handlers:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter(LOGGING_CONFIG['format']))
            logger.addHandler(console_handler)

        return logger

    def setup_renderer(self):
        dpi = self.config['dpi']
        figure = plt.figure(figsize=(self.config.width / dpi, self.config.height / dpi),
                            dpi=dpi, facecolor=self.config['clear_color'])
        ax = figure.add_subplot(111, projection='3d')
        ax.set_facecolor(self.config['clear_color'])
        ax.set_axis_off()
        ax.disable_mouse_rotation()
        return figure, ax

    def setup_camera(self, scene) -> Camera:
        settings = self.config['camera']
        camera = Camera(fov=settings['fov'],
                        near=settings['near'], far=settings['far'],
                        position=settings['position'], target=settings['target'])
        scene.add(camera)
        return camera

    def setup_light(self, scene) -> PointLight:
        settings = self.config['light']
        return scene.add(PointLight(settings['color'], settings['position']))

    def setup_floor(self, scene):
        scene.add(AxesHelper(self.config['axes_size']))
        settings = self.config['floor']
        return scene.add(FloorGrid(settings['size'], settings['divisions'],
                                   settings['color'], settings['offset']))

    def setup_controls(self, camera) -> OrbitControls:
        controls = OrbitControls(camera, **self.config['controls'])
        controls.connect(self.figure)
        return controls

    def add_renderable(self, mesh):
        """Hand a finished mesh to the viewer; it shows from the next frame."""
        self.scene.add(mesh)
        self.logger.info(f"Added {mesh} to scene")
        return mesh

    def create_graph(self, func, settings=None, **kwargs) -> SurfaceMesh:
        """
        Build a surface graph of func and add it to the scene.

        Args:
            func: Function f(x, y) returning the height
            settings: xMin, xMax, yMin, yMax and segments, all optional
            **kwargs: Passed on to grapho_surface.graph.create_graph

        Returns:
            The mesh added to the scene
        """
        mesh = surface_graph.create_graph(func, settings, **kwargs)
        return self.add_renderable(mesh)

    def _draw(self, obj):
        if isinstance(obj, SurfaceMesh):
            return draw_surface_mesh(self.ax, obj)
        if isinstance(obj, FloorGrid):
            return draw_floor(self.ax, obj)
        if isinstance(obj, AxesHelper):
            return draw_axes_helper(self.ax, obj)
        return []

    def render(self):
        """Draw the objects added since the last frame and apply the camera."""
        for obj in self.scene:
            if id(obj) not in self._drawn:
                self._drawn[id(obj)] = self._draw(obj)

        self.camera.apply(self.ax)
        self.figure.canvas.draw_idle()
        self.frame_count += 1

    def update(self):
        self.controls.update()

    def _frame(self, _):
        self.update()
        self.render()

    def animate(self) -> FuncAnimation:
        """Start the redraw loop."""
        if self._animation is None:
            self._animation = FuncAnimation(self.figure, self._frame,
                                            interval=self.config['frame_interval_ms'],
                                            cache_frame_data=False)
        return self._animation

    def resize(self, width, height):
        self.config.resize(width, height)
        dpi = self.config['dpi']
        self.figure.set_size_inches(width / dpi, height / dpi)

    def show(self):
        self.animate()
        self.logger.info("Viewer started")
        start_time = time.time()
        plt.show()
        self.logger.info(f"Viewer closed after {time.time() - start_time:.1f}s, "
                         f"{self.frame_count} frames")

    def to_plotly(self):
        """Render the scene as a plotly figure."""
        from .interactive import scene_to_figure
        return scene_to_figure(self.scene, self.config)

    def close(self):
        self.controls.disconnect(self.figure)
        plt.close(self.figure)
