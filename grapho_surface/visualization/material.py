"""
Wire materials for surface meshes.

A wire material combines the per-corner height colors of a mesh with a
square tile texture repeated once per grid cell, so the grid lines
follow the sampling resolution. Both sides of the surface are drawn.
"""

import os
import logging

import numpy as np
import matplotlib.image as mpimg

from ..config import TEXTURE_CONFIG, InvalidConfigurationError, validate_segments

logger = logging.getLogger(__name__)

REPEAT_WRAPPING = 'repeat'
CLAMP_TO_EDGE_WRAPPING = 'clamp'
FRONT_SIDE = 'front'
DOUBLE_SIDE = 'double'


def make_square_tile(size=None, line_width=None, line_color=None, fill_color=None):
    """
    Create a square tile with a border, as an RGBA image.

    Parameters
    ----------
    size : int, optional
        Tile width and height in pixels
    line_width : int, optional
        Border width in pixels
    line_color : tuple, optional
        RGBA color of the border
    fill_color : tuple, optional
        RGBA color of the interior

    Returns
    -------
    numpy.ndarray
        (size, size, 4) float array

    Raises
    ------
    InvalidConfigurationError
        If size is not positive or line_width is negative
    """
    if size is None:
        size = TEXTURE_CONFIG['tile_size']
    if line_width is None:
        line_width = TEXTURE_CONFIG['line_width']
    if line_color is None:
        line_color = TEXTURE_CONFIG['line_color']
    if fill_color is None:
        fill_color = TEXTURE_CONFIG['fill_color']

    if size <= 0:
        raise InvalidConfigurationError(f"Tile size must be positive, got {size}")
    if line_width < 0:
        raise InvalidConfigurationError(f"Tile line width must not be negative, got {line_width}")

    # A border of width 0 leaves the tile plain
    far = max(size - line_width, 0)
    tile = np.empty((size, size, 4), dtype=np.float64)
    tile[:] = fill_color
    tile[:line_width, :] = line_color
    tile[far:, :] = line_color
    tile[:, :line_width] = line_color
    tile[:, far:] = line_color
    return tile


def _to_rgba(image):
    image = np.asarray(image)
    if image.dtype == np.uint8:
        image = image.astype(np.float64) / 255.0
    else:
        image = image.astype(np.float64)
    if image.ndim == 2:
        image = np.stack([image, image, image], axis=-1)
    if image.shape[-1] == 3:
        alpha = np.ones(image.shape[:2] + (1,), dtype=np.float64)
        image = np.concatenate([image, alpha], axis=-1)
    return image


class Texture:
    """
    Tileable image with wrapping and repeat settings.

    The image is read the first time it is needed, so creating a texture
    never touches the disk.
    """

    def __init__(self, source=None, wrap_s=CLAMP_TO_EDGE_WRAPPING,
                 wrap_t=CLAMP_TO_EDGE_WRAPPING, repeat=(1, 1)):
        self.source = source
        self.wrap_s = wrap_s
        self.wrap_t = wrap_t
        self.repeat = tuple(repeat)
        self._image = None

    def set_repeat(self, repeat_u, repeat_v):
        self.repeat = (repeat_u, repeat_v)

    @property
    def loaded(self) -> bool:
        return self._image is not None

    @property
    def image(self):
        """RGBA image of one tile."""
        if self._image is None:
            self._image = self._load()
        return self._image

    def _load(self):
        if self.source is None:
            return make_square_tile()
        if not os.path.exists(self.source):
            logger.warning(f"Texture {self.source} not found, using the default tile")
            return make_square_tile()
        try:
            return _to_rgba(mpimg.imread(self.source))
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read texture {self.source}: {e}")
            return make_square_tile()

    def border_color(self):
        """Color of the tile's top-left pixel, which lies on the grid line."""
        return tuple(float(c) for c in self.image[0, 0])

    def tile_boundaries(self, segments):
        """
        Grid lines of a segments x segments mesh that coincide with tile edges.

        Parameters
        ----------
        segments : int
            Mesh resolution

        Returns
        -------
        tuple
            (column indices along u, row indices along v)
        """
        boundaries = []
        for repeat, wrap in zip(self.repeat, (self.wrap_s, self.wrap_t)):
            if wrap != REPEAT_WRAPPING:
                boundaries.append([0, segments])
                continue
            # Tile edges sit at u = k / repeat
            tiles = np.arange(segments + 1) * repeat / segments
            indices = np.flatnonzero(np.isclose(tiles, np.round(tiles)))
            boundaries.append(indices.tolist())
        return tuple(boundaries)

    def __repr__(self):
        return f"Texture(source={self.source!r}, repeat={self.repeat}, wrap=({self.wrap_s}, {self.wrap_t}))"


class TextureLoader:
    """Creates textures from image paths without blocking on the read."""

    def load(self, path):
        logger.debug(f"Texture requested: {path}")
        return Texture(source=path)


class WireMaterial:
    """
    Material drawing per-corner vertex colors under a tiled wire texture.
    """

    def __init__(self, texture, vertex_colors=True, side=DOUBLE_SIDE):
        self.texture = texture
        self.vertex_colors = vertex_colors
        self.side = side

    @property
    def map(self):
        return self.texture

    @property
    def line_color(self):
        return self.texture.border_color()

    def __repr__(self):
        return f"WireMaterial(texture={self.texture!r}, vertex_colors={self.vertex_colors}, side={self.side!r})"


def create_wire_material(segments=40, texture_path=None, loader=None):
    """
    Create the wire material for a mesh of the given resolution.

    Parameters
    ----------
    segments : int, optional
        Mesh resolution; the texture repeats this many times along each axis
    texture_path : str, optional
        Square tileable image; the procedural tile is used when omitted
    loader : TextureLoader, optional
        Loader used to create the texture

    Returns
    -------
    WireMaterial
        Double-sided material using vertex colors
    """
    segments = validate_segments(segments)
    loader = loader or TextureLoader()
    if texture_path is None:
        texture_path = TEXTURE_CONFIG['path']
    texture = loader.load(texture_path)
    texture.wrap_s = texture.wrap_t = REPEAT_WRAPPING
    texture.set_repeat(segments, segments)
    return WireMaterial(texture, vertex_colors=True, side=DOUBLE_SIDE)
