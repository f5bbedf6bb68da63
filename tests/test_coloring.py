"""Tests for the height color ramp."""

import math

import numpy as np
import pytest

from grapho_surface import create_graph
from grapho_surface.core.data_model import HeightRange, NEUTRAL_COLOR
from grapho_surface.processing.coloring import (compute_height_range, color_vertices,
                                                color_faces, hsl_to_rgb)


class TestHeightRange:

    def test_ignores_non_finite_heights(self):
        positions = np.array([[0, 0, 1.0], [0, 0, np.nan], [0, 0, -3.0], [0, 0, np.inf]])
        height_range = compute_height_range(positions)
        assert (height_range.z_min, height_range.z_max) == (-3.0, 1.0)
        assert height_range.z_range == 4.0
        assert not height_range.is_degenerate

    def test_all_undefined(self):
        positions = np.array([[0, 0, np.nan], [1, 1, np.nan]])
        height_range = compute_height_range(positions)
        assert math.isnan(height_range.z_min)
        assert height_range.is_degenerate

    def test_zero_range_is_degenerate(self):
        assert HeightRange(5.0, 5.0).is_degenerate


class TestVertexColors:

    def test_constant_function_is_neutral(self):
        mesh = create_graph(lambda x, y: 5, {'segments': 6})
        assert mesh.height_range.is_degenerate
        assert (mesh.vertex_colors == NEUTRAL_COLOR).all()

    def test_extremes(self, paraboloid_mesh):
        colors = paraboloid_mesh.vertex_colors
        center = paraboloid_mesh.vertex_index(2, 2)
        assert tuple(colors[center]) == pytest.approx((0.7, 1.0, 0.5))
        for i, j in [(0, 0), (4, 0), (0, 4), (4, 4)]:
            assert tuple(colors[paraboloid_mesh.vertex_index(i, j)]) == pytest.approx((0.0, 1.0, 0.5))

    def test_hue_is_linear_in_height(self):
        positions = np.array([[0, 0, 0.0], [0, 0, 2.5], [0, 0, 10.0]])
        colors = color_vertices(positions, HeightRange(0.0, 10.0))
        assert colors[:, 0] == pytest.approx([0.7, 0.525, 0.0])
        assert (colors[:, 1] == 1.0).all()
        assert (colors[:, 2] == 0.5).all()

    def test_undefined_region_is_neutral(self, holed_mesh):
        colors = holed_mesh.vertex_colors
        undefined = ~holed_mesh.defined
        assert undefined.any() and holed_mesh.defined.any()
        assert (colors[undefined] == NEUTRAL_COLOR).all()
        assert (colors[holed_mesh.defined, 1] == 1.0).all()
        assert not np.isnan(colors).any()

    def test_all_undefined_surface(self):
        mesh = create_graph(lambda x, y: math.nan, {'segments': 3})
        assert (mesh.vertex_colors == NEUTRAL_COLOR).all()
        assert mesh.undefined_count == 16


class TestFaceColors:

    def test_corners_copy_vertex_colors(self, paraboloid_mesh):
        for face, corners in zip(paraboloid_mesh.faces, paraboloid_mesh.face_vertex_colors):
            for k, index in enumerate(face):
                assert tuple(corners[k]) == tuple(paraboloid_mesh.vertex_colors[index])

    def test_every_corner_is_defined(self, holed_mesh):
        assert holed_mesh.face_vertex_colors.shape == (holed_mesh.face_count, 3, 3)
        assert not np.isnan(holed_mesh.face_vertex_colors).any()

    def test_quads(self):
        vertex_colors = np.array([[0.1, 1, 0.5], [0.2, 1, 0.5], [0.3, 1, 0.5], [0.4, 1, 0.5]])
        corners = color_faces(np.array([[3, 2, 1, 0]]), vertex_colors)
        assert corners[0, :, 0] == pytest.approx([0.4, 0.3, 0.2, 0.1])


class TestHslToRgb:

    @pytest.mark.parametrize('hsl, rgb', [
        ((0.0, 1.0, 0.5), (1.0, 0.0, 0.0)),
        ((1 / 3, 1.0, 0.5), (0.0, 1.0, 0.0)),
        ((2 / 3, 1.0, 0.5), (0.0, 0.0, 1.0)),
        ((0.0, 0.0, 1.0), (1.0, 1.0, 1.0)),
        ((0.5, 0.0, 0.25), (0.25, 0.25, 0.25)),
        ((1.0, 1.0, 0.5), (1.0, 0.0, 0.0)),
    ])
    def test_known_colors(self, hsl, rgb):
        assert tuple(hsl_to_rgb(hsl)) == pytest.approx(rgb)

    def test_shape_is_preserved(self, paraboloid_mesh):
        rgb = hsl_to_rgb(paraboloid_mesh.face_vertex_colors)
        assert rgb.shape == paraboloid_mesh.face_vertex_colors.shape
        assert ((rgb >= 0) & (rgb <= 1)).all()
